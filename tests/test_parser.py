"""Tests for turning logical lines into key-value pairs."""

import io

import pytest

from lineconf import Configuration, MalformedEscape
from lineconf.parser import LineParser

from conftest import load_text


class Recorder:
    def __init__(self):
        self.pairs = []

    def set(self, key, value):
        self.pairs.append((key, value))


def parse(text: str) -> list[tuple[str, str]]:
    rec = Recorder()
    LineParser(rec).parse(io.StringIO(text))
    return rec.pairs


class TestSeparators:
    def test_all_separators(self):
        text = 'a=1\nb:2\nc 3\nd = 4\ne : 5\nf\t6\ng\f7\n'
        assert parse(text) == [
            ('a', '1'), ('b', '2'), ('c', '3'), ('d', '4'),
            ('e', '5'), ('f', '6'), ('g', '7')]

    def test_only_one_extra_separator(self):
        assert parse('g = =x') == [('g', '=x')]
        assert parse('g==x') == [('g', '=x')]

    def test_value_keeps_inner_separators(self):
        assert parse('url = http://host:80/a=b') == [
            ('url', 'http://host:80/a=b')]

    def test_escaped_separator_in_key(self):
        assert parse('a\\=b=c') == [('a=b', 'c')]

    def test_escaped_space_in_key(self):
        assert parse('my\\ key = v') == [('my key', 'v')]

    def test_trailing_whitespace_kept(self):
        assert parse('k = v  ') == [('k', 'v  ')]

    def test_empty_key_or_value_dropped(self):
        assert parse('empty=\n=novalue\nonly\nspaces =   \n') == []


class TestValues:
    def test_unicode_escapes(self):
        assert parse('k=\\u00e9\\u4E2D') == [('k', '\xe9\u4e2d')]

    def test_continuation(self):
        assert parse('key=part1\\\npart2\n') == [('key', 'part1part2')]

    def test_escaped_controls(self):
        assert parse('k=a\\=b\\nc\\:d') == [('k', 'a=b\nc:d')]


class TestSections:
    def test_section_prefix(self):
        text = '[server]\nport=80\n[server.http]\nport=8080\ntop=1\n'
        assert parse(text) == [
            ('server.port', '80'),
            ('server.http.port', '8080'),
            ('server.http.top', '1')]

    def test_separators_normalized(self):
        assert parse('[server/http]\nport=1\n[a:b]\nc=2\nx/y=3') == [
            ('server.http.port', '1'), ('a.b.c', '2'), ('a.b.x.y', '3')]

    def test_flat_keys_normalized(self):
        assert parse('a/b=1') == [('a.b', '1')]

    def test_empty_header_resets(self):
        assert parse('[s]\na=1\n[]\nb=2') == [('s.a', '1'), ('b', '2')]

    def test_header_with_space(self):
        assert parse('[my section]\nk=v') == [('my section.k', 'v')]

    def test_escaped_bracket(self):
        assert parse('[a\\]b]\nk=v') == [('a]b.k', 'v')]

    def test_escaped_leading_bracket_is_key(self):
        assert parse('\\[x]=1') == [('[x]', '1')]

    def test_unterminated_header(self):
        with pytest.warns(UserWarning):
            assert parse('[broken\nk=v') == [('broken.k', 'v')]

    def test_section_per_parse(self):
        rec = Recorder()
        parser = LineParser(rec)
        parser.parse(io.StringIO('[s]\na=1'))
        parser.parse(io.StringIO('b=2'))
        assert rec.pairs == [('s.a', '1'), ('b', '2')]
        assert parser.properties is rec


class TestFailures:
    def test_malformed_escape_aborts(self):
        conf = Configuration()
        with pytest.raises(MalformedEscape) as info:
            load_text('# c\na=1\nb=\\u12x4\nc=3', conf)
        assert info.value.line == 2
        assert conf.get('a') == '1'
        assert conf.get('c') is None

    def test_io_error_propagates(self):
        class Broken(io.RawIOBase):
            def readable(self):
                return True

            def readinto(self, b):
                raise OSError('disk on fire')

        with pytest.raises(OSError):
            Configuration().load(Broken())


class TestEndToEnd:
    def test_sample(self, sample_bytes):
        conf = Configuration()
        conf.load(io.BytesIO(sample_bytes))
        assert conf.get('admin.level') == '3'
        assert conf.get('admin.debug.verbose') == 'true'
        assert conf.get('header') is None
