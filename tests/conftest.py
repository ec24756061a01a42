"""Shared fixtures for lineconf tests."""

import io

import pytest

from lineconf import Configuration

SAMPLE_INI = (
    "; header\n"
    "[admin]\n"
    "level = 3\n"
    "[admin.debug]\n"
    "verbose = true\n"
)


def body(text: str) -> str:
    """Drop the first line, i.e. the timestamp comment of a save."""
    return text.split('\n', 1)[1]


def load_text(text: str, conf: Configuration | None = None) -> Configuration:
    conf = Configuration() if conf is None else conf
    conf.load(io.StringIO(text))
    return conf


@pytest.fixture
def sample_bytes():
    return SAMPLE_INI.encode('iso-8859-1')


@pytest.fixture
def conf():
    """A small store spread over a few sections."""
    c = Configuration()
    c.set('name', 'demo')
    c.set('server.port', '8080')
    c.set('server.http.host', 'localhost')
    c.set('admin.level', '3')
    return c


@pytest.fixture
def tricky():
    """Values and keys that need escaping one way or another."""
    c = Configuration()
    c.set('lead', ' leading space')
    c.set('trail', 'trailing space ')
    c.set('controls', 'tab\there\nnew\rline\fformfeed\x00nul')
    c.set('reserved', 'a=b:c#d;e!f')
    c.set('backslash', 'back\\slash\\')
    c.set('latin', 'caf\xe9')
    c.set('cjk', '中文')
    c.set('astral', '\U0001F600')
    c.set('bracket', '[not a section]')
    c.set('my key', 'spaced key')
    c.set('#hash', 'comment like key')
    c.set('a=b', 'separator in key')
    c.set('sp ace.k', 'spaced section')
    c.set('odd]sec.k', 'bracket in section')
    c.set('deep.er.section.k', 'nested')
    return c
