# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2026/09/28 22:05:47
# @Author : Kariko Lin

"""Escaping used by both formats.

Escaped on save:

    ```
    \\        -> \\\\
    leading ' ' (or any ' ' in keys) -> '\\ '
    TAB LF CR FF     -> \\t \\n \\r \\f
    = : # ; !        -> \\= \\: \\# \\; \\!
    leading [        -> \\[
    other controls, > U+00FF -> \\uXXXX  (UTF-16 units, upper case)
    ```

Byte sinks get `to_ascii()` on top, so everything outside printable ASCII
ends up as `\\uXXXX` there.

Unescaping maps any other `\\c` to plain `c`.
A broken `\\uXXXX` is ALWAYS an error, never skipped.
"""

from string import hexdigits

from .abstract import ConfError
from .consts import RESERVED

_CONTROLS = {'\t': '\\t', '\n': '\\n', '\r': '\\r', '\f': '\\f'}
_UNCONTROLS = {'t': '\t', 'n': '\n', 'r': '\r', 'f': '\f'}


class MalformedEscape(ConfError, ValueError):
    """A `\\uXXXX` sequence (or a lone trailing backslash) can't be decoded."""
    def __init__(self, message: str, line: int | None = None) -> None:
        super().__init__(message)
        self.line = line

    def __str__(self) -> str:
        msg = super().__str__()
        return msg if self.line is None else f'line {self.line}: {msg}'


def _uescape(char: str) -> str:
    code = ord(char)
    if code > 0xFFFF:
        # astral plane, split into a surrogate pair.
        code -= 0x10000
        return '\\u%04X\\u%04X' % (0xD800 + (code >> 10),
                                   0xDC00 + (code & 0x3FF))
    return '\\u%04X' % code


def _is_plain(char: str) -> bool:
    # printable ASCII and printable latin-1, no C0/C1 controls, no DEL.
    return ' ' <= char < '\x7f' or '\xa0' <= char <= '\xff'


def escape(text: str, escape_space: bool = False) -> str:
    """Escape a key (`escape_space=True`) or a value for saving."""
    ret: list[str] = []
    for idx, char in enumerate(text):
        if char == '\\':
            ret.append('\\\\')
        elif char == ' ':
            ret.append('\\ ' if idx == 0 or escape_space else ' ')
        elif char in _CONTROLS:
            ret.append(_CONTROLS[char])
        elif char in RESERVED or (char == '[' and idx == 0):
            ret.append('\\' + char)
        elif _is_plain(char):
            ret.append(char)
        else:
            ret.append(_uescape(char))
    return ''.join(ret)


def to_ascii(text: str) -> str:
    """`\\uXXXX` everything outside printable ASCII."""
    return ''.join(c if ' ' <= c <= '~' else _uescape(c) for c in text)


def unescape(buffer: str, offset: int = 0, length: int | None = None) -> str:
    """Decode `buffer[offset:offset + length]`.

    Raises:
        MalformedEscape: bad hex digits, truncated `\\uXXXX`
            or a backslash with nothing after it.
    """
    end = len(buffer) if length is None else offset + length
    ret: list[str] = []
    surrogates = False
    i = offset
    while i < end:
        char = buffer[i]
        i += 1
        if char != '\\':
            ret.append(char)
            continue
        if i >= end:
            raise MalformedEscape('backslash at end of input.')
        char = buffer[i]
        i += 1
        if char != 'u':
            ret.append(_UNCONTROLS.get(char, char))
            continue
        digits = buffer[i:min(i + 4, end)]
        if len(digits) < 4 or not all(d in hexdigits for d in digits):
            raise MalformedEscape(f'malformed \\uxxxx encoding: \\u{digits}')
        i += 4
        unit = chr(int(digits, 16))
        surrogates = surrogates or '\ud800' <= unit <= '\udfff'
        ret.append(unit)

    decoded = ''.join(ret)
    if surrogates:
        # glue UTF-16 pairs back, lone halves pass through as is.
        decoded = decoded.encode('utf-16-le', 'surrogatepass').decode(
            'utf-16-le', 'surrogatepass')
    return decoded


def render_comment(text: str, marker: str = '#') -> str:
    """Comment block, every physical line starting with `marker`.

    Lines of `text` that already look like comments (`#`, `!` or `marker`)
    don't get a second marker.
    """
    ret = [marker, ' ']
    length = len(text)
    i = 0
    while i < length:
        char = text[i]
        if char in '\r\n':
            ret.append('\n')
            if char == '\r' and i + 1 < length and text[i + 1] == '\n':
                i += 1
            if i == length - 1 or text[i + 1] not in ('#', '!', marker):
                ret.append(marker)
        elif char > '\xff':
            ret.append(_uescape(char))
        else:
            ret.append(char)
        i += 1
    ret.append('\n')
    return ''.join(ret)
