# -*- encoding: utf-8 -*-
# @File   : writer.py
# @Time   : 2026/09/29 02:03:51
# @Author : Kariko Lin

from io import StringIO
from typing import IO

from .codec import render_comment, to_ascii
from .consts import BYTE_ENCODING, NATIVE_COMMENT
from .reader import is_binary


class LineWriter:
    """Buffers formatted lines until `flush()`.

    For byte sinks every `write()` gets `\\uXXXX`-escaped down to ASCII,
    and the buffer goes out as latin-1."""
    def __init__(
        self, sink: IO, comment_char: str = NATIVE_COMMENT,
        binary: bool = False
    ) -> None:
        self._sink = sink
        self._marker = comment_char
        self._binary = binary
        self._buf = StringIO()

    @staticmethod
    def of(sink: IO, comment_char: str = NATIVE_COMMENT) -> 'LineWriter':
        return LineWriter(sink, comment_char, is_binary(sink))

    @property
    def comment_char(self) -> str:
        return self._marker

    def write(self, text: str) -> None:
        self._buf.write(to_ascii(text) if self._binary else text)

    def newline(self) -> None:
        self._buf.write('\n')

    def write_comment(self, comment: str) -> None:
        self._buf.write(render_comment(comment, self._marker))

    def flush(self) -> int:
        """Push buffered text into the sink. Returns chars pushed."""
        data = self._buf.getvalue()
        self._buf = StringIO()
        if data:
            self._sink.write(
                data.encode(BYTE_ENCODING) if self._binary else data)
        if hasattr(self._sink, 'flush'):
            self._sink.flush()
        return len(data)
