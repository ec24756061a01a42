# -*- encoding: utf-8 -*-
# @File   : reader.py
# @Time   : 2026/09/29 00:12:30
# @Author : Kariko Lin

"""Splits a stream into "logical lines".

A logical line may span several physical lines:

    ```
    key = part1\\
          part2      ; -> "key = part1part2"
    ```

Blank lines and comment lines (`#`, `;`, `!`) never come out,
neither does whitespace at the beginning of a (continued) line.
"""

from abc import ABCMeta, abstractmethod
from io import BufferedIOBase, RawIOBase, TextIOBase
from typing import IO, Iterator

from .consts import BYTE_ENCODING, CHUNK_SIZE, COMMENT_MARKERS, WHITESPACES


def is_binary(stream: IO) -> bool:
    """Whether `stream` reads or writes bytes rather than text.

    Objects outside the `io` hierarchy are judged by their `mode`,
    then by having an `encoding` at all.
    """
    if isinstance(stream, TextIOBase):
        return False
    if isinstance(stream, (RawIOBase, BufferedIOBase)):
        return True
    mode = getattr(stream, 'mode', None)
    if isinstance(mode, str):
        return 'b' in mode
    return not hasattr(stream, 'encoding')


class LineReader(metaclass=ABCMeta):
    def __init__(self) -> None:
        self._chunk = ''
        self._offset = 0
        self.count = 0  # logical lines handed out so far.

    @abstractmethod
    def _read(self) -> str:
        """Next decoded chunk of the source, empty string on EOF."""
        raise NotImplementedError

    @staticmethod
    def of(stream: IO) -> 'LineReader':
        """Text streams are read as is, byte streams as latin-1."""
        if is_binary(stream):
            return ByteReader(stream)
        return CharReader(stream)

    def read_line(self) -> str | None:
        """Next logical line, or `None` when the source runs dry."""
        buf: list[str] = []
        skip_lf = False
        new_line = True
        skip_ws = True
        is_comment = False
        continued = False  # at the beginning of a continuation line
        backslash = False  # odd count of trailing backslashes so far

        while True:
            if self._offset >= len(self._chunk):
                self._chunk = self._read()
                self._offset = 0
                if not self._chunk:
                    if not buf or is_comment:
                        return None
                    if backslash:
                        buf.pop()
                    return self.__commit(buf)
            char = self._chunk[self._offset]
            self._offset += 1

            if skip_lf:
                skip_lf = False
                if char == '\n':
                    continue
            if skip_ws:
                if char in WHITESPACES:
                    continue
                if not continued and char in '\r\n':
                    continue
                skip_ws = False
                continued = False
            if new_line:
                new_line = False
                if char in COMMENT_MARKERS:
                    is_comment = True
                    continue

            if char not in '\r\n':
                if not is_comment:
                    buf.append(char)
                    backslash = not backslash if char == '\\' else False
                continue

            # end of a physical line
            if is_comment or not buf:
                is_comment = False
                new_line = True
                skip_ws = True
                backslash = False
                buf.clear()
                continue
            if not backslash:
                return self.__commit(buf)
            buf.pop()
            skip_ws = True
            continued = True
            backslash = False
            skip_lf = char == '\r'

    def __commit(self, buf: list[str]) -> str:
        self.count += 1
        return ''.join(buf)

    def __iter__(self) -> Iterator[str]:
        while (line := self.read_line()) is not None:
            yield line


class ByteReader(LineReader):
    def __init__(self, stream: IO[bytes], chunk_size: int = CHUNK_SIZE):
        super().__init__()
        self._stream = stream
        self._size = chunk_size

    def _read(self) -> str:
        # latin-1 maps byte to char 1:1, safe to decode chunk by chunk.
        data = self._stream.read(self._size)
        return data.decode(BYTE_ENCODING) if data else ''


class CharReader(LineReader):
    def __init__(self, stream: IO[str], chunk_size: int = CHUNK_SIZE):
        super().__init__()
        self._stream = stream
        self._size = chunk_size

    def _read(self) -> str:
        return self._stream.read(self._size) or ''
