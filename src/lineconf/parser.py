# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2026/09/29 01:26:18
# @Author : Kariko Lin

"""Turns logical lines into `set(key, value)` calls.

Both layouts are accepted at the same time:

    ```ini
    plain = value          ; -> "plain"
    server.port: 8080      ; -> "server.port"
    [server]
    host value             ; -> "server.host", whitespace works as `=` too
    [server/http]
    port = 80              ; -> "server.http.port"
    ```

Pairs with an empty key or an empty value are dropped silently.
"""

import logging
from typing import IO, Protocol
from warnings import warn

from .codec import MalformedEscape, unescape
from .consts import SEPARATORS, WHITESPACES
from .reader import LineReader

_logger = logging.getLogger(__name__)


class PropertySink(Protocol):
    def set(self, key: str, value: str) -> None: ...


class LineParser:
    def __init__(self, properties: PropertySink) -> None:
        self._props = properties
        self._section: str | None = None

    @property
    def properties(self) -> PropertySink:
        return self._props

    def parse(self, source: IO | LineReader) -> None:
        """Feed every pair of `source` into the bound properties.

        NOT transactional: pairs set before an error stay set.

        Raises:
            MalformedEscape: annotated with the logical line number.
        """
        reader = (
            source if isinstance(source, LineReader)
            else LineReader.of(source))
        self._section = None
        pairs = 0
        for line in reader:
            try:
                pairs += self._parse_line(line)
            except MalformedEscape as e:
                e.line = reader.count
                raise
        _logger.debug('parsed %d lines, %d pairs', reader.count, pairs)

    def _parse_line(self, line: str) -> int:
        if not line:  # a lone `\` at EOF
            return 0
        if line[0] == '[':
            self._section = self._parse_section(line)
            _logger.debug('entering section [%s]', self._section)
            return 0

        length = len(line)
        key_end = 0
        escaped = False
        has_separator = False
        while key_end < length:
            char = line[key_end]
            if not escaped and (char in SEPARATORS or char in WHITESPACES):
                has_separator = char in SEPARATORS
                break
            escaped = not escaped if char == '\\' else False
            key_end += 1

        value_start = key_end + 1
        while value_start < length:
            char = line[value_start]
            if char not in WHITESPACES:
                # "key : value" -> one more separator allowed after blanks.
                if has_separator or char not in SEPARATORS:
                    break
                has_separator = True
            value_start += 1

        key = unescape(line, 0, key_end)
        value = unescape(line, value_start, max(length - value_start, 0))
        if not key or not value:
            return 0
        if self._section:
            key = f'{self._section}.{key}'
        self._props.set(key.replace('/', '.').replace(':', '.'), value)
        return 1

    @staticmethod
    def _parse_section(line: str) -> str:
        escaped = False
        for idx in range(1, len(line)):
            char = line[idx]
            if char == ']' and not escaped:
                return unescape(line, 1, idx - 1)
            escaped = not escaped if char == '\\' else False
        warn(f'section header without "]": {line}')
        # dangling backslash is dropped by the reader already.
        return unescape(line, 1)
