# -*- encoding: utf-8 -*-
# @File   : model.py
# @Time   : 2026/09/29 02:40:09
# @Author : Kariko Lin

"""
Hierarchical key-value store behind both NATIVE and INI layouts.

Keys are addressed as "dotted keys" only, the last segment being the key
and the rest being its section:

    ```
    "port"              -> [""]  port
    "server.port"       -> [server]  port
    "server.http.port"  -> [server.http]  port
    ```

NOTE: `load()` is **not transactional**. If reading fails halfway
(`OSError`, `MalformedEscape`), pairs read before the failure stay in the
store. Throw the instance away if you need all-or-nothing.
"""

import logging
from abc import ABCMeta, abstractmethod
from collections.abc import Mapping
from functools import cmp_to_key
from re import compile as regex
from threading import RLock
from time import localtime, strftime
from typing import IO, Iterator
from warnings import warn

from .abstract import ConfError
from .codec import escape
from .consts import (
    INI_COMMENT, NATIVE_COMMENT, TIME_FORMAT,
    Format, Pretty
)
from .parser import LineParser
from .reader import LineReader
from .writer import LineWriter

_logger = logging.getLogger(__name__)

# plain ASCII numbers only, no `_` separators, no blanks around.
_INT = regex(r'[+-]?[0-9]+')
_FLOAT = regex(
    r'[+-]?(NaN|Infinity|([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?)')


class TypeMismatch(ConfError, ValueError):
    """Typed getter on a value that doesn't parse as that type."""
    def __init__(self, key: str, value: str, expected: str) -> None:
        super().__init__(f'"{key}" = "{value}" is not a valid {expected}.')
        self.key = key
        self.value = value


def compare_names(source: str, target: str) -> int:
    """Section order: most general prefix first, then depth first.

    Names without a dot come before dotted ones, dotted names compare
    on the part before the LAST dot, then (recursively) on the rest:

        ```
        "", "admin", "server", "admin.debug", "server.http", "a.b.c"
        ```
    """
    src, trg = source.rfind('.'), target.rfind('.')
    if src < 0 and trg < 0:
        return (source > target) - (source < target)
    if src < 0:
        return -1
    if trg < 0:
        return 1
    src_prefix, trg_prefix = source[:src], target[:trg]
    if src_prefix != trg_prefix:
        return -1 if src_prefix < trg_prefix else 1
    return compare_names(source[src + 1:], target[trg + 1:])


section_sort_key = cmp_to_key(compare_names)


class Properties(metaclass=ABCMeta):
    """Typed accessors, `load()` and `save()` over plain `get`/`set`."""
    def __init__(self) -> None:
        # guards every mutation, `load()` included.
        self._lock = RLock()

    @abstractmethod
    def get(self, key: str, default: str | None = None) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def get_int(self, key: str, default: int) -> int:
        if not (value := self.get(key)):
            return default
        if not _INT.fullmatch(value):
            raise TypeMismatch(key, value, 'int')
        return int(value)

    def get_float(self, key: str, default: float) -> float:
        if not (value := self.get(key)):
            return default
        if not _FLOAT.fullmatch(value):
            raise TypeMismatch(key, value, 'float')
        return float(value)

    def get_bool(self, key: str, default: bool = False) -> bool:
        if not (value := self.get(key)):
            return default
        return value[0].lower() in ('1', 'y', 't')

    def get_array(self, key: str) -> list[str]:
        """Comma separated value, NOT stripped. Empty list if missing."""
        if not key or not (value := self.get(key)):
            return []
        return value.split(',')

    def load(self, source: IO | LineReader) -> None:
        """Read pairs from a text or a byte (latin-1) stream.

        Additive: existing pairs are kept, or overwritten by the same key.
        """
        with self._lock:
            LineParser(self).parse(source)

    def save(
        self, sink: IO,
        comment: str | None = None,
        fmt: Format | str = Format.NATIVE,
        pretty: Pretty | str | None = None
    ) -> None:
        """Write everything in a form `load()` reads back.

        `pretty` defaults to `LOCAL` for INI, `NONE` for NATIVE.
        """
        fmt = Format(fmt)
        if pretty is None:
            pretty = Pretty.LOCAL if fmt is Format.INI else Pretty.NONE
        writer = LineWriter.of(
            sink, INI_COMMENT if fmt is Format.INI else NATIVE_COMMENT)
        self._write(writer, comment, fmt, Pretty(pretty))

    def _write(
        self, writer: LineWriter, comment: str | None,
        fmt: Format, pretty: Pretty
    ) -> None:
        if comment is not None:
            writer.write_comment(comment)
        # provenance only, never parsed back.
        writer.write_comment(strftime(TIME_FORMAT, localtime()))


class SectionProxy(Mapping[str, str]):
    """Read only snapshot of one section, keys in sorted order.

    Changing the `Configuration` afterwards won't affect it (and vice versa).
    """
    def __init__(self, section_name: str, data: dict[str, str]) -> None:
        self._name = section_name
        self._data = data

    @property
    def name(self) -> str:
        return self._name

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self._data))

    def __str__(self) -> str:
        return f"[{self._name}]"

    def __repr__(self) -> str:
        return '[%s] { .cnt = %d }' % (self._name, len(self._data))

    def to_dict(self) -> dict[str, str]:
        return self._data.copy()


def _to_key(section: str, fmt: Format, name: str) -> str:
    match fmt:
        case Format.INI:
            key = name
        case Format.NATIVE:
            key = f'{section}.{name}' if section else name
    return escape(key, True)


def _max_width(section: str, values: dict[str, str], fmt: Format) -> int:
    return max((len(_to_key(section, fmt, k)) for k in values), default=0)


def _write_section(
    writer: LineWriter, fmt: Format,
    section: str, values: dict[str, str], width: int
) -> None:
    if fmt is Format.INI and section:
        header = escape(section).replace(']', '\\]')
        writer.write(f'[{header}]')
        writer.newline()
    for k in sorted(values):
        key, value = _to_key(section, fmt, k), escape(values[k])
        writer.write(
            f'{key:<{width}} = {value}' if width > 0 else f'{key}={value}')
        writer.newline()


class Configuration(Properties):
    """Sections of key-value pairs. `""` is the default section.

        ```python
        conf = Configuration()
        with open('server.ini', 'rb') as fp:
            conf.load(fp)
        conf.get('server.http.port')        # '8080'
        conf.get_int('server.http.port', 80)  # 8080
        conf['server.http']                 # [server.http] { .cnt = 1 }
        ```

    Iterating yields section names, in the order they are saved.
    """
    DEFAULT = ''

    def __init__(self) -> None:
        super().__init__()
        self.__sections: dict[str, dict[str, str]] = {self.DEFAULT: {}}

    @staticmethod
    def split_key(key: str) -> tuple[str, str]:
        """`"a.b.c"` -> `("a.b", "c")`, `"c"` -> `("", "c")`."""
        section, _, name = key.rpartition('.')
        return section, name

    def get(self, key: str, default: str | None = None) -> str | None:
        section, name = self.split_key(key)
        values = self.__sections.get(section)
        value = None if values is None else values.get(name)
        return default if value is None else value

    def set(self, key: str, value: str) -> None:
        section, name = self.split_key(key)
        with self._lock:
            self.__sections.setdefault(section, {})[name] = value

    def section_type(self, name: str) -> str | None:
        """Value of `<name>.type`, the usual way to tag what a section is."""
        return self.get(f'{name}.type')

    def rename_section(self, old: str, new: str) -> bool:
        """Move all pairs of `old` under `new`, replacing `new` if any.

        Returns:
            `False` if `old` doesn't exist, otherwise `True`.
        """
        with self._lock:
            if old not in self.__sections:
                warn(f'no section [{old}] to rename.')
                return False
            self.__sections[new] = self.__sections.pop(old)
            self.__sections.setdefault(self.DEFAULT, {})
        _logger.debug('renamed section [%s] -> [%s]', old, new)
        return True

    def __getitem__(self, name: str) -> SectionProxy:
        with self._lock:
            return SectionProxy(name, self.__sections[name].copy())

    def __contains__(self, name: object) -> bool:
        return name in self.__sections

    def __len__(self) -> int:
        return len(self.__sections)

    def __iter__(self) -> Iterator[str]:
        with self._lock:
            names = sorted(self.__sections, key=section_sort_key)
        return iter(names)

    def items(self) -> Iterator[tuple[str, str]]:
        """`(dotted_key, value)` pairs, in saving order."""
        for section, values in self.__snapshot():
            for k in sorted(values):
                yield (f'{section}.{k}' if section else k), values[k]

    def __snapshot(self) -> list[tuple[str, dict[str, str]]]:
        with self._lock:
            ret = [(k, v.copy()) for k, v in self.__sections.items() if v]
        ret.sort(key=lambda x: section_sort_key(x[0]))
        return ret

    def _write(
        self, writer: LineWriter, comment: str | None,
        fmt: Format, pretty: Pretty
    ) -> None:
        super()._write(writer, comment, fmt, pretty)
        sections = self.__snapshot()
        width = 0
        if pretty is Pretty.GLOBAL:
            width = max(
                (_max_width(s, v, fmt) for s, v in sections), default=0)
        for section, values in sections:
            writer.newline()
            if pretty is Pretty.LOCAL:
                width = _max_width(section, values, fmt)
            _write_section(writer, fmt, section, values, width)
        written = writer.flush()
        _logger.debug(
            'saved %d sections as %s, %d chars', len(sections),
            fmt.name, written)

    def __repr__(self) -> str:
        return '<Configuration { .sections = %d }>' % len(self.__sections)
