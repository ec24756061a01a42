# -*- encoding: utf-8 -*-
# @File   : export.py
# @Time   : 2026/10/02 23:08:17
# @Author : Kariko Lin

"""Dump a `Configuration` to YAML, or read such a dump back.

Only two levels, sections and their pairs, the default section as `''`:

    ```yaml
    '':
      name: demo
    server.http:
      port: '8080'
    ```
"""

import logging
from time import localtime, strftime
from warnings import warn

import yaml

from .abstract import FileHandler
from .consts import TIME_FORMAT
from .model import Configuration

_logger = logging.getLogger(__name__)


class YamlExporter(FileHandler[Configuration]):
    def __init__(self, filename: str, encoding: str = 'utf-8') -> None:
        super().__init__(filename)
        self._codec = encoding

    @staticmethod
    def to_dict(instance: Configuration) -> dict[str, dict[str, str]]:
        ret: dict[str, dict[str, str]] = {}
        for section in instance:
            if pairs := instance[section].to_dict():
                ret[section] = dict(sorted(pairs.items()))
        return ret

    def read(self, instance: Configuration | None = None) -> Configuration:
        if instance is None:
            instance = Configuration()
        with open(self._fn, 'r', encoding=self._codec) as fp:
            data = yaml.safe_load(fp) or {}
        if not isinstance(data, dict):
            raise ValueError(f'"{self._fn}" is not a mapping of sections.')

        for section, pairs in data.items():
            section = '' if section is None else str(section)
            if not isinstance(pairs, dict):
                warn(f'[{section}] is not a mapping, skipped.')
                continue
            for k, v in pairs.items():
                if v is None:
                    warn(f'[{section}] {k} has no value, skipped.')
                    continue
                # yaml may give us ints, bools... keep the text only.
                v = str(v).lower() if isinstance(v, bool) else str(v)
                instance.set(f'{section}.{k}' if section else str(k), v)
        _logger.debug('imported %d sections from %s', len(data), self._fn)
        return instance

    def write(self, instance: Configuration, indent: int = 2) -> None:
        data = self.to_dict(instance)
        curtime = strftime(TIME_FORMAT, localtime())
        with open(self._fn, 'w', encoding=self._codec) as fp:
            fp.write(f'# exported: {curtime}\n')
            yaml.safe_dump(
                data, fp,
                allow_unicode=True,
                default_flow_style=False,
                indent=indent,
                sort_keys=False)
