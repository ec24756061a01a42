# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2026/09/28 21:40:12
# @Author : Kariko Lin

from enum import Enum


class Format(str, Enum):
    """On-disk layout of a configuration."""
    NATIVE = 'native'  # flat `section.key=value`, like .properties
    INI = 'ini'        # `[section]` blocks


class Pretty(str, Enum):
    """How `key = value` pairs get column-aligned on save."""
    NONE = 'none'      # `key=value`
    LOCAL = 'local'    # widest key of each section
    GLOBAL = 'global'  # widest key of the whole document


# byte streams are latin-1: one byte, one code unit.
BYTE_ENCODING = 'iso-8859-1'
CHUNK_SIZE = 8192

# first non-blank char of a comment line.
COMMENT_MARKERS = '#;!'
# chars with structural meaning inside a line, always escaped on save.
RESERVED = '=:#;!'
SEPARATORS = '=:'
WHITESPACES = ' \t\f'

NATIVE_COMMENT = '#'
INI_COMMENT = ';'

TIME_FORMAT = '%Y-%m-%d %H:%M:%S'

# below this `chardet` guess we'd rather trust utf-8.
DETECT_CONFIDENCE = 0.8
