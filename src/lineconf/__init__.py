# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2026/09/28 21:30:02
# @Author : Kariko Lin

"""Line oriented, hierarchical configuration files.

Two layouts share one engine: NATIVE (`section.key=value`, .properties like)
and INI (`[section]` blocks). Both are read by the same `load()`.
"""

import logging

from .abstract import ConfError, FileHandler
from .codec import MalformedEscape, escape, unescape
from .consts import Format, Pretty
from .export import YamlExporter
from .file import ConfFile
from .model import (
    Configuration,
    Properties,
    SectionProxy,
    TypeMismatch,
    compare_names,
    section_sort_key
)

__all__ = [
    'ConfError', 'MalformedEscape', 'TypeMismatch',
    'Format', 'Pretty',
    'Properties', 'Configuration', 'SectionProxy',
    'compare_names', 'section_sort_key',
    'escape', 'unescape',
    'FileHandler', 'ConfFile', 'YamlExporter',
]

# silent unless the application sets logging up.
logging.getLogger(__name__).addHandler(logging.NullHandler())
