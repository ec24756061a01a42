# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2026/09/28 21:32:05
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class ConfError(Exception):
    """Base of all errors raised by `lineconf` itself.

    I/O problems are NOT wrapped, `OSError` just passes through."""
    pass


class FileHandler(Generic[T], metaclass=ABCMeta):
    def __init__(self, filename: str) -> None:
        self._fn = filename

    @abstractmethod
    def read(self) -> T:
        raise NotImplementedError

    @abstractmethod
    def write(self, instance: T) -> None:
        raise NotImplementedError

    def __str__(self) -> str:
        return self._fn
