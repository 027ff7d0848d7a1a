# -*- encoding: utf-8 -*-
# @File   : abstract.py
# @Time   : 2024/10/12 21:40:18
# @Author : Kariko Lin

from abc import ABCMeta, abstractmethod
from typing import Generic, TypeVar

T = TypeVar('T')


class CharSource(metaclass=ABCMeta):
    """Something to be read char by char.

    `next()` gives exactly one character per call, or `''` once drained.
    There's no pushback, the parser keeps its own lookahead.
    """

    @abstractmethod
    def next(self) -> str:
        raise NotImplementedError


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


class ValueConverter(Generic[T], metaclass=ABCMeta):
    """Text <-> object, for INI values."""
    name: str = 'value'

    @abstractmethod
    def from_value(self, value: str) -> T:
        """May raise `InvalidValue`."""
        raise NotImplementedError

    @abstractmethod
    def to_value(self, obj: T) -> str:
        raise NotImplementedError

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {self.name}>'
