# -*- encoding: utf-8 -*-
# @File   : values.py
# @Time   : 2024/10/13 15:06:51
# @Author : Kariko Lin

"""Typed views of INI values.

Nothing is declared up front. A converter is picked per lookup::

    cfg.get('net', 'port', int)             # int64
    cfg.get('net', 'port', 'uint16')        # ranged
    cfg.get('net', 'peers', list[str])      # "a, b, c"

Conversion failures raise `InvalidValue`, they never fall back to defaults.
"""

import math
import re
import struct
from collections.abc import Sequence
from typing import Any, get_args, get_origin

from ..abstract import ValueConverter
from .errors import InvalidValue

__all__ = [
    'StringConverter', 'BoolConverter', 'IntConverter',
    'FloatConverter', 'ArrayConverter',
    'STRING', 'BOOL', 'INT', 'UINT', 'DOUBLE', 'FLOAT',
    'converter_for', 'converter_of', 'register_converter'
]

_INT_PATTERN = re.compile(r'[+-]?[0-9]+')
_UINT_PATTERN = re.compile(r'\+?[0-9]+')
_FLOAT_PATTERN = re.compile(
    r'[+-]?(?:(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?'
    r'|0[xX](?:[0-9a-fA-F]+\.?[0-9a-fA-F]*|\.[0-9a-fA-F]+)(?:[pP][+-]?[0-9]+)?'
    r'|inf|infinity|nan)',
    re.IGNORECASE)


class StringConverter(ValueConverter[str]):
    name = 'string'

    def from_value(self, value: str) -> str:
        return value

    def to_value(self, obj: str) -> str:
        return str(obj)


class BoolConverter(ValueConverter[bool]):
    name = 'bool'
    TRUTHY = frozenset(('true', '1', 'on', 'yes'))
    FALSY = frozenset(('false', '0', 'off', 'no'))

    def from_value(self, value: str) -> bool:
        lowered = value.lower()
        if lowered in self.TRUTHY:
            return True
        if lowered in self.FALSY:
            return False
        raise InvalidValue(value, self.name)

    def to_value(self, obj: bool) -> str:
        return 'true' if obj else 'false'


class IntConverter(ValueConverter[int]):
    def __init__(self, bits: int = 64, signed: bool = True) -> None:
        self.bits = bits
        self.signed = signed
        self.name = f'{"" if signed else "u"}int{bits}'
        if signed:
            self.min = -(1 << (bits - 1))
            self.max = (1 << (bits - 1)) - 1
        else:
            self.min, self.max = 0, (1 << bits) - 1

    def from_value(self, value: str) -> int:
        pattern = _INT_PATTERN if self.signed else _UINT_PATTERN
        if not pattern.fullmatch(value):
            raise InvalidValue(value, self.name)
        ret = int(value)
        if not self.min <= ret <= self.max:
            raise InvalidValue(value, self.name)  # overflow
        return ret

    def to_value(self, obj: int) -> str:
        if isinstance(obj, float) or not self.min <= obj <= self.max:
            raise InvalidValue(str(obj), self.name)
        return str(int(obj))


class FloatConverter(ValueConverter[float]):
    def __init__(self, bits: int = 64) -> None:
        if bits not in (32, 64):
            raise ValueError(f'Unsupported float width: {bits}')
        self.bits = bits
        self.name = f'float{bits}'

    @staticmethod
    def _narrow(value: float) -> float:
        # round to the nearest float32, OverflowError if out of range.
        return struct.unpack('<f', struct.pack('<f', value))[0]

    def from_value(self, value: str) -> float:
        if not _FLOAT_PATTERN.fullmatch(value):
            raise InvalidValue(value, self.name)
        if value.lstrip('+-')[:2] in ('0x', '0X'):
            ret = float.fromhex(value)
        else:
            ret = float(value)
        if math.isinf(ret) and 'inf' not in value.lower():
            raise InvalidValue(value, self.name)
        if self.bits == 32:
            try:
                ret = self._narrow(ret)
            except OverflowError:
                raise InvalidValue(value, self.name) from None
        return ret

    def to_value(self, obj: float) -> str:
        obj = float(obj)
        if self.bits == 64 or not math.isfinite(obj):
            return repr(obj)
        try:
            narrowed = self._narrow(obj)
        except OverflowError:
            raise InvalidValue(repr(obj), self.name) from None
        # shortest text that still reads back as the same float32.
        for digits in range(1, 10):
            text = f'{narrowed:.{digits}g}'
            if self._narrow(float(text)) == narrowed:
                break
        if not any(i in text for i in '.en'):
            text += '.0'
        return text


class ArrayConverter(ValueConverter[list]):
    """`"a, b, c"` as a list. Fails as a whole if any item fails."""
    SEPARATOR = ','
    JOINER = ', '

    def __init__(self, element: ValueConverter) -> None:
        self.element = element
        self.name = f'array of {element.name}'

    def from_value(self, value: str) -> list:
        try:
            return [
                self.element.from_value(i.strip())
                for i in value.split(self.SEPARATOR)
            ]
        except InvalidValue as e:
            raise InvalidValue(value, self.name) from e

    def to_value(self, obj: Sequence) -> str:
        return self.JOINER.join(self.element.to_value(i) for i in obj)


STRING = StringConverter()
BOOL = BoolConverter()
INT8, INT16, INT32, INT64 = (IntConverter(i) for i in (8, 16, 32, 64))
UINT8, UINT16, UINT32, UINT64 = (
    IntConverter(i, signed=False) for i in (8, 16, 32, 64))
INT, UINT = INT64, UINT64
FLOAT, DOUBLE = FloatConverter(32), FloatConverter(64)

_NAMED: dict[str, ValueConverter] = {
    i.name: i for i in (
        STRING, BOOL, INT8, INT16, INT32, INT64,
        UINT8, UINT16, UINT32, UINT64, FLOAT, DOUBLE)
}
_NAMED.update({
    'str': STRING, 'int': INT, 'uint': UINT,
    'float': FLOAT, 'double': DOUBLE
})

_REGISTRY: dict[type, ValueConverter] = {
    str: STRING,
    bool: BOOL,
    int: INT,
    float: DOUBLE,
}


def register_converter(
    tp: type, converter: ValueConverter, *, name: str | None = None
) -> None:
    """Teach the registry a new storable type (and optionally a name)."""
    _REGISTRY[tp] = converter
    if name is not None:
        _NAMED[name] = converter


def converter_for(tp: Any) -> ValueConverter:
    """Resolve a converter from a type, a `list[T]` alias, a name,
    or a converter itself."""
    if isinstance(tp, ValueConverter):
        return tp
    if get_origin(tp) in (list, tuple, Sequence):
        args = get_args(tp)
        return ArrayConverter(converter_for(args[0] if args else str))
    if tp in (list, tuple):
        return ArrayConverter(STRING)
    if isinstance(tp, str):
        try:
            return _NAMED[tp]
        except KeyError:
            raise TypeError(f'Unknown value type name: {tp!r}') from None
    if isinstance(tp, type):
        for i in tp.__mro__:
            if i in _REGISTRY:
                return _REGISTRY[i]
    raise TypeError(f'No converter registered for {tp!r}')


def converter_of(obj: Any) -> ValueConverter:
    """Pick a converter to store `obj` by its runtime type."""
    if isinstance(obj, (list, tuple)):
        return ArrayConverter(
            converter_of(obj[0]) if obj else STRING)
    return converter_for(type(obj))
