# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/14 02:20:11
# @Author : Kariko Lin

from .abstract import CharSource, ValueConverter
from .ini import (
    Config, ConfigSection, Reserved, ParserOptions,
    IniParser, parse, parse_string, read_document,
    ByteSource, StreamSource, StringSource,
    ConfigError, ParseError, Position, SourceError, InvalidValue,
    UnexpectedEndOfInput, UnexpectedNewline, EmptySectionTitle,
    EmptyKey, EmptyValue, InvalidCharacter, ExpectedSeparator,
    ExpectedNewlineOrEnd, UnexpectedCharacterOutsideQuotedValue
)
from .ini.values import converter_for, register_converter

__all__ = [
    'CharSource', 'ValueConverter',
    'Config', 'ConfigSection', 'Reserved', 'ParserOptions',
    'IniParser', 'parse', 'parse_string', 'read_document',
    'ByteSource', 'StreamSource', 'StringSource',
    'ConfigError', 'ParseError', 'Position', 'SourceError', 'InvalidValue',
    'UnexpectedEndOfInput', 'UnexpectedNewline', 'EmptySectionTitle',
    'EmptyKey', 'EmptyValue', 'InvalidCharacter', 'ExpectedSeparator',
    'ExpectedNewlineOrEnd', 'UnexpectedCharacterOutsideQuotedValue',
    'converter_for', 'register_converter'
]
