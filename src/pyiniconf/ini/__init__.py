# -*- encoding: utf-8 -*-
# @File   : __init__.py
# @Time   : 2024/10/14 02:16:53
# @Author : Kariko Lin

from .consts import Reserved
from .errors import (
    ConfigError, ParseError, Position, SourceError, InvalidValue,
    UnexpectedEndOfInput, UnexpectedNewline, EmptySectionTitle,
    EmptyKey, EmptyValue, InvalidCharacter, ExpectedSeparator,
    ExpectedNewlineOrEnd, UnexpectedCharacterOutsideQuotedValue
)
from .model import Config, ConfigSection
from .options import ParserOptions
from .parser import IniParser, parse, parse_string, read_document
from .source import ByteSource, StreamSource, StringSource
