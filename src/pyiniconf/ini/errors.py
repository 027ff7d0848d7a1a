# -*- encoding: utf-8 -*-
# @File   : errors.py
# @Time   : 2024/10/12 22:31:09
# @Author : Kariko Lin

from typing import NamedTuple


class Position(NamedTuple):
    line: int = 1
    column: int = 1

    def __str__(self) -> str:
        return f'line {self.line}, column {self.column}'


class ConfigError(Exception):
    """Base of everything this package raises on purpose."""
    pass


class ParseError(ConfigError):
    """A grammar violation (or source failure) while parsing.

    The parser stops at the first one, no partial `Config` is returned.
    """
    reason = 'Invalid INI syntax'

    def __init__(self, position: Position, reason: str | None = None) -> None:
        self.position = position
        if reason is not None:
            self.reason = reason
        super().__init__(f'{self.reason} at {position}')


class UnexpectedEndOfInput(ParseError):
    reason = 'Unexpected end of input'


class UnexpectedNewline(ParseError):
    reason = 'Unexpected newline'


class EmptySectionTitle(ParseError):
    reason = 'Empty section title'


class EmptyKey(ParseError):
    reason = 'Empty key'


class EmptyValue(ParseError):
    reason = 'Empty value'


class InvalidCharacter(ParseError):
    def __init__(self, character: str, position: Position) -> None:
        self.character = character
        super().__init__(position, f'Invalid character {character!r}')


class ExpectedSeparator(ParseError):
    reason = 'Expected key/value separator'


class ExpectedNewlineOrEnd(ParseError):
    reason = 'Expected newline or end of input after section header'


class UnexpectedCharacterOutsideQuotedValue(ParseError):
    reason = 'Unexpected character after closing quote'


class SourceError(ParseError):
    """The char source failed. See `__cause__` for the original error."""
    reason = 'Unable to read next character'


class InvalidValue(ConfigError, ValueError):
    def __init__(self, value: str, target: str) -> None:
        self.value = value
        self.target = target
        super().__init__(f'{value!r} is not a valid {target}')
