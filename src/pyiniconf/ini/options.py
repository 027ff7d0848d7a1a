# -*- encoding: utf-8 -*-
# @File   : options.py
# @Time   : 2024/10/12 22:10:45
# @Author : Kariko Lin

import codecs
from dataclasses import dataclass
from typing import ClassVar

from .consts import (
    DEFAULT_COMMENTS, DEFAULT_ENCODING, DEFAULT_SEPARATOR,
    ESCAPE, QUOTES, SECTION_END, SECTION_START,
    is_newline, is_whitespace
)


def _is_structural(ch: str) -> bool:
    """Chars the grammar already gives a meaning to."""
    return (
        ch in QUOTES
        or ch in (SECTION_START, SECTION_END, ESCAPE)
        or is_whitespace(ch)
        or is_newline(ch)
    )


@dataclass(frozen=True, kw_only=True)
class ParserOptions:
    """Passed once per parse (or save) call, never mutated.

    `encoding=None` lets file reads guess the codec with `chardet`.
    """
    comment_characters: frozenset[str] = DEFAULT_COMMENTS
    separator: str = DEFAULT_SEPARATOR
    encoding: str | None = DEFAULT_ENCODING

    DEFAULT: ClassVar['ParserOptions']

    def __post_init__(self) -> None:
        # accept any iterable of chars, like a plain str ';#'.
        object.__setattr__(
            self, 'comment_characters', frozenset(self.comment_characters))
        for i in self.comment_characters:
            if len(i) != 1:
                raise ValueError(f'Comment character must be a single char: {i!r}')
            if _is_structural(i):
                raise ValueError(f'{i!r} can not start a comment.')
        if len(self.separator) != 1:
            raise ValueError(
                f'Separator must be a single char: {self.separator!r}')
        if (
            self.separator in self.comment_characters
            or _is_structural(self.separator)
        ):
            raise ValueError(f'{self.separator!r} can not be a separator.')
        if self.encoding is not None:
            codecs.lookup(self.encoding)  # LookupError if unknown

    @property
    def invalid_section_characters(self) -> frozenset[str]:
        return self.comment_characters | {SECTION_START, self.separator}

    @property
    def invalid_key_value_characters(self) -> frozenset[str]:
        return self.comment_characters | {
            SECTION_START, SECTION_END, self.separator}


ParserOptions.DEFAULT = ParserOptions()
