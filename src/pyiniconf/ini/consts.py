# -*- encoding: utf-8 -*-
# @File   : consts.py
# @Time   : 2024/10/12 21:52:03
# @Author : Kariko Lin

from enum import Enum


class Reserved(str, Enum):
    GLOBALS = 'GLOBALS'
    DEFAULTS = 'DEFAULTS'


SECTION_START = '['
SECTION_END = ']'
ESCAPE = '\\'
QUOTES = frozenset('"\'')

DEFAULT_COMMENTS = frozenset(';#')
DEFAULT_SEPARATOR = '='
DEFAULT_ENCODING = 'utf-8'

# what a source hands out once drained.
EOF = ''

# universal newlines are translated to '\n' by the sources,
# the rest are still line breaks to us.
NEWLINES = frozenset('\n\r\v\f\x85\u2028\u2029')


def is_newline(ch: str) -> bool:
    return ch in NEWLINES


def is_whitespace(ch: str) -> bool:
    """Horizontal whitespace only."""
    return ch.isspace() and ch not in NEWLINES
