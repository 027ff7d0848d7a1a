# -*- encoding: utf-8 -*-
# @File   : parser.py
# @Time   : 2024/10/14 01:04:45
# @Author : Kariko Lin

"""Char by char INI parsing.

Unlike `configparser`, this one is strict and fail-fast:
the first grammar violation aborts the parse, with its position.
There's no multi-line value, no nested section, and no inline comment
after a value (`;` and `#` are simply invalid there).
"""

import logging
import os
from io import TextIOBase
from os import PathLike
from os.path import expanduser
from typing import IO

from ..abstract import CharSource, FileHandler
from .consts import (
    DEFAULT_ENCODING, EOF, ESCAPE, QUOTES, SECTION_END, SECTION_START,
    is_newline, is_whitespace
)
from .errors import (
    EmptyKey, EmptySectionTitle, EmptyValue, ExpectedNewlineOrEnd,
    ExpectedSeparator, InvalidCharacter, Position, SourceError,
    UnexpectedCharacterOutsideQuotedValue, UnexpectedEndOfInput,
    UnexpectedNewline
)
from .model import DEFAULT_PERMISSIONS, Config, ConfigSection
from .options import ParserOptions
from .source import StreamSource, StringSource, decode_stream

logger = logging.getLogger(__name__)


class _Cursor:
    """Holds the one char of lookahead and where it sits."""

    def __init__(self, source: CharSource) -> None:
        self._source = source
        self._after_newline = False
        self.line, self.column = 1, 0
        self.char = EOF

    @property
    def position(self) -> Position:
        return Position(self.line, self.column)

    @property
    def at_eol(self) -> bool:
        return self.char == EOF or is_newline(self.char)

    def advance(self) -> str:
        if self._after_newline:
            self.line += 1
            self.column = 1
        else:
            self.column += 1
        try:
            self.char = self._source.next()
        except (OSError, UnicodeError) as e:
            raise SourceError(self.position) from e
        self._after_newline = is_newline(self.char)
        return self.char

    def end_of_line_error(self) -> UnexpectedEndOfInput | UnexpectedNewline:
        if self.char == EOF:
            return UnexpectedEndOfInput(self.position)
        return UnexpectedNewline(self.position)


class _Grammar:
    def __init__(self, source: CharSource, options: ParserOptions) -> None:
        self._cur = _Cursor(source)
        self._comments = options.comment_characters
        self._separator = options.separator
        self._bad_title_chars = options.invalid_section_characters
        self._bad_kv_chars = options.invalid_key_value_characters

    def run(self) -> Config:
        cur = self._cur
        ret = Config()
        section: ConfigSection = ret.globals
        header_on_line = False

        cur.advance()
        while True:
            if is_newline(cur.char):
                header_on_line = False
                cur.advance()
                continue
            if cur.char == EOF:
                break

            if cur.char == SECTION_START:
                # `[a][b]` just switches to `b`.
                section = ret.setdefault(self.__section_title())
                header_on_line = True
            elif cur.char in self._comments:
                self.__skip_line()
            elif header_on_line and not is_whitespace(cur.char):
                # a header owns its line, comments aside.
                raise ExpectedNewlineOrEnd(cur.position)
            elif is_whitespace(cur.char):
                pass
            else:
                key = self.__key()
                section[key] = self.__value()

            if not cur.at_eol:
                cur.advance()
        return ret

    def __skip_line(self) -> None:
        while not self._cur.at_eol:
            self._cur.advance()

    def __section_title(self) -> str:
        """From `[` up to `]`, stops *on* the `]`."""
        cur = self._cur
        title = ''
        while cur.advance() != SECTION_END:
            if cur.at_eol:
                raise cur.end_of_line_error()
            if cur.char in self._bad_title_chars:
                raise InvalidCharacter(cur.char, cur.position)
            title += cur.char
        if not title:
            raise EmptySectionTitle(cur.position)
        return title

    def __key(self) -> str:
        """From the current char up to the separator, stops *on* it."""
        cur = self._cur
        key = ''
        hit_whitespace = False
        while cur.char != self._separator:
            if cur.at_eol:
                raise cur.end_of_line_error()
            if cur.char in self._bad_kv_chars:
                raise InvalidCharacter(cur.char, cur.position)
            if is_whitespace(cur.char):
                # only legal right before the separator.
                hit_whitespace = bool(key)
            elif hit_whitespace:
                raise ExpectedSeparator(cur.position)
            else:
                key += cur.char
            cur.advance()
        if not key:
            raise EmptyKey(cur.position)
        return key

    def __value(self) -> str:
        """After the separator up to the end of line, stops *on* the EOL."""
        cur = self._cur
        value = ''
        pending = ''  # whitespace that may turn out to be trailing
        quote: str | None = None
        closed = escaped = False

        cur.advance()
        while not cur.at_eol:
            ch = cur.char
            if ch in self._bad_kv_chars:
                raise InvalidCharacter(ch, cur.position)

            if closed:
                if not is_whitespace(ch):
                    raise UnexpectedCharacterOutsideQuotedValue(cur.position)
            elif escaped:
                value += pending + ch
                pending = ''
                escaped = False
            elif ch == ESCAPE:
                escaped = True
            elif quote is None and not value and ch in QUOTES:
                quote = ch
            elif ch == quote:
                closed = True
            elif is_whitespace(ch):
                if quote is not None:
                    value += ch
                elif value:
                    pending += ch
            else:
                value += pending + ch
                pending = ''
            cur.advance()

        if quote is not None and not closed:
            raise cur.end_of_line_error()
        if not value:
            raise EmptyValue(cur.position)
        return value


def parse(
    source: CharSource | str, options: ParserOptions | None = None
) -> Config:
    """Parse a char source (or a plain string) into a `Config`.

    Raises the first `ParseError` met.
    """
    if isinstance(source, str):
        source = StringSource(source)
    ret = _Grammar(source, options or ParserOptions.DEFAULT).run()
    logger.debug('Parsed %d section(s), %d global(s), %d default(s)',
                 len(ret), len(ret.globals), len(ret.defaults))
    return ret


def parse_string(text: str, options: ParserOptions | None = None) -> Config:
    return parse(StringSource(text), options)


class IniParser(FileHandler[Config]):
    def __init__(
        self,
        filename: str | PathLike[str],
        options: ParserOptions | None = None
    ) -> None:
        super().__init__(expanduser(os.fspath(filename)))
        self._options = options or ParserOptions.DEFAULT

    @staticmethod
    def readstream(
        buf: TextIOBase | IO[str], options: ParserOptions | None = None
    ) -> Config:
        """Parse an already decoded text stream with `options`.

        Same strict grammar as `read()`, the stream is not closed here.
        """
        return parse(StreamSource(buf), options)

    def read(self) -> Config:
        logger.debug('Reading %s (encoding: %s)',
                     self._fn, self._options.encoding or 'detect')
        with open(self._fn, 'rb') as fp:
            return parse(
                decode_stream(fp, self._options.encoding), self._options)

    def write(
        self, instance: Config, *, permissions: int = DEFAULT_PERMISSIONS
    ) -> None:
        """Overwrite the file with `instance.output()`, then chmod it."""
        with open(
            self._fn, 'w',
            encoding=self._options.encoding or DEFAULT_ENCODING,
            newline=''
        ) as fp:
            fp.write(instance.output(self._options))
        os.chmod(self._fn, permissions)
        logger.debug('Saved %s (mode %o)', self._fn, permissions)

    def __str__(self) -> str:
        return 'INI file: ' + super().__str__() + \
            f' ({self._options.encoding or "detect"})'


def read_document(
    path: str | PathLike[str], options: ParserOptions | None = None
) -> Config:
    return IniParser(path, options).read()
