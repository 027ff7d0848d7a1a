# -*- encoding: utf-8 -*-
# @File   : source.py
# @Time   : 2024/10/13 00:12:27
# @Author : Kariko Lin

"""Char sources the parser consumes.

Files are opened *outside* of here (see `parser.IniParser`),
so that they get closed on whatever way the parse exits.
"""

import codecs
import logging
from io import BytesIO, StringIO, TextIOBase
from typing import IO
from warnings import warn

import chardet

from ..abstract import CharSource
from .consts import DEFAULT_ENCODING, EOF

logger = logging.getLogger(__name__)

# below that we'd rather trust utf-8.
DETECT_CONFIDENCE = 0.8


class StreamSource(CharSource):
    """Reads a decoded text stream, one char a time."""

    def __init__(self, stream: TextIOBase | IO[str]) -> None:
        self._stream = stream
        self._drained = False

    def next(self) -> str:
        if self._drained:
            return EOF
        # decoding errors surface here, and are left to the parser.
        ch = self._stream.read(1)
        if not ch:
            self._drained = True
            return EOF
        return ch


class StringSource(StreamSource):
    def __init__(self, text: str) -> None:
        # newline=None: '\r\n' and '\r' come out as '\n'.
        super().__init__(StringIO(text, newline=None))


class ByteSource(CharSource):
    """Decodes a binary stream byte by byte.

    An undecodable byte raises on the very call that reaches it,
    so the parser reports where it actually sits.
    """

    def __init__(self, raw: IO[bytes], encoding: str) -> None:
        self._raw = raw
        self._decoder = codecs.getincrementaldecoder(encoding)()
        self._pending = ''
        self._after_cr = False
        self._drained = False

    def _decode_next(self) -> str:
        while not self._pending:
            if self._drained:
                return EOF
            byte = self._raw.read(1)
            if not byte:
                self._drained = True
                # truncated multi-byte sequences raise here.
                self._pending = self._decoder.decode(b'', final=True)
            else:
                self._pending = self._decoder.decode(byte)
        ch, self._pending = self._pending[0], self._pending[1:]
        return ch

    def next(self) -> str:
        ch = self._decode_next()
        # universal newlines: '\r\n' and '\r' both come out as '\n'.
        if self._after_cr and ch == '\n':
            ch = self._decode_next()
        self._after_cr = ch == '\r'
        return '\n' if ch == '\r' else ch


def guess_encoding(raw: bytes) -> str:
    codec = chardet.detect(raw)
    if codec is None or codec['encoding'] is None \
            or codec['confidence'] < DETECT_CONFIDENCE:
        warn(f'无法可靠地识别文本编码，将按 {DEFAULT_ENCODING} 读取。')
        return DEFAULT_ENCODING
    logger.debug('Detected %s (confidence %.2f)',
                 codec['encoding'], codec['confidence'])
    return codec['encoding']


def decode_stream(raw: IO[bytes], encoding: str | None = None) -> ByteSource:
    """Wrap a binary stream.

    With `encoding=None` the whole content is read to guess the codec.
    Undecodable bytes raise only when the parser reaches them,
    at their own position.
    """
    if encoding is None:
        data = raw.read()
        encoding = guess_encoding(data)
        raw = BytesIO(data)
    return ByteSource(raw, encoding)
