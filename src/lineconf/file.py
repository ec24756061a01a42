# -*- encoding: utf-8 -*-
# @File   : file.py
# @Time   : 2026/09/30 19:21:44
# @Author : Kariko Lin

"""Reading and saving `Configuration` by file name.

Without an encoding the file is treated like a classic .properties file,
latin-1 bytes with `\\uXXXX` escapes (and saved the same way, pure ASCII).
With one, it is decoded as a whole first, falling back to `chardet`
if that encoding turns out wrong. Saving in an encoding that can't hold
some characters writes them as `\\uXXXX` instead.
"""

import logging
from io import BytesIO, StringIO
from os.path import splitext
from warnings import warn

import chardet

from .abstract import FileHandler
from .codec import to_ascii
from .consts import BYTE_ENCODING, DETECT_CONFIDENCE, Format, Pretty
from .model import Configuration

_logger = logging.getLogger(__name__)


class ConfFile(FileHandler[Configuration]):
    def __init__(self, filename: str, encoding: str | None = None) -> None:
        super().__init__(filename)
        self._codec = encoding

    @property
    def format(self) -> Format:
        """Guessed from the suffix, `.ini` means INI."""
        return (
            Format.INI if splitext(self._fn)[1].lower() == '.ini'
            else Format.NATIVE)

    @staticmethod
    def _decode_file(filename: str) -> StringIO:
        with open(filename, 'rb') as fp:
            raw = fp.read()

        codec = chardet.detect(raw)
        if codec['encoding'] is None or (
                codec['confidence'] < DETECT_CONFIDENCE):
            codec = {'encoding': 'utf-8', 'confidence': 0.0}
        _logger.debug('%s: guessed %s', filename, codec['encoding'])

        # latin-1 never fails.
        try:
            buf = raw.decode(codec['encoding'])
        except UnicodeDecodeError:
            buf = raw.decode(BYTE_ENCODING)
        return StringIO(buf)

    def read(self, instance: Configuration | None = None) -> Configuration:
        """Load the file, into `instance` if given (additive)."""
        if instance is None:
            instance = Configuration()
        if self._codec is None:
            with open(self._fn, 'rb') as fp:
                instance.load(fp)
            return instance

        # decode everything before parsing,
        # so a wrong codec won't leave half a file loaded.
        try:
            with open(self._fn, 'r', encoding=self._codec) as fp:
                buf = StringIO(fp.read())
        except UnicodeDecodeError:
            warn(f'"{self._fn}" is not {self._codec}, guessing encoding.')
            buf = self._decode_file(self._fn)
        instance.load(buf)
        _logger.debug('read %s (%s)', self._fn, self._codec)
        return instance

    @staticmethod
    def _encode(text: str, codec: str) -> bytes:
        try:
            return text.encode(codec)
        except UnicodeEncodeError:
            pass
        # whatever the codec can't hold goes out as `\uXXXX`,
        # which `load()` decodes back.
        ret: list[bytes] = []
        for char in text:
            try:
                ret.append(char.encode(codec))
            except UnicodeEncodeError:
                ret.append(to_ascii(char).encode(codec))
        return b''.join(ret)

    def write(
        self, instance: Configuration,
        comment: str | None = None,
        fmt: Format | str | None = None,
        pretty: Pretty | str | None = None
    ) -> None:
        """Save `instance`, the file is only opened once the text is ready.

        So a failing save leaves the old file as it was.
        """
        if fmt is None:
            fmt = self.format
        if self._codec is None:
            bsink = BytesIO()
            instance.save(bsink, comment, fmt, pretty)
            raw = bsink.getvalue()
        else:
            tsink = StringIO()
            instance.save(tsink, comment, fmt, pretty)
            raw = self._encode(tsink.getvalue(), self._codec)
        with open(self._fn, 'wb') as fp:
            fp.write(raw)
        _logger.debug(
            'wrote %s (%s), %d bytes', self._fn, self._codec or 'ascii',
            len(raw))

    def __str__(self) -> str:
        return f'{super().__str__()} ({self._codec or BYTE_ENCODING})'
