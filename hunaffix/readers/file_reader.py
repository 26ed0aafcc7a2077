"""
.. autoclass:: FileReader
    :members:
"""

import os
import codecs
import logging
from typing import BinaryIO, Iterator, Tuple, Union

from hunaffix.algo.encoding import Converter

logger = logging.getLogger(__name__)

BOM = '\ufeff'


class FileReader:
    """
    A very thin wrapper around file (or any binary stream), to read it line by line and:

    * decode lines transparently (see :class:`Converter <hunaffix.algo.encoding.Converter>`)
    * strip lines and skip empty ones
    * ignore BOM (byte-order mark) at the beginning
    * yield line with its number (1-based)
    * support encoding change on the fly::

        for line in reader:
            # do something
            reader.reset_encoding('UTF-8')
            # ..continue to read the following lines as UTF-8

    Lines that can't be decoded are not fatal: they are decoded with replacement chars, and
    a warning is logged.

    Args:
        source: path to file, or opened binary stream (text streams are also accepted and are not
                decoded)
        encoding: initial encoding
    """

    def __init__(self, source: Union[str, os.PathLike, BinaryIO], encoding: str = 'ISO8859-1'):
        if isinstance(source, (str, os.PathLike)):
            self.io = open(source, 'rb')    # pylint: disable=consider-using-with
            self.owned = True
            self.name = str(source)
        else:
            self.io = source
            self.owned = False
            self.name = getattr(source, 'name', repr(source))

        self.converter = Converter(encoding)
        self.line_no = 0

    def reset_encoding(self, encoding: str) -> None:
        self.converter = Converter(encoding)

    def __iter__(self) -> Iterator[Tuple[int, str]]:
        return self

    def __next__(self) -> Tuple[int, str]:
        for raw in iter(self.io.readline, b''):
            if raw == '':
                break
            self.line_no += 1
            if self.line_no == 1 and isinstance(raw, bytes) and raw.startswith(codecs.BOM_UTF8):
                raw = raw[len(codecs.BOM_UTF8):]
            line = self.decode(raw).strip()
            if self.line_no == 1 and line.startswith(BOM):
                line = line[1:].strip()
            if line:
                return (self.line_no, line)
        raise StopIteration

    def decode(self, raw: Union[bytes, str]) -> str:
        if isinstance(raw, str):
            return raw

        ok, line = self.converter.try_to_wide(raw)
        if not ok:
            logger.warning('%s:%d: not valid %s, undecodable bytes replaced',
                           self.name, self.line_no, self.converter.name)
        return line

    def close(self) -> None:
        if self.owned:
            self.io.close()

    def __enter__(self):
        return self

    def __exit__(self, *_):
        self.close()
