"""
Conversion between bytes of dictionary files/user input and Python strings, and a few cheap
predicates to skip expensive processing of simple text.

Hunspell dictionaries declare their encoding with ``SET`` directive of ``*.aff`` file, using names
which mostly (but not always) are understood by Python's ``codecs``: ``UTF-8``, ``ISO8859-1``,
``microsoft-cp1251``, ``KOI8-R``, ``TIS-620``. :data:`ENCODING_ALIASES` fixes the rest.

.. autoclass:: EncodingError
.. autoclass:: Converter
    :members:
.. autoclass:: LocaleContext
    :members:

.. autofunction:: is_all_ascii
.. autofunction:: is_all_bmp
.. autofunction:: is_number
"""

import re
import codecs
import logging
from contextlib import contextmanager
from typing import Iterator, Optional, Tuple, Union

from hunaffix.algo.capitalization import CasingRules, casing_rules

logger = logging.getLogger(__name__)

#: Hunspell encoding names Python doesn't know under the same name
ENCODING_ALIASES = {
    'microsoft-cp1250': 'cp1250',
    'microsoft-cp1251': 'cp1251',
    'microsoft-cp1252': 'cp1252',
    'microsoft-cp1253': 'cp1253',
    'microsoft-cp1254': 'cp1254',
    'microsoft-cp1255': 'cp1255',
    'microsoft-cp1256': 'cp1256',
    'microsoft-cp1257': 'cp1257',
    'microsoft-cp1258': 'cp1258',
    'iso8859-10': 'iso8859_10',
    'iso8859-13': 'iso8859_13',
    'iso8859-14': 'iso8859_14',
    'iso8859-15': 'iso8859_15',
    'tis-620': 'tis_620',
}

NUMBER_REGEXP = re.compile(r'-?[0-9]+(?:[.,-][0-9]+)*')


class EncodingError(ValueError):
    """
    Unknown encoding name, or text not representable in the encoding.
    """


class Converter:
    """
    Converts bytes in some encoding to ``str`` and back::

        >>> cnv = Converter('microsoft-cp1251')
        >>> cnv.to_wide(b'\\xea\\xee\\xf2')
        'кот'
        >>> cnv.try_to_narrow('猫')
        (False, b'?')

    ``to_wide``/``to_narrow`` raise :class:`EncodingError` on bad input, ``try_to_wide``/``try_to_narrow``
    return ``(success, best effort result)`` and are meant for untrusted per-word input, where one bad
    word shouldn't stop processing of the rest.

    Args:
        encoding: Hunspell's or Python's encoding name. Unknown names raise :class:`EncodingError`
                  immediately.
    """

    def __init__(self, encoding: str):
        self.name = encoding
        try:
            self.codec = codecs.lookup(ENCODING_ALIASES.get(encoding.lower(), encoding))
        except LookupError as e:
            raise EncodingError(f'Unknown encoding {encoding!r}') from e

    def to_wide(self, data: bytes) -> str:
        try:
            return self.codec.decode(data)[0]
        except UnicodeDecodeError as e:
            raise EncodingError(f'Not valid {self.name}: {data!r}') from e

    def try_to_wide(self, data: bytes) -> Tuple[bool, str]:
        try:
            return (True, self.codec.decode(data)[0])
        except UnicodeDecodeError:
            return (False, self.codec.decode(data, 'replace')[0])

    def to_narrow(self, text: str) -> bytes:
        try:
            return self.codec.encode(text)[0]
        except UnicodeEncodeError as e:
            raise EncodingError(f'Not representable in {self.name}: {text!r}') from e

    def try_to_narrow(self, text: str) -> Tuple[bool, bytes]:
        try:
            return (True, self.codec.encode(text)[0])
        except UnicodeEncodeError:
            return (False, self.codec.encode(text, 'replace')[0])

    def __repr__(self):
        return f'Converter({self.name})'


class LocaleContext:
    """
    Encoding and casing rules in effect for some processing. It is passed explicitly to whoever
    needs it, instead of depending on process-wide ``locale`` settings, which are shared by all the
    threads.

    Temporary changes are done with context managers, restoring the previous state on exit, however
    the block is left::

        context = LocaleContext('UTF-8', lang='tr_TR')

        with context.using('ISO8859-9'):
            word = context.converter.to_wide(raw)

        with context.neutral():
            # ASCII, language-independent casing: like C locale
            ...

    Args:
        encoding: initial encoding
        lang: language code, defining casing rules (see
              :func:`casing_rules <hunaffix.algo.capitalization.casing_rules>`)
        checksharps: German sharp s casing rules
    """

    NEUTRAL_ENCODING = 'ascii'

    def __init__(self, encoding: str = 'UTF-8', lang: Optional[str] = None, checksharps: bool = False):
        self.converter = Converter(encoding)
        self.casing: CasingRules = casing_rules(lang, checksharps)

    @property
    def encoding(self) -> str:
        return self.converter.name

    @contextmanager
    def using(self, encoding: str) -> Iterator['LocaleContext']:
        """
        Switch encoding for the duration of ``with`` block. Unknown encoding raises
        :class:`EncodingError` before entering the block, and the context stays unchanged.
        """

        converter = Converter(encoding)
        previous = self.converter
        self.converter = converter
        logger.debug('Switched encoding %s => %s', previous.name, converter.name)
        try:
            yield self
        finally:
            self.converter = previous

    @contextmanager
    def neutral(self) -> Iterator['LocaleContext']:
        """
        Switch to encoding-agnostic state (ASCII, no language-specific casing) for the duration
        of ``with`` block.
        """

        previous_casing = self.casing
        with self.using(self.NEUTRAL_ENCODING):
            self.casing = CasingRules()
            try:
                yield self
            finally:
                self.casing = previous_casing

    def __repr__(self):
        return f'LocaleContext({self.encoding}, {type(self.casing).__name__})'


def is_all_ascii(text: Union[str, bytes]) -> bool:
    return text.isascii()


def is_all_bmp(text: str) -> bool:
    """
    Whether all the characters are from Basic Multilingual Plane (fit into 16 bits, like flags do).
    """
    return all(ord(char) <= 0xFFFF for char in text)


def is_number(text: str) -> bool:
    """
    Whether the word is a number: digits, optionally separated by single ``.``, ``,`` or ``-``
    ("1,000.5", "2020-10-17"), and optionally with leading minus. Numbers are always correct words.
    """
    return NUMBER_REGEXP.fullmatch(text) is not None
