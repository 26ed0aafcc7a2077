from __future__ import annotations

import logging
from typing import BinaryIO, Iterator, List, Optional, Union

from hunaffix import data, readers
from hunaffix.readers.file_reader import FileReader
from hunaffix.algo import lookup
from hunaffix.algo.encoding import Converter, LocaleContext, is_all_ascii

logger = logging.getLogger(__name__)


class Dictionary:
    """
    The main and only interface to ``hunaffix`` as a library.

    Usage::

        from hunaffix import Dictionary

        # from folder where en_US.aff and en_US.dic are present
        dictionary = Dictionary.from_files('/path/to/dictionary/en_US')
        # or, from any binary streams
        dictionary = Dictionary.from_streams(open('en_US.aff', 'rb'), open('en_US.dic', 'rb'))

        print(dictionary.lookup('cats'))
        # True
        print(dictionary.lookup(b'\\xea\\xee\\xf2\\xfb', encoding='cp1251'))
        # ...depends on dictionary
        print(dictionary.stems('cats'))
        # ['cat']

    Internal algorithm implementation :attr:`lookuper` is exposed in order to allow experimenting
    with the implementation::

        # Produce all ways this word might be analysed by current dictionary
        for form in dictionary.lookuper.good_forms('reboots'):
            print(form)

        # AffixForm(reboots = Prefix(re: A×, on ^[.]) + boot + Suffix(s: S×, on [.]$))

    Dictionary is read-only after creation, and can be shared between threads.

    **Dictionary creation**

    .. automethod:: from_files
    .. automethod:: from_streams

    **Dictionary usage**

    .. automethod:: lookup
    .. automethod:: stems
    .. automethod:: affix_candidates

    **Data objects**

    .. autoattribute:: aff
    .. autoattribute:: dic
    .. autoattribute:: context

    **Algorithms**

    .. autoattribute:: lookuper
    """

    #: Contents of ``*.aff``
    aff: data.aff.Aff
    #: Contents of ``*.dic``
    dic: data.dic.Dic
    #: Encoding of the dictionary, used to decode ``bytes`` input, and casing rules (the same object
    #: as :attr:`Aff.casing <hunaffix.data.aff.Aff.casing>`). It is shared by all the lookups, so
    #: it shouldn't be switched with ``using()``/``neutral()`` while other threads do lookups.
    context: LocaleContext

    #: Instance of ``Lookup``, can be used for experimenting, see :mod:`algo.lookup <hunaffix.algo.lookup>`.
    lookuper: lookup.Lookup

    @classmethod
    def from_files(cls, path: str) -> Dictionary:
        """
        Read dictionary from pair of files ``/some/path/some_name.aff`` and ``/some/path/some_name.dic``.

        Args:
            path: Should be just ``/some/path/some_name``.

        Raises:
            AffError: if .aff file is malformed
        """

        with FileReader(path + '.aff') as source:
            aff, context = readers.read_aff(source)
        with FileReader(path + '.dic', encoding=context.encoding) as source:
            dic = readers.read_dic(source, aff=aff, context=context)

        return cls(aff, dic)

    @classmethod
    def from_streams(cls, aff: BinaryIO, dic: BinaryIO) -> Dictionary:
        """
        Read dictionary from two opened binary streams (files, ``io.BytesIO``, archive members...).
        Streams are not closed.

        Args:
            aff: Contents of ``*.aff`` file
            dic: Contents of ``*.dic`` file
        """

        aff_data, context = readers.read_aff(FileReader(aff))
        dic_data = readers.read_dic(FileReader(dic, encoding=context.encoding), aff=aff_data, context=context)

        return cls(aff_data, dic_data)

    def __init__(self, aff: data.aff.Aff, dic: data.dic.Dic):
        self.aff = aff
        self.dic = dic

        self.context = LocaleContext(aff.SET)
        # the same rules lookup uses
        self.context.casing = aff.casing
        self.lookuper = lookup.Lookup(self.aff, self.dic)

        logger.info('Dictionary loaded: %d words, %d prefixes, %d suffixes, %s',
                    len(dic), len(aff.prefixes), len(aff.suffixes), self.context.encoding)

    def lookup(self, word: Union[str, bytes], *, encoding: Optional[str] = None) -> bool:
        """
        Checks if the word is correct.

        ::

            >>> dictionary.lookup('cats')
            True
            >>> dictionary.lookup('catz')
            False

        Args:
            word: Word to check. If it is ``bytes``, it is decoded with dictionary's encoding, or
                  ``encoding`` if it is passed. Word that can't be decoded is just incorrect.
            encoding: Encoding of ``bytes`` word

        Raises:
            EncodingError: if ``encoding`` is unknown
        """

        text = self.decode(word, encoding)
        if text is None:
            return False

        return self.lookuper(text)

    def stems(self, word: Union[str, bytes], *, encoding: Optional[str] = None) -> List[str]:
        """
        Returns dictionary stems of all the correct forms of the word (converted with
        :attr:`OCONV <hunaffix.data.aff.Aff.OCONV>`), without repetitions.

        ::

            >>> dictionary.stems('cats')
            ['cat']
            >>> dictionary.stems('catz')
            []

        Args:
            word: Word to analyze, see :meth:`lookup`
            encoding: Encoding of ``bytes`` word
        """

        text = self.decode(word, encoding)
        if text is None:
            return []

        if not self.lookuper(text):
            return []

        text = self.lookuper.normalize(text)
        stems = (form.in_dictionary.stem for form in self.lookuper.good_forms(text))     # type: ignore
        return list(dict.fromkeys(self.aff.OCONV(stem) for stem in stems))

    def affix_candidates(self, word: str) -> Iterator[lookup.AffixForm]:
        """
        All the ways the word can be split into affixes and stem, according to affix tables only (the
        stem is not checked against the dictionary). See
        :meth:`Lookup.affix_candidates <hunaffix.algo.lookup.Lookup.affix_candidates>`.

        ::

            >>> [*dictionary.affix_candidates('cats')]
            [AffixForm(cats = cat + Suffix(s: S×, on [.]$))]
        """

        yield from self.lookuper.affix_candidates(word)

    def decode(self, word: Union[str, bytes], encoding: Optional[str] = None) -> Optional[str]:
        """
        Converts ``bytes`` input to ``str`` (``str`` is returned as is). Returns ``None`` if the
        input is not valid in its encoding.
        """

        if isinstance(word, str):
            return word

        # unknown encoding fails whatever the word is
        converter = Converter(encoding) if encoding else self.context.converter

        if is_all_ascii(word):
            return word.decode('ascii')

        ok, text = converter.try_to_wide(word)
        if not ok:
            logger.debug('Not valid %s: %r', converter.name, word)
            return None
        return text

    def __repr__(self):
        return f'Dictionary({self.dic!r}, {self.context!r})'
