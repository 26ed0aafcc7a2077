"""
The module represents data from Hunspell's ``*.dic`` file.

This text file has the following format:

.. code-block:: text

    124 # first line: number of entries

    # Each entry has form:

    cat/ABC po:noun

See :class:`Word` for explanation about fields.

The meaning of flags, as well as file encoding and other reading settings, are defined
by :class:`Aff <hunaffix.data.aff.Aff>`.

``Dic`` is read by :meth:`read_dic <hunaffix.readers.dic.read_dic>`.

.. autoclass:: Dic

.. autoclass:: Word
"""

from collections import defaultdict
from dataclasses import dataclass, field
from typing import List, Dict

from hunaffix.data.flags import FlagSet
from hunaffix.algo.capitalization import Casing


@dataclass
class Word:
    """
    One word (stem) of a .dic file.

    Each entry in the source contains something like:

    .. code-block:: text

        foo/ABC po:noun is:plural

    Where ``foo`` is the stem itself, ``ABC`` is word flags (flags meaning and format is defined by
    ``*.aff`` file), and ``po:noun is:plural`` are additional data tags. Both flags and tags can be
    absent, and both can be numeric aliases defined in .aff file (see
    :attr:`Aff.AF <hunaffix.data.aff.Aff.AF>` and :attr:`Aff.AM <hunaffix.data.aff.Aff.AM>`).
    """

    #: Word stem
    stem: str
    #: Flags of the word
    flags: FlagSet
    #: Raw values of data tags, like ``{'po': ['noun']}``
    data: Dict[str, List[str]] = field(default_factory=dict)
    #: Casing of the stem, calculated on reading
    captype: Casing = Casing.SMALL

    def __repr__(self):
        return f"Word({self.stem} /{''.join(self.flags)})"


@dataclass
class Dic:
    """
    Represents list of words from ``*.dic`` file.

    There could be (and typically are) several entries in the dictionary with same stems
    but different flags, that's why index values are lists of words. For example,
    in English dictionary "spell" (verb) and "spell" (noun) may be different entries, defining
    different sets of suffixes.

    .. automethod:: homonyms
    .. automethod:: has_flag
    .. automethod:: append
    """

    #: List of all words from ``*.dic`` file
    words: List[Word] = field(default_factory=list)

    def __post_init__(self):
        self.index: Dict[str, List[Word]] = defaultdict(list)
        self.lowercase_index: Dict[str, List[Word]] = defaultdict(list)

    def homonyms(self, stem: str, *, ignorecase: bool = False) -> List[Word]:
        """
        Returns all :class:`Word` instances with the same stem.

        Args:
            stem: Stem to search
            ignorecase: If passed, the stems are searched in the lowercased index (and the ``stem``
                        itself assumed to be lowercased). Used by lookup to find a correspondence
                        for uppercased word, if the stem has complex capitalization (find "McDonalds"
                        by "MCDONALDS")
        """
        if ignorecase:
            return self.lowercase_index.get(stem, [])
        return self.index.get(stem, [])

    def has_flag(self, stem: str, flag: str, *, for_all: bool = False) -> bool:
        """
        If any/all of the homonyms have specified flag.

        Args:
            stem: Stem present in dictionary
            flag: Flag to test
            for_all: If ``True``, checks if **all** homonyms have this flag, if ``False``, checks if
                     at least one.
        """
        homonyms = self.homonyms(stem)
        if not homonyms:
            return False
        if for_all:
            return all(flag in homonym.flags for homonym in homonyms)
        return any(flag in homonym.flags for homonym in homonyms)

    def append(self, word: Word, *, lower: List[str]):
        """
        Used by :meth:`read_dic <hunaffix.readers.dic.read_dic>` to put the word into the dictionary.

        Args:
            word: The word instance, already pre-populated
            lower: All the lowercase forms of word stem (German may have several)
        """
        self.words.append(word)
        self.index[word.stem].append(word)
        for lword in lower:
            self.lowercase_index[lword].append(word)

    def __len__(self):
        return len(self.words)

    def __repr__(self):
        return f'Dic(... {len(self.words)} words ...)'
