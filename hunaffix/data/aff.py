"""
The module represents data from Hunspell's ``*.aff`` file.

This text file has the following format:

.. code-block:: text

    # pseudo-comment
    DIRECTIVE_NAME value1 value2 value 3

    # directives with large array of values
    DIRECTIVE_NAME <num_of_values>
    DIRECTIVE_NAME value1_1 value1_2 value1_3
    DIRECTIVE_NAME value2_1 value2_2 value2_3
    # ...

How many values should be after ``DIRECTIVE_NAME``, is defined by directive itself. Values are separated
by any number of spaces.

    *Note:* We are saying "pseudo-comment" above, because it is just a convention. Hunspell has no
    code explicitly interpreting anything starting with ``#`` as a comment: it ignores everything
    that is not a known directive name, and everything after expected number of directive values.
    Some dictionaries define ``#`` to be a flag.

The :class:`Aff` class stores all data from the file that is relevant for affix analysis.

``Aff``
-------

.. autoclass:: Aff

Affixes
-------

.. autoclass:: AffixKind
.. autoclass:: Affix
    :members:
.. autoclass:: AffixTable
    :members:
.. autoclass:: Condition
    :members:

Helper classes
--------------

.. autoclass:: Ignore
.. autoclass:: SubstrReplacer
    :members:
"""

import logging
import itertools
from enum import Enum
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, Iterable, Iterator, List, Optional, Tuple, Union

from hunaffix.data.flags import FlagSet
from hunaffix.algo.capitalization import CasingRules, casing_rules

logger = logging.getLogger(__name__)


@dataclass
class Ignore:
    """
    Contents of the :attr:`Aff.IGNORE` directive, chars to ignore on lookup, compiled with
    ``str.maketrans``.
    """
    chars: str

    def __post_init__(self):
        self.tr = str.maketrans('', '', self.chars)


class SubstrReplacer:
    """
    Table of substring replacements, stored in :attr:`Aff.ICONV` and :attr:`Aff.OCONV`. Typically
    used for normalization of typographics (like "nice" apostrophes) or of precomposed/decomposed
    Unicode characters:

    .. code-block:: text

        ICONV <number of entries>
        ICONV <pattern> <replacement>

    Conversion rules are applied as follows:

    * for each position in word
    * ...find the rule with the longest pattern matching at this position
    * ...apply it, and shift to position after its pattern (so there can't be recursive application
      of several rules on top of each other)
    * ...or, if nothing matches, copy the char as is, and shift by one.

    If the table has several rules with the same pattern, the first one is used. Rules with empty
    pattern are dropped. Empty table changes nothing::

        >>> SubstrReplacer([('a', 'b')]).replace('aaa')
        'bbb'
        >>> SubstrReplacer([('ab', '1'), ('a', '2')]).replace('aab')
        '21'
    """

    def __init__(self, pairs: Iterable[Tuple[str, str]] = ()):
        self.table: Dict[str, str] = {}
        for pattern, replacement in pairs:
            if pattern:
                self.table.setdefault(pattern, replacement)

        # Longest first: at each position, only this many lookups are necessary
        self.lengths = sorted({len(pattern) for pattern in self.table}, reverse=True)

    @property
    def pairs(self) -> List[Tuple[str, str]]:
        return sorted(self.table.items())

    def replace(self, text: str) -> str:
        if not self.table:
            return text

        result = []
        pos = 0
        while pos < len(text):
            for length in self.lengths:
                replacement = self.table.get(text[pos:pos+length])
                if replacement is not None:
                    result.append(replacement)
                    pos += length
                    break
            else:
                result.append(text[pos])
                pos += 1

        return ''.join(result)

    __call__ = replace

    def __bool__(self):
        return bool(self.table)

    def __eq__(self, other):
        if not isinstance(other, SubstrReplacer):
            return NotImplemented
        return self.table == other.table

    def __repr__(self):
        return f'SubstrReplacer({self.pairs!r})'


class Condition:
    """
    Compiled affix condition. Condition syntax is a tiny subset of regexps:

    * ``.`` -- any char
    * ``[abc]`` -- one of chars
    * ``[^abc]`` -- any char except those
    * any other char matches itself (including ``-``, ``*``, ``(`` and other chars having special
      meaning in real regexps: dictionaries do use them as word chars).

    Condition ``[^aeiou]y`` means "two chars: not a vowel, and then y". For suffix it is checked at
    the end of the stem, for prefix at the beginning. Condition ``.`` (and empty one) always matches.

    It is checked for every affix candidate of every word, so instead of regexp it is compiled into
    a tuple of per-char checks.

    Args:
        pattern: Condition source text
    Raises:
        ValueError: if pattern has unclosed, empty or unbalanced brackets
    """

    #: Per-char check: ``None`` is "any char", string is "this char", and ``(chars, negated)``
    #: is a char class
    Atom = Union[None, str, Tuple[FrozenSet[str], bool]]

    def __init__(self, pattern: str):
        self.pattern = pattern
        # Lone "." is "no condition" (and not "at least one char")
        self.atoms: Tuple['Condition.Atom', ...] = () if pattern == '.' else tuple(self.parse(pattern))
        self.always = all(atom is None for atom in self.atoms)

    @staticmethod
    def parse(pattern: str) -> Iterator['Condition.Atom']:
        pos = 0
        while pos < len(pattern):
            char = pattern[pos]
            if char == '[':
                end = pattern.find(']', pos + 1)
                if end == -1:
                    raise ValueError(f'Unclosed "[" in condition {pattern!r}')
                chars = pattern[pos+1:end]
                negated = chars.startswith('^')
                if negated:
                    chars = chars[1:]
                if not chars:
                    raise ValueError(f'Empty character class in condition {pattern!r}')
                yield (frozenset(chars), negated)
                pos = end + 1
            elif char == ']':
                raise ValueError(f'Unbalanced "]" in condition {pattern!r}')
            else:
                yield None if char == '.' else char
                pos += 1

    def __len__(self):
        return len(self.atoms)

    def match_at(self, word: str, start: int) -> bool:
        for atom, char in zip(self.atoms, word[start:start+len(self.atoms)]):
            if atom is None:
                continue
            if isinstance(atom, str):
                if atom != char:
                    return False
            else:
                chars, negated = atom
                if (char in chars) == negated:
                    return False
        return True

    def match_prefix(self, word: str) -> bool:
        """
        Whether the beginning of the word matches.
        """
        if len(word) < len(self.atoms):
            return False
        return self.always or self.match_at(word, 0)

    def match_suffix(self, word: str) -> bool:
        """
        Whether the end of the word matches.
        """
        if len(word) < len(self.atoms):
            return False
        return self.always or self.match_at(word, len(word) - len(self.atoms))

    def __eq__(self, other):
        if not isinstance(other, Condition):
            return NotImplemented
        return self.atoms == other.atoms

    def __hash__(self):
        return hash(self.atoms)

    def __repr__(self):
        return f'Condition({self.pattern!r})'


class AffixKind(Enum):
    """
    Which end of the word the affix is attached to.
    """
    PREFIX = 'PFX'
    SUFFIX = 'SFX'


@dataclass(frozen=True)
class Affix:
    """
    One affix rule (prefix or suffix, distinguished by :attr:`kind`).

    Affixes are stored in table looking this way:

    .. code-block:: text

        SFX X Y 1
        SFX X   0 able/CD . ds:able

    Meaning of the first line (table header):

    * Suffix (can be ``PFX`` for prefix)
    * ...designated by flag ``X``
    * ...supports cross-product (Y or N, "cross-product" means form with this suffix also allowed to
      have prefixes)
    * ...and there is 1 of them below

    Meaning of the table row:

    * Suffix X (should be same as table header)
    * ...when applies, doesn't change the stem (0 = "", but it can be "...removes some part at the end of the stem")
    * ...when applies, adds "able" to the stem
    * ...and the whole form will have also flags "C", "D"
    * ...condition of application is "any stem" (``.``)
    * ...and the whole form would have data tags (morphology) ``ds:able``, which are ignored

    Then, if in the dictionary we have ``drink/X`` (can have the suffix marked by ``X``), the whole
    thing means "'drinkable' is a valid word form, has additional flags 'C', 'D'".

    Another example (from ``en_US.aff``):

    .. code-block:: text

        SFX N Y 3
        SFX N   e     ion        e
        SFX N   y     ication    y
        SFX N   0     en         [^ey]

    * removes "e" and adds "ion" for words ending with "e" (animate => animation)
    * removes "y" and adds "ication" for words ending with "y" (amplify => amplification)
    * removes nothing and adds "en" for words ending with neither (befall => befallen)

    Affixes are created once, when ``*.aff`` is read, and never change.
    """

    kind: AffixKind
    #: Flag this affix marked with. Several affixes can have same flag (and in this case,
    #: which of them is relevant for the word, is decided by its :attr:`condition`)
    flag: str
    #: Whether this affix is compatible with opposite affix (e.g. if the word has both suffix and prefix,
    #: both of them should have ``crossproduct=True``)
    crossproduct: bool
    #: What is stripped from the stem when the affix is applied
    strip: str
    #: What is added when the affix is applied
    add: str
    #: Condition against which stem should be checked to understand whether this affix is relevant
    condition: str = '.'
    #: Flags this affix has ("continuation flags"): the form with this affix behaves as if the stem
    #: had them too
    flags: FlagSet = field(default_factory=FlagSet)
    #: Compiled :attr:`condition`
    compiled: Condition = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # frozen dataclass: the only way to set derived attribute
        object.__setattr__(self, "compiled", Condition(self.condition))

    @classmethod
    def prefix(cls, flag: str, add: str, *, strip: str = '', condition: str = '.',
               crossproduct: bool = True, flags: Union[FlagSet, str] = '') -> 'Affix':
        return cls(AffixKind.PREFIX, flag, crossproduct, strip, add, condition, FlagSet(flags))

    @classmethod
    def suffix(cls, flag: str, add: str, *, strip: str = '', condition: str = '.',
               crossproduct: bool = True, flags: Union[FlagSet, str] = '') -> 'Affix':
        return cls(AffixKind.SUFFIX, flag, crossproduct, strip, add, condition, FlagSet(flags))

    @property
    def is_prefix(self) -> bool:
        return self.kind == AffixKind.PREFIX

    def attached_to(self, word: str) -> bool:
        """
        Whether the word looks like it has this affix (begins or ends with :attr:`add`).
        """
        return word.startswith(self.add) if self.is_prefix else word.endswith(self.add)

    def to_root(self, word: str) -> str:
        """
        Restore the stem from derived word: remove :attr:`add`, put back :attr:`strip`. The result
        is just a candidate: it should still pass :meth:`check_condition`.

        Raises:
            ValueError: if the word doesn't have the affix
        """
        if not self.attached_to(word):
            raise ValueError(f'{word!r} is not derived by {self!r}')
        if self.is_prefix:
            return self.strip + word[len(self.add):]
        return word[:len(word) - len(self.add)] + self.strip

    def to_derived(self, stem: str) -> str:
        """
        Apply the affix to the stem: remove :attr:`strip`, add :attr:`add`.

        Raises:
            ValueError: if the stem doesn't have part to strip
        """
        if self.is_prefix:
            if not stem.startswith(self.strip):
                raise ValueError(f"{stem!r} doesn't start with {self.strip!r}")
            return self.add + stem[len(self.strip):]

        if not stem.endswith(self.strip):
            raise ValueError(f"{stem!r} doesn't end with {self.strip!r}")
        return stem[:len(stem) - len(self.strip)] + self.add

    def check_condition(self, stem: str) -> bool:
        """
        Whether the affix is applicable to the stem. Prefix conditions are checked at the beginning
        of the stem, suffix conditions at the end.
        """
        if self.is_prefix:
            return self.compiled.match_prefix(stem)
        return self.compiled.match_suffix(stem)

    def __repr__(self):
        flags = f"/{''.join(self.flags)}" if self.flags else ''
        cross = '×' if self.crossproduct else ''
        if self.is_prefix:
            return f'Prefix({self.add}: {self.flag}{cross}{flags}, on ^{self.strip}[{self.condition}])'
        return f'Suffix({self.add}: {self.flag}{cross}{flags}, on [{self.condition}]{self.strip}$)'


class AffixTable:
    """
    Index of affixes of one kind by the string they add. For a word, only those affixes are worth
    checking, which ``add`` is the beginning (for prefixes) or the ending (for suffixes) of the word,
    so instead of scanning all the affixes (some languages have thousands), :meth:`lookup` makes one
    dictionary lookup for every distinct length of ``add``::

        >>> table = AffixTable(AffixKind.SUFFIX, [
        ...     Affix.suffix('A', 's'),
        ...     Affix.suffix('B', 'ies', strip='y'),
        ... ])
        >>> table.equal_range('ies')
        (Suffix(ies: B×, on [.]y$),)
        >>> [*table.lookup('kitties')]
        [Suffix(s: A×, on [.]$), Suffix(ies: B×, on [.]y$)]

    Table is filled once (when ``*.aff`` is read), and is only read after that, so it can be shared
    by any number of threads.
    """

    def __init__(self, kind: AffixKind, affixes: Iterable[Affix] = ()):
        self.kind = kind
        self.table: Dict[str, List[Affix]] = {}
        self.lengths: List[int] = []
        for affix in affixes:
            self.insert(affix)

    def insert(self, affix: Affix) -> None:
        if affix.kind != self.kind:
            raise ValueError(f'{affix!r} inserted into {self.kind.name} table')
        self.table.setdefault(affix.add, []).append(affix)
        if len(affix.add) not in self.lengths:
            self.lengths.append(len(affix.add))
            self.lengths.sort()

    def equal_range(self, add: str) -> Tuple[Affix, ...]:
        """
        All the affixes with this exact ``add``.
        """
        return tuple(self.table.get(add, ()))

    def lookup(self, word: str) -> Iterator[Affix]:
        """
        All the affixes that can be attached to the word (shortest ``add`` first).
        """
        for length in self.lengths:
            if length > len(word):
                return
            key = word[:length] if self.kind == AffixKind.PREFIX else word[len(word) - length:]
            yield from self.table.get(key, ())

    def __iter__(self) -> Iterator[Affix]:
        return itertools.chain.from_iterable(self.table.values())

    def __len__(self):
        return sum(len(affixes) for affixes in self.table.values())

    def __repr__(self):
        return f'AffixTable({self.kind.name}, {len(self)} affixes)'


@dataclass
class Aff:
    """
    The class contains all directives from .aff file relevant for affix analysis, in its attributes.

    Attribute **names** are exactly the same as directives they've read from
    (they are upper-case, which is un-Pythonic, but allows to unambiguously relate directives to attrs and
    grep them in code).

    Note that **all** directives are optional, empty .aff file is a valid one. Directives which are
    not described here (suggestion, compounding) are ignored on reading.

    **General**

    .. autoattribute:: SET
    .. autoattribute:: FLAG
    .. autoattribute:: LANG
    .. autoattribute:: IGNORE
    .. autoattribute:: CHECKSHARPS
    .. autoattribute:: FORBIDDENWORD
    .. autoattribute:: KEEPCASE

    **Affixes**

    .. autoattribute:: PFX
    .. autoattribute:: SFX
    .. autoattribute:: NEEDAFFIX
    .. autoattribute:: CIRCUMFIX
    .. autoattribute:: ONLYINCOMPOUND
    .. autoattribute:: COMPLEXPREFIXES
    .. autoattribute:: FULLSTRIP

    **Pre/post-processing**

    .. autoattribute:: ICONV
    .. autoattribute:: OCONV

    **Aliasing**

    .. autoattribute:: AF
    .. autoattribute:: AM

    **Derived attributes**

    This attributes are calculated after Aff reading and initialization

    .. py:attribute:: casing
        :type: hunaffix.algo.capitalization.CasingRules

        Language-specific casing rules, chosen by :attr:`LANG` and :attr:`CHECKSHARPS`.

    .. py:attribute:: prefixes
        :type: AffixTable

        All the prefixes from :attr:`PFX`, indexed by their ``add``.

    .. py:attribute:: suffixes
        :type: AffixTable

        All the suffixes from :attr:`SFX`, indexed by their ``add``.
    """

    #: .aff and .dic encoding.
    SET: str = 'ISO8859-1'

    #: Flag format: ``short`` (default, one char), ``long`` (two chars), ``num`` (numbers separated
    #: by ``,``), ``UTF-8`` (one UTF-8 char, and then the file also should be UTF-8). Whatever the
    #: format, flags are converted on reading into one-char strings, see :mod:`hunaffix.data.flags`.
    FLAG: str = 'short'

    #: ISO language code. The only codes that change behavior are codes of Turkic languages (which
    #: have different I/i capitalization logic) and Dutch ("ij" digraph).
    LANG: Optional[str] = None

    #: Stored, but not used (the library doesn't tokenize text)
    WORDCHARS: Optional[str] = None

    #: Stored, but not used (suggestions are not implemented)
    TRY: str = ''

    #: Stored, but not used (suggestions are not implemented)
    KEY: str = ''

    #: Characters to ignore in dictionary words, affixes and input words. Useful for optional
    #: characters, as Arabic (harakat) or Hebrew (niqqud) diacritical marks.
    IGNORE: Optional[Ignore] = None

    #: The language has German "sharp S" (ß): uppercase words with "ß" are allowed, and "SS" in
    #: uppercase words might be "ß" in the dictionary.
    CHECKSHARPS: bool = False

    #: Flag that marks word as forbidden: logically possible form (by affixing) which is in fact
    #: non-existent.
    FORBIDDENWORD: Optional[str] = None

    #: Flag to mark words which shouldn't be considered correct unless their casing is exactly like in
    #: the dictionary.
    KEEPCASE: Optional[str] = None

    #: Dictionary of ``flag => prefixes with this flag``. See :class:`Affix` for format.
    PFX: Dict[str, List[Affix]] = field(default_factory=dict)

    #: Dictionary of ``flag => suffixes with this flag``. See :class:`Affix` for format.
    SFX: Dict[str, List[Affix]] = field(default_factory=dict)

    #: Flag saying "this stem can't be used without affixes". Can be also assigned to suffix/prefix,
    #: meaning "there should be other affixes besides this one".
    NEEDAFFIX: Optional[str] = None

    #: Suffixes signed with this flag may be on a word when this word also has a prefix with
    #: this flag, and vice versa.
    CIRCUMFIX: Optional[str] = None

    #: Forms with this flag can only be part of the compound word, and never standalone (and as
    #: compounding is not implemented, they are never correct).
    ONLYINCOMPOUND: Optional[str] = None

    #: If two prefixes stripping is allowed (only one prefix by default).
    COMPLEXPREFIXES: bool = False

    #: If affixes are allowed to remove entire stem.
    FULLSTRIP: bool = False

    #: Input conversion table (what to do with word before checking if it is valid).
    ICONV: SubstrReplacer = field(default_factory=SubstrReplacer)

    #: Output conversion table (what to do with stems before returning them to the user).
    OCONV: SubstrReplacer = field(default_factory=SubstrReplacer)

    #: Table of flag set aliases. Defined in .aff-file this way:
    #:
    #: .. code-block:: text
    #:
    #:    AF 3
    #:    AF ABC
    #:    AF BCD
    #:    AF DE
    #:
    #: This means set of flags "ABC" has an alias "1", "BCD" alias "2", "DE" alias "3". Now, in
    #: .dic-file, ``foo/1`` would be equivalent of ``foo/ABC``.
    AF: Dict[str, FlagSet] = field(default_factory=dict)

    #: Table of word data aliases. Logic of aliasing is the same as for :attr:`AF`.
    AM: Dict[str, List[str]] = field(default_factory=dict)

    def __post_init__(self):
        self.prefixes = AffixTable(AffixKind.PREFIX, itertools.chain.from_iterable(self.PFX.values()))
        self.suffixes = AffixTable(AffixKind.SUFFIX, itertools.chain.from_iterable(self.SFX.values()))

        self.casing: CasingRules = casing_rules(self.LANG, self.CHECKSHARPS)

        logger.debug('Affix tables: %r, %r; casing: %s',
                     self.prefixes, self.suffixes, type(self.casing).__name__)
