"""
Flags are how ``*.aff`` and ``*.dic`` files connect stems with affixes: the stem ``cat/SM`` has flags
``S`` and ``M``, and the suffix table ``SFX S ...`` is filed under flag ``S``, so ``cats`` is a valid
word.

Whatever the flag format of the dictionary is (see :attr:`Aff.FLAG <hunaffix.data.aff.Aff.FLAG>`),
each flag is decoded on reading into one character with code point in 16-bit range, so the flags
of one stem can be stored as a short string.

.. autoclass:: FlagSet
    :members:
"""

from typing import Iterable, Iterator, Union


class FlagSet:
    """
    Set of flags, backed by a sorted string without duplicates::

        >>> flags = FlagSet('SMS')
        >>> flags
        FlagSet('MS')
        >>> 'S' in flags
        True
        >>> flags.insert('A')
        >>> [*flags]
        ['A', 'M', 'S']

    Flag sets of real dictionaries are tiny (most of the stems have less than 10 flags), so
    membership check is a linear scan of the string: it is faster than hashing for such sizes, and
    the check is done for every candidate form of every word.
    """

    __slots__ = ('flags',)

    def __init__(self, flags: Union[str, Iterable[str]] = ''):
        self.flags = ''.join(sorted(set(flags)))

    def insert(self, flags: Union[str, Iterable[str]]) -> None:
        """
        Add flags (any amount, including zero). Already present flags are ignored.
        """
        self.flags = ''.join(sorted(set(self.flags).union(flags)))

    def erase(self, flag: str) -> bool:
        """
        Remove the flag. Returns whether it was present.
        """
        if flag not in self:
            return False
        pos = self.flags.find(flag)
        self.flags = self.flags[:pos] + self.flags[pos+1:]
        return True

    def exists(self, flag: str) -> bool:
        return flag in self

    def count(self, flag: str) -> int:
        return 1 if flag in self else 0

    def union(self, other: Union['FlagSet', str, Iterable[str]]) -> 'FlagSet':
        if isinstance(other, FlagSet):
            other = other.flags
        result = FlagSet()
        result.flags = ''.join(sorted(set(self.flags).union(other)))
        return result

    def copy(self) -> 'FlagSet':
        result = FlagSet()
        result.flags = self.flags
        return result

    def __contains__(self, flag) -> bool:
        # None (directive not declared in aff) is never present; so are empty strings and substrings
        return isinstance(flag, str) and len(flag) == 1 and flag in self.flags

    def __iter__(self) -> Iterator[str]:
        return iter(self.flags)

    def __len__(self) -> int:
        return len(self.flags)

    def __bool__(self) -> bool:
        return bool(self.flags)

    def __eq__(self, other) -> bool:
        if isinstance(other, FlagSet):
            return self.flags == other.flags
        if isinstance(other, (set, frozenset)):
            return set(self.flags) == other
        return NotImplemented

    def __hash__(self):
        return hash(self.flags)

    def __repr__(self):
        return f'FlagSet({self.flags!r})'
