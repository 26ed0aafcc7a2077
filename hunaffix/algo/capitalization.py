"""
.. autoclass:: Casing

.. autofunction:: classify_casing
.. autofunction:: has_uppercase_at_compound_word_boundary

.. autoclass:: CasingRules
    :members:

.. autoclass:: TurkicCasingRules
.. autoclass:: DutchCasingRules
.. autoclass:: GermanCasingRules

.. autofunction:: casing_rules
"""

from enum import Enum
from typing import Tuple, List, Optional


Casing = Enum('Casing', 'SMALL INIT_CAPITAL ALL_CAPITAL CAMEL PASCAL')
"""
Casing shape of the word, detected by :func:`classify_casing`. Characters without case (digits,
punctuation, CJK...) are neutral and don't affect the result.

* ``SMALL``: all lowercase or neutral ("foo", "123")
* ``INIT_CAPITAL``: only the first letter is capitalized ("Foo")
* ``ALL_CAPITAL``: all uppercase ("FOO", "ALL4ONE")
* ``CAMEL``: mixed capitalization, first letter is small ("fooBar")
* ``PASCAL``: mixed capitalization, first letter is capitalized ("FooBar")
"""


def classify_casing(word: str) -> Casing:
    """
    Classify casing of the word::

        >>> classify_casing('hello'), classify_casing('Hello'), classify_casing('HELLO')
        (<Casing.SMALL: 1>, <Casing.INIT_CAPITAL: 2>, <Casing.ALL_CAPITAL: 3>)
        >>> classify_casing('helloWorld'), classify_casing('HelloWorld')
        (<Casing.CAMEL: 4>, <Casing.PASCAL: 5>)
    """

    upper = 0
    lower = 0
    for char in word:
        if char.isupper():
            upper += 1
        elif char.islower():
            lower += 1

    if upper == 0:
        return Casing.SMALL
    if lower == 0:
        return Casing.ALL_CAPITAL
    if word[0].isupper():
        return Casing.INIT_CAPITAL if upper == 1 else Casing.PASCAL
    return Casing.CAMEL


def has_uppercase_at_compound_word_boundary(word: str, i: int) -> bool:
    """
    Whether the position ``i`` of ``word`` (boundary between ``word[:i]`` and ``word[i:]`` parts of
    the compound) has uppercase letter on either side of it, with a letter on the other side. Used
    to forbid compounds like "fooBar" when dictionary has "foo" and "bar" (Hunspell's
    ``CHECKCOMPOUNDCASE``).

    Args:
        word: the whole compound
        i: index of the first character of the second part
    """

    if i <= 0 or i >= len(word):
        return False

    left = word[i - 1]
    right = word[i]
    if right.isupper():
        return left.isalpha()
    if left.isupper():
        return right.isalpha()
    return False


class CasingRules:
    """
    Represents casing-related algorithms specific for dictionary's language. Python's ``str.upper()``
    and ``str.lower()`` implement language-neutral Unicode rules, so the language-specific
    exceptions are implemented by subclasses which redefine only what is different.

    All the methods are pure functions of the text, so one instance can be shared by any number of
    dictionaries and threads.
    """

    def guess(self, word: str) -> Casing:
        """
        Guess word's capitalization. Redefined in :class:`GermanCasingRules`.
        """
        return classify_casing(word)

    def upper(self, word: str) -> str:     # pylint: disable=no-self-use
        return word.upper()

    def lower(self, word: str) -> str:     # pylint: disable=no-self-use
        # turkic "dotted I", when lowercased in non-Turkic language, produces "i" + combining dot
        return word.lower().replace('i̇', 'i')

    def title(self, word: str) -> str:
        """
        First letter to titlecase, the rest to lowercase.
        """
        if not word:
            return word
        return self.title_char(word[0]) + self.lower(word[1:])

    def title_char(self, char: str) -> str:     # pylint: disable=no-self-use
        # ``str.title`` and not ``str.upper``: digraphs like "ǆ" have separate titlecase form "ǅ"
        return char.title()

    def lower_char_at(self, word: str, i: int) -> str:
        """
        Lowercase only the character at index ``i``.
        """
        return word[:i] + self.lower(word[i]) + word[i+1:]

    def title_char_at(self, word: str, i: int) -> str:
        """
        Titlecase only the character at index ``i``.
        """
        return word[:i] + self.title_char(word[i]) + word[i+1:]

    def lower_variants(self, word: str) -> List[str]:
        """
        All possible lowercasings of the word. It is a list for all the casing classes to behave
        consistently: in :class:`GermanCasingRules` (and only there), lowercasing word like
        "STRASSE" produces two possibilities.
        """
        return [self.lower(word)]

    def variants(self, word: str) -> Tuple[Casing, List[str]]:
        """
        Returns hypotheses of how the word might have been cased (in dictionary), if we consider it is
        spelled correctly. E.g., if the word is "Kitten", hypotheses are "Kitten", "kitten".

        Args:
            word:
        """
        casing = self.guess(word)

        if casing in (Casing.SMALL, Casing.CAMEL):
            result = [word]
        elif casing == Casing.INIT_CAPITAL:
            result = [word, *self.lower_variants(word)]
        elif casing == Casing.PASCAL:
            result = [word, self.lower_char_at(word, 0)]
        else:
            result = [word, *self.lower_variants(word), self.title(word)]

        # Some of the hypotheses may coincide ("İ" in non-Turkic dictionary)
        return (casing, list(dict.fromkeys(result)))


class TurkicCasingRules(CasingRules):
    """
    In Turkic languages lowercase "i" is uppercased as "İ", and uppercase "I" is downcased as "ı"::

        >>> turkic = TurkicCasingRules()
        >>> turkic.lower('Izmir')
        'ızmir'
        >>> turkic.upper('Izmir')
        'IZMİR'
    """

    U2L = str.maketrans('İI', 'iı')
    L2U = str.maketrans('iı', 'İI')

    def lower(self, word):
        return super().lower(word.translate(self.U2L))

    def upper(self, word):
        return super().upper(word.translate(self.L2U))

    def title_char(self, char):
        return super().title_char(char.translate(self.L2U))


class DutchCasingRules(CasingRules):
    """
    In Dutch, the digraph "ij" at the beginning of the word is titlecased as a whole: "ijs" => "IJs".
    """

    def title(self, word):
        if word[:2].lower() == 'ij':
            return 'IJ' + self.lower(word[2:])
        return super().title(word)

    def title_char_at(self, word, i):
        if word[i:i+2] == 'ij':
            return word[:i] + 'IJ' + word[i+2:]
        return super().title_char_at(word, i)


class GermanCasingRules(CasingRules):
    """
    In German "SS" can be lowercased both as "ss" and "ß"::

        >>> german = GermanCasingRules()
        >>> german.lower_variants('STRASSE')
        ['straße', 'strasse']

    Also, "ß" is allowed to stay lowercase in uppercased words ("STRAßE" is ``ALL_CAPITAL``).
    Used when ``.aff`` file has :attr:`CHECKSHARPS <hunaffix.data.aff.Aff.CHECKSHARPS>`.
    """

    def lower_variants(self, word):
        def sharp_s_variants(text, start=0):
            pos = text.find('ss', start)
            if pos == -1:
                return []
            replaced = text[:pos] + 'ß' + text[pos+2:]
            return [replaced, *sharp_s_variants(replaced, pos+1), *sharp_s_variants(text, pos+2)]

        lowered = self.lower(word)

        if 'SS' in word:
            return [*sharp_s_variants(lowered), lowered]

        return [lowered]

    def guess(self, word):
        result = super().guess(word)

        if 'ß' in word and super().guess(word.replace('ß', '')) == Casing.ALL_CAPITAL:
            return Casing.ALL_CAPITAL
        return result


TURKIC_LANGS = ('tr', 'az', 'crh')


def casing_rules(lang: Optional[str], checksharps: bool = False) -> CasingRules:
    """
    Choose casing rules by ``.aff`` file's ``LANG`` and ``CHECKSHARPS`` directives.

    Args:
        lang: language code, like ``tr_TR`` or ``nl``
        checksharps: whether German sharp s rules should be used
    """
    if checksharps:
        return GermanCasingRules()

    code = (lang or '').replace('-', '_').split('_')[0].lower()
    if code in TURKIC_LANGS:
        return TurkicCasingRules()
    if code == 'nl':
        return DutchCasingRules()
    return CasingRules()
