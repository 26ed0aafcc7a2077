"""
The main "is this word correct?" algorithm implementation.

On a bird-eye view level:

* word correctness check is implemented as an attempt to analyze word form
  (maybe it has this suffix? maybe it has this prefix? maybe both?)
* the word considered correct if at least one such form found, that
  it has valid suffixes/prefixes from .aff file and valid stem from .dic file, and they all compatible
  with each other.

Analysis is split in two parts: :meth:`Lookup.affix_candidates` knows only the affix tables and produces
all the ways the word *could* be split into stem and affixes, and the rest of :class:`Lookup`
checks those candidates against the dictionary.

To follow algorithm details, start reading from :meth:`Lookup.__call__`

.. autoclass:: Lookup

.. autoclass:: AffixForm
    :members:
"""

import dataclasses
from dataclasses import dataclass
from typing import Iterator, List, Optional, Sequence

from hunaffix.data import aff as affdata, dic as dicdata
from hunaffix.data.flags import FlagSet
from hunaffix.algo.capitalization import Casing
from hunaffix.algo.encoding import is_number


@dataclass
class AffixForm:
    """
    AffixForm is a hypothesis of how some word might be split into stem, suffixes and prefixes.
    It always has full text and stem, and may have up to two suffixes, and up to two prefixes.
    (Affix form without any affix is also valid.)

    The following is always true (if we consider absent affixes just empty string)::

        prefix2 + prefix + stem + suffix + suffix2 = text

    ``prefix``/``suffix`` are the ones attached to the stem, ``prefix2``/``suffix2`` are "secondary"
    (outer) ones, so if the word has only one suffix, it is stored in ``suffix`` and ``suffix2`` is
    ``None``.

    If the word form's stem is found is dictionary ``in_dictionary`` attribute is present (though it
    does not imply that dictionary word is compatible with suffixes and prefixes).
    """

    text: str

    stem: str

    prefix: Optional[affdata.Affix] = None
    suffix: Optional[affdata.Affix] = None
    prefix2: Optional[affdata.Affix] = None
    suffix2: Optional[affdata.Affix] = None

    in_dictionary: Optional[dicdata.Word] = None

    def replace(self, **changes):
        return dataclasses.replace(self, **changes)

    def has_affixes(self):
        return self.suffix or self.prefix

    def is_base(self):
        return not self.has_affixes()

    def all_affixes(self) -> List[affdata.Affix]:
        return [*filter(None, [self.prefix2, self.prefix, self.suffix, self.suffix2])]

    def affix_flags(self) -> FlagSet:
        """
        Flags granted by the affixes themselves ("continuation flags").
        """
        result = FlagSet()
        for affix in self.all_affixes():
            result.insert(affix.flags)
        return result

    def flags(self) -> FlagSet:
        """
        All the flags of the form: the stem's (if found in dictionary), plus flags of the affixes.
        """
        flags = self.affix_flags()
        if self.in_dictionary:
            flags.insert(self.in_dictionary.flags)
        return flags

    def required_flags(self) -> FlagSet:
        """
        Flags the dictionary stem should have for this form to be valid: flags of affixes attached
        to the stem, except those granted by the opposite affix (prefix allowing some suffix, or
        vice versa). Affix never grants its own flag. Secondary affixes are not here: their flags
        are required from the primary affixes at the moment the form is produced.
        """
        result = FlagSet()
        if self.prefix and not (self.suffix and self.prefix.flag in self.suffix.flags):
            result.insert(self.prefix.flag)
        if self.suffix and not (self.prefix and self.suffix.flag in self.prefix.flags):
            result.insert(self.suffix.flag)
        return result

    def __repr__(self):
        if self.is_base():
            return f'AffixForm({self.text})'

        result = f'AffixForm({self.text} = '
        if self.prefix2:
            result += f'{self.prefix2!r} + '
        if self.prefix:
            result += f'{self.prefix!r} + '
        result += self.stem
        if self.suffix:
            result += f' + {self.suffix!r}'
        if self.suffix2:
            result += f' + {self.suffix2!r}'
        result += ')'
        return result


class Lookup:
    """
    ``Lookup`` object is created on :class:`Dictionary <hunaffix.dictionary.Dictionary>` reading. Typically,
    you would not use it directly, but you might want for experiments::

        >>> dictionary = Dictionary.from_files('tests/fixtures/base')
        >>> lookup = dictionary.lookuper

        >>> lookup('cats')
        True

        >>> for form in lookup.good_forms('cats'):
        ...     print(form)
        AffixForm(cats = cat + Suffix(s: S×, on [.]$))

    See :meth:`__call__` as the main entry point for algorithm explanation.

    **Main methods**

    .. automethod:: __call__
    .. automethod:: good_forms

    **Affixes**

    .. automethod:: affix_candidates
    .. automethod:: desuffix
    .. automethod:: deprefix
    .. automethod:: affix_forms
    .. automethod:: is_good_form
    """

    def __init__(self, aff: affdata.Aff, dic: dicdata.Dic):
        self.aff = aff
        self.dic = dic

    def __call__(self, word: str, *, capitalization: bool = True) -> bool:
        """
        The outermost word correctness check.

        Basically, prepares word for check (converting/removing chars), and then checks whether
        any good word form can be produced with :meth:`good_forms`.

        Args:
            word: Word to check
            capitalization: if ``False``, check ONLY exactly this capitalization
        """

        word = self.normalize(word)

        # Numbers are allowed and considered "good word" always
        if is_number(word):
            return True

        # If there are entries in the dictionary matching the entire word, and all of those entries
        # are marked with "forbidden" flag, this word can't be considered correct.
        if self.aff.FORBIDDENWORD and self.dic.has_flag(word, self.aff.FORBIDDENWORD, for_all=True):
            return False

        return any(self.good_forms(word, capitalization=capitalization))

    def normalize(self, word: str) -> str:
        """
        Prepares the word for lookup, the same way dictionary words were prepared on reading.
        """

        # Convert word before lookup with ICONV table: usually, it is normalization of apostrophes,
        # UTF chars with diacritics (which might have several different forms), and such.
        word = self.aff.ICONV(word)

        # Remove characters that should be ignored (for example, in Arabic and Hebrew, vowels should
        # be removed before spellchecking)
        if self.aff.IGNORE:
            word = word.translate(self.aff.IGNORE.tr)

        return word

    def good_forms(self, word: str, *, capitalization: bool = True) -> Iterator[AffixForm]:
        """
        The main producer of correct word forms (e.g. ways the proposed string might correspond to our
        dictionary/affixes). If there is at least one, the word is correctly spelled. There could be
        many correct forms for one spelling.

        The method returns generator (forms are produced lazy), so it doesn't have performance
        overhead when just needs to check "any correct form exists".

        Internally:

        * decides all word's possible casings ("KITTEN" -> "KITTEN", "kitten", "Kitten")
        * for each of them, tries to find good affixed forms with :meth:`affix_forms`

        Args:
            word: Word to check
            capitalization: if ``False``, produces forms with ONLY exactly this capitalization
        """

        if capitalization:
            # For example, if we pass "Cat", the ``captype`` would be ``INIT_CAPITAL``, and variants
            # ``["Cat", "cat"]``, the latter would be found in dictionary. If we pass "Paris", variants
            # are ``["Paris", "paris"]``, and the *first* one is found in the dictionary; that's why
            # we need to check all variants.
            captype, variants = self.aff.casing.variants(word)
        else:
            captype = self.aff.casing.guess(word)
            variants = [word]

        for variant in variants:
            for form in self.affix_forms(variant, captype=captype):
                # Special clause for German: "ß" is allowed to stay in uppercased words (STRAßE), but
                # if the word in dictionary is marked with "KEEPCASE", only "STRASSE" is allowed.
                if (self.aff.CHECKSHARPS and self.aff.KEEPCASE and        # pylint: disable=too-many-boolean-expressions
                        'ß' in form.in_dictionary.stem and self.aff.KEEPCASE in form.flags() and   # type: ignore
                        captype == Casing.ALL_CAPITAL and 'ß' in word):
                    continue

                yield form

    def affix_forms(self, word: str, captype: Casing) -> Iterator[AffixForm]:
        """
        Produces correct affix forms of the given words, e.g. all ways in which it can be split into
        stem+affixes, such that the stem would be present in the dictionary, and stem and all affixes
        would be compatible with each other.

            >>> [*lookuper.affix_forms('reboots', captype=Casing.SMALL)]
            [AffixForm(reboots = Prefix(re: A×, on ^[.]) + boot + Suffix(s: S×, on [.]$))]

        Args:
            word: the word to produce forms for
            captype: capitalization of the original word (which may differ from ``word``'s, if it
                     is a lowercased variant)
        """

        # "Whole word" is always existing option. Note that it might later be rejected in is_good_form
        # if this stem has flag NEEDAFFIX.
        forms = [AffixForm(text=word, stem=word), *self.affix_candidates(word)]

        for form in forms:
            found = False

            # There might be several entries for the stem in the dictionary, all with different
            # flags (for example, "spell" as a noun, and "spell" as a verb)
            homonyms = self.dic.homonyms(form.stem)

            # If one of the many homonyms has FORBIDDENWORD flag (and others do not),
            # then the word with this stem can't have affixes, but still is allowed to exist
            # without them.
            if (self.aff.FORBIDDENWORD and form.has_affixes() and
                    any(self.aff.FORBIDDENWORD in homonym.flags for homonym in homonyms)):
                continue

            for homonym in homonyms:
                candidate = form.replace(in_dictionary=homonym)
                if self.is_good_form(candidate, captype=captype):
                    found = True
                    yield candidate

            if found or captype != Casing.ALL_CAPITAL:
                continue

            # One final check should be done by scanning through dictionary in case-insensitive manner
            # if the source word was ALL CAPS: In this case, we might miss cases like
            # "OPENOFFICE.ORG" (in dictionary it is OpenOffice.org, so no forms guessed by casing would
            # match it). Lowercase index is checked only for the lowercased variant.
            if self.aff.casing.guess(word) == Casing.SMALL:
                for homonym in self.dic.homonyms(form.stem, ignorecase=True):
                    candidate = form.replace(in_dictionary=homonym)
                    if self.is_good_form(candidate, captype=captype):
                        yield candidate

    def affix_candidates(self, word: str) -> Iterator[AffixForm]:
        """
        Produces all possible (not necessarily correct) affix forms: e.g. for all known suffixes &
        prefixes, if it looks like they are in this word, produce forms ``(prefix + stem + suffix)``.
        Dictionary is not consulted: the caller should check that stem exists and has
        :meth:`AffixForm.required_flags`. The word itself (no affixes) is not produced.

            >>> [*lookuper.affix_candidates('cats')]
            [AffixForm(cats = cat + Suffix(s: S×, on [.]$))]
            >>> [*lookuper.affix_candidates('cat')]
            []

        Internally, calls :meth:`deprefix` and :meth:`desuffix` to chop off suffixes and prefixes.
        """

        # All forms with suffix split out...
        yield from self.desuffix(word)

        # ...and all forms with prefix split out...
        for form in self.deprefix(word):
            yield form

            # ...and, IF this prefix allowed to be combined with suffixes, also with prefix
            # AND suffix split out
            if form.prefix and form.prefix.crossproduct:
                yield from (
                    form2.replace(text=form.text, prefix=form.prefix, prefix2=form.prefix2)
                    for form2 in self.desuffix(form.stem, crossproduct=True)
                )

    def desuffix(self, word: str,
                 required_flags: Sequence[str] = (),
                 nested: bool = False,
                 crossproduct: bool = False) -> Iterator[AffixForm]:
        """
        For given word, produces :class:`AffixForm` with suffix(es) split of the stem.

        Args:
            word: word to chop suffixes of
            required_flags: flags that suffix **should** have (used to chop second suffix: the
                            one closer to stem should allow the outer one)
            nested: used when the function is called recursively: up to two suffixes are chopped
            crossproduct: used when trying to chop the suffix of already deprefixed form, in this
                          case the suffix should have "cross-production allowed" mark.
        """

        for suffix in self.aff.suffixes.lookup(word):
            if crossproduct and not suffix.crossproduct:
                continue
            if not all(flag in suffix.flags for flag in required_flags):
                continue
            # Suffix can't remove the whole word, unless FULLSTRIP says so
            if len(word) == len(suffix.add) and not self.aff.FULLSTRIP:
                continue

            # stem is produced by removing the suffix, and, optionally, adding the part of the
            # stem (named ``strip``). For example, suffix might be declared as ``(strip=y, add=ier)``,
            # then to restore the original stem from word "prettier" we must remove "ier" and add back "y"
            stem = suffix.to_root(word)
            if not suffix.check_condition(stem):
                continue

            yield AffixForm(word, stem, suffix=suffix)

            # Try to remove one more suffix, only one level depth
            if not nested:
                for form2 in self.desuffix(stem,
                                           required_flags=[suffix.flag],
                                           nested=True,
                                           crossproduct=crossproduct):
                    yield form2.replace(suffix2=suffix, text=word)

    def deprefix(self, word: str,
                 required_flags: Sequence[str] = (),
                 nested: bool = False) -> Iterator[AffixForm]:
        """
        Everything is the same as for :meth:`desuffix`.
        The method doesn't need ``crossproduct: bool`` setting because in :meth:`affix_candidates`
        prefixes are chopped first, and then if they allow cross-production, desuffix is called with
        ``crossproduct=True``
        """

        for prefix in self.aff.prefixes.lookup(word):
            if not all(flag in prefix.flags for flag in required_flags):
                continue
            if len(word) == len(prefix.add) and not self.aff.FULLSTRIP:
                continue

            stem = prefix.to_root(word)
            if not prefix.check_condition(stem):
                continue

            yield AffixForm(word, stem, prefix=prefix)

            # Second prefix is tried *only* when there is the setting ``COMPLEXPREFIXES`` in
            # aff-file, which is quite rare.
            if not nested and self.aff.COMPLEXPREFIXES:
                for form2 in self.deprefix(stem,
                                           required_flags=[prefix.flag],
                                           nested=True):
                    yield form2.replace(prefix2=prefix, text=word)

    def is_good_form(self, form: AffixForm, captype: Casing) -> bool:
        """
        Decides whether the affix form is allowed, by checking compatibility of its components' flags
        (this stem in its flags list, has flags for this suffix and this prefix) and various other
        conditions.

        Args:
            form: Form to filter
            captype: original capitalization type of the checked word
        """

        aff = self.aff

        if not form.in_dictionary:
            return False

        root_flags = form.in_dictionary.flags
        all_flags = form.flags()

        # If word is marked with KEEPCASE, it is considered correct ONLY when spelled exactly that
        # way.
        if captype != form.in_dictionary.captype and aff.KEEPCASE in root_flags:
            # but if this is German (with CHECKSHARPS flag), and word has "sharp s", the meaning
            # of KEEPCASE flag is different: "disallow leaving ß in uppercased word, always require
            # SS, but all casing forms are possible"
            if not (aff.CHECKSHARPS and 'ß' in form.in_dictionary.stem):
                return False

        # The NEEDAFFIX flag must mark two cases:
        if aff.NEEDAFFIX:
            # "This stem is incorrect without affixes" (and no affixes provided)
            if aff.NEEDAFFIX in root_flags and not form.has_affixes():
                return False
            # "All affixes require additional affixes" (usually, it is one suffix, which is "infix" --
            # should have another suffix after it).
            if form.has_affixes() and all(aff.NEEDAFFIX in a.flags for a in form.all_affixes()):
                return False

        # Prefix and suffix might be allowed by: a) stem having their flags or b) the opposite affix
        # having it
        if not all(flag in root_flags for flag in form.required_flags()):
            return False

        # CIRCUMFIX flag, if present, used to mark suffix and prefix that should go together: if
        # one of them present and has it, another one should too.
        if aff.CIRCUMFIX:
            suffix_has = form.suffix and aff.CIRCUMFIX in form.suffix.flags
            prefix_has = form.prefix and aff.CIRCUMFIX in form.prefix.flags
            if bool(prefix_has) != bool(suffix_has):
                return False

        # Compounding is not supported, so "only allowed inside compounds" is never allowed
        return aff.ONLYINCOMPOUND not in all_flags
