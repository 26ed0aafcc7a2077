import re
import logging
from collections import defaultdict

from typing import List, Dict, Optional

from hunaffix.data import dic
from hunaffix.data.aff import Aff
from hunaffix.algo.capitalization import Casing

from hunaffix.readers.file_reader import FileReader
from hunaffix.readers.aff import Context

logger = logging.getLogger(__name__)

COUNT_REGEXP = re.compile(r'^\d+(\s+|$)')   # should start with digits, but can have whatever further
SPACES_REGEXP = re.compile(r"\s+")
SLASH_REGEXP = re.compile(r'(?<!\\)/')
TAG_REGEXP = re.compile(r'[ \t]\w{2}:')


def read_dic(source: FileReader, *, aff: Aff, context: Context) -> dic.Dic:
    """
    Reads source and creates :class:`Dic <hunaffix.data.dic.Dic>` from it.

    Lines with flags that can't be parsed are skipped with a warning (the same way Hunspell
    does), as one bad entry of a huge dictionary shouldn't make the whole dictionary unusable.

    Args:
        source: "Reader" (thin wrapper around opened file, targeting line-by-line reading)
        aff: Contents of corresponding .aff file.
        context: Context created while reading .aff file and defining common reading settings:
                 encoding, format of flags and chars to ignore.
    """
    result = dic.Dic()
    expected: Optional[int] = None

    for i, (num, line) in enumerate(source):
        # first (non-empty) line is the number of entries
        if i == 0 and COUNT_REGEXP.match(line):
            expected = int(SPACES_REGEXP.split(line)[0])
            continue

        # Each line is ``<stem>/<flags> <data tags>``
        # Stem can have spaces, so the indication of "here the data tags start" is:
        # * either space character, followed by text in format "xy:something" (exactly two-letter tag, colon, data)
        # * or _tab_ (and exactly tab) character, and then some data

        tags_match = TAG_REGEXP.search(line)
        tags_start: Optional[int] = None
        if tags_match:
            tags_start = tags_match.start()

        old_tags_start = line.find("\t")
        if old_tags_start != -1 and (not tags_start or tags_start > old_tags_start):
            tags_start = old_tags_start

        if tags_start:
            word = line[:tags_start]
            data = parse_data(line[tags_start:], aff.AM)
        else:
            word = line
            data = {}

        # Now, the "word" part is "stem/flags". Flags are optional, and to complicate matters further:
        #
        # * if the word STARTS with "/" -- it is not empty stem + flags, but "word starting with /";
        # * if the "/" should be in stem, it can be screened by "\/"
        if word.startswith('/'):
            flags = ''
        else:
            word_with_flags = SLASH_REGEXP.split(word, 2)
            if len(word_with_flags) == 2:
                word, flags = word_with_flags
            else:
                flags = ''

        if r'\/' in word:
            word = word.replace(r'\/', '/')

        if context.ignore:
            word = word.translate(context.ignore.tr)

        try:
            parsed_flags = context.parse_flags(flags)
        except ValueError as e:
            logger.warning('%s:%d: entry skipped: %s', source.name, num, e)
            continue

        # And cache word's casing and its lowercase form
        captype = aff.casing.guess(word)
        lower = aff.casing.lower_variants(word) if captype != Casing.SMALL else [word]

        result.append(dic.Word(stem=word, flags=parsed_flags, data=data, captype=captype), lower=lower)

    if expected is not None and expected != len(result):
        logger.warning('%s: %d entries declared, %d read', source.name, expected, len(result))

    return result


def parse_data(text: str, aliases: Dict[str, List[str]]) -> Dict[str, List[str]]:
    """
    Parse data tags after stem.
    There can be *anything* in this part of the data, but parsed and processed are:

    1. tags in format ``"xy:<something>"`` -- two chars of tag, then its value without spaces
    2. numeric aliases, decoded via :attr:`AM <hunaffix.data.aff.Aff.AM>` directive (the alias
       is just expanded into several tags).

    The rest is just dropped. Note that one tag can have several values:

    .. code-block:: text

        witch ph:wich ph:whith

    Args:
        text: part of the dictionary line after the stem
        aliases: content of :attr:`AM <hunaffix.data.aff.Aff.AM>` directive from aff-file
    """
    data: Dict[str, List[str]] = defaultdict(list)

    parts = SPACES_REGEXP.split(text)
    for tag_str in parts:
        if ':' in tag_str:
            tag, _, content = tag_str.partition(':')
            if content:
                data[tag].append(content)
        elif tag_str.isdigit() and tag_str in aliases:
            # Morphology alias: expand it in place, so tags fetched by alias would be handled
            parts.extend(aliases[tag_str])

    return dict(data)
