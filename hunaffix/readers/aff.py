"""

.. autofunction:: read_aff

.. autoclass:: Context
    :members:

.. autoclass:: AffError

Internal methods
^^^^^^^^^^^^^^^^

.. autofunction:: read_directive
.. autofunction:: read_value
.. autofunction:: make_affix

"""

import re
import logging
import itertools
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from hunaffix.data import aff
from hunaffix.data.flags import FlagSet
from hunaffix.algo.encoding import Converter, is_all_bmp

from hunaffix.readers.file_reader import FileReader

logger = logging.getLogger(__name__)

# Outdated directive names
SYNONYMS = {'PSEUDOROOT': 'NEEDAFFIX'}

FLAG_FORMATS = ('short', 'long', 'num', 'UTF-8')

SPACES_REGEXP = re.compile(r'\s+')
DIRECTIVE_REGEXP = re.compile(r'^[A-Z]+$')


class AffError(ValueError):
    """
    Malformed ``*.aff`` file. Dictionary is not created when it is raised: either the whole file
    is read successfully, or nothing.
    """

    def __init__(self, message: str, line_no: Optional[int] = None):
        self.line_no = line_no
        super().__init__(f'line {line_no}: {message}' if line_no else message)


@dataclass
class Context:
    """
    Class containing reading-time context necessary for reading both .aff and .dic file:
    encoding, flag format, flag aliases, chars to ignore.

    It is created in :meth:`read_aff` and then reused in :meth:`read_dic <hunaffix.readers.dic.read_dic>`.
    """

    #: Encoding of dictionary (see :attr:`Aff.SET <hunaffix.data.aff.Aff.SET>`)
    encoding: str = 'ISO8859-1'

    #: Flag format of dictionary (see :attr:`Aff.FLAG <hunaffix.data.aff.Aff.FLAG>`)
    flag_format: str = 'short'

    #: Flag aliases (like ``1 => FlagSet('ABC')``), see :attr:`Aff.AF <hunaffix.data.aff.Aff.AF>`
    flag_synonyms: Dict[str, FlagSet] = field(default_factory=dict)

    #: Chars to ignore (see :attr:`Aff.IGNORE <hunaffix.data.aff.Aff.IGNORE>`)
    ignore: Optional[aff.Ignore] = None

    def parse_flag(self, string: Optional[str]) -> str:
        """
        Parse singular flag, considering :attr:`flag_format`.
        """
        flags = self.decode_flags(string)
        if not flags:
            raise ValueError('Flag expected')
        return flags[0]

    def parse_flags(self, string: Optional[str]) -> FlagSet:
        """
        Parse set of flags, considering :attr:`flag_format` and aliases.
        """
        if not string:
            return FlagSet()

        if self.flag_synonyms and string.isdigit():
            if string not in self.flag_synonyms:
                raise ValueError(f'Unknown flag alias {string}')
            return self.flag_synonyms[string].copy()

        return FlagSet(self.decode_flags(string))

    def decode_flags(self, string: Optional[str]) -> List[str]:
        """
        Converts flags in any format to list of one-char strings:

        * ``short`` and ``UTF-8``: each char is a flag
        * ``long``: each pair of chars ``ab`` is converted to ``chr(ord(a) << 8 | ord(b))``
        * ``num``: each number ``n`` is converted to ``chr(n)``
        """
        if not string:
            return []

        if self.flag_format in ('short', 'UTF-8'):
            if not is_all_bmp(string):
                raise ValueError(f'Flag out of 16-bit range in {string!r}')
            return list(string)

        if self.flag_format == 'long':
            if len(string) % 2:
                raise ValueError(f'Long flags should have even number of chars: {string!r}')
            if any(ord(char) > 0xFF for char in string):
                raise ValueError(f'Long flags should be one-byte chars: {string!r}')
            return [chr(ord(hi) << 8 | ord(lo)) for hi, lo in zip(string[::2], string[1::2])]

        if self.flag_format == 'num':
            flags = []
            for num in string.split(','):
                if not num.isdigit() or not 0 < int(num) <= 0xFFFF:
                    raise ValueError(f'Not a valid numeric flag: {num!r} in {string!r}')
                flags.append(chr(int(num)))
            return flags

        raise ValueError(f'Unknown flag format {self.flag_format}')


def read_aff(source: FileReader) -> Tuple[aff.Aff, Context]:
    """
    Reads .aff file and creates an :class:`Aff <hunaffix.data.aff.Aff>`.

    For each line calls :meth:`read_directive` (which either returns pair of ``(directive, value)``,
    or just skips the line). ``Aff`` is created only after the whole file is read, so any error
    leaves nothing half-built.

    Args:
         source: "Reader" (thin wrapper around opened file, targeting line-by-line reading)

    Returns:
        Aff itself and a :class:`Context` which then will be reused in
        :meth:`read_dic <hunaffix.readers.dic.read_dic>`

    Raises:
        AffError: with number of the offending line
    """

    data: Dict[str, Any] = {'SFX': {}, 'PFX': {}}
    context = Context(encoding=source.converter.name)

    for (line_no, line) in source:
        try:
            dir_value = read_directive(source, line, context=context)
        except AffError:
            raise
        except (ValueError, IndexError) as e:
            raise AffError(str(e), line_no=source.line_no or line_no) from e

        if not dir_value:
            continue

        directive, value = dir_value
        logger.debug('%s:%d: %s', source.name, line_no, directive)

        # SFX/PFX are the only directives that have multiple entries in .aff file
        if directive in ['SFX', 'PFX']:
            for affix in value:
                data[directive].setdefault(affix.flag, []).append(affix)
        else:
            data[directive] = value

        # Additional actions, changing further reading behavior
        if directive == 'FLAG':
            context.flag_format = value
        elif directive == 'AF':
            context.flag_synonyms = value
        elif directive == 'SET':
            context.encoding = value
            source.reset_encoding(value)
        elif directive == 'IGNORE':
            context.ignore = value

        if directive == 'FLAG' and value == 'UTF-8':
            # Weirdly enough, **flag type** ``UTF-8`` implicitly states the encoding is ``UTF-8`` too...
            context.encoding = 'UTF-8'
            data['SET'] = 'UTF-8'
            source.reset_encoding('UTF-8')

    result = aff.Aff(**data)
    logger.debug('%s: %d prefixes, %d suffixes', source.name, len(result.prefixes), len(result.suffixes))

    return (result, context)


def read_directive(source: FileReader, line: str, *, context: Context) -> Optional[Tuple[str, Any]]:
    """
    Try to read directive from the next line, delegating value parsing (directive-dependent) to
    :meth:`read_value`.

    If it is not a directive, just ignore. That's how Hunspell works: .aff file can contain literally
    anything: pseudo-directives (lines looking like ``UPCASED_WORD some data`` but not a known directive
    name), free form text, etc. Even comments are implemented this way (and not by scanning for ``#``!)

    Args:
        source: passed from :meth:`read_aff` (because reading of one directive may require reading of
                more lines from source)
        line: current line read from source
        context: current reading context
    """

    name, *arguments = SPACES_REGEXP.split(line)

    if not DIRECTIVE_REGEXP.match(name):
        return None

    name = SYNONYMS.get(name, name)

    value = read_value(source, name, *arguments, context=context)

    if value is None:
        logger.debug('%s:%d: ignored %s', source.name, source.line_no, name)
        return None

    return (name, value)


def read_value(source: FileReader, directive: str, *values, context: Context) -> Any:
    """
    Reads one value.

    Note that for a table-alike directives "one value" might span several lines (and that's why
    this method has ``source`` as its argument, and can read more lines from it on demand).

    For example, if current directive is ``ICONV``, it means the file below looks like this:

    .. code-block:: text

        ICONV 2     # we are on this line currently
        ICONV ’ '
        ICONV ‘ '

    The method would read value 2, understand that there are 2 more lines to read, read them and
    return the table.

    The values read are immediately parsed into proper data types (see :mod:`data.aff <hunaffix.data.aff>`
    for types definition).

    Args:
        source: Can be changed inside method
        directive: Name of current directive
        values: Values already read from the line where directive was
        context: Reading context
    """

    value = values[0] if values else None

    def _read_array(count: Optional[int] = None) -> List[List[str]]:
        if count is None:
            count = parse_count(value)

        rows = []
        for _, ln in itertools.islice(source, count):
            name, *row = SPACES_REGEXP.split(ln)
            if SYNONYMS.get(name, name) != directive:
                raise ValueError(f'{directive} table row expected, got {ln!r}')
            rows.append(row)

        if len(rows) < count:
            raise ValueError(f'{directive}: expected {count} rows, file ended after {len(rows)}')

        return rows

    def _required(val):
        if val is None:
            raise ValueError(f'{directive}: value expected')
        return val

    if directive in ['FLAG']:
        if value not in FLAG_FORMATS:
            raise ValueError(f'Unknown flag format {value!r}')
        return value
    if directive in ['SET']:
        # fails here on unknown encoding
        Converter(_required(value))
        return value
    if directive in ['LANG', 'WORDCHARS', 'TRY', 'KEY']:
        return _required(value)
    if directive == 'IGNORE':
        return aff.Ignore(_required(value))
    if directive in ['FORBIDDENWORD', 'KEEPCASE', 'NEEDAFFIX', 'CIRCUMFIX', 'ONLYINCOMPOUND']:
        return context.parse_flag(_required(value))
    if directive in ['CHECKSHARPS', 'COMPLEXPREFIXES', 'FULLSTRIP']:
        # Presence of directive always means "turn it on"
        return True
    if directive in ['ICONV', 'OCONV']:
        return aff.SubstrReplacer(
            (pattern, replacement) for pattern, replacement, *_ in map(_pair, _read_array())
        )
    if directive in ['SFX', 'PFX']:
        if len(values) < 3:
            raise ValueError(f'{directive} header should be "{directive} flag Y|N count"')
        flag, crossproduct, count, *_ = values
        if crossproduct not in ('Y', 'N'):
            raise ValueError(f'{directive} {flag}: cross-product should be Y or N, got {crossproduct!r}')

        rows = _read_array(parse_count(count))
        for row in rows:
            if row[:1] != [flag]:
                raise ValueError(f'{directive} {flag} row expected, got {directive} {" ".join(row)}')

        return [
            make_affix(directive, flag, crossproduct, *row, context=context)
            for row in rows
        ]
    if directive == 'AF':
        return {
            str(i + 1): context.parse_flags(row[0] if row else None)
            for i, row in enumerate(_read_array())
        }
    if directive == 'AM':
        return {
            str(i + 1): row
            for i, row in enumerate(_read_array())
        }

    # If it wasn't some known directive, it is not a data at all.
    return None


def parse_count(value: Optional[str]) -> int:
    if value is None or not value.isdigit():
        raise ValueError(f'Number of table rows expected, got {value!r}')
    return int(value)


def _pair(row: List[str]) -> List[str]:
    if len(row) < 2:
        raise ValueError(f'Pair of values expected, got {row!r}')
    return row


def make_affix(kind, flag, crossproduct, _, strip=None, add=None, *rest, context):
    """
    Produces prefix or suffix :class:`Affix <hunaffix.data.aff.Affix>` from raw data
    """

    if strip is None or add is None:
        raise ValueError(f'{kind} {flag}: both strip and add expected')

    # in LibreOffice ar.aff has at least one prefix (Ph) without any condition. Bug?
    cond = rest[0] if rest else '.'
    add, _, flags = add.partition('/')
    if context.ignore:
        add = add.translate(context.ignore.tr)
        strip = strip.translate(context.ignore.tr)

    # Data fields (morphology) are ignored
    try:
        return aff.Affix(
            kind=aff.AffixKind(kind),
            flag=context.parse_flag(flag),
            crossproduct=(crossproduct == 'Y'),
            strip=('' if strip == '0' else strip),
            add=('' if add == '0' else add),
            condition=cond,
            flags=context.parse_flags(flags)
        )
    except ValueError as e:
        raise ValueError(f'{kind} {flag}: {e}') from e
