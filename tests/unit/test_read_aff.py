import io

import pytest

from hunaffix.data.aff import AffixKind, SubstrReplacer
from hunaffix.data.flags import FlagSet
from hunaffix.readers import AffError, Context, FileReader, read_aff
from hunaffix.readers.aff import read_directive


def read(text, encoding='ISO8859-1'):
    if isinstance(text, bytes):
        return read_aff(FileReader(io.BytesIO(text), encoding=encoding))
    return read_aff(FileReader(io.StringIO(text)))


def long(flag):
    return chr(ord(flag[0]) << 8 | ord(flag[1]))


def test_directives():
    def directive(line, next_lines='', **kwarg):
        source = FileReader(io.StringIO(next_lines))
        context = Context(**kwarg)
        return read_directive(source, line, context=context)

    assert directive('ICONV 2',
        """
        ICONV ’ '
        ICONV ‘ '
        """) == ('ICONV', SubstrReplacer([('’', "'"), ('‘', "'")]))

    assert directive('KEEPCASE K') == ('KEEPCASE', 'K')
    assert directive('PSEUDOROOT X') == ('NEEDAFFIX', 'X')
    assert directive('COMPLEXPREFIXES') == ('COMPLEXPREFIXES', True)
    assert directive('LANG tr_TR') == ('LANG', 'tr_TR')
    assert directive('UNKNOWNDIRECTIVE foo') is None
    assert directive('# comment') is None
    assert directive('some text') is None

    assert directive('PFX A Y 1',
        'PFX A 0 re .', ignore=None)[1][0].add == 're'


def test_affixes():
    data, _ = read("""
        PFX A Y 1
        PFX A 0 re .

        SFX S N 2
        SFX S 0 s [^sy]
        SFX S y ies/XY [^aeiou]y ds:plural
        """)

    prefix, = data.PFX['A']
    assert prefix.kind == AffixKind.PREFIX
    assert (prefix.strip, prefix.add, prefix.condition, prefix.crossproduct) == ('', 're', '.', True)

    first, second = data.SFX['S']
    assert first.kind == AffixKind.SUFFIX
    assert not first.crossproduct
    assert (second.strip, second.add, second.condition) == ('y', 'ies', '[^aeiou]y')
    assert second.flags == FlagSet('XY')

    assert len(data.prefixes) == 1
    assert len(data.suffixes) == 2
    assert data.suffixes.equal_range('ies') == (second,)


def test_empty_affix_table():
    data, _ = read('SFX A Y 0\n')
    assert data.SFX == {}


def test_missing_condition():
    data, _ = read('PFX A Y 1\nPFX A 0 re\n')
    assert data.PFX['A'][0].condition == '.'


def test_defaults():
    data, context = read('')
    assert data.SET == 'ISO8859-1'
    assert data.FLAG == 'short'
    assert data.FORBIDDENWORD is None
    assert not data.ICONV
    assert context.encoding == 'ISO8859-1'


def test_flags_and_booleans():
    data, _ = read("""
        FORBIDDENWORD !
        KEEPCASE K
        NEEDAFFIX X
        CIRCUMFIX C
        ONLYINCOMPOUND O
        CHECKSHARPS
        FULLSTRIP
        COMPLEXPREFIXES
        LANG de_DE
        WORDCHARS .-
        TRY esianrt
        KEY qwertyuiop|asdfghjkl
        """)

    assert (data.FORBIDDENWORD, data.KEEPCASE, data.NEEDAFFIX, data.CIRCUMFIX, data.ONLYINCOMPOUND) == \
        ('!', 'K', 'X', 'C', 'O')
    assert data.CHECKSHARPS and data.FULLSTRIP and data.COMPLEXPREFIXES
    assert data.LANG == 'de_DE'
    assert data.WORDCHARS == '.-'
    assert data.TRY == 'esianrt'
    assert data.KEY == 'qwertyuiop|asdfghjkl'
    assert type(data.casing).__name__ == 'GermanCasingRules'


def test_long_flags():
    data, context = read("""
        FLAG long

        SFX zx Y 1
        SFX zx 0 s/g?1G09 .

        KEEPCASE 1G
        """)

    assert context.flag_format == 'long'
    suffix, = data.SFX[long('zx')]
    assert suffix.flag == long('zx')
    assert suffix.flags == FlagSet([long('g?'), long('1G'), long('09')])
    assert data.KEEPCASE == long('1G')


def test_num_flags():
    data, _ = read("""
        FLAG num

        SFX 999 Y 1
        SFX 999 0 s/1,65535 .
        """)

    suffix, = data.SFX[chr(999)]
    assert suffix.flags == FlagSet([chr(1), chr(65535)])


def test_utf8_flags():
    data, context = read('FLAG UTF-8\nSFX Ж Y 1\nSFX Ж 0 ы .\n'.encode('utf-8'))

    assert data.SET == 'UTF-8'
    assert context.encoding == 'UTF-8'
    suffix, = data.SFX['Ж']
    assert suffix.add == 'ы'


def test_set_changes_encoding():
    data, context = read('SET microsoft-cp1251\nTRY кот\n'.encode('cp1251'))
    assert data.SET == 'microsoft-cp1251'
    assert data.TRY == 'кот'
    assert context.encoding == 'microsoft-cp1251'


def test_flag_aliases():
    data, context = read("""
        AF 2
        AF AB
        AF BC

        SFX A Y 1
        SFX A 0 s/2 .
        """)

    assert data.AF == {'1': FlagSet('AB'), '2': FlagSet('BC')}
    assert data.SFX['A'][0].flags == FlagSet('BC')
    assert context.parse_flags('1') == FlagSet('AB')


def test_morphology_aliases():
    data, _ = read("""
        AM 2
        AM po:noun
        AM po:verb is:past
        """)

    assert data.AM == {'1': ['po:noun'], '2': ['po:verb', 'is:past']}


def test_conversion_tables():
    data, _ = read("""
        ICONV 3
        ICONV a 1
        ICONV ab 2
        ICONV a 3

        OCONV 1
        OCONV x y
        """)

    # first definition of the same pattern wins
    assert data.ICONV.pairs == [('a', '1'), ('ab', '2')]
    assert data.ICONV('aab') == '12'
    assert data.OCONV('xx') == 'yy'


def test_ignore():
    data, context = read("""
        IGNORE -'

        SFX S Y 1
        SFX S 0 -s .
        """)

    assert context.ignore is data.IGNORE
    assert 'cat-s'.translate(data.IGNORE.tr) == 'cats'
    assert data.SFX['S'][0].add == 's'


@pytest.mark.parametrize('text,line_no,message', [
    ('FLAG wrong\n', 1, 'Unknown flag format'),
    ('SET klingon-1\n', 1, 'Unknown encoding'),
    ('\nSFX A X 1\nSFX A 0 s .\n', 2, 'cross-product'),
    ('SFX A Y x\n', 1, 'Number of table rows'),
    ('SFX A Y\n', 1, 'header'),
    ('SFX A Y 1\nSFX B 0 s .\n', 2, 'SFX A row expected'),
    ('SFX A Y 1\nPFX A 0 s .\n', 2, 'SFX table row expected'),
    ('SFX A Y 1\nSFX A 0 s [ab\n', 2, 'Unclosed'),
    ('SFX A Y 1\nSFX A 0\n', 2, 'both strip and add'),
    ('AF 1\nAF AB\nSFX A Y 1\nSFX A 0 s/7 .\n', 4, 'Unknown flag alias 7'),
    ('FLAG long\nKEEPCASE ABC\n', 2, 'even number'),
    ('FLAG num\nKEEPCASE 0\n', 2, 'Not a valid numeric flag'),
    ('FLAG num\nKEEPCASE 70000\n', 2, 'Not a valid numeric flag'),
    ('KEEPCASE\n', 1, 'value expected'),
    ('ICONV 1\nICONV a\n', 2, 'Pair of values expected'),
])
def test_errors(text, line_no, message):
    with pytest.raises(AffError) as excinfo:
        read(text)

    assert excinfo.value.line_no == line_no
    assert message in str(excinfo.value)
    assert str(excinfo.value).startswith(f'line {line_no}: ')


def test_truncated_table():
    with pytest.raises(AffError, match='expected 3 rows'):
        read('SFX A Y 3\nSFX A 0 s .\n')
