import io
import logging
from pathlib import Path

import pytest

from hunaffix import Dictionary
from hunaffix.algo.encoding import EncodingError
from hunaffix.readers import AffError

FIXTURES = Path(__file__).resolve().parent.parent / 'fixtures'


@pytest.fixture(scope='module')
def base():
    return Dictionary.from_files(str(FIXTURES / 'base'))


@pytest.fixture(scope='module')
def latin1():
    return Dictionary.from_files(str(FIXTURES / 'latin1'))


def from_text(aff, dic, encoding='utf-8'):
    return Dictionary.from_streams(io.BytesIO(aff.encode(encoding)), io.BytesIO(dic.encode(encoding)))


GOOD = [
    'cat', 'cats', 'Cats', 'CATS',
    'kitty', 'kitties',
    'boot', 'boots', 'reboot', 'reboots', 'REBOOTS',
    'do', 'dos', 'undo',
    'make', 'making',
    'hope', 'hopefully', 'Hopefully',
    'pseudos',
    'nagy', 'legnagyobb',
    'Paris', 'PARIS',
    'OpenOffice.org', 'OPENOFFICE.ORG',
    'ipa',
    "can't", 'can’t',
    'bar', 'foo',
    '1,000', '2026-10-17',
]

BAD = [
    'catz', 'cAts',
    'kittys',
    'undos',
    'makeing',
    'hopeful', 'hopely',
    'pseudo',
    'nagyobb', 'legnagy',
    'paris', 'openoffice.org',
    'IPA', 'Ipa',
    'compo',
    'bars', 'foos',
]


@pytest.mark.parametrize('word', GOOD)
def test_good(base, word):
    assert base.lookup(word)


@pytest.mark.parametrize('word', BAD)
def test_bad(base, word):
    assert not base.lookup(word)


def test_loaded(base):
    assert len(base.dic) == 17
    assert len(base.aff.prefixes) == 3
    assert len(base.aff.suffixes) == 7
    assert base.context.encoding == 'UTF-8'


def test_stems(base):
    assert base.stems('cats') == ['cat']
    assert base.stems('reboots') == ['boot']
    assert base.stems('Kitties') == ['kitty']
    assert base.stems('catz') == []
    assert base.stems('bars') == []
    # OCONV
    assert base.stems("can't") == ['can’t']


def test_affix_candidates(base):
    forms = [*base.affix_candidates('cats')]
    assert [(form.stem, form.suffix.flag) for form in forms] == [('cat', 'S')]
    assert [*base.affix_candidates('cat')] == []


def test_bytes(base):
    assert base.lookup(b'cats')
    assert base.lookup('can’t'.encode('utf-8'))
    assert not base.lookup(b'cat\xff')
    assert base.stems(b'cat\xff') == []


def test_bytes_encoding(latin1):
    assert latin1.lookup('cafés')
    assert latin1.lookup(b'caf\xe9s')
    assert latin1.lookup('café'.encode('utf-8'), encoding='UTF-8')
    assert not latin1.lookup('café'.encode('utf-8'))
    assert not latin1.lookup(b'caf\xe9', encoding='UTF-8')

    with pytest.raises(EncodingError):
        latin1.lookup(b'caf\xe9', encoding='klingon-1')


def test_unknown_encoding_ascii_bytes(base):
    with pytest.raises(EncodingError):
        base.lookup(b'cat', encoding='klingon-1')
    with pytest.raises(EncodingError):
        base.stems(b'cat', encoding='klingon-1')

    assert base.lookup(b'cat', encoding='ISO8859-1') == base.lookup('cat')


def test_context_casing_is_lookup_casing():
    dictionary = from_text('LANG tr_TR\n', '1\nistanbul\n')
    assert dictionary.context.casing is dictionary.aff.casing
    assert dictionary.context.casing.upper('i') == '\u0130'


def test_from_streams():
    dictionary = from_text("""SET UTF-8
SFX S Y 1
SFX S 0 ы .
""", """1
кот/S
""")

    assert dictionary.lookup('коты')
    assert dictionary.lookup('КОТЫ')
    assert dictionary.lookup('коты'.encode('utf-8'))
    assert not dictionary.lookup('котs')


def test_turkic():
    aff = 'SET UTF-8\nLANG tr_TR\n'
    dic = '1\nizmir\n'

    turkish = from_text(aff, dic)
    assert turkish.lookup('İZMİR')
    assert turkish.lookup('İzmir')
    assert not turkish.lookup('IZMIR')

    other = from_text('SET UTF-8\n', dic)
    assert other.lookup('IZMIR')
    assert other.lookup('İZMİR')


def test_dutch():
    dictionary = from_text('SET UTF-8\nLANG nl_NL\n', '1\nIJsland\n')
    assert dictionary.lookup('IJsland')
    assert dictionary.lookup('IJSLAND')


def test_load_failure():
    with pytest.raises(AffError) as excinfo:
        from_text('SET UTF-8\nSFX S Y 2\nSFX S 0 s .\nSFX T 0 s .\n', '1\ncat/S\n')

    assert excinfo.value.line_no == 4


def test_load_logging(caplog):
    with caplog.at_level(logging.INFO, logger='hunaffix'):
        Dictionary.from_files(str(FIXTURES / 'base'))

    assert 'Dictionary loaded: 17 words' in caplog.text
