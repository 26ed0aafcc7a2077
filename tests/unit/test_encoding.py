import pytest

from hunaffix.algo.capitalization import CasingRules, TurkicCasingRules
from hunaffix.algo.encoding import Converter, EncodingError, LocaleContext, is_all_ascii, is_all_bmp, is_number


def test_converter():
    cnv = Converter('microsoft-cp1251')
    assert cnv.to_wide(b'\xea\xee\xf2') == 'кот'
    assert cnv.to_narrow('кот') == b'\xea\xee\xf2'
    assert cnv.name == 'microsoft-cp1251'

    assert Converter('ISO8859-1').to_wide(b'caf\xe9') == 'café'
    assert Converter('UTF-8').to_wide('café'.encode('utf-8')) == 'café'


def test_unknown_encoding():
    with pytest.raises(EncodingError):
        Converter('klingon-1')


def test_conversion_failures():
    utf = Converter('UTF-8')
    with pytest.raises(EncodingError):
        utf.to_wide(b'cat\xff')
    assert utf.try_to_wide(b'cat\xff') == (False, 'cat\ufffd')
    assert utf.try_to_wide(b'cat') == (True, 'cat')

    latin = Converter('ISO8859-1')
    with pytest.raises(EncodingError):
        latin.to_narrow('猫')
    assert latin.try_to_narrow('猫') == (False, b'?')
    assert latin.try_to_narrow('café') == (True, b'caf\xe9')


def test_context_using():
    context = LocaleContext('UTF-8')

    with context.using('ISO8859-1') as inner:
        assert inner is context
        assert context.encoding == 'ISO8859-1'
        assert context.converter.to_wide(b'\xe9') == 'é'

    assert context.encoding == 'UTF-8'


def test_context_restored_on_error():
    context = LocaleContext('UTF-8')

    with pytest.raises(RuntimeError):
        with context.using('ISO8859-1'):
            raise RuntimeError('boom')

    assert context.encoding == 'UTF-8'

    with pytest.raises(EncodingError):
        with context.using('klingon-1'):
            pass    # pragma: no cover

    assert context.encoding == 'UTF-8'


def test_context_nested():
    context = LocaleContext('UTF-8')

    with context.using('ISO8859-1'):
        with context.using('KOI8-R'):
            assert context.encoding == 'KOI8-R'
        assert context.encoding == 'ISO8859-1'

    assert context.encoding == 'UTF-8'


def test_context_neutral():
    context = LocaleContext('UTF-8', lang='tr_TR')
    assert isinstance(context.casing, TurkicCasingRules)

    with context.neutral():
        assert context.encoding == 'ascii'
        assert type(context.casing) is CasingRules

    assert context.encoding == 'UTF-8'
    assert isinstance(context.casing, TurkicCasingRules)


@pytest.mark.parametrize('text,result', [
    ('123', True),
    ('-12', True),
    ('1,000.50', True),
    ('2020-10-17', True),
    ('', False),
    ('-', False),
    ('1.', False),
    ('.5', False),
    ('1..2', False),
    ('a1', False),
    ('12th', False),
])
def test_is_number(text, result):
    assert is_number(text) == result


def test_predicates():
    assert is_all_ascii('cat')
    assert is_all_ascii(b'cat')
    assert not is_all_ascii('café')
    assert not is_all_ascii(b'caf\xe9')

    assert is_all_bmp('кот')
    assert not is_all_bmp('cat\U0001F431')
