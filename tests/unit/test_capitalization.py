import pytest

from hunaffix.algo.capitalization import (
    Casing, CasingRules, DutchCasingRules, GermanCasingRules, TurkicCasingRules,
    casing_rules, classify_casing, has_uppercase_at_compound_word_boundary
)


@pytest.mark.parametrize('word,casing', [
    ('hello', Casing.SMALL),
    ('Hello', Casing.INIT_CAPITAL),
    ('HELLO', Casing.ALL_CAPITAL),
    ('helloWorld', Casing.CAMEL),
    ('HelloWorld', Casing.PASCAL),
    ('', Casing.SMALL),
    ('123', Casing.SMALL),
    ('ALL4ONE', Casing.ALL_CAPITAL),
    ('3D', Casing.ALL_CAPITAL),
    ('Ünïcödé', Casing.INIT_CAPITAL),
    ('ПРИВЕТ', Casing.ALL_CAPITAL),
])
def test_classify_casing(word, casing):
    assert classify_casing(word) == casing


@pytest.mark.parametrize('word,i,result', [
    ('fooBar', 3, True),
    ('FOObar', 3, True),
    ('foobar', 3, False),
    ('foo-Bar', 4, False),
    ('foo-Bar', 3, False),
    ('fooBar', 0, False),
    ('fooBar', 6, False),
])
def test_compound_boundary(word, i, result):
    assert has_uppercase_at_compound_word_boundary(word, i) == result


def test_variants():
    rules = CasingRules()
    assert rules.variants('kitten') == (Casing.SMALL, ['kitten'])
    assert rules.variants('Kitten') == (Casing.INIT_CAPITAL, ['Kitten', 'kitten'])
    assert rules.variants('KITTEN') == (Casing.ALL_CAPITAL, ['KITTEN', 'kitten', 'Kitten'])
    assert rules.variants('kitTen') == (Casing.CAMEL, ['kitTen'])
    assert rules.variants('KitTen') == (Casing.PASCAL, ['KitTen', 'kitTen'])


def test_dotted_i_lowercase():
    # outside of Turkic languages, "İ" lowercases to plain "i"
    assert CasingRules().lower('İSTANBUL') == 'istanbul'


def test_turkic():
    rules = TurkicCasingRules()
    assert rules.lower('Izmir') == 'ızmir'
    assert rules.lower('İZMİR') == 'izmir'
    assert rules.upper('izmir') == 'İZMİR'
    assert rules.title('izmir') == 'İzmir'
    assert rules.variants('İZMİR') == (Casing.ALL_CAPITAL, ['İZMİR', 'izmir', 'İzmir'])


def test_dutch():
    rules = DutchCasingRules()
    assert rules.title('ijsland') == 'IJsland'
    assert rules.title('IJSLAND') == 'IJsland'
    assert rules.title('kat') == 'Kat'


def test_german():
    rules = GermanCasingRules()
    assert rules.lower_variants('STRASSE') == ['straße', 'strasse']
    assert rules.lower_variants('Katze') == ['katze']
    assert rules.guess('STRAßE') == Casing.ALL_CAPITAL
    assert CasingRules().guess('STRAßE') == Casing.PASCAL
    assert rules.variants('STRASSE') == (Casing.ALL_CAPITAL, ['STRASSE', 'straße', 'strasse', 'Strasse'])


@pytest.mark.parametrize('lang,checksharps,cls', [
    (None, False, CasingRules),
    ('en_US', False, CasingRules),
    ('tr_TR', False, TurkicCasingRules),
    ('az', False, TurkicCasingRules),
    ('crh_UA', False, TurkicCasingRules),
    ('nl_NL', False, DutchCasingRules),
    ('de_DE', True, GermanCasingRules),
    ('de_DE', False, CasingRules),
])
def test_casing_rules(lang, checksharps, cls):
    assert type(casing_rules(lang, checksharps)) is cls
