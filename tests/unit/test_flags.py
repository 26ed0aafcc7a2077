from hunaffix.data.flags import FlagSet


def test_sorted_unique():
    flags = FlagSet('SMSA')
    assert flags.flags == 'AMS'
    assert len(flags) == 3
    assert [*flags] == ['A', 'M', 'S']
    assert repr(flags) == "FlagSet('AMS')"


def test_insert_erase():
    flags = FlagSet('B')
    flags.insert('CA')
    assert flags == FlagSet('ABC')

    flags.insert('')
    assert flags == FlagSet('ABC')

    assert flags.erase('B')
    assert not flags.erase('B')
    assert not flags.erase('')
    assert flags == FlagSet('AC')


def test_membership():
    flags = FlagSet('AB')
    assert 'A' in flags
    assert flags.exists('B')
    assert flags.count('B') == 1
    assert flags.count('C') == 0
    assert None not in flags
    assert '' not in flags
    assert not FlagSet()


def test_union_and_copy():
    flags = FlagSet('AB')
    united = flags.union('BC')
    assert united == FlagSet('ABC')
    assert flags == FlagSet('AB')

    copy = flags.copy()
    copy.insert('Z')
    assert flags == FlagSet('AB')


def test_set_equality():
    assert FlagSet('AB') == {'A', 'B'}
    assert FlagSet() == set()
    assert hash(FlagSet('BA')) == hash(FlagSet('AB'))


def test_wide_flags():
    flags = FlagSet([chr(0x7A78), chr(1), chr(0xFFFF)])
    assert chr(0x7A78) in flags
    assert [*flags] == [chr(1), chr(0x7A78), chr(0xFFFF)]


def test_insert_idempotent():
    flags = FlagSet('AB')
    flags.insert('A')
    size = len(flags)
    flags.insert('A')
    assert len(flags) == size == 2

    flags.insert('C')
    assert flags.exists('C')
    assert flags.erase('C')
    assert not flags.exists('C')
    assert flags == FlagSet('AB')


def test_multichar_is_not_member():
    flags = FlagSet('ABC')
    assert 'AB' not in flags
    assert not flags.exists('BC')
    assert flags.count('AB') == 0
    assert not flags.erase('AB')
    assert flags == FlagSet('ABC')
