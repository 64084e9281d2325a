import pytest

from mdforge.flags import FLAG_NAMES, NR_FLAGS, Flag, FlagSet, flags_are


def test_set_and_clear_dldiscount():
    flags = FlagSet()
    flags.set(Flag.DLDISCOUNT)
    assert flags.is_set(Flag.DLDISCOUNT)
    flags.clear(Flag.DLDISCOUNT)
    assert not flags.is_set(Flag.DLDISCOUNT)
    assert len(flags) == 0


def test_copy_is_equal_and_independent():
    flags = FlagSet([Flag.DLDISCOUNT])
    copy = flags.copy()
    assert copy == flags
    copy.set(Flag.TOC)
    assert not flags.is_set(Flag.TOC)
    assert copy.is_set(Flag.TOC)


def test_copy_of_empty_set_is_empty():
    assert list(FlagSet().copy()) == []


@pytest.mark.parametrize("number", [-1, NR_FLAGS, NR_FLAGS + 10])
def test_out_of_range_numbers_are_ignored(number):
    flags = FlagSet()
    flags.set(number)
    assert len(flags) == 0
    assert not flags.is_set(number)


def test_set_bitmap_sets_matching_bits():
    flags = FlagSet()
    flags.set_bitmap((1 << Flag.NOLINKS) | (1 << Flag.NOPANTS) | (1 << Flag.TOC))
    assert list(flags) == [Flag.NOLINKS, Flag.NOPANTS, Flag.TOC]


def test_set_bitmap_ignores_bits_beyond_flag_count():
    flags = FlagSet()
    flags.set_bitmap(1 << (NR_FLAGS + 2))
    assert len(flags) == 0


def test_update_and_any_of():
    flags = FlagSet([Flag.STRICT])
    other = FlagSet([Flag.TOC, Flag.LATEX])
    assert not flags.any_of(other)
    flags.update(other)
    assert flags.any_of(other)
    assert list(flags) == [Flag.STRICT, Flag.TOC, Flag.LATEX]


def test_contains_uses_is_set():
    flags = FlagSet([Flag.AUTOLINK])
    assert Flag.AUTOLINK in flags
    assert Flag.SAFELINK not in flags


def test_flags_are_treats_none_like_empty():
    assert flags_are(None, False) == flags_are(FlagSet(), False)


def test_flags_are_reflects_set_flags():
    text = flags_are(FlagSet([Flag.NOLINKS, Flag.TOC]), False)
    words = text.split()
    assert "!LINKS" in words
    assert "TOC" in words
    assert "!TOC" not in words


def test_flags_are_html_table():
    text = flags_are(FlagSet([Flag.STRICT]), True)
    assert text.startswith('<table class="mkd_flags_are">\n')
    assert text.endswith("</table>\n")
    assert text.count("<td>") == len(FLAG_NAMES)
    assert "<td>STRICT</td>" in text
    assert "<td><s>TAGTEXT</s></td>" in text