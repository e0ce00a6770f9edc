import pytest

from clockwise.font import PICOPIXEL, Glyph


def test_font_covers_printable_ascii():
    assert PICOPIXEL.first == 0x20
    assert PICOPIXEL.last == 0x7E
    assert len(PICOPIXEL.glyphs) == PICOPIXEL.last - PICOPIXEL.first + 1
    assert PICOPIXEL.y_advance == 7
    assert PICOPIXEL.glyph(" ") == PICOPIXEL.glyphs[0]
    assert PICOPIXEL.glyph("~") == PICOPIXEL.glyphs[-1]


def test_glyph_lookup_matches_table():
    assert PICOPIXEL.glyph("A") == Glyph(58, 3, 5, 4, 0, -4)
    assert PICOPIXEL.glyph("~") == Glyph(179, 4, 2, 5, 0, -3)


@pytest.mark.parametrize("char", ["\x1f", "\x7f", "é"])
def test_missing_glyph_raises(char):
    with pytest.raises(KeyError):
        PICOPIXEL.glyph(char)


def test_glyph_bitmaps_lie_inside_bitmap():
    for code in range(PICOPIXEL.first, PICOPIXEL.last + 1):
        glyph = PICOPIXEL.glyph(chr(code))
        bits = glyph.width * glyph.height
        assert glyph.bitmap_offset + (bits + 7) // 8 <= len(PICOPIXEL.bitmap)


def test_empty_text_bounds():
    assert PICOPIXEL.text_bounds("", 5, 9) == (5, 9, 0, 0)


def test_single_glyph_bounds():
    glyph = PICOPIXEL.glyph("!")
    x1, y1, width, height = PICOPIXEL.text_bounds("!", 0, 10)
    assert (x1, width, height) == (0, glyph.width, glyph.height)
    assert y1 == 10 + glyph.y_offset


def test_longer_text_is_wider():
    assert PICOPIXEL.text_bounds("AA", 0, 10)[2] > PICOPIXEL.text_bounds("A", 0, 10)[2]


def test_bounds_shift_with_origin():
    base = PICOPIXEL.text_bounds("NTP Server", 0, 61)
    moved = PICOPIXEL.text_bounds("NTP Server", 10, 61)
    assert moved[0] == base[0] + 10
    assert moved[1:] == base[1:]


def test_newline_adds_a_line():
    one = PICOPIXEL.text_bounds("A", 0, 10)
    two = PICOPIXEL.text_bounds("A\nA", 0, 10)
    assert two[3] == one[3] + PICOPIXEL.y_advance