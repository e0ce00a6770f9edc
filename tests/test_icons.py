import pytest

from clockwise.icons import ICON_SIZE, MAIL, WEATHER_CLOUDY_SUN, WIFI, icon_rows

ALL_ICONS = [WIFI, MAIL, WEATHER_CLOUDY_SUN]


@pytest.mark.parametrize("icon", ALL_ICONS)
def test_icons_split_into_square_rows(icon):
    rows = icon_rows(icon, ICON_SIZE)
    assert len(rows) == ICON_SIZE
    assert all(len(row) == ICON_SIZE for row in rows)


@pytest.mark.parametrize("icon", ALL_ICONS)
def test_rows_flatten_back_to_icon(icon):
    rows = icon_rows(icon, ICON_SIZE)
    assert tuple(pixel for row in rows for pixel in row) == tuple(icon)


@pytest.mark.parametrize("icon", ALL_ICONS)
def test_icons_are_black_and_white(icon):
    rows = icon_rows(icon, ICON_SIZE)
    assert {pixel for row in rows for pixel in row} <= {0x0000, 0xFFFF}


def test_wifi_second_row():
    assert icon_rows(WIFI, 8)[1] == (0x0000, 0x0000, 0xFFFF, 0xFFFF, 0xFFFF, 0xFFFF, 0x0000, 0x0000)


def test_mail_second_row_is_solid():
    assert icon_rows(MAIL, 8)[1] == (0xFFFF,) * 8


def test_other_widths_work():
    rows = icon_rows(WIFI, 16)
    assert len(rows) == 4
    assert rows[0] == tuple(WIFI[:16])


@pytest.mark.parametrize("width", [0, -8])
def test_non_positive_width_is_rejected(width):
    with pytest.raises(ValueError):
        icon_rows(WIFI, width)


def test_width_that_does_not_divide_is_rejected():
    with pytest.raises(ValueError):
        icon_rows(WIFI, 7)