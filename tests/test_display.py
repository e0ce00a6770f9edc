import pytest

from clockwise.display import Canvas, Locator, Picture, Tile
from clockwise.events import EventBus
from clockwise.font import PICOPIXEL


@pytest.fixture
def located_canvas():
    canvas = Canvas()
    Locator.provide_display(canvas)
    yield canvas
    Locator.provide_display(None)
    Locator.provide_event_bus(None)


def test_draw_and_read_pixel():
    canvas = Canvas()
    canvas.draw_pixel(3, 4, 0xF800)
    assert canvas.pixel(3, 4) == 0xF800
    assert canvas.pixel(4, 3) == 0


def test_drawing_outside_is_clipped():
    canvas = Canvas(4, 4)
    canvas.draw_pixel(-1, 0, 0xFFFF)
    canvas.draw_pixel(4, 4, 0xFFFF)
    assert all(canvas.pixel(x, y) == 0 for x in range(4) for y in range(4))
    with pytest.raises(IndexError):
        canvas.pixel(4, 0)


def test_fill_rect_and_screen():
    canvas = Canvas(8, 8)
    canvas.fill_rect(2, 2, 3, 2, 0x07E0)
    assert canvas.pixel(2, 2) == 0x07E0
    assert canvas.pixel(4, 3) == 0x07E0
    assert canvas.pixel(5, 3) == 0
    assert canvas.pixel(2, 4) == 0
    canvas.fill_screen(0x001F)
    assert {canvas.pixel(x, y) for x in range(8) for y in range(8)} == {0x001F}


def test_draw_rgb_bitmap_copies_rows():
    canvas = Canvas()
    canvas.draw_rgb_bitmap(5, 5, [1, 2, 3, 4], 2, 2)
    assert [canvas.pixel(5, 5), canvas.pixel(6, 5), canvas.pixel(5, 6), canvas.pixel(6, 6)] == [1, 2, 3, 4]


def test_draw_rgb_bitmap_clips_at_edge():
    canvas = Canvas()
    canvas.draw_rgb_bitmap(63, 63, [1, 2, 3, 4], 2, 2)
    assert canvas.pixel(63, 63) == 1


def test_draw_bitmap_uses_msb_first_bits():
    canvas = Canvas(8, 2)
    canvas.draw_bitmap(0, 0, bytes([0b10100000, 0b01000000]), 3, 2, 0xFA28)
    assert [canvas.pixel(x, 0) for x in range(3)] == [0xFA28, 0, 0xFA28]
    assert [canvas.pixel(x, 1) for x in range(3)] == [0, 0xFA28, 0]


def test_print_draws_inside_bounds_and_advances():
    canvas = Canvas()
    canvas.set_text_color(0xBCBF)
    canvas.set_cursor(0, 10)
    canvas.print("!")
    x1, y1, width, height = canvas.text_bounds("!", 0, 10)
    lit = [(x, y) for x in range(64) for y in range(64) if canvas.pixel(x, y)]
    assert lit
    assert all(x1 <= x < x1 + width and y1 <= y < y1 + height for x, y in lit)
    assert {canvas.pixel(x, y) for x, y in lit} == {0xBCBF}
    assert canvas.cursor == (PICOPIXEL.glyph("!").x_advance, 10)


def test_set_brightness_validates():
    canvas = Canvas()
    canvas.set_brightness(32)
    assert canvas.brightness == 32
    with pytest.raises(ValueError):
        canvas.set_brightness(256)


def test_locator_raises_until_provided():
    Locator.provide_display(None)
    Locator.provide_event_bus(None)
    with pytest.raises(LookupError):
        Locator.display()
    with pytest.raises(LookupError):
        Locator.event_bus()


def test_locator_returns_provided_services(located_canvas):
    bus = EventBus()
    Locator.provide_event_bus(bus)
    assert Locator.display() is located_canvas
    assert Locator.event_bus() is bus


def test_picture_draws_on_located_display(located_canvas):
    Picture([0xFFFF, 0xF800], 2, 1).draw(10, 20)
    assert located_canvas.pixel(10, 20) == 0xFFFF
    assert located_canvas.pixel(11, 20) == 0xF800


def test_tile_fills_whole_row(located_canvas):
    Tile([0xF800] * 8, 8, 1).fill_row(7)
    assert all(located_canvas.pixel(x, 7) == 0xF800 for x in range(64))
    assert located_canvas.pixel(0, 8) == 0