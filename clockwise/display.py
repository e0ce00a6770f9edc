"""An in-memory RGB565 display, a service locator and drawable images."""

from __future__ import annotations

from collections.abc import Iterator, Sequence

from .events import EventBus
from .font import PICOPIXEL, Font, Glyph
from .sprite import DISPLAY_HEIGHT, DISPLAY_WIDTH


def _glyph_pixels(font: Font, glyph: Glyph) -> Iterator[tuple[int, int]]:
    """Yield the ``(column, row)`` offsets of the lit pixels of ``glyph``."""
    bits = 0
    for index in range(glyph.width * glyph.height):
        if index % 8 == 0:
            bits = font.bitmap[glyph.bitmap_offset + index // 8]
        if bits & 0x80:
            yield index % glyph.width, index // glyph.width
        bits = (bits << 1) & 0xFF


class Canvas:
    """A frame buffer of RGB565 pixels with simple drawing primitives."""

    def __init__(self, width: int = DISPLAY_WIDTH, height: int = DISPLAY_HEIGHT) -> None:
        self.width = width
        self.height = height
        self._pixels = [[0] * width for _ in range(height)]
        self.font: Font = PICOPIXEL
        self.cursor = (0, 0)
        self.text_color = 0xFFFF
        self.brightness = 255

    def pixel(self, x: int, y: int) -> int:
        """Return the colour at ``(x, y)``; IndexError outside the canvas."""
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexError(f"pixel ({x}, {y}) is outside the canvas")
        return self._pixels[y][x]

    def draw_pixel(self, x: int, y: int, color: int) -> None:
        """Set one pixel; points outside the canvas are ignored."""
        if 0 <= x < self.width and 0 <= y < self.height:
            self._pixels[y][x] = color & 0xFFFF

    def fill_rect(self, x: int, y: int, width: int, height: int, color: int) -> None:
        for row in range(max(y, 0), min(y + height, self.height)):
            for column in range(max(x, 0), min(x + width, self.width)):
                self._pixels[row][column] = color & 0xFFFF

    def fill_screen(self, color: int) -> None:
        self.fill_rect(0, 0, self.width, self.height, color)

    def draw_rgb_bitmap(
        self, x: int, y: int, bitmap: Sequence[int], width: int, height: int
    ) -> None:
        """Copy a row-major RGB565 image to ``(x, y)``."""
        for row in range(height):
            line = bitmap[row * width:(row + 1) * width]
            for column, color in enumerate(line):
                self.draw_pixel(x + column, y + row, color)

    def draw_bitmap(
        self, x: int, y: int, bitmap: bytes, width: int, height: int, color: int
    ) -> None:
        """Draw a 1-bit, MSB-first, row-padded bitmap in ``color``."""
        byte_width = (width + 7) // 8
        for row in range(height):
            line = bitmap[row * byte_width:(row + 1) * byte_width]
            for column in range(width):
                if line[column // 8] & (0x80 >> (column % 8)):
                    self.draw_pixel(x + column, y + row, color)

    def set_font(self, font: Font) -> None:
        self.font = font

    def set_cursor(self, x: int, y: int) -> None:
        self.cursor = (x, y)

    def set_text_color(self, color: int) -> None:
        self.text_color = color & 0xFFFF

    def text_bounds(self, text: str, x: int, y: int) -> tuple[int, int, int, int]:
        """Return ``(x1, y1, width, height)`` of ``text`` in the current font."""
        return self.font.text_bounds(text, x, y)

    def print(self, text: str) -> None:
        """Draw ``text`` at the cursor in the text colour and advance the cursor."""
        cursor_x, cursor_y = self.cursor
        for char in text:
            if char == "\n":
                cursor_x = 0
                cursor_y += self.font.y_advance
                continue
            if char == "\r":
                continue
            try:
                glyph = self.font.glyph(char)
            except KeyError:
                continue
            for column, row in _glyph_pixels(self.font, glyph):
                self.draw_pixel(
                    cursor_x + glyph.x_offset + column,
                    cursor_y + glyph.y_offset + row,
                    self.text_color,
                )
            cursor_x += glyph.x_advance
        self.cursor = (cursor_x, cursor_y)

    def set_brightness(self, value: int) -> None:
        """Set the panel brightness, 0 to 255."""
        if not 0 <= value <= 255:
            raise ValueError(f"brightness {value} is outside 0..255")
        self.brightness = value


class Locator:
    """Shared access to the display and the event bus."""

    _display: Canvas | None = None
    _event_bus: EventBus | None = None

    @classmethod
    def provide_display(cls, display: Canvas | None) -> None:
        cls._display = display

    @classmethod
    def provide_event_bus(cls, event_bus: EventBus | None) -> None:
        cls._event_bus = event_bus

    @classmethod
    def display(cls) -> Canvas:
        if cls._display is None:
            raise LookupError("no display has been provided")
        return cls._display

    @classmethod
    def event_bus(cls) -> EventBus:
        if cls._event_bus is None:
            raise LookupError("no event bus has been provided")
        return cls._event_bus


class Picture:
    """An RGB565 image drawn on the located display."""

    def __init__(self, image: Sequence[int], width: int, height: int) -> None:
        self.image = image
        self.width = width
        self.height = height

    def draw(self, x: int, y: int) -> None:
        Locator.display().draw_rgb_bitmap(x, y, self.image, self.width, self.height)


class Tile:
    """An image that can be repeated across a whole row of the display."""

    def __init__(self, image: Sequence[int], width: int, height: int) -> None:
        self.image = image
        self.width = width
        self.height = height

    def draw(self, x: int, y: int) -> None:
        Locator.display().draw_rgb_bitmap(x, y, self.image, self.width, self.height)

    def fill_row(self, y: int) -> None:
        for x in range(0, DISPLAY_WIDTH, self.width):
            self.draw(x, y)