"""Status screens shown while the clock starts up, and LED signalling."""

from __future__ import annotations

import time
from collections.abc import Callable, Iterable

from .display import Canvas, Locator
from .font import PICOPIXEL

STATUS_ICON_SIZE = 32

WIFI_COLOR = 0x2459
WIFI_FAILED_COLOR = 0xFA28
NTP_COLOR = 0xBCBF


def _bitmap_from_rows(rows: Iterable[int]) -> bytes:
    """Pack 32-pixel rows, most significant bit leftmost, into bitmap bytes."""
    return b"".join(row.to_bytes(4, "big") for row in rows)


CW_STATUS_NTP = _bitmap_from_rows((
    0x00000000, 0x00000000, 0x3FFFF000, 0x40000801,
    0x4B8EE803, 0x58AAA807, 0x4B8AA867, 0x4A2AA8F7,
    0x4B8EE9FF, 0x40000BFF, 0x3FFFF3FF, 0x000003FF,
    0x000FC1FF, 0x003FF000, 0x007FF800, 0x00FFF870,
    0x01FFFDFC, 0x19FFFFFE, 0x3DFFFFFE, 0x7FFFFFFF,
    0xFFFFFFFF, 0xFFFFFFFF, 0xFFFFFFFF, 0x7FFFFFFE,
    *([0] * 8),
))

CW_STATUS_WIFI = _bitmap_from_rows((
    *([0] * 4),
    0x00000000, 0x000FF000, 0x00FFFF00, 0x03FFFFC0,
    0x0FFFFFF0, 0x1FFFFFF8, 0x7FF81FFE, 0xFFC003FF,
    0x7F0000FE, 0x3C07E03C, 0x183FFC18, 0x00FFFF00,
    0x01FFFF80, 0x03FFFFC0, 0x01FFFF80, 0x00F00F00,
    0x00600600, 0x00000000, 0x0007E000, 0x000FF000,
    0x0007E000, 0x0003C000, 0x00018000, 0x00000000,
    *([0] * 4),
))

CW_STATUS_DINO = _bitmap_from_rows((
    0x00FFFF00, 0x03F81FC0, 0x07C003E0, 0x0F0000F0,
    0x1E000078, 0x3C00003C, 0x781FFF9E, 0x703FFFEE,
    0xE033FFE7, 0xE073FFE7, 0xC07FFFE3, 0xC07FFFE3,
    0xC07FFFE3, 0x807FFFE1, 0x807FFFE1, 0x807FFFE1,
    0x807F8001, 0x807F8001, 0x803FFE01, 0xC03FFE03,
    0xC03E0003, 0xC0FE0003, 0xE0FE0007, 0xE7FE0007,
    0x7FFFF00E, 0x7FFFF01E, 0x3FFE303C, 0x1FFE0078,
    0x0FFE00F0, 0x07FC03E0, 0x03FC1FC0, 0x00FFFF00,
))

LOGO_WIDTH = 63
LOGO_HEIGHT = 21

# Lit pixels of the start-up logo, keyed by their index in row-major order.
_LOGO_PIXELS: dict[int, int] = {
    133: 0xFFFF, 134: 0xFFFF, 135: 0xE71C, 136: 0xFFFF, 137: 0xFFFF,
    193: 0xFFFF, 194: 0xEF5D, 195: 0xEF5D, 201: 0xFFFF, 202: 0xFFFF, 203: 0xFFFF,
    255: 0xFFFF, 267: 0xFFFF, 317: 0xFFFF, 331: 0xFFFF, 379: 0xFFFF, 395: 0xFFFF,
    442: 0xF79E, 449: 0xFFFF, 458: 0xFFFF, 460: 0xF79E, 475: 0xFFFF, 504: 0xFFFF,
    512: 0xEF5D, 523: 0xFFFF, 538: 0xFFFF, 554: 0xFFFF, 567: 0xFFFF, 575: 0xFFFF,
    586: 0xFFFF, 589: 0xF79E, 590: 0xF79E, 591: 0xFFFF,
    592: 0xFFFF, 597: 0xFFFF, 598: 0xFFFF, 599: 0xFFFF, 601: 0xFFFF,
    630: 0xFFFF, 638: 0xFFFF, 649: 0xEF5D, 651: 0xEF5D,
    656: 0xFFFF, 659: 0xFFFF, 664: 0xF79E, 667: 0xDEDB, 669: 0xFFFF,
    673: 0xFFFF, 677: 0xFFFF, 680: 0xFFFF, 684: 0xFFFF, 685: 0xFFFF,
    689: 0xFFFF, 690: 0xFFFF, 693: 0xFFFF, 701: 0xFFFF, 702: 0xFFFF, 703: 0xFFFF,
    704: 0xFFFF, 705: 0xFFFF, 712: 0xEF5D, 714: 0xEF5D, 719: 0xFFFF,
    722: 0xFFFF, 727: 0xF79E, 730: 0xDEDB, 732: 0xF800,
    736: 0xF800, 740: 0xF800, 743: 0xF800, 746: 0xF800, 748: 0x0020, 751: 0xF800,
    754: 0xF800, 756: 0xE71C, 775: 0xFFFF, 777: 0xFFFF, 782: 0xFFFF,
    785: 0xFFFF, 790: 0xEF5D, 791: 0xDEFB, 792: 0xDEFB, 796: 0x07E0, 799: 0x07E0,
    802: 0x07E0, 806: 0x07E0, 810: 0x07E0, 811: 0x0020, 814: 0x07E0, 815: 0x07E0,
    816: 0x07E0, 817: 0x07E0, 820: 0xDEFB,
    836: 0xFFFF, 838: 0xF79E, 840: 0xFFFF, 845: 0xD6BA,
    848: 0xFFFF, 853: 0xE71C, 856: 0xFFFF, 859: 0x001F, 862: 0x001F,
    865: 0x001F, 869: 0x001F, 874: 0x001F, 877: 0x001F, 883: 0xDEFB,
    899: 0xFFFF, 901: 0xE71C, 904: 0xFFFF, 905: 0xFFFF, 906: 0xEF5D, 907: 0xFFFF,
    912: 0xFFFF, 913: 0xFFFF, 914: 0xFFFF, 916: 0xFFFF, 920: 0xFFFF,
    923: 0xFFFF, 924: 0xFFFF, 926: 0xFFFF, 927: 0xFFFF,
    932: 0xFFFD, 935: 0xFFFF, 936: 0xFFFF, 941: 0xFFDF, 942: 0xF79E,
    947: 0xDEFB, 961: 0xDEFB, 1011: 0xDEFB, 1023: 0xFFFF,
    1075: 0xEF5D, 1076: 0xFFFF, 1077: 0xFFFF, 1083: 0xDEFB, 1084: 0xFFFF, 1085: 0xFFFF,
    1141: 0xE71C, 1142: 0xEF5D, 1143: 0xFFFF, 1144: 0xFFFF, 1145: 0xFFFF,
}

CLOCKWISE_LOGO: tuple[int, ...] = tuple(
    _LOGO_PIXELS.get(index, 0) for index in range(LOGO_WIDTH * LOGO_HEIGHT)
)


class RestartRequested(Exception):
    """Raised when the device is asked to restart and no restart hook is set."""


def _raise_restart() -> None:
    raise RestartRequested("restart requested")


class StatusController:
    """Draws start-up status screens and blinks the status LED."""

    def __init__(
        self,
        display: Canvas | None = None,
        led: Callable[[bool], None] | None = None,
        sleep: Callable[[float], None] = time.sleep,
        restart: Callable[[], None] = _raise_restart,
    ) -> None:
        self._display = display
        self._led = led
        self._sleep = sleep
        self._restart = restart
        self.led_on = False

    @property
    def display(self) -> Canvas:
        """The display given at construction, or the located one."""
        return self._display if self._display is not None else Locator.display()

    def clockwise_logo(self) -> None:
        self.display.draw_rgb_bitmap(1, 1, CLOCKWISE_LOGO, LOGO_WIDTH, LOGO_HEIGHT)

    def _status_screen(self, icon: bytes, color: int, message: str) -> None:
        display = self.display
        display.fill_rect(0, 24, 64, 52, 0)
        display.draw_bitmap(16, 24, icon, STATUS_ICON_SIZE, STATUS_ICON_SIZE, color)
        self.print_center(message, 61)

    def wifi_connecting(self) -> None:
        self._status_screen(CW_STATUS_WIFI, WIFI_COLOR, "Connecting WiFi")

    def wifi_connection_failed(self, message: str) -> None:
        self._status_screen(CW_STATUS_WIFI, WIFI_FAILED_COLOR, message)

    def ntp_connecting(self) -> None:
        self._status_screen(CW_STATUS_NTP, NTP_COLOR, "NTP Server")

    def print_center(self, text: str, y: int) -> None:
        """Print ``text`` in white, centred horizontally, on baseline ``y``."""
        display = self.display
        display.set_font(PICOPIXEL)
        _, _, width, _ = display.text_bounds(text, 0, y)
        display.set_cursor(32 - width // 2, y)
        display.set_text_color(0xFFFF)
        display.print(text)

    def _set_led(self, on: bool) -> None:
        self.led_on = on
        if self._led is not None:
            self._led(on)

    def blink_led(self, delay_ms: int, times: int) -> None:
        """Switch the LED on and off ``times`` times, ``delay_ms`` per phase."""
        for _ in range(times):
            self._set_led(True)
            self._sleep(delay_ms / 1000)
            self._set_led(False)
            self._sleep(delay_ms / 1000)

    def force_restart(self) -> None:
        """Wait a second, then restart the device."""
        self._sleep(1.0)
        self._restart()