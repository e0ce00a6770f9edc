"""Brightness control and the command that starts the clock."""

from __future__ import annotations

import argparse
import sys
import time

from .clocktime import ClockTime
from .display import Canvas, Locator
from .preferences import ClockwiseParams, PreferenceStore
from .status import StatusController
from .webserver import FIRMWARE_NAME, FIRMWARE_VERSION, SettingsServer

MIN_BRIGHT_DISPLAY_ON = 4
MIN_BRIGHT_DISPLAY_OFF = 0
BRIGHT_SLOTS = 10
CHECK_INTERVAL_MS = 3000
SLOT_HYSTERESIS = 2


def map_range(value: int, in_min: int, in_max: int, out_min: int, out_max: int) -> int:
    """Re-map ``value`` linearly, truncating toward zero like integer C division."""
    run = in_max - in_min
    if run == 0:
        raise ValueError("input range is empty: in_min equals in_max")
    numerator = (value - in_min) * (out_max - out_min)
    quotient = abs(numerator) // abs(run)
    if (numerator < 0) != (run < 0):
        quotient = -quotient
    return quotient + out_min


def in_active_hours(hour: int, start: int, end: int) -> bool:
    """Return True when ``hour`` lies in ``[start, end)``, wrapping past midnight."""
    if start < end:
        return start <= hour < end
    return hour >= start or hour < end


class BrightnessController:
    """Adjusts the panel brightness from the light sensor or the time of day."""

    def __init__(self, params: ClockwiseParams, display: Canvas) -> None:
        self.params = params
        self.display = display
        self.auto_bright_enabled = params.auto_bright_max > 0
        self.current_slot = 0xFF
        self._auto_bright_ms = 0
        self._time_control_ms = 0

    def _apply(self, slot: int, brightness: int) -> int | None:
        if abs(self.current_slot - slot) >= SLOT_HYSTERESIS or brightness == 0:
            self.display.set_brightness(brightness)
            self.current_slot = slot
            return brightness
        return None

    def auto_bright(self, ldr_value: int, now_ms: int) -> int | None:
        """Follow the light sensor; return the brightness set, or None."""
        if not self.auto_bright_enabled:
            return None
        if now_ms - self._auto_bright_ms <= CHECK_INTERVAL_MS:
            return None
        ldr_min = self.params.auto_bright_min
        ldr_max = self.params.auto_bright_max
        min_bright = MIN_BRIGHT_DISPLAY_OFF if ldr_value < ldr_min else MIN_BRIGHT_DISPLAY_ON
        max_bright = self.params.display_bright
        slot = map_range(min(ldr_value, ldr_max), ldr_min, ldr_max, 1, BRIGHT_SLOTS) & 0xFF
        brightness = map_range(slot, 1, BRIGHT_SLOTS, min_bright, max_bright) & 0xFF
        result = self._apply(slot, brightness)
        self._auto_bright_ms = now_ms
        return result

    def time_control(self, hour: int, now_ms: int) -> int | None:
        """Use day or night brightness by the hour; return the brightness set, or None."""
        if not self.params.time_control:
            target = self.params.display_bright
            return self._apply(target, target)
        if now_ms - self._time_control_ms <= CHECK_INTERVAL_MS:
            return None
        if in_active_hours(hour, self.params.active_hour_start, self.params.active_hour_end):
            target = self.params.display_bright
        else:
            target = self.params.night_bright
        result = self._apply(target, target)
        self._time_control_ms = now_ms
        return result


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clockwise", description="Run the clock.")
    parser.add_argument("--prefs", help="JSON file that holds the settings")
    parser.add_argument("--serve", action="store_true", help="run the settings server")
    parser.add_argument("--host", default="", help="address for the settings server")
    parser.add_argument("--port", type=int, default=80, help="port for the settings server")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Start the clock: show status screens, set the time zone and brightness."""
    args = _build_parser().parse_args(argv)
    params = ClockwiseParams(store=PreferenceStore(args.prefs))

    canvas = Canvas()
    canvas.set_brightness(params.display_bright)
    Locator.provide_display(canvas)
    status = StatusController(canvas)
    status.clockwise_logo()
    status.ntp_connecting()

    clock = ClockTime()
    try:
        clock.begin(params.time_zone, params.use_24h_format,
                    params.ntp_server, params.manual_posix)
    except (KeyError, ValueError) as error:
        print(f"clockwise: cannot set time zone: {error}", file=sys.stderr)
        return 1

    controller = BrightnessController(params, canvas)
    controller.time_control(int(clock.formatted_time("G")), int(time.monotonic() * 1000))

    print(f"{FIRMWARE_NAME} {FIRMWARE_VERSION}")
    print(clock.formatted_time())
    print(f"brightness {canvas.brightness}")

    if args.serve:
        server = SettingsServer(params, status)
        try:
            server.serve_forever(args.host, args.port)
        except KeyboardInterrupt:
            pass
    return 0


if __name__ == "__main__":
    sys.exit(main())