"""The HTTP settings server: read and change the clock's preferences."""

from __future__ import annotations

import re
import socketserver
from collections.abc import Callable
from dataclasses import dataclass
from typing import BinaryIO

from .preferences import ClockwiseParams
from .status import RestartRequested, StatusController

FIRMWARE_VERSION = "1.2.2"
FIRMWARE_NAME = "Clockwise"
CLOCKFACE_NAME = "UNKNOWN"
NO_CONTENT = b"HTTP/1.0 204 No Content\r\n"
DEFAULT_PAGE = "<!DOCTYPE html><html><body><h1>Clockwise</h1></body></html>"


@dataclass
class Request:
    method: str
    path: str
    key: str = ""
    value: str = ""


def parse_request_line(line: str) -> Request:
    """Split ``METHOD /path?key=value HTTP/x`` into its parts."""
    method, _, rest = line.partition(" ")
    path = rest.split(" ", 1)[0].rstrip("\r\n")
    key = value = ""
    query_at = path.find("?")
    if query_at > 0:
        query = path[query_at + 1:]
        key, _, value = query.partition("=")
        path = path[:query_at]
    return Request(method, path, key, value)


def _to_int(text: str) -> int:
    match = re.match(r"\s*[+-]?\d+", text)
    return int(match.group()) if match else 0


_INT_SETTINGS = {
    ClockwiseParams.PREF_DISPLAY_BRIGHT: ("display_bright", 0xFF),
    ClockwiseParams.PREF_LDR_PIN: ("ldr_pin", 0xFF),
    ClockwiseParams.PREF_DISPLAY_ROTATION: ("display_rotation", 0xFF),
    ClockwiseParams.PREF_ACTIVE_HOUR_START: ("active_hour_start", 0xFF),
    ClockwiseParams.PREF_ACTIVE_HOUR_END: ("active_hour_end", 0xFF),
}
_TEXT_SETTINGS = {
    ClockwiseParams.PREF_WIFI_SSID: "wifi_ssid",
    ClockwiseParams.PREF_WIFI_PASSWORD: "wifi_pwd",
    ClockwiseParams.PREF_TIME_ZONE: "time_zone",
    ClockwiseParams.PREF_NTP_SERVER: "ntp_server",
    ClockwiseParams.PREF_CANVAS_FILE: "canvas_file",
    ClockwiseParams.PREF_CANVAS_SERVER: "canvas_server",
    ClockwiseParams.PREF_MANUAL_POSIX: "manual_posix",
}
_FLAG_SETTINGS = {
    ClockwiseParams.PREF_SWAP_BLUE_GREEN: "swap_blue_green",
    ClockwiseParams.PREF_USE_24H_FORMAT: "use_24h_format",
    ClockwiseParams.PREF_ENABLE_TIME_CONTROL: "time_control",
}


def apply_setting(params: ClockwiseParams, key: str, value: str) -> None:
    """Change the setting named ``key``; unknown keys are ignored."""
    if key in _INT_SETTINGS:
        name, mask = _INT_SETTINGS[key]
        setattr(params, name, _to_int(value) & mask)
    elif key in _TEXT_SETTINGS:
        setattr(params, _TEXT_SETTINGS[key], value)
    elif key in _FLAG_SETTINGS:
        setattr(params, _FLAG_SETTINGS[key], value == "1")
    elif key == "autoBright":
        params.auto_bright_min = _to_int(value[0:4]) & 0xFFFF
        params.auto_bright_max = _to_int(value[5:9]) & 0xFFFF


def settings_headers(params: ClockwiseParams, firmware_version: str = FIRMWARE_VERSION,
                     firmware_name: str = FIRMWARE_NAME,
                     clockface_name: str = CLOCKFACE_NAME) -> list[str]:
    """Return the ``X-name: value`` header lines describing the settings."""
    p = ClockwiseParams
    pairs = [
        (p.PREF_DISPLAY_BRIGHT, params.display_bright),
        (p.PREF_DISPLAY_ABC_MIN, params.auto_bright_min),
        (p.PREF_DISPLAY_ABC_MAX, params.auto_bright_max),
        (p.PREF_SWAP_BLUE_GREEN, int(params.swap_blue_green)),
        (p.PREF_USE_24H_FORMAT, int(params.use_24h_format)),
        (p.PREF_LDR_PIN, params.ldr_pin),
        (p.PREF_TIME_ZONE, params.time_zone),
        (p.PREF_WIFI_SSID, params.wifi_ssid),
        (p.PREF_NTP_SERVER, params.ntp_server),
        (p.PREF_CANVAS_FILE, params.canvas_file),
        (p.PREF_CANVAS_SERVER, params.canvas_server),
        (p.PREF_MANUAL_POSIX, params.manual_posix),
        (p.PREF_DISPLAY_ROTATION, params.display_rotation),
        (p.PREF_ENABLE_TIME_CONTROL, int(params.time_control)),
        (p.PREF_ACTIVE_HOUR_START, params.active_hour_start),
        (p.PREF_ACTIVE_HOUR_END, params.active_hour_end),
        ("CW_FW_VERSION", firmware_version),
        ("CW_FW_NAME", firmware_name),
        ("CLOCKFACE_NAME", clockface_name),
    ]
    return [f"X-{name}: {value}\r\n" for name, value in pairs]


class SettingsServer:
    """Answers the settings page and its small key/value API."""

    def __init__(self, params: ClockwiseParams, status: StatusController | None = None,
                 analog_read: Callable[[int], int] = lambda pin: 0,
                 settings_page: str = DEFAULT_PAGE,
                 firmware_version: str = FIRMWARE_VERSION,
                 firmware_name: str = FIRMWARE_NAME,
                 clockface_name: str = CLOCKFACE_NAME) -> None:
        self.params = params
        self.status = status
        self.analog_read = analog_read
        self.settings_page = settings_page
        self.firmware_version = firmware_version
        self.firmware_name = firmware_name
        self.clockface_name = clockface_name
        self.force_restart = False

    def process_request(self, request: Request) -> bytes:
        """Return the raw response for ``request``; empty when nothing matches."""
        method, path = request.method, request.path
        if method == "GET" and path == "/":
            return (b"HTTP/1.0 200 OK\r\nContent-Type: text/html\r\n\r\n"
                    + self.settings_page.encode() + b"\r\n")
        if method == "GET" and path == "/get":
            self.params.load()
            headers = settings_headers(self.params, self.firmware_version,
                                       self.firmware_name, self.clockface_name)
            return NO_CONTENT + "".join(headers).encode() + b"\r\n"
        if method == "GET" and path == "/read":
            if request.key != "pin":
                return b""
            self.params.load()
            reading = self.analog_read(_to_int(request.value) & 0xFFFF)
            return NO_CONTENT + f"X-{request.key}: {reading}\r\n\r\n".encode()
        if method == "POST" and path == "/restart":
            self.force_restart = True
            return NO_CONTENT
        if method == "POST" and path == "/set":
            apply_setting(self.params, request.key, request.value)
            self.params.save()
            return NO_CONTENT
        return b""

    def _restart(self) -> None:
        if self.status is not None:
            self.status.force_restart()
        else:
            raise RestartRequested("restart requested")

    def handle_connection(self, stream: BinaryIO) -> None:
        """Read one request line from ``stream`` and write the response."""
        if self.force_restart:
            self._restart()
        line = stream.readline().decode("latin-1")
        if not line.endswith("\n"):
            return
        stream.write(self.process_request(parse_request_line(line)))
        stream.flush()

    def serve_forever(self, host: str = "", port: int = 80) -> None:
        server = self

        class _Handler(socketserver.StreamRequestHandler):
            def handle(self) -> None:
                with self.connection.makefile("rwb") as stream:
                    server.handle_connection(stream)

        with socketserver.TCPServer((host, port), _Handler) as tcp:
            tcp.serve_forever()