"""Wall-clock time for the clock faces, in a configured time zone."""

from __future__ import annotations

import calendar
import re
from abc import ABC, abstractmethod
from collections.abc import Callable
from datetime import date, datetime, timedelta, timezone, tzinfo
from zoneinfo import ZoneInfo

DEFAULT_NTP_SERVER = "ntp1.aliyun.com"
DEFAULT_FORMAT = r"l, d-M-Y H:i:s T"

_NAME = r"<[^>]+>|[A-Za-z]{3,}"
_OFFSET = r"[+-]?\d{1,2}(?::\d{2}(?::\d{2})?)?"
_POSIX_RE = re.compile(
    rf"^(?P<std>{_NAME})(?P<off>{_OFFSET})"
    rf"(?:(?P<dst>{_NAME})(?P<doff>{_OFFSET})?"
    r"(?:,(?P<start>[^,]+),(?P<end>[^,]+))?)?$"
)
_RULE_RE = re.compile(r"^M(\d{1,2})\.(\d)\.(\d)(?:/(" + _OFFSET + r"))?$")


def _seconds(text: str) -> int:
    sign = -1 if text.startswith("-") else 1
    parts = [int(p) for p in text.lstrip("+-").split(":")]
    parts += [0] * (3 - len(parts))
    return sign * (parts[0] * 3600 + parts[1] * 60 + parts[2])


class _Rule:
    def __init__(self, spec: str) -> None:
        match = _RULE_RE.match(spec)
        if not match:
            raise ValueError(f"unsupported transition rule {spec!r}")
        self.month, self.week, self.day = (int(match.group(i)) for i in (1, 2, 3))
        if not (1 <= self.month <= 12 and 1 <= self.week <= 5 and self.day <= 6):
            raise ValueError(f"transition rule {spec!r} is out of range")
        self.time = _seconds(match.group(4)) if match.group(4) else 7200

    def at(self, year: int) -> datetime:
        first = date(year, self.month, 1)
        first_dow = (first.weekday() + 1) % 7
        day = 1 + (self.day - first_dow) % 7 + (self.week - 1) * 7
        last = calendar.monthrange(year, self.month)[1]
        while day > last:
            day -= 7
        return datetime(year, self.month, day) + timedelta(seconds=self.time)


class PosixTimezone(tzinfo):
    """A time zone described by a POSIX TZ string with M-form DST rules."""

    def __init__(self, std: str, std_offset: timedelta, dst: str | None = None,
                 dst_offset: timedelta | None = None,
                 start: _Rule | None = None, end: _Rule | None = None) -> None:
        self.std, self.std_offset = std, std_offset
        self.dst_name, self.dst_offset = dst, dst_offset
        self.start, self.end = start, end

    def _in_dst(self, dt: datetime | None) -> bool:
        if dt is None or self.dst_name is None or self.start is None:
            return False
        local = dt.replace(tzinfo=None)
        start, end = self.start.at(local.year), self.end.at(local.year)
        if start < end:
            return start <= local < end
        return not (end <= local < start)

    def utcoffset(self, dt):
        return self.dst_offset if self._in_dst(dt) else self.std_offset

    def dst(self, dt):
        if self._in_dst(dt):
            return self.dst_offset - self.std_offset
        return timedelta(0)

    def tzname(self, dt):
        return self.dst_name if self._in_dst(dt) else self.std

    def fromutc(self, dt):
        standard = dt + self.std_offset
        if self._in_dst(standard.replace(tzinfo=self)):
            return dt + self.dst_offset
        return standard


def parse_posix_tz(spec: str) -> PosixTimezone:
    """Parse a POSIX TZ string such as ``CST-8`` or ``EST5EDT,M3.2.0,M11.1.0``."""
    match = _POSIX_RE.match(spec.strip())
    if not match:
        raise ValueError(f"invalid POSIX time zone {spec!r}")
    std = match.group("std").strip("<>")
    std_offset = timedelta(seconds=-_seconds(match.group("off")))
    if not match.group("dst"):
        return PosixTimezone(std, std_offset)
    dst = match.group("dst").strip("<>")
    doff = match.group("doff")
    dst_offset = (timedelta(seconds=-_seconds(doff)) if doff
                  else std_offset + timedelta(hours=1))
    start = end = None
    if match.group("start"):
        start, end = _Rule(match.group("start")), _Rule(match.group("end"))
    else:
        start, end = _Rule("M3.2.0"), _Rule("M11.1.0")
    return PosixTimezone(std, std_offset, dst, dst_offset, start, end)


def format_time(moment: datetime, fmt: str) -> str:
    """Format ``moment`` with PHP-style letters; a backslash escapes one character."""
    hour12 = moment.hour % 12 or 12
    codes: dict[str, Callable[[], str]] = {
        "d": lambda: f"{moment.day:02d}",
        "j": lambda: str(moment.day),
        "D": lambda: moment.strftime("%a"),
        "l": lambda: moment.strftime("%A"),
        "w": lambda: str((moment.weekday() + 1) % 7 + 1),
        "m": lambda: f"{moment.month:02d}",
        "n": lambda: str(moment.month),
        "M": lambda: moment.strftime("%b"),
        "F": lambda: moment.strftime("%B"),
        "Y": lambda: f"{moment.year:04d}",
        "y": lambda: f"{moment.year % 100:02d}",
        "H": lambda: f"{moment.hour:02d}",
        "G": lambda: str(moment.hour),
        "h": lambda: f"{hour12:02d}",
        "g": lambda: str(hour12),
        "i": lambda: f"{moment.minute:02d}",
        "s": lambda: f"{moment.second:02d}",
        "v": lambda: f"{moment.microsecond // 1000:03d}",
        "A": lambda: "AM" if moment.hour < 12 else "PM",
        "a": lambda: "am" if moment.hour < 12 else "pm",
        "T": lambda: moment.tzname() or "",
    }
    out: list[str] = []
    escaped = False
    for char in fmt:
        if escaped:
            out.append(char)
            escaped = False
        elif char == "\\":
            escaped = True
        elif char in codes:
            out.append(codes[char]())
        else:
            out.append(char)
    return "".join(out)


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ClockTime:
    """The current time in the configured zone, in the pieces a clock face needs."""

    def __init__(self, clock: Callable[[], datetime] = _utc_now) -> None:
        self._clock = clock
        self._tz: tzinfo = timezone.utc
        self.use_24h_format = True
        self.ntp_server = DEFAULT_NTP_SERVER

    def begin(self, time_zone: str, use_24h_format: bool,
              ntp_server: str = DEFAULT_NTP_SERVER, posix_tz: str = "") -> None:
        """Select the zone: a manual POSIX string wins over the zone name."""
        self.ntp_server = ntp_server
        if len(posix_tz) > 1:
            self._tz = parse_posix_tz(posix_tz)
        else:
            self._tz = ZoneInfo(time_zone)
        self.use_24h_format = use_24h_format

    def _now(self) -> datetime:
        return self._clock().astimezone(self._tz)

    def formatted_time(self, fmt: str = DEFAULT_FORMAT) -> str:
        return format_time(self._now(), fmt)

    def _hour_code(self) -> str:
        return "H" if self.use_24h_format else "h"

    def hour_text(self) -> str:
        return self.formatted_time(self._hour_code())[:2]

    def minute_text(self) -> str:
        return self.formatted_time("i")[:2]

    def hour(self) -> int:
        return int(self.formatted_time(self._hour_code()))

    def minute(self) -> int:
        return int(self.formatted_time("i"))

    def second(self) -> int:
        return int(self.formatted_time("s"))

    def milliseconds(self) -> int:
        return self._now().microsecond // 1000

    def day(self) -> int:
        return int(self.formatted_time("d"))

    def month(self) -> int:
        return int(self.formatted_time("m"))

    def weekday(self) -> int:
        """Day of the week, 0 for Sunday to 6 for Saturday."""
        return int(self.formatted_time("w")) - 1

    def is_am(self) -> bool:
        return self._now().hour < 12

    def is_24h_format(self) -> bool:
        return self.use_24h_format


class Clockface(ABC):
    """A face that draws the time on the display."""

    @abstractmethod
    def setup(self, clock_time: ClockTime) -> None:
        """Prepare the face to show ``clock_time``."""

    @abstractmethod
    def update(self) -> None:
        """Redraw whatever has changed."""