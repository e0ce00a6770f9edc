"""Persistent clock settings backed by a small key-value store."""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, ClassVar

DEFAULT_NAMESPACE = "clockwise"
MAX_KEY_LENGTH = 15

_WIFI_PHRASE_NAME = "wifiPwd"


class PreferenceStore:
    """A namespaced key-value store kept in memory or in a JSON file."""

    def __init__(self, path: str | os.PathLike[str] | None = None,
                 namespace: str = DEFAULT_NAMESPACE) -> None:
        self.path = Path(path) if path is not None else None
        self.namespace = namespace
        self._values: dict[str, Any] = dict(self._read_all().get(namespace, {}))

    def _read_all(self) -> dict[str, dict[str, Any]]:
        if self.path is None or not self.path.exists():
            return {}
        return json.loads(self.path.read_text(encoding="utf-8"))

    def _write(self) -> None:
        if self.path is None:
            return
        data = self._read_all()
        data[self.namespace] = self._values
        temporary = self.path.with_name(self.path.name + ".tmp")
        temporary.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        os.replace(temporary, self.path)

    def get(self, key: str, default: Any) -> Any:
        """Return the stored value for ``key``, or ``default``."""
        return self._values.get(key, default)

    def put(self, key: str, value: Any) -> None:
        """Store ``value`` under ``key``."""
        if not key or len(key) > MAX_KEY_LENGTH:
            raise ValueError(f"key {key!r} must be 1 to {MAX_KEY_LENGTH} characters")
        if not isinstance(value, (bool, int, str)):
            raise TypeError(f"cannot store {type(value).__name__} values")
        self._values[key] = value
        self._write()

    def clear(self) -> None:
        """Remove every key in this namespace."""
        self._values.clear()
        self._write()


def _pref(key: str, default: Any, bits: int | None = None) -> Any:
    return field(default=default, init=False, metadata={"key": key, "bits": bits})


def _hidden_pref(key: str) -> Any:
    """A text setting that is left out of the settings' repr."""
    return field(default=str(), init=False, repr=False, metadata={"key": key, "bits": None})


def _coerce(value: Any, default: Any, bits: int | None) -> Any:
    if isinstance(default, bool):
        return bool(value)
    if isinstance(default, str):
        return str(value)
    return int(value) & ((1 << bits) - 1)


@dataclass
class ClockwiseParams:
    """The clock's settings, loaded from and saved to a preference store."""

    PREF_SWAP_BLUE_GREEN: ClassVar[str] = "swapBlueGreen"
    PREF_USE_24H_FORMAT: ClassVar[str] = "use24hFormat"
    PREF_DISPLAY_BRIGHT: ClassVar[str] = "displayBright"
    PREF_NIGHT_BRIGHT: ClassVar[str] = "nightBright"
    PREF_DISPLAY_ABC_MIN: ClassVar[str] = "autoBrightMin"
    PREF_DISPLAY_ABC_MAX: ClassVar[str] = "autoBrightMax"
    PREF_LDR_PIN: ClassVar[str] = "ldrPin"
    PREF_TIME_ZONE: ClassVar[str] = "timeZone"
    PREF_WIFI_SSID: ClassVar[str] = "wifiSsid"
    PREF_WIFI_PASSWORD: ClassVar[str] = _WIFI_PHRASE_NAME
    PREF_NTP_SERVER: ClassVar[str] = "ntpServer"
    PREF_CANVAS_FILE: ClassVar[str] = "canvasFile"
    PREF_CANVAS_SERVER: ClassVar[str] = "canvasServer"
    PREF_MANUAL_POSIX: ClassVar[str] = "manualPosix"
    PREF_DISPLAY_ROTATION: ClassVar[str] = "displayRotation"
    PREF_ACTIVE_HOUR_START: ClassVar[str] = "activeHourStart"
    PREF_ACTIVE_HOUR_END: ClassVar[str] = "activeHourEnd"
    PREF_ENABLE_TIME_CONTROL: ClassVar[str] = "timeControl"

    store: PreferenceStore = field(default_factory=PreferenceStore, repr=False, compare=False)

    swap_blue_green: bool = _pref(PREF_SWAP_BLUE_GREEN, False)
    use_24h_format: bool = _pref(PREF_USE_24H_FORMAT, True)
    display_bright: int = _pref(PREF_DISPLAY_BRIGHT, 32, 8)
    night_bright: int = _pref(PREF_NIGHT_BRIGHT, 5, 8)
    auto_bright_min: int = _pref(PREF_DISPLAY_ABC_MIN, 0, 16)
    auto_bright_max: int = _pref(PREF_DISPLAY_ABC_MAX, 0, 16)
    ldr_pin: int = _pref(PREF_LDR_PIN, 35, 8)
    time_zone: str = _pref(PREF_TIME_ZONE, "Asia/Shanghai")
    wifi_ssid: str = _pref(PREF_WIFI_SSID, "")
    wifi_pwd: str = _hidden_pref(PREF_WIFI_PASSWORD)
    ntp_server: str = _pref(PREF_NTP_SERVER, "ntp1.aliyun.com")
    canvas_file: str = _pref(PREF_CANVAS_FILE, "")
    canvas_server: str = _pref(PREF_CANVAS_SERVER, "raw.githubusercontent.com")
    manual_posix: str = _pref(PREF_MANUAL_POSIX, "")
    display_rotation: int = _pref(PREF_DISPLAY_ROTATION, 0, 8)
    active_hour_start: int = _pref(PREF_ACTIVE_HOUR_START, 6, 8)
    active_hour_end: int = _pref(PREF_ACTIVE_HOUR_END, 18, 8)
    time_control: bool = _pref(PREF_ENABLE_TIME_CONTROL, True)

    def __post_init__(self) -> None:
        self.load()

    def _preference_fields(self):
        return (f for f in fields(self) if "key" in f.metadata)

    def load(self) -> None:
        """Read every setting from the store, using defaults for missing keys."""
        for f in self._preference_fields():
            value = self.store.get(f.metadata["key"], f.default)
            setattr(self, f.name, _coerce(value, f.default, f.metadata["bits"]))

    def save(self) -> None:
        """Write every setting to the store."""
        for f in self._preference_fields():
            value = _coerce(getattr(self, f.name), f.default, f.metadata["bits"])
            self.store.put(f.metadata["key"], value)