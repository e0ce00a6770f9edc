"""Tracks the network connection and stores new Wi-Fi credentials."""

from __future__ import annotations

from collections.abc import Callable

from .preferences import ClockwiseParams
from .status import RestartRequested, StatusController

OFFLINE_RESTART_MS = 1000 * 60 * 5


class ConnectionMonitor:
    """Restarts the device when it stays offline too long before first success."""

    def __init__(self, params: ClockwiseParams, status: StatusController | None = None,
                 on_connected: Callable[[], None] | None = None) -> None:
        self.params = params
        self.status = status
        self.on_connected = on_connected
        self.elapsed_time_offline = 0
        self.connection_successful_once = False

    def check(self, connected: bool, now_ms: int) -> bool:
        """Record the connection state at ``now_ms`` and return it."""
        if connected:
            self.elapsed_time_offline = 0
            return True
        if self.elapsed_time_offline == 0 and not self.connection_successful_once:
            self.elapsed_time_offline = now_ms
        if now_ms - self.elapsed_time_offline > OFFLINE_RESTART_MS:
            if self.status is not None:
                self.status.force_restart()
            else:
                raise RestartRequested("offline for too long")
        return False

    def on_credentials(self, ssid: str, password: str) -> None:
        """Save newly received credentials and start the settings service."""
        self.params.load()
        self.params.wifi_ssid = ssid
        self.params.wifi_pwd = password
        self.params.save()
        if self.on_connected is not None:
            self.on_connected()