"""Drawing, settings, time, settings server and brightness control for a 64x64 LED matrix clock."""

__version__ = "1.2.2"

__all__ = [
    "app",
    "clocktime",
    "colors",
    "display",
    "events",
    "font",
    "httpclient",
    "icons",
    "images",
    "preferences",
    "sprite",
    "status",
    "webserver",
    "wifi",
]