"""RGB565 colour helpers used by the display code."""

from __future__ import annotations


def _components(color: int) -> tuple[int, int, int]:
    """Split an RGB565 value into its raw 5/6/5-bit channels."""
    color &= 0xFFFF
    return (color >> 11) & 0x1F, (color >> 5) & 0x3F, color & 0x1F


def color565(r: int, g: int, b: int) -> int:
    """Pack 8-bit red, green and blue values into an RGB565 colour."""
    r &= 0xFF
    g &= 0xFF
    b &= 0xFF
    return ((r & 0xF8) << 8) | ((g & 0xFC) << 3) | (b >> 3)


def adjust_bright(color: int, bright: int) -> int:
    """Add ``bright`` to every channel of ``color`` and repack it.

    Each channel sum wraps to eight bits before repacking.
    """
    bright &= 0xFF
    red, green, blue = (
        (channel + bright) & 0xFF for channel in _components(color)
    )
    return color565(red, green, blue)


def brighter(color: int, factor: int) -> int:
    """Scale every channel by ``factor // 10``, capped at 255, and repack it."""
    multiplier = (factor & 0xFF) // 10
    red, green, blue = (
        min(channel * multiplier, 255) for channel in _components(color)
    )
    return color565(red, green, blue)