"""Helpers for row-major RGB565 images."""

from __future__ import annotations

from collections.abc import MutableSequence, Sequence


def _check_size(image: Sequence[int], width: int, height: int) -> None:
    if width < 0 or height < 0:
        raise ValueError("image dimensions must not be negative")
    if len(image) < width * height:
        raise ValueError(
            f"image holds {len(image)} pixels, {width}x{height} needs {width * height}"
        )


def _rows(width: int, height: int):
    for row in range(height):
        start = row * width
        yield start, start + width


def flip_horizontally(image: MutableSequence[int], width: int, height: int) -> None:
    """Mirror each row of ``image`` in place."""
    _check_size(image, width, height)
    for start, end in _rows(width, height):
        image[start:end] = image[start:end][::-1]


def flip_horizontally_clone(image: Sequence[int], width: int, height: int) -> list[int]:
    """Return a horizontally mirrored copy of ``image``."""
    _check_size(image, width, height)
    flipped: list[int] = []
    for start, end in _rows(width, height):
        flipped.extend(reversed(image[start:end]))
    return flipped


def clone(image: Sequence[int]) -> list[int]:
    """Return an independent copy of ``image``."""
    return list(image)