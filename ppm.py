"""
Plain-text PPM (P3) reading and writing.

Layout:
    P3
    <width> <height>
    <max value>
    r g b  r g b ...     (any number of triples per line, row-major)

Channels are normalised to floats by dividing by the max value on read, and
scaled by the output max value and rounded half away from zero on write.
"""

from __future__ import annotations
import logging
from typing import Iterable, Iterator, List

import numpy as np

from errors import DimensionError, ExhaustionError, FormatError, ParseError
from grid import Image
from utils import ensure_parent_dir

logger = logging.getLogger(__name__)

MAGIC = "P3"


def round_half_up(values: np.ndarray) -> np.ndarray:
    """Round to the nearest integer, ties away from zero (0.5 -> 1, -0.5 -> -1)."""
    values = np.asarray(values, dtype=np.float64)
    return (np.sign(values) * np.floor(np.abs(values) + 0.5)).astype(np.int64)


def _parse_uint(token: str, what: str) -> int:
    # ASCII digits only, no sign or underscores
    if not (token.isascii() and token.isdigit()):
        raise ParseError(f"expected a non-negative integer for {what}, got {token!r}")
    return int(token)


def _next_line(lines: Iterator[str], what: str) -> str:
    try:
        return next(lines)
    except StopIteration:
        raise ExhaustionError(f"input ended before the {what}") from None


def decode_ppm(lines: Iterable[str]) -> Image:
    """Parse a P3 image from an iterable of text lines."""
    lines = iter(lines)

    try:
        magic = next(lines).strip()
    except StopIteration:
        magic = ""
    if magic != MAGIC:
        raise FormatError(f"image is not of type {MAGIC} (header {magic!r})")

    dims = _next_line(lines, "image size").split()
    if len(dims) != 2:
        raise ParseError(f"expected '<width> <height>', got {' '.join(dims)!r}")
    width = _parse_uint(dims[0], "width")
    height = _parse_uint(dims[1], "height")
    if width == 0 or height == 0:
        raise DimensionError(f"image must have at least one pixel, got {width}x{height}")

    max_tokens = _next_line(lines, "max value").split()
    if len(max_tokens) != 1:
        raise ParseError(f"expected a single max value, got {' '.join(max_tokens)!r}")
    max_value = _parse_uint(max_tokens[0], "max value")
    if max_value == 0:
        raise ParseError("max value must be positive")

    needed = width * height * 3
    channels: List[int] = []
    for line in lines:
        for token in line.split():
            channels.append(_parse_uint(token, "a channel value"))
            if len(channels) == needed:
                break
        if len(channels) == needed:
            break
    else:
        raise ExhaustionError(
            f"image doesn't contain enough pixel data: expected {width * height} pixels, "
            f"got {len(channels) // 3}"
        )

    data = np.array(channels, dtype=np.float64).reshape((height, width, 3)) / float(max_value)
    logger.debug("decoded %dx%d P3 image (max value %d)", width, height, max_value)
    return Image.from_array(data)


def encode_ppm(image: Image, max_value: int = 255) -> str:
    """Serialise `image` as P3 text, one pixel per line."""
    scaled = round_half_up(image.data * float(max_value)).reshape((-1, 3))
    out = [MAGIC, f"{image.width} {image.height}", str(max_value)]
    out.extend(f"{r} {g} {b}" for r, g, b in scaled.tolist())
    logger.debug("encoded %dx%d P3 image", image.width, image.height)
    return "\n".join(out) + "\n"


def load_ppm(path: str) -> Image:
    """Read a P3 image from disk."""
    with open(path, "r", encoding="ascii", errors="replace") as fh:
        return decode_ppm(fh)


def save_ppm(path: str, image: Image, max_value: int = 255) -> None:
    """Write `image` to disk as P3, creating the parent directory if needed."""
    ensure_parent_dir(path)
    with open(path, "w", encoding="ascii") as fh:
        fh.write(encode_ppm(image, max_value))
