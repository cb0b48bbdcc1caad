"""
Error types for the seam-carving project.

Everything a caller is expected to handle derives from SeamCarvingError.
IndexFault marks a programming defect (out-of-range grid access) and is also
an IndexError so it behaves like one outside this codebase.
"""

from __future__ import annotations


class SeamCarvingError(RuntimeError):
    """Base class for seam-carving failures."""


class FormatError(SeamCarvingError):
    """The input is not a plain-text P3 image."""


class ParseError(SeamCarvingError):
    """A token where a number was expected could not be parsed."""


class ExhaustionError(SeamCarvingError):
    """The input ended before the pixel grid was filled."""


class DimensionError(SeamCarvingError):
    """A size or count is incompatible with the image."""


class IndexFault(SeamCarvingError, IndexError):
    """Grid access outside [0, width) x [0, height)."""
