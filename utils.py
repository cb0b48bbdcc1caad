"""
Utilities and configuration for the seam-carving project.

This module defines:
  - Config: Immutable dataclass storing the seam-search and output options.
  - Lightweight helpers for output directories and 8-bit conversion.

Design notes:
  - Core computation uses float64 RGB in [0, 1]; 8-bit data only appears at
    the edges (visualization frames).
"""

from __future__ import annotations
from dataclasses import dataclass
import os

import numpy as np


@dataclass(frozen=True)
class Config:
    """Immutable configuration container for the seam-carving algorithm."""
    prune_search: bool = True
    check_seams: bool = True
    output_max_value: int = 255


def ensure_parent_dir(path: str) -> None:
    """Create the directory that will hold `path`, if it does not exist."""
    out_dir = os.path.dirname(os.path.abspath(path))
    if out_dir and not os.path.exists(out_dir):
        os.makedirs(out_dir, exist_ok=True)


def to_uint8(im: np.ndarray) -> np.ndarray:
    """Float image in [0, 1] -> uint8 in [0, 255], clipping out-of-range values."""
    return np.clip(np.rint(np.asarray(im, dtype=np.float64) * 255.0), 0, 255).astype(np.uint8)
