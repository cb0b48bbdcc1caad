from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional, Tuple

import numpy as np
from numba import njit

from errors import DimensionError, IndexFault
from energy import EnergyField
from grid import Image


class Direction(IntEnum):
    """Predecessor of a DP cell, as a column offset into the row above."""
    LEFT = -1
    UP = 0  # straight, no horizontal offset
    RIGHT = 1


# Direction code stored for row 0, which has no predecessor.
NO_PREDECESSOR = 2

_LEFT = -1
_UP = 0
_RIGHT = 1


@dataclass(frozen=True)
class SeamCell:
    cost: float
    direction: Optional[Direction]


# ==========================
# Numba-compiled DP helpers
# ==========================
@njit(cache=True)
def _dp_accumulate(energy: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    """
    Build the cumulative-cost table for an energy matrix (float64 HxW).
    Returns:
      - cost: float64 HxW, cheapest total energy of a seam from row 0 ending here
      - direction: int8 HxW, predecessor offset (-1, 0, 1) or NO_PREDECESSOR on row 0
    Ties go to Left, then Right, then straight Up.
    """
    h, w = energy.shape
    cost = np.zeros((h, w), dtype=np.float64)
    direction = np.full((h, w), NO_PREDECESSOR, dtype=np.int8)

    for j in range(w):
        cost[0, j] = energy[0, j]

    for i in range(1, h):
        for j in range(w):
            left = cost[i - 1, j - 1] if j > 0 else np.inf
            up = cost[i - 1, j]
            right = cost[i - 1, j + 1] if j < w - 1 else np.inf
            min_cost = min(left, up, right)
            if min_cost == left:
                direction[i, j] = _LEFT
            elif min_cost == right:
                direction[i, j] = _RIGHT
            else:
                direction[i, j] = _UP
            cost[i, j] = energy[i, j] + min_cost

    return cost, direction


@njit(cache=True)
def _dp_extract(cost: np.ndarray, direction: np.ndarray, prune: bool) -> tuple[float, np.ndarray]:
    """
    Pick the last-row column with the lowest cumulative cost and walk up its
    predecessor chain. With `prune`, a column whose cost already exceeds the
    best so far is not walked. Only a strictly lower cost replaces the
    incumbent, so the leftmost of equal-cost seams wins.
    Returns (total, seam) with seam[i] the column in row i.
    """
    h, w = cost.shape
    best_total = np.inf
    best_seam = np.empty(0, dtype=np.int64)
    path = np.empty(h, dtype=np.int64)

    for start in range(w):
        total = cost[h - 1, start]
        if prune and total > best_total:
            continue
        n = 0
        j = start
        i = h - 1
        while True:
            path[n] = j
            n += 1
            step = direction[i, j]
            if step == NO_PREDECESSOR:
                break
            j += step
            i -= 1

        if n == h and total < best_total:
            best_total = total
            best_seam = path[::-1].copy()

    return best_total, best_seam


# ==============
# DP TABLE
# ==============
class SeamTable:
    """Cumulative-cost DP table with predecessor directions."""

    def __init__(self, cost: np.ndarray, direction: np.ndarray):
        self.cost = cost
        self.direction = direction

    @classmethod
    def build(cls, energy: EnergyField) -> "SeamTable":
        _require_nonempty(energy)
        cost, direction = _dp_accumulate(energy.data)
        return cls(cost, direction)

    @property
    def width(self) -> int:
        return self.cost.shape[1]

    @property
    def height(self) -> int:
        return self.cost.shape[0]

    def at(self, x: int, y: int) -> SeamCell:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexFault(f"({x}, {y}) is outside a {self.width}x{self.height} SeamTable")
        code = int(self.direction[y, x])
        return SeamCell(
            float(self.cost[y, x]),
            None if code == NO_PREDECESSOR else Direction(code),
        )


def _require_nonempty(energy: EnergyField) -> None:
    if energy.width == 0 or energy.height == 0:
        raise DimensionError(
            f"cannot find a seam in a {energy.width}x{energy.height} energy field"
        )


# =======================
# CORE DP / SEAM SEARCH
# =======================
def find_seam(energy: EnergyField, prune: bool = True) -> Tuple[float, np.ndarray]:
    """
    Find the vertical seam of minimum total energy.

    Returns:
        total: cumulative DP cost of the seam's bottom cell (its summed energy)
        seam: int64 array (H,), seam[y] is the column removed from row y
    """
    table = SeamTable.build(energy)
    total, seam = _dp_extract(table.cost, table.direction, prune)
    return float(total), seam


def is_connected(seam: np.ndarray) -> bool:
    """True if consecutive seam entries differ by at most one column."""
    seam = np.asarray(seam)
    return seam.size < 2 or bool(np.all(np.abs(np.diff(seam)) <= 1))


def check_seam(image: Image, seam: np.ndarray, connected: bool = False) -> None:
    """Raise if `seam` cannot be removed from `image`."""
    seam = np.asarray(seam)
    if seam.ndim != 1 or seam.shape[0] != image.height:
        raise DimensionError(
            f"seam has {seam.size} entries, image height is {image.height}"
        )
    if seam.size and (seam.min() < 0 or seam.max() >= image.width):
        raise IndexFault(f"seam leaves columns [0, {image.width})")
    if connected and not is_connected(seam):
        raise IndexFault("seam jumps more than one column between rows")


# ==============
# SEAM HELPERS
# ==============
def remove_seam(image: Image, seam: np.ndarray) -> Image:
    """Remove a vertical seam: returns a new (W-1)xH image, `image` is untouched."""
    check_seam(image, seam)
    h, w = image.height, image.width
    boolmask = np.ones((h, w), dtype=np.bool_)
    boolmask[np.arange(h), np.asarray(seam, dtype=np.int64)] = False
    return Image.from_array(image.data[boolmask].reshape((h, w - 1, 3)))
