"""
Dense 2D containers.

  - Grid[T]: fixed-size, row-major grid over a numpy buffer with
    bounds-checked at()/set().
  - PixelColor: immutable RGB triple with a brightness projection.
  - Image: Grid of PixelColor, black by default.

The numpy buffer is exposed as `.data` with shape (height, width, *cell_shape)
so the vectorised stages (energy, carving) can work on it directly.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Callable, Generic, Tuple, TypeVar

import numpy as np

from errors import DimensionError, IndexFault

T = TypeVar("T")

# Weights applied to (r, g, b). Blue-heavy relative to BT.709; kept as is.
BRIGHTNESS_WEIGHTS = np.array([0.0722, 0.7152, 0.2126], dtype=np.float64)


@dataclass(frozen=True)
class PixelColor:
    """RGB color, channels nominally in [0, 1] (not enforced)."""
    r: float
    g: float
    b: float

    def brightness(self) -> float:
        return 0.0722 * self.r + 0.7152 * self.g + 0.2126 * self.b

    def map(self, f: Callable[[float], float]) -> "PixelColor":
        """Apply `f` to each channel."""
        return PixelColor(f(self.r), f(self.g), f(self.b))


BLACK = PixelColor(0.0, 0.0, 0.0)


class Grid(Generic[T]):
    """
    Fixed-size 2D grid, row-major, 0-indexed (x = column, y = row).

    Subclasses describe their cell layout with `cell_shape` and convert
    between cell values and buffer entries in `_pack` / `_unpack`.
    """
    cell_shape: Tuple[int, ...] = ()
    dtype = np.float64

    def __init__(self, width: int, height: int, fill: T = 0.0):
        if width < 0 or height < 0:
            raise DimensionError(f"grid size must be non-negative, got {width}x{height}")
        self.data = np.empty((height, width) + self.cell_shape, dtype=self.dtype)
        self.data[...] = self._pack(fill)

    @classmethod
    def from_array(cls, data: np.ndarray) -> "Grid[T]":
        """Wrap a copy of `data` (shape (H, W, *cell_shape))."""
        arr = np.array(data, dtype=cls.dtype)
        if arr.ndim != 2 + len(cls.cell_shape) or arr.shape[2:] != cls.cell_shape:
            raise DimensionError(
                f"{cls.__name__} expects shape (H, W{''.join(', %d' % c for c in cls.cell_shape)}), "
                f"got {arr.shape}"
            )
        grid = cls.__new__(cls)
        grid.data = arr
        return grid

    @property
    def width(self) -> int:
        return self.data.shape[1]

    @property
    def height(self) -> int:
        return self.data.shape[0]

    def _check(self, x: int, y: int) -> None:
        if not (0 <= x < self.width and 0 <= y < self.height):
            raise IndexFault(
                f"({x}, {y}) is outside a {self.width}x{self.height} {type(self).__name__}"
            )

    def at(self, x: int, y: int) -> T:
        self._check(x, y)
        return self._unpack(self.data[y, x])

    def set(self, x: int, y: int, value: T) -> None:
        self._check(x, y)
        self.data[y, x] = self._pack(value)

    def copy(self) -> "Grid[T]":
        return type(self).from_array(self.data)

    def _pack(self, value):
        return value

    def _unpack(self, raw) -> T:
        return raw.item()

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.data.shape == other.data.shape and bool(np.array_equal(self.data, other.data))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.width}x{self.height})"


class Image(Grid[PixelColor]):
    """Width x height grid of PixelColor."""
    cell_shape = (3,)

    def __init__(self, width: int, height: int, fill: PixelColor = BLACK):
        super().__init__(width, height, fill)

    def _pack(self, value: PixelColor):
        return (value.r, value.g, value.b)

    def _unpack(self, raw) -> PixelColor:
        return PixelColor(float(raw[0]), float(raw[1]), float(raw[2]))
