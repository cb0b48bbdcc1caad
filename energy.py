"""
Energy map for seam carving.

Per-pixel energy is the central-difference gradient magnitude of brightness:

    x_energy = 0.5 * (right - left)
    y_energy = 0.5 * (up - down)
    energy   = sqrt(x_energy**2 + y_energy**2) / sqrt(0.5)

Neighbours outside the image are replaced by the pixel itself (edge clamping),
which is exactly scipy.ndimage's 'nearest' mode for a one-pixel reach.
The result is not clamped.
"""

from __future__ import annotations

import numpy as np
from scipy import ndimage as ndi

from grid import BRIGHTNESS_WEIGHTS, Grid, Image

_X_KERNEL = np.array([-0.5, 0.0, 0.5])  # -0.5*left + 0.5*right
_Y_KERNEL = np.array([0.5, 0.0, -0.5])  # 0.5*up - 0.5*down
_SCALE = np.sqrt(0.5)


def brightness_map(im: np.ndarray) -> np.ndarray:
    """HxWx3 float image -> HxW brightness."""
    return np.asarray(im, dtype=np.float64) @ BRIGHTNESS_WEIGHTS


def gradient_energy(im: np.ndarray) -> np.ndarray:
    """
    Edge-clamped gradient-magnitude energy.
    Input: im (HxWx3) float64 RGB.
    Output: energy map (HxW) float64, always >= 0.
    """
    lum = brightness_map(im)
    if lum.size == 0:
        return np.zeros(lum.shape, dtype=np.float64)
    xgrad = ndi.correlate1d(lum, _X_KERNEL, axis=1, mode="nearest")
    ygrad = ndi.correlate1d(lum, _Y_KERNEL, axis=0, mode="nearest")
    return np.sqrt(xgrad ** 2 + ygrad ** 2) / _SCALE


class EnergyField(Grid[float]):
    """Scalar energy per pixel, same dimensions as the source image."""

    @classmethod
    def compute(cls, image: Image) -> "EnergyField":
        return cls.from_array(gradient_energy(image.data))
