"""Shared test fixtures for the seam-carving test suite."""

import sys
import os

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest

from grid import Image


def make_image(rgb):
    """Build an Image from a nested (H, W, 3) list/array."""
    return Image.from_array(np.asarray(rgb, dtype=np.float64))


def make_gray_image(values):
    """Image whose three channels all equal `values` (H, W)."""
    values = np.asarray(values, dtype=np.float64)
    return Image.from_array(np.repeat(values[:, :, None], 3, axis=2))


@pytest.fixture
def center_dot():
    """3x3 black image with a white centre pixel."""
    data = np.zeros((3, 3, 3))
    data[1, 1] = 1.0
    return make_image(data)


@pytest.fixture
def random_image():
    rng = np.random.default_rng(42)
    return make_image(rng.random((12, 16, 3)))
