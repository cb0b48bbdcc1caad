"""Tests for single and repeated carving."""

import numpy as np
import pytest

from conftest import make_image
from energy import EnergyField
from errors import DimensionError
from ops import carve, carve_n
from seams import find_seam
from utils import Config


class TestCarve:
    def test_reduces_width_by_one(self, random_image):
        out = carve(random_image)
        assert (out.width, out.height) == (random_image.width - 1, random_image.height)

    def test_non_seam_pixels_unchanged(self, random_image):
        _, seam = find_seam(EnergyField.compute(random_image))
        out = carve(random_image)
        for y in range(random_image.height):
            expected = np.delete(random_image.data[y], seam[y], axis=0)
            np.testing.assert_array_equal(out.data[y], expected)

    def test_center_dot_loses_the_dot(self, center_dot):
        """Seam [0, 1, 0] runs through the white pixel, leaving pure black."""
        out = carve(center_dot)
        assert (out.width, out.height) == (2, 3)
        assert np.all(out.data == 0.0)

    def test_callback_sees_image_and_seam(self, random_image):
        seen = []
        carve(random_image, on_seam=lambda im, seam: seen.append((im.width, seam.tolist())))
        assert len(seen) == 1
        assert seen[0][0] == random_image.width
        assert len(seen[0][1]) == random_image.height


class TestCarveN:
    def test_zero_is_identity(self, random_image):
        out = carve_n(random_image, 0)
        assert out == random_image
        assert out is not random_image

    def test_repeated_carving(self, random_image):
        out = carve_n(random_image, 5)
        assert (out.width, out.height) == (random_image.width - 5, random_image.height)

    def test_matches_sequential_single_carves(self, random_image):
        step = random_image
        for _ in range(3):
            step = carve(step)
        assert carve_n(random_image, 3) == step

    def test_down_to_one_column(self):
        im = make_image(np.random.default_rng(1).random((4, 5, 3)))
        assert carve_n(im, 4).width == 1

    @pytest.mark.parametrize("n", [16, 17, 100])
    def test_too_many_columns_rejected(self, random_image, n):
        before = random_image.copy()
        with pytest.raises(DimensionError):
            carve_n(random_image, n)
        assert random_image == before

    def test_negative_count_rejected(self, random_image):
        with pytest.raises(DimensionError):
            carve_n(random_image, -1)

    def test_no_prune_config_gives_same_image(self, random_image):
        pruned = carve_n(random_image, 4, Config(prune_search=True))
        full = carve_n(random_image, 4, Config(prune_search=False))
        assert pruned == full

    def test_uniform_image_keeps_color(self):
        im = make_image(np.full((6, 6, 3), 0.25))
        out = carve_n(im, 3)
        assert out.width == 3
        assert np.all(out.data == 0.25)

    def test_callback_called_per_seam(self, random_image):
        widths = []
        carve_n(random_image, 3, on_seam=lambda im, seam: widths.append(im.width))
        assert widths == [16, 15, 14]
