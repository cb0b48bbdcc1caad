"""Tests for Grid, PixelColor and Image."""

import numpy as np
import pytest

from errors import DimensionError, IndexFault
from grid import BLACK, Grid, Image, PixelColor


class TestPixelColor:
    def test_brightness_weights(self):
        """Brightness weights are 0.0722 r + 0.7152 g + 0.2126 b."""
        assert PixelColor(1.0, 0.0, 0.0).brightness() == pytest.approx(0.0722)
        assert PixelColor(0.0, 1.0, 0.0).brightness() == pytest.approx(0.7152)
        assert PixelColor(0.0, 0.0, 1.0).brightness() == pytest.approx(0.2126)

    def test_white_brightness_is_one(self):
        assert PixelColor(1.0, 1.0, 1.0).brightness() == pytest.approx(1.0)

    def test_map_applies_to_every_channel(self):
        c = PixelColor(0.1, 0.2, 0.4).map(lambda v: v * 2)
        assert c == PixelColor(0.2, 0.4, 0.8)

    def test_out_of_range_values_propagate(self):
        c = PixelColor(2.0, -1.0, 0.5)
        assert c.map(lambda v: v).r == 2.0
        assert c.brightness() == pytest.approx(0.1444 - 0.7152 + 0.1063)


class TestGrid:
    def test_fill_value(self):
        g = Grid(4, 3, 0.0)
        assert g.width == 4 and g.height == 3
        assert all(g.at(x, y) == 0.0 for x in range(4) for y in range(3))

    def test_set_then_at(self):
        g = Grid(4, 3, 0.0)
        g.set(3, 2, 7.5)
        assert g.at(3, 2) == 7.5
        # row-major: (x=3, y=2) is the last element
        assert g.data.reshape(-1)[-1] == 7.5

    @pytest.mark.parametrize("x,y", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
    def test_out_of_bounds_raises(self, x, y):
        g = Grid(4, 3, 0.0)
        with pytest.raises(IndexFault):
            g.at(x, y)
        with pytest.raises(IndexFault):
            g.set(x, y, 1.0)

    def test_index_fault_is_index_error(self):
        with pytest.raises(IndexError):
            Grid(1, 1, 0.0).at(1, 0)

    def test_copy_is_independent(self):
        g = Grid(2, 2, 1.0)
        c = g.copy()
        c.set(0, 0, 5.0)
        assert g.at(0, 0) == 1.0
        assert c != g

    def test_from_array_rejects_wrong_rank(self):
        with pytest.raises(DimensionError):
            Grid.from_array(np.zeros((2, 2, 3)))

    def test_negative_size_rejected(self):
        with pytest.raises(DimensionError):
            Grid(-1, 2)


class TestImage:
    def test_default_is_black(self):
        im = Image(3, 2)
        assert im.at(2, 1) == BLACK
        assert im.data.shape == (2, 3, 3)

    def test_set_and_read_pixel(self):
        im = Image(3, 2)
        im.set(1, 0, PixelColor(0.25, 0.5, 1.0))
        assert im.at(1, 0) == PixelColor(0.25, 0.5, 1.0)
        assert im.at(0, 0) == BLACK

    def test_equality(self):
        a = Image(2, 2, PixelColor(0.5, 0.5, 0.5))
        b = Image(2, 2, PixelColor(0.5, 0.5, 0.5))
        assert a == b
        b.set(0, 1, BLACK)
        assert a != b
        assert a != Image(3, 2, PixelColor(0.5, 0.5, 0.5))
