"""Tests for the pixel traversal planner."""

import itertools

import numpy as np
import pytest

from libwbm import traversal
from libwbm.errors import ConfigurationError, OutOfRange
from libwbm.types import FlipOptions, PixelOrder, StartCorner

TL, TR, BL, BR = StartCorner
H, V, HA, VA = PixelOrder


class TestLegalPairs:
    def test_ten_pairs(self):
        assert len(traversal.legal_combinations()) == 10

    @pytest.mark.parametrize(
        "corner, order",
        [(TR, V), (TR, VA), (BL, V), (BL, HA), (BR, H), (BR, HA)],
    )
    def test_illegal_pairs_rejected(self, corner, order):
        with pytest.raises(ConfigurationError) as exc:
            traversal.plan(3, 2, corner, order)
        assert str(corner) in str(exc.value)
        assert str(order) in str(exc.value)

    def test_bottom_right_horizontal(self):
        with pytest.raises(ConfigurationError):
            traversal.validate("bottomRight", "horizontal")

    def test_strings_accepted(self):
        assert traversal.validate("bottomLeft", "verticalAlternate") == (BL, VA)

    @pytest.mark.parametrize("corner, order", [("middle", "horizontal"), ("topLeft", "spiral")])
    def test_unknown_names(self, corner, order):
        with pytest.raises(ConfigurationError):
            traversal.validate(corner, order)

    def test_empty_grid(self):
        with pytest.raises(OutOfRange):
            traversal.plan(0, 4, TL, H)


class TestBijection:
    @pytest.mark.parametrize("corner, order", traversal.legal_combinations())
    @pytest.mark.parametrize("width, height", [(1, 1), (1, 5), (4, 1), (3, 4), (5, 2)])
    def test_every_cell_once(self, corner, order, width, height):
        cells = traversal.plan(width, height, corner, order)
        assert len(cells) == width * height
        assert sorted(cells) == list(itertools.product(range(height), range(width)))


class TestOrders:
    # 3 wide x 2 high grid
    @pytest.mark.parametrize(
        "corner, order, expected",
        [
            (TL, H, [(0, 0), (0, 1), (0, 2), (1, 0), (1, 1), (1, 2)]),
            (TL, V, [(0, 0), (1, 0), (0, 1), (1, 1), (0, 2), (1, 2)]),
            (TL, HA, [(0, 0), (0, 1), (0, 2), (1, 2), (1, 1), (1, 0)]),
            (TL, VA, [(0, 0), (1, 0), (1, 1), (0, 1), (0, 2), (1, 2)]),
            (TR, H, [(0, 2), (0, 1), (0, 0), (1, 2), (1, 1), (1, 0)]),
            (TR, HA, [(0, 2), (0, 1), (0, 0), (1, 0), (1, 1), (1, 2)]),
            (BL, H, [(1, 0), (1, 1), (1, 2), (0, 0), (0, 1), (0, 2)]),
            (BL, VA, [(1, 0), (0, 0), (0, 1), (1, 1), (1, 2), (0, 2)]),
            (BR, V, [(1, 2), (0, 2), (1, 1), (0, 1), (1, 0), (0, 0)]),
            (BR, VA, [(1, 2), (0, 2), (0, 1), (1, 1), (1, 0), (0, 0)]),
        ],
    )
    def test_3x2(self, corner, order, expected):
        assert traversal.plan(3, 2, corner, order) == expected

    def test_bottom_right_snake_uses_column_parity(self):
        # width 2: the first visited column is col 1, odd, so it runs top to bottom
        cells = traversal.plan(2, 3, BR, VA)
        assert cells[:3] == [(0, 1), (1, 1), (2, 1)]
        assert cells[3:] == [(2, 0), (1, 0), (0, 0)]


class TestSourceIndices:
    def test_identity(self):
        cells = traversal.plan(3, 2, TL, H)
        assert traversal.source_indices(cells, 3, 2).tolist() == [0, 1, 2, 3, 4, 5]

    def test_flip_horizontal(self):
        cells = traversal.plan(3, 2, TL, H)
        flip = FlipOptions(horizontal=True)
        assert traversal.source_indices(cells, 3, 2, flip).tolist() == [2, 1, 0, 5, 4, 3]

    def test_flip_vertical(self):
        cells = traversal.plan(3, 2, TL, H)
        flip = FlipOptions(vertical=True)
        assert traversal.source_indices(cells, 3, 2, flip).tolist() == [3, 4, 5, 0, 1, 2]

    def test_flip_both_composes_with_corner(self):
        # flipping both ways from bottom right walks the source like top left
        cells = traversal.plan(3, 2, BR, V)
        flip = FlipOptions(horizontal=True, vertical=True)
        expected = traversal.source_indices(traversal.plan(3, 2, TL, V), 3, 2)
        assert np.array_equal(traversal.source_indices(cells, 3, 2, flip), expected)
