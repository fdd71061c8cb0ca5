"""
Unit tests for distance_solver module.
"""

import math

import numpy as np
import pytest

from WR_Libs.constants import DISTANCE_SENTINEL
from WR_Libs.InpaintingLib.distance_solver import eikonal_update, solve_eikonal

S = DISTANCE_SENTINEL


class TestEikonalUpdate:
    """Tests for eikonal_update function."""

    def test_single_known_neighbour(self):
        assert eikonal_update(0.0, S, S, S) == pytest.approx(1.0)

    def test_axes_far_apart_use_one_axis(self):
        """A difference of 1 or more falls back to the smaller axis plus one."""
        assert eikonal_update(2.0, 9.0, 0.5, 9.0) == pytest.approx(1.5)
        assert eikonal_update(3.0, S, 2.0, S) == pytest.approx(3.0)

    def test_two_known_axes(self):
        assert eikonal_update(0.0, S, 0.0, S) == pytest.approx(math.sqrt(2) / 2)

    def test_equal_axes(self):
        assert eikonal_update(1.0, 1.0, 1.0, 1.0) == pytest.approx((2 + math.sqrt(2)) / 2)

    def test_symmetric_in_neighbours(self):
        a = eikonal_update(1.2, 4.0, 1.7, 3.0)

        assert eikonal_update(4.0, 1.2, 3.0, 1.7) == pytest.approx(a)
        assert eikonal_update(1.7, 3.0, 1.2, 4.0) == pytest.approx(a)

    @pytest.mark.parametrize("h,v", [(0.0, 0.3), (1.0, 1.9), (2.5, 2.5), (4.0, 3.1)])
    def test_result_not_below_either_axis(self, h, v):
        """The front never arrives earlier than its upwind neighbours."""
        result = eikonal_update(h, S, v, S)

        assert result >= max(h, v) - 1e-12 or abs(h - v) >= 1.0
        assert result >= min(h, v)
        assert math.isfinite(result)


class TestSolveEikonal:
    """Tests for solve_eikonal on a distance field."""

    def test_reads_neighbours_from_field(self):
        distance = np.full((3, 3), S, dtype=np.float32)
        distance[1, 0] = 0.0

        assert solve_eikonal(distance, 1, 1) == pytest.approx(1.0)

    def test_out_of_field_neighbours_are_sentinel(self):
        distance = np.full((3, 3), S, dtype=np.float32)
        distance[0, 1] = 0.0

        assert solve_eikonal(distance, 0, 0) == pytest.approx(1.0)

    def test_isolated_pixel_stays_large(self):
        distance = np.full((2, 2), S, dtype=np.float32)

        assert solve_eikonal(distance, 0, 0) >= S
