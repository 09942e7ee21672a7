"""
Tests for chirality correction.
"""

import numpy as np
import pytest
from numpy.testing import assert_array_equal

from keratograph.models.cornea import CartesianPoints
from keratograph.services.chirality import correct_chirality


@pytest.fixture
def points():
    return CartesianPoints(
        x=np.array([1.0, -0.3, 0.0, 2.5]),
        y=np.array([0.0, 0.7, -1.2, 1e-17]),
        z=np.array([0.0643, 0.25, 1.0, 0.0]),
    )


class TestCorrectChirality:
    """Tests for correct_chirality."""

    def test_negates_only_z(self, points):
        result = correct_chirality(points, True)

        assert_array_equal(result.x, points.x)
        assert_array_equal(result.y, points.y)
        assert_array_equal(result.z, -points.z)

    def test_x_and_y_bitwise_identical(self, points):
        result = correct_chirality(points, True)
        assert result.x.tobytes() == points.x.tobytes()
        assert result.y.tobytes() == points.y.tobytes()

    def test_flag_false_passes_through(self, points):
        result = correct_chirality(points, False)

        assert_array_equal(result.as_array(), points.as_array())

    def test_involutive(self, points):
        """Correcting twice restores the original z."""
        twice = correct_chirality(correct_chirality(points, True), True)
        assert_array_equal(twice.z, points.z)

    def test_input_is_not_modified(self, points):
        original_z = points.z.copy()
        result = correct_chirality(points, True)

        assert result is not points
        assert_array_equal(points.z, original_z)
        assert not result.z.flags.writeable

    def test_concave_surface_after_correction(self, points):
        """Unsigned depths become non-positive z (surface away from observer)."""
        result = correct_chirality(points, True)
        assert np.all(result.z <= 0)

    def test_empty(self):
        empty = CartesianPoints(x=[], y=[], z=[])
        assert len(correct_chirality(empty, True)) == 0
