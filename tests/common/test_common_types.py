"""
Unit tests for common type definitions.
"""

import numpy as np
import pytest
from pydantic import ValidationError

from src.common.types import BBox, FaceLandmarks, ImageBuffer, Landmark


class TestImageBuffer:
    """Tests for ImageBuffer."""

    def test_valid_color_image(self):
        buffer = ImageBuffer(data=np.zeros((48, 64, 3), dtype=np.uint8))
        assert buffer.height == 48
        assert buffer.width == 64
        assert not buffer.is_grayscale

    def test_grayscale_image(self):
        assert ImageBuffer(data=np.zeros((10, 10), dtype=np.uint8)).is_grayscale

    def test_wrong_dtype(self):
        with pytest.raises(ValidationError, match="uint8"):
            ImageBuffer(data=np.zeros((10, 10), dtype=np.float32))

    def test_wrong_shape(self):
        with pytest.raises(ValidationError):
            ImageBuffer(data=np.zeros((10,), dtype=np.uint8))

    def test_empty(self):
        with pytest.raises(ValidationError):
            ImageBuffer(data=np.zeros((0, 10), dtype=np.uint8))


class TestLandmark:
    """Tests for Landmark."""

    def test_distance(self):
        assert Landmark(x=0, y=0).distance_to(Landmark(x=3, y=4)) == 5.0

    def test_midpoint(self):
        assert Landmark(x=0, y=0).midpoint(Landmark(x=10, y=4)).to_tuple() == (5.0, 2.0)

    def test_from_numpy(self):
        landmark = Landmark.from_numpy(np.array([1.5, 2.5]))
        assert landmark.x == 1.5
        assert landmark.y == 2.5

    def test_from_numpy_wrong_shape(self):
        with pytest.raises(ValueError):
            Landmark.from_numpy(np.array([1.0, 2.0, 3.0]))


class TestFaceLandmarks:
    """Tests for FaceLandmarks."""

    def test_indexing(self):
        points = np.arange(196, dtype=np.float64).reshape(98, 2)
        landmarks = FaceLandmarks(points=points)
        assert len(landmarks) == 98
        assert landmarks[96].to_tuple() == (192.0, 193.0)

    def test_points_copied_and_read_only(self):
        points = np.zeros((98, 2))
        landmarks = FaceLandmarks(points=points)
        points[0] = (5, 5)
        assert landmarks[0].to_tuple() == (0.0, 0.0)
        with pytest.raises(ValueError):
            landmarks.points[0, 0] = 1.0

    def test_accepts_list(self):
        assert len(FaceLandmarks(points=[[0, 0], [1, 1]])) == 2

    def test_invalid_shape(self):
        with pytest.raises(ValidationError):
            FaceLandmarks(points=np.zeros((98, 3)))

    def test_non_finite(self):
        points = np.zeros((98, 2))
        points[5, 0] = np.nan
        with pytest.raises(ValidationError, match="finite"):
            FaceLandmarks(points=points)

    def test_subset(self):
        landmarks = FaceLandmarks(points=np.arange(196, dtype=np.float64).reshape(98, 2))
        np.testing.assert_array_equal(landmarks.subset((0, 97)), [[0, 1], [194, 195]])
        with pytest.raises(IndexError):
            landmarks.subset((98,))


class TestBBox:
    """Tests for BBox."""

    def test_dimensions(self):
        bbox = BBox(x_min=100, y_min=50, x_max=500, y_max=300)
        assert bbox.width == 400
        assert bbox.height == 250
        assert bbox.area == 100000

    def test_from_numpy(self):
        assert BBox.from_numpy(np.array([1.4, 2.6, 10, 20])).to_list() == [1, 3, 10, 20]

    def test_invalid_coordinates(self):
        with pytest.raises(ValidationError):
            BBox(x_min=10, y_min=0, x_max=5, y_max=10)
