"""
Common type definitions for the face quality assessment pipeline.

This module provides Pydantic-based type definitions for the upstream
artifacts consumed by the quality measures: images, face bounding boxes,
landmark points and landmark sets.

These types provide:
- Type validation and conversion
- Consistent interfaces across modules
- Helper methods for common geometric operations
- Integration with numpy arrays and OpenCV
"""

from typing import Any, Tuple, Union

import numpy as np
from pydantic import BaseModel, Field, field_validator, model_validator


class ImageBuffer(BaseModel):
    """
    Type-safe wrapper for image arrays (numpy.ndarray).

    Used for the original input image and the aligned face crop. Ensures
    images are valid numpy arrays with appropriate shapes and dtypes.

    Attributes:
        data: The underlying numpy array containing image data.
            Shape: (H, W, C) for color images, (H, W) for grayscale.
            Dtype: uint8 (0-255).

    Example:
        >>> import cv2
        >>> image = cv2.imread("portrait.jpg")
        >>> img_buffer = ImageBuffer(data=image)
        >>> print(img_buffer.height, img_buffer.width)  # 480, 640
    """

    data: np.ndarray = Field(..., description="Image data as numpy array")

    model_config = {"arbitrary_types_allowed": True}

    @field_validator("data")
    @classmethod
    def _validate_image(cls, v: np.ndarray) -> np.ndarray:
        """
        Validate that the numpy array is a valid image.

        Raises:
            ValueError: If array is not a valid image format.
        """
        if not isinstance(v, np.ndarray):
            raise ValueError(f"Expected numpy.ndarray, got {type(v)}")

        if v.size == 0:
            raise ValueError("Image array is empty")

        if len(v.shape) not in (2, 3):
            raise ValueError(
                f"Expected 2D (grayscale) or 3D (color) image, got shape {v.shape}"
            )

        if len(v.shape) == 3 and v.shape[2] not in (1, 3, 4):
            raise ValueError(
                f"Expected 1, 3, or 4 channels for color image, got {v.shape[2]}"
            )

        if v.dtype != np.uint8:
            raise ValueError(
                f"Expected uint8 dtype for image, got {v.dtype}. "
                "Images should be in range [0, 255]"
            )

        return v

    @property
    def shape(self) -> Tuple[int, ...]:
        """Get image shape."""
        return self.data.shape

    @property
    def height(self) -> int:
        """Get image height in pixels."""
        return self.data.shape[0]

    @property
    def width(self) -> int:
        """Get image width in pixels."""
        return self.data.shape[1]

    @property
    def is_grayscale(self) -> bool:
        return len(self.data.shape) == 2 or self.data.shape[2] == 1

    def to_numpy(self) -> np.ndarray:
        return self.data

    def __repr__(self) -> str:
        return f"ImageBuffer(shape={self.shape}, dtype={self.data.dtype})"


class Landmark(BaseModel):
    """
    A single 2D facial landmark (x, y) in pixel coordinates.

    Unlike detector keypoints, landmark coordinates keep their sub-pixel
    precision; distances between landmarks feed directly into raw scores.

    Example:
        >>> left = Landmark(x=100.5, y=200.0)
        >>> right = Landmark.from_numpy(np.array([160.5, 200.0]))
        >>> left.distance_to(right)
        60.0
    """

    x: float = Field(..., description="X-coordinate (horizontal)")
    y: float = Field(..., description="Y-coordinate (vertical)")

    model_config = {"frozen": True}

    @field_validator("x", "y", mode="before")
    @classmethod
    def _convert_to_float(cls, v: Any) -> float:
        if isinstance(v, (int, float, np.integer, np.floating)):
            return float(v)
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "Landmark":
        """
        Create Landmark from numpy array of shape (2,).

        Raises:
            ValueError: If array shape is not (2,).
        """
        arr = np.asarray(arr)
        if arr.shape != (2,):
            raise ValueError(f"Expected array of shape (2,), got {arr.shape}")
        return cls(x=float(arr[0]), y=float(arr[1]))

    def to_numpy(self) -> np.ndarray:
        return np.array([self.x, self.y], dtype=np.float64)

    def to_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def distance_to(self, other: "Landmark") -> float:
        """Euclidean distance to another landmark."""
        return float(np.hypot(self.x - other.x, self.y - other.y))

    def midpoint(self, other: "Landmark") -> "Landmark":
        return Landmark(x=(self.x + other.x) / 2.0, y=(self.y + other.y) / 2.0)

    def __repr__(self) -> str:
        return f"Landmark(x={self.x:.2f}, y={self.y:.2f})"


class FaceLandmarks(BaseModel):
    """
    Ordered, index-addressed set of facial landmarks.

    The default layout is the 98-point WFLW scheme produced by ADNet-style
    landmark regressors. The coordinate array is copied and frozen on
    construction so downstream measures cannot alter upstream results.

    Attributes:
        points: Array of shape (N, 2) with [x, y] per landmark.

    Example:
        >>> landmarks = FaceLandmarks(points=np.zeros((98, 2)))
        >>> landmarks[96]
        Landmark(x=0.00, y=0.00)
    """

    points: np.ndarray = Field(..., description="Landmark coordinates, shape (N, 2)")

    model_config = {"arbitrary_types_allowed": True, "frozen": True}

    @field_validator("points", mode="before")
    @classmethod
    def _validate_points(cls, v: Union[np.ndarray, list]) -> np.ndarray:
        """
        Validate and freeze the landmark array.

        Raises:
            ValueError: If the array is not of shape (N, 2) or holds
                non-finite coordinates.
        """
        arr = np.array(v, dtype=np.float64, copy=True)
        if arr.ndim != 2 or arr.shape[1] != 2 or arr.shape[0] == 0:
            raise ValueError(f"Expected landmark array of shape (N, 2), got {arr.shape}")
        if not np.all(np.isfinite(arr)):
            raise ValueError("Landmark coordinates must be finite")
        arr.setflags(write=False)
        return arr

    def __len__(self) -> int:
        return self.points.shape[0]

    def __getitem__(self, index: int) -> Landmark:
        return Landmark.from_numpy(self.points[index])

    def subset(self, indices: Tuple[int, ...]) -> np.ndarray:
        """
        Return the coordinates of the given landmark indices.

        Raises:
            IndexError: If any index is outside the landmark set.
        """
        if any(i < 0 or i >= len(self) for i in indices):
            raise IndexError(
                f"Landmark indices {indices} out of range for {len(self)} landmarks"
            )
        return self.points[list(indices)]

    def __repr__(self) -> str:
        return f"FaceLandmarks(n={len(self)})"


class BBox(BaseModel):
    """
    Type-safe representation of a face bounding box [x_min, y_min, x_max, y_max].

    Attributes:
        x_min: Minimum X-coordinate (left edge).
        y_min: Minimum Y-coordinate (top edge).
        x_max: Maximum X-coordinate (right edge).
        y_max: Maximum Y-coordinate (bottom edge).

    Example:
        >>> bbox = BBox(x_min=100, y_min=50, x_max=500, y_max=300)
        >>> print(bbox.width, bbox.height)  # 400, 250
        >>> bbox2 = BBox.from_numpy(np.array([100, 50, 500, 300]))
    """

    x_min: int = Field(..., description="Minimum X-coordinate (left edge)")
    y_min: int = Field(..., description="Minimum Y-coordinate (top edge)")
    x_max: int = Field(..., description="Maximum X-coordinate (right edge)")
    y_max: int = Field(..., description="Maximum Y-coordinate (bottom edge)")

    @field_validator("x_min", "y_min", "x_max", "y_max", mode="before")
    @classmethod
    def _convert_to_int(cls, v: Any) -> int:
        """Convert coordinate to int, rounding if float."""
        if isinstance(v, (int, float, np.integer, np.floating)):
            return int(round(float(v)))
        raise ValueError(f"Coordinate must be numeric, got {type(v)}")

    @model_validator(mode="after")
    def _validate_bbox(self) -> "BBox":
        """
        Validate bbox coordinates after initialization.

        Raises:
            ValueError: If coordinates are invalid.
        """
        if self.x_min >= self.x_max:
            raise ValueError(
                f"Invalid bbox: x_min ({self.x_min}) must be < x_max ({self.x_max})"
            )
        if self.y_min >= self.y_max:
            raise ValueError(
                f"Invalid bbox: y_min ({self.y_min}) must be < y_max ({self.y_max})"
            )
        return self

    @classmethod
    def from_numpy(cls, arr: np.ndarray) -> "BBox":
        """
        Create BBox from numpy array of shape (4,).

        Raises:
            ValueError: If array shape is not (4,).
        """
        arr = np.asarray(arr)
        if arr.shape != (4,):
            raise ValueError(f"Expected array of shape (4,), got {arr.shape}")
        return cls(
            x_min=float(arr[0]),
            y_min=float(arr[1]),
            x_max=float(arr[2]),
            y_max=float(arr[3]),
        )

    def to_list(self) -> list:
        return [self.x_min, self.y_min, self.x_max, self.y_max]

    @property
    def width(self) -> int:
        return self.x_max - self.x_min

    @property
    def height(self) -> int:
        return self.y_max - self.y_min

    @property
    def area(self) -> int:
        return self.width * self.height

    def __repr__(self) -> str:
        return (
            f"BBox(x_min={self.x_min}, y_min={self.y_min}, "
            f"x_max={self.x_max}, y_max={self.y_max})"
        )
