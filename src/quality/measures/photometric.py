"""
Photometric measures on the aligned face image.

Sharpness, exposure, luminance, dynamic range, illumination uniformity and
colour naturalness are evaluated inside the landmarked face region (convex
hull of the aligned landmarks). Background uniformity
is evaluated on the pixels the face parser labels as background.
"""

import logging
import math
from abc import abstractmethod
from typing import Optional, Tuple

import cv2
import numpy as np

from src.landmarks.face_measures import eye_midpoint, landmarked_region_mask
from src.quality.config_loader import MeasureConfig
from src.quality.measures.base import (
    FAILURE_TO_ASSESS,
    SUCCESS,
    Measure,
    score_or_failure,
)
from src.quality.session import Session
from src.quality.types import (
    QualityMeasure,
    QualityMeasureReturnCode,
    SigmoidParameters,
)
from src.utils.constants import (
    LUMINANCE_HISTOGRAM_BINS,
    OVER_EXPOSURE_LUMINANCE,
    PARSING_BACKGROUND,
    UNDER_EXPOSURE_LUMINANCE,
)

logger = logging.getLogger(__name__)


def to_grayscale(image: np.ndarray) -> np.ndarray:
    """Convert a BGR, BGRA or single-channel image to a 2D grayscale array."""
    if image.ndim == 2:
        return image
    if image.shape[2] == 1:
        return image[:, :, 0]
    if image.shape[2] == 4:
        return cv2.cvtColor(image, cv2.COLOR_BGRA2GRAY)
    return cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)


def face_region_pixels(session: Session) -> Tuple[np.ndarray, np.ndarray]:
    """
    Grayscale aligned face and boolean mask of the landmarked face region.

    Raises:
        MissingArtifactError: If the aligned face or its landmarks are absent.
    """
    gray = to_grayscale(session.get_aligned_face())
    mask = landmarked_region_mask(session.get_aligned_landmarks(), gray.shape) > 0
    return gray, mask


def fit_mask(mask: np.ndarray, shape: Tuple[int, ...]) -> np.ndarray:
    """Resize a label mask to (H, W) with nearest-neighbour sampling."""
    height, width = shape[:2]
    if mask.shape[:2] == (height, width):
        return mask
    return cv2.resize(
        mask.astype(np.uint8), (width, height), interpolation=cv2.INTER_NEAREST
    )


class Sharpness(Measure):
    """
    Sharpness as variance of the Laplacian inside the face region.

    Theory:
        - Laplacian measures the 2nd derivative (edge strength)
        - Sharp images have strong edges and therefore high variance
    """

    measure = QualityMeasure.SHARPNESS
    default_sigmoid = SigmoidParameters(h=100, x0=100.0, w=40.0)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        if not mask.any():
            return math.nan, FAILURE_TO_ASSESS

        # CV_64F keeps negative responses for the variance
        laplacian = cv2.Laplacian(gray, cv2.CV_64F)
        sharpness = float(laplacian[mask].var())

        logger.debug(f"Sharpness (Laplacian variance): {sharpness:.2f}")
        return sharpness, SUCCESS


class _ExposureMeasure(Measure):
    """Share of face-region pixels beyond a luminance threshold."""

    default_threshold = 0
    default_sigmoid = SigmoidParameters(h=100, x0=0.0, w=0.1).inverted()

    def __init__(self, config: Optional[MeasureConfig] = None):
        super().__init__(config)
        self.threshold = float(
            self.config.get_param("threshold", self.default_threshold)
        )

    @abstractmethod
    def _exposed(self, gray: np.ndarray) -> np.ndarray:
        """Boolean mask of pixels beyond the threshold."""

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        exposed = np.count_nonzero(self._exposed(gray) & mask)
        return score_or_failure(float(exposed), float(np.count_nonzero(mask)))


class UnderExposurePrevention(_ExposureMeasure):
    """Share of underexposed face pixels (luminance below threshold)."""

    measure = QualityMeasure.UNDER_EXPOSURE_PREVENTION
    default_threshold = UNDER_EXPOSURE_LUMINANCE

    def _exposed(self, gray: np.ndarray) -> np.ndarray:
        return gray < self.threshold


class OverExposurePrevention(_ExposureMeasure):
    """Share of overexposed face pixels (luminance above threshold)."""

    measure = QualityMeasure.OVER_EXPOSURE_PREVENTION
    default_threshold = OVER_EXPOSURE_LUMINANCE

    def _exposed(self, gray: np.ndarray) -> np.ndarray:
        return gray > self.threshold


class DynamicRange(Measure):
    """
    Dynamic range as Shannon entropy (bits) of the face luminance histogram.

    A face spanning the full tonal range reaches close to 8 bits; flat or
    clipped faces score low.
    """

    measure = QualityMeasure.DYNAMIC_RANGE
    default_sigmoid = SigmoidParameters(h=100, x0=5.0, w=0.8)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        values = gray[mask]
        if values.size == 0:
            return math.nan, FAILURE_TO_ASSESS

        histogram = np.bincount(
            values.ravel().astype(np.int64), minlength=LUMINANCE_HISTOGRAM_BINS
        )
        p = histogram[histogram > 0] / values.size
        entropy = float(-(p * np.log2(p)).sum())
        return entropy, SUCCESS


class BackgroundUniformity(Measure):
    """
    Background uniformity as mean gradient magnitude over background pixels.

    Background pixels are those the face parser labels as background. A
    plain backdrop has near-zero gradients and maps to high quality.
    """

    measure = QualityMeasure.BACKGROUND_UNIFORMITY
    default_sigmoid = SigmoidParameters(h=190, a=1, s=-1, x0=10, w=100)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray = to_grayscale(session.get_aligned_face()).astype(np.float64)
        parsing = fit_mask(session.get_face_parsing(), gray.shape)
        label = int(self.config.get_param("background_label", PARSING_BACKGROUND))
        background = parsing == label
        if not background.any():
            return math.nan, FAILURE_TO_ASSESS

        dx = cv2.Sobel(gray, cv2.CV_64F, 1, 0, ksize=3)
        dy = cv2.Sobel(gray, cv2.CV_64F, 0, 1, ksize=3)
        magnitude = np.sqrt(dx**2 + dy**2)
        return float(magnitude[background].mean()), SUCCESS


class LuminanceMean(Measure):
    """
    Brightness as mean normalised luminance of the face region.

    Raw score: mean luminance in [0, 1]. The quality mapping receives the
    deviation from the target brightness ``|x - target|`` (default 0.5).
    """

    measure = QualityMeasure.LUMINANCE_MEAN
    default_sigmoid = SigmoidParameters(h=100, x0=0.0, w=0.15).inverted()
    default_target = 0.5

    def __init__(self, config: Optional[MeasureConfig] = None):
        super().__init__(config)
        self.target = float(self.config.get_param("target", self.default_target))

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        if not mask.any():
            return math.nan, FAILURE_TO_ASSESS
        return float(gray[mask].mean()) / 255.0, SUCCESS

    def mapping_argument(self, raw_score: float) -> float:
        return abs(raw_score - self.target)


class LuminanceVariance(Measure):
    """Contrast as variance of the normalised luminance of the face region."""

    measure = QualityMeasure.LUMINANCE_VARIANCE
    default_sigmoid = SigmoidParameters(h=100, x0=0.01, w=0.004)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        if not mask.any():
            return math.nan, FAILURE_TO_ASSESS
        return float((gray[mask] / 255.0).var()), SUCCESS


class IlluminationUniformity(Measure):
    """
    Left/right illumination balance of the face.

    The face region is split at the eye midpoint. Raw score: intersection
    (sum of bin-wise minima) of the normalised luminance histograms of both
    halves; 1.0 for identical lighting, 0.0 for disjoint lighting.
    """

    measure = QualityMeasure.ILLUMINATION_UNIFORMITY
    default_sigmoid = SigmoidParameters(h=100, x0=0.5, w=0.1)
    default_bins = 32

    def __init__(self, config: Optional[MeasureConfig] = None):
        super().__init__(config)
        self.bins = int(self.config.get_param("bins", self.default_bins))

    def _histogram(self, values: np.ndarray) -> np.ndarray:
        histogram, _ = np.histogram(values, bins=self.bins, range=(0, 256))
        return histogram / values.size

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        gray, mask = face_region_pixels(session)
        split = int(round(eye_midpoint(session.get_aligned_landmarks()).x))

        columns = np.arange(gray.shape[1])
        left = gray[mask & (columns < split)[np.newaxis, :]]
        right = gray[mask & (columns >= split)[np.newaxis, :]]
        if left.size == 0 or right.size == 0:
            return math.nan, FAILURE_TO_ASSESS

        overlap = np.minimum(self._histogram(left), self._histogram(right)).sum()
        return float(overlap), SUCCESS


class NaturalColour(Measure):
    """
    Colour naturalness of the face region in CIELAB.

    Raw score: Euclidean distance of the mean (a*, b*) chromaticity of the
    face region from the skin tone box a* in ``a_range`` (default [5, 25])
    and b* in ``b_range`` (default [5, 35]); 0.0 inside the box.
    Grayscale faces cannot be assessed.
    """

    measure = QualityMeasure.NATURAL_COLOUR
    default_sigmoid = SigmoidParameters(h=100, x0=0.0, w=10.0).inverted()

    def __init__(self, config: Optional[MeasureConfig] = None):
        super().__init__(config)
        self.a_range = tuple(self.config.get_param("a_range", (5.0, 25.0)))
        self.b_range = tuple(self.config.get_param("b_range", (5.0, 35.0)))

    @staticmethod
    def _outside(value: float, bounds: Tuple[float, float]) -> float:
        low, high = bounds
        return max(0.0, low - value, value - high)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        image = session.get_aligned_face()
        if image.ndim == 2 or image.shape[2] == 1:
            logger.warning("NaturalColour requires a colour image")
            return math.nan, FAILURE_TO_ASSESS
        if image.shape[2] == 4:
            image = cv2.cvtColor(image, cv2.COLOR_BGRA2BGR)

        mask = landmarked_region_mask(session.get_aligned_landmarks(), image.shape) > 0
        if not mask.any():
            return math.nan, FAILURE_TO_ASSESS

        # Float input keeps L* in [0, 100] and a*, b* unscaled
        lab = cv2.cvtColor(image.astype(np.float32) / 255.0, cv2.COLOR_BGR2Lab)
        mean_a = float(lab[:, :, 1][mask].mean())
        mean_b = float(lab[:, :, 2][mask].mean())

        logger.debug(f"Mean chromaticity a*={mean_a:.2f}, b*={mean_b:.2f}")
        return (
            math.hypot(
                self._outside(mean_a, self.a_range), self._outside(mean_b, self.b_range)
            ),
            SUCCESS,
        )
