"""
Geometric measures on the original image: inter-eye distance, cropping,
head size and face uniqueness.

These measures use the landmarks and face boxes in original image
coordinates. The crop measures express the margin between the eye midpoint
and one image border in units of the inter-eye distance (IED).
"""

import logging
from abc import abstractmethod
from typing import Optional, Tuple

from src.common.types import Landmark
from src.landmarks.face_measures import eye_midpoint, face_height, inter_eye_distance
from src.quality.config_loader import MeasureConfig
from src.quality.measures.base import SUCCESS, Measure, score_or_failure
from src.quality.session import Session
from src.quality.types import (
    QualityMeasure,
    QualityMeasureReturnCode,
    SigmoidParameters,
)

logger = logging.getLogger(__name__)


class InterEyeDistance(Measure):
    """
    Inter-eye distance in pixels of the original image.

    Raw score: distance between the eye centres. Small faces (far from the
    camera or low resolution) lower the quality.
    """

    measure = QualityMeasure.INTER_EYE_DISTANCE
    default_sigmoid = SigmoidParameters(h=100, x0=70.0, w=20.0)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        return inter_eye_distance(session.get_landmarks()), SUCCESS


class _CropMeasure(Measure):
    """Margin between the eye midpoint and one image border, divided by IED."""

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        image = session.get_image()
        landmarks = session.get_landmarks()

        height, width = image.shape[:2]
        margin = self._margin(eye_midpoint(landmarks), width, height)
        ied = inter_eye_distance(landmarks)

        logger.debug(f"{self.measure.value}: margin={margin:.1f}px, IED={ied:.1f}px")
        return score_or_failure(margin, ied)

    @abstractmethod
    def _margin(self, midpoint: Landmark, width: int, height: int) -> float:
        """Distance in pixels from the eye midpoint to the image border."""


class LeftwardCropOfTheFaceImage(_CropMeasure):
    measure = QualityMeasure.LEFTWARD_CROP
    default_sigmoid = SigmoidParameters(h=100, x0=0.9, w=0.1)

    def _margin(self, midpoint: Landmark, width: int, height: int) -> float:
        return midpoint.x


class RightwardCropOfTheFaceImage(_CropMeasure):
    measure = QualityMeasure.RIGHTWARD_CROP
    default_sigmoid = SigmoidParameters(h=100, x0=0.9, w=0.1)

    def _margin(self, midpoint: Landmark, width: int, height: int) -> float:
        return width - midpoint.x


class MarginAboveOfTheFaceImage(_CropMeasure):
    measure = QualityMeasure.MARGIN_ABOVE
    default_sigmoid = SigmoidParameters(h=100, x0=1.3, w=0.15)

    def _margin(self, midpoint: Landmark, width: int, height: int) -> float:
        return midpoint.y


class MarginBelowOfTheFaceImage(_CropMeasure):
    measure = QualityMeasure.MARGIN_BELOW
    default_sigmoid = SigmoidParameters(h=100, x0=1.9, w=0.2)

    def _margin(self, midpoint: Landmark, width: int, height: int) -> float:
        return height - midpoint.y


class HeadSize(Measure):
    """
    Head size relative to the image height.

    Raw score: vertical extent of the landmark set divided by the image
    height. The quality mapping receives the deviation from the target
    proportion ``|x - target|`` (default 0.45), so heads that are too small
    and too large both lose quality.
    """

    measure = QualityMeasure.HEAD_SIZE
    default_sigmoid = SigmoidParameters(h=100, x0=0.0, w=0.05).inverted()
    default_target = 0.45

    def __init__(self, config: Optional[MeasureConfig] = None):
        super().__init__(config)
        self.target = float(self.config.get_param("target", self.default_target))

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        image = session.get_image()
        landmarks = session.get_landmarks()
        return face_height(landmarks) / image.shape[0], SUCCESS

    def mapping_argument(self, raw_score: float) -> float:
        return abs(raw_score - self.target)


class SingleFacePresent(Measure):
    """
    Dominance of the largest detected face.

    Raw score: 1 - (area of second largest face / area of largest face);
    1.0 for a single detected face, 0.0 for two faces of equal size. The
    mapping is fixed and cannot be overridden by the configuration.
    """

    measure = QualityMeasure.SINGLE_FACE_PRESENT
    default_sigmoid = SigmoidParameters(h=100, x0=0.5, w=0.05)
    configurable = False

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        areas = sorted((face.area for face in session.get_detected_faces()), reverse=True)
        if len(areas) == 1:
            return 1.0, SUCCESS

        logger.debug(f"{len(areas)} faces detected, largest areas {areas[:2]}")
        return 1.0 - areas[1] / areas[0], SUCCESS
