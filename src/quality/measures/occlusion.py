"""
Occlusion measures based on segmentation masks.

Both masks are produced upstream in aligned face coordinates: the
occlusion mask marks visible face pixels, the face parsing mask carries
per-pixel class labels.
"""

from abc import abstractmethod
from typing import Tuple

import numpy as np

from src.common.types import FaceLandmarks
from src.landmarks.face_measures import landmarked_region_mask, region_mask
from src.landmarks.face_parts import FaceRegion
from src.quality.measures.base import Measure, score_or_failure
from src.quality.session import Session
from src.quality.types import (
    QualityMeasure,
    QualityMeasureReturnCode,
    SigmoidParameters,
)
from src.utils.constants import PARSING_HAT

OCCLUSION_SIGMOID = SigmoidParameters(h=100, x0=0.0, w=0.1).inverted()


class _OccludedShareMeasure(Measure):
    """
    Share of a landmarked region that is not visible.

    Raw score: pixels inside the region marked as occluded (zero in the
    occlusion mask) divided by the region area.
    """

    default_sigmoid = OCCLUSION_SIGMOID

    @abstractmethod
    def _region(self, landmarks: FaceLandmarks, shape: Tuple[int, ...]) -> np.ndarray:
        """uint8 mask of the assessed region on the occlusion mask grid."""

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        occlusion = session.get_face_occlusion()
        landmarks = session.get_aligned_landmarks()
        region = self._region(landmarks, occlusion.shape) > 0

        occluded = np.count_nonzero(region & (occlusion == 0))
        return score_or_failure(float(occluded), float(np.count_nonzero(region)))


class FaceOcclusionPrevention(_OccludedShareMeasure):
    """Occluded share of the whole landmarked face region."""

    measure = QualityMeasure.FACE_OCCLUSION_PREVENTION

    def _region(self, landmarks: FaceLandmarks, shape: Tuple[int, ...]) -> np.ndarray:
        return landmarked_region_mask(landmarks, shape)


class EyesVisible(_OccludedShareMeasure):
    """Occluded share of both eye regions (e.g. hair, hands, dark glasses)."""

    measure = QualityMeasure.EYES_VISIBLE

    def _region(self, landmarks: FaceLandmarks, shape: Tuple[int, ...]) -> np.ndarray:
        return region_mask(landmarks, (FaceRegion.RIGHT_EYE, FaceRegion.LEFT_EYE), shape)


class MouthOcclusionPrevention(_OccludedShareMeasure):
    """Occluded share of the outer lip region."""

    measure = QualityMeasure.MOUTH_OCCLUSION_PREVENTION

    def _region(self, landmarks: FaceLandmarks, shape: Tuple[int, ...]) -> np.ndarray:
        return region_mask(landmarks, (FaceRegion.MOUTH_OUTER,), shape)


class NoHeadCoverings(Measure):
    """Share of pixels the face parser labels as head covering."""

    measure = QualityMeasure.NO_HEAD_COVERINGS
    default_sigmoid = SigmoidParameters(h=100, x0=0.0, w=0.05).inverted()

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        parsing = session.get_face_parsing()
        label = int(self.config.get_param("label", PARSING_HAT))
        covered = np.count_nonzero(parsing == label)
        return score_or_failure(float(covered), float(parsing.size))
