"""
Expression-related measures: mouth closedness and eye openness.

Both measures work on the aligned landmark set and normalise their
distances by the face-scale metric T, which makes them independent of
the crop resolution.
"""

import logging
from typing import Tuple

from src.landmarks.face_measures import eye_opening, get_max_pair_distance, tmetric
from src.landmarks.face_parts import FaceRegion
from src.quality.measures.base import Measure, score_or_failure
from src.quality.session import Session
from src.quality.types import (
    QualityMeasure,
    QualityMeasureReturnCode,
    SigmoidParameters,
)

logger = logging.getLogger(__name__)


class MouthClosed(Measure):
    """
    Mouth closedness.

    Raw score: largest distance between inner-lip landmarks divided by T.
    A closed mouth scores close to 0; wide open mouths lower the quality.

    Example:
        >>> measure = MouthClosed()
        >>> result = measure.execute(session)
        >>> result.raw_score, result.scalar
        (0.2, 100.0)
    """

    measure = QualityMeasure.MOUTH_CLOSED
    default_sigmoid = SigmoidParameters(h=100, x0=0.2, w=0.06).inverted()

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        landmarks = session.get_aligned_landmarks()
        max_mouth_opening = get_max_pair_distance(landmarks, FaceRegion.MOUTH_INNER)
        t = tmetric(landmarks)

        logger.debug(f"Mouth opening={max_mouth_opening:.3f}, T={t:.3f}")
        return score_or_failure(max_mouth_opening, t)


class EyesOpen(Measure):
    """
    Eye openness.

    Raw score: opening of the less open eye divided by T, so a single
    closed eye is enough to lower the quality.
    """

    measure = QualityMeasure.EYES_OPEN
    default_sigmoid = SigmoidParameters(h=100, x0=0.02, w=0.01)

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        landmarks = session.get_aligned_landmarks()
        opening = min(
            eye_opening(landmarks, FaceRegion.RIGHT_EYE),
            eye_opening(landmarks, FaceRegion.LEFT_EYE),
        )
        return score_or_failure(opening, tmetric(landmarks))
