"""
Per-image assessment context.

A Session carries the upstream artifacts of one face image (detections,
landmarks, pose, segmentation masks) and collects the measure results.
Upstream stages populate it before the executor runs; measures only read
the artifacts and append their own result.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional

import numpy as np

from src.common.types import BBox, FaceLandmarks, ImageBuffer
from src.quality.types import (
    MissingArtifactError,
    PoseAngles,
    QualityMeasure,
    QualityMeasureResult,
)
from src.utils.constants import NUM_LANDMARKS_98

logger = logging.getLogger(__name__)


@dataclass
class Session:
    """
    Mutable context for assessing a single face image.

    Attributes:
        image: Original input image (BGR or grayscale, uint8).
        detected_faces: Face boxes from detection. None means detection
            results were not supplied; an empty list means no face was found.
        landmarks: Landmarks in original image coordinates.
        aligned_face: Aligned face crop.
        aligned_landmarks: Landmarks in aligned face coordinates.
        pose: Head pose angles in degrees.
        face_parsing: Per-pixel class labels over the aligned face.
        face_occlusion: Per-pixel visibility mask over the aligned face
            (non-zero = visible face).
        results: Measure results recorded so far.

    Example:
        >>> session = Session(aligned_landmarks=FaceLandmarks(points=pts))
        >>> executor.execute_all(session)
    """

    image: Optional[np.ndarray] = None
    detected_faces: Optional[List[BBox]] = None
    landmarks: Optional[FaceLandmarks] = None
    aligned_face: Optional[np.ndarray] = None
    aligned_landmarks: Optional[FaceLandmarks] = None
    pose: Optional[PoseAngles] = None
    face_parsing: Optional[np.ndarray] = None
    face_occlusion: Optional[np.ndarray] = None
    results: Dict[QualityMeasure, QualityMeasureResult] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Validate images up front so measures can rely on uint8 2D/3D arrays
        if self.image is not None:
            ImageBuffer(data=self.image)
        if self.aligned_face is not None:
            ImageBuffer(data=self.aligned_face)

    # ------------------------------------------------------------------
    # Artifact accessors (raise MissingArtifactError)
    # ------------------------------------------------------------------

    def _require_face(self) -> None:
        if self.detected_faces is not None and len(self.detected_faces) == 0:
            raise MissingArtifactError("No face detected")

    def _require(self, name: str):
        self._require_face()
        value = getattr(self, name)
        if value is None:
            raise MissingArtifactError(f"Session has no {name}")
        return value

    def get_image(self) -> np.ndarray:
        return self._require("image")

    def _require_landmarks(self, name: str) -> FaceLandmarks:
        landmarks = self._require(name)
        if len(landmarks) < NUM_LANDMARKS_98:
            raise MissingArtifactError(
                f"Expected {NUM_LANDMARKS_98} {name}, got {len(landmarks)}"
            )
        return landmarks

    def get_landmarks(self) -> FaceLandmarks:
        return self._require_landmarks("landmarks")

    def get_aligned_face(self) -> np.ndarray:
        return self._require("aligned_face")

    def get_aligned_landmarks(self) -> FaceLandmarks:
        return self._require_landmarks("aligned_landmarks")

    def get_pose(self) -> PoseAngles:
        return self._require("pose")

    def _require_mask(self, name: str) -> np.ndarray:
        """
        Per-pixel mask as a 2D (H, W) array.

        A trailing single-channel axis is dropped; any other shape is
        treated as an unusable artifact.
        """
        mask = np.asarray(self._require(name))
        if mask.ndim == 3 and mask.shape[2] == 1:
            mask = mask[:, :, 0]
        if mask.ndim != 2 or mask.size == 0:
            raise MissingArtifactError(
                f"Expected {name} of shape (H, W), got {mask.shape}"
            )
        return mask

    def get_face_parsing(self) -> np.ndarray:
        return self._require_mask("face_parsing")

    def get_face_occlusion(self) -> np.ndarray:
        return self._require_mask("face_occlusion")

    def get_detected_faces(self) -> List[BBox]:
        """Detected face boxes; at least one face is guaranteed."""
        return self._require("detected_faces")

    # ------------------------------------------------------------------
    # Results
    # ------------------------------------------------------------------

    def has_result(self, measure: QualityMeasure) -> bool:
        return measure in self.results

    def set_result(self, measure: QualityMeasure, result: QualityMeasureResult) -> None:
        """
        Record the result of a measure.

        Raises:
            ValueError: If the measure already has a result in this Session.
        """
        if measure in self.results:
            raise ValueError(f"Result for {measure.value} already recorded")
        self.results[measure] = result
        logger.debug(
            f"{measure.value}: raw={result.raw_score:.4f}, "
            f"scalar={result.scalar}, code={result.code.value}"
        )
