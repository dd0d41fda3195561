"""
Geometric helpers over facial landmark sets.

Pure functions computing distances and masks from a FaceLandmarks set.
They never modify the landmarks and never decide success or failure;
degenerate geometry (e.g., coincident eye centres) is reported as a zero
distance and handled by the calling measure.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from src.common.types import FaceLandmarks, Landmark
from src.landmarks.face_parts import (
    LEFT_EYE_CENTER,
    RIGHT_EYE_CENTER,
    FaceRegion,
    get_region_indices,
    get_region_pairs,
)

logger = logging.getLogger(__name__)


def get_max_pair_distance(landmarks: FaceLandmarks, region: FaceRegion) -> float:
    """
    Largest distance over the landmark pairs of a region.

    For the mouth and the eyes the pairs are opposing upper/lower
    landmarks, so the result is the widest opening; other regions compare
    every pair of their landmarks.

    Args:
        landmarks: Landmark set.
        region: Facial region whose landmark pairs are compared.

    Returns:
        Maximum pair distance (0.0 for single-point regions).

    Example:
        >>> opening = get_max_pair_distance(landmarks, FaceRegion.MOUTH_INNER)
    """
    pairs = get_region_pairs(region)
    if not pairs:
        return 0.0
    first = landmarks.subset(tuple(p[0] for p in pairs))
    second = landmarks.subset(tuple(p[1] for p in pairs))
    return float(np.linalg.norm(first - second, axis=1).max())


def eye_midpoint(landmarks: FaceLandmarks) -> Landmark:
    """Midpoint between the two eye centres."""
    return landmarks[RIGHT_EYE_CENTER].midpoint(landmarks[LEFT_EYE_CENTER])


def inter_eye_distance(landmarks: FaceLandmarks) -> float:
    """Distance between the right and left eye centres."""
    return landmarks[RIGHT_EYE_CENTER].distance_to(landmarks[LEFT_EYE_CENTER])


def eye_mouth_distance(landmarks: FaceLandmarks) -> float:
    """Distance from the eye midpoint to the midpoint of the mouth corners."""
    right_corner, left_corner = get_region_indices(FaceRegion.MOUTH_CORNERS)
    mouth_center = landmarks[right_corner].midpoint(landmarks[left_corner])
    return eye_midpoint(landmarks).distance_to(mouth_center)


def tmetric(landmarks: FaceLandmarks) -> float:
    """
    Face-scale normalisation metric T.

    T = (IED + EMD) / 2, the mean of the inter-eye distance and the
    eye-midpoint-to-mouth-centre distance. Combining a horizontal and a
    vertical span keeps T stable under moderate yaw and pitch.

    Returns:
        T in the landmark coordinate unit; 0.0 for fully degenerate sets.
    """
    t = 0.5 * (inter_eye_distance(landmarks) + eye_mouth_distance(landmarks))
    logger.debug(f"T metric: {t:.4f}")
    return t


def eye_opening(landmarks: FaceLandmarks, eye: FaceRegion) -> float:
    """
    Opening of one eye as the largest upper/lower eyelid distance.

    Args:
        landmarks: Landmark set.
        eye: FaceRegion.RIGHT_EYE or FaceRegion.LEFT_EYE.

    Raises:
        ValueError: If the region is not an eye.
    """
    if eye not in (FaceRegion.RIGHT_EYE, FaceRegion.LEFT_EYE):
        raise ValueError(f"Not an eye region: {eye}")
    return get_max_pair_distance(landmarks, eye)


def landmarked_region_mask(
    landmarks: FaceLandmarks, image_shape: Tuple[int, ...]
) -> np.ndarray:
    """
    Rasterise the convex hull of the landmark set.

    Args:
        landmarks: Landmark set in the coordinate frame of the target image.
        image_shape: Shape of the target image; only (H, W) is used.

    Returns:
        uint8 mask of shape (H, W), 1 inside the hull and 0 elsewhere.
    """
    height, width = image_shape[:2]
    mask = np.zeros((height, width), dtype=np.uint8)
    hull = cv2.convexHull(np.round(landmarks.points).astype(np.int32))
    cv2.fillConvexPoly(mask, hull, 1)
    return mask


def region_mask(
    landmarks: FaceLandmarks,
    regions: Tuple[FaceRegion, ...],
    image_shape: Tuple[int, ...],
) -> np.ndarray:
    """
    Rasterise the union of the convex hulls of several facial regions.

    Args:
        landmarks: Landmark set in the coordinate frame of the target image.
        regions: Regions whose hulls are filled separately (e.g. both eyes).
        image_shape: Shape of the target image; only (H, W) is used.

    Returns:
        uint8 mask of shape (H, W), 1 inside any region hull.

    Raises:
        IndexError: If a region index lies outside the landmark set.
    """
    height, width = image_shape[:2]
    mask = np.zeros((height, width), dtype=np.uint8)
    for region in regions:
        points = landmarks.subset(get_region_indices(region))
        hull = cv2.convexHull(np.round(points).astype(np.int32))
        cv2.fillConvexPoly(mask, hull, 1)
    return mask


def face_height(landmarks: FaceLandmarks) -> float:
    """Vertical extent of the landmark set (top of eyebrows to chin)."""
    ys = landmarks.points[:, 1]
    return float(ys.max() - ys.min())
