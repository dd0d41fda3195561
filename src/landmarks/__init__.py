"""
Facial landmark region tables and geometry helpers.

The landmark layout follows the 98-point WFLW scheme. Region tables are
static; geometry helpers are pure functions over FaceLandmarks.
"""

from src.landmarks.face_measures import (
    eye_midpoint,
    eye_mouth_distance,
    eye_opening,
    get_max_pair_distance,
    inter_eye_distance,
    face_height,
    landmarked_region_mask,
    region_mask,
    tmetric,
)
from src.landmarks.face_parts import FaceRegion, get_region_indices

__all__ = [
    "FaceRegion",
    "get_region_indices",
    "get_max_pair_distance",
    "eye_midpoint",
    "inter_eye_distance",
    "eye_mouth_distance",
    "eye_opening",
    "tmetric",
    "landmarked_region_mask",
    "region_mask",
    "face_height",
]
