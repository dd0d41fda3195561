"""
Named facial regions for the 98-point WFLW landmark layout.

Static lookup tables only: each region maps to a fixed tuple of landmark
indices. "Left" and "right" refer to the subject's left and right, so the
subject's right eye appears on the left side of a frontal image.

Layout reference (WFLW):
    0-32   face contour (chin at 16)
    33-41  right eyebrow
    42-50  left eyebrow
    51-59  nose
    60-67  right eye
    68-75  left eye
    76-87  outer lip contour
    88-95  inner lip contour
    96-97  eye centres (right, left)
"""

from enum import Enum
from itertools import combinations
from typing import Dict, Tuple


class FaceRegion(Enum):
    """Facial regions addressable by landmark index."""

    CHIN = "Chin"
    FACE_CONTOUR = "Face Contour"
    RIGHT_EYEBROW = "Right Eyebrow"
    LEFT_EYEBROW = "Left Eyebrow"
    NOSE = "Nose"
    RIGHT_EYE = "Right Eye"
    LEFT_EYE = "Left Eye"
    MOUTH_OUTER = "Mouth Outer"
    MOUTH_INNER = "Mouth Inner"
    RIGHT_EYE_CORNERS = "Right Eye Corners"
    LEFT_EYE_CORNERS = "Left Eye Corners"
    MOUTH_CORNERS = "Mouth Corners"
    EYE_CENTERS = "Eye Centers"


REGION_INDICES: Dict[FaceRegion, Tuple[int, ...]] = {
    FaceRegion.CHIN: (16,),
    FaceRegion.FACE_CONTOUR: tuple(range(0, 33)),
    FaceRegion.RIGHT_EYEBROW: tuple(range(33, 42)),
    FaceRegion.LEFT_EYEBROW: tuple(range(42, 51)),
    FaceRegion.NOSE: tuple(range(51, 60)),
    FaceRegion.RIGHT_EYE: tuple(range(60, 68)),
    FaceRegion.LEFT_EYE: tuple(range(68, 76)),
    FaceRegion.MOUTH_OUTER: tuple(range(76, 88)),
    FaceRegion.MOUTH_INNER: tuple(range(88, 96)),
    FaceRegion.RIGHT_EYE_CORNERS: (60, 64),
    FaceRegion.LEFT_EYE_CORNERS: (68, 72),
    FaceRegion.MOUTH_CORNERS: (76, 82),
    FaceRegion.EYE_CENTERS: (96, 97),
}

# Opposing landmark pairs (upper/lower lid or lip) used to measure openings
REGION_PAIRS: Dict[FaceRegion, Tuple[Tuple[int, int], ...]] = {
    FaceRegion.RIGHT_EYE: ((61, 67), (62, 66), (63, 65)),
    FaceRegion.LEFT_EYE: ((69, 75), (70, 74), (71, 73)),
    FaceRegion.MOUTH_INNER: ((89, 95), (90, 94), (91, 93)),
}

RIGHT_EYE_CENTER = 96
LEFT_EYE_CENTER = 97


def get_region_indices(region: FaceRegion) -> Tuple[int, ...]:
    """Return the landmark indices belonging to a facial region."""
    return REGION_INDICES[region]


def get_region_pairs(region: FaceRegion) -> Tuple[Tuple[int, int], ...]:
    """
    Opposing landmark pairs of a region.

    Regions without a pair table yield every combination of their indices.
    """
    if region in REGION_PAIRS:
        return REGION_PAIRS[region]
    return tuple(combinations(REGION_INDICES[region], 2))
