"""
Concrete quality measures.

Each measure computes one native score from the Session and maps it to a
quality component value through the shared sigmoid mapping.
"""

from src.quality.measures.base import (
    Measure,
    record_quality_measure,
    resolve_sigmoid_parameters,
)
from src.quality.measures.expression import EyesOpen, MouthClosed
from src.quality.measures.geometry import (
    HeadSize,
    InterEyeDistance,
    LeftwardCropOfTheFaceImage,
    MarginAboveOfTheFaceImage,
    MarginBelowOfTheFaceImage,
    RightwardCropOfTheFaceImage,
    SingleFacePresent,
)
from src.quality.measures.occlusion import (
    EyesVisible,
    FaceOcclusionPrevention,
    MouthOcclusionPrevention,
    NoHeadCoverings,
)
from src.quality.measures.photometric import (
    BackgroundUniformity,
    DynamicRange,
    IlluminationUniformity,
    LuminanceMean,
    LuminanceVariance,
    NaturalColour,
    OverExposurePrevention,
    Sharpness,
    UnderExposurePrevention,
)
from src.quality.measures.pose import HeadPosePitch, HeadPoseRoll, HeadPoseYaw

__all__ = [
    # Contract
    "Measure",
    "record_quality_measure",
    "resolve_sigmoid_parameters",
    # Expression
    "MouthClosed",
    "EyesOpen",
    # Geometry
    "InterEyeDistance",
    "LeftwardCropOfTheFaceImage",
    "RightwardCropOfTheFaceImage",
    "MarginAboveOfTheFaceImage",
    "MarginBelowOfTheFaceImage",
    "HeadSize",
    "SingleFacePresent",
    # Pose
    "HeadPoseYaw",
    "HeadPosePitch",
    "HeadPoseRoll",
    # Photometric
    "Sharpness",
    "UnderExposurePrevention",
    "OverExposurePrevention",
    "DynamicRange",
    "BackgroundUniformity",
    "LuminanceMean",
    "LuminanceVariance",
    "IlluminationUniformity",
    "NaturalColour",
    # Occlusion
    "FaceOcclusionPrevention",
    "NoHeadCoverings",
    "EyesVisible",
    "MouthOcclusionPrevention",
]
