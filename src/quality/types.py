"""
Data types and structures for the Quality module.

Provides identifiers, status codes, mapping parameters and result
containers shared by the measures, the registry and the executor.
"""

import math
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Dict, List


class ConfigurationError(ValueError):
    """Setup-time configuration defect (unknown measure, empty request, w == 0)."""


class MissingArtifactError(LookupError):
    """A measure asked the Session for an upstream artifact it does not hold."""


class QualityMeasure(Enum):
    """Identifiers of the available quality measures."""

    MOUTH_CLOSED = "MouthClosed"
    EYES_OPEN = "EyesOpen"
    INTER_EYE_DISTANCE = "InterEyeDistance"
    HEAD_POSE_YAW = "HeadPoseYaw"
    HEAD_POSE_PITCH = "HeadPosePitch"
    HEAD_POSE_ROLL = "HeadPoseRoll"
    LEFTWARD_CROP = "LeftwardCropOfTheFaceImage"
    RIGHTWARD_CROP = "RightwardCropOfTheFaceImage"
    MARGIN_ABOVE = "MarginAboveOfTheFaceImage"
    MARGIN_BELOW = "MarginBelowOfTheFaceImage"
    SHARPNESS = "Sharpness"
    UNDER_EXPOSURE_PREVENTION = "UnderExposurePrevention"
    OVER_EXPOSURE_PREVENTION = "OverExposurePrevention"
    DYNAMIC_RANGE = "DynamicRange"
    BACKGROUND_UNIFORMITY = "BackgroundUniformity"
    FACE_OCCLUSION_PREVENTION = "FaceOcclusionPrevention"
    NO_HEAD_COVERINGS = "NoHeadCoverings"
    SINGLE_FACE_PRESENT = "SingleFacePresent"
    HEAD_SIZE = "HeadSize"
    LUMINANCE_MEAN = "LuminanceMean"
    LUMINANCE_VARIANCE = "LuminanceVariance"
    ILLUMINATION_UNIFORMITY = "IlluminationUniformity"
    NATURAL_COLOUR = "NaturalColour"
    EYES_VISIBLE = "EyesVisible"
    MOUTH_OCCLUSION_PREVENTION = "MouthOcclusionPrevention"

    @classmethod
    def parse(cls, identifier: Any) -> "QualityMeasure":
        """
        Resolve an identifier given as enum member, value or member name.

        Raises:
            ConfigurationError: If the identifier names no known measure.
        """
        if isinstance(identifier, cls):
            return identifier
        if isinstance(identifier, str):
            for member in cls:
                if identifier in (member.value, member.name):
                    return member
        raise ConfigurationError(f"Unknown quality measure: {identifier!r}")


class QualityMeasureReturnCode(Enum):
    """Outcome of a single measure."""

    SUCCESS = "Success"
    FAILURE_TO_ASSESS = "FailureToAssess"


@dataclass(frozen=True)
class SigmoidParameters:
    """
    Parameters of the quality mapping Q = h * (a + s * sigmoid((x - x0) / w)).

    Defaults are the generic fallback used when neither the measure nor the
    configuration provides a value.
    """

    h: float = 100.0  # Scale factor
    a: float = 0.0  # Constant shift
    s: float = 1.0  # Signed weight of the sigmoid part
    x0: float = 4.0  # Centre point
    w: float = 0.7  # Divisor (must be non-zero)
    round: bool = True  # Round the clipped value to an integer

    def __post_init__(self) -> None:
        if self.w == 0:
            raise ConfigurationError("Sigmoid divisor w must be non-zero")
        for name in ("h", "a", "s", "x0", "w"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"Sigmoid parameter {name} must be finite")

    def inverted(self) -> "SigmoidParameters":
        """
        Inverse orientation: raw scores at or below x0 map to the top of
        the scale, larger raw scores lower the quality.
        """
        return replace(self, a=2.0, s=-2.0)

    def merged(self, overrides: Dict[str, Any]) -> "SigmoidParameters":
        """Copy with the given fields replaced; absent fields keep this value."""
        return replace(self, **overrides)


@dataclass(frozen=True)
class QualityMeasureResult:
    """
    Result of one measure on one Session.

    Attributes:
        raw_score: Native score (NaN when undefined).
        scalar: Quality component value in [0, 100] (NaN when undefined).
        code: Success or FailureToAssess.
    """

    raw_score: float
    scalar: float
    code: QualityMeasureReturnCode

    def is_success(self) -> bool:
        return self.code == QualityMeasureReturnCode.SUCCESS

    @classmethod
    def failure(cls) -> "QualityMeasureResult":
        return cls(
            raw_score=math.nan,
            scalar=math.nan,
            code=QualityMeasureReturnCode.FAILURE_TO_ASSESS,
        )

    def to_dict(self) -> Dict[str, Any]:
        """JSON-friendly view; NaN values become None."""
        return {
            "raw_score": None if math.isnan(self.raw_score) else self.raw_score,
            "scalar": None if math.isnan(self.scalar) else self.scalar,
            "code": self.code.value,
        }


@dataclass
class PoseAngles:
    """Head pose in degrees."""

    yaw: float
    pitch: float
    roll: float


@dataclass
class Assessment:
    """
    Complete output of one executor pass.

    Attributes:
        results: Measure results keyed by identifier, in request order.
    """

    results: Dict[QualityMeasure, QualityMeasureResult] = field(default_factory=dict)

    def __getitem__(self, measure: Any) -> QualityMeasureResult:
        return self.results[QualityMeasure.parse(measure)]

    def __contains__(self, measure: object) -> bool:
        try:
            return QualityMeasure.parse(measure) in self.results
        except ConfigurationError:
            return False

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self):
        return iter(self.results)

    def measures(self) -> List[QualityMeasure]:
        return list(self.results)

    def successful(self) -> List[QualityMeasure]:
        return [m for m, r in self.results.items() if r.is_success()]

    def failed(self) -> List[QualityMeasure]:
        return [m for m, r in self.results.items() if not r.is_success()]

    def to_dict(self) -> Dict[str, Dict[str, Any]]:
        return {m.value: r.to_dict() for m, r in self.results.items()}
