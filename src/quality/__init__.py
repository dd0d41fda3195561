"""
Face Image Quality Measures

Computes standardized quality components of a face image from upstream
analysis artifacts (landmarks, pose, segmentation masks). Each measure
yields a native score and a quality component value in [0, 100] obtained
through a configurable sigmoid mapping:

    Q = h * (a + s * sigmoid(x, x0, w)),  clipped to [0, 100]

Example:
    >>> from src.quality import MeasureExecutor, Session
    >>>
    >>> session = Session(aligned_landmarks=landmarks, pose=pose)
    >>> executor = MeasureExecutor.from_identifiers(["MouthClosed", "HeadPoseYaw"])
    >>> assessment = executor.execute_all(session)
    >>>
    >>> for measure, result in assessment.results.items():
    ...     print(measure.value, result.scalar, result.code.value)
"""

from src.quality.config_loader import (
    MeasureConfig,
    QualityConfig,
    SigmoidConfig,
    get_default_config,
    load_config,
    parse_config,
)
from src.quality.executor import MeasureExecutor, assess_session
from src.quality.measures import Measure, record_quality_measure
from src.quality.registry import MEASURE_REGISTRY, create_measure
from src.quality.session import Session
from src.quality.sigmoid import map_to_quality, sigmoid
from src.quality.types import (
    Assessment,
    ConfigurationError,
    MissingArtifactError,
    PoseAngles,
    QualityMeasure,
    QualityMeasureResult,
    QualityMeasureReturnCode,
    SigmoidParameters,
)

__all__ = [
    # Main API
    "MeasureExecutor",
    "assess_session",
    "Session",
    # Registry
    "MEASURE_REGISTRY",
    "create_measure",
    "Measure",
    "record_quality_measure",
    # Mapping
    "map_to_quality",
    "sigmoid",
    "SigmoidParameters",
    # Config
    "QualityConfig",
    "MeasureConfig",
    "SigmoidConfig",
    "load_config",
    "parse_config",
    "get_default_config",
    # Results
    "Assessment",
    "QualityMeasure",
    "QualityMeasureResult",
    "QualityMeasureReturnCode",
    "PoseAngles",
    # Errors
    "ConfigurationError",
    "MissingArtifactError",
]
