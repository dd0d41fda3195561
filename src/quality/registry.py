"""
Measure registry.

Closed mapping from measure identifier to measure class. The table is
assembled explicitly at import time and exposed read-only.
"""

import logging
from types import MappingProxyType
from typing import Any, Mapping, Optional, Type

from src.quality.config_loader import QualityConfig
from src.quality.measures import (
    BackgroundUniformity,
    DynamicRange,
    EyesOpen,
    EyesVisible,
    FaceOcclusionPrevention,
    HeadPosePitch,
    HeadPoseRoll,
    HeadPoseYaw,
    HeadSize,
    IlluminationUniformity,
    InterEyeDistance,
    LeftwardCropOfTheFaceImage,
    MarginAboveOfTheFaceImage,
    MarginBelowOfTheFaceImage,
    LuminanceMean,
    LuminanceVariance,
    Measure,
    MouthClosed,
    MouthOcclusionPrevention,
    NaturalColour,
    NoHeadCoverings,
    OverExposurePrevention,
    RightwardCropOfTheFaceImage,
    Sharpness,
    SingleFacePresent,
    UnderExposurePrevention,
)
from src.quality.types import ConfigurationError, QualityMeasure

logger = logging.getLogger(__name__)


def _build_registry(
    *classes: Type[Measure],
) -> Mapping[QualityMeasure, Type[Measure]]:
    table = {}
    for cls in classes:
        if cls.measure in table:
            raise ConfigurationError(f"Duplicate registration for {cls.measure.value}")
        table[cls.measure] = cls
    return MappingProxyType(table)


MEASURE_REGISTRY: Mapping[QualityMeasure, Type[Measure]] = _build_registry(
    SingleFacePresent,
    MouthClosed,
    EyesOpen,
    InterEyeDistance,
    HeadPoseYaw,
    HeadPosePitch,
    HeadPoseRoll,
    LeftwardCropOfTheFaceImage,
    RightwardCropOfTheFaceImage,
    MarginAboveOfTheFaceImage,
    MarginBelowOfTheFaceImage,
    HeadSize,
    Sharpness,
    UnderExposurePrevention,
    OverExposurePrevention,
    DynamicRange,
    LuminanceMean,
    LuminanceVariance,
    IlluminationUniformity,
    NaturalColour,
    BackgroundUniformity,
    FaceOcclusionPrevention,
    EyesVisible,
    MouthOcclusionPrevention,
    NoHeadCoverings,
)


def create_measure(identifier: Any, config: Optional[QualityConfig] = None) -> Measure:
    """
    Instantiate a measure from its identifier.

    Args:
        identifier: QualityMeasure member or its string name
            (e.g. "MouthClosed").
        config: Quality configuration; the measure reads its own subtree.
            Built-in defaults are used if None.

    Returns:
        Configured measure instance.

    Raises:
        ConfigurationError: If the identifier is unknown or the measure's
            configured mapping is invalid.

    Example:
        >>> measure = create_measure("MouthClosed")
        >>> measure.sigmoid.x0
        0.2
    """
    measure = QualityMeasure.parse(identifier)
    try:
        cls = MEASURE_REGISTRY[measure]
    except KeyError:
        raise ConfigurationError(
            f"No implementation registered for {measure.value}"
        ) from None

    measure_config = config.measure_config(measure) if config is not None else None
    instance = cls(measure_config)
    logger.debug(f"Created {instance!r}")
    return instance
