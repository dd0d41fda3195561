"""
Measure contract.

A measure owns one quality aspect. Subclasses fix an identifier and an
optional default mapping, and implement ``compute`` which returns the raw
score and status. Mapping the raw score and recording the result is the
same for every measure and lives in ``record_quality_measure``.
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import ClassVar, Optional, Tuple

from src.quality.config_loader import MeasureConfig
from src.quality.session import Session
from src.quality.sigmoid import map_to_quality
from src.quality.types import (
    ConfigurationError,
    MissingArtifactError,
    QualityMeasure,
    QualityMeasureResult,
    QualityMeasureReturnCode,
    SigmoidParameters,
)

logger = logging.getLogger(__name__)

SUCCESS = QualityMeasureReturnCode.SUCCESS
FAILURE_TO_ASSESS = QualityMeasureReturnCode.FAILURE_TO_ASSESS


def resolve_sigmoid_parameters(
    config: MeasureConfig, default: Optional[SigmoidParameters]
) -> SigmoidParameters:
    """
    Effective mapping parameters of a measure.

    Configured keys replace the corresponding fields of the measure's own
    default; keys absent from the configuration keep the measure default.
    Measures without a default fall back to the generic SigmoidParameters().
    """
    base = default if default is not None else SigmoidParameters()
    if config.sigmoid is None:
        return base
    return base.merged(config.sigmoid.overrides())


def score_or_failure(
    numerator: float, denominator: float
) -> Tuple[float, QualityMeasureReturnCode]:
    """Ratio as raw score, or (NaN, FailureToAssess) for a zero denominator."""
    if denominator == 0.0:
        return math.nan, FAILURE_TO_ASSESS
    return numerator / denominator, SUCCESS


def record_quality_measure(
    session: Session,
    measure: QualityMeasure,
    raw_score: float,
    code: QualityMeasureReturnCode,
    params: SigmoidParameters,
    mapping_argument: Optional[float] = None,
) -> QualityMeasureResult:
    """
    Map a raw score and record the result in the Session.

    The mapping is skipped for NaN raw scores; the status is recorded as
    given. When mapping_argument is given it is mapped in place of the raw
    score, while the raw score itself is still recorded unchanged.
    """
    argument = raw_score if mapping_argument is None else mapping_argument
    scalar = map_to_quality(argument, params)
    result = QualityMeasureResult(raw_score=float(raw_score), scalar=scalar, code=code)
    session.set_result(measure, result)
    return result


class Measure(ABC):
    """
    Base class of all quality measures.

    Attributes:
        measure: Identifier of the measure (class level).
        default_sigmoid: Built-in mapping used when not configured (class level).
        configurable: Whether the configuration may override the mapping
            (class level).
        config: Configuration subtree of this measure.
        sigmoid: Effective mapping parameters.
    """

    measure: ClassVar[QualityMeasure]
    default_sigmoid: ClassVar[Optional[SigmoidParameters]] = None
    configurable: ClassVar[bool] = True

    def __init__(self, config: Optional[MeasureConfig] = None):
        """
        Raises:
            ConfigurationError: If the configuration overrides the mapping
                of a measure with a fixed mapping.
        """
        self.config = config if config is not None else MeasureConfig()
        if not self.configurable and self.config.sigmoid is not None:
            raise ConfigurationError(
                f"Quality mapping of {self.measure.value} is not configurable"
            )
        self.sigmoid = resolve_sigmoid_parameters(self.config, self.default_sigmoid)

    @abstractmethod
    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        """
        Compute the raw score of this measure.

        Returns:
            Tuple of (raw_score, code). raw_score is NaN when undefined.

        Raises:
            MissingArtifactError: If a required upstream artifact is absent.
        """

    def mapping_argument(self, raw_score: float) -> float:
        """Value fed to the quality mapping; the raw score by default."""
        return raw_score

    def execute(self, session: Session) -> QualityMeasureResult:
        """Compute, map and record this measure for one Session."""
        try:
            raw_score, code = self.compute(session)
        except MissingArtifactError as e:
            logger.warning(f"{self.measure.value} failed to assess: {e}")
            raw_score, code = math.nan, FAILURE_TO_ASSESS

        if code == SUCCESS and math.isnan(raw_score):
            logger.warning(f"{self.measure.value} produced an undefined raw score")
            code = FAILURE_TO_ASSESS

        return record_quality_measure(
            session,
            self.measure,
            raw_score,
            code,
            self.sigmoid,
            mapping_argument=self.mapping_argument(raw_score),
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}(sigmoid={self.sigmoid})"
