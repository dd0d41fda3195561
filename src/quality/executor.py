"""
Measure executor - quality assessment orchestrator.

Runs the requested measures over one Session in request order. Unlike a
fail-fast cascade, every measure runs: a measure that cannot assess the
image records FailureToAssess and the executor moves on. Only setup-time
configuration defects (empty or duplicate request list, unknown
identifier, zero divisor) abort the assessment.
"""

import logging
from pathlib import Path
from typing import Any, Iterable, List, Optional, Sequence

from src.quality.config_loader import QualityConfig, load_config
from src.quality.measures.base import Measure
from src.quality.registry import create_measure
from src.quality.session import Session
from src.quality.types import (
    Assessment,
    ConfigurationError,
    QualityMeasure,
    QualityMeasureResult,
)

logger = logging.getLogger(__name__)


class MeasureExecutor:
    """
    Executes a fixed list of measures over Sessions.

    Measure instances are read-only after construction, so one executor may
    serve many Sessions, including from several worker threads as long as
    each thread works on its own Session.

    Example:
        >>> executor = MeasureExecutor.from_identifiers(["MouthClosed", "EyesOpen"])
        >>> assessment = executor.execute_all(session)
        >>> assessment["MouthClosed"].scalar
        100.0
    """

    def __init__(self, measures: Sequence[Measure]):
        """
        Initialize the executor.

        Args:
            measures: Measures to run, in execution order.

        Raises:
            ConfigurationError: If no measure is given or a measure repeats.
        """
        if not measures:
            raise ConfigurationError("At least one quality measure must be requested")

        seen = set()
        for measure in measures:
            if measure.measure in seen:
                raise ConfigurationError(
                    f"Measure {measure.measure.value} requested twice"
                )
            seen.add(measure.measure)

        self.measures: List[Measure] = list(measures)

    @classmethod
    def from_identifiers(
        cls, identifiers: Iterable[Any], config: Optional[QualityConfig] = None
    ) -> "MeasureExecutor":
        """
        Build measures for the given identifiers via the registry.

        All identifiers are resolved before any measure is built, so an
        unknown identifier aborts setup without partial construction.

        Raises:
            ConfigurationError: On unknown, duplicate or missing identifiers.
        """
        resolved = [QualityMeasure.parse(i) for i in identifiers]
        if not resolved:
            raise ConfigurationError("At least one quality measure must be requested")
        return cls([create_measure(measure, config) for measure in resolved])

    @classmethod
    def from_config(cls, config: QualityConfig) -> "MeasureExecutor":
        """Build the measures requested by a configuration."""
        return cls.from_identifiers(config.requested_measures, config)

    @property
    def requested(self) -> List[QualityMeasure]:
        return [m.measure for m in self.measures]

    def execute_all(self, session: Session) -> Assessment:
        """
        Run every measure on the Session.

        Args:
            session: Session populated by the upstream stages.

        Returns:
            Assessment with exactly one result per requested measure, in
            request order.

        Raises:
            ValueError: If the Session already holds results. A Session
                is assessed once; use a fresh Session per pass.
        """
        if session.results:
            raise ValueError(
                f"Session already holds {len(session.results)} results; "
                "assess each Session only once"
            )

        logger.info(f"Executing {len(self.measures)} quality measures")

        for measure in self.measures:
            try:
                measure.execute(session)
            except Exception as e:
                logger.error(
                    f"{measure.measure.value} raised {type(e).__name__}: {e}",
                    exc_info=True,
                )

            if not session.has_result(measure.measure):
                session.set_result(measure.measure, QualityMeasureResult.failure())

        assessment = Assessment(
            results={m: session.results[m] for m in self.requested}
        )

        failed = assessment.failed()
        if failed:
            logger.warning(
                f"{len(failed)}/{len(assessment)} measures failed to assess: "
                f"{', '.join(m.value for m in failed)}"
            )
        logger.info(
            f"Assessment complete: {len(assessment.successful())}/"
            f"{len(assessment)} measures assessed"
        )
        return assessment


def assess_session(
    session: Session,
    config: Optional[QualityConfig] = None,
    config_path: Optional[Path] = None,
) -> Assessment:
    """
    Convenience function for one-shot quality assessment.

    Args:
        session: Session populated by the upstream stages.
        config: Quality configuration. If None, loaded from config_path.
        config_path: Configuration file. If None, the bundled config.yaml.

    Returns:
        Assessment with one result per requested measure.

    Example:
        >>> assessment = assess_session(session)
        >>> for measure in assessment.failed():
        ...     print(f"Not assessable: {measure.value}")
    """
    if config is None:
        config = load_config(config_path) if config_path else load_config()
    executor = MeasureExecutor.from_config(config)
    return executor.execute_all(session)
