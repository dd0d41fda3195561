"""
Configuration loader for the Quality module.

Loads and validates the measure configuration from a YAML file using
Pydantic models. The configuration lists the requested measures and,
per measure, optional sigmoid mapping overrides and measure-specific
parameters.

Example config.yaml:

    requested_measures:
      - MouthClosed
      - UnderExposurePrevention
    measures:
      MouthClosed:
        sigmoid: {h: 100, x0: 0.2, w: 0.06}
      UnderExposurePrevention:
        threshold: 25
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from src.quality.types import ConfigurationError, QualityMeasure

logger = logging.getLogger(__name__)

# Default configuration path (relative to this file)
DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.yaml"


class SigmoidConfig(BaseModel):
    """Sigmoid mapping override; every key is optional.

    Attributes:
        h: Scale factor
        a: Constant shift
        s: Signed weight of the sigmoid part
        x0: Centre point
        w: Divisor, must be non-zero
        round: Round the quality value to an integer
    """

    model_config = ConfigDict(extra="forbid")

    h: Optional[float] = None
    a: Optional[float] = None
    s: Optional[float] = None
    x0: Optional[float] = None
    w: Optional[float] = None
    round: Optional[bool] = None

    @field_validator("w")
    @classmethod
    def validate_w(cls, v: Optional[float]) -> Optional[float]:
        """Reject a zero divisor."""
        if v is not None and v == 0:
            raise ValueError("sigmoid divisor w must be non-zero")
        return v

    def overrides(self) -> Dict[str, Any]:
        """Fields explicitly set in the configuration."""
        return self.model_dump(exclude_none=True)


class MeasureConfig(BaseModel):
    """Configuration subtree of a single measure.

    Keys other than ``sigmoid`` are measure-specific parameters
    (e.g. ``threshold`` for the exposure measures).
    """

    model_config = ConfigDict(extra="allow")

    sigmoid: Optional[SigmoidConfig] = None

    def get_param(self, key: str, default: Any = None) -> Any:
        extra = self.model_extra or {}
        return extra.get(key, default)


class QualityConfig(BaseModel):
    """Complete quality module configuration.

    Attributes:
        requested_measures: Measure identifiers, in execution order
        measures: Per-measure configuration keyed by identifier
    """

    requested_measures: List[str] = Field(default_factory=list)
    measures: Dict[str, MeasureConfig] = Field(default_factory=dict)

    def measure_config(self, measure: QualityMeasure) -> MeasureConfig:
        """Configuration subtree for a measure (empty if not configured)."""
        for key, value in self.measures.items():
            if key in (measure.value, measure.name):
                return value
        return MeasureConfig()


def parse_config(raw: Any) -> QualityConfig:
    """
    Build and validate a QualityConfig from a plain dictionary.

    Raises:
        ConfigurationError: If the configuration is malformed or names
            unknown measures.
    """
    if raw is None:
        raw = {}
    if not isinstance(raw, dict):
        raise ConfigurationError(
            f"Configuration must be a mapping, got {type(raw).__name__}"
        )
    try:
        config = QualityConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e
    _validate_config(config)
    return config


def load_config(config_path: Path = DEFAULT_CONFIG_PATH) -> QualityConfig:
    """
    Load quality configuration from YAML file.

    Args:
        config_path: Path to the configuration YAML file.

    Returns:
        Validated QualityConfig object.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        ConfigurationError: If config is invalid.

    Example:
        >>> config = load_config()
        >>> config.requested_measures[0]
        'SingleFacePresent'
    """
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    logger.debug(f"Loading quality config from {config_path}")

    with open(config_path, "r", encoding="utf-8") as f:
        raw_config = yaml.safe_load(f)

    config = parse_config(raw_config)
    logger.info(
        f"Loaded quality configuration with "
        f"{len(config.requested_measures)} requested measures"
    )
    return config


def get_default_config() -> QualityConfig:
    """Configuration from the bundled config.yaml."""
    return load_config(DEFAULT_CONFIG_PATH)


def _validate_config(config: QualityConfig) -> None:
    """
    Validate configuration values for logical consistency.

    Raises:
        ConfigurationError: If the request list is empty, repeats a measure
            or names an unknown one, or if a configured subtree names an
            unknown measure.
    """
    if not config.requested_measures:
        raise ConfigurationError("At least one quality measure must be requested")

    seen = set()
    for identifier in config.requested_measures:
        measure = QualityMeasure.parse(identifier)
        if measure in seen:
            raise ConfigurationError(f"Measure {measure.value} requested twice")
        seen.add(measure)

    for key in config.measures:
        QualityMeasure.parse(key)

    logger.debug("Configuration validation passed")
