"""
Unit tests for the measure registry.
"""

import pytest

from src.quality.config_loader import parse_config
from src.quality.measures import MouthClosed, UnderExposurePrevention
from src.quality.registry import MEASURE_REGISTRY, create_measure
from src.quality.types import ConfigurationError, QualityMeasure


class TestMeasureRegistry:
    """Tests for the registry table."""

    def test_every_identifier_registered(self):
        assert set(MEASURE_REGISTRY) == set(QualityMeasure)

    def test_classes_match_identifiers(self):
        for measure, cls in MEASURE_REGISTRY.items():
            assert cls.measure is measure

    def test_read_only(self):
        with pytest.raises(TypeError):
            MEASURE_REGISTRY[QualityMeasure.MOUTH_CLOSED] = MouthClosed


class TestCreateMeasure:
    """Tests for create_measure."""

    def test_create_by_value(self):
        measure = create_measure("MouthClosed")
        assert isinstance(measure, MouthClosed)
        assert measure.sigmoid.x0 == 0.2

    def test_create_by_member(self):
        assert isinstance(create_measure(QualityMeasure.MOUTH_CLOSED), MouthClosed)

    def test_unknown_identifier(self):
        with pytest.raises(ConfigurationError):
            create_measure("NotAMeasure")

    def test_config_override_is_partial(self):
        config = parse_config(
            {
                "requested_measures": ["MouthClosed"],
                "measures": {"MouthClosed": {"sigmoid": {"w": 0.1}}},
            }
        )
        measure = create_measure("MouthClosed", config)
        assert measure.sigmoid.w == 0.1
        assert measure.sigmoid.x0 == 0.2
        assert measure.sigmoid.s == -2.0

    def test_measure_parameters_from_config(self):
        config = parse_config(
            {
                "requested_measures": ["UnderExposurePrevention"],
                "measures": {"UnderExposurePrevention": {"threshold": 40}},
            }
        )
        measure = create_measure("UnderExposurePrevention", config)
        assert isinstance(measure, UnderExposurePrevention)
        assert measure.threshold == 40.0

    def test_unconfigured_measure_keeps_default(self):
        config = parse_config({"requested_measures": ["MouthClosed"]})
        assert create_measure("MouthClosed", config).sigmoid == MouthClosed.default_sigmoid
