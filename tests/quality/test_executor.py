"""
Unit tests for the measure executor.
"""

import math

import numpy as np
import pytest

from src.common.types import FaceLandmarks
from src.quality.config_loader import load_config, parse_config
from src.quality.executor import MeasureExecutor, assess_session
from src.quality.measures import Measure, MouthClosed
from src.quality.session import Session
from src.quality.types import (
    Assessment,
    ConfigurationError,
    PoseAngles,
    QualityMeasure,
    QualityMeasureReturnCode,
)

SUCCESS = QualityMeasureReturnCode.SUCCESS
FAILURE = QualityMeasureReturnCode.FAILURE_TO_ASSESS


class _ExplodingMeasure(Measure):
    """Measure whose computation raises an unexpected error."""

    measure = QualityMeasure.SHARPNESS

    def compute(self, session):
        raise RuntimeError("kernel exploded")


class _SilentMeasure(Measure):
    """Measure that never records a result."""

    measure = QualityMeasure.DYNAMIC_RANGE

    def compute(self, session):
        return 1.0, SUCCESS

    def execute(self, session):
        return None


class TestExecutorSetup:
    """Tests for executor construction."""

    def test_empty_request(self):
        with pytest.raises(ConfigurationError):
            MeasureExecutor([])

    def test_empty_identifier_list(self):
        with pytest.raises(ConfigurationError):
            MeasureExecutor.from_identifiers([])

    def test_unknown_identifier(self):
        with pytest.raises(ConfigurationError, match="Unknown quality measure"):
            MeasureExecutor.from_identifiers(["MouthClosed", "Smile"])

    def test_duplicate_identifier(self):
        with pytest.raises(ConfigurationError, match="requested twice"):
            MeasureExecutor.from_identifiers(["MouthClosed", "MouthClosed"])

    def test_requested_order(self):
        executor = MeasureExecutor.from_identifiers(["HeadPoseRoll", "MouthClosed", "EyesOpen"])
        assert executor.requested == [
            QualityMeasure.HEAD_POSE_ROLL,
            QualityMeasure.MOUTH_CLOSED,
            QualityMeasure.EYES_OPEN,
        ]

    def test_from_config(self):
        config = parse_config(
            {
                "requested_measures": ["MouthClosed", "Sharpness"],
                "measures": {"Sharpness": {"sigmoid": {"w": 10.0}}},
            }
        )
        executor = MeasureExecutor.from_config(config)
        assert executor.requested == [QualityMeasure.MOUTH_CLOSED, QualityMeasure.SHARPNESS]
        assert executor.measures[1].sigmoid.w == 10.0

    @pytest.mark.parametrize("identifier", ["HeadPoseYaw", "HeadPoseRoll", "SingleFacePresent"])
    def test_fixed_mapping_override_rejected(self, identifier):
        """Measures with a fixed mapping reject a configured sigmoid."""
        config = parse_config(
            {
                "requested_measures": [identifier],
                "measures": {identifier: {"sigmoid": {"w": 10.0}}},
            }
        )
        with pytest.raises(ConfigurationError, match="not configurable"):
            MeasureExecutor.from_config(config)


class TestExecuteAll:
    """Tests for MeasureExecutor.execute_all."""

    def test_full_default_assessment(self, full_session):
        """Every bundled measure succeeds on a complete frontal session."""
        executor = MeasureExecutor.from_config(load_config())
        assessment = executor.execute_all(full_session)

        assert isinstance(assessment, Assessment)
        assert assessment.measures() == executor.requested
        assert assessment.failed() == []
        for measure in assessment:
            scalar = assessment[measure].scalar
            assert 0.0 <= scalar <= 100.0
            assert scalar == math.floor(scalar)

    def test_one_result_per_measure(self, full_session):
        executor = MeasureExecutor.from_identifiers(["MouthClosed", "EyesOpen", "HeadPoseYaw"])
        assessment = executor.execute_all(full_session)
        assert len(assessment) == 3
        assert len(full_session.results) == 3

    def test_missing_artifacts_isolated(self, frontal_landmarks):
        """Measures lacking artifacts fail; the others still succeed."""
        session = Session(
            aligned_landmarks=frontal_landmarks,
            pose=PoseAngles(yaw=5.0, pitch=0.0, roll=0.0),
        )
        executor = MeasureExecutor.from_identifiers(
            ["Sharpness", "MouthClosed", "InterEyeDistance", "HeadPoseYaw"]
        )
        assessment = executor.execute_all(session)

        assert assessment.successful() == [QualityMeasure.MOUTH_CLOSED, QualityMeasure.HEAD_POSE_YAW]
        assert assessment.failed() == [QualityMeasure.SHARPNESS, QualityMeasure.INTER_EYE_DISTANCE]
        assert math.isnan(assessment["Sharpness"].scalar)

    def test_no_face_detected(self, full_session):
        full_session.detected_faces = []
        executor = MeasureExecutor.from_config(load_config())
        assessment = executor.execute_all(full_session)
        assert assessment.successful() == []
        assert len(assessment) == len(QualityMeasure)

    def test_raising_measure_isolated(self, full_session):
        executor = MeasureExecutor([_ExplodingMeasure(), MouthClosed()])
        assessment = executor.execute_all(full_session)

        assert assessment[QualityMeasure.SHARPNESS].code == FAILURE
        assert math.isnan(assessment[QualityMeasure.SHARPNESS].raw_score)
        assert assessment[QualityMeasure.MOUTH_CLOSED].code == SUCCESS

    def test_missing_result_filled(self, full_session):
        executor = MeasureExecutor([_SilentMeasure(), MouthClosed()])
        assessment = executor.execute_all(full_session)
        assert assessment[QualityMeasure.DYNAMIC_RANGE].code == FAILURE
        assert list(assessment) == [QualityMeasure.DYNAMIC_RANGE, QualityMeasure.MOUTH_CLOSED]

    def test_mouth_closed_scenarios(self):
        points = np.full((98, 2), 5.0)
        points[96], points[97] = (0, 0), (10, 0)
        points[76], points[82] = (0, 10), (10, 10)
        points[[89, 91, 93, 95]] = (5, 10)
        points[90], points[94] = (5, 9), (5, 11)

        executor = MeasureExecutor.from_identifiers(["MouthClosed"])
        result = executor.execute_all(Session(aligned_landmarks=FaceLandmarks(points=points)))["MouthClosed"]
        assert result.raw_score == pytest.approx(0.2)
        assert result.scalar == 100.0
        assert result.code == SUCCESS

        degenerate = Session(aligned_landmarks=FaceLandmarks(points=np.zeros((98, 2))))
        result = executor.execute_all(degenerate)["MouthClosed"]
        assert result.code == FAILURE
        assert math.isnan(result.raw_score)
        assert math.isnan(result.scalar)

    def test_executor_reusable_across_sessions(self, full_session, frontal_landmarks):
        executor = MeasureExecutor.from_identifiers(["MouthClosed"])
        first = executor.execute_all(full_session)
        second = executor.execute_all(Session(aligned_landmarks=frontal_landmarks))
        assert first["MouthClosed"] == second["MouthClosed"]

    def test_session_assessed_twice_rejected(self, full_session):
        """A second pass over the same Session is refused, not served stale."""
        executor = MeasureExecutor.from_identifiers(["MouthClosed"])
        first = executor.execute_all(full_session)

        with pytest.raises(ValueError, match="already holds"):
            executor.execute_all(full_session)
        with pytest.raises(ValueError, match="already holds"):
            MeasureExecutor.from_identifiers(["EyesOpen"]).execute_all(full_session)
        assert full_session.results == {QualityMeasure.MOUTH_CLOSED: first["MouthClosed"]}


class TestAssessSession:
    """Tests for the assess_session convenience function."""

    def test_default_config(self, full_session):
        assessment = assess_session(full_session)
        assert len(assessment) == len(QualityMeasure)

    def test_explicit_config(self, full_session):
        config = parse_config({"requested_measures": ["EyesOpen"]})
        assessment = assess_session(full_session, config=config)
        assert assessment.measures() == [QualityMeasure.EYES_OPEN]
