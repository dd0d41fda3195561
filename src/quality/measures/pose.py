"""
Head pose measures.

The raw score is the absolute rotation angle in degrees; a frontal pose
(0 degrees) maps to the top of the scale. The mapping is fixed and cannot
be overridden by the configuration.
"""

from typing import Tuple

from src.quality.measures.base import SUCCESS, Measure
from src.quality.session import Session
from src.quality.types import (
    QualityMeasure,
    QualityMeasureReturnCode,
    SigmoidParameters,
)

POSE_SIGMOID = SigmoidParameters(h=100, x0=0.0, w=15.0).inverted()


class _HeadPoseMeasure(Measure):
    angle_name = ""
    default_sigmoid = POSE_SIGMOID
    configurable = False

    def compute(self, session: Session) -> Tuple[float, QualityMeasureReturnCode]:
        pose = session.get_pose()
        return abs(float(getattr(pose, self.angle_name))), SUCCESS


class HeadPoseYaw(_HeadPoseMeasure):
    """Left/right head rotation."""

    measure = QualityMeasure.HEAD_POSE_YAW
    angle_name = "yaw"


class HeadPosePitch(_HeadPoseMeasure):
    """Up/down head rotation."""

    measure = QualityMeasure.HEAD_POSE_PITCH
    angle_name = "pitch"


class HeadPoseRoll(_HeadPoseMeasure):
    """In-plane head rotation."""

    measure = QualityMeasure.HEAD_POSE_ROLL
    angle_name = "roll"
