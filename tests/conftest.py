"""
Pytest Configuration and Shared Fixtures

This file contains pytest configuration and fixtures that are available
to all test modules. Landmark fixtures follow the 98-point WFLW layout of
a frontal face centred in a 200x200 aligned crop:

    eye centres (70, 80) and (130, 80)      -> IED = 60
    mouth corners (75, 150) and (125, 150)  -> eye-mouth distance = 70
    T = (60 + 70) / 2 = 65
    inner lip opening 6, eye opening 12
"""

import numpy as np
import pytest

from src.common.types import BBox, FaceLandmarks
from src.quality.session import Session
from src.quality.types import PoseAngles


def _frontal_points() -> np.ndarray:
    points = np.zeros((98, 2), dtype=np.float64)

    # Face contour: lower half-ellipse from right temple over the chin
    theta = np.linspace(0.0, np.pi, 33)
    points[0:33, 0] = 100.0 - 70.0 * np.cos(theta)
    points[0:33, 1] = 110.0 + 85.0 * np.sin(theta)

    # Eyebrows
    points[33:42] = np.column_stack([np.linspace(45, 85, 9), np.full(9, 60.0)])
    points[42:51] = np.column_stack([np.linspace(115, 155, 9), np.full(9, 60.0)])

    # Nose bridge and nostrils
    points[51:55] = np.column_stack([np.full(4, 100.0), np.linspace(80, 120, 4)])
    points[55:60] = np.column_stack([np.linspace(88, 112, 5), np.full(5, 128.0)])

    # Eyes: corner, 3 upper lid, corner, 3 lower lid
    right_eye = [(55, 80), (62, 75), (70, 74), (78, 75), (85, 80), (78, 85), (70, 86), (62, 85)]
    left_eye = [(115, 80), (122, 75), (130, 74), (138, 75), (145, 80), (138, 85), (130, 86), (122, 85)]
    points[60:68] = right_eye
    points[68:76] = left_eye

    # Outer lip contour
    theta = np.linspace(0.0, 2.0 * np.pi, 12, endpoint=False)
    points[76:88, 0] = 100.0 - 25.0 * np.cos(theta)
    points[76:88, 1] = 150.0 - 10.0 * np.sin(theta)

    # Inner lip: corner, 3 upper, corner, 3 lower
    inner = [(82, 150), (91, 148), (100, 147), (109, 148), (118, 150), (109, 152), (100, 153), (91, 152)]
    points[88:96] = inner

    # Eye centres
    points[96] = (70, 80)
    points[97] = (130, 80)
    return points


@pytest.fixture
def frontal_points():
    """Fixture providing a writable (98, 2) frontal landmark array."""
    return _frontal_points()


@pytest.fixture
def frontal_landmarks(frontal_points):
    """Fixture providing frontal landmarks in aligned (200x200) coordinates."""
    return FaceLandmarks(points=frontal_points)


@pytest.fixture
def image_landmarks(frontal_points):
    """Fixture providing the frontal landmarks placed in a 300x400 image."""
    return FaceLandmarks(points=frontal_points + np.array([100.0, 50.0]))


@pytest.fixture
def textured_face():
    """Fixture providing a 200x200 mid-gray aligned face with random texture."""
    rng = np.random.default_rng(seed=42)
    noise = rng.integers(-40, 41, size=(200, 200, 3))
    return np.clip(128 + noise, 0, 255).astype(np.uint8)


@pytest.fixture
def face_parsing():
    """Fixture providing a parsing mask: skin (1) inside the face box, background (0) elsewhere."""
    parsing = np.zeros((200, 200), dtype=np.uint8)
    parsing[40:190, 30:170] = 1
    return parsing


@pytest.fixture
def full_session(image_landmarks, frontal_landmarks, textured_face, face_parsing):
    """Fixture providing a Session with every upstream artifact populated."""
    return Session(
        image=np.full((300, 400, 3), 128, dtype=np.uint8),
        detected_faces=[BBox(x_min=120, y_min=60, x_max=280, y_max=250)],
        landmarks=image_landmarks,
        aligned_face=textured_face,
        aligned_landmarks=frontal_landmarks,
        pose=PoseAngles(yaw=0.0, pitch=0.0, roll=0.0),
        face_parsing=face_parsing,
        face_occlusion=np.ones((200, 200), dtype=np.uint8),
    )
