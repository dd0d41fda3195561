"""
I/O Utilities

Loading upstream artifact bundles into Sessions and saving assessments.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import numpy as np

from src.common.types import BBox, FaceLandmarks
from src.quality.session import Session
from src.quality.types import Assessment, PoseAngles

logger = logging.getLogger(__name__)

# Array names recognised in an artifact bundle
SESSION_ARRAYS = (
    "image",
    "detected_faces",
    "landmarks",
    "aligned_face",
    "aligned_landmarks",
    "pose",
    "face_parsing",
    "face_occlusion",
)


def save_json(data: Dict[str, Any], file_path: Path, indent: int = 2):
    """Save data to JSON file."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, "w") as f:
        json.dump(data, f, indent=indent)


def load_session(file_path: Path) -> Session:
    """
    Build a Session from a .npz bundle of upstream artifacts.

    Every array is optional. ``pose`` holds (yaw, pitch, roll) in degrees,
    ``detected_faces`` is a (K, 4) array of [x_min, y_min, x_max, y_max].

    Args:
        file_path: Path to the .npz bundle.

    Returns:
        Session holding the bundled artifacts.

    Raises:
        FileNotFoundError: If the bundle does not exist.
        ValueError: If an array has an invalid shape.

    Example:
        >>> session = load_session(Path("artifacts/portrait_001.npz"))
    """
    file_path = Path(file_path)
    if not file_path.exists():
        raise FileNotFoundError(f"Artifact bundle not found: {file_path}")

    with np.load(file_path) as bundle:
        files = set(bundle.files)
        arrays = {name: bundle[name] for name in SESSION_ARRAYS if name in files}
        unknown = sorted(files - set(SESSION_ARRAYS))

    if unknown:
        logger.warning(f"Ignoring unknown arrays in {file_path.name}: {unknown}")

    kwargs: Dict[str, Any] = {}
    for name in ("image", "aligned_face", "face_parsing", "face_occlusion"):
        if name in arrays:
            kwargs[name] = arrays[name]
    for name in ("landmarks", "aligned_landmarks"):
        if name in arrays:
            kwargs[name] = FaceLandmarks(points=arrays[name])
    if "pose" in arrays:
        pose = np.asarray(arrays["pose"], dtype=np.float64).ravel()
        if pose.shape != (3,):
            raise ValueError(f"Expected pose of shape (3,), got {pose.shape}")
        kwargs["pose"] = PoseAngles(
            yaw=float(pose[0]), pitch=float(pose[1]), roll=float(pose[2])
        )
    if "detected_faces" in arrays:
        boxes = np.asarray(arrays["detected_faces"]).reshape(-1, 4)
        kwargs["detected_faces"] = [BBox.from_numpy(box) for box in boxes]

    logger.info(f"Loaded session artifacts {sorted(arrays)} from {file_path}")
    return Session(**kwargs)


def save_assessment(assessment: Assessment, file_path: Path) -> None:
    """Save an assessment as JSON; undefined scores are written as null."""
    save_json(assessment.to_dict(), file_path)
    logger.info(f"Assessment saved to {file_path}")
