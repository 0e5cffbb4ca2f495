"""
Side-view neck analysis.

When the subject stands side-on, the facing side is derived from the
shoulders: depth (z) difference first, x-position as the fallback. The
craniovertebral angle (CVA) is then measured between the vertical and the
shoulder-to-ear vector of the facing side; a small CVA suggests forward
head posture ("turtle neck").

Works on raw detector coordinates, unlike the frontal analyzers.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np

from posture.cv.landmarks import BodyOrientation, Pose, PoseLandmark, get_landmarks
from posture.cv.thresholds import SIDE_X_DEADBAND, SIDE_Z_DEADBAND

logger = logging.getLogger(__name__)


DEFAULT_TURTLE_NECK_CVA = 50.0


@dataclass(frozen=True)
class SideViewAnalysis:
    """Side-on measurements for one pose."""
    side: Optional[BodyOrientation]
    side_angle: Optional[float]
    cva: Optional[float]
    is_turtle_neck: bool


def detect_side_direction(pose: Pose) -> Optional[BodyOrientation]:
    """
    Decide which side faces the camera.

    Returns:
        BodyOrientation.LEFT / RIGHT, or None when the shoulders are too
        close in both depth and x-position to tell.
    """
    shoulders = get_landmarks(pose, PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER)
    if shoulders is None:
        return None

    left, right = shoulders
    x_diff = left.x - right.x

    if left.z is not None and right.z is not None:
        z_diff = left.z - right.z
        if abs(z_diff) > SIDE_Z_DEADBAND:
            return BodyOrientation.LEFT if z_diff < 0 else BodyOrientation.RIGHT
        if abs(x_diff) > SIDE_X_DEADBAND:
            return BodyOrientation.LEFT if x_diff > 0 else BodyOrientation.RIGHT
        return None

    if abs(x_diff) > SIDE_X_DEADBAND:
        return BodyOrientation.LEFT if left.x < right.x else BodyOrientation.RIGHT
    return None


def calculate_side_angle(pose: Pose) -> Optional[float]:
    """Angle of the shoulder line in degrees."""
    shoulders = get_landmarks(pose, PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER)
    if shoulders is None:
        return None

    left, right = shoulders
    return float(np.degrees(np.arctan2(right.y - left.y, right.x - left.x)))


def calculate_cva(pose: Pose, side: Optional[BodyOrientation]) -> Optional[float]:
    """
    Craniovertebral angle between the vertical (0, 1) and shoulder -> ear.

    The vector is reversed for the left side so both sides measure against
    the same direction.
    """
    if side not in (BodyOrientation.LEFT, BodyOrientation.RIGHT):
        return None

    if side == BodyOrientation.LEFT:
        joints = get_landmarks(pose, PoseLandmark.LEFT_EAR, PoseLandmark.LEFT_SHOULDER)
    else:
        joints = get_landmarks(pose, PoseLandmark.RIGHT_EAR, PoseLandmark.RIGHT_SHOULDER)
    if joints is None:
        return None

    ear, shoulder = joints
    vector = np.array([ear.x - shoulder.x, ear.y - shoulder.y])
    if side == BodyOrientation.LEFT:
        vector = -vector

    norm = np.linalg.norm(vector)
    if norm == 0:
        return None

    vertical = np.array([0.0, 1.0])
    cosine = np.clip(np.dot(vertical, vector) / norm, -1.0, 1.0)
    return float(np.degrees(np.arccos(cosine)))


def is_turtle_neck(cva: Optional[float], threshold: float = DEFAULT_TURTLE_NECK_CVA) -> bool:
    if cva is None:
        return False
    return cva < threshold


def analyze_side_view(pose: Pose, turtle_neck_threshold: float = DEFAULT_TURTLE_NECK_CVA) -> SideViewAnalysis:
    side = detect_side_direction(pose)
    cva = calculate_cva(pose, side)

    if side is None:
        logger.debug("Side direction undetermined")

    return SideViewAnalysis(
        side=side,
        side_angle=calculate_side_angle(pose),
        cva=cva,
        is_turtle_neck=is_turtle_neck(cva, turtle_neck_threshold),
    )
