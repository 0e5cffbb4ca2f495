"""Shared pose builders for the posture tests."""

import math
from dataclasses import asdict
from typing import Dict, List, Optional, Tuple

import pytest

from posture.cv.landmarks import DevicePosition, Landmark, PoseLandmark


# Shoulders sit this far above the hips so kyphosis reads just under the
# 40 degree warning limit
NEUTRAL_KYPHOSIS = 39.5
KYPHOSIS_RISE = 0.1 * math.tan(math.radians(NEUTRAL_KYPHOSIS))

HIP_Y = 0.40
SHOULDER_Y = HIP_Y + KYPHOSIS_RISE

# Upright, level, symmetric pose in transformed (analysis) coordinates
NEUTRAL_POINTS: Dict[PoseLandmark, Tuple[float, float]] = {
    PoseLandmark.NOSE: (0.50, 0.62),
    PoseLandmark.LEFT_EYE: (0.48, 0.63),
    PoseLandmark.RIGHT_EYE: (0.52, 0.63),
    PoseLandmark.LEFT_EAR: (0.47, 0.60),
    PoseLandmark.RIGHT_EAR: (0.53, 0.60),
    PoseLandmark.LEFT_SHOULDER: (0.30, SHOULDER_Y),
    PoseLandmark.RIGHT_SHOULDER: (0.70, SHOULDER_Y),
    PoseLandmark.LEFT_ELBOW: (0.28, 0.44),
    PoseLandmark.RIGHT_ELBOW: (0.72, 0.44),
    PoseLandmark.LEFT_HIP: (0.35, HIP_Y),
    PoseLandmark.RIGHT_HIP: (0.65, HIP_Y),
    PoseLandmark.LEFT_KNEE: (0.35, HIP_Y),
    PoseLandmark.RIGHT_KNEE: (0.65, HIP_Y),
}


def to_raw(point: Tuple[float, float], device_position: DevicePosition) -> Tuple[float, float]:
    """Invert the capture transform: analysis coordinates -> detector coordinates."""
    x, y = point
    raw_y = 1 - x
    if device_position == DevicePosition.BACK:
        raw_x = y
    else:
        raw_x = 1 - y
    return raw_x, raw_y


def make_pose(
    device_position: DevicePosition = DevicePosition.BACK,
    overrides: Optional[Dict[PoseLandmark, Tuple[float, float]]] = None,
    length: int = 33,
) -> List[Optional[Landmark]]:
    """
    Build a detector-space pose from analysis-space points.

    Joints not in NEUTRAL_POINTS or ``overrides`` sit at the frame center.
    """
    points = dict(NEUTRAL_POINTS)
    points.update(overrides or {})

    pose: List[Optional[Landmark]] = []
    for index in range(length):
        analysis_point = points.get(index, (0.5, 0.5))
        raw_x, raw_y = to_raw(analysis_point, device_position)
        pose.append(Landmark(x=raw_x, y=raw_y, z=0.0, visibility=0.99))
    return pose


def shoulders_with_height_difference(cm: float) -> Dict[PoseLandmark, Tuple[float, float]]:
    """Shoulder overrides giving a height difference of ``cm`` (x100 scale)."""
    half = cm / 200.0
    return {
        PoseLandmark.LEFT_SHOULDER: (0.30, SHOULDER_Y + half),
        PoseLandmark.RIGHT_SHOULDER: (0.70, SHOULDER_Y - half),
    }


def hips_with_height_difference(cm: float) -> Dict[PoseLandmark, Tuple[float, float]]:
    """Hip overrides giving a height difference of ``cm``, hip center unchanged."""
    half = cm / 200.0
    return {
        PoseLandmark.LEFT_HIP: (0.35, HIP_Y + half),
        PoseLandmark.RIGHT_HIP: (0.65, HIP_Y - half),
    }


def pose_to_json(pose: List[Optional[Landmark]]) -> List[Optional[dict]]:
    return [asdict(lm) if lm is not None else None for lm in pose]


@pytest.fixture
def neutral_pose():
    return make_pose()
