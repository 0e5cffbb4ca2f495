"""
Per-region alignment analysis along the kinematic chain.

Four independent analyzers (pelvis, spine, shoulders, head/neck) each read
their joints from a single pose, apply the capture transform, and return a
measurement bundle with threshold-derived issue strings. Missing or short
input never raises: the analyzer returns a zeroed result carrying one
"undetectable" issue.

The shoulder analyzer is the only stateful one. It applies a hysteresis band
to the height difference so the tilt issue does not toggle every frame when
the measurement sits near its threshold; the caller owns the status and
feeds it back on the next call.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

import numpy as np

from posture.cv.landmarks import DevicePosition, Pose, PoseLandmark, get_transformed
from posture.cv.messages import Issue
from posture.cv.thresholds import AnalysisThresholds as T

logger = logging.getLogger(__name__)


# Horizontal run used for the vertical-angle proxies (tilt, kyphosis, neck)
VERTICAL_ANGLE_RUN = 0.1

# Normalized coordinate differences are scaled to a cm-like unit
DISTANCE_SCALE = 100.0


class ShoulderStatus(str, Enum):
    """Hysteresis state of the shoulder height check."""
    NORMAL = "normal"
    PROBLEM = "problem"


@dataclass(frozen=True)
class PelvicAlignment:
    """Pelvis measurements."""
    height_difference: float = 0.0  # Left/right hip height gap (cm-like)
    rotation: float = 0.0  # Hip line angle (degrees)
    tilt: float = 0.0  # Hip-to-knee inclination (degrees)
    is_level: bool = True
    issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class SpineAlignment:
    """Spine measurements."""
    lateral_curve: float = 0.0  # Shoulder height gap (cm-like)
    kyphosis: float = 0.0  # Shoulder-over-hip inclination (degrees)
    lordosis: float = 0.0  # Reserved, not measured
    deviation: float = 0.0  # Shoulder/hip center lateral offset
    issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class ShoulderAlignment:
    """Shoulder measurements."""
    height_difference: float = 0.0
    rotation: float = 0.0
    protraction: float = 0.0  # Shoulder center ahead of elbow center
    elevation: float = 0.0
    issues: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class HeadNeckAlignment:
    """Head and neck measurements."""
    forward_head: float = 0.0  # Nose ahead of shoulder center
    neck_angle: float = 0.0  # Ear-over-shoulder inclination (degrees)
    head_tilt: float = 0.0  # Ear line angle (degrees)
    issues: List[str] = field(default_factory=list)


def _angle_deg(dy: float, dx: float) -> float:
    """atan2 in degrees."""
    return float(np.degrees(np.arctan2(dy, dx)))


def _graded_issue(value: float, warning: float, critical: float,
                  warning_issue: str, critical_issue: str) -> Optional[str]:
    """Pick the stronger message when the critical limit is exceeded."""
    if value > critical:
        return critical_issue
    if value > warning:
        return warning_issue
    return None


def analyze_pelvic_alignment(pose: Pose, device_position: DevicePosition) -> PelvicAlignment:
    """
    Measure hip height difference, hip line rotation, and pelvic tilt.

    Tilt is only computed when both knees are present; otherwise it stays 0.
    """
    hips = get_transformed(pose, device_position,
                           PoseLandmark.LEFT_HIP, PoseLandmark.RIGHT_HIP)
    if hips is None:
        logger.debug("Pelvic analysis skipped: hip landmarks missing")
        return PelvicAlignment(issues=[Issue.PELVIS_UNDETECTABLE])

    left_hip, right_hip = hips

    height_difference = abs(left_hip.y - right_hip.y) * DISTANCE_SCALE
    rotation = _angle_deg(right_hip.y - left_hip.y, right_hip.x - left_hip.x)

    tilt = 0.0
    knees = get_transformed(pose, device_position,
                            PoseLandmark.LEFT_KNEE, PoseLandmark.RIGHT_KNEE)
    if knees is not None:
        left_knee, right_knee = knees
        hip_center_y = (left_hip.y + right_hip.y) / 2
        knee_center_y = (left_knee.y + right_knee.y) / 2
        tilt = _angle_deg(hip_center_y - knee_center_y, VERTICAL_ANGLE_RUN)

    checks = [
        _graded_issue(height_difference,
                      T.PELVIC_HEIGHT_DIFF_WARNING, T.PELVIC_HEIGHT_DIFF_CRITICAL,
                      Issue.PELVIS_TILTED, Issue.PELVIS_SEVERELY_TILTED),
        _graded_issue(abs(rotation),
                      T.PELVIC_ROTATION_WARNING, T.PELVIC_ROTATION_CRITICAL,
                      Issue.PELVIS_ROTATED, Issue.PELVIS_SEVERELY_ROTATED),
        _graded_issue(abs(tilt),
                      T.PELVIC_TILT_WARNING, T.PELVIC_TILT_CRITICAL,
                      Issue.PELVIS_INCLINED, Issue.PELVIS_SEVERELY_INCLINED),
    ]

    return PelvicAlignment(
        height_difference=height_difference,
        rotation=rotation,
        tilt=tilt,
        is_level=height_difference < T.PELVIC_HEIGHT_DIFF_WARNING,
        issues=[issue for issue in checks if issue],
    )


def analyze_spine_alignment(pose: Pose, device_position: DevicePosition) -> SpineAlignment:
    """
    Estimate lateral deviation and kyphosis from shoulder and hip centers.

    Lordosis needs lumbar landmarks the detector does not provide; it is
    always reported as 0.
    """
    joints = get_transformed(pose, device_position,
                             PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER,
                             PoseLandmark.LEFT_HIP, PoseLandmark.RIGHT_HIP)
    if joints is None:
        logger.debug("Spine analysis skipped: shoulder/hip landmarks missing")
        return SpineAlignment(issues=[Issue.SPINE_UNDETECTABLE])

    left_shoulder, right_shoulder, left_hip, right_hip = joints

    shoulder_center_x = (left_shoulder.x + right_shoulder.x) / 2
    hip_center_x = (left_hip.x + right_hip.x) / 2
    deviation = abs(shoulder_center_x - hip_center_x) * DISTANCE_SCALE

    shoulder_center_y = (left_shoulder.y + right_shoulder.y) / 2
    hip_center_y = (left_hip.y + right_hip.y) / 2
    kyphosis = _angle_deg(shoulder_center_y - hip_center_y, VERTICAL_ANGLE_RUN)

    lateral_curve = abs(left_shoulder.y - right_shoulder.y) * DISTANCE_SCALE

    checks = [
        _graded_issue(deviation,
                      T.SPINE_LATERAL_CURVE_WARNING, T.SPINE_LATERAL_CURVE_CRITICAL,
                      Issue.SPINE_CURVED, Issue.SPINE_SEVERELY_CURVED),
        _graded_issue(kyphosis,
                      T.SPINE_KYPHOSIS_WARNING, T.SPINE_KYPHOSIS_CRITICAL,
                      Issue.KYPHOSIS, Issue.SEVERE_KYPHOSIS),
    ]

    return SpineAlignment(
        lateral_curve=lateral_curve,
        kyphosis=kyphosis,
        lordosis=0.0,
        deviation=deviation,
        issues=[issue for issue in checks if issue],
    )


def next_shoulder_status(previous: ShoulderStatus, height_difference: float) -> ShoulderStatus:
    """
    Apply the shoulder hysteresis band.

    NORMAL flips to PROBLEM only above the critical limit; PROBLEM flips back
    only below the warning limit. Inside [warning, critical] the status holds.
    """
    if previous == ShoulderStatus.NORMAL and height_difference > T.SHOULDER_HEIGHT_DIFF_CRITICAL:
        return ShoulderStatus.PROBLEM
    if previous == ShoulderStatus.PROBLEM and height_difference < T.SHOULDER_HEIGHT_DIFF_WARNING:
        return ShoulderStatus.NORMAL
    return previous


def analyze_shoulder_alignment(
    pose: Pose,
    device_position: DevicePosition,
    previous_status: ShoulderStatus = ShoulderStatus.NORMAL,
) -> Tuple[ShoulderAlignment, ShoulderStatus]:
    """
    Measure shoulder height difference, rotation, protraction, and elevation.

    Args:
        pose: 33-landmark pose
        device_position: Capturing camera
        previous_status: Hysteresis status returned by the previous call

    Returns:
        Tuple of (alignment, updated status). The caller must persist the
        status and pass it back on the next frame of the same stream.
    """
    shoulders = get_transformed(pose, device_position,
                                PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER)
    if shoulders is None:
        logger.debug("Shoulder analysis skipped: shoulder landmarks missing")
        return ShoulderAlignment(issues=[Issue.SHOULDER_UNDETECTABLE]), ShoulderStatus.NORMAL

    left_shoulder, right_shoulder = shoulders

    height_difference = abs(left_shoulder.y - right_shoulder.y) * DISTANCE_SCALE
    rotation = _angle_deg(right_shoulder.y - left_shoulder.y,
                          right_shoulder.x - left_shoulder.x)

    protraction = 0.0
    elbows = get_transformed(pose, device_position,
                             PoseLandmark.LEFT_ELBOW, PoseLandmark.RIGHT_ELBOW)
    if elbows is not None:
        left_elbow, right_elbow = elbows
        shoulder_center_x = (left_shoulder.x + right_shoulder.x) / 2
        elbow_center_x = (left_elbow.x + right_elbow.x) / 2
        protraction = (shoulder_center_x - elbow_center_x) * DISTANCE_SCALE

    elevation = min(left_shoulder.y, right_shoulder.y) * DISTANCE_SCALE

    status = next_shoulder_status(ShoulderStatus(previous_status), height_difference)

    issues: List[str] = []
    # Height issue follows the hysteresis status, not the raw measurement
    if status == ShoulderStatus.PROBLEM:
        if height_difference > T.SHOULDER_HEIGHT_DIFF_CRITICAL:
            issues.append(Issue.SHOULDER_SEVERELY_TILTED)
        else:
            issues.append(Issue.SHOULDER_TILTED)

    rotation_issue = _graded_issue(abs(rotation),
                                   T.SHOULDER_ROTATION_WARNING, T.SHOULDER_ROTATION_CRITICAL,
                                   Issue.SHOULDER_ROTATED, Issue.SHOULDER_SEVERELY_ROTATED)
    if rotation_issue:
        issues.append(rotation_issue)

    if status != previous_status:
        logger.debug(f"Shoulder status {ShoulderStatus(previous_status).value} -> {status.value} "
                     f"(height difference {height_difference:.2f})")

    alignment = ShoulderAlignment(
        height_difference=height_difference,
        rotation=rotation,
        protraction=protraction,
        elevation=elevation,
        issues=issues,
    )
    return alignment, status


def analyze_head_neck_alignment(pose: Pose, device_position: DevicePosition) -> HeadNeckAlignment:
    """Measure forward head position, neck angle, and head tilt."""
    joints = get_transformed(pose, device_position,
                             PoseLandmark.NOSE, PoseLandmark.LEFT_EAR, PoseLandmark.RIGHT_EAR,
                             PoseLandmark.LEFT_SHOULDER, PoseLandmark.RIGHT_SHOULDER)
    if joints is None:
        logger.debug("Head/neck analysis skipped: landmarks missing")
        return HeadNeckAlignment(issues=[Issue.HEAD_NECK_UNDETECTABLE])

    nose, left_ear, right_ear, left_shoulder, right_shoulder = joints

    shoulder_center_x = (left_shoulder.x + right_shoulder.x) / 2
    forward_head = (nose.x - shoulder_center_x) * DISTANCE_SCALE

    ear_center_y = (left_ear.y + right_ear.y) / 2
    shoulder_center_y = (left_shoulder.y + right_shoulder.y) / 2
    neck_angle = _angle_deg(ear_center_y - shoulder_center_y, VERTICAL_ANGLE_RUN)

    head_tilt = _angle_deg(right_ear.y - left_ear.y, right_ear.x - left_ear.x)

    issues: List[str] = []
    forward_issue = _graded_issue(forward_head,
                                  T.FORWARD_HEAD_WARNING, T.FORWARD_HEAD_CRITICAL,
                                  Issue.HEAD_FORWARD, Issue.HEAD_SEVERELY_FORWARD)
    if forward_issue:
        issues.append(forward_issue)

    if neck_angle < T.NECK_ANGLE_CRITICAL:
        issues.append(Issue.NECK_SEVERELY_BENT)
    elif neck_angle < T.NECK_ANGLE_WARNING:
        issues.append(Issue.NECK_BENT)

    return HeadNeckAlignment(
        forward_head=forward_head,
        neck_angle=neck_angle,
        head_tilt=head_tilt,
        issues=issues,
    )
