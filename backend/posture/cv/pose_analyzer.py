"""
Kinematic-chain posture analysis for a single frame.

PIPELINE:
1. Landmark validation (33 points, first detected pose only)
2. Region analyzers: pelvis -> spine -> shoulders (hysteresis) -> head/neck
3. Composite scores (balance, symmetry, alignment)
4. Compensation pattern detection
5. Posture pattern classification
6. Issues and recommendations
7. Orientation adjustment for side-on capture

The whole call is pure: identical inputs give identical output. The only
state crossing calls is the shoulder hysteresis status, returned on the
result as ``shoulder_status`` for the caller to feed back.
"""

import logging
import math
from dataclasses import asdict, dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    ShoulderStatus,
    SpineAlignment,
    analyze_head_neck_alignment,
    analyze_pelvic_alignment,
    analyze_shoulder_alignment,
    analyze_spine_alignment,
)
from posture.cv.compensation import CompensationPattern, detect_compensation_patterns
from posture.cv.feedback import analyze_issues, generate_recommendations
from posture.cv.landmarks import BodyOrientation, DevicePosition, Pose, is_pose_detected
from posture.cv.messages import Issue, Recommendation
from posture.cv.pattern_classifier import PosturePattern, classify_posture_pattern
from posture.cv.scoring import OverallAlignment, analyze_overall_alignment, round_half_up
from posture.cv.thresholds import SIDE_ROTATION_DAMPING

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class KinematicChainAnalysis:
    """Region results bundled in chain order."""
    pelvic: PelvicAlignment = field(default_factory=PelvicAlignment)
    spine: SpineAlignment = field(default_factory=SpineAlignment)
    shoulder: ShoulderAlignment = field(default_factory=ShoulderAlignment)
    head_neck: HeadNeckAlignment = field(default_factory=HeadNeckAlignment)
    overall: OverallAlignment = field(default_factory=OverallAlignment)


@dataclass(frozen=True)
class PoseAnalysisResult:
    """Full analysis of one frame."""
    # Legacy scalar fields kept for existing displays
    shoulder_angle: float
    shoulder_symmetry: int
    posture_score: int

    kinematic_chain: KinematicChainAnalysis
    posture_pattern: PosturePattern
    compensation_patterns: List[CompensationPattern] = field(default_factory=list)

    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)

    # Updated hysteresis state; pass back on the next frame
    shoulder_status: ShoulderStatus = ShoulderStatus.NORMAL

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with enum values, for JSON responses and history."""
        return asdict(self, dict_factory=_enum_value_dict)


def _enum_value_dict(items) -> Dict[str, Any]:
    return {key: getattr(value, "value", value) for key, value in items}


def empty_analysis_result(
    shoulder_status: ShoulderStatus = ShoulderStatus.NORMAL,
) -> PoseAnalysisResult:
    """Result for a frame without a usable pose."""
    return PoseAnalysisResult(
        shoulder_angle=0.0,
        shoulder_symmetry=0,
        posture_score=0,
        kinematic_chain=KinematicChainAnalysis(),
        posture_pattern=PosturePattern.UNKNOWN,
        compensation_patterns=[],
        issues=[Issue.NO_POSE],
        recommendations=[Recommendation.STAND_IN_FRONT],
        shoulder_status=shoulder_status,
    )


def adjust_analysis_for_orientation(
    result: PoseAnalysisResult,
    orientation: BodyOrientation,
) -> PoseAnalysisResult:
    """
    Damp shoulder rotation for side-on capture.

    Frontal-plane rotation over-estimates true rotation when the subject is
    not facing the camera. Halving it is a crude correction factor, not a
    recomputation of the geometry. Only ``kinematic_chain.shoulder.rotation``
    changes; scores and issues keep the unadjusted value.
    """
    if orientation not in (BodyOrientation.LEFT, BodyOrientation.RIGHT):
        return result

    chain = result.kinematic_chain
    shoulder = replace(chain.shoulder, rotation=chain.shoulder.rotation * SIDE_ROTATION_DAMPING)
    return replace(result, kinematic_chain=replace(chain, shoulder=shoulder))


def analyze_pose(
    poses: Optional[Sequence[Pose]],
    orientation: BodyOrientation = BodyOrientation.FRONT,
    device_position: DevicePosition = DevicePosition.BACK,
    previous_shoulder_status: ShoulderStatus = ShoulderStatus.NORMAL,
) -> PoseAnalysisResult:
    """
    Analyze the first detected pose of a frame.

    Args:
        poses: Poses detected in the frame; only the first is analyzed
        orientation: Which side of the body faces the camera
        device_position: Capturing camera
        previous_shoulder_status: Hysteresis status from the previous frame

    Returns:
        PoseAnalysisResult. Missing input yields a zeroed UNKNOWN result,
        never an exception.
    """
    orientation = BodyOrientation(orientation)
    device_position = DevicePosition(device_position)
    previous_shoulder_status = ShoulderStatus(previous_shoulder_status)

    if not poses or not is_pose_detected(poses[0]):
        logger.debug("No usable pose in frame")
        return empty_analysis_result(previous_shoulder_status)

    pose = poses[0]

    pelvic = analyze_pelvic_alignment(pose, device_position)
    spine = analyze_spine_alignment(pose, device_position)
    shoulder, shoulder_status = analyze_shoulder_alignment(
        pose, device_position, previous_shoulder_status
    )
    head_neck = analyze_head_neck_alignment(pose, device_position)
    overall = analyze_overall_alignment(pelvic, spine, shoulder, head_neck)

    compensation_patterns = detect_compensation_patterns(pelvic, spine, shoulder, head_neck)
    posture_pattern = classify_posture_pattern(pelvic, spine, shoulder, head_neck, overall)

    issues = analyze_issues(pelvic, spine, shoulder, head_neck, overall)
    recommendations = generate_recommendations(posture_pattern, compensation_patterns)

    shoulder_symmetry = math.floor(max(0.0, 100 - shoulder.height_difference * 50))
    posture_score = round_half_up(
        (overall.balance_score + overall.symmetry_score + overall.alignment_score) / 3
    )

    result = PoseAnalysisResult(
        shoulder_angle=abs(shoulder.rotation),
        shoulder_symmetry=int(shoulder_symmetry),
        posture_score=posture_score,
        kinematic_chain=KinematicChainAnalysis(
            pelvic=pelvic,
            spine=spine,
            shoulder=shoulder,
            head_neck=head_neck,
            overall=overall,
        ),
        posture_pattern=posture_pattern,
        compensation_patterns=compensation_patterns,
        issues=issues,
        recommendations=recommendations,
        shoulder_status=shoulder_status,
    )

    logger.debug(f"Pose analyzed: score={posture_score}, pattern={posture_pattern.value}, "
                 f"compensations={len(compensation_patterns)}")

    return adjust_analysis_for_orientation(result, orientation)
