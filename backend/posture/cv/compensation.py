"""
Compensation pattern detection.

Models the kinematic-chain assumption that a deficit at a lower joint is
compensated by every joint group above it. One pattern per region whose
warning limit is exceeded, in pelvis -> spine -> shoulder -> head order.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    SpineAlignment,
)
from posture.cv.thresholds import AnalysisThresholds as T


class CompensationType(str, Enum):
    PELVIC = "pelvic_compensation"
    SPINE = "spine_compensation"
    SHOULDER = "shoulder_compensation"
    HEAD = "head_compensation"


class Severity(str, Enum):
    # MILD is part of the vocabulary but the detector only emits the other two
    MILD = "mild"
    MODERATE = "moderate"
    SEVERE = "severe"


@dataclass(frozen=True)
class CompensationPattern:
    """A detected compensation chain."""
    type: CompensationType
    severity: Severity
    description: str
    affected_joints: List[str] = field(default_factory=list)


def _severity(value: float, critical: float) -> Severity:
    return Severity.SEVERE if value > critical else Severity.MODERATE


def detect_compensation_patterns(
    pelvic: PelvicAlignment,
    spine: SpineAlignment,
    shoulder: ShoulderAlignment,
    head_neck: HeadNeckAlignment,
) -> List[CompensationPattern]:
    patterns: List[CompensationPattern] = []

    if pelvic.height_difference > T.PELVIC_HEIGHT_DIFF_WARNING:
        patterns.append(CompensationPattern(
            type=CompensationType.PELVIC,
            severity=_severity(pelvic.height_difference, T.PELVIC_HEIGHT_DIFF_CRITICAL),
            description="upper body compensating for pelvic tilt",
            affected_joints=["spine", "shoulder", "head"],
        ))

    if spine.deviation > T.SPINE_LATERAL_CURVE_WARNING:
        patterns.append(CompensationPattern(
            type=CompensationType.SPINE,
            severity=_severity(spine.deviation, T.SPINE_LATERAL_CURVE_CRITICAL),
            description="shoulders compensating for lateral spine curve",
            affected_joints=["shoulder", "head"],
        ))

    if shoulder.height_difference > T.SHOULDER_HEIGHT_DIFF_WARNING:
        patterns.append(CompensationPattern(
            type=CompensationType.SHOULDER,
            severity=_severity(shoulder.height_difference, T.SHOULDER_HEIGHT_DIFF_CRITICAL),
            description="head compensating for shoulder tilt",
            affected_joints=["head"],
        ))

    if head_neck.forward_head > T.FORWARD_HEAD_WARNING:
        patterns.append(CompensationPattern(
            type=CompensationType.HEAD,
            severity=_severity(head_neck.forward_head, T.FORWARD_HEAD_CRITICAL),
            description="neck compensating for forward head position",
            affected_joints=["neck"],
        ))

    return patterns
