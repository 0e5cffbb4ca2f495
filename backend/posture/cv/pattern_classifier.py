"""
Rule-based posture pattern classification.

POSTURE ARCHETYPES:
- TYPE_A: lateral pelvic tilt with shoulder rotation
- TYPE_B: anterior pelvic tilt with forward head (typical seated posture)
- TYPE_C: one-sided loading, lateral spine curve, dropped shoulder
- TYPE_D: military posture (over-corrected backward alignment)
- TYPE_E: normal posture
- UNKNOWN: nothing matched

Rules are evaluated in the order above and the first match wins. The rules
for A-D can hold at the same time; the order decides which label is shown.
"""

from enum import Enum

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    SpineAlignment,
)
from posture.cv.scoring import OverallAlignment
from posture.cv.thresholds import AnalysisThresholds as T


class PosturePattern(str, Enum):
    TYPE_A = "A"
    TYPE_B = "B"
    TYPE_C = "C"
    TYPE_D = "D"
    TYPE_E = "E"
    UNKNOWN = "unclassified"

    @property
    def description(self) -> str:
        return PATTERN_DESCRIPTIONS[self]


PATTERN_DESCRIPTIONS = {
    PosturePattern.TYPE_A: "lateral pelvic tilt with shoulder rotation",
    PosturePattern.TYPE_B: "anterior pelvic tilt with forward head",
    PosturePattern.TYPE_C: "one-sided loading with lateral curve and dropped shoulder",
    PosturePattern.TYPE_D: "military posture, excessive backward alignment",
    PosturePattern.TYPE_E: "normal posture",
    PosturePattern.UNKNOWN: "unclassified",
}


def classify_posture_pattern(
    pelvic: PelvicAlignment,
    spine: SpineAlignment,
    shoulder: ShoulderAlignment,
    head_neck: HeadNeckAlignment,
    overall: OverallAlignment,
) -> PosturePattern:
    if (pelvic.height_difference > T.PELVIC_HEIGHT_DIFF_WARNING
            and abs(shoulder.rotation) > T.SHOULDER_ROTATION_WARNING):
        return PosturePattern.TYPE_A

    if (pelvic.tilt > T.PELVIC_TILT_WARNING
            and head_neck.forward_head > T.FORWARD_HEAD_WARNING):
        return PosturePattern.TYPE_B

    if (spine.deviation > T.SPINE_LATERAL_CURVE_WARNING
            and shoulder.height_difference > T.SHOULDER_HEIGHT_DIFF_WARNING):
        return PosturePattern.TYPE_C

    if (spine.kyphosis < T.MILITARY_KYPHOSIS_MAX
            and head_neck.forward_head < T.MILITARY_FORWARD_HEAD_MAX):
        return PosturePattern.TYPE_D

    if (overall.balance_score > T.BALANCE_SCORE_WARNING
            and overall.symmetry_score > T.SYMMETRY_SCORE_WARNING):
        return PosturePattern.TYPE_E

    return PosturePattern.UNKNOWN
