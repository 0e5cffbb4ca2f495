"""
Issue and recommendation generation.

Issues come from a second, independent threshold pass over the region
results and the balance score; they are diagnostic detail and may disagree
with the pattern label. Recommendations are a fixed mapping from the
pattern plus one entry per detected compensation, in detection order.
"""

from typing import Dict, List

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    SpineAlignment,
)
from posture.cv.compensation import CompensationPattern, CompensationType
from posture.cv.messages import Issue, Recommendation
from posture.cv.pattern_classifier import PosturePattern
from posture.cv.scoring import OverallAlignment
from posture.cv.thresholds import AnalysisThresholds as T


PATTERN_RECOMMENDATIONS: Dict[PosturePattern, List[str]] = {
    PosturePattern.TYPE_A: [
        Recommendation.CORRECT_PELVIC_TILT_FIRST,
        Recommendation.LEVEL_SHOULDER_ROTATION,
    ],
    PosturePattern.TYPE_B: [
        Recommendation.CORRECT_ANTERIOR_PELVIC_TILT,
        Recommendation.DRAW_HEAD_BACK,
    ],
    PosturePattern.TYPE_C: [
        Recommendation.REDUCE_ONE_SIDED_LOADING,
        Recommendation.LEVEL_SHOULDER_HEIGHT,
    ],
    PosturePattern.TYPE_D: [Recommendation.RELAX_BACKWARD_ALIGNMENT],
    PosturePattern.TYPE_E: [Recommendation.MAINTAIN_POSTURE],
    PosturePattern.UNKNOWN: [],
}

COMPENSATION_RECOMMENDATIONS: Dict[CompensationType, str] = {
    CompensationType.PELVIC: Recommendation.PELVIC_EXERCISES,
    CompensationType.SPINE: Recommendation.SCOLIOSIS_EXERCISES,
    CompensationType.SHOULDER: Recommendation.SHOULDER_EXERCISES,
    CompensationType.HEAD: Recommendation.NECK_STRETCH,
}


def analyze_issues(
    pelvic: PelvicAlignment,
    spine: SpineAlignment,
    shoulder: ShoulderAlignment,
    head_neck: HeadNeckAlignment,
    overall: OverallAlignment,
) -> List[str]:
    """
    Summary issue list.

    Shoulder height here uses the raw thresholds, not the hysteresis status
    of the shoulder analyzer.
    """
    issues: List[str] = []

    if pelvic.height_difference > T.PELVIC_HEIGHT_DIFF_CRITICAL:
        issues.append(Issue.PELVIS_SEVERELY_TILTED)
    elif pelvic.height_difference > T.PELVIC_HEIGHT_DIFF_WARNING:
        issues.append(Issue.PELVIS_TILTED)

    if spine.deviation > T.SPINE_LATERAL_CURVE_CRITICAL:
        issues.append(Issue.SPINE_SEVERELY_CURVED)
    elif spine.deviation > T.SPINE_LATERAL_CURVE_WARNING:
        issues.append(Issue.SPINE_CURVED)

    if shoulder.height_difference > T.SHOULDER_HEIGHT_DIFF_CRITICAL:
        issues.append(Issue.SHOULDER_SEVERELY_TILTED)
    elif shoulder.height_difference > T.SHOULDER_HEIGHT_DIFF_WARNING:
        issues.append(Issue.SHOULDER_TILTED)

    if head_neck.forward_head > T.FORWARD_HEAD_CRITICAL:
        issues.append(Issue.HEAD_SEVERELY_FORWARD)
    elif head_neck.forward_head > T.FORWARD_HEAD_WARNING:
        issues.append(Issue.HEAD_FORWARD)

    if overall.balance_score < T.BALANCE_SCORE_CRITICAL:
        issues.append(Issue.BALANCE_SEVERELY_POOR)
    elif overall.balance_score < T.BALANCE_SCORE_WARNING:
        issues.append(Issue.BALANCE_POOR)

    return issues


def generate_recommendations(
    posture_pattern: PosturePattern,
    compensation_patterns: List[CompensationPattern],
) -> List[str]:
    recommendations = list(PATTERN_RECOMMENDATIONS[posture_pattern])
    for pattern in compensation_patterns:
        recommendations.append(COMPENSATION_RECOMMENDATIONS[pattern.type])
    return recommendations
