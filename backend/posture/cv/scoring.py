"""
Composite posture scores.

Each score normalizes its raw measurements against their critical limits,
combines them with fixed weights, and compresses the sum through a logistic
curve so the score degrades smoothly instead of stepping at thresholds.
Scores are integers in [10, 100]; the floor keeps even a very poor frame
from reading as a total failure.
"""

import math
from dataclasses import dataclass, field
from typing import List

import numpy as np

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    SpineAlignment,
)
from posture.cv.thresholds import (
    MIN_COMPOSITE_SCORE,
    SIGMOID_MIDPOINT,
    SIGMOID_STEEPNESS,
    AnalysisThresholds as T,
    ScoreWeights as W,
)


@dataclass(frozen=True)
class OverallAlignment:
    """Composite scores plus every region issue, in chain order."""
    balance_score: int = 0
    symmetry_score: int = 0
    alignment_score: int = 0
    issues: List[str] = field(default_factory=list)


def sigmoid(x: float, k: float = SIGMOID_STEEPNESS, mid: float = SIGMOID_MIDPOINT) -> float:
    """Decreasing logistic curve mapping a [0, 1] deficit to a 0-100 score."""
    return float(100.0 / (1.0 + np.exp(k * (x - mid))))


def normalize_value(value: float, threshold: float) -> float:
    """Scale by the critical threshold, capped at 1."""
    return min(value / threshold, 1.0)


def round_half_up(value: float) -> int:
    """Round .5 away from zero for positive values (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def composite_score(weighted_sum: float) -> int:
    return max(MIN_COMPOSITE_SCORE, round_half_up(sigmoid(weighted_sum)))


def balance_score(pelvic: PelvicAlignment) -> int:
    """Pelvis-only score: height difference, rotation, tilt."""
    weighted = (
        normalize_value(pelvic.height_difference, T.PELVIC_HEIGHT_DIFF_CRITICAL) * W.PELVIC_HEIGHT
        + normalize_value(abs(pelvic.rotation), T.PELVIC_ROTATION_CRITICAL) * W.PELVIC_ROTATION
        + normalize_value(abs(pelvic.tilt), T.PELVIC_TILT_CRITICAL) * W.PELVIC_TILT
    )
    return composite_score(weighted)


def symmetry_score(shoulder: ShoulderAlignment, head_neck: HeadNeckAlignment) -> int:
    """Left/right symmetry: shoulder height, shoulder rotation, head tilt."""
    weighted = (
        normalize_value(shoulder.height_difference, T.SHOULDER_HEIGHT_DIFF_CRITICAL) * W.SHOULDER_HEIGHT
        + normalize_value(abs(shoulder.rotation), T.SHOULDER_ROTATION_CRITICAL) * W.SHOULDER_ROTATION
        + normalize_value(abs(head_neck.head_tilt), T.HEAD_TILT_NORMALIZER) * W.HEAD_TILT
    )
    return composite_score(weighted)


def alignment_score(spine: SpineAlignment, head_neck: HeadNeckAlignment) -> int:
    """Vertical alignment: spine deviation, kyphosis off 40 degrees, forward head."""
    weighted = (
        normalize_value(spine.deviation, T.SPINE_LATERAL_CURVE_CRITICAL) * W.SPINE_DEVIATION
        + normalize_value(abs(spine.kyphosis - T.KYPHOSIS_REFERENCE),
                          T.KYPHOSIS_DEVIATION_NORMALIZER) * W.SPINE_KYPHOSIS
        + normalize_value(abs(head_neck.forward_head), T.FORWARD_HEAD_CRITICAL) * W.FORWARD_HEAD
    )
    return composite_score(weighted)


def analyze_overall_alignment(
    pelvic: PelvicAlignment,
    spine: SpineAlignment,
    shoulder: ShoulderAlignment,
    head_neck: HeadNeckAlignment,
) -> OverallAlignment:
    """Aggregate the four region results into the three composite scores."""
    return OverallAlignment(
        balance_score=balance_score(pelvic),
        symmetry_score=symmetry_score(shoulder, head_neck),
        alignment_score=alignment_score(spine, head_neck),
        issues=[*pelvic.issues, *spine.issues, *shoulder.issues, *head_neck.issues],
    )
