"""Composite score tests."""

import pytest

from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    SpineAlignment,
    analyze_pelvic_alignment,
)
from posture.cv.landmarks import DevicePosition
from posture.cv.scoring import (
    analyze_overall_alignment,
    balance_score,
    composite_score,
    normalize_value,
    round_half_up,
    sigmoid,
)

from conftest import hips_with_height_difference, make_pose


def test_sigmoid_midpoint_is_fifty():
    assert sigmoid(0.6) == pytest.approx(50.0)


def test_sigmoid_decreases():
    assert sigmoid(0.0) > sigmoid(0.5) > sigmoid(1.0)


def test_normalize_caps_at_one():
    assert normalize_value(1.0, 2.0) == pytest.approx(0.5)
    assert normalize_value(10.0, 2.0) == 1.0


def test_round_half_up_differs_from_bankers_rounding():
    assert round_half_up(2.5) == 3
    assert round_half_up(3.5) == 4
    assert round_half_up(2.49) == 2


def test_perfect_input_scores_99():
    assert composite_score(0.0) == 99


def test_floor_for_maximally_bad_input():
    assert composite_score(1.0) == 10

    pelvic = PelvicAlignment(height_difference=50, rotation=-90, tilt=90)
    spine = SpineAlignment(deviation=40, kyphosis=90)
    shoulder = ShoulderAlignment(height_difference=30, rotation=170)
    head_neck = HeadNeckAlignment(forward_head=-20, head_tilt=-60)

    overall = analyze_overall_alignment(pelvic, spine, shoulder, head_neck)

    assert overall.balance_score == 10
    assert overall.symmetry_score == 10
    assert overall.alignment_score == 10


@pytest.mark.parametrize("pelvic", [
    PelvicAlignment(),
    PelvicAlignment(height_difference=1.2, rotation=3.0, tilt=4.0),
    PelvicAlignment(height_difference=2.5, rotation=-12.0, tilt=20.0),
    PelvicAlignment(height_difference=100.0, rotation=179.0, tilt=-89.0),
])
def test_scores_are_integers_in_range(pelvic):
    overall = analyze_overall_alignment(
        pelvic, SpineAlignment(kyphosis=40), ShoulderAlignment(), HeadNeckAlignment()
    )
    for score in (overall.balance_score, overall.symmetry_score, overall.alignment_score):
        assert isinstance(score, int)
        assert 10 <= score <= 100


def test_balance_degrades_monotonically_with_hip_drop():
    scores = []
    for cm in [0.0, 0.5, 1.0, 1.5, 2.0, 3.0, 5.0, 10.0]:
        pose = make_pose(overrides=hips_with_height_difference(cm))
        scores.append(balance_score(analyze_pelvic_alignment(pose, DevicePosition.BACK)))

    assert all(later <= earlier for earlier, later in zip(scores, scores[1:]))
    assert scores[0] > scores[-1]


def test_kyphosis_scored_as_distance_from_forty_degrees():
    upright = analyze_overall_alignment(
        PelvicAlignment(), SpineAlignment(kyphosis=40), ShoulderAlignment(), HeadNeckAlignment()
    )
    flat = analyze_overall_alignment(
        PelvicAlignment(), SpineAlignment(kyphosis=20), ShoulderAlignment(), HeadNeckAlignment()
    )
    hunched = analyze_overall_alignment(
        PelvicAlignment(), SpineAlignment(kyphosis=60), ShoulderAlignment(), HeadNeckAlignment()
    )

    assert upright.alignment_score == 99
    assert flat.alignment_score == hunched.alignment_score < upright.alignment_score


def test_issues_concatenated_in_chain_order():
    overall = analyze_overall_alignment(
        PelvicAlignment(issues=["p"]),
        SpineAlignment(issues=["s"]),
        ShoulderAlignment(issues=["sh"]),
        HeadNeckAlignment(issues=["h"]),
    )

    assert overall.issues == ["p", "s", "sh", "h"]
