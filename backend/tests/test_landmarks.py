"""Landmark adapter tests."""

import pytest

from posture.cv.landmarks import (
    DevicePosition,
    Landmark,
    PoseLandmark,
    get_landmarks,
    get_transformed,
    is_pose_detected,
    pose_from_landmark_list,
    transform_landmark_point,
)

from conftest import NEUTRAL_POINTS, make_pose


class _TasksLandmark:
    """Stand-in for a detector landmark object with attributes."""

    def __init__(self, x, y, z=None, visibility=0.9, presence=0.8):
        self.x = x
        self.y = y
        self.z = z
        self.visibility = visibility
        self.presence = presence


def test_transform_front_camera_mirrors_x():
    point = transform_landmark_point(Landmark(x=0.2, y=0.7), DevicePosition.FRONT)
    assert point.x == pytest.approx(0.3)
    assert point.y == pytest.approx(0.8)


def test_transform_back_camera_mirrors_both_axes():
    point = transform_landmark_point(Landmark(x=0.2, y=0.7), DevicePosition.BACK)
    assert point.x == pytest.approx(0.3)
    assert point.y == pytest.approx(0.2)


@pytest.mark.parametrize("device", [DevicePosition.FRONT, DevicePosition.BACK])
def test_pose_builder_round_trips_through_transform(device):
    pose = make_pose(device)
    expected = NEUTRAL_POINTS[PoseLandmark.LEFT_SHOULDER]

    point = transform_landmark_point(pose[PoseLandmark.LEFT_SHOULDER], device)

    assert (point.x, point.y) == pytest.approx(expected)


def test_short_pose_is_not_detected():
    assert not is_pose_detected(make_pose(length=32))
    assert not is_pose_detected([])
    assert not is_pose_detected(None)
    assert is_pose_detected(make_pose())


def test_get_landmarks_returns_none_when_joint_missing():
    pose = make_pose()
    pose[PoseLandmark.RIGHT_HIP] = None

    assert get_landmarks(pose, PoseLandmark.LEFT_HIP, PoseLandmark.RIGHT_HIP) is None
    assert get_transformed(pose, DevicePosition.BACK, PoseLandmark.RIGHT_HIP) is None


def test_get_landmarks_preserves_request_order():
    pose = make_pose()
    nose, left_hip = get_landmarks(pose, PoseLandmark.NOSE, PoseLandmark.LEFT_HIP)

    assert nose is pose[0]
    assert left_hip is pose[23]


def test_pose_from_landmark_list_accepts_dicts_objects_and_gaps():
    raw = [
        {"x": 0.1, "y": 0.2},
        _TasksLandmark(0.3, 0.4, z=-0.1),
        None,
    ]

    pose = pose_from_landmark_list(raw)

    assert pose[0] == Landmark(x=0.1, y=0.2)
    assert pose[1].z == pytest.approx(-0.1)
    assert pose[1].visibility == pytest.approx(0.9)
    assert pose[1].presence == pytest.approx(0.8)
    assert pose[2] is None
