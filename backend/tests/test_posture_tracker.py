"""Per-stream tracker tests."""

import pytest

from posture.cv.alignment_analyzer import ShoulderStatus
from posture.cv.landmarks import DevicePosition
from posture.cv.messages import Issue, IssueTag
from posture.cv.pattern_classifier import PosturePattern
from posture.cv.posture_tracker import PostureTracker, TrackerRegistry

from conftest import make_pose, shoulders_with_height_difference


@pytest.fixture
def tracker():
    return PostureTracker("cam-1")


class TestHistory:

    def test_throttled_by_interval(self, tracker):
        pose = make_pose()

        for timestamp in [0.0, 0.5, 1.0, 2.0]:
            tracker.process_frame([pose], timestamp)

        history = tracker.history
        assert [entry.timestamp for entry in history] == [0.0, 1.0, 2.0]
        assert [entry.sequence for entry in history] == [1, 2, 3]
        assert history[0].posture_pattern == PosturePattern.TYPE_E

    def test_every_frame_updates_current_state(self, tracker):
        tracker.process_frame([make_pose()], 0.0)
        result = tracker.process_frame([], 0.2)

        assert len(tracker.history) == 1
        assert tracker.last_result is result
        assert tracker.current_issues == [Issue.NO_POSE]

    def test_history_is_bounded(self):
        tracker = PostureTracker("cam-1", max_entries=3)

        for second in range(5):
            tracker.process_frame([make_pose()], float(second))

        assert [entry.timestamp for entry in tracker.history] == [2.0, 3.0, 4.0]

    def test_timeline_and_average(self, tracker):
        tracker.process_frame([make_pose()], 0.0)
        tracker.process_frame([], 1.0)

        points = tracker.timeline()

        assert [(point.time, point.score) for point in points] == [(0.0, 99), (1.0, 0)]
        assert points[1].issues == [Issue.NO_POSE]
        assert tracker.average_score() == pytest.approx(49.5)

    def test_average_of_empty_history(self, tracker):
        assert tracker.average_score() == 0.0
        assert tracker.timeline() == []

    def test_unique_issues_and_tags(self, tracker):
        tilted = make_pose(overrides=shoulders_with_height_difference(1.5))

        tracker.process_frame([tilted], 0.0)
        tracker.process_frame([tilted], 1.0)
        tracker.process_frame([], 2.0)

        assert tracker.unique_issues() == [Issue.SHOULDER_TILTED, Issue.NO_POSE]
        assert tracker.issue_tags() == [IssueTag.SHOULDER_TWIST]


class TestHysteresisAcrossFrames:

    def test_status_carries_over(self, tracker):
        tracker.process_frame([make_pose(overrides=shoulders_with_height_difference(2.5))], 0.0)
        assert tracker.shoulder_status == ShoulderStatus.PROBLEM

        result = tracker.process_frame([make_pose(overrides=shoulders_with_height_difference(1.5))], 0.1)
        assert tracker.shoulder_status == ShoulderStatus.PROBLEM
        assert Issue.SHOULDER_TILTED in result.kinematic_chain.shoulder.issues

        tracker.process_frame([make_pose(overrides=shoulders_with_height_difference(0.5))], 0.2)
        assert tracker.shoulder_status == ShoulderStatus.NORMAL

    def test_clear_resets_everything(self, tracker):
        tracker.process_frame([make_pose(overrides=shoulders_with_height_difference(2.5))], 0.0)

        tracker.clear()

        assert tracker.history == []
        assert tracker.current_issues == []
        assert tracker.last_result is None
        assert tracker.shoulder_status == ShoulderStatus.NORMAL

        # Next frame is logged again regardless of the interval
        tracker.process_frame([make_pose()], 0.1)
        assert len(tracker.history) == 1

    def test_front_camera_stream(self):
        tracker = PostureTracker("selfie", device_position="front")

        result = tracker.process_frame([make_pose(DevicePosition.FRONT)], 0.0)

        assert tracker.device_position == DevicePosition.FRONT
        assert result.posture_pattern == PosturePattern.TYPE_E


class TestTrackerRegistry:

    def test_get_or_create_reuses_tracker(self):
        registry = TrackerRegistry(max_entries=10, history_interval=0.5)

        first = registry.get_or_create("a")
        second = registry.get_or_create("a")

        assert first is second
        assert first.history_interval == 0.5
        assert len(registry) == 1

    def test_streams_are_isolated(self):
        registry = TrackerRegistry()
        registry.get_or_create("a").process_frame(
            [make_pose(overrides=shoulders_with_height_difference(2.5))], 0.0
        )

        assert registry.get_or_create("b").shoulder_status == ShoulderStatus.NORMAL
        assert registry.get("a").shoulder_status == ShoulderStatus.PROBLEM

    def test_device_position_follows_latest_request(self):
        registry = TrackerRegistry()
        registry.get_or_create("a", DevicePosition.BACK)

        tracker = registry.get_or_create("a", DevicePosition.FRONT)

        assert tracker.device_position == DevicePosition.FRONT

    def test_remove(self):
        registry = TrackerRegistry()
        registry.get_or_create("a")

        assert registry.remove("a") is True
        assert registry.remove("a") is False
        assert registry.get("a") is None
        assert len(registry) == 0
