"""
Per-stream posture tracking.

A camera stream needs its own shoulder hysteresis cell and its own history.
PostureTracker threads the hysteresis status through consecutive
analyze_pose calls and keeps a bounded, throttled history for timeline and
issue-summary views. TrackerRegistry hands out one tracker per stream id.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass, field
from typing import Deque, Dict, List, Optional, Sequence

import numpy as np

from posture.cv.alignment_analyzer import ShoulderStatus
from posture.cv.landmarks import BodyOrientation, DevicePosition, Pose
from posture.cv.messages import tags_for_issues
from posture.cv.pattern_classifier import PosturePattern
from posture.cv.pose_analyzer import PoseAnalysisResult, analyze_pose

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PoseHistoryEntry:
    """One logged analysis result."""
    sequence: int
    timestamp: float
    posture_score: int
    shoulder_angle: float
    shoulder_symmetry: int
    posture_pattern: PosturePattern
    issues: List[str] = field(default_factory=list)
    recommendations: List[str] = field(default_factory=list)


@dataclass(frozen=True)
class TimelinePoint:
    time: float
    score: int
    issues: List[str] = field(default_factory=list)


class PostureTracker:
    """
    Stateful wrapper around analyze_pose for a single camera stream.

    Every frame is analyzed and updates the hysteresis status and current
    issues; only frames at least ``history_interval`` seconds apart are
    appended to the history.
    """

    def __init__(
        self,
        stream_id: str,
        device_position: DevicePosition = DevicePosition.BACK,
        max_entries: int = 100,
        history_interval: float = 1.0,
    ):
        self.stream_id = stream_id
        self.device_position = DevicePosition(device_position)
        self.history_interval = history_interval

        self.shoulder_status = ShoulderStatus.NORMAL
        self.current_issues: List[str] = []
        self.last_result: Optional[PoseAnalysisResult] = None

        self._history: Deque[PoseHistoryEntry] = deque(maxlen=max_entries)
        self._last_logged_at: Optional[float] = None
        self._sequence = 0

    @property
    def history(self) -> List[PoseHistoryEntry]:
        return list(self._history)

    def process_frame(
        self,
        poses: Sequence[Pose],
        timestamp: float,
        orientation: BodyOrientation = BodyOrientation.FRONT,
    ) -> PoseAnalysisResult:
        """
        Analyze one frame and advance the stream state.

        Args:
            poses: Poses detected in the frame
            timestamp: Frame time in seconds
            orientation: Which side of the body faces the camera
        """
        result = analyze_pose(
            poses,
            orientation=orientation,
            device_position=self.device_position,
            previous_shoulder_status=self.shoulder_status,
        )

        if result.shoulder_status != self.shoulder_status:
            logger.info(f"[{self.stream_id}] Shoulder status "
                        f"{self.shoulder_status.value} -> {result.shoulder_status.value}")

        self.shoulder_status = result.shoulder_status
        self.current_issues = list(result.issues)
        self.last_result = result

        if self._should_log(timestamp):
            self._append_history(result, timestamp)

        return result

    def _should_log(self, timestamp: float) -> bool:
        if self._last_logged_at is None:
            return True
        return timestamp - self._last_logged_at >= self.history_interval

    def _append_history(self, result: PoseAnalysisResult, timestamp: float):
        self._sequence += 1
        self._history.append(PoseHistoryEntry(
            sequence=self._sequence,
            timestamp=timestamp,
            posture_score=result.posture_score,
            shoulder_angle=result.shoulder_angle,
            shoulder_symmetry=result.shoulder_symmetry,
            posture_pattern=result.posture_pattern,
            issues=list(result.issues),
            recommendations=list(result.recommendations),
        ))
        self._last_logged_at = timestamp

    def timeline(self) -> List[TimelinePoint]:
        return [
            TimelinePoint(time=entry.timestamp, score=entry.posture_score, issues=list(entry.issues))
            for entry in self._history
        ]

    def unique_issues(self) -> List[str]:
        """Every issue seen in the history, deduplicated in first-seen order."""
        return list(dict.fromkeys(
            issue for entry in self._history for issue in entry.issues
        ))

    def issue_tags(self) -> List[str]:
        return tags_for_issues(self.unique_issues())

    def average_score(self) -> float:
        if not self._history:
            return 0.0
        return float(np.mean([entry.posture_score for entry in self._history]))

    def clear(self):
        """Drop history and reset the hysteresis cell."""
        self._history.clear()
        self._last_logged_at = None
        self.current_issues = []
        self.last_result = None
        self.shoulder_status = ShoulderStatus.NORMAL
        logger.info(f"[{self.stream_id}] History cleared")


class TrackerRegistry:
    """Thread-safe map of stream id -> PostureTracker."""

    def __init__(self, max_entries: int = 100, history_interval: float = 1.0):
        self.max_entries = max_entries
        self.history_interval = history_interval
        self._trackers: Dict[str, PostureTracker] = {}
        self._lock = threading.Lock()

    def get_or_create(
        self,
        stream_id: str,
        device_position: DevicePosition = DevicePosition.BACK,
    ) -> PostureTracker:
        with self._lock:
            tracker = self._trackers.get(stream_id)
            if tracker is None:
                tracker = PostureTracker(
                    stream_id,
                    device_position=device_position,
                    max_entries=self.max_entries,
                    history_interval=self.history_interval,
                )
                self._trackers[stream_id] = tracker
                logger.info(f"Tracker created for stream {stream_id}")
            elif tracker.device_position != DevicePosition(device_position):
                tracker.device_position = DevicePosition(device_position)
            return tracker

    def get(self, stream_id: str) -> Optional[PostureTracker]:
        with self._lock:
            return self._trackers.get(stream_id)

    def remove(self, stream_id: str) -> bool:
        with self._lock:
            return self._trackers.pop(stream_id, None) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._trackers)
