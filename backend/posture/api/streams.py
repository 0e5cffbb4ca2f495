"""Tracked camera stream API endpoints."""

import logging
from functools import lru_cache

from fastapi import APIRouter, Depends, HTTPException, status

from posture.config import get_settings
from posture.cv.landmarks import DevicePosition
from posture.cv.posture_tracker import PostureTracker, TrackerRegistry
from posture.schemas.analysis import (
    PoseAnalysisResponse,
    StreamFrameRequest,
    StreamIssuesResponse,
    StreamTimelineResponse,
    TimelinePointResponse,
    to_poses,
)

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@lru_cache
def get_tracker_registry() -> TrackerRegistry:
    """Process-wide tracker registry."""
    return TrackerRegistry(
        max_entries=settings.history_max_entries,
        history_interval=settings.history_interval_seconds,
    )


def get_existing_tracker(
    stream_id: str,
    registry: TrackerRegistry = Depends(get_tracker_registry),
) -> PostureTracker:
    tracker = registry.get(stream_id)
    if tracker is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Stream {stream_id} not found"
        )
    return tracker


@router.post("/{stream_id}/frames", response_model=PoseAnalysisResponse)
async def submit_frame(
    stream_id: str,
    request: StreamFrameRequest,
    registry: TrackerRegistry = Depends(get_tracker_registry),
):
    """Analyze a frame of a stream, carrying shoulder hysteresis between calls."""
    device_position = request.device_position or DevicePosition(settings.default_device_position)
    tracker = registry.get_or_create(stream_id, device_position=device_position)

    result = tracker.process_frame(
        to_poses(request.poses),
        timestamp=request.timestamp,
        orientation=request.orientation,
    )
    return PoseAnalysisResponse.model_validate(result.to_dict())


@router.get("/{stream_id}/timeline", response_model=StreamTimelineResponse)
async def get_timeline(tracker: PostureTracker = Depends(get_existing_tracker)):
    """Logged scores over time."""
    return StreamTimelineResponse(
        stream_id=tracker.stream_id,
        points=[
            TimelinePointResponse(time=point.time, score=point.score, issues=point.issues)
            for point in tracker.timeline()
        ],
        average_score=tracker.average_score(),
    )


@router.get("/{stream_id}/issues", response_model=StreamIssuesResponse)
async def get_issues(tracker: PostureTracker = Depends(get_existing_tracker)):
    """Current issues plus every distinct issue seen on the stream."""
    return StreamIssuesResponse(
        stream_id=tracker.stream_id,
        current_issues=tracker.current_issues,
        unique_issues=tracker.unique_issues(),
        tags=tracker.issue_tags(),
        shoulder_status=tracker.shoulder_status.value,
    )


@router.delete("/{stream_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_stream(
    stream_id: str,
    registry: TrackerRegistry = Depends(get_tracker_registry),
):
    """Forget a stream and its history."""
    if not registry.remove(stream_id):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Stream {stream_id} not found"
        )
    logger.info(f"Stream {stream_id} removed")
