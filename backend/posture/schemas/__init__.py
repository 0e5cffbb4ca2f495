"""Pydantic schemas for API request/response models."""

from posture.schemas.analysis import (
    LandmarkInput,
    PoseAnalysisRequest,
    PoseAnalysisResponse,
    SideViewRequest,
    SideViewResponse,
    StreamFrameRequest,
    StreamIssuesResponse,
    StreamTimelineResponse,
    TimelinePointResponse,
    to_poses,
)

__all__ = [
    "LandmarkInput",
    "PoseAnalysisRequest",
    "PoseAnalysisResponse",
    "SideViewRequest",
    "SideViewResponse",
    "StreamFrameRequest",
    "StreamIssuesResponse",
    "StreamTimelineResponse",
    "TimelinePointResponse",
    "to_poses",
]
