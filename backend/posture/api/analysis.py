"""Stateless posture analysis API endpoints."""

import logging

from fastapi import APIRouter

from posture.config import get_settings
from posture.cv.pose_analyzer import analyze_pose
from posture.cv.side_view import analyze_side_view
from posture.schemas.analysis import (
    PoseAnalysisRequest,
    PoseAnalysisResponse,
    SideViewRequest,
    SideViewResponse,
    to_poses,
)

logger = logging.getLogger(__name__)

router = APIRouter()
settings = get_settings()


@router.post("/pose", response_model=PoseAnalysisResponse)
async def analyze_frame(request: PoseAnalysisRequest):
    """
    Analyze one frame of landmarks.

    The caller owns the shoulder hysteresis status: send back the
    ``shoulder_status`` of the previous response as
    ``previous_shoulder_status``.
    """
    result = analyze_pose(
        to_poses(request.poses),
        orientation=request.orientation,
        device_position=request.device_position,
        previous_shoulder_status=request.previous_shoulder_status,
    )
    return PoseAnalysisResponse.model_validate(result.to_dict())


@router.post("/side", response_model=SideViewResponse)
async def analyze_side(request: SideViewRequest):
    """Side-on CVA analysis of a single pose."""
    pose = to_poses([request.pose])[0]
    analysis = analyze_side_view(pose, settings.turtle_neck_cva_degrees)

    return SideViewResponse(
        side=analysis.side.value if analysis.side else None,
        side_angle=analysis.side_angle,
        cva=analysis.cva,
        is_turtle_neck=analysis.is_turtle_neck,
    )
