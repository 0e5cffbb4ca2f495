"""Posture analysis schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from posture.cv.alignment_analyzer import ShoulderStatus
from posture.cv.landmarks import BodyOrientation, DevicePosition, Landmark


class LandmarkInput(BaseModel):
    """Single landmark as produced by the pose detector."""
    x: float
    y: float
    z: Optional[float] = None
    visibility: float = 1.0
    presence: float = 1.0

    def to_landmark(self) -> Landmark:
        return Landmark(
            x=self.x,
            y=self.y,
            z=self.z,
            visibility=self.visibility,
            presence=self.presence,
        )


def to_poses(poses: List[List[Optional[LandmarkInput]]]) -> List[List[Optional[Landmark]]]:
    """Convert request landmarks into engine poses, keeping None gaps."""
    return [
        [lm.to_landmark() if lm is not None else None for lm in pose]
        for pose in poses
    ]


class PoseAnalysisRequest(BaseModel):
    """Stateless analysis of one frame."""
    poses: List[List[Optional[LandmarkInput]]] = Field(default_factory=list)
    orientation: BodyOrientation = BodyOrientation.FRONT
    device_position: DevicePosition = DevicePosition.BACK
    previous_shoulder_status: ShoulderStatus = ShoulderStatus.NORMAL


class StreamFrameRequest(BaseModel):
    """One frame of a tracked stream; hysteresis is kept server-side."""
    poses: List[List[Optional[LandmarkInput]]] = Field(default_factory=list)
    timestamp: float
    orientation: BodyOrientation = BodyOrientation.FRONT
    device_position: Optional[DevicePosition] = None


class SideViewRequest(BaseModel):
    pose: List[Optional[LandmarkInput]]


class PelvicAlignmentResponse(BaseModel):
    height_difference: float
    rotation: float
    tilt: float
    is_level: bool
    issues: List[str]


class SpineAlignmentResponse(BaseModel):
    lateral_curve: float
    kyphosis: float
    lordosis: float
    deviation: float
    issues: List[str]


class ShoulderAlignmentResponse(BaseModel):
    height_difference: float
    rotation: float
    protraction: float
    elevation: float
    issues: List[str]


class HeadNeckAlignmentResponse(BaseModel):
    forward_head: float
    neck_angle: float
    head_tilt: float
    issues: List[str]


class OverallAlignmentResponse(BaseModel):
    balance_score: int
    symmetry_score: int
    alignment_score: int
    issues: List[str]


class KinematicChainResponse(BaseModel):
    pelvic: PelvicAlignmentResponse
    spine: SpineAlignmentResponse
    shoulder: ShoulderAlignmentResponse
    head_neck: HeadNeckAlignmentResponse
    overall: OverallAlignmentResponse


class CompensationPatternResponse(BaseModel):
    type: str
    severity: str
    description: str
    affected_joints: List[str]


class PoseAnalysisResponse(BaseModel):
    """Schema for a single-frame analysis result."""
    shoulder_angle: float
    shoulder_symmetry: int
    posture_score: int
    kinematic_chain: KinematicChainResponse
    posture_pattern: str
    compensation_patterns: List[CompensationPatternResponse]
    issues: List[str]
    recommendations: List[str]
    shoulder_status: str


class SideViewResponse(BaseModel):
    side: Optional[str] = None
    side_angle: Optional[float] = None
    cva: Optional[float] = None
    is_turtle_neck: bool


class TimelinePointResponse(BaseModel):
    time: float
    score: int
    issues: List[str]


class StreamTimelineResponse(BaseModel):
    stream_id: str
    points: List[TimelinePointResponse]
    average_score: float


class StreamIssuesResponse(BaseModel):
    """Deduplicated issues across a stream's history."""
    stream_id: str
    current_issues: List[str]
    unique_issues: List[str]
    tags: List[str]
    shoulder_status: str
