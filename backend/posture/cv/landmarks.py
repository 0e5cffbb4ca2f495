"""
Landmark input adapter for posture analysis.

The external pose detector delivers 33 normalized landmarks per frame in the
model's native (pre-rotation) frame. This module defines the joint
enumeration the analyzers read, validates pose cardinality, and applies the
portrait-capture coordinate transform every analyzer must use before
computing angles or distances.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, List, Optional, Sequence, Tuple


POSE_LANDMARK_COUNT = 33


class PoseLandmark(IntEnum):
    """Landmark indices read by the posture analyzers."""
    # Head / neck
    NOSE = 0
    LEFT_EYE = 1
    RIGHT_EYE = 2
    LEFT_EAR = 3
    RIGHT_EAR = 4

    # Shoulders / arms
    LEFT_SHOULDER = 11
    RIGHT_SHOULDER = 12
    LEFT_ELBOW = 13
    RIGHT_ELBOW = 14
    LEFT_WRIST = 15
    RIGHT_WRIST = 16

    # Pelvis / legs
    LEFT_HIP = 23
    RIGHT_HIP = 24
    LEFT_KNEE = 25
    RIGHT_KNEE = 26
    LEFT_ANKLE = 27
    RIGHT_ANKLE = 28

    # Estimated midpoints
    MID_SPINE = 29
    MID_PELVIS = 30


class DevicePosition(str, Enum):
    """Which camera captured the frame."""
    FRONT = "front"
    BACK = "back"


class BodyOrientation(str, Enum):
    """Which side of the body faces the camera."""
    FRONT = "front"
    BACK = "back"
    LEFT = "left"
    RIGHT = "right"


@dataclass(frozen=True)
class Landmark:
    """Single body-joint observation from the pose detector."""
    x: float  # Normalized x coordinate (0-1)
    y: float  # Normalized y coordinate (0-1)
    z: Optional[float] = None  # Relative depth, when the model provides it
    visibility: float = 1.0
    presence: float = 1.0


@dataclass(frozen=True)
class Point2D:
    """Landmark position after the capture transform."""
    x: float
    y: float


# A pose is an ordered sequence of 33 landmarks; missing joints are None.
Pose = Sequence[Optional[Landmark]]


def transform_landmark_point(point: Landmark, device_position: DevicePosition) -> Point2D:
    """
    Rotate a raw landmark 90 degrees into portrait orientation and mirror it
    for the capturing camera.

    The analysis thresholds are tuned against these transformed coordinates,
    so this is applied before any geometry, not only for display.
    """
    x = point.y
    y = 1 - point.x

    if device_position == DevicePosition.FRONT:
        x = 1 - x
    if device_position == DevicePosition.BACK:
        x = 1 - x
        y = 1 - y

    return Point2D(x=x, y=y)


def is_pose_detected(pose: Optional[Pose]) -> bool:
    """A pose is usable only if it carries the full landmark set."""
    return pose is not None and len(pose) >= POSE_LANDMARK_COUNT


def get_landmarks(pose: Optional[Pose], *joints: PoseLandmark) -> Optional[Tuple[Landmark, ...]]:
    """
    Fetch the requested joints from a pose.

    Returns:
        Tuple of landmarks in request order, or None if the pose is short
        or any requested joint is missing.
    """
    if not is_pose_detected(pose):
        return None

    found = tuple(pose[joint] for joint in joints)
    if any(landmark is None for landmark in found):
        return None
    return found


def get_transformed(
    pose: Optional[Pose],
    device_position: DevicePosition,
    *joints: PoseLandmark,
) -> Optional[Tuple[Point2D, ...]]:
    """Fetch joints and apply the capture transform to each."""
    found = get_landmarks(pose, *joints)
    if found is None:
        return None
    return tuple(transform_landmark_point(lm, device_position) for lm in found)


def landmark_from_dict(data: Dict[str, Any]) -> Landmark:
    """Build a Landmark from a detector dict (x, y, optional z/visibility/presence)."""
    return Landmark(
        x=float(data["x"]),
        y=float(data["y"]),
        z=float(data["z"]) if data.get("z") is not None else None,
        visibility=float(data.get("visibility", 1.0)),
        presence=float(data.get("presence", 1.0)),
    )


def pose_from_landmark_list(raw_landmarks: Sequence[Any]) -> List[Optional[Landmark]]:
    """
    Convert detector output into a Pose.

    Accepts dicts or objects exposing x/y[/z/visibility/presence] attributes,
    such as a MediaPipe Tasks ``pose_landmarks[0]`` list. None entries are
    kept so joint indices stay aligned.
    """
    pose: List[Optional[Landmark]] = []
    for raw in raw_landmarks:
        if raw is None:
            pose.append(None)
        elif isinstance(raw, Landmark):
            pose.append(raw)
        elif isinstance(raw, dict):
            pose.append(landmark_from_dict(raw))
        else:
            z = getattr(raw, "z", None)
            pose.append(Landmark(
                x=float(raw.x),
                y=float(raw.y),
                z=float(z) if z is not None else None,
                visibility=float(getattr(raw, "visibility", 1.0) or 0.0),
                presence=float(getattr(raw, "presence", 1.0) or 0.0),
            ))
    return pose
