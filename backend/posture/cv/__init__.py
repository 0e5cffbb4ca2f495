"""
Posture analysis engine.

PIPELINE COMPONENTS:
1. Landmarks: 33-point pose validation and capture-orientation transform
2. AlignmentAnalyzer: pelvis, spine, shoulder (hysteresis), head/neck
3. Scoring: balance / symmetry / alignment composite scores
4. Compensation: kinematic-chain compensation patterns
5. PatternClassifier: ordered rules -> posture archetype A-E
6. Feedback: issue and recommendation strings
7. PoseAnalyzer: single-frame orchestration + side-on rotation damping

SUPPORTING:
- SideView: facing-side detection, CVA and turtle-neck check
- PostureTracker: per-stream hysteresis cell and throttled history

Usage:
    from posture.cv import analyze_pose, ShoulderStatus

    status = ShoulderStatus.NORMAL
    for poses in frames:
        result = analyze_pose(poses, "front", "back", status)
        status = result.shoulder_status
"""

from posture.cv.landmarks import (
    POSE_LANDMARK_COUNT,
    BodyOrientation,
    DevicePosition,
    Landmark,
    Pose,
    PoseLandmark,
    pose_from_landmark_list,
    transform_landmark_point,
)
from posture.cv.alignment_analyzer import (
    HeadNeckAlignment,
    PelvicAlignment,
    ShoulderAlignment,
    ShoulderStatus,
    SpineAlignment,
    analyze_head_neck_alignment,
    analyze_pelvic_alignment,
    analyze_shoulder_alignment,
    analyze_spine_alignment,
)
from posture.cv.scoring import OverallAlignment, analyze_overall_alignment
from posture.cv.compensation import (
    CompensationPattern,
    CompensationType,
    Severity,
    detect_compensation_patterns,
)
from posture.cv.pattern_classifier import PosturePattern, classify_posture_pattern
from posture.cv.feedback import analyze_issues, generate_recommendations
from posture.cv.pose_analyzer import (
    KinematicChainAnalysis,
    PoseAnalysisResult,
    adjust_analysis_for_orientation,
    analyze_pose,
)
from posture.cv.side_view import SideViewAnalysis, analyze_side_view
from posture.cv.posture_tracker import PostureTracker, TrackerRegistry

__all__ = [
    # Landmarks
    "POSE_LANDMARK_COUNT",
    "BodyOrientation",
    "DevicePosition",
    "Landmark",
    "Pose",
    "PoseLandmark",
    "pose_from_landmark_list",
    "transform_landmark_point",

    # Region analyzers
    "HeadNeckAlignment",
    "PelvicAlignment",
    "ShoulderAlignment",
    "ShoulderStatus",
    "SpineAlignment",
    "analyze_head_neck_alignment",
    "analyze_pelvic_alignment",
    "analyze_shoulder_alignment",
    "analyze_spine_alignment",

    # Scores, compensation, classification
    "OverallAlignment",
    "analyze_overall_alignment",
    "CompensationPattern",
    "CompensationType",
    "Severity",
    "detect_compensation_patterns",
    "PosturePattern",
    "classify_posture_pattern",
    "analyze_issues",
    "generate_recommendations",

    # Main pipeline
    "KinematicChainAnalysis",
    "PoseAnalysisResult",
    "adjust_analysis_for_orientation",
    "analyze_pose",

    # Side view / tracking
    "SideViewAnalysis",
    "analyze_side_view",
    "PostureTracker",
    "TrackerRegistry",
]
