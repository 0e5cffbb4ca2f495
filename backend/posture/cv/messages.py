"""
User-facing issue and recommendation strings.

Each constant is the exact text surfaced to the client; history views
deduplicate on these strings, so they must stay stable.
"""

from typing import Dict, List


class Issue:
    """Issue strings produced by the region analyzers and the issue pass."""
    # Detection
    NO_POSE = "no pose detected"
    PELVIS_UNDETECTABLE = "pelvis landmarks undetectable"
    SPINE_UNDETECTABLE = "spine landmarks undetectable"
    SHOULDER_UNDETECTABLE = "shoulder landmarks undetectable"
    HEAD_NECK_UNDETECTABLE = "head-neck landmarks undetectable"

    # Pelvis
    PELVIS_TILTED = "pelvis tilted"
    PELVIS_SEVERELY_TILTED = "pelvis severely tilted"
    PELVIS_ROTATED = "pelvis rotated"
    PELVIS_SEVERELY_ROTATED = "pelvis severely rotated"
    PELVIS_INCLINED = "pelvis inclined"
    PELVIS_SEVERELY_INCLINED = "pelvis severely inclined"

    # Spine
    SPINE_CURVED = "spine curved sideways"
    SPINE_SEVERELY_CURVED = "spine severely curved sideways"
    KYPHOSIS = "kyphosis"
    SEVERE_KYPHOSIS = "severe kyphosis"

    # Shoulders
    SHOULDER_TILTED = "shoulder tilted"
    SHOULDER_SEVERELY_TILTED = "shoulder severely tilted"
    SHOULDER_ROTATED = "shoulder rotated"
    SHOULDER_SEVERELY_ROTATED = "shoulder severely rotated"

    # Head / neck
    HEAD_FORWARD = "head forward"
    HEAD_SEVERELY_FORWARD = "head severely forward"
    NECK_BENT = "neck bent"
    NECK_SEVERELY_BENT = "neck severely bent"

    # Overall
    BALANCE_POOR = "overall balance poor"
    BALANCE_SEVERELY_POOR = "overall balance severely poor"


class Recommendation:
    """Recommendation strings keyed by posture pattern and compensation."""
    STAND_IN_FRONT = "stand in front of the camera"

    # Pattern specific
    CORRECT_PELVIC_TILT_FIRST = "correct pelvic tilt first"
    LEVEL_SHOULDER_ROTATION = "level shoulder rotation"
    CORRECT_ANTERIOR_PELVIC_TILT = "correct anterior pelvic tilt"
    DRAW_HEAD_BACK = "draw the head back"
    REDUCE_ONE_SIDED_LOADING = "reduce one-sided loading"
    LEVEL_SHOULDER_HEIGHT = "level shoulder height"
    RELAX_BACKWARD_ALIGNMENT = "relax excessive backward alignment"
    MAINTAIN_POSTURE = "maintain current posture"

    # Compensation specific
    PELVIC_EXERCISES = "do pelvic tilt correction exercises"
    SCOLIOSIS_EXERCISES = "do scoliosis correction exercises"
    SHOULDER_EXERCISES = "do shoulder tilt correction exercises"
    NECK_STRETCH = "stretch the neck"


class IssueTag:
    """Hashtag groupings shown in the issues summary."""
    PELVIC_TWIST = "#pelvic-twist"
    SHOULDER_TWIST = "#shoulder-twist"
    TURTLE_NECK = "#turtle-neck"
    SCOLIOSIS = "#scoliosis"


ISSUE_TAGS: Dict[str, str] = {
    Issue.PELVIS_TILTED: IssueTag.PELVIC_TWIST,
    Issue.PELVIS_SEVERELY_TILTED: IssueTag.PELVIC_TWIST,
    Issue.SHOULDER_TILTED: IssueTag.SHOULDER_TWIST,
    Issue.SHOULDER_SEVERELY_TILTED: IssueTag.SHOULDER_TWIST,
    Issue.HEAD_FORWARD: IssueTag.TURTLE_NECK,
    Issue.HEAD_SEVERELY_FORWARD: IssueTag.TURTLE_NECK,
    Issue.SPINE_CURVED: IssueTag.SCOLIOSIS,
    Issue.SPINE_SEVERELY_CURVED: IssueTag.SCOLIOSIS,
    Issue.NECK_BENT: IssueTag.TURTLE_NECK,
    Issue.NECK_SEVERELY_BENT: IssueTag.TURTLE_NECK,
}

ISSUE_SEVERITY: Dict[str, str] = {
    Issue.PELVIS_TILTED: "moderate",
    Issue.PELVIS_SEVERELY_TILTED: "severe",
    Issue.SHOULDER_TILTED: "moderate",
    Issue.SHOULDER_SEVERELY_TILTED: "severe",
    Issue.HEAD_FORWARD: "moderate",
    Issue.HEAD_SEVERELY_FORWARD: "severe",
    Issue.SPINE_CURVED: "moderate",
    Issue.SPINE_SEVERELY_CURVED: "severe",
    Issue.NECK_BENT: "moderate",
    Issue.NECK_SEVERELY_BENT: "severe",
}


def tags_for_issues(issues: List[str]) -> List[str]:
    """Map issues to their hashtags, deduplicated in first-seen order."""
    tags: List[str] = []
    for issue in issues:
        tag = ISSUE_TAGS.get(issue)
        if tag and tag not in tags:
            tags.append(tag)
    return tags
