"""Analysis thresholds and score weights shared by the posture pipeline."""


class AnalysisThresholds:
    """
    Warning / critical limits per measurement.

    Distances are in the cm-like scale produced by multiplying normalized
    coordinate differences by 100; angles are degrees.
    """

    # Pelvis
    PELVIC_HEIGHT_DIFF_WARNING = 1.0
    PELVIC_HEIGHT_DIFF_CRITICAL = 2.0
    PELVIC_ROTATION_WARNING = 5.0
    PELVIC_ROTATION_CRITICAL = 10.0
    PELVIC_TILT_WARNING = 10.0
    PELVIC_TILT_CRITICAL = 15.0

    # Spine
    SPINE_LATERAL_CURVE_WARNING = 5.0
    SPINE_LATERAL_CURVE_CRITICAL = 10.0
    SPINE_KYPHOSIS_WARNING = 40.0
    SPINE_KYPHOSIS_CRITICAL = 50.0
    # Lordosis is not measured yet; limits kept for when it is.
    SPINE_LORDOSIS_WARNING = 60.0
    SPINE_LORDOSIS_CRITICAL = 70.0

    # Shoulders
    SHOULDER_HEIGHT_DIFF_WARNING = 1.0
    SHOULDER_HEIGHT_DIFF_CRITICAL = 2.0
    SHOULDER_ROTATION_WARNING = 5.0
    SHOULDER_ROTATION_CRITICAL = 10.0

    # Head / neck (neck angle is inverted: smaller is worse)
    FORWARD_HEAD_WARNING = 2.0
    FORWARD_HEAD_CRITICAL = 4.0
    NECK_ANGLE_WARNING = 45.0
    NECK_ANGLE_CRITICAL = 35.0

    # Composite scores
    BALANCE_SCORE_WARNING = 70
    BALANCE_SCORE_CRITICAL = 50
    SYMMETRY_SCORE_WARNING = 80
    SYMMETRY_SCORE_CRITICAL = 60

    # Fixed normalizers for measurements without a warning/critical pair
    HEAD_TILT_NORMALIZER = 15.0
    KYPHOSIS_REFERENCE = 40.0
    KYPHOSIS_DEVIATION_NORMALIZER = 20.0

    # Over-corrected ("military") posture
    MILITARY_KYPHOSIS_MAX = 30.0
    MILITARY_FORWARD_HEAD_MAX = -2.0


class ScoreWeights:
    """Weights of each normalized measurement inside a composite score."""

    # Balance
    PELVIC_HEIGHT = 0.4
    PELVIC_ROTATION = 0.3
    PELVIC_TILT = 0.3

    # Symmetry
    SHOULDER_HEIGHT = 0.4
    SHOULDER_ROTATION = 0.3
    HEAD_TILT = 0.3

    # Alignment
    SPINE_DEVIATION = 0.4
    SPINE_KYPHOSIS = 0.3
    FORWARD_HEAD = 0.3


# Logistic compression of a weighted sum into a 0-100 score
SIGMOID_STEEPNESS = 8.0
SIGMOID_MIDPOINT = 0.6
MIN_COMPOSITE_SCORE = 10

# Side-view orientation deadbands (raw coordinates)
SIDE_Z_DEADBAND = 0.1
SIDE_X_DEADBAND = 0.05

# Frontal-plane rotation over-estimates when the subject is side-on
SIDE_ROTATION_DAMPING = 0.5
