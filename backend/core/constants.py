"""
Constants for the race course engine.

This module contains all the mathematical, algorithmic, and domain-specific
constants used throughout the codebase. Constants are grouped by their purpose
and documented with their units where applicable.
"""

# =============================================================================
# CONVERSION FACTORS
# =============================================================================

# Earth radius used by the haversine distance
EARTH_RADIUS_NAUTICAL_MILES = 3440.065

# Distance conversions
METERS_PER_NAUTICAL_MILE = 1852.0

# Time conversions
SECONDS_PER_HOUR = 3600
SECONDS_PER_MINUTE = 60
MINUTES_PER_HOUR = 60

# =============================================================================
# ANGLE CONSTANTS (all in degrees)
# =============================================================================

FULL_CIRCLE_DEGREES = 360
ANGLE_WRAP_BOUNDARY_DEGREES = 180  # Signed differences are folded into [-180, 180]
START_LINE_SQUARE_OFFSET_DEGREES = 90  # Start line runs square to the wind
START_LINE_FOLD_DEGREES = 90  # A start line is square in either direction

# =============================================================================
# COURSE GEOMETRY
# =============================================================================

# Scale bounds allowed by the data model
MODEL_MIN_SCALE = 0.1
MODEL_MAX_SCALE = 10.0

# Scale bounds enforced by the course controls
UI_MIN_SCALE = 0.5
UI_MAX_SCALE = 3.0

# Correction passes when aligning the start line to the wind (meridian convergence)
ALIGN_TO_WIND_REFINEMENTS = 3

# =============================================================================
# POINT OF SAIL THRESHOLDS (true wind angle, degrees)
# =============================================================================

CLOSE_REACH_MAX_TWA = 60
BEAM_REACH_MAX_TWA = 110
BROAD_REACH_MAX_TWA = 150

# =============================================================================
# WIND BANDS (knots)
# =============================================================================

LIGHT_WIND_MAX_KNOTS = 8
MEDIUM_WIND_MAX_KNOTS = 14

# =============================================================================
# RACE TIME ESTIMATION
# =============================================================================

# Cosine floors guarding the path stretch against near-90° angles
UPWIND_COSINE_FLOOR = 0.5
DOWNWIND_COSINE_FLOOR = 0.7

# Distance sailed between maneuvers (nautical miles)
UPWIND_TACK_SPACING_NM = 0.2
DOWNWIND_JIBE_SPACING_NM = 0.3

# Minimum maneuvers on a beat or a run
MIN_TACKS_PER_BEAT = 2
MIN_JIBES_PER_RUN = 1

# Legs shorter than this are treated as zero length (nautical miles)
ZERO_LEG_DISTANCE_NM = 1e-9

# Fallback VMG when no table entry applies (knots)
FALLBACK_VMG_KNOTS = 3.0

# =============================================================================
# WIND PATTERN DETECTION
# =============================================================================

MIN_READINGS_FOR_PATTERN = 6
ASSUMED_READING_INTERVAL_MINUTES = 10

# Oscillation detection
OSCILLATION_SIGN_CHANGE_FRACTION = 1 / 3  # Sign changes must reach n/3
MIN_OSCILLATION_RANGE_DEGREES = 6
OSCILLATING_PERSISTENT_MIN_TREND = 5  # Degrees per hour
OSCILLATING_MAX_CONFIDENCE = 0.90
OSCILLATING_PERSISTENT_MAX_CONFIDENCE = 0.85

# Persistent drift detection
PERSISTENT_MIN_DRIFT_DEGREES = 10
PERSISTENT_FULL_CONFIDENCE_DRIFT = 30
PERSISTENT_MAX_CONFIDENCE = 0.9

# Stable confidence falls to zero at this shift range
STABLE_ZERO_CONFIDENCE_RANGE = 20

# =============================================================================
# SHIFT DETECTION AND PREDICTION
# =============================================================================

DEFAULT_SHIFT_THRESHOLD_DEGREES = 5
MINOR_SHIFT_MAX_DEGREES = 5
MODERATE_SHIFT_MAX_DEGREES = 10

OSCILLATION_PREDICTION_CONFIDENCE_FACTOR = 0.7
TREND_PREDICTION_CONFIDENCE_FACTOR = 0.6
TREND_PREDICTION_MIN_RATE = 3  # Degrees per hour
TREND_PREDICTION_HORIZON_MINUTES = 30

# =============================================================================
# FAVORED SIDE
# =============================================================================

PERSISTENT_SIDE_CONFIDENCE_FACTOR = 0.8
NO_ADVANTAGE_CONFIDENCE = 0.3

# =============================================================================
# MULTI-BUOY ANALYTICS
# =============================================================================

RECENT_READINGS_WINDOW = 30
BUOY_TREND_WINDOW = 5  # Prior readings compared against the latest one
BUOY_TREND_MIN_READINGS = 3
BUOY_TREND_DEADBAND_KNOTS = 1.0
ROLLING_AVERAGE_WINDOW = 5
ROLLING_AVERAGE_MIN_READINGS = 2
BUOY_NAME_ID_PREFIX_LENGTH = 6

# =============================================================================
# VALIDATION
# =============================================================================

assert UPWIND_COSINE_FLOOR > 0 and DOWNWIND_COSINE_FLOOR > 0, \
    "Cosine floors must be positive"
assert LIGHT_WIND_MAX_KNOTS < MEDIUM_WIND_MAX_KNOTS, \
    "Wind bands must be increasing"
