"""
Wind pattern detection and shift prediction.

Classifies a time-ordered history of wind directions as stable, persistent,
oscillating or oscillating with a persistent trend, detects individual
shifts, predicts the next shift and picks the favored side of the course.

All direction arithmetic goes through ``angle_difference`` so histories that
cross north (e.g. 355° -> 5°) behave like any other.
"""

import math
import logging
from typing import List, Optional

import numpy as np

from core.constants import (
    MIN_READINGS_FOR_PATTERN, ASSUMED_READING_INTERVAL_MINUTES, MINUTES_PER_HOUR,
    OSCILLATION_SIGN_CHANGE_FRACTION, MIN_OSCILLATION_RANGE_DEGREES,
    OSCILLATING_PERSISTENT_MIN_TREND, OSCILLATING_MAX_CONFIDENCE,
    OSCILLATING_PERSISTENT_MAX_CONFIDENCE, PERSISTENT_MIN_DRIFT_DEGREES,
    PERSISTENT_FULL_CONFIDENCE_DRIFT, PERSISTENT_MAX_CONFIDENCE,
    STABLE_ZERO_CONFIDENCE_RANGE, DEFAULT_SHIFT_THRESHOLD_DEGREES,
    MINOR_SHIFT_MAX_DEGREES, MODERATE_SHIFT_MAX_DEGREES,
    OSCILLATION_PREDICTION_CONFIDENCE_FACTOR, TREND_PREDICTION_CONFIDENCE_FACTOR,
    TREND_PREDICTION_MIN_RATE, TREND_PREDICTION_HORIZON_MINUTES,
    PERSISTENT_SIDE_CONFIDENCE_FACTOR, NO_ADVANTAGE_CONFIDENCE
)
from core.calculations import normalize_angle, angle_difference
from core.models.wind import (
    WindReading, WindPattern, WindPatternType, ShiftEvent, ShiftPrediction,
    FavoredSideAnalysis, FavoredSideFactors
)

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return int(math.floor(value + 0.5))


def sort_readings(readings: List[WindReading]) -> List[WindReading]:
    """Readings in ascending timestamp order."""
    return sorted(readings, key=lambda r: r.timestamp)


def count_sign_changes(deltas: List[float]) -> int:
    """Number of times consecutive deltas flip between positive and negative."""
    return sum(
        1 for prev, cur in zip(deltas, deltas[1:])
        if (prev > 0 and cur < 0) or (prev < 0 and cur > 0)
    )


# =============================================================================
# PATTERN DETECTION
# =============================================================================

def detect_pattern(readings: List[WindReading]) -> WindPattern:
    """
    Classify the wind pattern of a reading history.

    Needs at least 6 readings; with fewer a stable pattern with zero
    confidence is returned.

    Classification order:
    1. Oscillating: sign changes >= n/3 and shift range > 6°. With a trend
       above 5°/hr it is oscillating_persistent instead.
    2. Persistent: total drift beyond 10°.
    3. Stable otherwise.

    Args:
        readings: Wind readings (sorted here by timestamp)

    Returns:
        WindPattern describing the history
    """
    n = len(readings)
    if n < MIN_READINGS_FOR_PATTERN:
        logger.debug(f"Only {n} readings, need {MIN_READINGS_FOR_PATTERN} for pattern detection")
        return WindPattern(
            type=WindPatternType.STABLE,
            confidence=0.0,
            median_direction=readings[0].wind_direction if readings else 0.0,
            shift_range=0.0,
            period_minutes=None,
            trend_degrees_per_hour=0.0
        )

    ordered = sort_readings(readings)
    directions = np.array([r.wind_direction for r in ordered], dtype=float)

    median_direction = float(np.sort(directions)[n // 2])
    deltas = [angle_difference(directions[i], directions[i - 1]) for i in range(1, n)]
    sign_changes = count_sign_changes(deltas)

    total_drift = angle_difference(directions[-1], directions[0])
    shift_range = 2 * max(abs(angle_difference(d, median_direction)) for d in directions)

    time_span_minutes = (ordered[-1].timestamp - ordered[0].timestamp).total_seconds() / 60
    trend = total_drift / time_span_minutes * MINUTES_PER_HOUR if time_span_minutes > 0 else 0.0

    median_direction = normalize_angle(median_direction)

    if sign_changes >= n * OSCILLATION_SIGN_CHANGE_FRACTION and shift_range > MIN_OSCILLATION_RANGE_DEGREES:
        period = round_half_up(n * ASSUMED_READING_INTERVAL_MINUTES / max(1, sign_changes / 2))
        ratio = sign_changes / (n / 2)

        if abs(trend) > OSCILLATING_PERSISTENT_MIN_TREND:
            pattern = WindPattern(
                type=WindPatternType.OSCILLATING_PERSISTENT,
                confidence=min(OSCILLATING_PERSISTENT_MAX_CONFIDENCE, ratio),
                median_direction=median_direction,
                shift_range=shift_range,
                period_minutes=period,
                trend_degrees_per_hour=trend
            )
        else:
            pattern = WindPattern(
                type=WindPatternType.OSCILLATING,
                confidence=min(OSCILLATING_MAX_CONFIDENCE, ratio),
                median_direction=median_direction,
                shift_range=shift_range,
                period_minutes=period,
                trend_degrees_per_hour=0.0
            )
    elif abs(total_drift) > PERSISTENT_MIN_DRIFT_DEGREES:
        pattern = WindPattern(
            type=WindPatternType.PERSISTENT,
            confidence=min(PERSISTENT_MAX_CONFIDENCE, abs(total_drift) / PERSISTENT_FULL_CONFIDENCE_DRIFT),
            median_direction=median_direction,
            shift_range=shift_range,
            period_minutes=None,
            trend_degrees_per_hour=trend
        )
    else:
        confidence = 1 - shift_range / STABLE_ZERO_CONFIDENCE_RANGE
        pattern = WindPattern(
            type=WindPatternType.STABLE,
            confidence=min(1.0, max(0.0, confidence)),
            median_direction=median_direction,
            shift_range=shift_range,
            period_minutes=None,
            trend_degrees_per_hour=0.0
        )

    logger.debug(f"Pattern {pattern.type.value}: {sign_changes} sign changes, range {shift_range:.1f}°, "
                 f"drift {total_drift:+.1f}°, trend {trend:+.1f}°/hr")
    return pattern


# =============================================================================
# SHIFT DETECTION
# =============================================================================

def shift_magnitude(change: float) -> str:
    """Classify a shift as 'minor', 'moderate' or 'major'."""
    if abs(change) < MINOR_SHIFT_MAX_DEGREES:
        return "minor"
    if abs(change) < MODERATE_SHIFT_MAX_DEGREES:
        return "moderate"
    return "major"


def detect_shifts(readings: List[WindReading],
                  threshold_degrees: float = DEFAULT_SHIFT_THRESHOLD_DEGREES) -> List[ShiftEvent]:
    """
    Scan a reading history for shifts.

    Each reading is compared against the direction of the last recorded
    shift (initially the first reading). A change of at least the threshold
    is emitted as a shift and becomes the new reference.
    """
    if len(readings) < 2:
        return []

    ordered = sort_readings(readings)
    shifts = []
    reference = ordered[0].wind_direction

    for reading in ordered[1:]:
        change = angle_difference(reading.wind_direction, reference)
        if abs(change) >= threshold_degrees:
            shifts.append(ShiftEvent(
                timestamp=reading.timestamp,
                direction=reading.wind_direction,
                change=change,
                type="lift" if change > 0 else "header",
                magnitude=shift_magnitude(change)
            ))
            reference = reading.wind_direction

    return shifts


# =============================================================================
# PREDICTION AND FAVORED SIDE
# =============================================================================

def predict_shifts(readings: List[WindReading], pattern: WindPattern) -> List[ShiftPrediction]:
    """
    Predict upcoming shifts from the detected pattern.

    Oscillating patterns swing back against the last shift within half a
    period. Persistent trends faster than 3°/hr keep drifting over the next
    30 minutes. Both predictions can apply at once.
    """
    predictions = []

    if pattern.is_oscillating and pattern.period_minutes:
        shifts = detect_shifts(readings)
        if shifts:
            last_shift = shifts[-1]
            predictions.append(ShiftPrediction(
                expected_direction="left" if last_shift.change > 0 else "right",
                expected_time_minutes=round_half_up(pattern.period_minutes / 2),
                magnitude_degrees=round_half_up(pattern.shift_range / 2),
                confidence=pattern.confidence * OSCILLATION_PREDICTION_CONFIDENCE_FACTOR
            ))

    if pattern.is_persistent and abs(pattern.trend_degrees_per_hour) > TREND_PREDICTION_MIN_RATE:
        predictions.append(ShiftPrediction(
            expected_direction="right" if pattern.trend_degrees_per_hour > 0 else "left",
            expected_time_minutes=TREND_PREDICTION_HORIZON_MINUTES,
            magnitude_degrees=round_half_up(abs(pattern.trend_degrees_per_hour) / 2),
            confidence=pattern.confidence * TREND_PREDICTION_CONFIDENCE_FACTOR
        ))

    return predictions


def calculate_favored_side(
    readings: List[WindReading],
    pattern: WindPattern,
    predictions: List[ShiftPrediction]
) -> FavoredSideAnalysis:
    """
    Decide which side of the course is favored.

    Priority: a persistent trend, then the nearest predicted shift, then a
    stable pattern (neutral), otherwise neutral with low confidence.
    """
    nearest: Optional[ShiftPrediction] = None
    if predictions:
        nearest = min(predictions, key=lambda p: p.expected_time_minutes)

    persistent = "none"
    if pattern.is_persistent:
        persistent = "right" if pattern.trend_degrees_per_hour > 0 else "left"

    factors = FavoredSideFactors(
        more_wind="equal",
        next_shift=nearest.expected_direction if nearest else "unknown",
        persistent=persistent
    )

    if persistent != "none":
        return FavoredSideAnalysis(
            side=persistent,
            reason=f"Wind is shifting {persistent} at {abs(pattern.trend_degrees_per_hour):.1f}°/hr",
            confidence=pattern.confidence * PERSISTENT_SIDE_CONFIDENCE_FACTOR,
            factors=factors
        )

    if nearest is not None:
        return FavoredSideAnalysis(
            side=nearest.expected_direction,
            reason=f"Expected shift to {nearest.expected_direction} within "
                   f"{nearest.expected_time_minutes} minutes",
            confidence=nearest.confidence,
            factors=factors
        )

    if pattern.type == WindPatternType.STABLE:
        return FavoredSideAnalysis(
            side="neutral",
            reason="Stable wind conditions - no clear tactical advantage",
            confidence=pattern.confidence,
            factors=factors
        )

    return FavoredSideAnalysis(
        side="neutral",
        reason="No clear advantage based on current data",
        confidence=NO_ADVANTAGE_CONFIDENCE,
        factors=factors
    )
