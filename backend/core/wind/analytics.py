"""
Multi-buoy wind analytics.

Combines pattern detection, shift detection, shift prediction and the
favored side decision with per-buoy comparisons into one dashboard summary.
"""

import logging
from typing import List, Dict, Optional, Tuple

import pandas as pd

from core.constants import (
    RECENT_READINGS_WINDOW, BUOY_TREND_WINDOW, BUOY_TREND_MIN_READINGS,
    BUOY_TREND_DEADBAND_KNOTS, ROLLING_AVERAGE_WINDOW, ROLLING_AVERAGE_MIN_READINGS,
    BUOY_NAME_ID_PREFIX_LENGTH
)
from core.calculations import angle_difference, circular_mean
from core.models.wind import (
    WindReading, WindAnalytics, CurrentConditions, BuoyComparison, readings_to_dataframe
)
from core.wind.patterns import detect_pattern, detect_shifts, predict_shifts, calculate_favored_side

logger = logging.getLogger(__name__)


def classify_speed_trend(latest_speed: float, prior_speeds: pd.Series,
                         deadband: float = BUOY_TREND_DEADBAND_KNOTS) -> str:
    """Compare the latest speed with the mean of prior speeds."""
    average = prior_speeds.mean()
    if latest_speed > average + deadband:
        return "increasing"
    if latest_speed < average - deadband:
        return "decreasing"
    return "stable"


def calculate_current_conditions(df: pd.DataFrame,
                                 window: int = RECENT_READINGS_WINDOW) -> CurrentConditions:
    """
    Latest reading against the mean of the most recent readings.

    Args:
        df: Readings DataFrame sorted by ascending timestamp
        window: Number of most recent readings to average
    """
    if df.empty:
        return CurrentConditions(direction=0.0, speed=0.0, direction_delta=0.0, speed_delta=0.0)

    latest = df.iloc[-1]
    recent = df.tail(window)
    avg_direction = circular_mean(recent['wind_direction'])
    avg_speed = float(recent['wind_speed'].mean())

    return CurrentConditions(
        direction=float(latest['wind_direction']),
        speed=float(latest['wind_speed']),
        direction_delta=angle_difference(float(latest['wind_direction']), avg_direction),
        speed_delta=float(latest['wind_speed']) - avg_speed
    )


def compare_buoys(df: pd.DataFrame, buoy_names: Optional[Dict[str, str]] = None,
                  window: int = BUOY_TREND_WINDOW) -> List[BuoyComparison]:
    """
    Latest wind at each buoy with its speed trend.

    The trend compares a buoy's latest speed with the mean of its prior
    ``window`` readings, using a ±1 knot deadband. Buoys with fewer than
    three readings report 'stable'.
    """
    if df.empty:
        return []

    buoy_names = buoy_names or {}
    comparisons = []

    for buoy_id, group in df.groupby('buoy_id', sort=False):
        latest = group.iloc[-1]
        trend = "stable"
        if len(group) >= BUOY_TREND_MIN_READINGS:
            prior = group.iloc[-(window + 1):-1]
            trend = classify_speed_trend(float(latest['wind_speed']), prior['wind_speed'])

        comparisons.append(BuoyComparison(
            buoy_id=buoy_id,
            buoy_name=buoy_names.get(buoy_id, f"Buoy {str(buoy_id)[:BUOY_NAME_ID_PREFIX_LENGTH]}"),
            direction=float(latest['wind_direction']),
            speed=float(latest['wind_speed']),
            trend=trend
        ))

    return comparisons


def calculate_rolling_averages(
    readings: List[WindReading],
    window: int = ROLLING_AVERAGE_WINDOW
) -> Tuple[Optional[float], Optional[float]]:
    """
    Rolling average of a buoy's most recent readings.

    Direction is averaged on the circle, speed arithmetically.

    Returns:
        (average_direction, average_speed), or (None, None) with fewer than two readings
    """
    if len(readings) < ROLLING_AVERAGE_MIN_READINGS:
        return None, None

    recent = readings_to_dataframe(readings).tail(window)
    return circular_mean(recent['wind_direction']), float(recent['wind_speed'].mean())


def analyze_weather(readings: List[WindReading],
                    buoy_names: Optional[Dict[str, str]] = None) -> WindAnalytics:
    """
    Build the complete wind analytics summary.

    Args:
        readings: Readings from one or more buoys, in any order
        buoy_names: Optional mapping of buoy id to display name

    Returns:
        WindAnalytics with pattern, favored side, shifts, predictions,
        current conditions and per-buoy comparison
    """
    pattern = detect_pattern(readings)
    shifts = detect_shifts(readings)
    predictions = predict_shifts(readings, pattern)
    favored_side = calculate_favored_side(readings, pattern, predictions)

    df = readings_to_dataframe(readings)

    logger.debug(f"Analyzed {len(readings)} readings: {pattern.type.value}, "
                 f"{len(shifts)} shifts, favored side {favored_side.side}")

    return WindAnalytics(
        pattern=pattern,
        favored_side=favored_side,
        shifts=shifts,
        predictions=predictions,
        current_conditions=calculate_current_conditions(df),
        buoy_comparison=compare_buoys(df, buoy_names)
    )
