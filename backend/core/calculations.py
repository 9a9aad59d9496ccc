"""
Shared calculations module.

This module contains the geographic and angular math shared by the course
transforms, the leg builder, the race time estimator and the wind analytics.
All functions are pure: they take plain numbers (or objects exposing ``lat``
and ``lng``) and return plain numbers.
"""

import math
import logging
from typing import Iterable, Tuple, Optional

import numpy as np
from geopy.distance import geodesic

from core.constants import (
    EARTH_RADIUS_NAUTICAL_MILES, FULL_CIRCLE_DEGREES, ANGLE_WRAP_BOUNDARY_DEGREES,
    START_LINE_SQUARE_OFFSET_DEGREES, START_LINE_FOLD_DEGREES, SECONDS_PER_HOUR,
    SECONDS_PER_MINUTE
)

logger = logging.getLogger(__name__)


# =============================================================================
# BASIC GEOMETRIC CALCULATIONS
# =============================================================================

def calculate_bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the initial bearing between two points in degrees [0, 360)."""
    # Convert to radians
    lat1 = math.radians(lat1)
    lon1 = math.radians(lon1)
    lat2 = math.radians(lat2)
    lon2 = math.radians(lon2)

    # Calculate bearing
    x = math.sin(lon2 - lon1) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(lon2 - lon1)
    initial_bearing = math.atan2(x, y)

    # Convert to degrees
    initial_bearing = math.degrees(initial_bearing)
    compass_bearing = (initial_bearing + FULL_CIRCLE_DEGREES) % FULL_CIRCLE_DEGREES

    return compass_bearing


def calculate_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the haversine great-circle distance between two points in nautical miles."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2 +
         math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_NAUTICAL_MILES * c


def calculate_distance_meters(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate the geodesic distance between two points in meters."""
    return geodesic((lat1, lon1), (lat2, lon2)).meters


def move_point(lat: float, lon: float, bearing: float, distance_meters: float) -> Tuple[float, float]:
    """
    Project a point along a bearing.

    Args:
        lat, lon: Starting position in decimal degrees
        bearing: Direction of travel in degrees
        distance_meters: Distance to travel in meters

    Returns:
        (latitude, longitude) of the destination
    """
    destination = geodesic(meters=distance_meters).destination((lat, lon), bearing=bearing)
    return destination.latitude, destination.longitude


def distance_between(p1, p2) -> float:
    """Haversine distance in nautical miles between two objects exposing ``lat``/``lng``."""
    return calculate_distance(p1.lat, p1.lng, p2.lat, p2.lng)


def bearing_between(p1, p2) -> float:
    """Initial bearing in degrees from ``p1`` to ``p2`` (objects exposing ``lat``/``lng``)."""
    return calculate_bearing(p1.lat, p1.lng, p2.lat, p2.lng)


# =============================================================================
# ANGLE ARITHMETIC
# =============================================================================

def normalize_angle(angle: float) -> float:
    """Normalize an angle to the range [0, 360)."""
    normalized = angle % FULL_CIRCLE_DEGREES
    # -1e-17 % 360 rounds to exactly 360.0
    if normalized >= FULL_CIRCLE_DEGREES:
        normalized -= FULL_CIRCLE_DEGREES
    return normalized


def angle_difference(a: float, b: float) -> float:
    """
    Signed difference ``a - b`` between two directions.

    Both inputs are normalized to [0, 360) first, then the difference is
    folded into [-180, 180]. Positive means ``a`` lies clockwise of ``b``.
    """
    diff = normalize_angle(a) - normalize_angle(b)
    if diff > ANGLE_WRAP_BOUNDARY_DEGREES:
        return diff - FULL_CIRCLE_DEGREES
    if diff < -ANGLE_WRAP_BOUNDARY_DEGREES:
        return diff + FULL_CIRCLE_DEGREES
    return diff


def calculate_wind_angle(leg_bearing: float, wind_direction: float) -> Tuple[float, float]:
    """
    Calculate a leg's angle relative to the wind.

    Parameters:
    - leg_bearing: The direction of the leg (0-359 degrees)
    - wind_direction: The direction the wind is coming from (0-359 degrees)

    Returns:
    - (signed_relative, absolute_twa)
      - signed_relative is in [-180, 180], positive when the leg lies clockwise of the wind
      - absolute_twa is in [0, 180]: 0° is dead upwind, 180° is dead downwind
    """
    signed_relative = angle_difference(leg_bearing, wind_direction)
    return signed_relative, abs(signed_relative)


def true_wind_angle(leg_bearing: float, wind_direction: float) -> float:
    """Absolute true wind angle (0-180 degrees) of a leg."""
    return calculate_wind_angle(leg_bearing, wind_direction)[1]


def calculate_start_line_wind_angle(line_bearing: float, wind_direction: float) -> Tuple[float, float]:
    """
    Calculate how far a start line is from square to the wind.

    A line is square when it runs at wind + 90° or wind - 90°, so the signed
    deviation is folded into [-90, 90].

    Returns:
        (signed_deviation, absolute_deviation) in degrees
    """
    square_bearing = normalize_angle(wind_direction + START_LINE_SQUARE_OFFSET_DEGREES)
    signed = angle_difference(line_bearing, square_bearing)

    if signed > START_LINE_FOLD_DEGREES:
        signed -= 2 * START_LINE_FOLD_DEGREES
    if signed < -START_LINE_FOLD_DEGREES:
        signed += 2 * START_LINE_FOLD_DEGREES

    return signed, abs(signed)


def circular_mean(directions: Iterable[float]) -> Optional[float]:
    """
    Mean of a set of directions on the circle.

    Returns:
        Mean direction in [0, 360), or None for an empty input
    """
    radians = np.radians(np.asarray(list(directions), dtype=float))
    if radians.size == 0:
        return None
    mean = math.degrees(math.atan2(np.sin(radians).sum(), np.cos(radians).sum()))
    return normalize_angle(mean)


# =============================================================================
# FORMATTING
# =============================================================================

def format_duration(total_seconds: float) -> str:
    """
    Format a duration for display.

    Returns ``"<H>h <M>m"`` for an hour or more, otherwise ``"<M>m <S>s"``.
    """
    hours = int(total_seconds // SECONDS_PER_HOUR)
    if hours > 0:
        minutes = int((total_seconds % SECONDS_PER_HOUR) // SECONDS_PER_MINUTE)
        return f"{hours}h {minutes}m"

    rounded = int(math.floor(total_seconds + 0.5))
    if rounded >= SECONDS_PER_HOUR:
        return "1h 0m"
    minutes, seconds = divmod(rounded, SECONDS_PER_MINUTE)
    return f"{minutes}m {seconds}s"
