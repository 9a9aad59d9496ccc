"""
Input validation utilities for callers of the engine.

The geometry and analytics functions assume pre-validated input and fall back
to neutral results instead of raising. This module is the separate validation
layer the surrounding application runs before handing data to the engine.
"""

import logging
from typing import List, Union, Any, Tuple, Optional

import numpy as np

from core.constants import MODEL_MIN_SCALE, MODEL_MAX_SCALE
from core.models.course import Mark, START_TOKEN, FINISH_TOKEN
from core.models.boat_class import BoatClassProfile
from core.models.wind import WindReading

logger = logging.getLogger(__name__)


class ValidationError(Exception):
    """Custom exception for validation errors."""
    pass


def _to_finite_float(value: Any, context: str) -> float:
    if value is None:
        raise ValidationError(f"{context}: Value is None")

    try:
        as_float = float(value)
    except (ValueError, TypeError) as e:
        raise ValidationError(f"{context}: Cannot convert to float: {value}") from e

    if np.isnan(as_float) or np.isinf(as_float):
        raise ValidationError(f"{context}: Invalid value: {as_float}")

    return as_float


def validate_coordinates(lat: Any, lng: Any, context: str = "Position") -> Tuple[float, float]:
    """
    Validate a latitude/longitude pair.

    Returns:
        (lat, lng) as floats

    Raises:
        ValidationError: If either value is missing, not finite or out of range
    """
    lat_f = _to_finite_float(lat, f"{context} latitude")
    lng_f = _to_finite_float(lng, f"{context} longitude")

    if not -90 <= lat_f <= 90:
        raise ValidationError(f"{context}: invalid latitude {lat_f} (must be -90 to 90)")
    if not -180 <= lng_f <= 180:
        raise ValidationError(f"{context}: invalid longitude {lng_f} (must be -180 to 180)")

    return lat_f, lng_f


def validate_wind_direction(wind_direction: Union[int, float, str], context: str = "Wind direction") -> float:
    """
    Validate and normalize wind direction.

    Args:
        wind_direction: Wind direction value to validate
        context: Context description for error messages

    Returns:
        Normalized wind direction (0-359.99)

    Raises:
        ValidationError: If validation fails
    """
    wind_float = _to_finite_float(wind_direction, context)

    # Normalize to 0-359.99 range
    normalized = wind_float % 360.0

    logger.debug(f"{context}: {wind_direction} → {normalized}")
    return normalized


def validate_wind_speed(wind_speed: Union[int, float, str], context: str = "Wind speed") -> float:
    """Validate a wind speed in knots (finite, non-negative)."""
    speed = _to_finite_float(wind_speed, context)
    if speed < 0:
        raise ValidationError(f"{context}: must be non-negative, got {speed}")
    return speed


def validate_scale(scale: Any, min_scale: float = MODEL_MIN_SCALE,
                   max_scale: float = MODEL_MAX_SCALE) -> float:
    """Validate a course scale against the given bounds."""
    value = _to_finite_float(scale, "Scale")
    if not min_scale <= value <= max_scale:
        raise ValidationError(f"Scale must be {min_scale}-{max_scale}, got {value}")
    return value


def validate_mark_flags(mark: Mark) -> Mark:
    """
    Validate a mark's flag combination.

    A gate is laid as two buoys, so it cannot carry a single buoy assignment.
    """
    if mark.is_gate and mark.assigned_buoy_id is not None:
        raise ValidationError(
            f"Mark {mark.id}: gate marks use port/starboard buoy slots, not a single assigned buoy"
        )
    if not mark.is_gate and (mark.gate_port_buoy_id or mark.gate_starboard_buoy_id):
        raise ValidationError(f"Mark {mark.id}: gate buoy slots set on a non-gate mark")
    return mark


def validate_marks(marks: List[Mark]) -> List[Mark]:
    """
    Validate a set of course marks: unique ids, valid coordinates and flags.

    Raises:
        ValidationError: On the first invalid mark
    """
    seen = set()
    for mark in marks:
        if mark.id in seen:
            raise ValidationError(f"Duplicate mark id: {mark.id}")
        seen.add(mark.id)
        validate_coordinates(mark.lat, mark.lng, context=f"Mark {mark.id}")
        validate_mark_flags(mark)

    logger.debug(f"Marks: Validation passed for {len(marks)} marks")
    return marks


def validate_rounding_sequence(sequence: List[str], marks: List[Mark], final: bool = False) -> List[str]:
    """
    Validate a rounding sequence.

    Rules: a non-empty sequence starts with "start"; "start" and "finish"
    appear at most once; every other token references a known mark; when
    ``final`` is set (saving the course) the sequence must end with "finish".

    Raises:
        ValidationError: If any rule is broken
    """
    if not sequence:
        if final:
            raise ValidationError("Rounding sequence is empty")
        return sequence

    if sequence[0] != START_TOKEN:
        raise ValidationError(f"Rounding sequence must begin with '{START_TOKEN}', got {sequence[0]!r}")

    for token in (START_TOKEN, FINISH_TOKEN):
        if sequence.count(token) > 1:
            raise ValidationError(f"'{token}' appears {sequence.count(token)} times in rounding sequence")

    if FINISH_TOKEN in sequence and sequence[-1] != FINISH_TOKEN:
        raise ValidationError(f"'{FINISH_TOKEN}' must be the last token of the rounding sequence")

    if final and sequence[-1] != FINISH_TOKEN:
        raise ValidationError(f"Rounding sequence must end with '{FINISH_TOKEN}'")

    mark_ids = {mark.id for mark in marks}
    unknown = [t for t in sequence if t not in (START_TOKEN, FINISH_TOKEN) and t not in mark_ids]
    if unknown:
        raise ValidationError(f"Rounding sequence references unknown marks: {unknown}")

    return sequence


def validate_boat_class(profile: BoatClassProfile) -> BoatClassProfile:
    """
    Validate a boat class profile.

    Speeds must be positive, times non-negative, angles within 0-180°.
    """
    speed_fields = [
        'upwind_vmg_light', 'upwind_vmg_medium', 'upwind_vmg_heavy',
        'downwind_vmg_light', 'downwind_vmg_medium', 'downwind_vmg_heavy',
        'reach_speed_light', 'reach_speed_medium', 'reach_speed_heavy',
    ]
    for name in speed_fields:
        if _to_finite_float(getattr(profile, name), f"{profile.name} {name}") <= 0:
            raise ValidationError(f"{profile.name}: {name} must be positive")

    for name in ('tack_time', 'jibe_time', 'mark_rounding_time'):
        if _to_finite_float(getattr(profile, name), f"{profile.name} {name}") < 0:
            raise ValidationError(f"{profile.name}: {name} must be non-negative")

    for name in ('upwind_twa', 'downwind_twa', 'no_go_zone_angle'):
        angle = _to_finite_float(getattr(profile, name), f"{profile.name} {name}")
        if not 0 < angle < 180:
            raise ValidationError(f"{profile.name}: {name} must be between 0 and 180°, got {angle}")

    return profile


def validate_wind_readings(readings: Optional[List[WindReading]],
                           context: str = "Wind readings") -> List[WindReading]:
    """
    Validate a wind reading window and return it sorted by timestamp.

    Raises:
        ValidationError: If the window is missing or holds invalid values
    """
    if readings is None:
        raise ValidationError(f"{context}: readings are None")

    for reading in readings:
        if reading.timestamp is None:
            raise ValidationError(f"{context}: reading from buoy {reading.buoy_id} has no timestamp")
        _to_finite_float(reading.wind_direction, f"{context} direction")
        validate_wind_speed(reading.wind_speed, f"{context} speed")

    logger.debug(f"{context}: Validation passed for {len(readings)} readings")
    return sorted(readings, key=lambda r: r.timestamp)
