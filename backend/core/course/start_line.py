"""
Start line and mark placement helpers.

Measurements here use true geodesic distances (geopy) because they move a
single mark along a bearing rather than transforming the whole course.
"""

import logging
from typing import List, Optional, Tuple

from core.constants import START_LINE_SQUARE_OFFSET_DEGREES, METERS_PER_NAUTICAL_MILE
from core.calculations import (
    calculate_bearing, calculate_distance_meters, move_point, normalize_angle,
    angle_difference, calculate_start_line_wind_angle
)
from core.models.course import Mark, GeoPoint, StartLineEnd
from core.course.transforms import find_start_line_marks

logger = logging.getLogger(__name__)


def get_start_line_center(marks: List[Mark]) -> Optional[GeoPoint]:
    """
    Center of the start line.

    Midpoint of committee boat and pin; the single end when only one exists;
    None when neither exists.
    """
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is not None and pin is not None:
        return GeoPoint((start_boat.lat + pin.lat) / 2, (start_boat.lng + pin.lng) / 2)
    if start_boat is not None:
        return start_boat.position
    if pin is not None:
        return pin.position
    return None


def get_course_center(marks: List[Mark]) -> GeoPoint:
    """Mean position of all marks, (0, 0) for an empty course."""
    if not marks:
        return GeoPoint(0.0, 0.0)
    return GeoPoint(
        sum(mark.lat for mark in marks) / len(marks),
        sum(mark.lng for mark in marks) / len(marks)
    )


def start_line_length_meters(marks: List[Mark]) -> Optional[float]:
    """Geodesic length of the start line in meters, None without both ends."""
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is None or pin is None:
        return None
    return calculate_distance_meters(start_boat.lat, start_boat.lng, pin.lat, pin.lng)


def start_line_wind_deviation(marks: List[Mark], wind_direction: float) -> Optional[float]:
    """
    Signed deviation of the start line from square to the wind.

    Returns:
        Degrees in [-90, 90] (0 is perfectly square), None without both ends
    """
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is None or pin is None:
        return None
    line_bearing = calculate_bearing(start_boat.lat, start_boat.lng, pin.lat, pin.lng)
    signed, _ = calculate_start_line_wind_angle(line_bearing, wind_direction)
    return signed


def square_start_line(
    marks: List[Mark],
    wind_direction: float,
    fixed_end: StartLineEnd = StartLineEnd.COMMITTEE_BOAT
) -> List[Mark]:
    """
    Square the start line to the wind while holding one end in place.

    The free end keeps its distance from the fixed end and moves to whichever
    of wind + 90° / wind - 90° is closer to the current line bearing.

    Args:
        marks: Course marks
        wind_direction: Wind direction in degrees
        fixed_end: End of the line that does not move

    Returns:
        New list of marks; unchanged when either end is missing
    """
    fixed_end = StartLineEnd(fixed_end)
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is None or pin is None:
        logger.warning("Cannot square start line: committee boat or pin mark missing")
        return list(marks)

    anchor, free = (start_boat, pin) if fixed_end == StartLineEnd.COMMITTEE_BOAT else (pin, start_boat)

    length_m = calculate_distance_meters(anchor.lat, anchor.lng, free.lat, free.lng)
    current_bearing = calculate_bearing(anchor.lat, anchor.lng, free.lat, free.lng)

    option1 = normalize_angle(wind_direction + START_LINE_SQUARE_OFFSET_DEGREES)
    option2 = normalize_angle(wind_direction - START_LINE_SQUARE_OFFSET_DEGREES)
    if abs(angle_difference(current_bearing, option1)) <= abs(angle_difference(current_bearing, option2)):
        target_bearing = option1
    else:
        target_bearing = option2

    new_lat, new_lng = move_point(anchor.lat, anchor.lng, target_bearing, length_m)
    logger.debug(f"Squared start line: {current_bearing:.1f}° -> {target_bearing:.1f}° "
                 f"({length_m / METERS_PER_NAUTICAL_MILE:.3f} nm, {fixed_end.value} fixed)")

    return [mark.moved_to(new_lat, new_lng) if mark.id == free.id else mark for mark in marks]


def adjust_mark_to_wind(
    mark: Mark,
    reference: GeoPoint,
    wind_direction: float,
    degrees_to_wind: float
) -> Tuple[Mark, float]:
    """
    Place a mark at a fixed angle to the wind from a reference point.

    The mark keeps its distance from the reference and moves to bearing
    ``wind_direction + degrees_to_wind`` (0 puts it dead upwind).

    Returns:
        (moved mark, original bearing from the reference in degrees)
    """
    distance_m = calculate_distance_meters(reference.lat, reference.lng, mark.lat, mark.lng)
    original_bearing = calculate_bearing(reference.lat, reference.lng, mark.lat, mark.lng)
    new_bearing = normalize_angle(wind_direction + degrees_to_wind)

    new_lat, new_lng = move_point(reference.lat, reference.lng, new_bearing, distance_m)
    return mark.moved_to(new_lat, new_lng), original_bearing
