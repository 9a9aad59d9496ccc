"""
Geometric transforms for course marks.

Rotate, scale and translate a set of marks about a pivot. Latitude and
longitude are treated as planar x/y coordinates: at course scale (a few
nautical miles) the error is well below GPS and buoy positioning error, and
the course controls expect exactly this behaviour.

The pivot is the start line midpoint when both a committee boat and a pin
exist, otherwise the course center. Every function returns new marks and a
new course; inputs are never modified.
"""

import math
import logging
from dataclasses import replace
from typing import List, Tuple, Optional

from core.constants import (
    UI_MIN_SCALE, UI_MAX_SCALE, ANGLE_WRAP_BOUNDARY_DEGREES, FULL_CIRCLE_DEGREES, ALIGN_TO_WIND_REFINEMENTS
)
from core.calculations import normalize_angle, angle_difference, bearing_between, calculate_bearing
from core.models.course import Mark, Course, GeoPoint, MarkRole, ScaleMode, find_mark_by_role

logger = logging.getLogger(__name__)


# =============================================================================
# POINT OPERATIONS
# =============================================================================

def rotate_point(lat: float, lng: float, pivot_lat: float, pivot_lng: float,
                 angle_degrees: float) -> Tuple[float, float]:
    """Rotate a point clockwise (as seen on a chart) about a pivot."""
    angle_rad = math.radians(angle_degrees)
    cos_a = math.cos(angle_rad)
    sin_a = math.sin(angle_rad)

    d_lat = lat - pivot_lat
    d_lng = lng - pivot_lng

    new_d_lat = d_lat * cos_a - d_lng * sin_a
    new_d_lng = d_lat * sin_a + d_lng * cos_a

    return pivot_lat + new_d_lat, pivot_lng + new_d_lng


def scale_point(lat: float, lng: float, pivot_lat: float, pivot_lng: float,
                factor: float) -> Tuple[float, float]:
    """Scale a point's offset from a pivot."""
    return pivot_lat + (lat - pivot_lat) * factor, pivot_lng + (lng - pivot_lng) * factor


# =============================================================================
# PIVOT SELECTION
# =============================================================================

def find_start_line_marks(marks: List[Mark]) -> Tuple[Optional[Mark], Optional[Mark]]:
    """Return the (committee boat, pin) marks, either of which may be None."""
    return find_mark_by_role(marks, MarkRole.START_BOAT), find_mark_by_role(marks, MarkRole.PIN)


def get_pivot(marks: List[Mark], course: Course) -> GeoPoint:
    """
    Choose the transform pivot.

    Returns the midpoint of the committee boat and the pin when both exist,
    otherwise the course center.
    """
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is not None and pin is not None:
        return GeoPoint((start_boat.lat + pin.lat) / 2, (start_boat.lng + pin.lng) / 2)
    return course.center


# =============================================================================
# COURSE TRANSFORMS
# =============================================================================

def rotate_course(marks: List[Mark], course: Course, delta_degrees: float) -> Tuple[List[Mark], Course]:
    """
    Rotate every mark about the pivot.

    Args:
        marks: Course marks
        course: Course descriptor
        delta_degrees: Rotation in degrees, positive is clockwise

    Returns:
        (rotated marks, course with rotation advanced by delta mod 360)
    """
    pivot = get_pivot(marks, course)
    logger.debug(f"Rotating {len(marks)} marks by {delta_degrees:.2f}° about "
                 f"({pivot.lat:.6f}, {pivot.lng:.6f})")

    rotated = [
        mark.moved_to(*rotate_point(mark.lat, mark.lng, pivot.lat, pivot.lng, delta_degrees))
        for mark in marks
    ]
    new_rotation = normalize_angle(course.rotation + delta_degrees)

    return rotated, replace(course, rotation=new_rotation)


def scale_course(
    marks: List[Mark],
    course: Course,
    factor: float,
    mode: ScaleMode = ScaleMode.RESIZE_ALL,
    min_scale: float = UI_MIN_SCALE,
    max_scale: float = UI_MAX_SCALE
) -> Tuple[List[Mark], Course]:
    """
    Scale the course by a factor relative to its current size.

    The resulting course scale is clamped to [min_scale, max_scale] and the
    factor actually applied to the marks is derived from the clamped value.

    Start line handling depends on ``mode``:
    - resize_all: start line marks scale like every other mark
    - keep_start_line: marks flagged as start line marks do not move
    - keep_committee_boat: the committee boat does not move and the pin
      scales from the committee boat position

    Args:
        marks: Course marks
        course: Course descriptor
        factor: Requested scale factor
        mode: Start line handling mode
        min_scale, max_scale: Bounds for the resulting course scale

    Returns:
        (scaled marks, course with updated scale)
    """
    mode = ScaleMode(mode)
    requested_scale = course.scale * factor
    new_scale = min(max(requested_scale, min_scale), max_scale)
    if new_scale != requested_scale:
        logger.warning(f"Course scale {requested_scale:.3f} clamped to {new_scale:.3f}")

    effective_factor = new_scale / course.scale if course.scale > 0 else factor
    pivot = get_pivot(marks, course)
    start_boat = find_mark_by_role(marks, MarkRole.START_BOAT)

    logger.debug(f"Scaling {len(marks)} marks by {effective_factor:.3f} ({mode.value})")

    scaled = []
    for mark in marks:
        if mode == ScaleMode.KEEP_START_LINE and mark.is_start_line:
            scaled.append(mark)
        elif mode == ScaleMode.KEEP_COMMITTEE_BOAT and mark.role == MarkRole.START_BOAT:
            scaled.append(mark)
        elif mode == ScaleMode.KEEP_COMMITTEE_BOAT and mark.role == MarkRole.PIN and start_boat is not None:
            scaled.append(mark.moved_to(
                *scale_point(mark.lat, mark.lng, start_boat.lat, start_boat.lng, effective_factor)
            ))
        else:
            scaled.append(mark.moved_to(
                *scale_point(mark.lat, mark.lng, pivot.lat, pivot.lng, effective_factor)
            ))

    return scaled, replace(course, scale=new_scale)


def translate_course(marks: List[Mark], course: Course, delta_lat: float,
                     delta_lng: float) -> Tuple[List[Mark], Course]:
    """Move every mark and the course center by the same offset."""
    moved = [mark.moved_to(mark.lat + delta_lat, mark.lng + delta_lng) for mark in marks]
    return moved, replace(
        course,
        center_lat=course.center_lat + delta_lat,
        center_lng=course.center_lng + delta_lng
    )


def start_line_bearing(marks: List[Mark]) -> Optional[float]:
    """Bearing from the committee boat to the pin, or None without both ends."""
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is None or pin is None:
        return None
    return bearing_between(start_boat, pin)


def planar_angle(p1, p2) -> float:
    """Angle of the segment p1 -> p2 in raw lat/lng degree space, clockwise from north."""
    return normalize_angle(math.degrees(math.atan2(p2.lng - p1.lng, p2.lat - p1.lat)))


def planar_heading(bearing: float, lat: float) -> float:
    """
    Convert a compass bearing at latitude ``lat`` to a lat/lng degree-space angle.

    A degree of longitude is cos(lat) shorter than a degree of latitude, so
    the east component is stretched by 1 / cos(lat).
    """
    bearing_rad = math.radians(bearing)
    return normalize_angle(math.degrees(math.atan2(
        math.sin(bearing_rad) / math.cos(math.radians(lat)),
        math.cos(bearing_rad)
    )))


def align_to_wind(marks: List[Mark], course: Course, wind_direction: float) -> Tuple[List[Mark], Course]:
    """
    Rotate the course so the start line runs square to the wind.

    The committee boat to pin bearing is brought to wind + 90° by the
    shortest turn. The rotation is planar, so the turn is worked out in
    lat/lng degree space and then corrected against the measured bearing
    for meridian convergence. Without both start line marks the inputs are
    returned unchanged.
    """
    start_boat, pin = find_start_line_marks(marks)
    if start_boat is None or pin is None:
        logger.warning("Cannot align to wind: committee boat or pin mark missing")
        return list(marks), course

    pivot = get_pivot(marks, course)
    desired = normalize_angle(wind_direction + 90)
    target = planar_heading(desired, pivot.lat)
    delta = angle_difference(target, planar_angle(start_boat, pin))

    for _ in range(ALIGN_TO_WIND_REFINEMENTS):
        boat_lat, boat_lng = rotate_point(start_boat.lat, start_boat.lng, pivot.lat, pivot.lng, delta)
        pin_lat, pin_lng = rotate_point(pin.lat, pin.lng, pivot.lat, pivot.lng, delta)
        achieved = calculate_bearing(boat_lat, boat_lng, pin_lat, pin_lng)
        delta += angle_difference(target, planar_heading(achieved, pivot.lat))

    delta = angle_difference(delta, 0)
    if delta <= -ANGLE_WRAP_BOUNDARY_DEGREES:
        delta += FULL_CIRCLE_DEGREES

    logger.debug(f"Aligning start line {bearing_between(start_boat, pin):.1f}° -> {desired:.1f}° "
                 f"(delta {delta:+.1f}°)")
    return rotate_course(marks, course, delta)
