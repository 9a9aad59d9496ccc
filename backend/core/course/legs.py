"""
Leg building from a rounding sequence.

Turns ``["start", <mark id>, ..., "finish"]`` into consecutive point-to-point
legs with haversine distance and initial bearing.
"""

import logging
from typing import List, Optional, Tuple

from core.calculations import distance_between, bearing_between
from core.models.course import Mark, GeoPoint, START_TOKEN, FINISH_TOKEN
from core.models.race import Leg

logger = logging.getLogger(__name__)


def line_center(marks: List[Mark], finish: bool = False) -> Optional[GeoPoint]:
    """
    Mean position of the marks flagged as start line (or finish line) marks.

    Returns:
        GeoPoint, or None when no mark carries the flag
    """
    line_marks = [m for m in marks if (m.is_finish_line if finish else m.is_start_line)]
    if not line_marks:
        return None
    return GeoPoint(
        sum(m.lat for m in line_marks) / len(line_marks),
        sum(m.lng for m in line_marks) / len(line_marks)
    )


def resolve_waypoints(
    rounding_sequence: List[str],
    marks: List[Mark],
    start_line_center: Optional[GeoPoint] = None,
    finish_line_center: Optional[GeoPoint] = None
) -> List[Tuple[str, GeoPoint]]:
    """
    Map each sequence token to a named position.

    Tokens that cannot be resolved (unknown mark id, or a start/finish token
    without a line) are skipped.
    """
    marks_by_id = {mark.id: mark for mark in marks}
    start_center = start_line_center or line_center(marks)
    finish_center = finish_line_center or line_center(marks, finish=True)

    waypoints = []
    for token in rounding_sequence:
        if token == START_TOKEN and start_center is not None:
            waypoints.append(("Start", start_center))
        elif token == FINISH_TOKEN and finish_center is not None:
            waypoints.append(("Finish", finish_center))
        elif token in marks_by_id:
            mark = marks_by_id[token]
            waypoints.append((mark.display_name, mark.position))
        else:
            logger.warning(f"Skipping unresolvable rounding sequence token: {token!r}")

    return waypoints


def build_legs(
    rounding_sequence: List[str],
    marks: List[Mark],
    start_line_center: Optional[GeoPoint] = None,
    finish_line_center: Optional[GeoPoint] = None
) -> List[Leg]:
    """
    Build the legs of a course from its rounding sequence.

    A mark id may appear several times (laps); every occurrence yields its
    own legs. Fewer than two resolvable waypoints yields no legs.

    Args:
        rounding_sequence: Ordered tokens: "start", mark ids, "finish"
        marks: All course marks
        start_line_center: Optional precomputed start line center
        finish_line_center: Optional precomputed finish line center

    Returns:
        List of Leg objects in sailing order
    """
    waypoints = resolve_waypoints(rounding_sequence, marks, start_line_center, finish_line_center)

    legs = []
    for (from_name, from_point), (to_name, to_point) in zip(waypoints, waypoints[1:]):
        legs.append(Leg(
            from_name=from_name,
            to_name=to_name,
            from_point=from_point,
            to_point=to_point,
            distance=distance_between(from_point, to_point),
            bearing=bearing_between(from_point, to_point)
        ))

    logger.debug(f"Built {len(legs)} legs from {len(rounding_sequence)} sequence tokens")
    return legs
