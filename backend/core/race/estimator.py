"""
VMG race time estimation.

Estimates how long a boat class takes to sail a course, leg by leg:

1. The leg's true wind angle decides the point of sail.
2. The wind speed decides the wind band (light/medium/heavy).
3. The boat class VMG table gives the speed made good for that pair.
4. Beats and runs are sailed at an angle to the rhumb line, so the sailed
   distance is stretched and tacks or jibes are added.
5. Every leg after the first pays one mark rounding, and one more rounding
   is charged after the last leg for the finish.
"""

import math
import logging
from typing import List, Tuple

from core.constants import (
    CLOSE_REACH_MAX_TWA, BEAM_REACH_MAX_TWA, BROAD_REACH_MAX_TWA,
    LIGHT_WIND_MAX_KNOTS, MEDIUM_WIND_MAX_KNOTS,
    UPWIND_COSINE_FLOOR, DOWNWIND_COSINE_FLOOR,
    UPWIND_TACK_SPACING_NM, DOWNWIND_JIBE_SPACING_NM,
    MIN_TACKS_PER_BEAT, MIN_JIBES_PER_RUN, ZERO_LEG_DISTANCE_NM,
    FALLBACK_VMG_KNOTS, SECONDS_PER_HOUR, ANGLE_WRAP_BOUNDARY_DEGREES
)
from core.calculations import true_wind_angle, format_duration
from core.models.boat_class import BoatClassProfile
from core.models.race import Leg, LegEstimate, RaceTimeEstimate

logger = logging.getLogger(__name__)

UPWIND = "upwind"
CLOSE_REACH = "close_reach"
BEAM_REACH = "beam_reach"
BROAD_REACH = "broad_reach"
DOWNWIND = "downwind"

REACHING = (CLOSE_REACH, BEAM_REACH, BROAD_REACH)


def determine_point_of_sail(twa: float, no_go_zone_angle: float) -> str:
    """Classify a true wind angle (0-180°) into a point of sail."""
    if twa < no_go_zone_angle:
        return UPWIND
    if twa < CLOSE_REACH_MAX_TWA:
        return CLOSE_REACH
    if twa < BEAM_REACH_MAX_TWA:
        return BEAM_REACH
    if twa < BROAD_REACH_MAX_TWA:
        return BROAD_REACH
    return DOWNWIND


def get_wind_category(wind_speed_knots: float) -> str:
    """Classify wind speed into 'light', 'medium' or 'heavy'."""
    if wind_speed_knots <= LIGHT_WIND_MAX_KNOTS:
        return "light"
    if wind_speed_knots <= MEDIUM_WIND_MAX_KNOTS:
        return "medium"
    return "heavy"


def get_vmg(boat_class: BoatClassProfile, point_of_sail: str, wind_category: str) -> float:
    """Look up VMG in knots; all reaches share the reach speed table."""
    if point_of_sail == UPWIND:
        prefix = "upwind_vmg"
    elif point_of_sail == DOWNWIND:
        prefix = "downwind_vmg"
    elif point_of_sail in REACHING:
        prefix = "reach_speed"
    else:
        return FALLBACK_VMG_KNOTS

    vmg = getattr(boat_class, f"{prefix}_{wind_category}", FALLBACK_VMG_KNOTS)
    if vmg <= 0:
        logger.warning(f"Non-positive {prefix}_{wind_category} ({vmg}) for {boat_class.name}, "
                       f"using {FALLBACK_VMG_KNOTS} kn")
        return FALLBACK_VMG_KNOTS
    return vmg


def get_maneuver_cosine(boat_class: BoatClassProfile, point_of_sail: str) -> float:
    """
    Floored cosine of the angle between the sailed heading and the rhumb line.

    Upwind the boat sails at ``upwind_twa`` off the wind. Downwind the
    configured ``downwind_twa`` is measured from the wind, so the angle off
    the rhumb line is ``180 - downwind_twa``. Reaches sail the rhumb line.
    """
    # The floored value also sets boat speed (vmg / cosine), not only the sailed distance
    if point_of_sail == UPWIND:
        return max(math.cos(math.radians(boat_class.upwind_twa)), UPWIND_COSINE_FLOOR)
    if point_of_sail == DOWNWIND:
        jibing_angle = ANGLE_WRAP_BOUNDARY_DEGREES - boat_class.downwind_twa
        return max(math.cos(math.radians(jibing_angle)), DOWNWIND_COSINE_FLOOR)
    return 1.0


def calculate_sailing_distance_and_maneuvers(
    straight_line_distance: float,
    point_of_sail: str,
    boat_class: BoatClassProfile
) -> Tuple[float, int]:
    """
    Distance actually sailed and number of tacks or jibes on a leg.

    Returns:
        (sailing_distance_nm, maneuver_count)
    """
    if straight_line_distance < ZERO_LEG_DISTANCE_NM:
        return 0.0, 0

    cosine = get_maneuver_cosine(boat_class, point_of_sail)
    sailing_distance = straight_line_distance / cosine

    if point_of_sail == UPWIND:
        return sailing_distance, max(MIN_TACKS_PER_BEAT, math.ceil(sailing_distance / UPWIND_TACK_SPACING_NM))
    if point_of_sail == DOWNWIND:
        return sailing_distance, max(MIN_JIBES_PER_RUN, math.ceil(sailing_distance / DOWNWIND_JIBE_SPACING_NM))

    return straight_line_distance, 0


def estimate_leg(
    leg: Leg,
    leg_index: int,
    boat_class: BoatClassProfile,
    wind_speed_knots: float,
    wind_direction_deg: float
) -> LegEstimate:
    """Estimate sailing time for a single leg."""
    twa = true_wind_angle(leg.bearing, wind_direction_deg)
    point_of_sail = determine_point_of_sail(twa, boat_class.no_go_zone_angle)
    vmg = get_vmg(boat_class, point_of_sail, get_wind_category(wind_speed_knots))

    # VMG is the component of boat speed along the rhumb line
    boat_speed = vmg / get_maneuver_cosine(boat_class, point_of_sail)

    sailing_distance, maneuvers = calculate_sailing_distance_and_maneuvers(
        leg.distance, point_of_sail, boat_class
    )

    if sailing_distance == 0.0:
        leg_time = 0.0
    else:
        sailing_time = sailing_distance / boat_speed * SECONDS_PER_HOUR
        if point_of_sail == UPWIND:
            maneuver_time = maneuvers * boat_class.tack_time
        elif point_of_sail == DOWNWIND:
            maneuver_time = maneuvers * boat_class.jibe_time
        else:
            maneuver_time = 0.0
        rounding_time = boat_class.mark_rounding_time if leg_index > 0 else 0.0
        leg_time = sailing_time + maneuver_time + rounding_time

    return LegEstimate(
        leg_index=leg_index,
        from_name=leg.from_name,
        to_name=leg.to_name,
        distance=leg.distance,
        bearing=leg.bearing,
        wind_angle=twa,
        point_of_sail=point_of_sail,
        sailing_distance=sailing_distance,
        vmg=vmg,
        boat_speed=abs(boat_speed),
        tacks_or_jibes=maneuvers,
        leg_time_seconds=leg_time
    )


def estimate_race_time(
    legs: List[Leg],
    boat_class: BoatClassProfile,
    wind_speed_knots: float,
    wind_direction_deg: float
) -> RaceTimeEstimate:
    """
    Estimate total race time over a list of legs.

    Wind must be known; callers reject missing wind before calling. A zero or
    negative VMG entry in the profile is replaced by FALLBACK_VMG_KNOTS.

    Args:
        legs: Legs in sailing order (see core.course.legs.build_legs)
        boat_class: Performance profile of the boat class
        wind_speed_knots: True wind speed
        wind_direction_deg: True wind direction (from)

    Returns:
        RaceTimeEstimate with per-leg estimates and course totals
    """
    leg_estimates = [
        estimate_leg(leg, index, boat_class, wind_speed_knots, wind_direction_deg)
        for index, leg in enumerate(legs)
    ]

    total_distance = sum(leg.distance for leg in leg_estimates)
    total_sailing_distance = sum(leg.sailing_distance for leg in leg_estimates)
    total_time = sum(leg.leg_time_seconds for leg in leg_estimates)
    if leg_estimates:
        # Finishing costs one more rounding
        total_time += boat_class.mark_rounding_time

    logger.debug(f"Estimated {len(leg_estimates)} legs for {boat_class.name}: "
                 f"{total_distance:.2f} nm in {total_time:.0f}s")

    return RaceTimeEstimate(
        legs=leg_estimates,
        total_distance_nm=total_distance,
        total_sailing_distance_nm=total_sailing_distance,
        total_time_seconds=total_time,
        total_time_formatted=format_duration(total_time),
        wind_speed_knots=wind_speed_knots,
        wind_direction_deg=wind_direction_deg,
        boat_class_name=boat_class.name
    )
