"""
Race time service.

This module provides business logic for estimating race duration on a course,
used by the course statistics panel.
"""

import logging
from typing import List, Optional, Union

from core.course.legs import build_legs
from core.course.start_line import get_start_line_center
from core.race.estimator import estimate_race_time
from core.models.boat_class import BoatClassProfile, get_boat_class
from core.models.course import Mark, Course
from core.models.race import RaceTimeEstimate
from core.validation import ValidationError, validate_wind_direction, validate_wind_speed, validate_boat_class

logger = logging.getLogger(__name__)


class RaceTimeService:
    """
    Service for race time estimation.

    Resolves the boat class, rejects missing wind, builds legs from the
    course's rounding sequence and runs the VMG estimator.
    """

    @staticmethod
    def resolve_boat_class(boat_class: Union[str, BoatClassProfile]) -> BoatClassProfile:
        """
        Resolve a boat class name or profile.

        Raises:
            ValidationError: If the name is not a known preset or the profile is invalid
        """
        if isinstance(boat_class, BoatClassProfile):
            return validate_boat_class(boat_class)

        profile = get_boat_class(boat_class)
        if profile is None:
            raise ValidationError(f"Unknown boat class: {boat_class}")
        return profile

    def estimate(
        self,
        marks: List[Mark],
        course: Course,
        boat_class: Union[str, BoatClassProfile],
        wind_speed_knots: Optional[float],
        wind_direction_deg: Optional[float]
    ) -> RaceTimeEstimate:
        """
        Estimate race time for a course.

        Args:
            marks: Course marks
            course: Course descriptor with its rounding sequence
            boat_class: Preset name or a BoatClassProfile
            wind_speed_knots: Current wind speed
            wind_direction_deg: Current wind direction

        Returns:
            RaceTimeEstimate for the course

        Raises:
            ValidationError: If wind data is missing or invalid, or the boat class is unknown
        """
        if wind_speed_knots is None or wind_direction_deg is None:
            raise ValidationError("Wind speed and direction are required for race time estimation")

        wind_speed = validate_wind_speed(wind_speed_knots)
        wind_direction = validate_wind_direction(wind_direction_deg)
        profile = self.resolve_boat_class(boat_class)

        legs = build_legs(course.rounding_sequence, marks, start_line_center=get_start_line_center(marks))
        if not legs:
            logger.warning("Rounding sequence produced no legs")

        estimate = estimate_race_time(legs, profile, wind_speed, wind_direction)
        logger.info(f"Race estimate for {profile.name}: {estimate.total_time_formatted} "
                    f"over {estimate.total_distance_nm:.2f} nm")
        return estimate


def get_race_time_service() -> RaceTimeService:
    """
    Get a RaceTimeService instance.

    Returns:
        RaceTimeService instance
    """
    return RaceTimeService()
