"""
Race leg and time estimate models.

This module defines the legs produced from a rounding sequence and the
per-leg and course-level estimates produced by the race time estimator.
"""

from dataclasses import dataclass, field, asdict
from typing import List, Dict, Any

import pandas as pd

from core.models.course import GeoPoint


@dataclass(frozen=True)
class Leg:
    """A point-to-point leg between two consecutive waypoints of a rounding sequence."""
    from_name: str
    to_name: str
    from_point: GeoPoint
    to_point: GeoPoint
    distance: float  # Nautical miles
    bearing: float  # Degrees (0-360)


@dataclass(frozen=True)
class LegEstimate:
    """Estimated sailing performance over one leg."""
    leg_index: int
    from_name: str
    to_name: str
    distance: float  # Straight-line nautical miles
    bearing: float  # Degrees
    wind_angle: float  # True wind angle, 0-180 degrees
    point_of_sail: str  # upwind, close_reach, beam_reach, broad_reach or downwind
    sailing_distance: float  # Nautical miles actually sailed
    vmg: float  # Knots
    boat_speed: float  # Knots through the water
    tacks_or_jibes: int
    leg_time_seconds: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert leg estimate to dictionary for DataFrame creation."""
        return asdict(self)

    @property
    def leg_time_minutes(self) -> float:
        """Leg time in minutes."""
        return self.leg_time_seconds / 60.0


@dataclass(frozen=True)
class RaceTimeEstimate:
    """Course-level race time estimate."""
    legs: List[LegEstimate] = field(default_factory=list)
    total_distance_nm: float = 0.0
    total_sailing_distance_nm: float = 0.0
    total_time_seconds: float = 0.0
    total_time_formatted: str = "0m 0s"
    wind_speed_knots: float = 0.0
    wind_direction_deg: float = 0.0
    boat_class_name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert estimate to a nested dictionary."""
        return asdict(self)


def legs_to_dataframe(estimate: RaceTimeEstimate) -> pd.DataFrame:
    """
    Convert the per-leg estimates to a pandas DataFrame.

    Args:
        estimate: RaceTimeEstimate to tabulate

    Returns:
        DataFrame with one row per leg, empty if the estimate has no legs
    """
    if not estimate.legs:
        return pd.DataFrame()

    return pd.DataFrame([leg.to_dict() for leg in estimate.legs])
