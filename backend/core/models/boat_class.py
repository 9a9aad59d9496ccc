"""
Boat class performance profiles.

A profile is the VMG table the race time estimator reads: upwind and downwind
VMG per wind band, reaching speeds per wind band, optimal sailing angles, and
the time cost of maneuvers and mark roundings.
"""

from dataclasses import dataclass, asdict
from typing import Dict, Any, List, Optional


@dataclass(frozen=True)
class BoatClassProfile:
    """Performance profile for a boat class. Speeds are in knots, times in seconds."""
    name: str

    # Upwind performance
    upwind_vmg_light: float
    upwind_vmg_medium: float
    upwind_vmg_heavy: float
    upwind_twa: float  # Optimal true wind angle when beating, degrees

    # Downwind performance
    downwind_vmg_light: float
    downwind_vmg_medium: float
    downwind_vmg_heavy: float
    downwind_twa: float  # Optimal true wind angle when running, degrees from the wind

    # Reaching (close, beam and broad reaches share one table)
    reach_speed_light: float
    reach_speed_medium: float
    reach_speed_heavy: float

    # Maneuver costs
    tack_time: float
    jibe_time: float
    mark_rounding_time: float

    # Half-angle of the cone a boat cannot sail into, degrees
    no_go_zone_angle: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert profile to dictionary."""
        return asdict(self)


BOAT_CLASS_PRESETS: Dict[str, BoatClassProfile] = {
    profile.name: profile for profile in [
        BoatClassProfile(
            name="Optimist",
            upwind_vmg_light=1.8, upwind_vmg_medium=2.5, upwind_vmg_heavy=2.8, upwind_twa=45,
            downwind_vmg_light=2.0, downwind_vmg_medium=2.8, downwind_vmg_heavy=3.0, downwind_twa=150,
            reach_speed_light=2.5, reach_speed_medium=3.5, reach_speed_heavy=4.0,
            tack_time=12, jibe_time=10, mark_rounding_time=12, no_go_zone_angle=45,
        ),
        BoatClassProfile(
            name="ILCA 4",
            upwind_vmg_light=2.5, upwind_vmg_medium=3.2, upwind_vmg_heavy=3.5, upwind_twa=43,
            downwind_vmg_light=2.8, downwind_vmg_medium=3.8, downwind_vmg_heavy=4.2, downwind_twa=145,
            reach_speed_light=3.5, reach_speed_medium=4.5, reach_speed_heavy=5.0,
            tack_time=10, jibe_time=8, mark_rounding_time=10, no_go_zone_angle=42,
        ),
        BoatClassProfile(
            name="ILCA 6",
            upwind_vmg_light=3.0, upwind_vmg_medium=3.8, upwind_vmg_heavy=4.2, upwind_twa=42,
            downwind_vmg_light=3.2, downwind_vmg_medium=4.2, downwind_vmg_heavy=4.8, downwind_twa=145,
            reach_speed_light=4.0, reach_speed_medium=5.2, reach_speed_heavy=5.8,
            tack_time=9, jibe_time=7, mark_rounding_time=10, no_go_zone_angle=42,
        ),
        BoatClassProfile(
            name="ILCA 7",
            upwind_vmg_light=3.2, upwind_vmg_medium=4.2, upwind_vmg_heavy=4.8, upwind_twa=42,
            downwind_vmg_light=3.5, downwind_vmg_medium=4.5, downwind_vmg_heavy=5.2, downwind_twa=145,
            reach_speed_light=4.5, reach_speed_medium=5.8, reach_speed_heavy=6.5,
            tack_time=8, jibe_time=6, mark_rounding_time=10, no_go_zone_angle=42,
        ),
        BoatClassProfile(
            name="420",
            upwind_vmg_light=2.8, upwind_vmg_medium=3.5, upwind_vmg_heavy=4.0, upwind_twa=43,
            downwind_vmg_light=3.0, downwind_vmg_medium=4.0, downwind_vmg_heavy=4.5, downwind_twa=148,
            reach_speed_light=4.0, reach_speed_medium=5.0, reach_speed_heavy=5.5,
            tack_time=10, jibe_time=8, mark_rounding_time=10, no_go_zone_angle=43,
        ),
    ]
}


def get_boat_class(name: str) -> Optional[BoatClassProfile]:
    """Look up a preset profile by name (case-insensitive)."""
    for preset_name, profile in BOAT_CLASS_PRESETS.items():
        if preset_name.lower() == name.lower():
            return profile
    return None


def list_boat_classes() -> List[str]:
    """Names of the available preset profiles."""
    return list(BOAT_CLASS_PRESETS.keys())
