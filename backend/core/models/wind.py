"""
Wind telemetry and analytics models.

This module defines buoy wind readings and the derived, per-call analytics
results: detected pattern, shift events, shift predictions, favored side and
the multi-buoy dashboard summary.
"""

from dataclasses import dataclass, field, asdict
from datetime import datetime
from enum import Enum
from typing import Optional, List, Dict, Any

import pandas as pd


class WindPatternType(str, Enum):
    """Tactical classification of a wind direction history."""
    STABLE = "stable"
    PERSISTENT = "persistent"
    OSCILLATING = "oscillating"
    OSCILLATING_PERSISTENT = "oscillating_persistent"


@dataclass(frozen=True)
class WindReading:
    """A single wind observation from a buoy."""
    buoy_id: str
    timestamp: datetime
    wind_direction: float  # Degrees, direction the wind blows FROM
    wind_speed: float  # Knots


@dataclass(frozen=True)
class WindPattern:
    """Detected wind pattern over a window of readings."""
    type: WindPatternType
    confidence: float  # 0-1
    median_direction: float  # Degrees
    shift_range: float  # Degrees, twice the largest deviation from the median
    period_minutes: Optional[int]  # Oscillation period, None when not oscillating
    trend_degrees_per_hour: float  # Positive = veering (clockwise)

    @property
    def is_oscillating(self) -> bool:
        return self.type in (WindPatternType.OSCILLATING, WindPatternType.OSCILLATING_PERSISTENT)

    @property
    def is_persistent(self) -> bool:
        return self.type in (WindPatternType.PERSISTENT, WindPatternType.OSCILLATING_PERSISTENT)


@dataclass(frozen=True)
class ShiftEvent:
    """A wind shift detected in the reading history."""
    timestamp: datetime
    direction: float  # Direction after the shift, degrees
    change: float  # Signed change from the previous reference direction, degrees
    type: str  # 'lift' (change > 0) or 'header'
    magnitude: str  # 'minor', 'moderate' or 'major'


@dataclass(frozen=True)
class ShiftPrediction:
    """A predicted upcoming wind shift."""
    expected_direction: str  # 'left' or 'right'
    expected_time_minutes: int
    magnitude_degrees: int
    confidence: float  # 0-1


@dataclass(frozen=True)
class FavoredSideFactors:
    """Inputs that fed the favored side decision."""
    more_wind: str = "equal"  # 'left', 'right' or 'equal'
    next_shift: str = "unknown"  # 'left', 'right' or 'unknown'
    persistent: str = "none"  # 'left', 'right' or 'none'


@dataclass(frozen=True)
class FavoredSideAnalysis:
    """Which side of the course is tactically favored and why."""
    side: str  # 'left', 'right' or 'neutral'
    reason: str
    confidence: float  # 0-1
    factors: FavoredSideFactors = field(default_factory=FavoredSideFactors)


@dataclass(frozen=True)
class CurrentConditions:
    """Latest reading compared against the recent average."""
    direction: float
    speed: float
    direction_delta: float  # Latest direction minus recent mean, degrees
    speed_delta: float  # Latest speed minus recent mean, knots


@dataclass(frozen=True)
class BuoyComparison:
    """Latest wind at one buoy with its speed trend."""
    buoy_id: str
    buoy_name: str
    direction: float
    speed: float
    trend: str  # 'increasing', 'decreasing' or 'stable'


@dataclass(frozen=True)
class WindAnalytics:
    """Complete wind analytics summary for the multi-buoy dashboard."""
    pattern: WindPattern
    favored_side: FavoredSideAnalysis
    shifts: List[ShiftEvent]
    predictions: List[ShiftPrediction]
    current_conditions: CurrentConditions
    buoy_comparison: List[BuoyComparison]

    def to_dict(self) -> Dict[str, Any]:
        """Convert analytics to a nested dictionary with plain string pattern type."""
        data = asdict(self)
        data['pattern']['type'] = self.pattern.type.value
        return data


def readings_to_dataframe(readings: List[WindReading]) -> pd.DataFrame:
    """
    Convert a list of wind readings to a pandas DataFrame sorted by timestamp.

    Args:
        readings: List of WindReading objects

    Returns:
        DataFrame with buoy_id, timestamp, wind_direction and wind_speed columns
    """
    if not readings:
        return pd.DataFrame(columns=['buoy_id', 'timestamp', 'wind_direction', 'wind_speed'])

    df = pd.DataFrame([asdict(reading) for reading in readings])
    return df.sort_values('timestamp', kind='mergesort').reset_index(drop=True)
