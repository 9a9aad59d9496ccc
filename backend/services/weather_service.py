"""
Weather analysis service.

This module provides business logic for the wind analytics dashboard: it
trims the reading window handed over by the collector and runs the analytics.
"""

import logging
from datetime import timedelta
from typing import Dict, List, Optional, Tuple

from core.models.wind import WindReading, WindAnalytics
from core.wind.analytics import analyze_weather, calculate_rolling_averages
from core.validation import validate_wind_readings
from config.settings import WindAnalyticsConfig

logger = logging.getLogger(__name__)


class WeatherService:
    """
    Service for wind analytics.

    Stateless: a scheduler outside the engine collects buoy readings and
    calls ``analyze`` with each fresh window.
    """

    def __init__(self, window_minutes: float = WindAnalyticsConfig.READING_WINDOW_MINUTES):
        self.window_minutes = window_minutes

    def recent_window(self, readings: List[WindReading]) -> List[WindReading]:
        """Readings within ``window_minutes`` of the newest reading, sorted by time."""
        ordered = validate_wind_readings(readings)
        if not ordered:
            return ordered

        cutoff = ordered[-1].timestamp - timedelta(minutes=self.window_minutes)
        return [r for r in ordered if r.timestamp >= cutoff]

    def analyze(self, readings: List[WindReading],
                buoy_names: Optional[Dict[str, str]] = None) -> WindAnalytics:
        """
        Analyze the recent reading window.

        Args:
            readings: Readings from one or more buoys
            buoy_names: Optional mapping of buoy id to display name

        Returns:
            WindAnalytics summary
        """
        window = self.recent_window(readings)
        analytics = analyze_weather(window, buoy_names)
        logger.info(f"Wind analytics over {len(window)} readings: {analytics.pattern.type.value} "
                    f"(confidence {analytics.pattern.confidence:.2f}), favored {analytics.favored_side.side}")
        return analytics

    @staticmethod
    def rolling_averages(readings: List[WindReading],
                         buoy_id: str) -> Tuple[Optional[float], Optional[float]]:
        """Rolling direction/speed averages for one buoy's most recent readings."""
        buoy_readings = [r for r in validate_wind_readings(readings) if r.buoy_id == buoy_id]
        return calculate_rolling_averages(buoy_readings, WindAnalyticsConfig.ROLLING_AVERAGE_WINDOW)


def get_weather_service() -> WeatherService:
    """
    Get a WeatherService instance.

    Returns:
        WeatherService instance
    """
    return WeatherService()
