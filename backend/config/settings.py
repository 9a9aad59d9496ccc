"""
Application settings and configuration.

This module contains application-specific configuration and defaults.
For algorithmic constants, see core.constants module.
"""

import logging
from typing import Dict, Any

# Import algorithmic constants from core module
from core.constants import (
    UI_MIN_SCALE,
    UI_MAX_SCALE,
    MODEL_MIN_SCALE,
    MODEL_MAX_SCALE,
    MIN_READINGS_FOR_PATTERN,
    DEFAULT_SHIFT_THRESHOLD_DEGREES,
    RECENT_READINGS_WINDOW,
    BUOY_TREND_WINDOW,
    BUOY_TREND_DEADBAND_KNOTS,
    ROLLING_AVERAGE_WINDOW
)
from core.models.course import ScaleMode, StartLineEnd

# App information
APP_NAME = "Race Course Engine"
APP_VERSION = "1.0.0"
APP_DESCRIPTION = "Course geometry, race time estimation and wind analytics for race committees"

# Course control defaults
DEFAULT_SCALE_MODE = ScaleMode.RESIZE_ALL
DEFAULT_START_LINE_FIXED_END = StartLineEnd.COMMITTEE_BOAT
DEFAULT_ROTATION_STEP = 15  # Degrees per rotate button press
DEFAULT_SCALE_STEP_UP = 1.25
DEFAULT_SCALE_STEP_DOWN = 0.8

# Race preview defaults
DEFAULT_WIND_SPEED = 10.0  # Knots
DEFAULT_WIND_DIRECTION = 0.0  # Degrees (North)
DEFAULT_BOAT_CLASS = "ILCA 7"

# Wind reading window supplied by the collector (minutes)
DEFAULT_READING_WINDOW_MINUTES = 60

# Logging configuration
LOGGING_CONFIG = {
    "level": logging.INFO,
    "format": '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    "handlers": [
        logging.StreamHandler(),
    ]
}


# =============== Configuration Classes ===============
# These classes provide typed access to configuration sections

class CourseConfig:
    """Configuration parameters for course transforms."""
    MIN_SCALE = UI_MIN_SCALE
    MAX_SCALE = UI_MAX_SCALE
    MODEL_MIN_SCALE = MODEL_MIN_SCALE  # From core.constants
    MODEL_MAX_SCALE = MODEL_MAX_SCALE  # From core.constants
    SCALE_MODE = DEFAULT_SCALE_MODE
    START_LINE_FIXED_END = DEFAULT_START_LINE_FIXED_END
    ROTATION_STEP = DEFAULT_ROTATION_STEP

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get course configuration as a dictionary."""
        return {
            'min_scale': cls.MIN_SCALE,
            'max_scale': cls.MAX_SCALE,
            'model_min_scale': cls.MODEL_MIN_SCALE,
            'model_max_scale': cls.MODEL_MAX_SCALE,
            'scale_mode': cls.SCALE_MODE.value,
            'start_line_fixed_end': cls.START_LINE_FIXED_END.value,
            'rotation_step': cls.ROTATION_STEP,
        }


class RaceConfig:
    """Configuration parameters for race time estimation."""
    WIND_SPEED = DEFAULT_WIND_SPEED
    WIND_DIRECTION = DEFAULT_WIND_DIRECTION
    BOAT_CLASS = DEFAULT_BOAT_CLASS

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get race configuration as a dictionary."""
        return {
            'wind_speed': cls.WIND_SPEED,
            'wind_direction': cls.WIND_DIRECTION,
            'boat_class': cls.BOAT_CLASS,
        }


class WindAnalyticsConfig:
    """Configuration parameters for wind analytics."""
    MIN_READINGS = MIN_READINGS_FOR_PATTERN  # From core.constants
    SHIFT_THRESHOLD = DEFAULT_SHIFT_THRESHOLD_DEGREES
    RECENT_WINDOW = RECENT_READINGS_WINDOW
    BUOY_TREND_WINDOW = BUOY_TREND_WINDOW
    BUOY_TREND_DEADBAND = BUOY_TREND_DEADBAND_KNOTS
    ROLLING_AVERAGE_WINDOW = ROLLING_AVERAGE_WINDOW
    READING_WINDOW_MINUTES = DEFAULT_READING_WINDOW_MINUTES

    @classmethod
    def as_dict(cls) -> Dict[str, Any]:
        """Get wind analytics configuration as a dictionary."""
        return {
            'min_readings': cls.MIN_READINGS,
            'shift_threshold': cls.SHIFT_THRESHOLD,
            'recent_window': cls.RECENT_WINDOW,
            'buoy_trend_window': cls.BUOY_TREND_WINDOW,
            'buoy_trend_deadband': cls.BUOY_TREND_DEADBAND,
            'rolling_average_window': cls.ROLLING_AVERAGE_WINDOW,
            'reading_window_minutes': cls.READING_WINDOW_MINUTES,
        }


def get_all_config() -> Dict[str, Dict[str, Any]]:
    """Get all configuration sections as a nested dictionary."""
    return {
        'course': CourseConfig.as_dict(),
        'race': RaceConfig.as_dict(),
        'wind_analytics': WindAnalyticsConfig.as_dict(),
    }
