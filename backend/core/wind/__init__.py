"""
Wind analytics package.

Pattern detection, shift detection and prediction, favored side selection,
and the multi-buoy analytics summary built on top of them.
"""

from .patterns import (
    detect_pattern,
    detect_shifts,
    predict_shifts,
    calculate_favored_side,
)
from .analytics import analyze_weather, calculate_rolling_averages

__all__ = [
    'detect_pattern',
    'detect_shifts',
    'predict_shifts',
    'calculate_favored_side',
    'analyze_weather',
    'calculate_rolling_averages',
]
