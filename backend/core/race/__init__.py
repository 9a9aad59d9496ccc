"""
Race time estimation package.
"""

from .estimator import estimate_race_time, estimate_leg

__all__ = [
    'estimate_race_time',
    'estimate_leg',
]
