"""
Course geometry package.

Transforms (rotate/scale/translate/align to wind), start line tools and the
leg builder. Clean, focused interface with no circular dependencies.
"""

from .transforms import (
    get_pivot,
    rotate_course,
    scale_course,
    translate_course,
    align_to_wind,
)
from .start_line import (
    get_start_line_center,
    get_course_center,
    square_start_line,
    adjust_mark_to_wind,
)
from .legs import build_legs, line_center

__all__ = [
    # Transforms
    'get_pivot',
    'rotate_course',
    'scale_course',
    'translate_course',
    'align_to_wind',

    # Start line
    'get_start_line_center',
    'get_course_center',
    'square_start_line',
    'adjust_mark_to_wind',

    # Legs
    'build_legs',
    'line_center',
]
