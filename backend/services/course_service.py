"""
Course service.

This module provides business logic for course adjustments (rotate, scale,
move, align to wind, square the start line), used by the course controls.
"""

import logging
from dataclasses import dataclass
from typing import List, Optional, Tuple

from core.course.transforms import rotate_course, scale_course, translate_course, align_to_wind
from core.course.start_line import square_start_line, start_line_wind_deviation, start_line_length_meters
from core.models.course import Mark, Course, ScaleMode, StartLineEnd
from config.settings import CourseConfig

logger = logging.getLogger(__name__)


@dataclass
class CourseAdjustmentParams:
    """Parameters for course adjustments."""
    scale_mode: ScaleMode = CourseConfig.SCALE_MODE
    min_scale: float = CourseConfig.MIN_SCALE
    max_scale: float = CourseConfig.MAX_SCALE
    start_line_fixed_end: StartLineEnd = CourseConfig.START_LINE_FIXED_END


@dataclass
class CourseState:
    """Marks and course descriptor after an adjustment."""
    marks: List[Mark]
    course: Course


class CourseService:
    """
    Service for course geometry adjustments.

    Every method returns a new CourseState; the inputs are never modified.
    """

    def __init__(self, params: Optional[CourseAdjustmentParams] = None):
        self.params = params or CourseAdjustmentParams()

    def rotate(self, marks: List[Mark], course: Course, delta_degrees: float) -> CourseState:
        """Rotate the course by a number of degrees (positive is clockwise)."""
        new_marks, new_course = rotate_course(marks, course, delta_degrees)
        logger.info(f"Rotated course by {delta_degrees:+.1f}° to {new_course.rotation:.1f}°")
        return CourseState(new_marks, new_course)

    def set_rotation(self, marks: List[Mark], course: Course, rotation: float) -> CourseState:
        """Rotate the course to an absolute rotation value."""
        return self.rotate(marks, course, rotation - course.rotation)

    def scale(self, marks: List[Mark], course: Course, factor: float,
              mode: Optional[ScaleMode] = None) -> CourseState:
        """Scale the course by a factor using the configured start line mode."""
        new_marks, new_course = scale_course(
            marks, course, factor,
            mode=mode or self.params.scale_mode,
            min_scale=self.params.min_scale,
            max_scale=self.params.max_scale
        )
        logger.info(f"Scaled course from {course.scale:.2f} to {new_course.scale:.2f}")
        return CourseState(new_marks, new_course)

    def set_scale(self, marks: List[Mark], course: Course, scale: float,
                  mode: Optional[ScaleMode] = None) -> CourseState:
        """Scale the course to an absolute scale value."""
        return self.scale(marks, course, scale / course.scale, mode=mode)

    def move(self, marks: List[Mark], course: Course, delta_lat: float, delta_lng: float) -> CourseState:
        """Move the whole course."""
        new_marks, new_course = translate_course(marks, course, delta_lat, delta_lng)
        return CourseState(new_marks, new_course)

    def align_to_wind(self, marks: List[Mark], course: Course, wind_direction: float) -> CourseState:
        """Rotate the course so the start line is square to the wind."""
        new_marks, new_course = align_to_wind(marks, course, wind_direction)
        return CourseState(new_marks, new_course)

    def square_start_line(self, marks: List[Mark], course: Course, wind_direction: float,
                          fixed_end: Optional[StartLineEnd] = None) -> CourseState:
        """Square the start line to the wind, moving only one end."""
        new_marks = square_start_line(marks, wind_direction, fixed_end or self.params.start_line_fixed_end)
        return CourseState(new_marks, course)

    @staticmethod
    def start_line_summary(marks: List[Mark], wind_direction: float) -> Tuple[Optional[float], Optional[float]]:
        """
        Start line length and deviation from square.

        Returns:
            (length in meters, signed deviation in degrees), each None without a full start line
        """
        return start_line_length_meters(marks), start_line_wind_deviation(marks, wind_direction)


def get_course_service(params: Optional[CourseAdjustmentParams] = None) -> CourseService:
    """
    Get a CourseService instance.

    Returns:
        CourseService instance
    """
    return CourseService(params)
