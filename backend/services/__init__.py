"""
Services package.

Provides business logic layer between the surrounding application and the core algorithms.

Modules:
    course_service: Course rotation, scaling, movement and start line adjustments
    race_service: Race time estimation from a course and a boat class
    weather_service: Wind pattern analytics over a reading window
"""

from services.course_service import CourseService, CourseState, get_course_service
from services.race_service import RaceTimeService, get_race_time_service
from services.weather_service import WeatherService, get_weather_service

__all__ = [
    'CourseService',
    'CourseState',
    'get_course_service',
    'RaceTimeService',
    'get_race_time_service',
    'WeatherService',
    'get_weather_service',
]
