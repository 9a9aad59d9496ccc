"""
Tests for start line measurements and single mark placement.
"""

import pytest

from core.calculations import calculate_bearing, calculate_distance_meters, angle_difference
from core.models.course import Mark, GeoPoint, MarkRole, StartLineEnd
from core.course.start_line import (
    get_start_line_center,
    get_course_center,
    start_line_length_meters,
    start_line_wind_deviation,
    square_start_line,
    adjust_mark_to_wind,
)


def make_line(boat=(45.0, 7.004), pin=(45.001, 7.0)):
    """Committee boat and pin of a slightly skewed start line."""
    return [
        Mark(id="cb", role=MarkRole.START_BOAT, lat=boat[0], lng=boat[1], is_start_line=True),
        Mark(id="pin", role=MarkRole.PIN, lat=pin[0], lng=pin[1], is_start_line=True),
        Mark(id="w", role=MarkRole.WINDWARD, lat=45.02, lng=7.002),
    ]


def by_id(marks):
    return {mark.id: mark for mark in marks}


class TestCenters:
    """Tests for start line and course centers."""

    def test_start_line_midpoint(self):
        """Both ends present gives the midpoint."""
        center = get_start_line_center(make_line())
        assert center.lat == pytest.approx(45.0005)
        assert center.lng == pytest.approx(7.002)

    def test_single_end(self):
        """With only one end, that end is the center."""
        marks = [m for m in make_line() if m.id != "pin"]
        assert get_start_line_center(marks) == GeoPoint(45.0, 7.004)

    def test_no_start_line(self):
        """No start line marks gives None."""
        marks = [m for m in make_line() if m.id == "w"]
        assert get_start_line_center(marks) is None

    def test_course_center_is_mean(self):
        """Course center is the mean of all mark positions."""
        center = get_course_center(make_line())
        assert center.lat == pytest.approx((45.0 + 45.001 + 45.02) / 3)
        assert center.lng == pytest.approx((7.004 + 7.0 + 7.002) / 3)

    def test_empty_course_center(self):
        """An empty course centers on (0, 0)."""
        assert get_course_center([]) == GeoPoint(0.0, 0.0)


class TestLineMeasurements:
    """Tests for start line length and deviation."""

    def test_length_matches_geodesic(self):
        """Line length is the geodesic distance between the ends."""
        expected = calculate_distance_meters(45.0, 7.004, 45.001, 7.0)
        assert start_line_length_meters(make_line()) == pytest.approx(expected)

    def test_length_without_pin(self):
        """Length is None without both ends."""
        assert start_line_length_meters(make_line()[:1]) is None

    def test_deviation_of_square_line_is_zero(self):
        """An east-west line is square to a northerly wind."""
        marks = make_line(boat=(45.0, 7.004), pin=(45.0, 7.0))
        assert start_line_wind_deviation(marks, 0) == pytest.approx(0.0, abs=0.1)


class TestSquareStartLine:
    """Tests for squaring the start line to the wind."""

    @pytest.mark.parametrize("wind", [0, 10, 95, 250])
    def test_committee_boat_fixed(self, wind):
        """The pin moves so the line is square and keeps its length."""
        marks = make_line()
        length = start_line_length_meters(marks)
        squared = square_start_line(marks, wind)
        result = by_id(squared)

        assert result["cb"] == by_id(marks)["cb"]
        assert start_line_length_meters(squared) == pytest.approx(length, rel=1e-6)
        assert start_line_wind_deviation(squared, wind) == pytest.approx(0.0, abs=0.1)

    def test_pin_fixed(self):
        """With the pin fixed the committee boat moves."""
        marks = make_line()
        squared = square_start_line(marks, 20, fixed_end=StartLineEnd.PIN)
        assert by_id(squared)["pin"] == by_id(marks)["pin"]
        assert by_id(squared)["cb"] != by_id(marks)["cb"]
        assert start_line_wind_deviation(squared, 20) == pytest.approx(0.0, abs=0.1)

    def test_keeps_closer_side(self):
        """The free end stays on the same side of the fixed end."""
        marks = make_line()
        squared = by_id(square_start_line(marks, 0))
        bearing = calculate_bearing(squared["cb"].lat, squared["cb"].lng,
                                    squared["pin"].lat, squared["pin"].lng)
        assert abs(angle_difference(bearing, 270)) < 0.1

    def test_other_marks_untouched(self):
        """Marks off the start line do not move."""
        marks = make_line()
        assert by_id(square_start_line(marks, 30))["w"] is by_id(marks)["w"]

    def test_missing_end_is_noop(self):
        """Without a pin the marks are returned unchanged."""
        marks = make_line()[:1]
        assert square_start_line(marks, 30) == marks


class TestAdjustMarkToWind:
    """Tests for placing a mark relative to the wind."""

    def test_dead_upwind(self):
        """Zero degrees to the wind puts the mark directly upwind at the same distance."""
        reference = GeoPoint(45.0, 7.0)
        mark = Mark(id="w", role=MarkRole.WINDWARD, lat=45.01, lng=7.005)
        distance = calculate_distance_meters(45.0, 7.0, mark.lat, mark.lng)

        moved, original_bearing = adjust_mark_to_wind(mark, reference, 90, 0)

        assert original_bearing == pytest.approx(calculate_bearing(45.0, 7.0, 45.01, 7.005))
        assert calculate_distance_meters(45.0, 7.0, moved.lat, moved.lng) == pytest.approx(distance, abs=1e-3)
        assert calculate_bearing(45.0, 7.0, moved.lat, moved.lng) == pytest.approx(90, abs=0.1)

    def test_offset_angle(self):
        """A positive offset rotates the target bearing clockwise from the wind."""
        reference = GeoPoint(45.0, 7.0)
        mark = Mark(id="o", role=MarkRole.OFFSET, lat=45.005, lng=7.0)
        moved, _ = adjust_mark_to_wind(mark, reference, 350, 20)
        assert calculate_bearing(45.0, 7.0, moved.lat, moved.lng) == pytest.approx(10, abs=0.1)
