"""
Tests for building legs from a rounding sequence.
"""

import pytest

from core.calculations import calculate_distance, calculate_bearing, angle_difference
from core.models.course import Mark, GeoPoint, MarkRole
from core.course.legs import line_center, resolve_waypoints, build_legs


def make_marks():
    """Start line, windward and leeward marks with a separate finish line."""
    return [
        Mark(id="cb", role=MarkRole.START_BOAT, lat=50.000, lng=-1.302, is_start_line=True),
        Mark(id="pin", role=MarkRole.PIN, lat=50.000, lng=-1.298, is_start_line=True),
        Mark(id="M1", role=MarkRole.WINDWARD, lat=50.020, lng=-1.300, name="Windward"),
        Mark(id="M2", role=MarkRole.LEEWARD, lat=50.004, lng=-1.300, name="Leeward"),
        Mark(id="f1", role=MarkRole.FINISH, lat=50.010, lng=-1.301, is_finish_line=True),
        Mark(id="f2", role=MarkRole.FINISH, lat=50.010, lng=-1.299, is_finish_line=True),
    ]


class TestLineCenter:
    """Tests for start and finish line centers."""

    def test_start_line_center(self):
        """Start center is the mean of the flagged start line marks."""
        center = line_center(make_marks())
        assert center.lat == pytest.approx(50.0)
        assert center.lng == pytest.approx(-1.300)

    def test_finish_line_center(self):
        """Finish center is the mean of the flagged finish line marks."""
        center = line_center(make_marks(), finish=True)
        assert center.lat == pytest.approx(50.010)
        assert center.lng == pytest.approx(-1.300)

    def test_no_flagged_marks(self):
        """No flagged marks gives None."""
        assert line_center([m for m in make_marks() if m.id.startswith("M")]) is None


class TestBuildLegs:
    """Tests for leg construction."""

    def test_start_mark_finish(self):
        """start -> M1 -> finish gives two legs measured between the centers."""
        legs = build_legs(["start", "M1", "finish"], make_marks())

        assert len(legs) == 2
        assert legs[0].from_name == "Start"
        assert legs[0].to_name == "Windward"
        assert legs[1].to_name == "Finish"

        assert legs[0].distance == pytest.approx(calculate_distance(50.0, -1.300, 50.020, -1.300))
        assert legs[1].distance == pytest.approx(calculate_distance(50.020, -1.300, 50.010, -1.300))
        assert abs(angle_difference(legs[0].bearing, 0.0)) < 1e-6
        assert legs[1].bearing == pytest.approx(180.0, abs=1e-6)

    def test_laps_repeat_marks(self):
        """A mark appearing several times yields a leg for every occurrence."""
        legs = build_legs(["start", "M1", "M2", "M1", "M2", "finish"], make_marks())

        assert len(legs) == 5
        assert [leg.to_name for leg in legs] == ["Windward", "Leeward", "Windward", "Leeward", "Finish"]
        assert legs[1].distance == pytest.approx(legs[3].distance)
        assert legs[0].distance != pytest.approx(legs[2].distance)

    @pytest.mark.parametrize("sequence", [[], ["start"], ["M1"]])
    def test_fewer_than_two_waypoints(self, sequence):
        """Fewer than two waypoints produce no legs."""
        assert build_legs(sequence, make_marks()) == []

    def test_unknown_token_skipped(self):
        """Unknown mark ids are skipped and the remaining waypoints connected."""
        legs = build_legs(["start", "ghost", "M1"], make_marks())
        assert len(legs) == 1
        assert legs[0].to_name == "Windward"

    def test_precomputed_start_center(self):
        """A supplied start line center overrides the flagged marks."""
        center = GeoPoint(49.99, -1.300)
        legs = build_legs(["start", "M1"], make_marks(), start_line_center=center)
        assert legs[0].from_point == center
        assert legs[0].distance == pytest.approx(calculate_distance(49.99, -1.300, 50.020, -1.300))

    def test_finish_without_finish_line_is_skipped(self):
        """A finish token with no finish line marks cannot be resolved."""
        marks = [m for m in make_marks() if not m.is_finish_line]
        legs = build_legs(["start", "M1", "finish"], marks)
        assert len(legs) == 1

    def test_name_falls_back_to_id(self):
        """Marks without a name are listed by id."""
        marks = make_marks() + [Mark(id="X9", role=MarkRole.OTHER, lat=50.01, lng=-1.31)]
        legs = build_legs(["M1", "X9"], marks)
        assert legs[0].to_name == "X9"
        assert legs[0].bearing == pytest.approx(calculate_bearing(50.020, -1.300, 50.01, -1.31))

    def test_waypoints_in_order(self):
        """Waypoints keep sequence order."""
        names = [name for name, _ in resolve_waypoints(["start", "M2", "M1", "finish"], make_marks())]
        assert names == ["Start", "Leeward", "Windward", "Finish"]
