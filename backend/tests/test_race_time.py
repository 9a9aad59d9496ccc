"""
Tests for VMG race time estimation.
"""

import math

import pytest

from core.models.boat_class import BoatClassProfile, BOAT_CLASS_PRESETS, get_boat_class, list_boat_classes
from core.models.course import GeoPoint
from core.models.race import Leg, legs_to_dataframe
from core.race.estimator import (
    UPWIND, CLOSE_REACH, BEAM_REACH, BROAD_REACH, DOWNWIND,
    determine_point_of_sail,
    get_wind_category,
    get_vmg,
    get_maneuver_cosine,
    calculate_sailing_distance_and_maneuvers,
    estimate_leg,
    estimate_race_time,
)


def make_profile(**overrides):
    """Round-number profile that keeps expected times easy to derive."""
    values = dict(
        name="Test",
        upwind_vmg_light=2.0, upwind_vmg_medium=3.0, upwind_vmg_heavy=4.0, upwind_twa=45,
        downwind_vmg_light=3.0, downwind_vmg_medium=4.0, downwind_vmg_heavy=5.0, downwind_twa=150,
        reach_speed_light=4.0, reach_speed_medium=5.0, reach_speed_heavy=6.0,
        tack_time=10, jibe_time=8, mark_rounding_time=12, no_go_zone_angle=40,
    )
    values.update(overrides)
    return BoatClassProfile(**values)


def make_leg(distance, bearing, name="A", to_name="B"):
    return Leg(from_name=name, to_name=to_name, from_point=GeoPoint(0.0, 0.0),
               to_point=GeoPoint(0.0, 0.0), distance=distance, bearing=bearing)


class TestClassification:
    """Tests for point of sail and wind band classification."""

    @pytest.mark.parametrize("twa,expected", [
        (0, UPWIND), (39.9, UPWIND), (40, CLOSE_REACH), (59.9, CLOSE_REACH),
        (60, BEAM_REACH), (109.9, BEAM_REACH), (110, BROAD_REACH),
        (149.9, BROAD_REACH), (150, DOWNWIND), (180, DOWNWIND),
    ])
    def test_point_of_sail(self, twa, expected):
        """True wind angle bands map to points of sail."""
        assert determine_point_of_sail(twa, 40) == expected

    @pytest.mark.parametrize("speed,expected", [
        (0, "light"), (8, "light"), (8.1, "medium"), (14, "medium"), (14.1, "heavy"), (30, "heavy"),
    ])
    def test_wind_category(self, speed, expected):
        """Wind speeds map to light, medium and heavy bands."""
        assert get_wind_category(speed) == expected

    def test_reaches_share_reach_table(self):
        """All three reaches read the reach speed table."""
        profile = make_profile()
        for point in (CLOSE_REACH, BEAM_REACH, BROAD_REACH):
            assert get_vmg(profile, point, "heavy") == 6.0
        assert get_vmg(profile, UPWIND, "light") == 2.0
        assert get_vmg(profile, DOWNWIND, "medium") == 4.0

    @pytest.mark.parametrize("value", [0.0, -1.5])
    def test_non_positive_vmg_falls_back(self, value):
        """A zero or negative table entry is replaced by the 3 kn fallback."""
        profile = make_profile(upwind_vmg_medium=value)
        assert get_vmg(profile, UPWIND, "medium") == 3.0
        assert get_vmg(profile, UPWIND, "heavy") == 4.0


class TestSailingDistance:
    """Tests for sailed distance and maneuver counts."""

    def test_upwind_stretch_and_tacks(self):
        """A 1 nm beat at 45° sails √2 nm with at least two tacks."""
        distance, tacks = calculate_sailing_distance_and_maneuvers(1.0, UPWIND, make_profile())
        assert distance == pytest.approx(math.sqrt(2))
        assert tacks == 8

    def test_short_beat_minimum_tacks(self):
        """Even a very short beat needs two tacks."""
        _, tacks = calculate_sailing_distance_and_maneuvers(0.05, UPWIND, make_profile())
        assert tacks == 2

    def test_downwind_stretch_and_jibes(self):
        """A 1 nm run at 150° from the wind sails 1/cos(30°) nm."""
        distance, jibes = calculate_sailing_distance_and_maneuvers(1.0, DOWNWIND, make_profile())
        assert distance == pytest.approx(1 / math.cos(math.radians(30)))
        assert jibes == 4

    def test_reach_sails_rhumb_line(self):
        """Reaches sail the straight line without maneuvers."""
        assert calculate_sailing_distance_and_maneuvers(1.3, BEAM_REACH, make_profile()) == (1.3, 0)

    def test_upwind_cosine_floor(self):
        """A wide tacking angle is floored at cos = 0.5."""
        profile = make_profile(upwind_twa=70)
        assert get_maneuver_cosine(profile, UPWIND) == 0.5
        distance, _ = calculate_sailing_distance_and_maneuvers(1.0, UPWIND, profile)
        assert distance == pytest.approx(2.0)

    def test_downwind_cosine_floor(self):
        """A deep jibing angle is floored at cos = 0.7."""
        assert get_maneuver_cosine(make_profile(downwind_twa=120), DOWNWIND) == 0.7

    def test_zero_distance(self):
        """A zero-length leg sails nothing and needs no maneuvers."""
        assert calculate_sailing_distance_and_maneuvers(0.0, UPWIND, make_profile()) == (0.0, 0)


class TestEstimateLeg:
    """Tests for single leg estimates."""

    def test_first_upwind_leg(self):
        """First leg: sailing time plus tacks, no rounding."""
        leg = estimate_leg(make_leg(1.0, 0), 0, make_profile(), 10, 0)
        assert leg.point_of_sail == UPWIND
        assert leg.vmg == 3.0
        assert leg.boat_speed == pytest.approx(3.0 / math.cos(math.radians(45)))
        assert leg.tacks_or_jibes == 8
        assert leg.leg_time_seconds == pytest.approx(1200 + 80)

    def test_later_leg_pays_rounding(self):
        """Legs after the first include one mark rounding."""
        leg = estimate_leg(make_leg(1.0, 90), 1, make_profile(), 10, 0)
        assert leg.point_of_sail == BEAM_REACH
        assert leg.leg_time_seconds == pytest.approx(720 + 12)

    def test_zero_distance_leg(self):
        """A zero-distance leg costs nothing."""
        leg = estimate_leg(make_leg(0.0, 0), 3, make_profile(), 10, 0)
        assert leg.leg_time_seconds == 0.0
        assert leg.tacks_or_jibes == 0

    def test_wind_angle_folded(self):
        """Leg bearing 200 with wind from 0 is 160° off the wind."""
        leg = estimate_leg(make_leg(1.0, 200), 0, make_profile(), 10, 0)
        assert leg.wind_angle == pytest.approx(160)
        assert leg.point_of_sail == DOWNWIND

    def test_zero_reach_speed_has_finite_time(self):
        """A profile with no reach speed still estimates at the fallback speed."""
        leg = estimate_leg(make_leg(1.0, 90), 0, make_profile(reach_speed_medium=0.0), 10, 0)
        assert leg.vmg == 3.0
        assert leg.leg_time_seconds == pytest.approx(1200)


class TestEstimateRaceTime:
    """Tests for whole course estimates."""

    def test_windward_leeward_total(self):
        """Total is the leg times plus one finishing rounding."""
        legs = [make_leg(1.0, 0, "Start", "Windward"), make_leg(1.0, 180, "Windward", "Finish")]
        estimate = estimate_race_time(legs, make_profile(), 10, 0)

        upwind = 1200 + 8 * 10
        downwind = 900 + 4 * 8 + 12
        assert estimate.legs[0].leg_time_seconds == pytest.approx(upwind)
        assert estimate.legs[1].leg_time_seconds == pytest.approx(downwind)
        assert estimate.total_time_seconds == pytest.approx(upwind + downwind + 12)
        assert estimate.total_time_formatted == "37m 16s"
        assert estimate.total_distance_nm == pytest.approx(2.0)
        assert estimate.total_sailing_distance_nm == pytest.approx(
            math.sqrt(2) + 1 / math.cos(math.radians(30))
        )
        assert estimate.boat_class_name == "Test"

    def test_single_leg_total(self):
        """One leg: leg time plus the finishing rounding."""
        estimate = estimate_race_time([make_leg(1.0, 90)], make_profile(), 10, 0)
        assert estimate.total_time_seconds == pytest.approx(720 + 12)

    def test_long_race_formats_hours(self):
        """Races over an hour format as hours and minutes."""
        estimate = estimate_race_time([make_leg(10.0, 90)], make_profile(), 10, 0)
        assert estimate.total_time_formatted == "2h 0m"

    def test_no_legs(self):
        """No legs gives an empty zero estimate."""
        estimate = estimate_race_time([], make_profile(), 10, 0)
        assert estimate.legs == []
        assert estimate.total_time_seconds == 0.0
        assert estimate.total_time_formatted == "0m 0s"

    def test_more_wind_is_not_slower(self):
        """Moving up a wind band never increases the estimate."""
        legs = [make_leg(1.0, 0), make_leg(1.0, 180), make_leg(0.8, 90)]
        profile = make_profile()
        times = [estimate_race_time(legs, profile, speed, 0).total_time_seconds for speed in (5, 10, 20)]
        assert times[0] >= times[1] >= times[2]

    def test_preset_estimate(self):
        """Every preset produces a positive estimate on a windward-leeward course."""
        legs = [make_leg(1.0, 5), make_leg(1.0, 185)]
        for name in list_boat_classes():
            estimate = estimate_race_time(legs, get_boat_class(name), 12, 0)
            assert estimate.total_time_seconds > 0

    def test_legs_dataframe(self):
        """Per-leg estimates tabulate one row per leg."""
        estimate = estimate_race_time([make_leg(1.0, 0), make_leg(1.0, 180)], make_profile(), 10, 0)
        df = legs_to_dataframe(estimate)
        assert len(df) == 2
        assert list(df['point_of_sail']) == [UPWIND, DOWNWIND]
        assert df['leg_time_seconds'].sum() == pytest.approx(estimate.total_time_seconds - 12)

    def test_empty_dataframe(self):
        """No legs tabulate to an empty frame."""
        assert legs_to_dataframe(estimate_race_time([], make_profile(), 10, 0)).empty


class TestBoatClassPresets:
    """Tests for the preset boat classes."""

    def test_lookup_is_case_insensitive(self):
        """Preset lookup ignores case."""
        assert get_boat_class("ilca 7") is BOAT_CLASS_PRESETS["ILCA 7"]

    def test_unknown_class(self):
        """Unknown names return None."""
        assert get_boat_class("Moth") is None

    def test_preset_names(self):
        """The youth and Olympic dinghy presets are available."""
        assert set(list_boat_classes()) >= {"Optimist", "ILCA 4", "ILCA 6", "ILCA 7", "420"}
