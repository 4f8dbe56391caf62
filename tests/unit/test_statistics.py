"""Tests for trial statistics helpers."""

from __future__ import annotations

import math
from datetime import date

from fce_synthesis.statistics import (
    average,
    bar_height,
    bilateral_deficiency,
    calculate_age,
    coefficient_of_variation,
    parse_date,
    raw_deficiency,
    trial_stats,
    valid_trials,
)
from tests.fakes.fake_records import make_test


class TestValidTrials:
    def test_drops_zero_negative_and_non_numeric(self) -> None:
        assert valid_trials([10, 0, -3, None, "12", True, math.nan, 7.5]) == [10.0, 7.5]


class TestAverage:
    def test_empty_is_zero(self) -> None:
        assert average([]) == 0

    def test_ignores_zero_trials(self) -> None:
        assert average([10, 0, 20]) == 15

    def test_rounds_to_two_decimals(self) -> None:
        assert average([1, 1, 2]) == 1.33


class TestCoefficientOfVariation:
    def test_identical_trials(self) -> None:
        assert coefficient_of_variation([10, 10, 10]) == 0

    def test_population_standard_deviation(self) -> None:
        # mean 100, population sd 8
        assert coefficient_of_variation([92, 108]) == 8

    def test_no_data(self) -> None:
        assert coefficient_of_variation([None, 0]) == 0


class TestDeficiency:
    def test_equal_sides(self) -> None:
        assert bilateral_deficiency(50, 50) == 0

    def test_half_strength(self) -> None:
        assert bilateral_deficiency(80, 40) == 50

    def test_missing_side_is_zero(self) -> None:
        assert bilateral_deficiency(0, 40) == 0

    def test_one_decimal(self) -> None:
        assert bilateral_deficiency(100, 120) == 16.7

    def test_raw_deficiency_unrounded(self) -> None:
        assert raw_deficiency(100, 120) == 20 / 120 * 100
        assert raw_deficiency(0, 0) == 0


class TestBarHeight:
    def test_linear_scale(self) -> None:
        assert bar_height(5, 10) == 50
        assert bar_height(5, 10, max_px=200) == 100

    def test_negative_clamps(self) -> None:
        assert bar_height(-3, 10) == 0

    def test_zero_max(self) -> None:
        assert bar_height(5, 0) == 0


class TestDates:
    def test_parse_formats(self) -> None:
        assert parse_date("1980-06-15") == date(1980, 6, 15)
        assert parse_date("06/15/1980") == date(1980, 6, 15)
        assert parse_date("2026-03-02T10:00:00Z") == date(2026, 3, 2)
        assert parse_date("not a date") is None
        assert parse_date(None) is None

    def test_age_before_and_after_birthday(self) -> None:
        assert calculate_age("1980-06-15", date(2026, 3, 2)) == 45
        assert calculate_age("1980-06-15", date(2026, 7, 1)) == 46

    def test_unparseable_age(self) -> None:
        assert calculate_age("", date(2026, 3, 2)) is None


class TestTrialStats:
    def test_grip_scenario(self) -> None:
        stats = trial_stats(make_test("Grip", left=(92, 108), right=(110.4, 129.6)))
        assert stats.left_average == 100
        assert stats.right_average == 120
        assert stats.left_cv == 8
        assert stats.right_cv == 8
        assert stats.deficiency == 16.7
        assert stats.is_bilateral is True
        assert stats.mean_average == 110

    def test_unilateral(self) -> None:
        stats = trial_stats(make_test("Lumbar Flexion", left=(48, 49, 50)))
        assert stats.is_bilateral is False
        assert stats.has_data is True
        assert stats.deficiency == 0

    def test_no_data(self) -> None:
        stats = trial_stats(make_test("Empty"))
        assert stats.has_data is False
        assert stats.mean_average == 0
