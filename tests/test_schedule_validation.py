"""Schedule field validators."""

from __future__ import annotations

import pytest

from hub_app.api_client import PriceLevel, TimeWindow, Weekday
from hub_app.validation import Invalid, Valid, days, hours, naive_time, price_level, price_level_temps
from hub_app.validation.schedule import INVALID_TIME


def test_price_level() -> None:
    assert price_level("VeryCheap") == Valid(PriceLevel.VERY_CHEAP)
    assert price_level("Expensive") == Valid(PriceLevel.EXPENSIVE)
    assert price_level("") == Invalid("Price level is required")
    assert price_level(None) == Invalid("Price level is required")
    assert price_level("Free") == Invalid("Unknown price level")


def test_days_are_uppercased_and_deduplicated() -> None:
    assert days(["MON", "mon", "TUE"]) == Valid([Weekday.MON, Weekday.TUE])
    assert days(["sun", "Fri"]) == Valid([Weekday.SUN, Weekday.FRI])


def test_days_require_one_known_day() -> None:
    assert days([]) == Invalid("Minimum one day is required")
    assert days(["MON", "FUNDAY"]) == Invalid("Unknown weekday")


@pytest.mark.parametrize("raw", ["00:00", "09:05", "23:59"])
def test_naive_time_accepts_24h_clock(raw: str) -> None:
    assert naive_time(raw) == Valid(raw)


@pytest.mark.parametrize("raw", ["9:00", "24:00", "12:60", "25:00", "12-30", "12:3a", "12:30:00", "", "１２:３０"])
def test_naive_time_rejects(raw: str) -> None:
    assert naive_time(raw) == Invalid(INVALID_TIME)


def test_hours_pairs_windows() -> None:
    result = hours(["06:00", "17:30"], ["08:00", "22:00"])

    assert result == Valid([TimeWindow("06:00", "08:00"), TimeWindow("17:30", "22:00")])


def test_hours_reports_first_bad_time() -> None:
    assert hours(["9:00"], ["10:00"]) == Invalid(INVALID_TIME)
    assert hours(["09:00"], ["25:00"]) == Invalid(INVALID_TIME)


def test_hours_rejects_mismatched_or_empty_lists() -> None:
    assert hours(["06:00", "07:00"], ["08:00"]) == Invalid("Invalid time windows")
    assert hours([], []) == Invalid("Invalid time windows")
    assert hours(["06:00"], []) == Invalid("Invalid time windows")


def test_hours_accepts_window_ending_before_it_starts() -> None:
    assert hours(["22:00"], ["06:00"]) == Valid([TimeWindow("22:00", "06:00")])


def test_price_level_temps_skip_blank_levels() -> None:
    raw = {
        PriceLevel.VERY_CHEAP: "23",
        PriceLevel.CHEAP: "21.5",
        PriceLevel.NORMAL: "",
        PriceLevel.EXPENSIVE: None,
        PriceLevel.VERY_EXPENSIVE: "  ",
    }

    assert price_level_temps(raw) == Valid({PriceLevel.VERY_CHEAP: 23.0, PriceLevel.CHEAP: 21.5})


def test_price_level_temps_require_one_level() -> None:
    assert price_level_temps({level: None for level in PriceLevel}) == Invalid(
        "Must define temperature for at least one price level"
    )


@pytest.mark.parametrize("value", ["hot", "-1", "101", "inf"])
def test_price_level_temps_reject_bad_values(value: str) -> None:
    assert price_level_temps({PriceLevel.NORMAL: value}) == Invalid("Invalid temperature")
