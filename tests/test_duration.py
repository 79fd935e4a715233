"""
Tests for elapsed time between arrival and departure.
"""

import pytest

from korektor.domain.models import ELAPSED_INVALID_INPUT, ELAPSED_ORDER_ERROR, ZERO_DURATION
from korektor.services.duration_service import (
    calculate_elapsed,
    calculate_elapsed_interactive,
    format_duration,
    is_error_sentinel,
)


class TestFormatDuration:

    @pytest.mark.parametrize("seconds, expected", [
        (0, "00:00:00"),
        (59, "00:00:59"),
        (3600, "01:00:00"),
        (30 * 3600 + 15 * 60 + 2, "30:15:02"),
        (200 * 3600, "200:00:00"),
    ])
    def test_format(self, seconds, expected):
        assert format_duration(seconds) == expected

    def test_negative_is_clamped(self):
        assert format_duration(-5) == ZERO_DURATION


class TestCalculateElapsed:

    def test_simple_span(self):
        assert calculate_elapsed("15.03.24 08:00", "15.03.24 10:30") == "02:30:00"

    def test_span_over_a_day(self):
        assert calculate_elapsed("15.03.24 08:00", "16.03.24 14:15:02") == "30:15:02"

    def test_reversed_span_is_zero(self):
        assert calculate_elapsed("15.03.24 10:00", "15.03.24 08:00") == ZERO_DURATION

    def test_equal_instants_are_zero(self):
        assert calculate_elapsed("15.03.24 10:00", "15.03.24 10:00") == ZERO_DURATION

    def test_unparseable_is_zero(self):
        assert calculate_elapsed("yesterday", "15.03.24 10:00") == ZERO_DURATION
        assert calculate_elapsed("15.03.24 10:00", "") == ZERO_DURATION

    def test_month_boundary(self):
        assert calculate_elapsed("29.02.24 23:00", "01.03.24 01:00") == "02:00:00"

    def test_monotonic_in_span(self):
        arrival = "15.03.24 08:00"
        departures = ["15.03.24 08:01", "15.03.24 09:00", "16.03.24 08:00", "20.03.24 08:00"]
        results = [calculate_elapsed(arrival, departure) for departure in departures]

        def seconds(text):
            hours, minutes, secs = (int(part) for part in text.split(":"))
            return hours * 3600 + minutes * 60 + secs

        assert [seconds(r) for r in results] == sorted(seconds(r) for r in results)
        assert len(set(results)) == len(results)


class TestCalculateElapsedInteractive:

    def test_valid_span(self):
        assert calculate_elapsed_interactive("15.03.24 08:00", "15.03.24 10:30") == "02:30:00"

    def test_reversed_span_reports_order_error(self):
        assert calculate_elapsed_interactive("15.03.24 10:00", "15.03.24 08:00") == ELAPSED_ORDER_ERROR

    def test_unparseable_reports_invalid_input(self):
        assert calculate_elapsed_interactive("15.03.24 10:", "15.03.24 12:00") == ELAPSED_INVALID_INPUT

    def test_sentinel_texts(self):
        assert ELAPSED_ORDER_ERROR == "Chyba data"
        assert ELAPSED_INVALID_INPUT == "Neplatný vstup"
        assert is_error_sentinel(ELAPSED_ORDER_ERROR)
        assert is_error_sentinel(ELAPSED_INVALID_INPUT)
        assert not is_error_sentinel("02:30:00")
