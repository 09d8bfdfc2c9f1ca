"""Unit tests for WPM clamping and interval conversion.

WHY: Every WPM value in the program passes through clamp_wpm(). It must
correct any input silently and never raise.
"""

import math

import pytest

from rsvp_reader.config import (
    DEFAULT_WPM,
    MAX_WPM,
    MIN_WPM,
    clamp_wpm,
    interval_ms_for_wpm,
)


class TestClampWpm:
    """Out-of-range values clamp to the nearest bound."""

    @pytest.mark.parametrize("value, expected", [
        (30, 50),
        (1500, 1200),
        (50, 50),
        (1200, 1200),
        (300, 300),
        (-10, 50),
        (0, 50),
        (float("inf"), 1200),
        (float("-inf"), 50),
        (449.6, 450),
        ("450", 450),
        (" 600 ", 600),
        ("9999", 1200),
    ])
    def test_clamps(self, value, expected):
        assert clamp_wpm(value) == expected

    @pytest.mark.parametrize("value", [None, "fast", "", float("nan"), [], {}, True])
    def test_non_numeric_falls_back_to_default(self, value):
        assert clamp_wpm(value) == DEFAULT_WPM

    def test_result_is_int(self):
        assert isinstance(clamp_wpm(333.3), int)

    def test_default_within_bounds(self):
        assert MIN_WPM <= DEFAULT_WPM <= MAX_WPM


class TestInterval:
    def test_300_wpm_is_200_ms(self):
        assert interval_ms_for_wpm(300) == 200.0

    def test_bounds(self):
        assert interval_ms_for_wpm(MIN_WPM) == 1200.0
        assert interval_ms_for_wpm(MAX_WPM) == 50.0

    def test_out_of_range_uses_clamped_rate(self):
        assert interval_ms_for_wpm(10_000) == 50.0
        assert math.isclose(interval_ms_for_wpm(10), 1200.0)
