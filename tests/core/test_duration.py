# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Tests for configuration duration parsing."""

from datetime import timedelta

import pytest

from staticfly.core.duration import duration_seconds, parse_duration


class TestParseDuration:
    def test_int_defaults_to_seconds(self):
        assert parse_duration(90) == timedelta(seconds=90)

    def test_float_defaults_to_seconds(self):
        assert parse_duration(1.5) == timedelta(seconds=1.5)

    def test_timedelta_passthrough(self):
        value = timedelta(hours=2)
        assert parse_duration(value) is value

    def test_string_without_unit_is_seconds(self):
        assert parse_duration("45") == timedelta(seconds=45)

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [
            ("250ms", timedelta(milliseconds=250)),
            ("30s", timedelta(seconds=30)),
            ("5m", timedelta(minutes=5)),
            ("2h", timedelta(hours=2)),
            ("7d", timedelta(days=7)),
            ("15us", timedelta(microseconds=15)),
            ("3000ns", timedelta(microseconds=3)),
            ("10S", timedelta(seconds=10)),
        ],
    )
    def test_unit_suffix(self, raw, expected):
        assert parse_duration(raw) == expected

    def test_iso_8601(self):
        assert parse_duration("PT1M30S") == timedelta(minutes=1, seconds=30)
        assert parse_duration("P1DT2H") == timedelta(days=1, hours=2)

    def test_negative_iso_8601(self):
        assert parse_duration("-PT10S") == timedelta(seconds=-10)

    def test_custom_default_unit(self):
        assert parse_duration(3, default_unit="m") == timedelta(minutes=3)

    @pytest.mark.parametrize("raw", ["99999999999d", float("inf"), 10**20, "P99999999999D"])
    def test_out_of_range_values(self, raw):
        with pytest.raises(ValueError, match="out of range"):
            parse_duration(raw)

    @pytest.mark.parametrize("raw", ["soon", "10 minutes", "5x", "PT", "", True])
    def test_invalid_values(self, raw):
        with pytest.raises(ValueError):
            parse_duration(raw)


class TestDurationSeconds:
    def test_whole_seconds(self):
        assert duration_seconds(timedelta(minutes=2)) == 120

    def test_fraction_is_dropped(self):
        assert duration_seconds(timedelta(seconds=59, milliseconds=999)) == 59

    def test_days_are_counted(self):
        assert duration_seconds(timedelta(days=1, seconds=1)) == 86401
