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
"""Duration parsing for configuration values.

Accepts plain numbers (seconds by default), simple strings with an optional
unit suffix such as ``"30s"``, ``"5m"`` or ``"250ms"``, and ISO-8601
durations such as ``"PT1M30S"``.
"""

from __future__ import annotations

import re
from datetime import timedelta

_SIMPLE_RE = re.compile(r"^([+-]?\d+)([a-zA-Z]{0,2})$")
_ISO_RE = re.compile(
    r"^([+-])?P(?:(\d+)D)?(?:T(?:(\d+)H)?(?:(\d+)M)?(?:(\d+(?:\.\d+)?)S)?)?$",
    re.IGNORECASE,
)

_UNITS: dict[str, timedelta] = {
    "us": timedelta(microseconds=1),
    "ms": timedelta(milliseconds=1),
    "s": timedelta(seconds=1),
    "m": timedelta(minutes=1),
    "h": timedelta(hours=1),
    "d": timedelta(days=1),
}

DEFAULT_UNIT = "s"


def parse_duration(value: object, default_unit: str = DEFAULT_UNIT) -> timedelta:
    """Convert *value* to a :class:`timedelta`.

    Numbers are interpreted in *default_unit*. Raises ``ValueError`` when the
    value is not a recognizable duration or does not fit in a ``timedelta``.
    """
    try:
        return _parse(value, default_unit)
    except OverflowError as exc:
        raise ValueError(f"duration {value!r} is out of range") from exc


def _parse(value: object, default_unit: str) -> timedelta:
    if isinstance(value, timedelta):
        return value
    if isinstance(value, bool):
        raise ValueError("booleans are not durations")
    if isinstance(value, int | float):
        return _UNITS[default_unit] * value
    if not isinstance(value, str):
        raise ValueError(f"unsupported duration type {type(value).__name__}")

    text = value.strip()
    match = _SIMPLE_RE.match(text)
    if match:
        amount, suffix = match.groups()
        unit = suffix.lower() or default_unit
        if unit == "ns":
            # timedelta has microsecond resolution
            return timedelta(microseconds=int(amount) / 1000)
        if unit not in _UNITS:
            raise ValueError(f"unknown duration unit '{suffix}'")
        return _UNITS[unit] * int(amount)

    match = _ISO_RE.match(text)
    if match and any(match.groups()[1:]):
        sign, days, hours, minutes, seconds = match.groups()
        result = timedelta(
            days=int(days or 0),
            hours=int(hours or 0),
            minutes=int(minutes or 0),
            seconds=float(seconds or 0),
        )
        return -result if sign == "-" else result

    raise ValueError(f"'{value}' is not a valid duration")


def duration_seconds(duration: timedelta) -> int:
    """Whole seconds in *duration*, dropping any fractional part."""
    return duration.days * 86400 + duration.seconds
