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
"""CacheControl: immutable builder for the ``Cache-Control`` response header."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from datetime import timedelta

from staticfly.core.duration import duration_seconds

CACHE_CONTROL_HEADER = "Cache-Control"


def _seconds(value: timedelta | int) -> int:
    if isinstance(value, timedelta):
        return duration_seconds(value)
    return int(value)


@dataclass(frozen=True)
class CacheControl:
    """A ``Cache-Control`` header value.

    Instances are immutable; every builder method returns a new instance::

        CacheControl.max_age(timedelta(hours=1)).cache_public().header_value
        # 'max-age=3600, public'

    The rendered directive order is fixed: the base directive (``no-store``,
    ``no-cache`` or ``max-age``), then the flag directives, then the
    ``stale-*`` and ``s-maxage`` directives.
    """

    max_age_seconds: int | None = None
    no_cache_flag: bool = False
    no_store_flag: bool = False
    must_revalidate_flag: bool = False
    no_transform_flag: bool = False
    public_flag: bool = False
    private_flag: bool = False
    proxy_revalidate_flag: bool = False
    stale_while_revalidate_seconds: int | None = None
    stale_if_error_seconds: int | None = None
    s_max_age_seconds: int | None = None

    # -- factories ---------------------------------------------------------

    @classmethod
    def empty(cls) -> CacheControl:
        """A value carrying no directives."""
        return cls()

    @classmethod
    def max_age(cls, duration: timedelta | int) -> CacheControl:
        return cls(max_age_seconds=_seconds(duration))

    @classmethod
    def no_cache(cls) -> CacheControl:
        return cls(no_cache_flag=True)

    @classmethod
    def no_store(cls) -> CacheControl:
        return cls(no_store_flag=True)

    # -- builders ----------------------------------------------------------

    def must_revalidate(self) -> CacheControl:
        return dataclasses.replace(self, must_revalidate_flag=True)

    def no_transform(self) -> CacheControl:
        return dataclasses.replace(self, no_transform_flag=True)

    def cache_public(self) -> CacheControl:
        return dataclasses.replace(self, public_flag=True)

    def cache_private(self) -> CacheControl:
        return dataclasses.replace(self, private_flag=True)

    def proxy_revalidate(self) -> CacheControl:
        return dataclasses.replace(self, proxy_revalidate_flag=True)

    def stale_while_revalidate(self, duration: timedelta | int) -> CacheControl:
        return dataclasses.replace(self, stale_while_revalidate_seconds=_seconds(duration))

    def stale_if_error(self, duration: timedelta | int) -> CacheControl:
        return dataclasses.replace(self, stale_if_error_seconds=_seconds(duration))

    def s_max_age(self, duration: timedelta | int) -> CacheControl:
        return dataclasses.replace(self, s_max_age_seconds=_seconds(duration))

    # -- rendering ---------------------------------------------------------

    def directives(self) -> list[str]:
        """The individual directives in rendering order."""
        parts: list[str] = []
        if self.no_store_flag:
            parts.append("no-store")
        elif self.no_cache_flag:
            parts.append("no-cache")
        elif self.max_age_seconds is not None:
            parts.append(f"max-age={self.max_age_seconds}")

        flags = (
            (self.must_revalidate_flag, "must-revalidate"),
            (self.no_transform_flag, "no-transform"),
            (self.public_flag, "public"),
            (self.private_flag, "private"),
            (self.proxy_revalidate_flag, "proxy-revalidate"),
        )
        parts.extend(name for enabled, name in flags if enabled)

        numeric = (
            ("stale-while-revalidate", self.stale_while_revalidate_seconds),
            ("stale-if-error", self.stale_if_error_seconds),
            ("s-maxage", self.s_max_age_seconds),
        )
        parts.extend(f"{name}={seconds}" for name, seconds in numeric if seconds is not None)
        return parts

    @property
    def header_value(self) -> str:
        """The header value, ``""`` when no directive is set."""
        return ", ".join(self.directives())

    @property
    def is_empty(self) -> bool:
        return not self.directives()

    def headers(self) -> dict[str, str]:
        """``{"Cache-Control": value}``, or an empty dict for an empty value."""
        value = self.header_value
        return {CACHE_CONTROL_HEADER: value} if value else {}

    def __str__(self) -> str:
        return self.header_value
