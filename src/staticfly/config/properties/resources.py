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
"""Static resource handling configuration properties."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any

from staticfly.core.config import config_properties
from staticfly.web.cache_control import CacheControl

DEFAULT_STATIC_LOCATIONS: tuple[str, ...] = (
    "classpath:/META-INF/resources/",
    "classpath:/resources/",
    "classpath:/static/",
    "classpath:/public/",
)


def normalize_locations(locations: Iterable[str]) -> list[str]:
    """Append a trailing ``/`` to every location that lacks one, keeping order."""
    return [location if location.endswith("/") else location + "/" for location in locations]


def effective_enabled(fixed_enabled: bool, content_enabled: bool, chain_enabled: bool | None) -> bool | None:
    """Whether the resource chain is active.

    Any enabled version strategy forces the chain on. Otherwise the explicit
    setting is returned as-is, ``None`` meaning no preference was configured.
    """
    if fixed_enabled or content_enabled:
        return True
    return chain_enabled


@dataclass
class Content:
    """Version strategy based on content hashing (staticfly.resources.chain.strategy.content.*)."""

    enabled: bool = False
    paths: list[str] = field(default_factory=lambda: ["/**"])


@dataclass
class Fixed:
    """Version strategy based on a fixed version string (staticfly.resources.chain.strategy.fixed.*).

    ``version`` is not required when ``enabled`` is set; the consuming
    strategy decides what an unset version means.
    """

    enabled: bool = False
    paths: list[str] = field(default_factory=lambda: ["/**"])
    version: str | None = None


@dataclass
class Strategy:
    """Strategies for extracting and embedding a resource version in its URL path."""

    fixed: Fixed = field(default_factory=Fixed)
    content: Content = field(default_factory=Content)


@dataclass
class Chain:
    """Resource handling chain settings (staticfly.resources.chain.*)."""

    enabled: bool | None = None
    cache: bool = True
    html_application_cache: bool = False
    gzipped: bool = False
    strategy: Strategy = field(default_factory=Strategy)

    @property
    def effective_enabled(self) -> bool | None:
        """Enabled state after applying the strategies; ``None`` if nothing was configured."""
        return effective_enabled(self.strategy.fixed.enabled, self.strategy.content.enabled, self.enabled)


@dataclass
class CacheControlProperties:
    """Cache-Control header settings (staticfly.resources.cache-control.*).

    Durations are in seconds unless a unit suffix is given. Flags are
    tri-state: ``None`` means not configured and contributes nothing.
    """

    max_age: timedelta | None = None
    no_cache: bool | None = None
    no_store: bool | None = None
    must_revalidate: bool | None = None
    no_transform: bool | None = None
    cache_public: bool | None = None
    cache_private: bool | None = None
    proxy_revalidate: bool | None = None
    stale_while_revalidate: timedelta | None = None
    stale_if_error: timedelta | None = None
    s_max_age: timedelta | None = None

    def to_http_cache_control(self) -> CacheControl:
        return derive_cache_control(self)


def derive_cache_control(properties: CacheControlProperties) -> CacheControl:
    """Build the header value described by *properties*.

    ``no-store`` wins over ``no-cache``, which wins over ``max-age``. The
    remaining directives are added independently of that choice.
    """
    if properties.no_store is True:
        cache_control = CacheControl.no_store()
    elif properties.no_cache is True:
        cache_control = CacheControl.no_cache()
    elif properties.max_age is not None:
        cache_control = CacheControl.max_age(properties.max_age)
    else:
        cache_control = CacheControl.empty()

    if properties.must_revalidate is True:
        cache_control = cache_control.must_revalidate()
    if properties.no_transform is True:
        cache_control = cache_control.no_transform()
    if properties.cache_public is True:
        cache_control = cache_control.cache_public()
    if properties.cache_private is True:
        cache_control = cache_control.cache_private()
    if properties.proxy_revalidate is True:
        cache_control = cache_control.proxy_revalidate()

    if properties.stale_while_revalidate is not None:
        cache_control = cache_control.stale_while_revalidate(properties.stale_while_revalidate)
    if properties.stale_if_error is not None:
        cache_control = cache_control.stale_if_error(properties.stale_if_error)
    if properties.s_max_age is not None:
        cache_control = cache_control.s_max_age(properties.s_max_age)
    return cache_control


@config_properties(prefix="staticfly.resources")
@dataclass
class ResourceProperties:
    """Configuration for static resource handling (staticfly.resources.*).

    ``static_locations`` entries always end with ``/``; they are normalized
    whenever the attribute is assigned. ``cache_period`` only applies when
    ``cache_control`` yields no directive.
    """

    static_locations: list[str] = field(default_factory=lambda: list(DEFAULT_STATIC_LOCATIONS))
    cache_period: timedelta | None = None
    cache_control: CacheControlProperties = field(default_factory=CacheControlProperties)
    add_mappings: bool = True
    chain: Chain = field(default_factory=Chain)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "static_locations":
            if isinstance(value, str):
                value = [value]
            value = normalize_locations(value)
        super().__setattr__(name, value)

    def resolve_cache_control(self) -> CacheControl:
        """Cache-Control for served resources, falling back to ``cache_period``."""
        cache_control = self.cache_control.to_http_cache_control()
        if cache_control.is_empty and self.cache_period is not None:
            return CacheControl.max_age(self.cache_period)
        return cache_control
