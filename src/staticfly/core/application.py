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
"""Application bootstrap: load config, configure logging, bind resource settings."""

from __future__ import annotations

import os
from pathlib import Path

from staticfly.config.properties.logging import LoggingProperties
from staticfly.config.properties.resources import ResourceProperties
from staticfly.core.config import Config
from staticfly.logging.port import LoggingPort
from staticfly.logging.structlog_adapter import StructlogAdapter
from staticfly.web.cache_control import CacheControl

PROFILES_ENV = "STATICFLY_PROFILES_ACTIVE"


class StaticResourcesApplication:
    """Binds static resource configuration once, at startup.

    Startup sequence:
    1. Load configuration (framework defaults, files under *config_dir*, profiles)
    2. Configure logging from ``staticfly.logging``
    3. Bind ``staticfly.resources`` and derive the served Cache-Control value
    4. Log the effective resource settings

    The bound properties are not modified afterwards, so request handlers may
    read them from any thread.
    """

    def __init__(
        self,
        config_dir: str | Path | None = None,
        active_profiles: list[str] | None = None,
        logging_port: LoggingPort | None = None,
    ) -> None:
        profiles = active_profiles if active_profiles is not None else self._profiles_from_env()
        if config_dir is not None:
            self.config = Config.from_sources(config_dir, active_profiles=profiles)
        else:
            self.config = Config(Config._load_framework_defaults())
            self.config._loaded_sources = ["staticfly-defaults.yaml (framework defaults)"]
        self.active_profiles = profiles

        self.logging = logging_port if logging_port is not None else StructlogAdapter()
        self.logging.configure(self.config.bind(LoggingProperties))
        self._logger = self.logging.get_logger("staticfly.core")

        self.resources: ResourceProperties = self.config.bind(ResourceProperties)
        self.cache_control: CacheControl = self.resources.resolve_cache_control()

        self._logger.info(
            "resources.configured",
            profiles=profiles or None,
            locations=self.resources.static_locations,
            add_mappings=self.resources.add_mappings,
            chain_enabled=self.resources.chain.effective_enabled,
            cache_control=self.cache_control.header_value or None,
        )

    @staticmethod
    def _profiles_from_env() -> list[str]:
        raw = os.environ.get(PROFILES_ENV, "")
        return [p.strip() for p in raw.split(",") if p.strip()]
