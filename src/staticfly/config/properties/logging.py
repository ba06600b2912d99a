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
"""Logging configuration properties."""

from __future__ import annotations

from dataclasses import dataclass, field

from staticfly.core.config import config_properties

_ROOT = "root"


@config_properties(prefix="staticfly.logging")
@dataclass
class LoggingProperties:
    """Configuration for framework logging (staticfly.logging.*).

    level maps logger names to level names; the root entry sets the
    root logger. format is console or json.
    """

    format: str = "console"
    level: dict = field(default_factory=lambda: {_ROOT: "INFO"})

    @property
    def root_level(self) -> str:
        return str(self.level.get(_ROOT, "INFO")).upper()

    @property
    def logger_levels(self) -> dict[str, str]:
        """Per-logger levels, without the root entry."""
        return {name: str(value).upper() for name, value in self.level.items() if name != _ROOT}

    @property
    def json_output(self) -> bool:
        return self.format.lower() == "json"
