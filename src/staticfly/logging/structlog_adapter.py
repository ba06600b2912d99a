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
"""StructlogAdapter: LoggingPort backed by structlog over stdlib logging."""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from staticfly.config.properties.logging import LoggingProperties

_SHARED_PROCESSORS: tuple[Any, ...] = (
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.add_log_level,
    structlog.processors.TimeStamper(fmt="iso"),
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
)


class StructlogAdapter:
    """Routes structlog events through stdlib logging to stdout."""

    def __init__(self) -> None:
        self.properties = LoggingProperties()

    def configure(self, properties: LoggingProperties) -> None:
        self.properties = properties
        renderer = structlog.processors.JSONRenderer() if properties.json_output else structlog.dev.ConsoleRenderer()
        structlog.configure(
            processors=[*_SHARED_PROCESSORS, renderer],
            logger_factory=structlog.stdlib.LoggerFactory(),
            wrapper_class=structlog.stdlib.BoundLogger,
            cache_logger_on_first_use=True,
        )
        logging.basicConfig(
            format="%(message)s",
            stream=sys.stdout,
            level=_level(properties.root_level),
            force=True,
        )
        for name, level in properties.logger_levels.items():
            self.set_level(name, level)

    def get_logger(self, name: str) -> Any:
        return structlog.get_logger(name)

    def set_level(self, name: str, level: str) -> None:
        logging.getLogger(name).setLevel(_level(level))


def _level(name: str) -> int:
    """Numeric level for *name*; unknown names fall back to INFO."""
    value = logging.getLevelName(name.upper())
    return value if isinstance(value, int) else logging.INFO
