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
"""staticfly: static resource handling configuration.

Binds ``staticfly.resources.*`` configuration onto :class:`ResourceProperties`
and derives the ``Cache-Control`` header served with static resources.
"""

from staticfly.config.properties.resources import (
    CacheControlProperties,
    Chain,
    Content,
    Fixed,
    ResourceProperties,
    Strategy,
    derive_cache_control,
    effective_enabled,
    normalize_locations,
)
from staticfly.core.application import StaticResourcesApplication
from staticfly.core.config import Config, config_properties
from staticfly.kernel.exceptions import ConfigurationError
from staticfly.web.cache_control import CacheControl

__version__ = "0.1.0"

__all__ = [
    "CacheControl",
    "CacheControlProperties",
    "Chain",
    "Config",
    "ConfigurationError",
    "Content",
    "Fixed",
    "ResourceProperties",
    "StaticResourcesApplication",
    "Strategy",
    "config_properties",
    "derive_cache_control",
    "effective_enabled",
    "normalize_locations",
]
