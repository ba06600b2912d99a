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
"""Tests for @config_properties with Pydantic BaseModel binding."""

from __future__ import annotations

from datetime import timedelta

import pytest
from pydantic import BaseModel, ConfigDict, Field

from staticfly.core.config import Config, config_properties
from staticfly.kernel.exceptions import ConfigurationError


@config_properties(prefix="myapp.cdn")
class CdnProperties(BaseModel):
    model_config = ConfigDict(extra="forbid")

    host: str = "cdn.example.com"
    max_age: timedelta = timedelta(hours=1)
    edge_nodes: int = Field(default=3, ge=1, le=50)
    enabled: bool = False


@config_properties(prefix="myapp.required")
class RequiredFieldProperties(BaseModel):
    bucket: str
    region: str = "eu-west-1"


class TestPydanticBinding:
    def test_empty_section_uses_defaults(self) -> None:
        props = Config({"myapp": {"cdn": {}}}).bind(CdnProperties)
        assert props.host == "cdn.example.com"
        assert props.max_age == timedelta(hours=1)
        assert props.edge_nodes == 3
        assert props.enabled is False

    def test_provided_values_override_defaults(self) -> None:
        config = Config({"myapp": {"cdn": {"host": "assets.local", "max_age": 60, "enabled": "true"}}})
        props = config.bind(CdnProperties)
        assert props.host == "assets.local"
        assert props.max_age == timedelta(seconds=60)
        assert props.enabled is True


class TestPydanticValidationFailure:
    def test_out_of_range_wrapped(self) -> None:
        config = Config({"myapp": {"cdn": {"edge_nodes": 200}}})
        with pytest.raises(ConfigurationError, match="Configuration validation failed"):
            config.bind(CdnProperties)

    def test_forbidden_extra_field(self) -> None:
        config = Config({"myapp": {"cdn": {"hostname": "typo"}}})
        with pytest.raises(ConfigurationError, match="CdnProperties"):
            config.bind(CdnProperties)

    def test_missing_required_field(self) -> None:
        config = Config({"myapp": {"required": {"region": "us-east-1"}}})
        with pytest.raises(ConfigurationError) as exc_info:
            config.bind(RequiredFieldProperties)
        assert exc_info.value.context == {"prefix": "myapp.required"}
