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
"""Tests for framework defaults loading and TOML config support."""

from pathlib import Path

from staticfly.config.properties import ResourceProperties
from staticfly.core.config import Config


class TestFrameworkDefaults:
    def test_load_defaults_provides_staticfly_namespace(self):
        defaults = Config._load_framework_defaults()
        assert "staticfly" in defaults
        assert "resources" in defaults["staticfly"]

    def test_defaults_have_logging_level(self):
        defaults = Config._load_framework_defaults()
        assert defaults["staticfly"]["logging"]["level"]["root"] == "INFO"

    def test_defaults_bind_to_schema_defaults(self):
        config = Config(Config._load_framework_defaults())
        assert config.bind(ResourceProperties) == ResourceProperties()

    def test_user_config_overrides_defaults(self, tmp_path: Path):
        config_file = tmp_path / "staticfly.yaml"
        config_file.write_text("staticfly:\n  resources:\n    add-mappings: false\n")
        config = Config.from_file(config_file)
        assert config.get("staticfly.resources.add-mappings") is False
        assert config.get("staticfly.resources.chain.cache") is True

    def test_from_file_without_defaults(self, tmp_path: Path):
        config_file = tmp_path / "staticfly.yaml"
        config_file.write_text("app:\n  name: test\n")
        config = Config.from_file(config_file, load_defaults=False)
        assert config.get("staticfly.resources") is None
        assert config.get("app.name") == "test"

    def test_missing_file_returns_defaults_only(self, tmp_path: Path):
        config = Config.from_file(tmp_path / "nonexistent.yaml")
        assert config.get("staticfly.logging.format") == "console"


class TestTomlConfig:
    def test_load_toml_file(self, tmp_path: Path):
        config_file = tmp_path / "staticfly.toml"
        config_file.write_text('[staticfly.resources.cache-control]\nmax-age = "2h"\ncache-public = true\n')
        props = Config.from_file(config_file).bind(ResourceProperties)
        assert props.resolve_cache_control().header_value == "max-age=7200, public"

    def test_toml_profile_overlay(self, tmp_path: Path):
        (tmp_path / "staticfly.toml").write_text("[staticfly.resources.chain]\ngzipped = false\n")
        (tmp_path / "staticfly-prod.toml").write_text("[staticfly.resources.chain]\ngzipped = true\n")
        config = Config.from_file(tmp_path / "staticfly.toml", active_profiles=["prod"], load_defaults=False)
        assert config.get("staticfly.resources.chain.gzipped") is True


class TestConfigEnvVarNormalization:
    def test_staticfly_prefix_stripped_for_env_var(self, monkeypatch):
        monkeypatch.setenv("STATICFLY_RESOURCES_ADD_MAPPINGS", "false")
        assert Config({}).get("staticfly.resources.add-mappings") == "false"

    def test_non_prefixed_key_still_works(self, monkeypatch):
        monkeypatch.setenv("STATICFLY_APP_NAME", "env-app")
        assert Config({}).get("app.name") == "env-app"


class TestMultiSourceConfig:
    def test_root_overrides_config_dir(self, tmp_path: Path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "staticfly.yaml").write_text(
            "staticfly:\n  resources:\n    cache-period: 60\n    add-mappings: false\n"
        )
        (tmp_path / "staticfly.yaml").write_text("staticfly:\n  resources:\n    cache-period: 120\n")

        config = Config.from_sources(tmp_path)
        assert config.get("staticfly.resources.cache-period") == 120
        assert config.get("staticfly.resources.add-mappings") is False

    def test_config_subdir_profile_overlay(self, tmp_path: Path):
        config_dir = tmp_path / "config"
        config_dir.mkdir()
        (config_dir / "staticfly-prod.yaml").write_text("staticfly:\n  resources:\n    cache-period: 1d\n")
        (tmp_path / "staticfly.yaml").write_text("staticfly:\n  resources:\n    cache-period: 1h\n")

        config = Config.from_sources(tmp_path, active_profiles=["prod"])
        assert config.get("staticfly.resources.cache-period") == "1d"

    def test_tracks_loaded_sources(self, tmp_path: Path):
        (tmp_path / "staticfly.yaml").write_text("app:\n  name: tracked\n")

        config = Config.from_sources(tmp_path)
        assert any("staticfly-defaults" in s for s in config.loaded_sources)
        assert any(s.endswith("staticfly.yaml") for s in config.loaded_sources)

    def test_empty_dir_returns_defaults(self, tmp_path: Path):
        config = Config.from_sources(tmp_path)
        assert config.loaded_sources == ["staticfly-defaults.yaml (framework defaults)"]
