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
"""Tests for Config: files, profiles, env overrides, placeholders and binding."""

from dataclasses import dataclass

import pytest
from pydantic import BaseModel

from lingx.config.properties import (
    CacheProperties,
    ClientProperties,
    DetectionProperties,
    FormatterProperties,
    LoggingProperties,
    RetryProperties,
)
from lingx.core import Config, config_properties


class TestConfigGet:
    def test_dot_notation(self):
        config = Config({"lingx": {"client": {"api_url": "https://api.test"}}})
        assert config.get("lingx.client.api_url") == "https://api.test"

    def test_default_for_missing(self):
        assert Config({}).get("lingx.client.project", "fallback") == "fallback"

    def test_env_var_wins(self, monkeypatch):
        monkeypatch.setenv("LINGX_CLIENT_API_URL", "https://env.test")
        config = Config({"lingx": {"client": {"api_url": "https://file.test"}}})
        assert config.get("lingx.client.api_url") == "https://env.test"

    def test_placeholders(self, monkeypatch):
        monkeypatch.setenv("TRANSLATIONS_HOST", "cdn.test")
        monkeypatch.delenv("DEPLOY_ENV", raising=False)
        config = Config(
            {
                "lingx": {
                    "client": {
                        "locale_path": "https://${TRANSLATIONS_HOST}/locales",
                        "project": "${lingx.client.space}",
                        "space": "web",
                        "environment": "${DEPLOY_ENV:staging}",
                    }
                }
            }
        )
        assert config.get("lingx.client.locale_path") == "https://cdn.test/locales"
        assert config.get("lingx.client.project") == "web"
        assert config.get("lingx.client.environment") == "staging"

    def test_unresolvable_placeholder_raises(self):
        config = Config({"lingx": {"client": {"project": "${NOT_SET_ANYWHERE_42}"}}})
        with pytest.raises(ValueError, match="Cannot resolve placeholder"):
            config.get("lingx.client.project")


class TestConfigFiles:
    def test_packaged_defaults(self):
        config = Config.defaults()
        assert config.get("lingx.cache.ttl") == 300
        assert config.get("lingx.detection.cookie_name") == "lingx-lang"

    def test_yaml_file_with_profile_overlay(self, tmp_path):
        (tmp_path / "lingx.yaml").write_text("lingx:\n  client:\n    project: shop\n", encoding="utf-8")
        (tmp_path / "lingx-prod.yaml").write_text("lingx:\n  client:\n    environment: production\n", encoding="utf-8")

        config = Config.from_file(tmp_path / "lingx.yaml", active_profiles=["prod"])

        assert config.get("lingx.client.project") == "shop"
        assert config.get("lingx.client.environment") == "production"
        assert config.get("lingx.client.default_language") == "en"
        assert len(config.loaded_sources) == 3

    def test_toml_file(self, tmp_path):
        (tmp_path / "lingx.toml").write_text('[lingx.client]\nproject = "docs"\n', encoding="utf-8")
        config = Config.from_file(tmp_path / "lingx.toml", load_defaults=False)
        assert config.get("lingx.client.project") == "docs"
        assert config.get("lingx.cache.ttl") is None

    def test_missing_file_keeps_defaults(self, tmp_path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.get("lingx.format.cache_size") == 500


class TestBinding:
    def test_defaults_match_packaged_file(self):
        config = Config.defaults()
        assert config.bind(ClientProperties).default_language == "en"
        assert config.bind(RetryProperties).max_attempts == 3
        assert config.bind(CacheProperties).max_entries == 50
        assert config.bind(FormatterProperties).cache_size == 500
        assert config.bind(DetectionProperties).order == ["querystring", "cookie", "localStorage", "navigator"]
        assert config.bind(LoggingProperties).level == {"root": "INFO"}

    def test_empty_config_uses_dataclass_defaults(self):
        props = Config({}).bind(ClientProperties)
        assert props.timeout == 30.0
        assert props.namespaces == []

    def test_env_override_is_coerced(self, monkeypatch):
        monkeypatch.setenv("LINGX_CACHE_MAX_ENTRIES", "7")
        monkeypatch.setenv("LINGX_CACHE_TTL", "12.5")
        monkeypatch.setenv("LINGX_DETECTION_ENABLED", "false")
        config = Config.defaults()
        assert config.bind(CacheProperties).max_entries == 7
        assert config.bind(CacheProperties).ttl == 12.5
        assert config.bind(DetectionProperties).enabled is False

    def test_undecorated_class_rejected(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError, match="not decorated"):
            Config({}).bind(Plain)

    def test_pydantic_model(self):
        @config_properties(prefix="lingx.client")
        class ClientModel(BaseModel):
            project: str
            timeout: float = 5.0

        model = Config({"lingx": {"client": {"project": "shop", "timeout": "2.5"}}}).bind(ClientModel)
        assert model.project == "shop"
        assert model.timeout == 2.5

    def test_pydantic_validation_error(self):
        @config_properties(prefix="lingx.client")
        class ClientModel(BaseModel):
            project: str

        with pytest.raises(ValueError, match="Configuration validation failed"):
            Config({}).bind(ClientModel)
