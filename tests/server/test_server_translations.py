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
"""Tests for server-side translations from static data."""

import pytest

from lingx.kernel.exceptions import ConfigurationException, TranslationConfigurationException
from lingx.server import (
    GetTranslationsOptions,
    ServerConfig,
    configure_server_defaults,
    get_available_languages,
    get_server_defaults,
    get_translations,
)

EN = {"home": {"title": "Welcome"}, "greeting": "Hello, {name}!", "checkout:title": "Checkout"}
DE = {"home": {"title": "Willkommen"}, "greeting": "Hallo, {name}!"}


class TestGetTranslationsWithOptions:
    def test_single_language_bundle(self):
        result = get_translations(GetTranslationsOptions(static_data=EN, language="en"))
        assert result.language == "en"
        assert result.t("home.title") == "Welcome"

    def test_multi_language_bundle(self):
        result = get_translations(GetTranslationsOptions(static_data={"en": EN, "de": DE}, language="de"))
        assert result.t("home.title") == "Willkommen"
        assert result.t("greeting", {"name": "Welt"}) == "Hallo, Welt!"

    def test_unknown_language_uses_default_bundle(self):
        result = get_translations(
            GetTranslationsOptions(static_data={"en": EN, "de": DE}, language="fr", default_language="en")
        )
        assert result.language == "fr"
        assert result.t("home.title") == "Welcome"

    def test_language_defaults_to_en(self):
        assert get_translations(GetTranslationsOptions(static_data=EN)).language == "en"

    def test_namespace_lookup_then_plain_key(self):
        result = get_translations(GetTranslationsOptions(static_data=EN, namespace="checkout"))
        assert result.t("title") == "Checkout"
        assert result.t("greeting", {"name": "Ann"}) == "Hello, Ann!"

    def test_missing_key_returns_namespaced_key(self):
        result = get_translations(GetTranslationsOptions(static_data=EN, namespace="checkout"))
        assert result.t("nope") == "checkout:nope"
        plain = get_translations(GetTranslationsOptions(static_data=EN))
        assert plain.t("nope") == "nope"

    def test_formats_icu_with_request_locale(self):
        data = {"de": {"total": "Summe: {n, number}"}, "en": {"total": "Total: {n, number}"}}
        result = get_translations(GetTranslationsOptions(static_data=data, language="de"))
        assert result.t("total", {"n": 1234567}) == "Summe: 1.234.567"

    def test_callable(self):
        result = get_translations(GetTranslationsOptions(static_data=EN))
        assert result("home.title") == "Welcome"


class TestGetTranslationsWithConfig:
    def test_explicit_config(self):
        config = ServerConfig(static_data={"en": EN, "de": DE}, default_language="de")
        result = get_translations(config=config)
        assert result.language == "de"
        assert result.t("home.title") == "Willkommen"

    def test_options_static_data_wins_over_config(self):
        config = ServerConfig(static_data={"en": {"home": {"title": "From config"}}})
        result = get_translations(GetTranslationsOptions(static_data=EN), config=config)
        assert result.t("home.title") == "Welcome"

    def test_process_defaults(self):
        configure_server_defaults(ServerConfig(static_data={"en": EN, "de": DE}))
        assert get_server_defaults() is not None
        assert get_translations(GetTranslationsOptions(language="de")).t("home.title") == "Willkommen"

    def test_explicit_config_wins_over_defaults(self):
        configure_server_defaults(ServerConfig(static_data={"en": EN}))
        config = ServerConfig(static_data={"en": {"home": {"title": "Explicit"}}})
        assert get_translations(config=config).t("home.title") == "Explicit"

    def test_defaults_can_only_be_set_once(self):
        configure_server_defaults(ServerConfig(static_data={"en": EN}))
        with pytest.raises(ConfigurationException):
            configure_server_defaults(ServerConfig(static_data={"en": DE}))

    def test_no_data_anywhere_raises(self):
        with pytest.raises(TranslationConfigurationException, match="No translations provided"):
            get_translations()

    def test_config_without_static_data_raises(self):
        with pytest.raises(TranslationConfigurationException, match="No static_data"):
            get_translations(config=ServerConfig())


class TestGetAvailableLanguages:
    def test_from_argument(self):
        assert get_available_languages({"en": EN, "de": DE}) == ["en", "de"]

    def test_from_multi_language_config(self):
        assert get_available_languages(config=ServerConfig(static_data={"en": EN, "fr": {}})) == ["en", "fr"]

    def test_from_configured_list(self):
        config = ServerConfig(static_data=EN, available_languages=("en", "uk"))
        assert get_available_languages(config=config) == ["en", "uk"]

    def test_default_language(self):
        assert get_available_languages(config=ServerConfig(default_language="pl")) == ["pl"]
        assert get_available_languages() == ["en"]
