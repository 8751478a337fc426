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
"""Server-side translations from static data.

Request handlers call :func:`get_translations` with the request's language;
nothing is fetched over the network. Configuration is explicit: pass a
:class:`ServerConfig` per call, or install one process-wide default at
startup with :func:`configure_server_defaults`::

    configure_server_defaults(ServerConfig(static_data={"en": en, "de": de}))

    translations = get_translations(GetTranslationsOptions(language="de", namespace="checkout"))
    translations.t("title")
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import structlog

from lingx.client.bundles import is_multi_language, namespaced_key, resolve_message
from lingx.format.formatter import MessageFormatter
from lingx.kernel.exceptions import ConfigurationException, TranslationConfigurationException

logger = structlog.get_logger("lingx.server")


@dataclass(frozen=True)
class ServerConfig:
    """Immutable server-side translation settings."""

    static_data: Mapping[str, Any] | None = None
    default_language: str = "en"
    available_languages: tuple[str, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class GetTranslationsOptions:
    """Per-call options; ``static_data`` here takes precedence over any config."""

    static_data: Mapping[str, Any] | None = None
    language: str | None = None
    namespace: str | None = None
    default_language: str | None = None


class ServerTranslations:
    """Translate function and resolved language for one server-side call."""

    def __init__(self, bundle: Mapping[str, Any], language: str, namespace: str | None = None) -> None:
        self._bundle = bundle
        self._language = language
        self._namespace = namespace
        self._formatter = MessageFormatter(language)

    @property
    def language(self) -> str:
        return self._language

    def t(self, key: str, values: Mapping[str, Any] | None = None) -> str:
        """Translate *key*, trying ``namespace:key`` first when a namespace is set.

        Missing keys come back as ``namespace:key`` (or ``key``).
        """
        full_key = namespaced_key(self._namespace, key)
        message = resolve_message(self._bundle, full_key)
        if message is None and self._namespace:
            message = resolve_message(self._bundle, key)
        if message is None:
            logger.debug("translation_missing", language=self._language, key=full_key)
            return full_key
        if not values:
            return message
        return self._formatter.format(message, values)

    __call__ = t


_defaults: ServerConfig | None = None


def configure_server_defaults(config: ServerConfig) -> None:
    """Install the process-wide default configuration. May be called once.

    Raises:
        ConfigurationException: If defaults were already installed.
    """
    global _defaults
    if _defaults is not None:
        raise ConfigurationException(
            "Server defaults are already configured; pass config= per call instead",
            code="SERVER_DEFAULTS_SET",
        )
    _defaults = config


def get_server_defaults() -> ServerConfig | None:
    return _defaults


def _reset_server_defaults() -> None:
    global _defaults
    _defaults = None


def get_translations(
    options: GetTranslationsOptions | None = None,
    *,
    config: ServerConfig | None = None,
) -> ServerTranslations:
    """Resolve the bundle for the requested language from static data.

    Raises:
        TranslationConfigurationException: If neither *options* nor the
            effective config provides static data.
    """
    options = options or GetTranslationsOptions()

    if options.static_data:
        default_language = options.default_language or options.language or "en"
        language = options.language or default_language
        bundle = _select(options.static_data, language, default_language)
    else:
        effective = config or _defaults
        if effective is None:
            raise TranslationConfigurationException(
                "No translations provided. Pass static_data in options or a ServerConfig with static_data."
            )
        if not effective.static_data:
            raise TranslationConfigurationException(
                "No static_data in server config. Server-side translations never fetch over the network."
            )
        default_language = options.default_language or effective.default_language
        language = options.language or default_language
        bundle = _select(effective.static_data, language, default_language)

    return ServerTranslations(bundle, language, options.namespace)


def get_available_languages(
    static_data: Mapping[str, Any] | None = None,
    *,
    config: ServerConfig | None = None,
) -> list[str]:
    """Languages of multi-language static data, else configured ones, else the default language."""
    if static_data:
        return list(static_data)

    effective = config or _defaults
    if effective is None:
        return ["en"]
    if is_multi_language(effective.static_data, effective.default_language):
        return list(effective.static_data or {})
    if effective.available_languages:
        return list(effective.available_languages)
    return [effective.default_language]


def _select(data: Mapping[str, Any], language: str, default_language: str) -> Mapping[str, Any]:
    if is_multi_language(data, language):
        return data[language]
    if is_multi_language(data, default_language):
        return data.get(language) or data[default_language]
    return data
