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
"""TranslationClient: loading, caching and formatting of translation bundles."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Mapping
from datetime import timedelta
from typing import Any

import structlog

from lingx.cache.bundle_cache import BundleCache, cache_key
from lingx.cache.ports.outbound import Bundle, BundleCacheAdapter
from lingx.client.adapters.httpx_adapter import HttpxClientAdapter
from lingx.client.bundles import (
    is_multi_language,
    namespaced_key,
    prefix_namespace,
    resolve_message,
    select_static_bundle,
)
from lingx.client.ports.outbound import HttpClientPort
from lingx.client.retry import RetryPolicy
from lingx.client.sources import (
    BundleSource,
    FileSystemBundleSource,
    LocalHttpBundleSource,
    RemoteBundleSource,
)
from lingx.config.properties.cache import CacheProperties
from lingx.config.properties.client import ClientProperties, RetryProperties
from lingx.config.properties.detection import DetectionProperties
from lingx.config.properties.format import FormatterProperties
from lingx.core.config import Config
from lingx.detection.context import DetectionContext
from lingx.detection.detector import LanguagePreferenceDetector
from lingx.format.formatter import MessageFormatter
from lingx.kernel.exceptions import RetryExhaustedException, TranslationLoadException

logger = structlog.get_logger("lingx.client")

TranslateFunction = Callable[..., str]


class TranslationClient:
    """Loads translation bundles and translates keys for one active language.

    Bundles come from the cache, then static data, then the configured
    sources in order (remote API, then local files), each with its own
    retry budget. Concurrent loads of the same ``(language, namespace)``
    share one in-flight task.

    Usage::

        client = TranslationClient.from_config(Config.from_file("lingx.yaml"))
        async with client:
            client.translate("cart.items", {"count": 3})
            await client.set_language("de")

    Args:
        properties: Client settings; defaults to ``ClientProperties()``.
        static_data: Bundle for the default language, or ``{language: bundle}``.
        retry_policy: Retry applied to each source; built from *retry* when omitted.
        retry: Retry settings used when *retry_policy* is omitted.
        http: HTTP client for the remote and local-HTTP sources. When omitted
            and one is needed, an httpx client is created and owned.
        cache: Bundle cache; defaults to a ``BundleCache`` with default TTL.
        formatter: Message formatter; defaults to one for the default language.
        detector: Language detector used by ``init`` and to persist
            ``set_language`` choices; detection is off when omitted.
        sources: Explicit source chain, replacing the ones derived from
            *properties*.
    """

    def __init__(
        self,
        properties: ClientProperties | None = None,
        *,
        static_data: Mapping[str, Any] | None = None,
        retry_policy: RetryPolicy | None = None,
        retry: RetryProperties | None = None,
        http: HttpClientPort | None = None,
        cache: BundleCacheAdapter | None = None,
        formatter: MessageFormatter | None = None,
        detector: LanguagePreferenceDetector | None = None,
        sources: list[BundleSource] | None = None,
    ) -> None:
        self._props = properties or ClientProperties()
        self._default_language = self._props.default_language
        self._static_data = static_data
        self._retry = retry_policy or _retry_from(retry or RetryProperties())
        self._http = http
        self._owns_http = False
        self._cache: BundleCacheAdapter = cache if cache is not None else BundleCache()
        self._formatter = formatter or MessageFormatter(self._default_language)
        self._detector = detector
        self._sources = sources if sources is not None else self._build_sources()

        self._language = self._default_language
        self._translations: Bundle = select_static_bundle(static_data, self._language, self._default_language) or {}
        self._default_bundle: Bundle | None = dict(self._translations) if self._translations else None
        self._default_namespaces: set[str] = set()
        self._available_languages: list[str] = list(self._props.available_languages)
        self._loaded_namespaces: list[str] = []
        self._pending: dict[str, asyncio.Task[Bundle]] = {}
        self._reported_missing: set[tuple[str, str]] = set()
        self._initialized = False

    @classmethod
    def from_config(
        cls,
        config: Config,
        *,
        static_data: Mapping[str, Any] | None = None,
        detection_context: DetectionContext | None = None,
        http: HttpClientPort | None = None,
    ) -> TranslationClient:
        """Build a client from the ``lingx.*`` configuration sections."""
        client_props = config.bind(ClientProperties)
        cache_props = config.bind(CacheProperties)
        format_props = config.bind(FormatterProperties)
        detection_props = config.bind(DetectionProperties)

        detector = None
        if detection_props.enabled:
            detector = LanguagePreferenceDetector.from_properties(detection_props, detection_context)

        return cls(
            client_props,
            static_data=static_data,
            retry=config.bind(RetryProperties),
            http=http,
            cache=BundleCache(ttl=timedelta(seconds=cache_props.ttl), max_entries=cache_props.max_entries),
            formatter=MessageFormatter(
                client_props.default_language,
                cache_size=format_props.cache_size,
                default_currency=format_props.default_currency,
            ),
            detector=detector,
        )

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    async def init(self) -> None:
        """Detect the starting language, load its bundle and the configured namespaces.

        Raises:
            TranslationLoadException: If the starting bundle cannot be loaded.
        """
        language = self._language
        if self._detector is not None:
            language = self._detector.detect(
                self.get_available_languages(),
                self._props.fallback_language or self._default_language,
            )

        bundle = await self.load_translations(language)
        self._activate(language, bundle)
        if language != self._default_language:
            await self._ensure_default_bundle()

        for namespace in self._props.namespaces:
            await self.load_namespace(namespace)

        self._initialized = True
        logger.info("client_initialized", language=language, namespaces=list(self._loaded_namespaces))

    async def start(self) -> None:
        await self.init()

    async def stop(self) -> None:
        """Close the HTTP client if this client created it."""
        if self._owns_http and self._http is not None:
            await self._http.close()

    async def __aenter__(self) -> TranslationClient:
        await self.start()
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.stop()

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load_translations(self, language: str, namespace: str | None = None) -> Bundle:
        """Return the bundle for *language* (and *namespace*), loading it when needed.

        Raises:
            TranslationLoadException: If every source failed, or none is configured.
        """
        cached = self._cache.get(language, namespace)
        if cached is not None:
            return cached

        if namespace is None:
            static = select_static_bundle(self._static_data, language, self._default_language)
            if static is not None:
                self._cache.set(language, static)
                return static

        key = cache_key(language, namespace)
        task = self._pending.get(key)
        if task is None:
            task = asyncio.create_task(self._fetch(key, language, namespace))
            task.add_done_callback(_retrieve_exception)
            self._pending[key] = task
        # Callers that give up do not cancel the shared load.
        return await asyncio.shield(task)

    async def load_namespace(self, namespace: str) -> Bundle:
        """Load *namespace* for the current language and merge it, keys prefixed ``namespace:``.

        The default language's copy of the namespace is merged into the
        fallback bundle as well, so missing keys still resolve.
        """
        bundle = await self.load_translations(self._language, namespace)
        prefixed = prefix_namespace(namespace, bundle)
        self._translations.update(prefixed)
        if namespace not in self._loaded_namespaces:
            self._loaded_namespaces.append(namespace)

        if self._language == self._default_language:
            self._merge_default(namespace, prefixed)
        else:
            await self._ensure_default_bundle()
        return prefixed

    async def set_language(self, language: str) -> None:
        """Switch the active language, reloading every loaded namespace for it."""
        if language == self._language:
            return

        bundle = await self.load_translations(language)
        merged: Bundle = dict(bundle)
        for namespace in self._loaded_namespaces:
            merged.update(prefix_namespace(namespace, await self.load_translations(language, namespace)))

        self._activate(language, merged)
        if language != self._default_language:
            await self._ensure_default_bundle()

        if self._detector is not None:
            self._detector.cache_language(language, self.get_available_languages())
        logger.info("language_changed", language=language)

    def clear_cache(self) -> None:
        """Drop cached bundles and compiled templates; the active bundle stays in use."""
        self._cache.clear()
        self._formatter.clear_cache()

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, key: str, values: Mapping[str, Any] | None = None) -> str:
        """Translate *key*, formatting it with *values* when given.

        Falls back to the default language's bundle, then to *key* itself.
        Never raises.
        """
        message = resolve_message(self._translations, key)
        if message is None and self._language != self._default_language and self._default_bundle:
            message = resolve_message(self._default_bundle, key)

        if message is None:
            marker = (self._language, key)
            if marker not in self._reported_missing:
                self._reported_missing.add(marker)
                logger.warning("translation_missing", language=self._language, key=key)
            return key

        if not values:
            return message
        return self._formatter.format(message, values)

    def create_translate_function(self, namespace: str | None = None) -> TranslateFunction:
        """Return a ``t(key, values=None)`` callable bound to this client.

        With *namespace*, ``t("title")`` looks up ``namespace:title`` first and
        falls back to ``title``.
        """
        if namespace is None:
            return self.translate

        def t(key: str, values: Mapping[str, Any] | None = None) -> str:
            full_key = namespaced_key(namespace, key)
            if resolve_message(self._translations, full_key) is not None:
                return self.translate(full_key, values)
            if resolve_message(self._translations, key) is not None:
                return self.translate(key, values)
            return self.translate(full_key, values)

        return t

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_translations(self) -> Bundle:
        return dict(self._translations)

    def get_language(self) -> str:
        return self._language

    def get_available_languages(self) -> list[str]:
        """Configured or server-reported languages, else the static data's, else the default."""
        if self._available_languages:
            return list(self._available_languages)
        if is_multi_language(self._static_data, self._default_language):
            return list(self._static_data or {})
        return [self._default_language]

    def get_loaded_namespaces(self) -> list[str]:
        return list(self._loaded_namespaces)

    @property
    def formatter(self) -> MessageFormatter:
        return self._formatter

    @property
    def detector(self) -> LanguagePreferenceDetector | None:
        return self._detector

    @property
    def initialized(self) -> bool:
        return self._initialized

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _activate(self, language: str, bundle: Bundle) -> None:
        self._language = language
        self._translations = dict(bundle)
        self._formatter.set_language(language)
        if language == self._default_language:
            self._default_bundle = dict(bundle)
            self._default_namespaces = set(self._loaded_namespaces)

    async def _ensure_default_bundle(self) -> None:
        """Load the default-language bundle and every loaded namespace it still lacks."""
        default = self._default_language
        if self._default_bundle is None:
            try:
                self._default_bundle = dict(await self.load_translations(default))
            except TranslationLoadException as exc:
                logger.warning("default_bundle_unavailable", language=default, error=exc.message)
                return

        for namespace in self._loaded_namespaces:
            if namespace in self._default_namespaces:
                continue
            try:
                bundle = await self.load_translations(default, namespace)
            except TranslationLoadException as exc:
                logger.warning(
                    "default_namespace_unavailable", language=default, namespace=namespace, error=exc.message
                )
                continue
            self._merge_default(namespace, prefix_namespace(namespace, bundle))

    def _merge_default(self, namespace: str, prefixed: Bundle) -> None:
        if self._default_bundle is None:
            self._default_bundle = {}
        self._default_bundle.update(prefixed)
        self._default_namespaces.add(namespace)

    async def _fetch(self, key: str, language: str, namespace: str | None) -> Bundle:
        try:
            if not self._sources:
                raise TranslationLoadException(
                    f"Failed to load translations for '{key}': no translation source configured",
                    context={"language": language, "namespace": namespace},
                )

            failures: list[str] = []
            for source in self._sources:
                try:
                    loaded = await self._retry.execute(source.fetch, language, namespace)
                except Exception as exc:
                    cause = (exc.__cause__ or exc) if isinstance(exc, RetryExhaustedException) else exc
                    failures.append(f"{source.name} source: {cause}")
                    logger.warning(
                        "bundle_source_failed",
                        source=source.name,
                        language=language,
                        namespace=namespace,
                        error=str(cause),
                    )
                    continue

                if loaded.available_languages:
                    self._available_languages = list(loaded.available_languages)
                self._cache.set(language, loaded.bundle, namespace)
                logger.debug("bundle_loaded", source=source.name, language=language, namespace=namespace)
                return loaded.bundle

            raise TranslationLoadException(
                f"Failed to load translations for '{key}': " + "; ".join(failures),
                context={"language": language, "namespace": namespace, "stages": failures},
            )
        finally:
            self._pending.pop(key, None)

    def _build_sources(self) -> list[BundleSource]:
        props = self._props
        sources: list[BundleSource] = []

        if props.api_url and props.project and props.space and props.environment:
            sources.append(
                RemoteBundleSource(self._http_client(), props.api_url, props.project, props.space, props.environment)
            )
        if props.locale_dir:
            sources.append(FileSystemBundleSource(props.locale_dir))
        elif props.locale_path:
            sources.append(LocalHttpBundleSource(self._http_client(), props.locale_path))
        return sources

    def _http_client(self) -> HttpClientPort:
        if self._http is None:
            self._http = HttpxClientAdapter(timeout=timedelta(seconds=self._props.timeout))
            self._owns_http = True
        return self._http


def _retry_from(props: RetryProperties) -> RetryPolicy:
    return RetryPolicy(
        max_attempts=props.max_attempts,
        base_delay=timedelta(seconds=props.base_delay),
        max_delay=timedelta(seconds=props.max_delay),
    )


def _retrieve_exception(task: asyncio.Task[Bundle]) -> None:
    # Marks the error as retrieved when every awaiting caller was cancelled.
    if not task.cancelled():
        task.exception()
