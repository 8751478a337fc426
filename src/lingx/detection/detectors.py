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
"""Built-in language detection strategies.

A strategy looks at one source (URL, cookie, storage, preferences) and
returns a language code or ``None``. Strategies that can also remember a
choice implement ``cache_user_language`` and ``clear_user_language``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable
from urllib.parse import parse_qs, urlsplit

from lingx.detection.context import DetectionContext
from lingx.detection.ports.outbound import KeyValueStore

DEFAULT_ORDER = ("querystring", "cookie", "localStorage", "navigator")
DEFAULT_CACHES = ("cookie", "localStorage")
DEFAULT_EXCLUDE = frozenset({"cimode"})
DEFAULT_COOKIE_NAME = "lingx-lang"
DEFAULT_COOKIE_MAX_AGE = 31536000
DEFAULT_STORAGE_KEY = "lingx-lang"

_QUERY_PARAMS = ("lang", "lng", "locale")
_HASH_PARAMS = ("lang", "lng")


@dataclass(frozen=True)
class DetectorOptions:
    """Settings shared by every strategy during one detection pass."""

    order: tuple[str, ...] = DEFAULT_ORDER
    caches: tuple[str, ...] = DEFAULT_CACHES
    exclude_cache_for: frozenset[str] = DEFAULT_EXCLUDE
    cookie_name: str = DEFAULT_COOKIE_NAME
    cookie_max_age: int = DEFAULT_COOKIE_MAX_AGE
    cookie_domain: str | None = None
    storage_key: str = DEFAULT_STORAGE_KEY
    supported_languages: tuple[str, ...] = field(default_factory=tuple)
    fallback_language: str = ""


@runtime_checkable
class LanguageDetector(Protocol):
    """Port for a single language source."""

    name: str

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None: ...


@runtime_checkable
class PersistentLanguageDetector(LanguageDetector, Protocol):
    """A language source that can also store the user's choice."""

    def cache_user_language(self, language: str, options: DetectorOptions, context: DetectionContext) -> None: ...

    def clear_user_language(self, options: DetectorOptions, context: DetectionContext) -> None: ...


def _supported(candidate: str | None, options: DetectorOptions) -> str | None:
    if candidate and candidate in options.supported_languages:
        return candidate
    return None


class CookieDetector:
    name = "cookie"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        return context.cookies.get(options.cookie_name)

    def cache_user_language(self, language: str, options: DetectorOptions, context: DetectionContext) -> None:
        context.cookies.set(
            options.cookie_name,
            language,
            max_age=options.cookie_max_age,
            path="/",
            domain=options.cookie_domain or None,
        )

    def clear_user_language(self, options: DetectorOptions, context: DetectionContext) -> None:
        context.cookies.set(options.cookie_name, "", max_age=0, path="/", domain=options.cookie_domain or None)


class _StorageDetector:
    """Shared behaviour of the storage-area strategies."""

    name = ""

    def _store(self, context: DetectionContext) -> KeyValueStore | None:
        raise NotImplementedError

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        store = self._store(context)
        return store.get_item(options.storage_key) if store is not None else None

    def cache_user_language(self, language: str, options: DetectorOptions, context: DetectionContext) -> None:
        store = self._store(context)
        if store is not None:
            store.set_item(options.storage_key, language)

    def clear_user_language(self, options: DetectorOptions, context: DetectionContext) -> None:
        store = self._store(context)
        if store is not None:
            store.remove_item(options.storage_key)


class LocalStorageDetector(_StorageDetector):
    name = "localStorage"

    def _store(self, context: DetectionContext) -> KeyValueStore | None:
        return context.local_storage


class SessionStorageDetector(_StorageDetector):
    name = "sessionStorage"

    def _store(self, context: DetectionContext) -> KeyValueStore | None:
        return context.session_storage


class NavigatorDetector:
    """Walks the preferred languages, trying the exact tag then its base subtag."""

    name = "navigator"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        for preferred in context.languages:
            if not preferred:
                continue
            if preferred in options.supported_languages:
                return preferred
            base = preferred.split("-")[0]
            if base in options.supported_languages:
                return base
        return None


class QueryStringDetector:
    name = "querystring"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        params = parse_qs(urlsplit(context.url).query)
        for param in _QUERY_PARAMS:
            values = params.get(param)
            if values:
                return _supported(values[0], options)
        return None


class PathDetector:
    name = "path"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        segments = [segment for segment in urlsplit(context.url).path.split("/") if segment]
        return _supported(segments[0], options) if segments else None


class HtmlTagDetector:
    name = "htmlTag"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:  # noqa: ARG002
        return context.html_lang or None


class HashDetector:
    """Reads ``#lang=de``, ``#lng=de`` or ``#/de``."""

    name = "hash"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        fragment = urlsplit(context.url).fragment
        if not fragment:
            return None

        params = parse_qs(fragment.lstrip("/"))
        for param in _HASH_PARAMS:
            values = params.get(param)
            if values:
                found = _supported(values[0], options)
                if found:
                    return found
                break

        segments = [segment for segment in fragment.split("/") if segment]
        return _supported(segments[0], options) if segments else None


class SubdomainDetector:
    name = "subdomain"

    def lookup(self, options: DetectorOptions, context: DetectionContext) -> str | None:
        hostname = urlsplit(context.url).hostname or ""
        return _supported(hostname.split(".")[0], options) if hostname else None


def built_in_detectors() -> dict[str, LanguageDetector]:
    """Fresh name-to-strategy mapping of every built-in strategy."""
    detectors: list[LanguageDetector] = [
        CookieDetector(),
        LocalStorageDetector(),
        SessionStorageDetector(),
        NavigatorDetector(),
        QueryStringDetector(),
        PathDetector(),
        HtmlTagDetector(),
        HashDetector(),
        SubdomainDetector(),
    ]
    return {detector.name: detector for detector in detectors}
