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
"""Bundle sources: where the client fetches translations from.

* ``RemoteBundleSource`` -- the translation platform's SDK endpoint.
* ``LocalHttpBundleSource`` -- static JSON files served next to the app.
* ``FileSystemBundleSource`` -- JSON or YAML files in a local directory.

Every source raises on failure; retrying and falling back between sources
is the client's job.
"""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Protocol, runtime_checkable

import yaml  # type: ignore[import-untyped]
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from lingx.cache.ports.outbound import Bundle
from lingx.client.ports.outbound import HttpClientPort, HttpResponse
from lingx.kernel.exceptions import InfrastructureException

SDK_TRANSLATIONS_PATH = "/sdk/translations"

_FILE_SUFFIXES = (".json", ".yaml", ".yml")


class SdkTranslationsResponse(BaseModel):
    """Body of ``GET /sdk/translations``."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    language: str
    translations: dict[str, Any]
    available_languages: list[str] | None = Field(default=None, alias="availableLanguages")


@dataclass(frozen=True)
class LoadedBundle:
    """A fetched bundle, plus the language list when the source reports one."""

    bundle: Bundle
    available_languages: list[str] | None = field(default=None)


@runtime_checkable
class BundleSource(Protocol):
    """Port for anything that can produce a bundle for a language."""

    name: str

    async def fetch(self, language: str, namespace: str | None = None) -> LoadedBundle: ...


class RemoteBundleSource:
    """Fetches bundles from the platform API, scoped to project, space and environment."""

    name = "remote"

    def __init__(
        self,
        http: HttpClientPort,
        api_url: str,
        project: str,
        space: str,
        environment: str,
    ) -> None:
        self._http = http
        self._url = api_url.rstrip("/") + SDK_TRANSLATIONS_PATH
        self._project = project
        self._space = space
        self._environment = environment

    async def fetch(self, language: str, namespace: str | None = None) -> LoadedBundle:
        params = {
            "project": self._project,
            "space": self._space,
            "environment": self._environment,
            "lang": language,
        }
        if namespace:
            params["namespace"] = namespace

        response = await self._http.request("GET", self._url, params=params)
        body = _json_body(response, self._url)
        try:
            payload = SdkTranslationsResponse.model_validate(body)
        except ValidationError as exc:
            raise InfrastructureException(
                f"Malformed translations response from {self._url}",
                code="INVALID_RESPONSE",
                context={"language": language},
            ) from exc
        return LoadedBundle(payload.translations, payload.available_languages)


class LocalHttpBundleSource:
    """Fetches ``{locale_path}/{language}.json`` (or ``{language}/{namespace}.json``)."""

    name = "local"

    def __init__(self, http: HttpClientPort, locale_path: str) -> None:
        self._http = http
        self._locale_path = locale_path.rstrip("/")

    def url_for(self, language: str, namespace: str | None = None) -> str:
        if namespace:
            return f"{self._locale_path}/{language}/{namespace}.json"
        return f"{self._locale_path}/{language}.json"

    async def fetch(self, language: str, namespace: str | None = None) -> LoadedBundle:
        url = self.url_for(language, namespace)
        response = await self._http.request("GET", url)
        return LoadedBundle(_require_mapping(_json_body(response, url), url))


class FileSystemBundleSource:
    """Reads bundles from ``{locale_dir}/{language}.json|yaml|yml``.

    Namespaced bundles live in a per-language directory::

        locales/
          en.json
          en/checkout.yaml
    """

    name = "local"

    def __init__(self, locale_dir: str | Path) -> None:
        self._locale_dir = Path(locale_dir)

    def path_for(self, language: str, namespace: str | None = None) -> Path | None:
        stem = self._locale_dir / language / namespace if namespace else self._locale_dir / language
        for suffix in _FILE_SUFFIXES:
            candidate = stem.with_name(stem.name + suffix)
            if candidate.is_file():
                return candidate
        return None

    async def fetch(self, language: str, namespace: str | None = None) -> LoadedBundle:
        return await asyncio.to_thread(self._read, language, namespace)

    def _read(self, language: str, namespace: str | None) -> LoadedBundle:
        path = self.path_for(language, namespace)
        if path is None:
            raise InfrastructureException(
                f"No bundle file for '{language}' in {self._locale_dir}",
                code="BUNDLE_NOT_FOUND",
                context={"language": language, "namespace": namespace},
            )
        with path.open(encoding="utf-8") as fh:
            try:
                data = json.load(fh) if path.suffix == ".json" else yaml.safe_load(fh)
            except (json.JSONDecodeError, yaml.YAMLError) as exc:
                raise InfrastructureException(f"Cannot parse {path}", code="INVALID_BUNDLE") from exc
        return LoadedBundle(_require_mapping(data or {}, str(path)))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _json_body(response: HttpResponse, url: str) -> Any:
    if response.status_code >= 400:
        raise InfrastructureException(
            f"GET {url} failed with HTTP {response.status_code}",
            code="HTTP_ERROR",
            context={"status": response.status_code},
        )
    try:
        return response.json()
    except ValueError as exc:
        raise InfrastructureException(f"GET {url} did not return JSON", code="INVALID_RESPONSE") from exc


def _require_mapping(data: Any, origin: str) -> Bundle:
    if not isinstance(data, dict):
        raise InfrastructureException(f"Bundle from {origin} is not an object", code="INVALID_BUNDLE")
    return data
