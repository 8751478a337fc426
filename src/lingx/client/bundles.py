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
"""Bundle helpers shared by the runtime client and server-side translations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from lingx.cache.bundle_cache import KEY_DELIMITER
from lingx.cache.ports.outbound import Bundle


def resolve_message(bundle: Mapping[str, Any], key: str) -> str | None:
    """Look up *key* as a flat key first, then as a dotted path.

    Both ``{"common.greeting": "Hi"}`` and ``{"common": {"greeting": "Hi"}}``
    resolve ``"common.greeting"``. Returns ``None`` unless the value found is
    a string.
    """
    value = bundle.get(key)
    if isinstance(value, str):
        return value

    current: Any = bundle
    for part in key.split("."):
        if not isinstance(current, Mapping):
            return None
        current = current.get(part)
    return current if isinstance(current, str) else None


def namespaced_key(namespace: str | None, key: str) -> str:
    return f"{namespace}{KEY_DELIMITER}{key}" if namespace else key


def prefix_namespace(namespace: str, bundle: Mapping[str, Any]) -> Bundle:
    """Prefix every top-level key of *bundle* with ``namespace:``."""
    return {namespaced_key(namespace, key): value for key, value in bundle.items()}


def is_multi_language(data: Mapping[str, Any] | None, language: str) -> bool:
    """True when *data* maps *language* to a nested bundle, e.g. ``{"en": {...}}``."""
    return bool(data) and isinstance(data.get(language), Mapping)  # type: ignore[union-attr]


def select_static_bundle(data: Mapping[str, Any] | None, language: str, default_language: str) -> Bundle | None:
    """Pick the bundle for *language* out of single- or multi-language static data.

    Single-language data only covers *default_language*; multi-language data
    covers the languages it names.
    """
    if not data:
        return None
    if is_multi_language(data, language):
        return dict(data[language])
    if is_multi_language(data, default_language):
        return None
    if language == default_language:
        return dict(data)
    return None
