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
"""Bundle cache port."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

Bundle = dict[str, Any]


@runtime_checkable
class BundleCacheAdapter(Protocol):
    """Abstract store of translation bundles keyed by language and namespace.

    Lookups are synchronous: the translation client consults the cache on
    every load before any network work.
    """

    def get(self, language: str, namespace: str | None = None) -> Bundle | None: ...

    def set(self, language: str, bundle: Bundle, namespace: str | None = None) -> None: ...

    def clear(self) -> None: ...

    def clear_language(self, language: str) -> None: ...

    @property
    def size(self) -> int: ...
