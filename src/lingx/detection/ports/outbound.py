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
"""Outbound ports for language-preference persistence.

Stores signal blocked or unavailable storage by raising ``OSError``
(typically ``PermissionError``); the detector treats such a store as empty.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class CookieStore(Protocol):
    """Read and write access to the cookies of one user agent."""

    def get(self, name: str) -> str | None: ...

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        path: str = "/",
        domain: str | None = None,
        same_site: str = "Lax",
    ) -> None: ...


@runtime_checkable
class KeyValueStore(Protocol):
    """A string key/value store such as a per-origin or per-tab storage area."""

    def get_item(self, key: str) -> str | None: ...

    def set_item(self, key: str, value: str) -> None: ...

    def remove_item(self, key: str) -> None: ...
