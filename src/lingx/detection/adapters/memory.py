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
"""In-memory persistence adapters.

``InMemoryCookieStore`` doubles as a response-cookie collector for server
use: every write is rendered as a ``Set-Cookie`` header value that the
host framework copies onto its response.
"""

from __future__ import annotations

from collections.abc import Mapping


class InMemoryCookieStore:
    """Cookie jar backed by a dict, recording the ``Set-Cookie`` values it emits."""

    def __init__(self, cookies: Mapping[str, str] | None = None) -> None:
        self._cookies: dict[str, str] = dict(cookies or {})
        self._set_cookie_headers: list[str] = []

    def get(self, name: str) -> str | None:
        value = self._cookies.get(name)
        return value or None

    def set(
        self,
        name: str,
        value: str,
        *,
        max_age: int,
        path: str = "/",
        domain: str | None = None,
        same_site: str = "Lax",
    ) -> None:
        if max_age <= 0:
            self._cookies.pop(name, None)
        else:
            self._cookies[name] = value

        header = f"{name}={value}; path={path}; max-age={max_age}; SameSite={same_site}"
        if domain:
            header += f"; domain={domain}"
        self._set_cookie_headers.append(header)

    @property
    def set_cookie_headers(self) -> list[str]:
        """``Set-Cookie`` header values produced so far, oldest first."""
        return list(self._set_cookie_headers)

    def as_dict(self) -> dict[str, str]:
        return dict(self._cookies)


class InMemoryKeyValueStore:
    """Dict-backed key/value store."""

    def __init__(self, items: Mapping[str, str] | None = None) -> None:
        self._items: dict[str, str] = dict(items or {})

    def get_item(self, key: str) -> str | None:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self._items[key] = value

    def remove_item(self, key: str) -> None:
        self._items.pop(key, None)

    def __len__(self) -> int:
        return len(self._items)
