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
"""Detection context: everything a strategy may inspect about the current user."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from http.cookies import CookieError, SimpleCookie

from lingx.detection.adapters.memory import InMemoryCookieStore
from lingx.detection.ports.outbound import CookieStore, KeyValueStore


@dataclass
class DetectionContext:
    """Request-scoped view of the user agent.

    Attributes:
        url: Full URL of the current page or request.
        languages: Preferred languages, most preferred first.
        html_lang: Value of the document's ``lang`` attribute, if known.
        cookies: Cookie jar for the user agent.
        local_storage: Durable per-origin store, or ``None`` when unavailable.
        session_storage: Per-tab store, or ``None`` when unavailable.
    """

    url: str = ""
    languages: list[str] = field(default_factory=list)
    html_lang: str | None = None
    cookies: CookieStore = field(default_factory=InMemoryCookieStore)
    local_storage: KeyValueStore | None = None
    session_storage: KeyValueStore | None = None

    @classmethod
    def from_headers(cls, url: str, headers: Mapping[str, str]) -> DetectionContext:
        """Build a context from an incoming HTTP request.

        Reads the ``Cookie`` and ``Accept-Language`` headers; header names are
        matched case-insensitively.
        """
        lowered = {name.lower(): value for name, value in headers.items()}
        return cls(
            url=url,
            languages=parse_accept_language(lowered.get("accept-language", "")),
            cookies=InMemoryCookieStore(_parse_cookie_header(lowered.get("cookie", ""))),
        )


def parse_accept_language(header: str) -> list[str]:
    """Return the language tags of an ``Accept-Language`` header by descending quality.

    Handles the standard format, e.g. ``en-US,en;q=0.9,fr;q=0.8``. Tags with
    ``q=0``, malformed quality values and the ``*`` wildcard are dropped; ties
    keep header order.
    """
    weighted: list[tuple[float, int, str]] = []

    for index, part in enumerate(header.split(",")):
        part = part.strip()
        if not part:
            continue

        tag, _, params = part.partition(";")
        tag = tag.strip()
        quality = 1.0
        params = params.strip()
        if params[:2].lower() == "q=":
            try:
                quality = float(params[2:].strip())
            except ValueError:
                continue

        if not tag or tag == "*" or quality <= 0:
            continue
        weighted.append((-quality, index, tag))

    return [tag for _, _, tag in sorted(weighted)]


def _parse_cookie_header(header: str) -> dict[str, str]:
    if not header:
        return {}
    jar: SimpleCookie = SimpleCookie()
    try:
        jar.load(header)
    except CookieError:
        return {}
    return {name: morsel.value for name, morsel in jar.items()}
