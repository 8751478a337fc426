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
"""httpx-based HTTP client adapter."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import httpx


class HttpxClientAdapter:
    """HTTP client adapter backed by httpx.AsyncClient.

    Args:
        timeout: Per-request timeout.
        headers: Default headers sent with every request.
        transport: Optional httpx transport, e.g. ``httpx.MockTransport`` in tests.
    """

    def __init__(
        self,
        timeout: timedelta = timedelta(seconds=30),
        headers: dict[str, str] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(
            timeout=timeout.total_seconds(),
            headers={"Accept": "application/json", **(headers or {})},
            transport=transport,
        )

    async def request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        return await self._client.request(method, url, **kwargs)

    async def start(self) -> None:
        """No-op -- httpx client is ready after construction."""

    async def stop(self) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if not self._client.is_closed:
            await self._client.aclose()
