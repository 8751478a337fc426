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
"""In-memory bundle cache with TTL expiry and LRU eviction."""

from __future__ import annotations

import copy
import time
from collections import OrderedDict
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta

from lingx.cache.ports.outbound import Bundle

KEY_DELIMITER = ":"


@dataclass
class CacheEntry:
    bundle: Bundle
    created_at: float
    expires_at: float
    last_accessed: float


def cache_key(language: str, namespace: str | None = None) -> str:
    """Build the cache key for a language and optional namespace."""
    return f"{language}{KEY_DELIMITER}{namespace}" if namespace else language


class BundleCache:
    """Bounded, expiring store of translation bundles.

    Entries are readable while ``now < expires_at``; an expired entry is
    removed the next time it is read, never by a background sweep. When the
    cache is full, storing a *new* key evicts the least recently accessed
    entry. Replacing an existing key never evicts.

    Args:
        ttl: Lifetime of each entry.
        max_entries: Capacity of the cache.
        clock: Monotonic time source in seconds, injectable for tests.
    """

    def __init__(
        self,
        ttl: timedelta = timedelta(minutes=5),
        max_entries: int = 50,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self._ttl = ttl.total_seconds()
        self._max_entries = max_entries
        self._clock = clock
        # Ordered from least to most recently accessed.
        self._entries: OrderedDict[str, CacheEntry] = OrderedDict()

    @property
    def size(self) -> int:
        return len(self._entries)

    def get(self, language: str, namespace: str | None = None) -> Bundle | None:
        """Return a copy of the bundle for the key, or None if absent or expired."""
        key = cache_key(language, namespace)
        entry = self._entries.get(key)
        if entry is None:
            return None

        now = self._clock()
        if now >= entry.expires_at:
            del self._entries[key]
            return None

        entry.last_accessed = now
        self._entries.move_to_end(key)
        return copy.deepcopy(entry.bundle)

    def set(self, language: str, bundle: Bundle, namespace: str | None = None) -> None:
        """Store a copy of *bundle*, evicting the LRU entry if a new key overflows."""
        key = cache_key(language, namespace)
        if key not in self._entries and len(self._entries) >= self._max_entries:
            self._entries.popitem(last=False)

        now = self._clock()
        self._entries[key] = CacheEntry(
            bundle=copy.deepcopy(bundle),
            created_at=now,
            expires_at=now + self._ttl,
            last_accessed=now,
        )
        self._entries.move_to_end(key)

    def clear(self) -> None:
        """Remove all entries."""
        self._entries.clear()

    def clear_language(self, language: str) -> None:
        """Remove the language entry and all of its namespaced entries."""
        prefix = f"{language}{KEY_DELIMITER}"
        for key in [k for k in self._entries if k == language or k.startswith(prefix)]:
            del self._entries[key]
