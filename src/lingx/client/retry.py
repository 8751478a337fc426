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
"""Retry with exponential backoff and jitter for bundle sources."""

from __future__ import annotations

import asyncio
import random
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any

import structlog

from lingx.kernel.exceptions import RetryExhaustedException

logger = structlog.get_logger("lingx.client")


class RetryPolicy:
    """Retry policy with capped exponential backoff.

    The delay before retry *n* (0-based) is ``base_delay * 2**n`` capped at
    ``max_delay``, plus up to ``jitter`` of that value chosen at random.

    Args:
        max_attempts: Maximum number of attempts (including the first).
        base_delay: Base delay between retries (doubled each attempt).
        max_delay: Upper bound for a single delay before jitter.
        jitter: Fraction of the delay added at random.
        retry_on: Tuple of exception types to retry on. Defaults to all.
        sleep: Coroutine used to wait between attempts.
    """

    def __init__(
        self,
        max_attempts: int = 3,
        base_delay: timedelta = timedelta(seconds=1),
        max_delay: timedelta = timedelta(seconds=10),
        jitter: float = 0.1,
        retry_on: tuple[type[Exception], ...] = (Exception,),
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._max_attempts = max_attempts
        self._base_delay = base_delay.total_seconds()
        self._max_delay = max_delay.total_seconds()
        self._jitter = jitter
        self._retry_on = retry_on
        self._sleep = sleep

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def delay_for(self, attempt: int) -> float:
        """Delay in seconds after failed attempt number *attempt* (0-based)."""
        delay = min(self._base_delay * (2**attempt), self._max_delay)
        return delay + delay * self._jitter * random.random()

    async def execute(self, func: Callable[..., Awaitable[Any]], *args: Any, **kwargs: Any) -> Any:
        """Execute a function with retry logic.

        Raises:
            RetryExhaustedException: After the last attempt fails, chained to
                the last error.
        """
        last_exception: Exception | None = None

        for attempt in range(self._max_attempts):
            try:
                return await func(*args, **kwargs)
            except self._retry_on as exc:
                last_exception = exc
                if attempt < self._max_attempts - 1:
                    delay = self.delay_for(attempt)
                    logger.debug("retry_scheduled", attempt=attempt + 1, delay=round(delay, 3), error=str(exc))
                    await self._sleep(delay)

        raise RetryExhaustedException(
            f"Gave up after {self._max_attempts} attempts: {last_exception}",
            context={"attempts": self._max_attempts},
        ) from last_exception
