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
"""Result type for operations that degrade instead of raising.

Parse failures, missing keys and blocked storage are not errors for the
caller of the SDK: each has a sensible fallback value. Internal helpers
return a ``Result`` so the call site decides, explicitly, what the
recovered branch does::

    result = compile_message(source)
    if not result.ok:
        logger.warning("message_parse_failed", error=str(result.error))
        return source
    return result.value.render(values)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class Result(Generic[T]):
    """Outcome of an operation: a value, or a fallback plus the cause.

    Attributes:
        value: The produced value (or the fallback when recovered).
        error: The exception that triggered recovery, if any.
    """

    value: T
    error: Exception | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, value: T) -> Result[T]:
        return cls(value=value)

    @classmethod
    def recovered(cls, fallback: T, error: Exception) -> Result[T]:
        """Create a result whose value is *fallback* because of *error*."""
        return cls(value=fallback, error=error)
