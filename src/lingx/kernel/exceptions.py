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
"""Unified exception hierarchy for lingx.

All SDK exceptions inherit from LingxException, enabling unified error
handling across modules.

Categories:
- MessageFormatException: Template parse and format failures (recovered
  inside the formatter, never raised to callers of ``format``)
- ConfigurationException: Missing or contradictory SDK configuration
- InfrastructureException: Network and source failures
"""

from __future__ import annotations


class LingxException(Exception):
    """Base exception for all lingx errors.

    Carries an optional error code and context dict for structured error data.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "LOAD_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code
        self.context: dict = context if context is not None else {}


# =============================================================================
# Formatting Exceptions
# =============================================================================


class MessageFormatException(LingxException):
    """A message template could not be parsed or rendered."""


class MessageSyntaxException(MessageFormatException):
    """The message template is not valid ICU MessageFormat.

    ``position`` is the zero-based offset at which parsing stopped.
    """

    def __init__(self, message: str, position: int, source: str = "") -> None:
        super().__init__(
            f"{message} at position {position}",
            code="FORMAT_SYNTAX",
            context={"position": position, "source": source},
        )
        self.position = position


class MissingArgumentException(MessageFormatException):
    """A grammar argument (plural, select, number, date) has no value."""


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigurationException(LingxException):
    """SDK configuration is missing or inconsistent."""


class TranslationConfigurationException(ConfigurationException):
    """No usable translation data was provided for a server-side call."""


# =============================================================================
# Infrastructure Exceptions
# =============================================================================


class InfrastructureException(LingxException):
    """Infrastructure failures: network, filesystem, remote sources."""


class RetryExhaustedException(InfrastructureException):
    """All retry attempts have been exhausted without success."""


class TranslationLoadException(InfrastructureException):
    """A bundle could not be loaded from any configured source."""
