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
"""MessageFormatter: ICU message rendering with a per-locale template cache."""

from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

import structlog

from lingx.format.parser import NAME_PATTERN, parse_message
from lingx.format.template import CompiledTemplate, resolve_locale, stringify
from lingx.kernel.exceptions import MessageFormatException, MessageSyntaxException
from lingx.kernel.result import Result

logger = structlog.get_logger("lingx.format")

DEFAULT_CACHE_SIZE = 500

_ICU_SYNTAX_RE = re.compile(
    r"\{\s*[^{}\s,]+\s*,\s*(?:plural|select|selectordinal|number|date|time)\s*[,}]"
)
_PLACEHOLDER_RE = re.compile(r"\{\s*(" + NAME_PATTERN + r")\s*\}")
_QUOTE_RE = re.compile(r"'['{}]")


class MessageFormatter:
    """Formats ICU MessageFormat strings for one active locale.

    Compiled templates are cached by message text. The cache is bounded and
    evicts the oldest-inserted entry once full. Changing the language drops
    every cached template, since plural rules and number symbols are bound
    at compile time.

    ``format`` never raises: a message that fails to parse or render is
    returned unchanged and a warning is logged.
    """

    def __init__(
        self,
        language: str = "en",
        cache_size: int = DEFAULT_CACHE_SIZE,
        default_currency: str = "USD",
    ) -> None:
        if cache_size < 1:
            raise ValueError("cache_size must be at least 1")
        self._language = language
        self._locale = resolve_locale(language)
        self._max_size = cache_size
        self._default_currency = default_currency
        self._cache: dict[str, CompiledTemplate] = {}

    @property
    def language(self) -> str:
        return self._language

    @property
    def cache_size(self) -> int:
        """Number of compiled templates currently cached."""
        return len(self._cache)

    def set_language(self, language: str) -> None:
        if language == self._language:
            return
        self._language = language
        self._locale = resolve_locale(language)
        self._cache.clear()
        logger.debug("formatter_language_changed", language=language)

    def clear_cache(self) -> None:
        self._cache.clear()

    @staticmethod
    def has_icu_syntax(message: str) -> bool:
        """True when *message* contains a plural, select, number, date or time argument."""
        return bool(_ICU_SYNTAX_RE.search(message))

    def format(self, message: str, values: Mapping[str, Any] | None = None) -> str:
        if not message:
            return message
        values = values or {}

        if self._is_interpolation_only(message):
            return self._interpolate(message, values)

        compiled = self._compile(message)
        if not compiled.ok:
            logger.warning(
                "message_parse_failed",
                message=message,
                language=self._language,
                error=str(compiled.error),
            )
            return message

        try:
            return compiled.value.render(values)
        except MessageFormatException as exc:
            logger.warning("message_format_failed", message=message, language=self._language, error=exc.message)
        except (ArithmeticError, LookupError, ValueError, TypeError) as exc:
            logger.warning("message_format_failed", message=message, language=self._language, error=str(exc))
        return message

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _compile(self, message: str) -> Result[CompiledTemplate | None]:
        cached = self._cache.get(message)
        if cached is not None:
            return Result.success(cached)

        try:
            nodes = parse_message(message)
        except MessageSyntaxException as exc:
            return Result.recovered(None, exc)

        template = CompiledTemplate(nodes, self._locale, self._default_currency)
        if len(self._cache) >= self._max_size:
            del self._cache[next(iter(self._cache))]
        self._cache[message] = template
        return Result.success(template)

    @staticmethod
    def _is_interpolation_only(message: str) -> bool:
        if _QUOTE_RE.search(message):
            return False
        remainder = _PLACEHOLDER_RE.sub("", message)
        return "{" not in remainder and "}" not in remainder

    def _interpolate(self, message: str, values: Mapping[str, Any]) -> str:
        locale = self._locale

        def _replace(match: re.Match[str]) -> str:
            name = match.group(1)
            if name not in values:
                return match.group(0)
            return stringify(values[name], locale)

        return _PLACEHOLDER_RE.sub(_replace, message)
