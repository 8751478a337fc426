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
"""Compiled, locale-bound message templates.

A ``CompiledTemplate`` pairs the parsed nodes of one message with the
Babel locale whose plural rules, number symbols and calendar data it
renders with. Templates never outlive their locale: the formatter drops
them all when the language changes.
"""

from __future__ import annotations

import datetime as dt
from collections.abc import Mapping
from decimal import Decimal, InvalidOperation
from typing import Any

import structlog
from babel import Locale, UnknownLocaleError
from babel import dates as babel_dates
from babel import numbers as babel_numbers

from lingx.format.parser import (
    ArgumentNode,
    DateTimeNode,
    Node,
    NumberNode,
    PluralNode,
    PoundNode,
    SelectNode,
    TextNode,
)
from lingx.kernel.exceptions import MessageFormatException, MissingArgumentException

logger = structlog.get_logger("lingx.format")

DEFAULT_LOCALE = "en"


def resolve_locale(language: str) -> Locale:
    """Map a language tag (``en``, ``en-US``, ``pt_BR``) to a Babel locale.

    Unknown tags fall back to the base subtag, then to English, so that
    pseudo-locales used for testing still format.
    """
    tag = language.replace("_", "-")
    for candidate in (tag, tag.split("-")[0]):
        try:
            return Locale.parse(candidate, sep="-")
        except (UnknownLocaleError, ValueError, TypeError):
            continue
    logger.debug("unknown_locale", language=language, fallback=DEFAULT_LOCALE)
    return Locale.parse(DEFAULT_LOCALE)


def stringify(value: Any, locale: Locale) -> str:
    """Render a simple ``{name}`` argument.

    Shared by the parser-based renderer and the interpolation fast path so
    both produce identical output.
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, dt.datetime):
        return babel_dates.format_datetime(value, "medium", locale=locale)
    if isinstance(value, dt.date):
        return babel_dates.format_date(value, "medium", locale=locale)
    return str(value)


class CompiledTemplate:
    """Parsed form of one message string for one locale."""

    __slots__ = ("_nodes", "_locale", "_default_currency")

    def __init__(self, nodes: list[Node], locale: Locale, default_currency: str = "USD") -> None:
        self._nodes = nodes
        self._locale = locale
        self._default_currency = default_currency

    @property
    def locale(self) -> Locale:
        return self._locale

    def render(self, values: Mapping[str, Any]) -> str:
        """Render with *values*.

        Raises:
            MessageFormatException: If a grammar argument is missing or has
                a value of the wrong kind.
        """
        return self._render_nodes(self._nodes, values, pound=None)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _render_nodes(self, nodes: list[Node], values: Mapping[str, Any], pound: Decimal | None) -> str:
        parts: list[str] = []
        for node in nodes:
            if isinstance(node, TextNode):
                parts.append(node.value)
            elif isinstance(node, ArgumentNode):
                if node.name in values:
                    parts.append(stringify(values[node.name], self._locale))
                else:
                    parts.append(node.raw)
            elif isinstance(node, PoundNode):
                if pound is None:
                    parts.append("#")
                else:
                    parts.append(babel_numbers.format_decimal(pound, locale=self._locale))
            elif isinstance(node, PluralNode):
                parts.append(self._render_plural(node, values))
            elif isinstance(node, SelectNode):
                parts.append(self._render_select(node, values, pound))
            elif isinstance(node, NumberNode):
                parts.append(self._render_number(node, values))
            elif isinstance(node, DateTimeNode):
                parts.append(self._render_datetime(node, values))
        return "".join(parts)

    def _render_plural(self, node: PluralNode, values: Mapping[str, Any]) -> str:
        number = _to_number(node.name, _require(node.name, values))

        for selector, arm in node.options.items():
            if selector.startswith("=") and Decimal(selector[1:]) == number:
                return self._render_nodes(arm, values, pound=number - node.offset)

        relative = number - node.offset
        rule = self._locale.ordinal_form if node.ordinal else self._locale.plural_form
        category = rule(relative)
        arm = node.options.get(category, node.options["other"])
        return self._render_nodes(arm, values, pound=relative)

    def _render_select(self, node: SelectNode, values: Mapping[str, Any], pound: Decimal | None) -> str:
        key = stringify(_require(node.name, values), self._locale)
        arm = node.options.get(key, node.options["other"])
        return self._render_nodes(arm, values, pound=pound)

    def _render_number(self, node: NumberNode, values: Mapping[str, Any]) -> str:
        number = _to_number(node.name, _require(node.name, values))
        style = node.style
        locale = self._locale

        if style is None:
            return babel_numbers.format_decimal(number, locale=locale)
        if style == "integer":
            return babel_numbers.format_decimal(number, format="#,##0", locale=locale)
        if style == "percent":
            return babel_numbers.format_percent(number, locale=locale)
        if style == "currency":
            return babel_numbers.format_currency(number, self._default_currency, locale=locale)
        if style.startswith("::"):
            return self._render_skeleton(number, style[2:].split())
        return babel_numbers.format_decimal(number, format=style, locale=locale)

    def _render_skeleton(self, number: Decimal, tokens: list[str]) -> str:
        """Render the common subset of ICU number skeletons."""
        locale = self._locale
        currency: str | None = None
        percent = False
        compact: str | None = None
        fraction: str | None = None
        integer = "#,##0"

        for token in tokens:
            if token == "percent":
                percent = True
            elif token.startswith("currency/"):
                currency = token.split("/", 1)[1]
            elif token in ("integer", "precision-integer"):
                fraction = ""
            elif token in ("compact-short", "K"):
                compact = "short"
            elif token in ("compact-long", "KK"):
                compact = "long"
            elif token in ("group-off", ",_"):
                integer = "0"
            elif token.startswith(".") and set(token[1:]) <= {"0", "#"}:
                fraction = token
            elif token.startswith("scale/"):
                number = number * Decimal(token.split("/", 1)[1])
            else:
                raise MessageFormatException(f"Unsupported number skeleton token '{token}'")

        if compact is not None:
            digits = len(fraction) - 1 if fraction else 0
            return babel_numbers.format_compact_decimal(
                number, format_type=compact, fraction_digits=digits, locale=locale
            )
        if currency is not None:
            if fraction is None:
                return babel_numbers.format_currency(number, currency, locale=locale)
            return babel_numbers.format_currency(
                number, currency, format=f"¤{integer}{fraction}", currency_digits=False, locale=locale
            )
        if percent:
            pattern = f"{integer}{fraction}%" if fraction is not None else None
            return babel_numbers.format_percent(number, format=pattern, locale=locale)
        if fraction is not None or integer != "#,##0":
            return babel_numbers.format_decimal(number, format=f"{integer}{fraction or ''}", locale=locale)
        return babel_numbers.format_decimal(number, locale=locale)

    def _render_datetime(self, node: DateTimeNode, values: Mapping[str, Any]) -> str:
        moment = _to_datetime(node.name, _require(node.name, values))
        style = node.style or "medium"
        locale = self._locale

        if style.startswith("::"):
            return babel_dates.format_skeleton(style[2:], moment, locale=locale)
        if node.kind == "date":
            return babel_dates.format_date(moment, format=style, locale=locale)
        return babel_dates.format_time(moment, format=style, locale=locale)


# ---------------------------------------------------------------------------
# Value coercion
# ---------------------------------------------------------------------------


def _require(name: str, values: Mapping[str, Any]) -> Any:
    if name not in values or values[name] is None:
        raise MissingArgumentException(f"No value for argument '{name}'", context={"argument": name})
    return values[name]


def _to_number(name: str, value: Any) -> Decimal:
    if isinstance(value, bool):
        raise MessageFormatException(f"Argument '{name}' must be a number", context={"argument": name})
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    try:
        return Decimal(str(value))
    except InvalidOperation as exc:
        raise MessageFormatException(
            f"Argument '{name}' must be a number, got {value!r}", context={"argument": name}
        ) from exc


def _to_datetime(name: str, value: Any) -> dt.datetime:
    """Coerce datetimes, dates, ISO strings and POSIX timestamps (seconds)."""
    if isinstance(value, dt.datetime):
        return value
    if isinstance(value, dt.date):
        return dt.datetime.combine(value, dt.time())
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return dt.datetime.fromtimestamp(value, tz=dt.timezone.utc)
    if isinstance(value, str):
        try:
            return dt.datetime.fromisoformat(value)
        except ValueError as exc:
            raise MessageFormatException(
                f"Argument '{name}' is not an ISO date: {value!r}", context={"argument": name}
            ) from exc
    raise MessageFormatException(f"Argument '{name}' must be a date or time", context={"argument": name})
