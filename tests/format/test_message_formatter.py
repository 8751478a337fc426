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
"""Tests for MessageFormatter: grammar, locale data, caching and recovery."""

import datetime as dt

import pytest
from structlog.testing import capture_logs

from lingx.format import CompiledTemplate, MessageFormatter, parse_message, resolve_locale

CART = "{count, plural, =0 {No items} one {1 item} other {{count} items}}"


@pytest.fixture
def formatter():
    return MessageFormatter("en")


class TestInterpolation:
    def test_simple_placeholder(self, formatter):
        assert formatter.format("Hello, {name}!", {"name": "World"}) == "Hello, World!"

    def test_multiple_and_repeated_placeholders(self, formatter):
        assert formatter.format("{w} {w} {other}", {"w": "a", "other": 3}) == "a a 3"

    def test_missing_placeholder_left_as_is(self, formatter):
        assert formatter.format("Hi {name}, {missing}", {"name": "Ann"}) == "Hi Ann, {missing}"

    def test_booleans_and_integral_floats(self, formatter):
        assert formatter.format("{flag} {n}", {"flag": True, "n": 5.0}) == "true 5"

    def test_none_renders_empty(self, formatter):
        assert formatter.format("[{v}]", {"v": None}) == "[]"

    def test_date_value_uses_locale_medium_format(self, formatter):
        assert formatter.format("Date: {d}", {"d": dt.date(2025, 12, 27)}) == "Date: Dec 27, 2025"

    def test_empty_message(self, formatter):
        assert formatter.format("", {"a": 1}) == ""

    def test_double_apostrophe_unescaped(self, formatter):
        assert formatter.format("It''s {name}", {"name": "Bo"}) == "It's Bo"

    @pytest.mark.parametrize(
        "message,values",
        [
            ("Hello, {name}!", {"name": "World"}),
            ("{ spaced } and {missing}", {"spaced": 1}),
            ("{a}{b}{a}", {"a": "x", "b": 2.0}),
            ("It's #1 for {who}", {"who": False}),
        ],
    )
    def test_fast_path_matches_full_parser(self, formatter, message, values):
        full = CompiledTemplate(parse_message(message), resolve_locale("en")).render(values)
        assert formatter.format(message, values) == full

    def test_fast_path_does_not_populate_cache(self, formatter):
        formatter.format("Hello, {name}!", {"name": "World"})
        assert formatter.cache_size == 0


class TestPlural:
    @pytest.mark.parametrize("count,expected", [(0, "No items"), (1, "1 item"), (5, "5 items")])
    def test_exact_and_category_arms(self, formatter, count, expected):
        assert formatter.format(CART, {"count": count}) == expected

    def test_pound_uses_locale_grouping(self, formatter):
        message = "{count, plural, one {# item} other {# items}}"
        assert formatter.format(message, {"count": 1000}) == "1,000 items"

    def test_offset(self, formatter):
        message = (
            "{n, plural, offset:1 =0 {nobody} =1 {just {who}} "
            "one {{who} and # other} other {{who} and # others}}"
        )
        assert formatter.format(message, {"n": 1, "who": "Ann"}) == "just Ann"
        assert formatter.format(message, {"n": 2, "who": "Ann"}) == "Ann and 1 other"
        assert formatter.format(message, {"n": 4, "who": "Ann"}) == "Ann and 3 others"

    @pytest.mark.parametrize("n,expected", [(1, "1st"), (2, "2nd"), (3, "3rd"), (4, "4th"), (11, "11th"), (22, "22nd")])
    def test_selectordinal(self, formatter, n, expected):
        message = "{n, selectordinal, one {#st} two {#nd} few {#rd} other {#th}}"
        assert formatter.format(message, {"n": n}) == expected

    def test_russian_categories(self):
        formatter = MessageFormatter("ru")
        message = "{n, plural, one {# файл} few {# файла} many {# файлов} other {# файла}}"
        assert formatter.format(message, {"n": 1}) == "1 файл"
        assert formatter.format(message, {"n": 3}) == "3 файла"
        assert formatter.format(message, {"n": 5}) == "5 файлов"


class TestSelect:
    def test_matching_arm(self, formatter):
        message = "{gender, select, male {He} female {She} other {They}} liked your post"
        assert formatter.format(message, {"gender": "female"}) == "She liked your post"

    def test_unknown_value_uses_other(self, formatter):
        message = "{gender, select, male {He} other {They}}"
        assert formatter.format(message, {"gender": "robot"}) == "They"


class TestNumber:
    def test_default_grouping(self, formatter):
        assert formatter.format("Count: {value, number}", {"value": 1234567}) == "Count: 1,234,567"

    def test_percent(self, formatter):
        assert formatter.format("{v, number, percent}", {"v": 0.25}) == "25%"

    def test_currency_uses_default_currency(self, formatter):
        assert formatter.format("{v, number, currency}", {"v": 1234.5}) == "$1,234.50"

    def test_currency_skeleton(self, formatter):
        assert formatter.format("{v, number, ::currency/EUR}", {"v": 1234.5}) == "€1,234.50"

    def test_integer(self, formatter):
        assert formatter.format("{v, number, integer}", {"v": 1234.4}) == "1,234"
        assert formatter.format("{v, number, ::integer}", {"v": 1234.4}) == "1,234"

    def test_precision_skeleton(self, formatter):
        assert formatter.format("{v, number, ::.00}", {"v": 3.14159}) == "3.14"

    def test_compact_short(self, formatter):
        assert formatter.format("{v, number, ::compact-short}", {"v": 1200}) == "1K"

    def test_ldml_pattern(self, formatter):
        assert formatter.format("{v, number, 0000}", {"v": 42}) == "0042"

    def test_german_grouping(self):
        formatter = MessageFormatter("de")
        assert formatter.format("Anzahl: {value, number}", {"value": 1234567}) == "Anzahl: 1.234.567"


class TestDateTime:
    moment = dt.datetime(2025, 12, 28, 10, 30)

    def test_date_presets(self, formatter):
        assert formatter.format("{d, date, medium}", {"d": self.moment}) == "Dec 28, 2025"
        assert formatter.format("{d, date, short}", {"d": self.moment}) == "12/28/25"
        assert formatter.format("{d, date}", {"d": self.moment}) == "Dec 28, 2025"

    def test_date_skeleton(self, formatter):
        assert formatter.format("{d, date, ::yMMMd}", {"d": self.moment}) == "Dec 28, 2025"

    def test_time_short(self, formatter):
        assert "10:30" in formatter.format("{d, time, short}", {"d": self.moment})

    def test_iso_string_and_timestamp(self, formatter):
        assert formatter.format("{d, date, medium}", {"d": "2025-12-28T10:30:00"}) == "Dec 28, 2025"
        assert formatter.format("{d, date, medium}", {"d": 0}) == "Jan 1, 1970"


class TestRecovery:
    def test_parse_error_returns_original_and_warns(self, formatter):
        message = "{count, plural, one {x}"
        with capture_logs() as logs:
            assert formatter.format(message, {"count": 1}) == message
        assert any(entry["event"] == "message_parse_failed" for entry in logs)

    def test_parse_failure_is_not_cached(self, formatter):
        formatter.format("{broken, plural, one {x}}", {"broken": 1})
        assert formatter.cache_size == 0

    def test_missing_grammar_argument_returns_original(self, formatter):
        assert formatter.format(CART, {}) == CART
        assert formatter.format(CART) == CART

    def test_non_numeric_plural_value_returns_original(self, formatter):
        with capture_logs() as logs:
            assert formatter.format(CART, {"count": "many"}) == CART
        assert any(entry["event"] == "message_format_failed" for entry in logs)

    def test_unsupported_skeleton_returns_original(self, formatter):
        message = "{v, number, ::bogus-token}"
        assert formatter.format(message, {"v": 1}) == message

    def test_deeply_nested_message_returns_original(self, formatter):
        message = "{a, select, other {" * 400 + "x" + "}}" * 400
        with capture_logs() as logs:
            assert formatter.format(message, {"a": "z"}) == message
        assert any(entry["event"] == "message_parse_failed" for entry in logs)


class TestTemplateCache:
    def test_repeated_format_reuses_template(self, formatter):
        formatter.format(CART, {"count": 1})
        formatter.format(CART, {"count": 2})
        assert formatter.cache_size == 1

    def test_deterministic(self, formatter):
        results = {formatter.format(CART, {"count": 3}) for _ in range(5)}
        assert results == {"3 items"}

    def test_evicts_oldest_inserted(self):
        formatter = MessageFormatter("en", cache_size=2)
        first = "{a, number}"
        second = "{b, number}"
        third = "{c, number}"
        formatter.format(first, {"a": 1})
        formatter.format(second, {"b": 1})
        formatter.format(first, {"a": 2})
        formatter.format(third, {"c": 1})

        assert formatter.cache_size == 2
        assert list(formatter._cache) == [second, third]

    def test_clear_cache(self, formatter):
        formatter.format(CART, {"count": 1})
        formatter.clear_cache()
        assert formatter.cache_size == 0

    def test_rejects_zero_size(self):
        with pytest.raises(ValueError):
            MessageFormatter("en", cache_size=0)


class TestSetLanguage:
    def test_same_language_keeps_cache(self, formatter):
        formatter.format(CART, {"count": 1})
        formatter.set_language("en")
        assert formatter.cache_size == 1

    def test_new_language_clears_cache_and_changes_output(self, formatter):
        message = "{value, number}"
        english = formatter.format(message, {"value": 1234567})
        formatter.set_language("de")

        assert formatter.language == "de"
        assert formatter.cache_size == 0
        german = formatter.format(message, {"value": 1234567})
        assert english == "1,234,567"
        assert german == "1.234.567"

    def test_unknown_language_falls_back(self):
        formatter = MessageFormatter("cimode")
        assert formatter.format("{v, number}", {"v": 1000}) == "1,000"


class TestHasIcuSyntax:
    @pytest.mark.parametrize(
        "message",
        [CART, "{g, select, a {x} other {y}}", "{v, number}", "{d, date, short}", "{ n , selectordinal, other {#}}"],
    )
    def test_detects_grammar(self, message):
        assert MessageFormatter.has_icu_syntax(message)

    @pytest.mark.parametrize("message", ["Hello {name}", "plain", "{plural}", "{a}, number"])
    def test_plain_messages(self, message):
        assert not MessageFormatter.has_icu_syntax(message)
