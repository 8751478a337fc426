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
"""ICU MessageFormat parser.

Turns a message string into a list of nodes::

    parse_message("{count, plural, =0 {No items} other {# items}}")
    # [PluralNode(name='count', offset=0, ordinal=False,
    #             options={'=0': [TextNode('No items')],
    #                      'other': [PoundNode(), TextNode(' items')]})]

Supported argument types: simple ``{name}``, ``plural``,
``selectordinal``, ``select``, ``number``, ``date`` and ``time``.
Apostrophes quote syntax characters: ``''`` is a literal apostrophe and
``'{'`` a literal brace (``'#'`` likewise inside plural arms).
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import NoReturn, Union

from lingx.kernel.exceptions import MessageSyntaxException

NAME_PATTERN = r"[^\s{},'#]+"
MAX_NESTING = 50

_NAME_RE = re.compile(NAME_PATTERN)
_KEYWORD_RE = re.compile(r"[A-Za-z]+")
_SELECTOR_RE = re.compile(r"=-?\d+(?:\.\d+)?|[^\s{}]+")
_OFFSET_RE = re.compile(r"offset\s*:\s*(\d+)")


@dataclass(frozen=True)
class TextNode:
    value: str


@dataclass(frozen=True)
class ArgumentNode:
    name: str
    raw: str


@dataclass(frozen=True)
class PoundNode:
    pass


@dataclass(frozen=True)
class NumberNode:
    name: str
    style: str | None = None


@dataclass(frozen=True)
class DateTimeNode:
    name: str
    kind: str  # "date" or "time"
    style: str | None = None


@dataclass(frozen=True)
class SelectNode:
    name: str
    options: dict[str, list[Node]] = field(default_factory=dict)


@dataclass(frozen=True)
class PluralNode:
    name: str
    options: dict[str, list[Node]] = field(default_factory=dict)
    offset: int = 0
    ordinal: bool = False


Node = Union[TextNode, ArgumentNode, PoundNode, NumberNode, DateTimeNode, SelectNode, PluralNode]


def parse_message(source: str) -> list[Node]:
    """Parse *source* into nodes.

    Raises:
        MessageSyntaxException: If the message is not valid MessageFormat.
    """
    return _Parser(source).parse()


class _Parser:
    def __init__(self, source: str) -> None:
        self._src = source
        self._pos = 0
        self._depth = 0

    def parse(self) -> list[Node]:
        nodes = self._message(in_plural=False, nested=False)
        if self._pos < len(self._src):
            self._fail("Unmatched '}'")
        return nodes

    # ------------------------------------------------------------------
    # Messages and literal text
    # ------------------------------------------------------------------

    def _message(self, in_plural: bool, nested: bool) -> list[Node]:
        nodes: list[Node] = []
        text: list[str] = []

        def flush() -> None:
            if text:
                nodes.append(TextNode("".join(text)))
                text.clear()

        src = self._src
        while self._pos < len(src):
            ch = src[self._pos]
            if ch == "{":
                flush()
                nodes.append(self._argument())
            elif ch == "}":
                if not nested:
                    self._fail("Unmatched '}'")
                break
            elif ch == "#" and in_plural:
                flush()
                nodes.append(PoundNode())
                self._pos += 1
            elif ch == "'":
                text.append(self._quoted(in_plural))
            else:
                text.append(ch)
                self._pos += 1

        flush()
        return nodes

    def _quoted(self, in_plural: bool) -> str:
        src = self._src
        nxt = src[self._pos + 1] if self._pos + 1 < len(src) else ""
        if nxt == "'":
            self._pos += 2
            return "'"
        if nxt not in ("{", "}") and not (in_plural and nxt == "#"):
            self._pos += 1
            return "'"

        # Quoted literal: runs to the next lone apostrophe or to the end.
        self._pos += 1
        out: list[str] = []
        while self._pos < len(src):
            ch = src[self._pos]
            if ch == "'":
                if src[self._pos + 1 : self._pos + 2] == "'":
                    out.append("'")
                    self._pos += 2
                    continue
                self._pos += 1
                return "".join(out)
            out.append(ch)
            self._pos += 1
        return "".join(out)

    # ------------------------------------------------------------------
    # Arguments
    # ------------------------------------------------------------------

    def _argument(self) -> Node:
        start = self._pos
        self._pos += 1  # "{"
        self._depth += 1
        if self._depth > MAX_NESTING:
            self._fail(f"Arguments nested deeper than {MAX_NESTING} levels")
        self._skip_ws()
        name = self._match(_NAME_RE, "Expected argument name")
        self._skip_ws()

        ch = self._peek()
        if ch == "}":
            self._pos += 1
            self._depth -= 1
            return ArgumentNode(name=name, raw=self._src[start : self._pos])
        if ch != ",":
            self._fail("Expected ',' or '}' after argument name")

        self._pos += 1
        self._skip_ws()
        kind = self._match(_KEYWORD_RE, "Expected argument type")
        self._skip_ws()

        if kind in ("plural", "selectordinal"):
            self._expect(",")
            node: Node = self._plural(name, ordinal=kind == "selectordinal")
        elif kind == "select":
            self._expect(",")
            node = SelectNode(name=name, options=self._options(in_plural=False))
        elif kind == "number":
            node = NumberNode(name=name, style=self._style())
        elif kind in ("date", "time"):
            node = DateTimeNode(name=name, kind=kind, style=self._style())
        else:
            self._fail(f"Unknown argument type '{kind}'")

        self._skip_ws()
        self._expect("}")
        self._depth -= 1
        return node

    def _plural(self, name: str, ordinal: bool) -> PluralNode:
        self._skip_ws()
        offset = 0
        match = _OFFSET_RE.match(self._src, self._pos)
        if match:
            offset = int(match.group(1))
            self._pos = match.end()
        return PluralNode(name=name, options=self._options(in_plural=True), offset=offset, ordinal=ordinal)

    def _options(self, in_plural: bool) -> dict[str, list[Node]]:
        options: dict[str, list[Node]] = {}
        while True:
            self._skip_ws()
            if self._peek() in ("}", ""):
                break
            selector = self._match(_SELECTOR_RE, "Expected selector")
            if selector in options:
                self._fail(f"Duplicate selector '{selector}'")
            self._skip_ws()
            self._expect("{")
            options[selector] = self._message(in_plural=in_plural, nested=True)
            self._expect("}")

        if "other" not in options:
            self._fail("Missing 'other' option")
        return options

    def _style(self) -> str | None:
        if self._peek() != ",":
            return None
        self._pos += 1
        start = self._pos
        depth = 0
        src = self._src
        while self._pos < len(src):
            ch = src[self._pos]
            if ch == "{":
                depth += 1
            elif ch == "}":
                if depth == 0:
                    break
                depth -= 1
            self._pos += 1
        style = src[start : self._pos].strip()
        if not style:
            self._fail("Expected argument style")
        return style

    # ------------------------------------------------------------------
    # Low-level helpers
    # ------------------------------------------------------------------

    def _peek(self) -> str:
        return self._src[self._pos] if self._pos < len(self._src) else ""

    def _skip_ws(self) -> None:
        src = self._src
        while self._pos < len(src) and src[self._pos].isspace():
            self._pos += 1

    def _expect(self, ch: str) -> None:
        if self._peek() != ch:
            self._fail(f"Expected '{ch}'")
        self._pos += 1

    def _match(self, pattern: re.Pattern[str], error: str) -> str:
        match = pattern.match(self._src, self._pos)
        if not match:
            self._fail(error)
        self._pos = match.end()
        return match.group(0)

    def _fail(self, message: str) -> NoReturn:
        raise MessageSyntaxException(message, self._pos, self._src)
