"""
toonlite Parser

Decodes notation text into TValue objects. The parser walks normalized lines
with an explicit cursor; every indentation scope is parsed by its own call of
Parser.parse_block, which owns the state of the list or tabular sub-block that
is currently open.
"""

from __future__ import annotations
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple

from .errors import (
    CountMismatchError,
    RowShapeError,
    ToonSyntaxError,
    UnterminatedBlockError,
)
from .lines import MULTILINE_MARKER, Line, normalize
from .types import MapEntry, TValue


# ============================================================
# Line Forms
# ============================================================

KEY_PATTERN = re.compile(r"[A-Za-z0-9_]+")

_KEY = r"(?P<key>[A-Za-z0-9_]+)"
_COUNT = r"\[(?P<count>[0-9]+)\]"

# Member forms of an object block, in dispatch priority order.
MEMBER_FORMS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("object", re.compile(rf"^{_KEY}:$")),
    ("property", re.compile(rf"^{_KEY}: (?P<value>.+)$")),
    ("primitive", re.compile(rf"^{_KEY}{_COUNT}: (?P<values>.+)$")),
    ("tabular", re.compile(rf"^{_KEY}{_COUNT}\{{(?P<cols>.+)\}}:$")),
    ("list", re.compile(rf"^{_KEY}{_COUNT}:$")),
]

# Array headers without a key: document root and list elements.
BARE_ARRAY_FORMS: List[Tuple[str, "re.Pattern[str]"]] = [
    ("primitive", re.compile(rf"^{_COUNT}: (?P<values>.+)$")),
    ("tabular", re.compile(rf"^{_COUNT}\{{(?P<cols>.+)\}}:$")),
    ("list", re.compile(rf"^{_COUNT}:$")),
]

LIST_ITEM = re.compile(r"^- (?P<value>.+)$")

EMPTY_OBJECT = "{}"

_NUMBER = re.compile(r"[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_INTEGER = re.compile(r"[+-]?[0-9]+")


def _match(forms: List[Tuple[str, "re.Pattern[str]"]], content: str) -> Tuple[Optional[str], Optional["re.Match[str]"]]:
    for kind, pattern in forms:
        m = pattern.match(content)
        if m:
            return kind, m
    return None, None


def match_member(content: str) -> Tuple[Optional[str], Optional["re.Match[str]"]]:
    return _match(MEMBER_FORMS, content)


def match_bare_array(content: str) -> Tuple[Optional[str], Optional["re.Match[str]"]]:
    return _match(BARE_ARRAY_FORMS, content)


# ============================================================
# Scalars
# ============================================================

def unescape_string(s: str) -> str:
    """Resolve backslash escapes of a quoted scalar body."""
    result = []
    i = 0
    n = len(s)
    while i < n:
        c = s[i]
        if c != "\\" or i + 1 >= n:
            result.append(c)
            i += 1
            continue
        esc = s[i + 1]
        if esc == "n":
            result.append("\n")
        elif esc == "r":
            result.append("\r")
        elif esc == "t":
            result.append("\t")
        elif esc == "u" and i + 6 <= n:
            try:
                result.append(chr(int(s[i + 2:i + 6], 16)))
            except ValueError:
                result.append(esc)
            else:
                i += 6
                continue
        else:
            result.append(esc)
        i += 2
    return "".join(result)


def is_number_literal(s: str) -> bool:
    return _NUMBER.fullmatch(s) is not None


def parse_number(s: str):
    if _INTEGER.fullmatch(s):
        return int(s)
    return float(s)


def parse_scalar(raw: str) -> TValue:
    """Parse a scalar literal: null, true, false, number, quoted or bare string."""
    v = raw.strip()

    if v == "null":
        return TValue.null()
    if v == "true":
        return TValue.bool_(True)
    if v == "false":
        return TValue.bool_(False)
    if is_number_literal(v):
        return TValue.number(parse_number(v))
    if len(v) >= 2 and v[0] == '"' and v[-1] == '"':
        return TValue.str_(unescape_string(v[1:-1]))

    # Bareword
    return TValue.str_(v)


def is_scalar_literal(content: str) -> bool:
    """True when a whole line can only be read as a single scalar."""
    if len(content) >= 2 and content[0] == '"' and content[-1] == '"':
        return True
    return re.search(r"[\s,:]", content) is None


def split_fields(s: str) -> List[str]:
    """Split on commas outside double quotes and trim each field."""
    fields = []
    buf: List[str] = []
    in_quote = False
    i = 0
    n = len(s)

    while i < n:
        c = s[i]
        if in_quote:
            buf.append(c)
            if c == "\\" and i + 1 < n:
                buf.append(s[i + 1])
                i += 2
                continue
            if c == '"':
                in_quote = False
        elif c == '"':
            in_quote = True
            buf.append(c)
        elif c == ",":
            fields.append("".join(buf).strip())
            buf = []
        else:
            buf.append(c)
        i += 1

    fields.append("".join(buf).strip())
    return fields


# ============================================================
# Block State
# ============================================================

class Mode(Enum):
    """Sub-block a block is currently filling."""
    NONE = "none"
    LIST = "list"
    TABULAR = "tabular"


@dataclass(frozen=True)
class BlockState:
    """Bookkeeping for the list or tabular sub-block open in one block."""
    mode: Mode = Mode.NONE
    key: str = ""
    columns: Tuple[str, ...] = ()
    expected: Optional[int] = None
    seen: int = 0
    header_line: int = 0
    target: Optional[TValue] = None


IDLE = BlockState()


def close_block(state: BlockState) -> BlockState:
    """Validate the open sub-block's row count and return the idle state."""
    if state.mode is not Mode.NONE and state.expected is not None:
        if state.seen != state.expected:
            raise CountMismatchError(
                key=state.key,
                line=state.header_line,
                expected=state.expected,
                actual=state.seen,
            )
    return IDLE


# ============================================================
# Parser
# ============================================================

class Parser:
    """Indentation-scoped parser over normalized lines."""

    def __init__(self, lines: List[Line]):
        self.lines = list(lines)
        self.pos = 0

    def peek(self) -> Optional[Line]:
        if self.pos >= len(self.lines):
            return None
        return self.lines[self.pos]

    def parse_document(self) -> TValue:
        """Parse the whole input; the root may be an object, array or scalar."""
        first = self.peek()
        if first is None:
            return TValue.object_()

        kind, _ = match_bare_array(first.content)
        if kind is not None:
            value = self.parse_array(first.indent, "root")
        elif first.content == MULTILINE_MARKER:
            value = self._capture_multiline("root", first)
        elif len(self.lines) == 1 and is_scalar_literal(first.content):
            value = parse_scalar(first.content)
            self.pos += 1
        else:
            value = self.parse_block(first.indent)

        rest = self.peek()
        if rest is not None:
            raise ToonSyntaxError(rest.number, rest.content, "unexpected line")
        return value

    def parse_block(self, base_indent: int) -> TValue:
        """
        Parse the object whose members sit at base_indent.

        Stops at the first line indented less than base_indent. Lines deeper
        than base_indent are only legal as items or rows of the open sub-block.
        """
        obj = TValue.object_()
        state = IDLE

        while self.pos < len(self.lines):
            line = self.lines[self.pos]
            if line.indent < base_indent:
                break

            if line.indent == base_indent:
                kind, m = match_member(line.content)
                if kind is not None:
                    state = close_block(state)
                    state = self._parse_member(obj, kind, m, line)
                    continue

            if state.mode is Mode.NONE:
                if line.indent > base_indent:
                    raise ToonSyntaxError(line.number, line.content, "unexpected indentation at line")
                raise ToonSyntaxError(line.number, line.content)

            state = self._consume_row(state, line)

        close_block(state)
        return obj

    def parse_array(self, base_indent: int, label: str) -> TValue:
        """Parse a keyless array header at the cursor plus its items or rows."""
        line = self.lines[self.pos]
        kind, m = match_bare_array(line.content)
        if kind is None:
            raise ToonSyntaxError(line.number, line.content)

        value, state = self._start_array(kind, m, line, label)

        while state.mode is not Mode.NONE and self.pos < len(self.lines):
            cur = self.lines[self.pos]
            if cur.indent < base_indent:
                break
            state = self._consume_row(state, cur)

        close_block(state)
        return value

    # ------------------------------------------------------------

    def _parse_member(self, obj: TValue, kind: str, m: "re.Match[str]", line: Line) -> BlockState:
        key = m.group("key")

        if kind == "object":
            self.pos += 1
            nxt = self.peek()
            if nxt is not None and nxt.indent > line.indent:
                obj.set(key, self.parse_block(nxt.indent))
            else:
                obj.set(key, TValue.object_())
            return IDLE

        if kind == "property":
            value = m.group("value")
            if value == MULTILINE_MARKER:
                obj.set(key, self._capture_multiline(key, line))
            else:
                obj.set(key, parse_scalar(value))
                self.pos += 1
            return IDLE

        value, state = self._start_array(kind, m, line, key)
        obj.set(key, value)
        return state

    def _start_array(self, kind: str, m: "re.Match[str]", line: Line, key: str) -> Tuple[TValue, BlockState]:
        count = int(m.group("count"))
        self.pos += 1

        if kind == "primitive":
            fields = split_fields(m.group("values"))
            if len(fields) != count:
                raise CountMismatchError(key=key, line=line.number, expected=count, actual=len(fields))
            return TValue.array(*[parse_scalar(f) for f in fields]), IDLE

        target = TValue.array()
        if kind == "tabular":
            columns = self._columns(m.group("cols"), line)
            return target, BlockState(Mode.TABULAR, key, columns, count, 0, line.number, target)
        return target, BlockState(Mode.LIST, key, (), count, 0, line.number, target)

    def _columns(self, header: str, line: Line) -> Tuple[str, ...]:
        columns = tuple(c.strip() for c in header.split(","))
        for col in columns:
            if not KEY_PATTERN.fullmatch(col):
                raise ToonSyntaxError(line.number, line.content, "invalid column name at line")
        return columns

    def _consume_row(self, state: BlockState, line: Line) -> BlockState:
        """Read one list item or tabular row into the open sub-block."""
        if state.mode is Mode.LIST:
            m = LIST_ITEM.match(line.content)
            if not m:
                raise ToonSyntaxError(line.number, line.content)
            item = self._parse_list_item(line, m.group("value"), f"{state.key}[{state.seen}]")
        else:
            fields = split_fields(line.content)
            if len(fields) != len(state.columns):
                raise RowShapeError(
                    line=line.number,
                    content=line.content,
                    expected=len(state.columns),
                    actual=len(fields),
                )
            item = TValue.object_(*[
                MapEntry(col, parse_scalar(f)) for col, f in zip(state.columns, fields)
            ])
            self.pos += 1

        state.target.append(item)  # type: ignore
        return replace(state, seen=state.seen + 1)

    def _parse_list_item(self, line: Line, rest: str, label: str) -> TValue:
        """
        Parse the value after a dash.

        Objects and arrays continue on the following lines two columns to the
        right of the dash; the dash line itself is re-read as their first line.
        """
        if rest == MULTILINE_MARKER:
            return self._capture_multiline(label, line)
        if rest == EMPTY_OBJECT:
            self.pos += 1
            return TValue.object_()

        item_indent = line.indent + 2
        inner = replace(line, indent=item_indent, content=rest)

        if match_bare_array(rest)[0] is not None:
            self.lines[self.pos] = inner
            return self.parse_array(item_indent, label)
        if match_member(rest)[0] is not None:
            self.lines[self.pos] = inner
            return self.parse_block(item_indent)

        self.pos += 1
        return parse_scalar(rest)

    def _capture_multiline(self, key: str, opener: Line) -> TValue:
        """Collect raw lines up to the closing marker; no de-indentation."""
        self.pos += 1
        captured = []

        while self.pos < len(self.lines):
            cur = self.lines[self.pos]
            self.pos += 1
            if cur.text.strip() == MULTILINE_MARKER:
                return TValue.str_("\n".join(captured))
            captured.append(cur.text)

        raise UnterminatedBlockError(key=key, line=opener.number)


# ============================================================
# Public API
# ============================================================

def parse(text: str) -> TValue:
    """Parse a notation document into a TValue."""
    return Parser(normalize(text)).parse_document()
