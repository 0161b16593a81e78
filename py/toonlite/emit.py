"""
toonlite Encoder

Writes TValue trees as notation text.

Scalar rules:
- null -> "null"
- bool -> "true" / "false"
- int -> decimal; float -> shortest round-trip repr (NaN and Inf are rejected)
- string -> bare if safe, otherwise double-quoted with \\ \" \\r escaped
- string with a newline -> multiline block, content lines written raw

Array shapes (decided per occurrence):
- empty      key[0]:
- primitive  key[N]: a,b,c
- tabular    key[N]{c1,c2}: then one comma row per element
- list       key[N]: then one "- value" line per element
"""

from __future__ import annotations
import json
import math
import re
from dataclasses import dataclass, replace
from enum import Enum
from typing import Any, List, Optional

from .errors import EncodeError, UnsupportedValueError
from .lines import MULTILINE_MARKER
from .options import EncodeOptions, default_encode_options
from .parse import EMPTY_OBJECT, KEY_PATTERN, is_number_literal, parse
from .types import MapEntry, TType, TValue


# ============================================================
# Constants
# ============================================================

# Bare strings that would read back as something other than a string
RESERVED_WORDS = {"null", "true", "false", EMPTY_OBJECT}

_QUOTE_TRIGGER = re.compile(r'[\s,:"]')

# Continuation lines of a list element sit this far right of the dash
DASH_WIDTH = 2


class ArrayShape(Enum):
    """How an array is written."""
    EMPTY = "empty"
    PRIMITIVE = "primitive"
    TABULAR = "tabular"
    LIST = "list"


# ============================================================
# Canonical Scalar Encoding
# ============================================================

def canon_null() -> str:
    return "null"


def canon_bool(v: bool) -> str:
    return "true" if v else "false"


def canon_number(n) -> str:
    """Canonical decimal text of an int or float."""
    if isinstance(n, float):
        if math.isnan(n) or math.isinf(n):
            raise UnsupportedValueError("float", f"cannot encode non-finite number: {n!r}")
        return repr(n)
    return str(n)


def needs_quotes(s: str) -> bool:
    """Check if a string must be quoted to read back unchanged."""
    if not s:
        return True
    if s in RESERVED_WORDS:
        return True
    if _QUOTE_TRIGGER.search(s):
        return True
    if is_number_literal(s):
        return True
    return s.startswith("#") or s.startswith("//")


def escape_string(s: str) -> str:
    return s.replace("\\", "\\\\").replace('"', '\\"').replace("\r", "\\r")


def canon_string(s: str) -> str:
    if needs_quotes(s):
        return f'"{escape_string(s)}"'
    return s


def canon_scalar(v: TValue) -> str:
    """Encode a single-line scalar."""
    t = v.type

    if t == TType.NULL:
        return canon_null()
    elif t == TType.BOOL:
        return canon_bool(v.as_bool())
    elif t == TType.NUMBER:
        return canon_number(v.as_number())
    elif t == TType.STR:
        if v.is_multiline():
            raise EncodeError("multiline string is not allowed in an inline position")
        return canon_string(v.as_str())

    raise EncodeError(f"not a scalar: {t.value}")


def check_key(key: str) -> str:
    if not isinstance(key, str) or not KEY_PATTERN.fullmatch(key):
        raise EncodeError(f"invalid key {key!r}: keys must match [A-Za-z0-9_]+")
    return key


# ============================================================
# Array Classification
# ============================================================

def _is_inline_scalar(v: TValue) -> bool:
    return v.is_scalar() and not v.is_multiline()


def classify_array(items: List[TValue]) -> ArrayShape:
    """Pick the representation of an array from its elements."""
    if not items:
        return ArrayShape.EMPTY

    if all(_is_inline_scalar(item) for item in items):
        return ArrayShape.PRIMITIVE

    if all(item.type == TType.OBJECT for item in items):
        keys = set(items[0].keys())
        if keys and all(
            set(item.keys()) == keys
            and all(_is_inline_scalar(e.value) for e in item.as_object())
            for item in items
        ):
            return ArrayShape.TABULAR

    return ArrayShape.LIST


# ============================================================
# Line Emission
# ============================================================

@dataclass(frozen=True)
class _Out:
    """One output line; verbatim lines are never indented."""
    indent: int
    text: str
    verbatim: bool = False


def _shift(lines: List[_Out], cols: int) -> List[_Out]:
    return [l if l.verbatim else replace(l, indent=l.indent + cols) for l in lines]


def _multiline_lines(head: str, s: str) -> List[_Out]:
    if "\r" in s:
        raise EncodeError("multiline string cannot contain a carriage return")
    content = s.split("\n")
    for line in content:
        if line.strip() == MULTILINE_MARKER:
            raise EncodeError('multiline string cannot contain a line of only """')
        if line != line.rstrip():
            raise EncodeError(f"multiline string line has trailing whitespace: {line!r}")
    return (
        [_Out(0, head + MULTILINE_MARKER)]
        + [_Out(0, line, verbatim=True) for line in content]
        + [_Out(0, MULTILINE_MARKER)]
    )


def _object_lines(obj: TValue, width: int) -> List[_Out]:
    out: List[_Out] = []
    for e in obj.as_object():
        out.extend(_member_lines(check_key(e.key), e.value, width))
    return out


def _member_lines(key: str, v: TValue, width: int) -> List[_Out]:
    if v.is_multiline():
        return _multiline_lines(f"{key}: ", v.as_str())
    if v.type == TType.OBJECT:
        return [_Out(0, f"{key}:")] + _shift(_object_lines(v, width), width)
    if v.type == TType.ARRAY:
        return _array_lines(key, v.as_array(), width)
    return [_Out(0, f"{key}: {canon_scalar(v)}")]


def _array_lines(key: str, items: List[TValue], width: int) -> List[_Out]:
    """Array lines; key is empty for root arrays and list elements."""
    shape = classify_array(items)
    n = len(items)

    if shape == ArrayShape.EMPTY:
        return [_Out(0, f"{key}[0]:")]

    if shape == ArrayShape.PRIMITIVE:
        return [_Out(0, f"{key}[{n}]: " + ",".join(canon_scalar(item) for item in items))]

    if shape == ArrayShape.TABULAR:
        cols = [check_key(k) for k in items[0].keys()]
        out = [_Out(0, f"{key}[{n}]{{{','.join(cols)}}}:")]
        for row in items:
            out.append(_Out(width, ",".join(canon_scalar(row.get(c)) for c in cols)))  # type: ignore
        return out

    out = [_Out(0, f"{key}[{n}]:")]
    for item in items:
        out.extend(_shift(_item_lines(item, width), width))
    return out


def _under_dash(body: List[_Out]) -> List[_Out]:
    first, rest = body[0], body[1:]
    return [_Out(0, "- " + first.text)] + _shift(rest, DASH_WIDTH)


def _item_lines(item: TValue, width: int) -> List[_Out]:
    """Lines of one list element, dash included."""
    if item.type == TType.OBJECT:
        body = _object_lines(item, width)
        if not body:
            return [_Out(0, "- " + EMPTY_OBJECT)]
        return _under_dash(body)
    if item.type == TType.ARRAY:
        return _under_dash(_array_lines("", item.as_array(), width))
    if item.is_multiline():
        return _multiline_lines("- ", item.as_str())
    return [_Out(0, "- " + canon_scalar(item))]


def _value_lines(v: TValue, width: int) -> List[_Out]:
    if v.type == TType.OBJECT:
        return _object_lines(v, width)
    if v.type == TType.ARRAY:
        return _array_lines("", v.as_array(), width)
    if v.is_multiline():
        return _multiline_lines("", v.as_str())
    return [_Out(0, canon_scalar(v))]


def _render(lines: List[_Out], pad: int) -> str:
    return "\n".join(
        l.text if l.verbatim else " " * (l.indent + pad) + l.text
        for l in lines
    )


# ============================================================
# Main Encoding
# ============================================================

def encode_value(v: Any, level: int = 0, opts: Optional[EncodeOptions] = None) -> str:
    """Encode a value as a text fragment indented `level` steps."""
    if opts is None:
        opts = default_encode_options()
    width = opts.effective_indent
    return _render(_value_lines(from_python(v), width), level * width)


def emit(v: Any, opts: Optional[EncodeOptions] = None) -> str:
    """
    Encode a whole document.

    Trailing newlines of the body are dropped and exactly one is added back
    when the options ask for it.
    """
    if opts is None:
        opts = default_encode_options()
    body = encode_value(v, 0, opts).rstrip("\r\n")
    if opts.trailing_newline:
        return body + "\n"
    return body


# ============================================================
# Python Bridge
# ============================================================

def from_python(data: Any) -> TValue:
    """Convert plain Python data to TValue."""
    if isinstance(data, TValue):
        return data
    if data is None:
        return TValue.null()
    elif isinstance(data, bool):
        return TValue.bool_(data)
    elif isinstance(data, (int, float)):
        return TValue.number(data)
    elif isinstance(data, str):
        return TValue.str_(data)
    elif isinstance(data, (list, tuple)):
        return TValue.array(*[from_python(item) for item in data])
    elif isinstance(data, dict):
        entries = []
        for k, v in data.items():
            if not isinstance(k, str):
                raise UnsupportedValueError(
                    type(k).__name__, f"object keys must be strings, got {type(k).__name__}"
                )
            entries.append(MapEntry(k, from_python(v)))
        return TValue.object_(*entries)

    raise UnsupportedValueError(type(data).__name__)


def to_python(v: TValue) -> Any:
    """Convert a TValue to plain Python data."""
    t = v.type

    if t == TType.NULL:
        return None
    elif t == TType.BOOL:
        return v.as_bool()
    elif t == TType.NUMBER:
        return v.as_number()
    elif t == TType.STR:
        return v.as_str()
    elif t == TType.ARRAY:
        return [to_python(item) for item in v.as_array()]
    elif t == TType.OBJECT:
        return {e.key: to_python(e.value) for e in v.as_object()}

    raise ValueError(f"unknown type: {t}")


# ============================================================
# Convenience Functions
# ============================================================

def json_to_toon(json_str: str, opts: Optional[EncodeOptions] = None) -> str:
    """Convert a JSON document to notation text."""
    return emit(from_python(json.loads(json_str)), opts)


def toon_to_json(text: str, indent: Optional[int] = None) -> str:
    """Convert notation text to a JSON document."""
    return json.dumps(to_python(parse(text)), indent=indent, ensure_ascii=False)
