"""
Round-trip stress tests.

JSON-shaped data -> notation text -> data, compared through sorted JSON dumps
so edge cases in quoting, array shapes and nesting show up as mismatches.
"""

import json
from typing import Any, List, Tuple

import pytest

import sys
sys.path.insert(0, str(__file__).rsplit('/', 2)[0])

from toonlite import decode, encode, minified_encode_options, EncodeError


def _dump(data: Any) -> str:
    return json.dumps(data, sort_keys=True, ensure_ascii=False)


# =============================================================================
# Test Cases
# =============================================================================

ROUNDTRIP_TESTS: List[Tuple[str, Any]] = [
    # =========================================================================
    # BASIC TYPES
    # =========================================================================
    ("null", None),
    ("true", True),
    ("false", False),
    ("zero", 0),
    ("negative zero float", -0.0),
    ("positive int", 42),
    ("negative int", -123),
    ("large int", 9999999999999),
    ("float", 3.14159),
    ("negative float", -2.71828),
    ("scientific notation small", 1e-10),
    ("scientific notation large", 1e15),
    ("empty string", ""),
    ("simple string", "hello"),
    ("string with spaces", "hello world"),
    ("string with quotes", 'say "hello"'),
    ("string with backslash", "path\\to\\file"),
    ("string with newline", "line1\nline2"),
    ("string with tab", "col1\tcol2"),
    ("string with unicode", "你好世界"),
    ("string with emoji", "🚀🔥💻"),

    # =========================================================================
    # ARRAYS - BASIC
    # =========================================================================
    ("empty array", []),
    ("array of nulls", [None, None, None]),
    ("array of bools", [True, False, True]),
    ("array of ints", [1, 2, 3, 4, 5]),
    ("array of floats", [1.1, 2.2, 3.3]),
    ("array of strings", ["a", "b", "c"]),
    ("mixed array", [1, "two", True, None, 3.14]),
    ("nested array", [[1, 2], [3, 4], [5, 6]]),
    ("deeply nested array", [[[1]], [[2]], [[3]]]),

    # =========================================================================
    # ARRAYS - SPARSE/HETEROGENEOUS
    # =========================================================================
    ("sparse keys - disjoint", [{"a": 1}, {"b": 2}, {"c": 3}]),
    ("sparse keys - partial overlap", [{"a": 1, "b": 2}, {"b": 3, "c": 4}, {"a": 5, "c": 6}]),
    ("sparse keys - one common", [{"x": 1, "a": 2}, {"x": 3, "b": 4}, {"x": 5, "c": 6}]),
    ("varying key counts", [{"a": 1}, {"a": 1, "b": 2}, {"a": 1, "b": 2, "c": 3}]),
    ("empty objects in array", [{}, {}, {}]),
    ("mixed empty and non-empty", [{"a": 1}, {}, {"b": 2}]),
    ("single key objects", [{"x": 1}, {"x": 2}, {"x": 3}]),
    ("objects with null values", [{"a": 1, "b": None}, {"a": None, "b": 2}]),

    # =========================================================================
    # OBJECTS
    # =========================================================================
    ("empty object", {}),
    ("single key", {"key": "value"}),
    ("multiple keys", {"a": 1, "b": 2, "c": 3}),
    ("nested object", {"outer": {"inner": {"deep": True}}}),
    ("object with null value", {"key": None}),
    ("object with array value", {"arr": [1, 2, 3]}),
    ("object with mixed values", {"str": "hello", "num": 42, "bool": True, "null": None}),
    ("numeric string keys", {"1": "one", "2": "two", "10": "ten"}),
    ("key ordering test", {"z": 1, "a": 2, "m": 3, "b": 4}),
    ("reserved word keys", {"true": 1, "false": 2, "null": 3, "t": 4, "f": 5}),

    # =========================================================================
    # DEEPLY NESTED STRUCTURES
    # =========================================================================
    ("deep nesting 5", {"a": {"b": {"c": {"d": {"e": 1}}}}}),
    ("deep nesting 10", {"l1": {"l2": {"l3": {"l4": {"l5": {"l6": {"l7": {"l8": {"l9": {"l10": "deep"}}}}}}}}}}),
    ("array in object in array", [{"arr": [1, 2, 3]}, {"arr": [4, 5, 6]}]),
    ("object in array in object", {"items": [{"nested": {"value": 1}}, {"nested": {"value": 2}}]}),
    ("multiline in nested object", {"user": {"bio": "hello\nworld", "id": 7}}),

    # =========================================================================
    # NUMBERS - EDGE CASES
    # =========================================================================
    ("max safe int", 9007199254740991),
    ("min safe int", -9007199254740991),
    ("very small float", 0.000000001),
    ("very large float", 999999999999.999),
    ("float precision edge", 0.1 + 0.2),
    ("negative exponent", 1.5e-5),
    ("positive exponent", 1.5e10),
    ("integer as float", 42.0),

    # =========================================================================
    # STRINGS - EDGE CASES
    # =========================================================================
    ("string that looks like int", "42"),
    ("string that looks like float", "3.14"),
    ("string that looks like bool", "true"),
    ("string that looks like null", "null"),
    ("string that looks like a comment", "# not a comment"),
    ("string with only spaces", "   "),
    ("string with leading/trailing spaces", "  hello  "),
    ("very long string", "x" * 1000),
    ("string with escape chars", "tab:\there carriage\rreturn\"quote\\backslash"),
    ("unicode normalization test", "é"),
    ("zero-width chars", "a\u200bb\u200cc"),
    ("RTL text", "مرحبا"),
    ("mixed LTR/RTL", "Hello مرحبا World"),

    # =========================================================================
    # ARRAYS - SIZE EDGE CASES
    # =========================================================================
    ("single element array", [1]),
    ("two element array", [1, 2]),
    ("uniform single-column table", [{"a": 1}, {"a": 2}, {"a": 3}]),
    ("large homogeneous array", [{"id": i, "val": i * 2} for i in range(20)]),
    ("large heterogeneous array", [{"id": i, f"key{i}": i} for i in range(10)]),

    # =========================================================================
    # REAL-WORLD PATTERNS
    # =========================================================================
    ("api response", {
        "status": "success",
        "data": [{"id": 1, "name": "Item 1"}, {"id": 2, "name": "Item 2"}],
        "meta": {"total": 2, "page": 1},
    }),
    ("tool call", {
        "tool": "search",
        "args": {"query": "test", "limit": 10},
        "id": "call_123",
    }),
    ("config object", {
        "database": {"host": "localhost", "port": 5432},
        "cache": {"enabled": True, "ttl": 3600},
        "features": ["auth", "logging"],
    }),
    ("sparse api results", [
        {"id": 1, "name": "Alice", "email": "alice@example.com"},
        {"id": 2, "name": "Bob"},
        {"id": 3, "email": "charlie@example.com"},
    ]),

    # =========================================================================
    # POTENTIAL PROBLEM PATTERNS
    # =========================================================================
    ("all nulls object", {"a": None, "b": None, "c": None}),
    ("alternating nulls", [{"a": 1, "b": None}, {"a": None, "b": 2}, {"a": 3, "b": None}]),
    ("deeply nested nulls", {"outer": {"inner": {"value": None}}}),
    ("array with empty strings", ["", "", ""]),
    ("object with empty string values", {"a": "", "b": "", "c": ""}),
    ("mixed null and empty", {"null": None, "empty": "", "zero": 0, "false": False}),
    ("cells with separators", [{"a": "x,y", "b": "k: v"}, {"a": "#z", "b": "// w"}]),
]

# Keys outside [A-Za-z0-9_] have no encoding
INVALID_KEY_TESTS: List[Tuple[str, Any]] = [
    ("unicode keys", {"名前": "Alice", "年齢": 30}),
    ("emoji keys", {"🔑": "key", "📦": "box"}),
    ("empty string key", {"": "empty key"}),
    ("key with spaces", {"my key": "value"}),
    ("key with special chars", {"a=b": 1, "c:d": 2, "e[f]": 3}),
    ("bad key in nested object", {"ok": {"not-ok": 1}}),
    ("bad column in table", [{"a b": 1}, {"a b": 2}]),
    ("key with trailing newline", {"a\n": 1}),
]


def _ids(cases: List[Tuple[str, Any]]) -> List[str]:
    return [name for name, _ in cases]


class TestRoundTripStress:
    """Data survives encode then decode for every case."""

    @pytest.mark.parametrize("name,data", ROUNDTRIP_TESTS, ids=_ids(ROUNDTRIP_TESTS))
    def test_roundtrip(self, name, data):
        text = encode(data)
        assert _dump(decode(text)) == _dump(data), f"{name}\n{text}"

    @pytest.mark.parametrize("name,data", ROUNDTRIP_TESTS, ids=_ids(ROUNDTRIP_TESTS))
    def test_roundtrip_wide_indent(self, name, data):
        assert _dump(decode(encode(data, 4))) == _dump(data)

    @pytest.mark.parametrize("name,data", ROUNDTRIP_TESTS, ids=_ids(ROUNDTRIP_TESTS))
    def test_encoding_is_stable(self, name, data):
        text = encode(data)
        assert encode(decode(text)) == text

    @pytest.mark.parametrize("name,data", INVALID_KEY_TESTS, ids=_ids(INVALID_KEY_TESTS))
    def test_invalid_keys_rejected(self, name, data):
        with pytest.raises(EncodeError):
            encode(data)


class TestMinifiedStress:
    """Minified output of flat records and tables still decodes."""

    @pytest.mark.parametrize("data", [
        {"a": 1, "b": "two", "c": [1, 2, 3]},
        {"rows": [{"id": i, "val": i * 2} for i in range(5)]},
        {"users": [{"id": 1, "tags": ["x"]}, {"id": 2}]},
        [[1, 2], [3, 4]],
    ])
    def test_minified_roundtrip(self, data):
        text = encode(data, minified_encode_options())
        assert _dump(decode(text)) == _dump(data)
