"""
toonlite Core Types

TValue is the tagged value container shared by the parser and the encoder.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Union


class TType(Enum):
    """Value model tags."""
    NULL = "null"
    BOOL = "bool"
    NUMBER = "number"
    STR = "str"
    ARRAY = "array"
    OBJECT = "object"


SCALAR_TYPES = frozenset({TType.NULL, TType.BOOL, TType.NUMBER, TType.STR})


@dataclass
class MapEntry:
    """Key-value pair of an object."""
    key: str
    value: "TValue"


class TValue:
    """
    Tagged value container.

    The tag is decided once, at construction; the accessors refuse to read a
    value through the wrong tag.
    """

    __slots__ = ('_type', '_bool', '_num', '_str', '_list', '_map')

    def __init__(self, ttype: TType):
        self._type = ttype
        self._bool: Optional[bool] = None
        self._num: Optional[Union[int, float]] = None
        self._str: Optional[str] = None
        self._list: Optional[List[TValue]] = None
        self._map: Optional[List[MapEntry]] = None

    @property
    def type(self) -> TType:
        return self._type

    # ============================================================
    # Constructors
    # ============================================================

    @staticmethod
    def null() -> "TValue":
        return TValue(TType.NULL)

    @staticmethod
    def bool_(v: bool) -> "TValue":
        tv = TValue(TType.BOOL)
        tv._bool = bool(v)
        return tv

    @staticmethod
    def number(v: Union[int, float]) -> "TValue":
        tv = TValue(TType.NUMBER)
        tv._num = v
        return tv

    @staticmethod
    def str_(v: str) -> "TValue":
        tv = TValue(TType.STR)
        tv._str = v
        return tv

    @staticmethod
    def array(*values: "TValue") -> "TValue":
        tv = TValue(TType.ARRAY)
        tv._list = list(values)
        return tv

    @staticmethod
    def object_(*entries: MapEntry) -> "TValue":
        tv = TValue(TType.OBJECT)
        tv._map = []
        for e in entries:
            tv.set(e.key, e.value)
        return tv

    # ============================================================
    # Accessors
    # ============================================================

    def is_null(self) -> bool:
        return self._type == TType.NULL

    def is_scalar(self) -> bool:
        return self._type in SCALAR_TYPES

    def is_multiline(self) -> bool:
        """True for strings that need a multiline block."""
        return self._type == TType.STR and "\n" in self._str  # type: ignore

    def as_bool(self) -> bool:
        if self._type != TType.BOOL:
            raise TypeError("not a bool")
        return self._bool  # type: ignore

    def as_number(self) -> Union[int, float]:
        if self._type != TType.NUMBER:
            raise TypeError("not a number")
        return self._num  # type: ignore

    def as_str(self) -> str:
        if self._type != TType.STR:
            raise TypeError("not a str")
        return self._str  # type: ignore

    def as_array(self) -> List["TValue"]:
        if self._type != TType.ARRAY:
            raise TypeError("not an array")
        return self._list  # type: ignore

    def as_object(self) -> List[MapEntry]:
        if self._type != TType.OBJECT:
            raise TypeError("not an object")
        return self._map  # type: ignore

    def keys(self) -> List[str]:
        """Object keys in insertion order."""
        return [e.key for e in self.as_object()]

    def get(self, key: str) -> Optional["TValue"]:
        """Get an object member by key."""
        if self._type != TType.OBJECT:
            return None
        for e in self._map:  # type: ignore
            if e.key == key:
                return e.value
        return None

    def index(self, i: int) -> "TValue":
        """Get element from array by index."""
        if self._type != TType.ARRAY:
            raise TypeError("not an array")
        if i < 0 or i >= len(self._list):  # type: ignore
            raise IndexError("index out of bounds")
        return self._list[i]  # type: ignore

    def __len__(self) -> int:
        if self._type == TType.ARRAY:
            return len(self._list)  # type: ignore
        if self._type == TType.OBJECT:
            return len(self._map)  # type: ignore
        return 0

    # ============================================================
    # Mutators
    # ============================================================

    def set(self, key: str, value: "TValue") -> None:
        """Set an object member, replacing an existing key in place."""
        if self._type != TType.OBJECT:
            raise TypeError("cannot set on non-object")
        for e in self._map:  # type: ignore
            if e.key == key:
                e.value = value
                return
        self._map.append(MapEntry(key, value))  # type: ignore

    def append(self, value: "TValue") -> None:
        """Append to array."""
        if self._type != TType.ARRAY:
            raise TypeError("cannot append to non-array")
        self._list.append(value)  # type: ignore

    def __repr__(self) -> str:
        if self._type == TType.NULL:
            return "TValue.null()"
        elif self._type == TType.BOOL:
            return f"TValue.bool_({self._bool})"
        elif self._type == TType.NUMBER:
            return f"TValue.number({self._num!r})"
        elif self._type == TType.STR:
            return f"TValue.str_({self._str!r})"
        elif self._type == TType.ARRAY:
            return f"TValue.array({', '.join(repr(v) for v in self._list)})"  # type: ignore
        elif self._type == TType.OBJECT:
            return f"TValue.object_({', '.join(e.key for e in self._map)})"  # type: ignore
        return f"TValue({self._type})"


# ============================================================
# Helper Functions
# ============================================================

def field(key: str, value: TValue) -> MapEntry:
    """Create an entry for object construction."""
    return MapEntry(key, value)


class T:
    """Shorthand constructors for TValue."""

    @staticmethod
    def null() -> TValue:
        return TValue.null()

    @staticmethod
    def bool(v: bool) -> TValue:
        return TValue.bool_(v)

    @staticmethod
    def num(v: Union[int, float]) -> TValue:
        return TValue.number(v)

    @staticmethod
    def str(v: str) -> TValue:
        return TValue.str_(v)

    @staticmethod
    def array(*values: TValue) -> TValue:
        return TValue.array(*values)

    @staticmethod
    def obj(*entries: MapEntry) -> TValue:
        return TValue.object_(*entries)


t = T()
