"""
Encoder options.

EncodeOptions is immutable: the ``with_*`` methods return modified copies and
every copy is validated on construction.
"""

from __future__ import annotations
from dataclasses import dataclass, replace

from .errors import InvalidOptionsError


@dataclass(frozen=True)
class EncodeOptions:
    """Options for encoding."""
    indent_size: int = 2
    trailing_newline: bool = True
    minify: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.indent_size, bool) or not isinstance(self.indent_size, int):
            raise InvalidOptionsError("indent_size must be an integer")
        if self.indent_size < 0:
            raise InvalidOptionsError("indent_size must be >= 0")

    @property
    def effective_indent(self) -> int:
        """Spaces per nesting level actually written."""
        return 0 if self.minify else self.indent_size

    def with_indent_size(self, indent_size: int) -> "EncodeOptions":
        return replace(self, indent_size=indent_size)

    def with_trailing_newline(self, trailing_newline: bool) -> "EncodeOptions":
        return replace(self, trailing_newline=trailing_newline)

    def with_minify(self, minify: bool) -> "EncodeOptions":
        return replace(self, minify=minify)


def default_encode_options() -> EncodeOptions:
    """Two-space indent, trailing newline, no minify."""
    return EncodeOptions()


def minified_encode_options() -> EncodeOptions:
    """Options with indentation stripped."""
    return EncodeOptions(minify=True)
