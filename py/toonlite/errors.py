"""Exceptions raised by the codec.

Every error derives from ``ValueError`` so callers that treat a bad document as
a bad value keep working; the subclasses carry the diagnostic fields.
"""

from __future__ import annotations

from typing import Optional


class ToonError(ValueError):
    """Base class for all codec errors."""


class DecodeError(ToonError):
    """The document is invalid as a whole."""

    def __init__(self, message: str, *, line: Optional[int] = None) -> None:
        super().__init__(message)
        self.line = line


class ToonSyntaxError(DecodeError):
    """A line matches no recognized form, or is illegal where it appears."""

    def __init__(self, line: int, content: str, reason: str = "cannot parse line") -> None:
        super().__init__(f"{reason} {line}: {content}", line=line)
        self.content = content


class CountMismatchError(DecodeError):
    """Declared element count differs from the number of elements read."""

    def __init__(self, *, key: str, line: int, expected: int, actual: int) -> None:
        super().__init__(
            f"count mismatch for '{key}' (header at line {line}): "
            f"expected {expected}, got {actual}",
            line=line,
        )
        self.key = key
        self.expected = expected
        self.actual = actual


class RowShapeError(DecodeError):
    """A tabular row has a different number of fields than the header."""

    def __init__(self, *, line: int, content: str, expected: int, actual: int) -> None:
        super().__init__(
            f"tabular row mismatch at line {line}: {content} "
            f"(expected {expected} fields, got {actual})",
            line=line,
        )
        self.content = content
        self.expected = expected
        self.actual = actual


class UnterminatedBlockError(DecodeError):
    """A multiline block reached end of input without its closing marker."""

    def __init__(self, *, key: str, line: int) -> None:
        super().__init__(
            f"unterminated multiline string for '{key}' (opened at line {line})",
            line=line,
        )
        self.key = key


class EncodeError(ToonError):
    """A value cannot be written in the notation."""


class UnsupportedValueError(EncodeError):
    """The value tree holds something outside the value model."""

    def __init__(self, type_name: str, detail: Optional[str] = None) -> None:
        super().__init__(detail or f"unsupported type: {type_name}")
        self.type_name = type_name


class InvalidOptionsError(ToonError):
    """Rejected encoder configuration."""
