"""
Line normalization.

Turns raw document text into the ordered list of significant lines the block
parser consumes: comments and blank lines are dropped, indentation and source
line numbers are kept.
"""

from __future__ import annotations
import re
from dataclasses import dataclass
from typing import List


_LINE_BREAK = re.compile(r"\r\n|\r|\n")

# key: """   - """   - key: """   and a bare """ opening a root string
_MULTILINE_OPENER = re.compile(r'^(?:- )*(?:[A-Za-z0-9_]+: )?"""$')

MULTILINE_MARKER = '"""'


@dataclass(frozen=True)
class Line:
    """A significant source line."""
    number: int
    indent: int
    content: str
    text: str


def make_line(number: int, text: str) -> Line:
    """Build a Line from right-trimmed text. Only spaces count as indent."""
    indent = len(text) - len(text.lstrip(" "))
    return Line(number, indent, text.lstrip(), text)


def strip_inline_comment(line: str) -> str:
    """
    Cut the line at the first comment marker.

    A ``#`` or ``//`` starts a comment only at the start of the line or right
    after whitespace, and never inside a double-quoted scalar, so
    ``http://example.com`` and ``"a # b"`` survive.
    """
    in_quote = False
    i = 0
    n = len(line)
    while i < n:
        c = line[i]
        if in_quote:
            if c == "\\":
                i += 2
                continue
            if c == '"':
                in_quote = False
        elif c == '"':
            in_quote = True
        elif (c == "#" or line.startswith("//", i)) and (i == 0 or line[i - 1].isspace()):
            return line[:i]
        i += 1
    return line


def is_comment_line(stripped: str) -> bool:
    return stripped.startswith("#") or stripped.startswith("//")


def normalize(text: str) -> List[Line]:
    """
    Split text into significant lines.

    Lines inside a multiline string block are passed through verbatim (only
    right-trimmed) so blank lines and ``#`` characters in the content survive.
    """
    lines: List[Line] = []
    verbatim = False

    for number, raw in enumerate(_LINE_BREAK.split(text), start=1):
        if verbatim:
            body = raw.rstrip()
            lines.append(make_line(number, body))
            if body.strip() == MULTILINE_MARKER:
                verbatim = False
            continue

        stripped = raw.lstrip()
        if not stripped or is_comment_line(stripped):
            continue

        cut = strip_inline_comment(raw).rstrip()
        if not cut.strip():
            continue

        line = make_line(number, cut)
        lines.append(line)

        if _MULTILINE_OPENER.match(line.content):
            # A bare """ only opens a block as the first line of the document
            if line.content != MULTILINE_MARKER or len(lines) == 1:
                verbatim = True

    return lines
