"""Document-level entry points.

Both functions are stateless: every call builds its own parser and works on an
immutable options value, so concurrent calls need no coordination.
"""

from __future__ import annotations

from typing import Any, Optional, Union

from loguru import logger

from .emit import emit, to_python
from .options import EncodeOptions, default_encode_options
from .parse import parse


def resolve_options(options: Optional[Union[EncodeOptions, int]] = None) -> EncodeOptions:
    """Accept full options, a bare indent size, or nothing; minify wins over indent."""
    if options is None:
        resolved = default_encode_options()
    elif isinstance(options, EncodeOptions):
        resolved = options
    elif isinstance(options, int) and not isinstance(options, bool):
        resolved = default_encode_options().with_indent_size(options)
    else:
        raise TypeError(f"options must be EncodeOptions or int, got {type(options).__name__}")

    if resolved.minify:
        resolved = resolved.with_indent_size(0)
    return resolved


def encode(value: Any, options: Optional[Union[EncodeOptions, int]] = None) -> str:
    """Encode Python data (or a TValue) as a notation document."""
    opts = resolve_options(options)
    text = emit(value, opts)
    logger.debug(
        "encoded {} value: {} lines, indent={}, minify={}",
        type(value).__name__,
        text.count("\n") + (0 if text.endswith("\n") else 1),
        opts.indent_size,
        opts.minify,
    )
    return text


def decode(text: str) -> Any:
    """Decode a notation document into plain Python data."""
    value = parse(text)
    logger.debug("decoded {} chars into {} root", len(text), value.type.value)
    return to_python(value)
