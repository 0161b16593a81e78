"""
toonlite - compact, indentation-based notation for JSON data

Objects become indented blocks, arrays of uniform records become tables and
arrays of scalars fit on one line.

Example:
    >>> import toonlite
    >>>
    >>> data = {"id": 1, "tags": ["php", "ai", "iot"],
    ...         "items": [{"sku": "A1", "qty": 2}, {"sku": "B2", "qty": 1}]}
    >>> print(toonlite.encode(data), end="")
    id: 1
    tags[3]: php,ai,iot
    items[2]{sku,qty}:
      A1,2
      B2,1
    >>> toonlite.decode("tags[2]: a,b")
    {'tags': ['a', 'b']}
"""

from loguru import logger

__version__ = "1.0.0"

# Core types
from .types import (
    TValue,
    TType,
    MapEntry,
    field,
    t,
    T,
)

# Errors
from .errors import (
    ToonError,
    DecodeError,
    ToonSyntaxError,
    CountMismatchError,
    RowShapeError,
    UnterminatedBlockError,
    EncodeError,
    UnsupportedValueError,
    InvalidOptionsError,
)

# Options
from .options import (
    EncodeOptions,
    default_encode_options,
    minified_encode_options,
)

# Parsing
from .lines import Line, normalize
from .parse import parse

# Emission
from .emit import (
    ArrayShape,
    classify_array,
    encode_value,
    emit,
    from_python,
    to_python,
    json_to_toon,
    toon_to_json,
)

# Facade
from .codec import encode, decode

# Library default: silent until an application enables it
logger.disable(__name__)

__all__ = [
    # Version
    "__version__",
    # Core types
    "TValue",
    "TType",
    "MapEntry",
    "field",
    "t",
    "T",
    # Errors
    "ToonError",
    "DecodeError",
    "ToonSyntaxError",
    "CountMismatchError",
    "RowShapeError",
    "UnterminatedBlockError",
    "EncodeError",
    "UnsupportedValueError",
    "InvalidOptionsError",
    # Options
    "EncodeOptions",
    "default_encode_options",
    "minified_encode_options",
    # Parsing
    "Line",
    "normalize",
    "parse",
    # Emission
    "ArrayShape",
    "classify_array",
    "encode_value",
    "emit",
    "from_python",
    "to_python",
    "json_to_toon",
    "toon_to_json",
    # Facade
    "encode",
    "decode",
]
