"""Traceable errors for errtrace.

- Context/ErrorRecord: key/value annotations and the rendered snapshot
- Error: error value with description, kind, context, cause and trace
- mask/maskf: wrap an error, preserve its cause, record the call site
- is_/resolve_cause: same-root-cause matching
- to_string_case: humanize identifier-style kinds
"""

# types must load before mask; the logger it imports reads the JSON aliases
from .types import (
    Context,
    ContextLike,
    ErrorRecord,
    JsonDict,
    JsonValue,
    as_context,
    context,
)
from .strcase import to_string_case
from .error import SENTINEL, Error, is_, resolve_cause
from .mask import mask, maskf

__all__ = [
    # Context & record
    "Context", "ContextLike", "ErrorRecord", "JsonDict", "JsonValue",
    "as_context", "context",
    # Error value
    "Error", "SENTINEL", "is_", "resolve_cause",
    # Masking
    "mask", "maskf",
    # Formatting
    "to_string_case",
]
