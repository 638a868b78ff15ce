"""errtrace - traceable errors with context and call-site trace.

Wrap any exception with ``mask`` as it travels up the call stack. The root
cause survives every wrap, each wrap records where it happened, and the
result renders as JSON for logs or an exit banner.

Quick Start:
    >>> from errtrace import Error, is_, mask, to_json
    >>>
    >>> not_found = Error(kind="notFoundError")  # module level kind marker
    >>>
    >>> def load(key: str) -> None:
    ...     raise mask(not_found, ("key", key))
    >>>
    >>> try:
    ...     load("user/42")
    ... except Error as err:
    ...     err = mask(err)
    ...     assert is_(err, not_found)
    ...     print(to_json(err))

Command Line Entry Points:
    >>> from errtrace import run
    >>> run(main)  # prints a panic banner and exits 1 on failure
"""

from __future__ import annotations

__version__ = "0.1.0"

# Errors
from .foundation.errors import (
    SENTINEL,
    Context,
    Error,
    ErrorRecord,
    context,
    is_,
    mask,
    maskf,
    resolve_cause,
    to_string_case,
)

# Settings
from .foundation.config import ErrtraceSettings, clear_settings_cache, get_settings

# Rendering
from .runtime.render import indent, stack, to_json

# Program exit
from .runtime.panic import panic, run

# Logging
from .runtime.observability import configure_logging, get_logger

__all__ = [
    "__version__",
    # Errors
    "Context", "Error", "ErrorRecord", "SENTINEL", "context",
    "is_", "mask", "maskf", "resolve_cause", "to_string_case",
    # Settings
    "ErrtraceSettings", "clear_settings_cache", "get_settings",
    # Rendering
    "indent", "stack", "to_json",
    # Program exit
    "panic", "run",
    # Logging
    "configure_logging", "get_logger",
]
