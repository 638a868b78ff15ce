"""Mask: wrap an error, keep its root cause, record where it passed through.

Every call appends exactly one ``"<file>:<line>"`` entry naming the caller.
State transitions:

- opaque exception -> new Error whose cause is that exception
- Fresh Error (no cause) -> copy whose cause is the original instance
- Wrapped Error -> same instance, extended in place

A chain belongs to whoever holds it. Masking one Wrapped instance from
several threads at once is a caller error; Fresh markers are never mutated
and may be shared freely.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from types import FrameType
from typing import TYPE_CHECKING

from errtrace.foundation.config import get_settings
from errtrace.runtime.observability.logging import get_logger

from .error import Error
from .types import as_context, context

if TYPE_CHECKING:
    from .types import ContextLike

log = get_logger("errtrace.mask")


def mask(err: BaseException | None, /, *pairs: ContextLike, **fields: object) -> Error | None:
    """Wrap err, append context pairs then keyword fields, and record the caller.

    Example:
        >>> err = mask(ValueError("boom"), ("code", "X"), user="42")
        >>> [str(c) for c in err.context]
        ['code=X', 'user=42']
    """
    if err is None:
        return None
    return _mask(err, pairs, fields, sys._getframe(1))


def maskf(err: BaseException | None, message: str, /, *args: object, **fields: object) -> Error | None:
    """Mask err and annotate it with a printf-style message.

    The annotation is set after masking, so a Fresh marker stays untouched.
    A later maskf on the same chain replaces the annotation.
    """
    if err is None:
        return None
    e = _mask(err, (), fields, sys._getframe(1))
    e.annotation = message % args if args else message
    return e


def _mask(err: BaseException, pairs: tuple[ContextLike, ...], fields: dict[str, object], frame: FrameType) -> Error:
    match err:
        case Error() if err.wrapped:
            e = err
        case Error():
            e = err.copy()
            e._adopt(err)
        case _:
            e = Error(str(err))
            e._adopt(err)

    e.context.extend(as_context(p) for p in pairs)
    e.context.extend(context(k, v) for k, v in fields.items())

    location = _location(frame)
    e._trace.append(location)
    if log.enabled_for(logging.DEBUG):
        log.debug("error masked", location=location, depth=len(e._trace), error=str(e))
    return e


def _location(frame: FrameType) -> str:
    """Render a frame as "<file>:<line>", relative to the configured trace root if under it."""
    path = frame.f_code.co_filename
    if root := get_settings().trace.root:
        if (p := Path(path)).is_relative_to(root):
            path = p.relative_to(root).as_posix()
    return f"{path}:{frame.f_lineno}"
