"""JSON and trace rendering of errors.

    >>> print(to_json(mask(ValueError("boom"), ("re-source", "id"))))
    {"context":[{"key":"re-source","value":"id"}],"description":"boom","trace":["/srv/app/main.py:12"]}

The wrapped cause is never rendered. Serialization errors are not caught:
they can only come from misuse and are left to crash the caller.
"""

from __future__ import annotations

import orjson

from errtrace.foundation.errors import Error, ErrorRecord, context


def to_json(err: BaseException | None) -> str:
    """Compact JSON of an error's context, description and trace, or "{}" for None.

    Exceptions that are not an Error render their message as description and
    their type name as a "type" context entry.
    """
    match err:
        case None:
            return "{}"
        case Error():
            record = err.to_record()
        case _:
            record = ErrorRecord.model_construct(
                context=[context("type", type_name(err))],
                description=str(err),
                trace=[],
            )
    return record.to_json().decode()


def stack(err: BaseException | None) -> str:
    """JSON array of an error's trace; "null" for None, "[]" for other exceptions."""
    match err:
        case None:
            return "null"
        case Error():
            return orjson.dumps(list(err.trace)).decode()
        case _:
            return "[]"


def indent(doc: str, prefix: str = "") -> str:
    """Pretty-print a JSON document with 4-space indentation, each line led by prefix."""
    pretty = orjson.dumps(orjson.loads(doc), option=orjson.OPT_INDENT_2).decode()
    # orjson only indents by two; JSON strings hold no raw newlines, so doubling
    # every line's leading spaces is safe.
    return "\n".join(prefix + " " * (len(line) - len(line.lstrip(" "))) + line for line in pretty.splitlines())


def type_name(err: BaseException) -> str:
    """Qualified type name, without the module for builtins."""
    cls = type(err)
    return cls.__qualname__ if cls.__module__ == "builtins" else f"{cls.__module__}.{cls.__qualname__}"
