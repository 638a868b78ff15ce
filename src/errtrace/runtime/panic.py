"""Program-exit reporting for command line tools.

Entry points usually propagate runtime errors back up. ``run`` wraps such an
entry point and hands anything that escapes to ``panic``:

    >>> def main() -> None:
    ...     connect(":7777")
    >>> run(main)

which prints something like

    program panic at 2022-06-10 18:37:41.908370+00:00

        {
            "description": "connection refused",
            "trace": [
                "/srv/app/main.py:59",
                "/srv/app/main.py:23"
            ]
        }

and exits with status 1.
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from datetime import UTC, datetime
from typing import NoReturn, ParamSpec, TextIO, TypeVar

from errtrace.foundation.config import get_settings
from errtrace.foundation.errors import Error, mask
from errtrace.runtime.observability.logging import get_logger

from .render import indent, to_json

P = ParamSpec("P")
T = TypeVar("T")

log = get_logger("errtrace.panic")

_PREFIX = " " * 4


def panic(err: BaseException, *, output: TextIO | None = None) -> NoReturn:
    """Print a timestamped banner with the error's JSON and exit non-zero.

    Anything that is not an Error is re-raised unchanged.
    """
    if err is None:
        raise TypeError("panic() requires an error, got None")
    if not isinstance(err, Error):
        raise err

    settings = get_settings().panic
    out = output or sys.stdout
    print(f"{settings.banner} {datetime.now(UTC)}", file=out)
    print(file=out)
    print(indent(to_json(err), _PREFIX), file=out)
    print(file=out)
    out.flush()

    log.error("program panic", error=str(err), depth=len(err.trace), exit_code=settings.exit_code)
    raise SystemExit(settings.exit_code)


def run(entry: Callable[P, T], *args: P.args, **kwargs: P.kwargs) -> T:
    """Call entry; an Exception escaping it is masked here and passed to panic."""
    try:
        return entry(*args, **kwargs)
    except Exception as exc:
        panic(mask(exc))
