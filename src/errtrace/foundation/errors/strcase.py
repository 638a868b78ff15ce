"""Humanize identifier-style error kinds ("alreadyExistsError" -> "already exists error")."""

from __future__ import annotations

import re
from functools import lru_cache

# Boundaries: lower/digit -> upper ("fooBar", "v2Route"), and the last capital
# of an acronym that starts a new word ("HTTPStatus" -> "HTTP Status").
# Trailing digits stay attached ("statusCode200" -> "status code200").
_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])|(?<=[A-Z])(?=[A-Z][a-z])")


@lru_cache(maxsize=256)
def to_string_case(s: str) -> str:
    """Convert a camelCase or PascalCase identifier into a lowercase phrase."""
    return _BOUNDARY.sub(" ", s).lower()
