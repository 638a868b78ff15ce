"""Context pairs and the serializable error record.

Uses Pydantic models for validation/serialization. Hot paths build instances with model_construct.
"""

from __future__ import annotations

from typing import Annotated, Any, TypeAlias, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field

# ═══════════════════════════════════════════════════════════════════════════════
# Type Aliases
# ═══════════════════════════════════════════════════════════════════════════════

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]
JsonDict = dict[str, Any]

# ═══════════════════════════════════════════════════════════════════════════════
# Context
# ═══════════════════════════════════════════════════════════════════════════════


class Context(BaseModel):
    """Single key/value annotation attached to an error. Duplicate keys are legal."""

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Error Context", "examples": [{"key": "resource", "value": "user/42"}]},
    )

    key: Annotated[str, Field(description="Annotation name")]
    value: Annotated[str, Field(description="Annotation value")]

    def __str__(self) -> str:
        return f"{self.key}={self.value}"

    def __hash__(self) -> int:
        return hash((self.key, self.value))


ContextLike: TypeAlias = "Context | tuple[str, str]"

# ═══════════════════════════════════════════════════════════════════════════════
# Record (read-only rendering surface of an Error)
# ═══════════════════════════════════════════════════════════════════════════════


class ErrorRecord(BaseModel):
    """Snapshot of an error's description, context and trace for serialization.

    The wrapped cause is never part of the record. Empty fields are omitted
    from the JSON output, so a record of nothing dumps as ``{}``.
    """

    model_config = ConfigDict(
        frozen=True, extra="forbid", revalidate_instances="never",
        json_schema_extra={"title": "Error Record", "description": "Rendered error state"},
    )

    context: list[Context] = Field(default_factory=list)
    description: str = ""
    trace: list[str] = Field(default_factory=list)

    def to_dict(self) -> JsonDict:
        """Dump without empty fields, preserving field order."""
        return self.model_dump(exclude={name for name, v in self if not v})

    def to_json(self) -> bytes:
        return orjson.dumps(self.to_dict())


# ═══════════════════════════════════════════════════════════════════════════════
# Helpers (use model_construct for hot paths)
# ═══════════════════════════════════════════════════════════════════════════════

def context(key: object, value: object) -> Context:
    """Create Context concisely (bypasses validation, coerces both sides to str)."""
    return Context.model_construct(key=str(key), value=str(value))


def as_context(item: ContextLike) -> Context:
    """Normalize a Context or a (key, value) pair."""
    match item:
        case Context():
            return item
        case (key, value):
            return context(key, value)
        case _:
            raise TypeError(f"context must be a Context or a (key, value) pair, got {item!r}")
