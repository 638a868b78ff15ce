"""Traceable error value.

An Error is either Fresh (no cause yet, typically a module level kind marker)
or Wrapped (cause set by mask). Fresh instances are never mutated by mask;
the first wrap works on a copy whose cause is the Fresh instance itself.
Matching goes through the cause, so every masked descendant of a marker is
``is_`` equal to it while two markers with equal fields never are.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import TYPE_CHECKING, Self

from .strcase import to_string_case
from .types import Context, ErrorRecord, as_context

if TYPE_CHECKING:
    from .types import ContextLike

SENTINEL = "ERROR"

_KIND_SUFFIX = " error"
_STATE = ("description", "kind", "annotation", "context", "_cause", "_trace")


class Error(Exception):
    """Error annotated with context and a call-site trace.

    Example:
        >>> not_found = Error(kind="notFoundError")
        >>> str(not_found)
        'not found error'
        >>> err = mask(not_found, ("id", "42"))
        >>> is_(err, not_found), err is not_found
        (True, False)
    """

    __slots__ = _STATE

    def __init__(
        self,
        description: str = "",
        *,
        kind: str = "",
        context: Iterable[ContextLike] = (),
    ) -> None:
        super().__init__(description)
        self.description = description
        self.kind = kind
        self.annotation = ""
        self.context: list[Context] = [as_context(c) for c in context]
        self._cause: BaseException | None = None
        self._trace: list[str] = []

    # ─── Accessors ─────────────────────────────────────────────────────

    @property
    def cause(self) -> BaseException | None:
        """Root error of the chain. None while the error is Fresh."""
        return self._cause

    @property
    def trace(self) -> tuple[str, ...]:
        """Call sites of every mask, earliest first."""
        return tuple(self._trace)

    @property
    def wrapped(self) -> bool:
        return self._cause is not None

    def unwrap(self) -> BaseException | None:
        return self._cause

    # ─── Message ───────────────────────────────────────────────────────

    def __str__(self) -> str:
        if self.description:
            base = self.description
        elif self.kind:
            base = to_string_case(self.kind)
            if self.annotation and base.endswith(_KIND_SUFFIX):
                base = base[: -len(_KIND_SUFFIX)]
        else:
            base = SENTINEL
        return f"{base}: {self.annotation}" if self.annotation else base

    def __repr__(self) -> str:
        fields = [f"{k}={v!r}" for k, v in (("description", self.description), ("kind", self.kind)) if v]
        return f"{type(self).__name__}({', '.join(fields)})"

    # ─── Identity ──────────────────────────────────────────────────────

    def is_(self, target: BaseException | None) -> bool:
        """Whether self and target share the same root cause."""
        return resolve_cause(self) == resolve_cause(target)

    # ─── Copy & Rendering ──────────────────────────────────────────────

    def copy(self) -> Self:
        """Shallow runtime copy. Context and trace get their own lists, cause and subclass attributes are shared."""
        clone = _restore(type(self), self.args)
        clone.__setstate__(self.__getstate__())
        return clone

    def __getstate__(self) -> tuple[dict[str, object], dict[str, object]]:
        return dict(self.__dict__), {name: getattr(self, name) for name in _STATE}

    def __setstate__(self, state: tuple[dict[str, object], dict[str, object]]) -> None:
        attrs, fields = state
        self.__dict__.update(attrs)
        for name, value in fields.items():
            setattr(self, name, value)
        # Lists are never shared between two Error instances.
        self.context = list(self.context)
        self._trace = list(self._trace)
        if self._cause is not None:
            self.__cause__ = self._cause

    def __reduce__(self) -> tuple[object, ...]:
        # BaseException rebuilds from args only; kind, context, cause and trace
        # would be lost across pickle and copy.copy.
        return _restore, (type(self), self.args), self.__getstate__()

    def to_record(self) -> ErrorRecord:
        """Read-only snapshot used by the JSON renderer."""
        return ErrorRecord.model_construct(
            context=list(self.context),
            description=str(self),
            trace=list(self._trace),
        )

    # ─── Mutation (mask only) ──────────────────────────────────────────

    def _adopt(self, cause: BaseException) -> None:
        # Cause is set once per chain and never overwritten.
        if self._cause is None:
            self._cause = cause
            self.__cause__ = cause


def resolve_cause(err: BaseException | None) -> BaseException | None:
    """Cause of a Wrapped Error, otherwise err itself."""
    match err:
        case Error(_cause=cause) if cause is not None:
            return cause
        case _:
            return err


def is_(a: BaseException | None, b: BaseException | None) -> bool:
    """Same-root-cause equality.

    Error causes compare by identity (Error does not override ``__eq__``);
    other exceptions follow their own ``__eq__``, which for plain exceptions
    is identity as well.
    """
    return resolve_cause(a) == resolve_cause(b)


def _restore(cls: type[Error], args: tuple[object, ...]) -> Error:
    """Bare instance of cls without running __init__; state is applied afterwards."""
    err = cls.__new__(cls)
    BaseException.__init__(err, *args)
    return err
