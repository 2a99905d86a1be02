"""Located resolution errors and the append-only diagnostic sink."""

from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import asdict, dataclass
from typing import Any, Literal

Severity = Literal["error", "warning"]


class RedactionError(Exception):
    """Base class for redaction rule failures tied to a schema location.

    Two renderings are produced, mirroring the two kinds of failures:

    * expectation failures (``expected``/``got``/``hint`` set) render as
      ``Validation failed for <entity>: expected X, got Y (hint: H)``;
    * contextual failures (``reason`` only) render as ``[<entity>] <reason>``.
    """

    def __init__(
        self,
        entity: str,
        reason: str = "",
        *,
        expected: str | None = None,
        got: str | None = None,
        hint: str | None = None,
    ) -> None:
        self.entity = entity
        self.reason = reason
        self.expected = expected
        self.got = got
        self.hint = hint
        super().__init__(self._format())

    def _format(self) -> str:
        if self.expected is None and self.got is None:
            message = f"[{self.entity}] {self.reason}" if self.entity else self.reason
            if self.hint:
                message += f"\n\nHint: {self.hint}"
            return message

        message = f"Validation failed for {self.entity}"
        if self.expected:
            message += f": expected {self.expected}"
        if self.got:
            message += f", got {self.got}"
        if self.hint:
            message += f" (hint: {self.hint})"
        return message

    @property
    def code(self) -> str:
        """Stable identifier used in diagnostics output."""
        return type(self).__name__


class InvalidAnnotation(RedactionError):
    """Annotation payload has no usable branch or a malformed value."""


class TypeMismatch(RedactionError):
    """Rule kind does not match the kind of the annotated field."""


class LabelMismatch(RedactionError):
    """Container field without a container rule, or the other way round."""


class NestedDepthExceeded(RedactionError):
    """Element item rule is itself an element rule."""


class ConflictingMessageOptions(RedactionError):
    """More than one of ignored/nil/empty is set on a message."""


class InvalidStatusCode(RedactionError):
    """Resolved gRPC status code is outside the canonical range."""


class StructuralError(RedactionError):
    """Schema element is missing data required to resolve it."""


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Single recorded failure or warning."""

    entity: str
    code: str
    message: str
    severity: Severity = "error"

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


class DiagnosticSink:
    """Append-only collection of diagnostics shared across resolvers.

    Appends are serialized so one sink may be shared by files resolved
    concurrently.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._items: list[Diagnostic] = []

    def record(self, exc: RedactionError) -> Diagnostic:
        """Append ``exc`` as an error diagnostic and return it."""
        diagnostic = Diagnostic(entity=exc.entity, code=exc.code, message=str(exc))
        with self._lock:
            self._items.append(diagnostic)
        return diagnostic

    def warn(self, entity: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(entity=entity, code="Warning", message=message, severity="warning")
        with self._lock:
            self._items.append(diagnostic)
        return diagnostic

    def __iter__(self) -> Iterator[Diagnostic]:
        with self._lock:
            snapshot = list(self._items)
        return iter(snapshot)

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    @property
    def errors(self) -> list[Diagnostic]:
        return [item for item in self if item.severity == "error"]

    @property
    def warnings(self) -> list[Diagnostic]:
        return [item for item in self if item.severity == "warning"]

    def has_errors(self) -> bool:
        return bool(self.errors)

    def to_dicts(self) -> list[dict[str, Any]]:
        return [item.to_dict() for item in self]
