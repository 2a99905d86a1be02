"""Immutable decision records handed to the renderer."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from typing import Any

from protoredact.schema.models import FLOAT_KINDS, INTEGER_KINDS

# google.golang.org/grpc/codes String() spellings, indexed by code.
GRPC_STATUS_NAMES: tuple[str, ...] = (
    "OK",
    "Canceled",
    "Unknown",
    "InvalidArgument",
    "DeadlineExceeded",
    "NotFound",
    "AlreadyExists",
    "PermissionDenied",
    "ResourceExhausted",
    "FailedPrecondition",
    "Aborted",
    "OutOfRange",
    "Unimplemented",
    "Internal",
    "Unavailable",
    "DataLoss",
    "Unauthenticated",
)
PERMISSION_DENIED = GRPC_STATUS_NAMES.index("PermissionDenied")

_POINTER_KINDS: frozenset[str] = INTEGER_KINDS | FLOAT_KINDS | {"bool", "string", "enum"}


@dataclass(frozen=True, slots=True)
class FieldDecision:
    """Resolved redaction plan for one field."""

    name: str
    kind: str
    redact: bool = False
    redaction_value: str | None = None
    is_map: bool = False
    is_repeated: bool = False
    is_message: bool = False
    is_optional: bool = False
    iterate: bool = False
    nested_call: bool = False
    embed_skip: bool = False
    embed_message_name: str = ""
    embed_message_qualified: str = ""
    go_type: str = ""

    def __post_init__(self) -> None:
        if self.nested_call and self.embed_skip:
            raise ValueError(f"field {self.name}: nested_call and embed_skip are exclusive")
        if self.iterate and not (self.is_repeated or self.is_map):
            raise ValueError(f"field {self.name}: iterate requires a repeated or map field")
        if self.is_optional and (self.is_repeated or self.is_map):
            raise ValueError(f"field {self.name}: containers cannot be optional")

    @property
    def needs_temp_var(self) -> bool:
        """Optional scalars are pointers: the literal goes through a temporary."""
        return (
            self.is_optional
            and self.redaction_value not in (None, "nil")
            and self.kind in _POINTER_KINDS
        )

    def to_dict(self) -> dict[str, Any]:
        payload = asdict(self)
        payload["needs_temp_var"] = self.needs_temp_var
        return payload


@dataclass(frozen=True, slots=True)
class MessageDecision:
    name: str
    qualified_name: str
    full_name: str = ""
    fields: tuple[FieldDecision, ...] = ()
    ignore: bool = False
    to_nil: bool = False
    to_empty: bool = False

    def __post_init__(self) -> None:
        if sum((self.ignore, self.to_nil, self.to_empty)) > 1:
            raise ValueError(f"message {self.name}: ignore, to_nil and to_empty are exclusive")

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "qualified_name": self.qualified_name,
            "full_name": self.full_name,
            "fields": [item.to_dict() for item in self.fields],
            "ignore": self.ignore,
            "to_nil": self.to_nil,
            "to_empty": self.to_empty,
        }


@dataclass(frozen=True, slots=True)
class MethodDecision:
    """Resolved access gating for one RPC."""

    name: str
    input: str
    output: MessageDecision
    skip: bool = False
    internal: bool = False
    status_code: int | None = None
    error_message: str | None = None
    client_streaming: bool = False
    server_streaming: bool = False

    @property
    def status_name(self) -> str | None:
        if self.status_code is None:
            return None
        return GRPC_STATUS_NAMES[self.status_code]

    @property
    def error_message_literal(self) -> str | None:
        if self.error_message is None:
            return None
        if "`" in self.error_message or "\r" in self.error_message:
            return json.dumps(self.error_message, ensure_ascii=False)
        return f"`{self.error_message}`"

    @property
    def redacts_payload(self) -> bool:
        """Response payload redaction is generated for unary, non-skipped methods only."""
        return not self.skip and not (self.client_streaming or self.server_streaming)

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "input": self.input,
            "output": self.output.to_dict(),
            "skip": self.skip,
            "internal": self.internal,
            "status_code": self.status_code,
            "status_name": self.status_name,
            "error_message": self.error_message,
            "client_streaming": self.client_streaming,
            "server_streaming": self.server_streaming,
            "redacts_payload": self.redacts_payload,
        }


@dataclass(frozen=True, slots=True)
class ServiceDecision:
    name: str
    skip: bool = False
    methods: tuple[MethodDecision, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "skip": self.skip,
            "methods": [method.to_dict() for method in self.methods],
        }


@dataclass(frozen=True, slots=True)
class ProtoFileData:
    """Everything the renderer needs for one ``.proto`` file."""

    source: str
    package: str
    imports: dict[str, str] = field(default_factory=dict)
    references: tuple[str, ...] = ()
    services: tuple[ServiceDecision, ...] = ()
    messages: tuple[MessageDecision, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "source": self.source,
            "package": self.package,
            "imports": dict(sorted(self.imports.items())),
            "references": list(self.references),
            "services": [service.to_dict() for service in self.services],
            "messages": [message.to_dict() for message in self.messages],
        }
