"""Read-only schema tree handed to the resolvers.

These models stand in for protobuf descriptor reflection: one ``FileSpec``
per ``.proto`` file with its messages, services and annotated fields.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any, Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, model_validator

ProtoKind = Literal[
    "float",
    "double",
    "int32",
    "int64",
    "uint32",
    "uint64",
    "sint32",
    "sint64",
    "fixed32",
    "fixed64",
    "sfixed32",
    "sfixed64",
    "bool",
    "string",
    "bytes",
    "enum",
    "message",
    "group",
]
FieldLabel = Literal["singular", "repeated", "map"]

ALL_KINDS: tuple[str, ...] = get_args(ProtoKind)
ALL_LABELS: tuple[str, ...] = get_args(FieldLabel)

INTEGER_KINDS: frozenset[str] = frozenset(
    {
        "int32",
        "int64",
        "uint32",
        "uint64",
        "sint32",
        "sint64",
        "fixed32",
        "fixed64",
        "sfixed32",
        "sfixed64",
    }
)
FLOAT_KINDS: frozenset[str] = frozenset({"float", "double"})
NUMERIC_KINDS: frozenset[str] = INTEGER_KINDS | FLOAT_KINDS | {"enum"}
# Kinds with a dedicated ``(redact.custom).<kind>`` literal branch.
LITERAL_KINDS: frozenset[str] = NUMERIC_KINDS | {"bool", "string", "bytes"}
CONTAINER_LABELS: frozenset[str] = frozenset({"repeated", "map"})


class TypeRef(BaseModel):
    """Reference to a message or enum type, possibly in another Go package."""

    model_config = ConfigDict(frozen=True)

    name: str
    import_path: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _from_string(cls, data: Any) -> Any:
        if isinstance(data, str):
            return {"name": data}
        return data


class RedactOptions(BaseModel):
    """Field annotation as it appears on the wire.

    ``redact`` is the bare ``(redact.redact)`` flag; ``custom`` is the
    ``(redact.custom)`` payload, a mapping with exactly one branch such as
    ``{"string": "***"}`` or ``{"element": {"nested": true}}``.
    """

    model_config = ConfigDict(extra="forbid")

    redact: bool = False
    custom: dict[str, Any] | None = None


class FieldSpec(BaseModel):
    """Single message field. For repeated and map fields ``kind`` is the element kind."""

    name: str
    kind: ProtoKind
    label: FieldLabel = "singular"
    optional: bool = False
    type_ref: TypeRef | None = None
    key_kind: ProtoKind | None = None
    redact: RedactOptions | None = None

    @property
    def is_container(self) -> bool:
        return self.label in CONTAINER_LABELS


class MessageSpec(BaseModel):
    """Message definition with its message-level redaction options."""

    name: str
    go_name: str = ""
    full_name: str = ""
    fields: list[FieldSpec] = Field(default_factory=list)
    messages: list[MessageSpec] = Field(default_factory=list)
    ignored: bool = False
    nil: bool = False
    empty: bool = False

    def walk(self) -> Iterator[MessageSpec]:
        """Yield this message followed by all nested messages, depth first."""
        yield self
        for nested in self.messages:
            yield from nested.walk()


class MethodSpec(BaseModel):
    """RPC definition. Unset internal options inherit the service defaults."""

    name: str
    input: TypeRef | None = None
    output: TypeRef | None = None
    client_streaming: bool = False
    server_streaming: bool = False
    skip: bool = False
    internal: bool | None = None
    internal_code: int | None = None
    internal_err_message: str | None = None


class ServiceSpec(BaseModel):
    name: str
    methods: list[MethodSpec] = Field(default_factory=list)
    skip: bool = False
    internal: bool = False
    internal_code: int | None = None
    internal_err_message: str | None = None


class ImportSpec(BaseModel):
    """Imported proto file as seen from the importing file."""

    path: str
    package: str = ""
    messages: list[MessageSpec] = Field(default_factory=list)
    enums: list[str] = Field(default_factory=list)
    services: list[str] = Field(default_factory=list)

    def has_usable_types(self) -> bool:
        return bool(self.messages or self.enums or self.services)


class FileSpec(BaseModel):
    """Parsed ``.proto`` file."""

    name: str
    package: str = ""
    go_package: str = ""
    file_skip: bool = False
    imports: list[ImportSpec] = Field(default_factory=list)
    messages: list[MessageSpec] = Field(default_factory=list)
    services: list[ServiceSpec] = Field(default_factory=list)

    @model_validator(mode="after")
    def _assign_message_names(self) -> FileSpec:
        for message in self.messages:
            _assign_names(message, go_prefix="", proto_prefix=self.package)
        for imported in self.imports:
            for message in imported.messages:
                _assign_names(message, go_prefix="", proto_prefix="")
        return self

    @property
    def go_import_path(self) -> str:
        return self.go_package.split(";", 1)[0]

    @property
    def go_package_name(self) -> str:
        """Go package name: explicit ``;name`` suffix, last path segment, or proto package."""
        if ";" in self.go_package:
            return self.go_package.split(";", 1)[1]
        if self.go_package:
            return self.go_package.rstrip("/").rsplit("/", 1)[-1]
        return self.package.rsplit(".", 1)[-1]

    def all_messages(self) -> list[MessageSpec]:
        """All messages of the file, nested ones included, in declaration order."""
        return [nested for message in self.messages for nested in message.walk()]

    def find_message(self, ref: TypeRef) -> MessageSpec | None:
        """Look up ``ref`` among local messages or those of a matching import."""
        if ref.import_path is None or ref.import_path == self.go_import_path:
            for message in self.all_messages():
                if ref.name in (message.go_name, message.name):
                    return message
            return None

        for imported in self.imports:
            if imported.path != ref.import_path:
                continue
            for message in imported.messages:
                for candidate in message.walk():
                    if ref.name in (candidate.go_name, candidate.name):
                        return candidate
        return None


def _assign_names(message: MessageSpec, *, go_prefix: str, proto_prefix: str) -> None:
    if not message.go_name:
        message.go_name = f"{go_prefix}_{message.name}" if go_prefix else message.name
    if not message.full_name:
        message.full_name = f"{proto_prefix}.{message.name}" if proto_prefix else message.name
    for nested in message.messages:
        _assign_names(nested, go_prefix=message.go_name, proto_prefix=message.full_name)


MessageSpec.model_rebuild()
