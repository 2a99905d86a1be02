"""Schema tree models and loaders."""

from protoredact.schema.loader import load_file_spec
from protoredact.schema.models import (
    ALL_KINDS,
    ALL_LABELS,
    CONTAINER_LABELS,
    FLOAT_KINDS,
    INTEGER_KINDS,
    LITERAL_KINDS,
    NUMERIC_KINDS,
    FieldLabel,
    FieldSpec,
    FileSpec,
    ImportSpec,
    MessageSpec,
    MethodSpec,
    ProtoKind,
    RedactOptions,
    ServiceSpec,
    TypeRef,
)

__all__ = [
    "ALL_KINDS",
    "ALL_LABELS",
    "CONTAINER_LABELS",
    "FLOAT_KINDS",
    "INTEGER_KINDS",
    "LITERAL_KINDS",
    "NUMERIC_KINDS",
    "FieldLabel",
    "FieldSpec",
    "FileSpec",
    "ImportSpec",
    "MessageSpec",
    "MethodSpec",
    "ProtoKind",
    "RedactOptions",
    "ServiceSpec",
    "TypeRef",
    "load_file_spec",
]
