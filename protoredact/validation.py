"""Validation checks shared by the field, message, service and file resolvers.

Every check raises a :class:`~protoredact.errors.RedactionError` subclass
carrying the fully qualified location of the offending schema element.
"""

from __future__ import annotations

import math
from typing import Any

from protoredact.errors import (
    ConflictingMessageOptions,
    InvalidAnnotation,
    InvalidStatusCode,
    LabelMismatch,
    NestedDepthExceeded,
    StructuralError,
    TypeMismatch,
)
from protoredact.rules.annotations import NESTED_DEPTH_HINT, ElementRule, RuleValue
from protoredact.rules.defaults import suggested_rule_spelling
from protoredact.schema.models import (
    CONTAINER_LABELS,
    FLOAT_KINDS,
    FieldSpec,
    FileSpec,
    MessageSpec,
    MethodSpec,
    ServiceSpec,
)

MIN_STATUS_CODE = 0
MAX_STATUS_CODE = 16  # codes.Unauthenticated
MAX_IMPORT_PATH_LENGTH = 1000
MAX_FLOAT32 = 3.4028234663852886e38  # math.MaxFloat32

_INTEGER_RANGES: dict[str, tuple[int, int]] = {
    "int32": (-(2**31), 2**31 - 1),
    "sint32": (-(2**31), 2**31 - 1),
    "sfixed32": (-(2**31), 2**31 - 1),
    "enum": (-(2**31), 2**31 - 1),
    "int64": (-(2**63), 2**63 - 1),
    "sint64": (-(2**63), 2**63 - 1),
    "sfixed64": (-(2**63), 2**63 - 1),
    "uint32": (0, 2**32 - 1),
    "fixed32": (0, 2**32 - 1),
    "uint64": (0, 2**64 - 1),
    "fixed64": (0, 2**64 - 1),
}


def validate_status_code(code: Any, location: str) -> int:
    """Return ``code`` when it is a valid gRPC status code (0-16)."""

    if isinstance(code, bool) or not isinstance(code, int):
        raise InvalidStatusCode(
            f"status code in {location}",
            expected="valid gRPC status code (0-16)",
            got=repr(code),
            hint="see https://grpc.io/docs/guides/status-codes/ for valid codes",
        )
    if not MIN_STATUS_CODE <= code <= MAX_STATUS_CODE:
        raise InvalidStatusCode(
            f"status code in {location}",
            expected="valid gRPC status code (0-16)",
            got=str(code),
            hint="see https://grpc.io/docs/guides/status-codes/ for valid codes",
        )
    return code


def has_conflicting_options(message: MessageSpec) -> bool:
    return sum((message.ignored, message.nil, message.empty)) > 1


def validate_message_options(message: MessageSpec) -> None:
    """Reject messages with more than one of ignored/nil/empty."""

    if has_conflicting_options(message):
        raise ConflictingMessageOptions(
            f"message {message.full_name or message.name}",
            expected="at most one of (redact.ignored), (redact.nil), or (redact.empty)",
            got=(
                f"multiple options set (ignored={message.ignored}, "
                f"nil={message.nil}, empty={message.empty})"
            ),
            hint="these options are mutually exclusive",
        )


def validate_type_match(
    field: FieldSpec,
    *,
    rule_kind: str | None,
    rule_label: str | None,
    entity: str,
) -> None:
    """Check the classified rule shape against the field's kind and label."""

    suggestion = suggested_rule_spelling(field.kind, field.label)

    if rule_kind is not None and rule_kind != field.kind:
        raise TypeMismatch(
            f"field {entity}",
            expected=f"rule for type {field.kind}",
            got=f"rule for type {rule_kind}",
            hint=f"use {suggestion} instead",
        )

    if field.label in CONTAINER_LABELS and rule_label not in CONTAINER_LABELS:
        raise LabelMismatch(
            f"{field.label} field {entity}",
            expected=suggestion,
            got="non-repeated rule",
            hint=f"{field.label} fields require element rules",
        )

    if field.label not in CONTAINER_LABELS and rule_label in CONTAINER_LABELS:
        raise LabelMismatch(
            f"field {entity}",
            expected=suggestion,
            got="element rule",
            hint="element rules only apply to repeated and map fields",
        )


def validate_item_depth(item: RuleValue | None, *, entity: str) -> None:
    """Element item rules may not nest another element rule."""

    if isinstance(item, ElementRule):
        raise NestedDepthExceeded(
            entity,
            "nested element.item.element... is not supported - maximum nesting depth is 1",
            hint=NESTED_DEPTH_HINT,
        )


def validate_scalar_value(kind: str, value: Any, *, entity: str) -> None:
    """Check that a custom literal is representable for ``kind``."""

    def invalid(expected: str) -> InvalidAnnotation:
        return InvalidAnnotation(
            entity,
            expected=expected,
            got=f"{type(value).__name__} {value!r}",
            hint=f"fix the value of (redact.custom).{kind}",
        )

    if kind in _INTEGER_RANGES:
        if isinstance(value, bool) or not isinstance(value, int):
            raise invalid(f"integer value for {kind}")
        low, high = _INTEGER_RANGES[kind]
        if not low <= value <= high:
            raise invalid(f"{kind} value in range [{low}, {high}]")
        return

    if kind in FLOAT_KINDS:
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise invalid(f"numeric value for {kind}")
        try:
            number = float(value)
        except OverflowError:
            raise invalid(f"finite value for {kind}") from None
        if not math.isfinite(number):
            raise invalid(f"finite value for {kind}")
        if kind == "float" and abs(number) > MAX_FLOAT32:
            raise invalid(f"float value in range [{-MAX_FLOAT32}, {MAX_FLOAT32}]")
        return

    if kind == "bool":
        if not isinstance(value, bool):
            raise invalid("boolean value")
        return

    if kind == "string":
        if not isinstance(value, str):
            raise invalid("string value")
        return

    if kind == "bytes":
        if not isinstance(value, (str, bytes)):
            raise invalid("bytes or string value")
        return

    raise invalid("a scalar rule kind")


def validate_field(field: FieldSpec | None, *, location: str) -> None:
    if field is None:
        raise StructuralError(location, "field is nil")
    if not field.name:
        raise StructuralError(location, "field has no name")
    if field.kind in ("message", "enum") and field.type_ref is None:
        raise StructuralError(f"{location}.{field.name}", f"{field.kind} field has nil type")
    if field.label == "map" and field.key_kind is None:
        raise StructuralError(f"{location}.{field.name}", "map field has no key type")
    if field.optional and field.label in CONTAINER_LABELS:
        raise StructuralError(
            f"{location}.{field.name}", f"{field.label} field cannot be optional"
        )


def validate_message(message: MessageSpec | None) -> None:
    if message is None:
        raise StructuralError("message", "message is nil")
    if not message.name:
        raise StructuralError("message", "message has no name")
    validate_message_options(message)


def validate_service(service: ServiceSpec | None) -> None:
    if service is None:
        raise StructuralError("service", "service is nil")
    if not service.name:
        raise StructuralError("service", "service has no name")


def validate_method(method: MethodSpec | None, *, location: str) -> None:
    if method is None:
        raise StructuralError(location, "method is nil")
    entity = f"{location}.{method.name}"
    if method.input is None:
        raise StructuralError(entity, f"method {method.name} has nil input")
    if method.output is None:
        raise StructuralError(entity, f"method {method.name} has nil output")


def validate_file(file: FileSpec | None) -> None:
    if file is None:
        raise StructuralError("file", "file is nil")
    if not file.package:
        raise StructuralError(file.name, f"file {file.name} has no package")


def validate_import_path(path: str) -> None:
    if not path:
        raise StructuralError("import", "import path is empty")
    if len(path) > MAX_IMPORT_PATH_LENGTH:
        raise StructuralError(path[:60], f"import path too long: {len(path)} characters")


def validate_package_name(name: str) -> None:
    if not name:
        raise StructuralError("package name", "package name is empty")
    if name[0].isdigit():
        raise StructuralError(
            "package name",
            expected="identifier starting with letter or underscore",
            got=f"name starting with digit: {name}",
            hint="package names cannot start with numbers",
        )
