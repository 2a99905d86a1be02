"""Default redaction literals and rule spellings per protobuf kind."""

from __future__ import annotations

from typing import Any

from protoredact.rules.annotations import ElementRule, FieldRules, MessageRule, ScalarRule
from protoredact.schema.models import CONTAINER_LABELS, FLOAT_KINDS, INTEGER_KINDS, LITERAL_KINDS

REDACTED_STRING = "REDACTED"
# Singular embedded messages have no scalar default; the resolver decides.
MESSAGE_SENTINEL = "-"

_GO_TYPES: dict[str, str] = {
    "int32": "int32",
    "int64": "int64",
    "uint32": "uint32",
    "uint64": "uint64",
    "sint32": "int32",
    "sint64": "int64",
    "fixed32": "uint32",
    "fixed64": "uint64",
    "sfixed32": "int32",
    "sfixed64": "int64",
    "float": "float32",
    "double": "float64",
    "bool": "bool",
    "string": "string",
    "bytes": "[]byte",
}

CUSTOM_RULE_PREFIX = "(redact.custom)"
BARE_RULE = "(redact.redact)"


def default_for(kind: str, is_collection: bool) -> str:
    """Return the Go literal used when a field is redacted with defaults.

    Collections are nulled wholesale; scalars get their zero value and strings
    a visible placeholder.
    """

    if is_collection:
        return "nil"
    if kind in INTEGER_KINDS or kind in FLOAT_KINDS or kind == "enum":
        return "0"
    if kind == "bool":
        return "false"
    if kind == "string":
        return f'"{REDACTED_STRING}"'
    if kind in ("bytes", "group"):
        return "nil"
    return MESSAGE_SENTINEL


def go_type_name(kind: str) -> str:
    """Go type for a scalar kind; empty for enum, message and group."""
    return _GO_TYPES.get(kind, "")


def suggested_rule_spelling(kind: str, label: str) -> str:
    """Annotation spelling that fits a field of ``kind`` and ``label``."""

    if label in CONTAINER_LABELS:
        return f"{CUSTOM_RULE_PREFIX}.element.*"
    if kind in LITERAL_KINDS:
        return f"{CUSTOM_RULE_PREFIX}.{kind}"
    if kind == "message":
        return f"{CUSTOM_RULE_PREFIX}.message.*"
    return BARE_RULE


to_custom_rule = suggested_rule_spelling


def placeholder_value(kind: str) -> Any:
    """Neutral literal value used when materializing a rule from its spelling."""

    if kind in FLOAT_KINDS:
        return 0.0
    if kind in INTEGER_KINDS or kind == "enum":
        return 0
    if kind == "bool":
        return False
    if kind == "string":
        return REDACTED_STRING
    if kind == "bytes":
        return b""
    raise ValueError(f"No literal placeholder for kind {kind!r}")


def rule_from_spelling(spelling: str) -> FieldRules:
    """Build the :class:`FieldRules` denoted by a spelling from :func:`suggested_rule_spelling`."""

    if spelling == BARE_RULE:
        return FieldRules(redact=True)
    if not spelling.startswith(CUSTOM_RULE_PREFIX + "."):
        raise ValueError(f"Unrecognized rule spelling: {spelling}")

    branch = spelling[len(CUSTOM_RULE_PREFIX) + 1 :]
    if branch == "element.*":
        return FieldRules(value=ElementRule(nested=True))
    if branch == "message.*":
        return FieldRules(value=MessageRule())
    if branch in LITERAL_KINDS:
        return FieldRules(value=ScalarRule(kind=branch, value=placeholder_value(branch)))
    raise ValueError(f"Unrecognized rule spelling: {spelling}")
