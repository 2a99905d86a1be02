"""Normalize a rule variant into a ``(kind, label, value)`` triple."""

from __future__ import annotations

import json
from dataclasses import dataclass

from protoredact.errors import InvalidAnnotation
from protoredact.rules.annotations import ElementRule, MessageRule, RuleValue, ScalarRule
from protoredact.schema.models import FLOAT_KINDS
from protoredact.validation import validate_scalar_value

CONTAINER_TAG = "repeated"


@dataclass(frozen=True, slots=True)
class RuleInfo:
    """Shape of a classified rule.

    ``kind`` is the proto kind the rule applies to (``None`` for element
    rules), ``label`` is :data:`CONTAINER_TAG` for element rules, and
    ``value`` holds the Go literal for scalar rules.
    """

    kind: str | None
    label: str | None
    value: str | None
    rule: RuleValue


def classify(rule: RuleValue | None, *, entity: str) -> RuleInfo:
    """Classify ``rule``; message and element selections are left to the caller."""

    if isinstance(rule, ScalarRule):
        validate_scalar_value(rule.kind, rule.value, entity=entity)
        return RuleInfo(kind=rule.kind, label=None, value=go_literal(rule.kind, rule.value), rule=rule)
    if isinstance(rule, MessageRule):
        return RuleInfo(kind="message", label=None, value=None, rule=rule)
    if isinstance(rule, ElementRule):
        if not (rule.empty or rule.nested or rule.item is not None):
            raise InvalidAnnotation(
                entity,
                "(redact.custom).element is nil, no option defined",
                hint="use (redact.custom).element.nested, .empty, or .item.*",
            )
        return RuleInfo(kind=None, label=CONTAINER_TAG, value=None, rule=rule)

    raise InvalidAnnotation(
        entity,
        expected="redaction rule with values",
        got="empty rule" if rule is None else type(rule).__name__,
        hint="define a value for the custom redaction rule",
    )


def go_literal(kind: str, value: object) -> str:
    """Format a validated scalar value as a Go literal."""

    if kind == "bool":
        return "true" if value else "false"
    if kind in FLOAT_KINDS:
        return repr(float(value))  # type: ignore[arg-type]
    if kind == "string":
        return _string_literal(str(value))
    if kind == "bytes":
        raw = value if isinstance(value, bytes) else str(value).encode("utf-8")
        return f"[]byte({_bytes_literal(raw)})"
    return str(int(value))  # type: ignore[call-overload]


def _string_literal(text: str) -> str:
    # Raw literals cannot hold backticks and silently drop carriage returns.
    if "`" in text or "\r" in text:
        return json.dumps(text, ensure_ascii=False)
    return f"`{text}`"


def _bytes_literal(raw: bytes) -> str:
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError:
        return '"' + "".join(f"\\x{byte:02x}" for byte in raw) + '"'
    return _string_literal(text)
