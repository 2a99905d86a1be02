"""Redaction rule payloads as an explicit sum type.

A ``(redact.custom)`` payload is one of three variants:

* :class:`ScalarRule` - set the field to a literal of a given kind;
* :class:`MessageRule` - nil / empty / skip an embedded message, or recurse;
* :class:`ElementRule` - empty / iterate / iterate-with-item-rule a container.

:func:`parse_field_rules` is the only place that inspects the wire mapping;
everything downstream dispatches on the variant type.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, TypeAlias

from protoredact.errors import InvalidAnnotation, NestedDepthExceeded
from protoredact.schema.models import LITERAL_KINDS, RedactOptions

MESSAGE_OPTIONS: tuple[str, ...] = ("nil", "empty", "skip")
ELEMENT_OPTIONS: tuple[str, ...] = ("empty", "nested", "item")
RULE_BRANCHES: frozenset[str] = LITERAL_KINDS | {"message", "element"}

NESTED_DEPTH_HINT = (
    "Use either:\n"
    "  - (redact.custom).element.nested for iteration\n"
    "  - (redact.custom).element.item.* for custom item values\n"
    "  - (redact.custom).element.empty for empty list"
)


@dataclass(frozen=True, slots=True)
class ScalarRule:
    """Literal replacement value for a scalar or enum field."""

    kind: str
    value: Any


@dataclass(frozen=True, slots=True)
class MessageRule:
    """Embedded message handling; no option set means recurse."""

    nil: bool = False
    empty: bool = False
    skip: bool = False


@dataclass(frozen=True, slots=True)
class ElementRule:
    """Container handling; exactly one option is expected."""

    empty: bool = False
    nested: bool = False
    item: RuleValue | None = None


RuleValue: TypeAlias = ScalarRule | MessageRule | ElementRule


@dataclass(frozen=True, slots=True)
class FieldRules:
    """Resolved annotation: bare ``redact`` flag plus optional custom rule."""

    redact: bool = False
    value: RuleValue | None = None

    @property
    def is_empty(self) -> bool:
        return not self.redact and self.value is None


def parse_field_rules(options: RedactOptions | None, *, entity: str) -> FieldRules | None:
    """Convert a wire annotation into :class:`FieldRules`.

    Returns ``None`` when the field carries no annotation at all.
    """

    if options is None:
        return None
    if options.custom is None:
        return FieldRules(redact=options.redact)
    return FieldRules(redact=options.redact, value=parse_rule(options.custom, entity=entity))


def parse_rule(payload: Any, *, entity: str, allow_element: bool = True) -> RuleValue:
    """Parse one ``(redact.custom)`` mapping into its variant."""

    if not isinstance(payload, Mapping):
        raise InvalidAnnotation(
            entity,
            expected="redaction rule with values",
            got=type(payload).__name__,
            hint="define a value for the custom redaction rule",
        )

    unknown = sorted(str(key) for key in payload if key not in RULE_BRANCHES)
    if unknown:
        raise InvalidAnnotation(
            entity,
            expected="one of " + ", ".join(sorted(RULE_BRANCHES)),
            got="unknown rule " + ", ".join(unknown),
        )

    branches = list(payload)
    if not branches:
        raise InvalidAnnotation(
            entity,
            expected="redaction rule with values",
            got="empty rule",
            hint="define a value for the custom redaction rule",
        )
    if len(branches) > 1:
        raise InvalidAnnotation(
            entity,
            expected="exactly one custom redaction rule",
            got="multiple rules (" + ", ".join(branches) + ")",
            hint="(redact.custom) values are mutually exclusive",
        )

    branch = branches[0]
    body = payload[branch]

    if branch == "element" and not allow_element:
        raise NestedDepthExceeded(
            entity,
            "nested element.item.element... is not supported - maximum nesting depth is 1",
            hint=NESTED_DEPTH_HINT,
        )
    if branch == "message":
        return _parse_message_rule(body, entity=entity)
    if branch == "element":
        return _parse_element_rule(body, entity=entity)

    if body is None:
        raise InvalidAnnotation(
            entity,
            expected=f"a value for (redact.custom).{branch}",
            got="null",
        )
    return ScalarRule(kind=branch, value=body)


def _parse_message_rule(body: Any, *, entity: str) -> MessageRule:
    if body is None or not isinstance(body, Mapping):
        raise InvalidAnnotation(
            entity,
            expected="message rule definition",
            got="nil message rule",
            hint="use (redact.custom).message.nil, .empty, or .skip",
        )
    _reject_unknown(body, MESSAGE_OPTIONS, rule="message", entity=entity)
    _reject_non_bool(body, MESSAGE_OPTIONS, rule="message", entity=entity)

    selected = [name for name in MESSAGE_OPTIONS if body.get(name)]
    if len(selected) > 1:
        raise InvalidAnnotation(
            entity,
            expected="at most one of (redact.custom).message.nil, .empty, or .skip",
            got="multiple options set (" + ", ".join(selected) + ")",
            hint="these options are mutually exclusive",
        )
    return MessageRule(
        nil=bool(body.get("nil")),
        empty=bool(body.get("empty")),
        skip=bool(body.get("skip")),
    )


def _parse_element_rule(body: Any, *, entity: str) -> ElementRule:
    if body is None or not isinstance(body, Mapping):
        raise InvalidAnnotation(
            entity,
            expected="element rule definition",
            got="nil element rule",
            hint="use (redact.custom).element.nested, .empty, or .item.*",
        )
    _reject_unknown(body, ELEMENT_OPTIONS, rule="element", entity=entity)
    _reject_non_bool(body, ("empty", "nested"), rule="element", entity=entity)

    selected = [
        name
        for name in ELEMENT_OPTIONS
        if (body.get(name) is not None if name == "item" else bool(body.get(name)))
    ]
    if not selected:
        raise InvalidAnnotation(
            entity,
            "(redact.custom).element is nil, no option defined",
            hint="use (redact.custom).element.nested, .empty, or .item.*",
        )
    if len(selected) > 1:
        raise InvalidAnnotation(
            entity,
            expected="exactly one of (redact.custom).element.empty, .nested, or .item",
            got="multiple options set (" + ", ".join(selected) + ")",
            hint="these options are mutually exclusive",
        )

    if selected[0] == "item":
        return ElementRule(item=parse_rule(body["item"], entity=entity, allow_element=False))
    return ElementRule(empty=bool(body.get("empty")), nested=bool(body.get("nested")))


def _reject_unknown(body: Mapping[str, Any], allowed: tuple[str, ...], *, rule: str, entity: str) -> None:
    unknown = sorted(str(key) for key in body if key not in allowed)
    if unknown:
        raise InvalidAnnotation(
            entity,
            expected=f"(redact.custom).{rule} options " + ", ".join(allowed),
            got="unknown option " + ", ".join(unknown),
        )


def _reject_non_bool(body: Mapping[str, Any], flags: tuple[str, ...], *, rule: str, entity: str) -> None:
    # An absent or null flag is unset; anything else must be a real boolean.
    for name in flags:
        value = body.get(name)
        if value is not None and not isinstance(value, bool):
            raise InvalidAnnotation(
                entity,
                expected=f"boolean value for (redact.custom).{rule}.{name}",
                got=f"{type(value).__name__} {value!r}",
                hint="use true or false without quotes",
            )
