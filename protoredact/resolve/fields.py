"""Field resolution: one annotated field in, one :class:`FieldDecision` out."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from protoredact.errors import TypeMismatch
from protoredact.resolve.decisions import FieldDecision
from protoredact.rules.annotations import (
    ElementRule,
    FieldRules,
    MessageRule,
    ScalarRule,
    parse_field_rules,
)
from protoredact.rules.classifier import classify
from protoredact.rules.defaults import (
    CUSTOM_RULE_PREFIX,
    default_for,
    go_type_name,
    suggested_rule_spelling,
)
from protoredact.schema.models import LITERAL_KINDS, FieldSpec, TypeRef
from protoredact.validation import validate_field, validate_item_depth, validate_type_match

Qualifier = Callable[[TypeRef], str]


def local_name(ref: TypeRef) -> str:
    return ref.name


class FieldResolver:
    """Resolve a field and its ``(redact.*)`` annotation into a decision.

    Precedence, first match wins:

    1. no annotation (or an explicit ``redact: false`` without a rule): passthrough;
    2. bare ``redact`` flag: kind default, singular messages recurse;
    3. custom rule: type/label checked, then scalar literal, message rule or
       element rule (one level of item nesting at most).
    """

    def __init__(self, qualify: Qualifier | None = None) -> None:
        self._qualify = qualify or local_name

    def resolve(self, field: FieldSpec, *, message: str) -> FieldDecision:
        """Resolve ``field`` declared on ``message`` (its fully qualified name)."""

        validate_field(field, location=message)
        rules = parse_field_rules(field.redact, entity=f"{message}.{field.name}")
        return self._decide(field, rules, message=message)

    def resolve_rules(
        self,
        field: FieldSpec,
        rules: FieldRules | None,
        *,
        message: str,
    ) -> FieldDecision:
        """Resolve ``field`` against already parsed ``rules``."""

        validate_field(field, location=message)
        return self._decide(field, rules, message=message)

    def _decide(self, field: FieldSpec, rules: FieldRules | None, *, message: str) -> FieldDecision:
        entity = f"{message}.{field.name}"
        facts = self._facts(field)

        if rules is None or rules.is_empty:
            return FieldDecision(**facts)

        default = default_for(field.kind, field.is_container)
        if rules.value is None:
            return FieldDecision(
                **facts,
                redact=True,
                redaction_value=default,
                nested_call=facts["is_message"],
            )

        info = classify(rules.value, entity=entity)
        validate_type_match(field, rule_kind=info.kind, rule_label=info.label, entity=entity)

        if isinstance(info.rule, ScalarRule):
            return FieldDecision(**facts, redact=True, redaction_value=info.value)
        if isinstance(info.rule, MessageRule):
            outcome = self._message_outcome(info.rule, facts["embed_message_qualified"])
            return FieldDecision(**facts, redact=True, **outcome)

        outcome = self._element_outcome(field, info.rule, facts, entity=entity)
        return FieldDecision(**facts, redact=True, **outcome)

    def _facts(self, field: FieldSpec) -> dict[str, Any]:
        """Representation facts derived from the field alone."""

        is_map = field.label == "map"
        is_repeated = field.label == "repeated"
        embedded = field.type_ref if field.kind == "message" else None

        return {
            "name": field.name,
            "kind": field.kind,
            "is_map": is_map,
            "is_repeated": is_repeated,
            "is_message": embedded is not None and not field.is_container,
            # bytes are already nilable; messages are handled by reference.
            "is_optional": (
                field.optional
                and not field.is_container
                and field.kind in LITERAL_KINDS
                and field.kind != "bytes"
            ),
            "embed_message_name": embedded.name if embedded is not None else "",
            "embed_message_qualified": self._qualify(embedded) if embedded is not None else "",
            "go_type": self._go_type(field),
        }

    def _element_go_type(self, field: FieldSpec) -> str:
        if field.kind == "message" and field.type_ref is not None:
            return "*" + self._qualify(field.type_ref)
        if field.kind == "enum" and field.type_ref is not None:
            return self._qualify(field.type_ref)
        return go_type_name(field.kind)

    def _go_type(self, field: FieldSpec) -> str:
        element = self._element_go_type(field)
        if field.label == "repeated":
            return f"[]{element}"
        if field.label == "map":
            return f"map[{go_type_name(field.key_kind or 'string')}]{element}"
        return element

    @staticmethod
    def _message_outcome(rule: MessageRule, qualified: str) -> dict[str, Any]:
        if rule.empty:
            return {"redaction_value": f"&{qualified}{{}}"}
        if rule.nil:
            return {"redaction_value": "nil"}
        if rule.skip:
            return {"redaction_value": None, "embed_skip": True}
        return {"redaction_value": "nil", "nested_call": True}

    def _element_outcome(
        self,
        field: FieldSpec,
        rule: ElementRule,
        facts: dict[str, Any],
        *,
        entity: str,
    ) -> dict[str, Any]:
        if rule.empty:
            return {"redaction_value": f"{facts['go_type']}{{}}"}

        if rule.nested:
            return {
                "iterate": True,
                "redaction_value": default_for(field.kind, False),
                "nested_call": field.kind == "message",
            }

        validate_item_depth(rule.item, entity=entity)
        info = classify(rule.item, entity=entity)
        if info.kind != field.kind:
            item_spelling = suggested_rule_spelling(field.kind, "singular")
            raise TypeMismatch(
                f"field {entity}",
                expected=f"item rule for type {field.kind}",
                got=f"item rule for type {info.kind}",
                hint="use "
                + item_spelling.replace(CUSTOM_RULE_PREFIX, CUSTOM_RULE_PREFIX + ".element.item", 1)
                + " instead",
            )

        if isinstance(info.rule, MessageRule):
            outcome = self._message_outcome(info.rule, facts["embed_message_qualified"])
            return {"iterate": True, **outcome}
        return {"iterate": True, "redaction_value": info.value}
