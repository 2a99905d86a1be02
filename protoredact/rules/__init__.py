"""Redaction rule model, default literals and rule spellings."""

from protoredact.rules.annotations import (
    ElementRule,
    FieldRules,
    MessageRule,
    RuleValue,
    ScalarRule,
    parse_field_rules,
    parse_rule,
)
from protoredact.rules.defaults import (
    default_for,
    go_type_name,
    rule_from_spelling,
    suggested_rule_spelling,
    to_custom_rule,
)

__all__ = [
    "ElementRule",
    "FieldRules",
    "MessageRule",
    "RuleValue",
    "ScalarRule",
    "default_for",
    "go_type_name",
    "parse_field_rules",
    "parse_rule",
    "rule_from_spelling",
    "suggested_rule_spelling",
    "to_custom_rule",
]
