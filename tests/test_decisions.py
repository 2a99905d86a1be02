from __future__ import annotations

import pytest

from protoredact.resolve.decisions import (
    GRPC_STATUS_NAMES,
    PERMISSION_DENIED,
    FieldDecision,
    MessageDecision,
    MethodDecision,
)


def test_status_names_cover_canonical_range() -> None:
    assert len(GRPC_STATUS_NAMES) == 17
    assert GRPC_STATUS_NAMES[0] == "OK"
    assert GRPC_STATUS_NAMES[16] == "Unauthenticated"
    assert PERMISSION_DENIED == 7


def test_nested_call_and_skip_are_exclusive() -> None:
    with pytest.raises(ValueError):
        FieldDecision(name="f", kind="message", nested_call=True, embed_skip=True)


def test_iterate_requires_container() -> None:
    with pytest.raises(ValueError):
        FieldDecision(name="f", kind="int32", iterate=True)


def test_optional_containers_are_rejected() -> None:
    with pytest.raises(ValueError):
        FieldDecision(name="f", kind="int32", is_repeated=True, is_optional=True)


def test_message_flags_are_exclusive() -> None:
    with pytest.raises(ValueError):
        MessageDecision(name="M", qualified_name="M", ignore=True, to_empty=True)


def test_field_to_dict_includes_temp_var_flag() -> None:
    decision = FieldDecision(
        name="age", kind="int32", redact=True, redaction_value="18", is_optional=True
    )
    assert decision.to_dict()["needs_temp_var"] is True


def test_nil_value_on_optional_needs_no_temp_var() -> None:
    decision = FieldDecision(
        name="age", kind="int32", redact=True, redaction_value="nil", is_optional=True
    )
    assert decision.needs_temp_var is False


def test_skipped_method_has_no_status() -> None:
    method = MethodDecision(
        name="Get", input="Req", output=MessageDecision(name="Resp", qualified_name="Resp"), skip=True
    )

    assert method.status_name is None
    assert method.error_message_literal is None
    assert method.to_dict()["redacts_payload"] is False
