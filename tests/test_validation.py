from __future__ import annotations

import pytest

from protoredact.errors import (
    Diagnostic,
    DiagnosticSink,
    InvalidStatusCode,
    RedactionError,
    StructuralError,
    TypeMismatch,
)
from protoredact.schema.models import FieldSpec, FileSpec, MethodSpec, ServiceSpec
from protoredact.validation import (
    validate_field,
    validate_file,
    validate_import_path,
    validate_method,
    validate_package_name,
    validate_service,
    validate_status_code,
)


def test_expectation_error_rendering() -> None:
    error = TypeMismatch(
        "field test.v1.User.age",
        expected="rule for type int32",
        got="rule for type string",
        hint="use (redact.custom).int32 instead",
    )

    assert str(error) == (
        "Validation failed for field test.v1.User.age: expected rule for type int32, "
        "got rule for type string (hint: use (redact.custom).int32 instead)"
    )
    assert error.code == "TypeMismatch"


def test_contextual_error_rendering() -> None:
    error = StructuralError("test.v1.User", "field is nil", hint="check the schema")
    assert str(error) == "[test.v1.User] field is nil\n\nHint: check the schema"


def test_every_error_is_a_redaction_error() -> None:
    assert issubclass(InvalidStatusCode, RedactionError)
    assert issubclass(StructuralError, RedactionError)


def test_sink_records_errors_and_warnings() -> None:
    sink = DiagnosticSink()
    sink.record(StructuralError("svc", "service is nil"))
    sink.warn("user.proto", "skipped import")

    assert len(sink) == 2
    assert sink.has_errors()
    assert sink.errors[0] == Diagnostic(
        entity="svc", code="StructuralError", message="[svc] service is nil"
    )
    assert sink.warnings[0].severity == "warning"
    assert sink.to_dicts()[1]["entity"] == "user.proto"


def test_empty_sink_has_no_errors() -> None:
    sink = DiagnosticSink()
    sink.warn("x", "y")
    assert not sink.has_errors()


@pytest.mark.parametrize("code", [True, 1.0, "7", None])
def test_status_code_must_be_an_int(code: object) -> None:
    with pytest.raises(InvalidStatusCode):
        validate_status_code(code, "Svc")


def test_status_code_returns_value() -> None:
    assert validate_status_code(16, "Svc") == 16


def test_structural_checks() -> None:
    with pytest.raises(StructuralError):
        validate_field(None, location="M")
    with pytest.raises(StructuralError):
        validate_field(FieldSpec(name="m", kind="string", label="map"), location="M")
    with pytest.raises(StructuralError):
        validate_field(
            FieldSpec(name="r", kind="string", label="repeated", optional=True), location="M"
        )
    with pytest.raises(StructuralError):
        validate_field(FieldSpec(name="e", kind="enum"), location="M")
    with pytest.raises(StructuralError):
        validate_service(None)
    with pytest.raises(StructuralError):
        validate_method(MethodSpec(name="Get", output="Resp"), location="Svc")
    with pytest.raises(StructuralError):
        validate_method(None, location="Svc")
    with pytest.raises(StructuralError):
        validate_file(FileSpec(name="a.proto"))


def test_valid_elements_pass() -> None:
    validate_field(FieldSpec(name="m", kind="string", label="map", key_kind="int32"), location="M")
    validate_service(ServiceSpec(name="Svc"))
    validate_method(MethodSpec(name="Get", input="Req", output="Resp"), location="Svc")
    validate_file(FileSpec(name="a.proto", package="a.v1"))


def test_import_path_and_package_name_checks() -> None:
    validate_import_path("github.com/example/common/v1")
    validate_package_name("common")

    with pytest.raises(StructuralError):
        validate_import_path("")
    with pytest.raises(StructuralError):
        validate_import_path("a" * 1001)
    with pytest.raises(StructuralError):
        validate_package_name("")
    with pytest.raises(StructuralError, match="cannot start with numbers"):
        validate_package_name("3rdparty")
