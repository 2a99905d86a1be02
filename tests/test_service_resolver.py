from __future__ import annotations

import pytest

from protoredact.errors import DiagnosticSink, InvalidStatusCode, StructuralError
from protoredact.resolve.services import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_STATUS_CODE,
    ServiceResolver,
    substitute_placeholders,
)
from protoredact.schema.models import MessageSpec, MethodSpec, ServiceSpec, TypeRef


def _method(name: str = "GetUser", **options: object) -> MethodSpec:
    return MethodSpec(name=name, input="GetUserRequest", output="User", **options)


def _service(*methods: MethodSpec, **options: object) -> ServiceSpec:
    return ServiceSpec(name="UserService", methods=list(methods), **options)


@pytest.fixture()
def resolver() -> ServiceResolver:
    return ServiceResolver()


def test_default_internal_method_uses_permission_denied(resolver: ServiceResolver) -> None:
    decision = resolver.resolve(_service(_method(), internal=True))
    method = decision.methods[0]

    assert method.internal is True
    assert method.status_code == DEFAULT_STATUS_CODE == 7
    assert method.status_name == "PermissionDenied"
    assert method.error_message == (
        'Permission Denied. Method: "UserService.GetUser" has been redacted'
    )


def test_public_method_is_not_internal(resolver: ServiceResolver) -> None:
    method = resolver.resolve(_service(_method())).methods[0]

    assert method.internal is False
    assert method.skip is False
    assert method.redacts_payload is True


@pytest.mark.parametrize("code", [0, 16])
def test_status_code_bounds_accepted(resolver: ServiceResolver, code: int) -> None:
    service_level = resolver.resolve(_service(_method(), internal=True, internal_code=code))
    method_level = resolver.resolve(_service(_method(internal=True, internal_code=code)))

    assert service_level.methods[0].status_code == code
    assert method_level.methods[0].status_code == code


@pytest.mark.parametrize("code", [17, 100, -1])
def test_status_code_out_of_range_on_service(resolver: ServiceResolver, code: int) -> None:
    with pytest.raises(InvalidStatusCode) as excinfo:
        resolver.resolve(_service(_method(), internal_code=code))
    assert "status code in UserService" in str(excinfo.value)


@pytest.mark.parametrize("code", [17, 100, -1])
def test_status_code_out_of_range_on_method(resolver: ServiceResolver, code: int) -> None:
    with pytest.raises(InvalidStatusCode) as excinfo:
        resolver.resolve(_service(_method(internal_code=code)))
    assert "UserService.GetUser" in str(excinfo.value)


def test_method_overrides_service_defaults(resolver: ServiceResolver) -> None:
    service = _service(
        _method("GetUser", internal_code=5, internal_err_message="%method% hidden"),
        _method("ListUsers", internal=False),
        _method("DeleteUser"),
        internal=True,
        internal_code=13,
        internal_err_message="%service% is internal",
    )
    get_user, list_users, delete_user = resolver.resolve(service).methods

    assert (get_user.internal, get_user.status_code, get_user.error_message) == (
        True,
        5,
        "GetUser hidden",
    )
    assert list_users.internal is False
    assert delete_user.status_code == 13
    assert delete_user.error_message == "UserService is internal"


def test_service_skip_applies_to_every_method(resolver: ServiceResolver) -> None:
    decision = resolver.resolve(_service(_method("A"), _method("B"), skip=True))

    assert decision.skip is True
    assert all(method.skip for method in decision.methods)
    assert all(method.status_code is None for method in decision.methods)
    assert not any(method.redacts_payload for method in decision.methods)


def test_skipped_method_still_validates_code(resolver: ServiceResolver) -> None:
    with pytest.raises(InvalidStatusCode):
        resolver.resolve(_service(_method(skip=True, internal_code=42)))


def test_streaming_methods_are_gated_only(resolver: ServiceResolver) -> None:
    service = _service(
        _method("Watch", server_streaming=True, internal=True),
        _method("Upload", client_streaming=True),
    )
    watch, upload = resolver.resolve(service).methods

    assert watch.internal is True
    assert watch.redacts_payload is False
    assert upload.redacts_payload is False


def test_method_without_output_is_structural(resolver: ServiceResolver) -> None:
    method = MethodSpec(name="Broken", input="Req")

    with pytest.raises(StructuralError):
        resolver.resolve(_service(method))


def test_method_errors_are_collected_with_sink() -> None:
    sink = DiagnosticSink()
    service = _service(_method("Bad", internal_code=99), _method("Good"))

    decision = ServiceResolver(sink=sink).resolve(service)

    assert [method.name for method in decision.methods] == ["Good"]
    assert [item.code for item in sink.errors] == ["InvalidStatusCode"]


def test_output_header_comes_from_lookup() -> None:
    user = MessageSpec(name="User", full_name="test.v1.User", nil=True)

    def lookup(ref: TypeRef) -> MessageSpec | None:
        return user if ref.name == "User" else None

    method = ServiceResolver(lookup=lookup).resolve(_service(_method())).methods[0]

    assert method.output.to_nil is True
    assert method.output.full_name == "test.v1.User"
    assert method.input == "GetUserRequest"


def test_unknown_output_falls_back_to_reference(resolver: ServiceResolver) -> None:
    method = resolver.resolve(_service(_method())).methods[0]

    assert method.output.name == "User"
    assert method.output.fields == ()


def test_error_message_literal_escapes_backticks(resolver: ServiceResolver) -> None:
    service = _service(_method(internal=True, internal_err_message="no `%method%`"))
    method = resolver.resolve(service).methods[0]

    assert method.error_message_literal == '"no `GetUser`"'


def test_template_without_placeholders_is_unchanged() -> None:
    template = "Access denied"
    assert substitute_placeholders(template, service="S", method="M") == template


def test_template_replaces_every_occurrence() -> None:
    template = "%method%/%method% on %service% (%service%)"
    assert substitute_placeholders(template, service="S", method="M") == "M/M on S (S)"


def test_default_template_mentions_both_placeholders() -> None:
    assert "%service%" in DEFAULT_ERROR_MESSAGE
    assert "%method%" in DEFAULT_ERROR_MESSAGE


def test_status_code_location_is_fully_qualified() -> None:
    resolver = ServiceResolver(package="test.v1")

    with pytest.raises(InvalidStatusCode) as excinfo:
        resolver.resolve(_service(_method(), internal_code=17))
    assert "status code in test.v1.UserService" in str(excinfo.value)

    with pytest.raises(InvalidStatusCode) as excinfo:
        resolver.resolve(_service(_method(internal_code=17)))
    assert "status code in test.v1.UserService.GetUser" in str(excinfo.value)


def test_package_does_not_leak_into_error_message() -> None:
    resolver = ServiceResolver(package="test.v1")
    method = resolver.resolve(_service(_method(), internal=True)).methods[0]

    assert method.error_message == (
        'Permission Denied. Method: "UserService.GetUser" has been redacted'
    )


def test_conflicting_output_options_fall_back_to_reference() -> None:
    sink = DiagnosticSink()
    user = MessageSpec(name="User", full_name="test.v1.User", nil=True, empty=True)

    decision = ServiceResolver(lookup=lambda ref: user, sink=sink).resolve(_service(_method()))

    assert [method.name for method in decision.methods] == ["GetUser"]
    assert decision.methods[0].output.to_nil is False
    assert not sink.has_errors()
