"""Service and method resolution: skip flags and internal-method gating."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass

from protoredact.errors import DiagnosticSink, RedactionError, StructuralError
from protoredact.resolve.decisions import (
    PERMISSION_DENIED,
    MessageDecision,
    MethodDecision,
    ServiceDecision,
)
from protoredact.resolve.fields import Qualifier, local_name
from protoredact.resolve.messages import MessageResolver
from protoredact.schema.models import MessageSpec, MethodSpec, ServiceSpec, TypeRef
from protoredact.validation import (
    has_conflicting_options,
    validate_method,
    validate_service,
    validate_status_code,
)

logger = logging.getLogger(__name__)

DEFAULT_STATUS_CODE = PERMISSION_DENIED
DEFAULT_ERROR_MESSAGE = 'Permission Denied. Method: "%service%.%method%" has been redacted'
SPECIFIER_METHOD = "%method%"
SPECIFIER_SERVICE = "%service%"

MessageLookup = Callable[[TypeRef], MessageSpec | None]


def substitute_placeholders(template: str, *, service: str, method: str) -> str:
    """Replace every ``%method%`` and ``%service%`` occurrence in ``template``."""
    return template.replace(SPECIFIER_METHOD, method).replace(SPECIFIER_SERVICE, service)


@dataclass(frozen=True, slots=True)
class ServiceDefaults:
    """Service-level options inherited by each method unless overridden."""

    skip: bool = False
    internal: bool = False
    status_code: int = DEFAULT_STATUS_CODE
    error_message: str = DEFAULT_ERROR_MESSAGE


class ServiceResolver:
    """Resolve services into per-method access decisions.

    Method outputs are resolved as message headers; their fields belong to
    the file that declares the message. ``lookup`` maps an output type to
    its :class:`MessageSpec` when it is known.
    """

    def __init__(
        self,
        message_resolver: MessageResolver | None = None,
        *,
        qualify: Qualifier | None = None,
        lookup: MessageLookup | None = None,
        sink: DiagnosticSink | None = None,
        package: str = "",
    ) -> None:
        self._qualify = qualify or local_name
        self._package = package
        self._messages = message_resolver or MessageResolver(qualify=self._qualify, sink=sink)
        self._lookup = lookup
        self._sink = sink

    def resolve(self, service: ServiceSpec) -> ServiceDecision:
        validate_service(service)
        location = self.full_name(service.name)
        defaults = self.service_defaults(service, location=location)
        if defaults.skip:
            logger.debug("Service %s is marked as skipped", location)

        methods: list[MethodDecision] = []
        for method in service.methods:
            try:
                methods.append(
                    self.resolve_method(method, service_name=service.name, defaults=defaults)
                )
            except RedactionError as exc:
                if self._sink is None:
                    raise
                self._sink.record(exc)
                logger.debug("Method resolution failed in %s: %s", location, exc)

        return ServiceDecision(name=service.name, skip=defaults.skip, methods=tuple(methods))

    def full_name(self, name: str) -> str:
        """Fully qualified proto name of a service or method in this package."""
        return f"{self._package}.{name}" if self._package else name

    @staticmethod
    def service_defaults(service: ServiceSpec, *, location: str | None = None) -> ServiceDefaults:
        """Validate and collect the options a service hands down to its methods."""

        code = DEFAULT_STATUS_CODE
        if service.internal_code is not None:
            code = validate_status_code(service.internal_code, location or service.name)

        message = DEFAULT_ERROR_MESSAGE
        if service.internal_err_message is not None:
            message = service.internal_err_message

        return ServiceDefaults(
            skip=service.skip,
            internal=service.internal,
            status_code=code,
            error_message=message,
        )

    def resolve_method(
        self,
        method: MethodSpec,
        *,
        service_name: str,
        defaults: ServiceDefaults,
    ) -> MethodDecision:
        service_location = self.full_name(service_name)
        validate_method(method, location=service_location)
        location = f"{service_location}.{method.name}"

        code = defaults.status_code
        if method.internal_code is not None:
            code = validate_status_code(method.internal_code, location)

        assert method.input is not None and method.output is not None
        base = {
            "name": method.name,
            "input": self._qualify(method.input),
            "output": self._output_decision(method.output, location=location),
            "client_streaming": method.client_streaming,
            "server_streaming": method.server_streaming,
        }

        if method.skip or defaults.skip:
            if method.skip:
                logger.debug("Method %s is marked as skipped", location)
            return MethodDecision(**base, skip=True)

        internal = defaults.internal if method.internal is None else method.internal
        template = (
            defaults.error_message
            if method.internal_err_message is None
            else method.internal_err_message
        )

        return MethodDecision(
            **base,
            internal=internal,
            status_code=code,
            error_message=substitute_placeholders(
                template, service=service_name, method=method.name
            ),
        )

    def _output_decision(self, ref: TypeRef, *, location: str) -> MessageDecision:
        spec = self._lookup(ref) if self._lookup is not None else None
        if spec is not None and has_conflicting_options(spec):
            # Reported once, by the resolution of the declaring message.
            logger.debug("Output %s of %s has conflicting options", ref.name, location)
            spec = None
        if spec is None:
            if not ref.name:
                raise StructuralError(location, "method output has no type name")
            return MessageDecision(
                name=ref.name, qualified_name=self._qualify(ref), full_name=ref.name
            )
        return self._messages.resolve(spec, with_fields=False, import_path=ref.import_path)
