"""Per-file driver: a :class:`FileSpec` in, a :class:`ProtoFileData` out."""

from __future__ import annotations

import logging

from protoredact.config import Settings, get_settings
from protoredact.errors import DiagnosticSink, RedactionError
from protoredact.imports import ImportTable
from protoredact.resolve.decisions import MessageDecision, ProtoFileData, ServiceDecision
from protoredact.resolve.fields import FieldResolver
from protoredact.resolve.messages import MessageResolver
from protoredact.resolve.services import ServiceResolver
from protoredact.schema.models import FileSpec
from protoredact.validation import validate_file

logger = logging.getLogger(__name__)


class FileProcessor:
    """Resolve services and messages of one file into renderer input.

    With ``settings.fail_fast`` the first :class:`RedactionError` propagates.
    Otherwise every error lands in ``sink`` and the failing field, method,
    message or service is left out while its siblings are resolved.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self.settings = settings or get_settings()
        self.sink = sink if sink is not None else DiagnosticSink()

    def process(self, file: FileSpec) -> ProtoFileData | None:
        """Return the decisions for ``file``, or ``None`` when it is skipped or invalid."""

        try:
            validate_file(file)
        except RedactionError as exc:
            self._collect(exc)
            return None
        if file.file_skip:
            logger.debug("File %s is marked as skipped", file.name)
            return None

        collecting = None if self.settings.fail_fast else self.sink
        table = ImportTable.from_file(file, sink=self.sink)

        fields = FieldResolver(table.qualify)
        messages = MessageResolver(fields, qualify=table.qualify, sink=collecting)
        services = ServiceResolver(
            messages,
            qualify=table.qualify,
            lookup=file.find_message,
            sink=collecting,
            package=file.package,
        )

        service_decisions: list[ServiceDecision] = []
        for service in file.services:
            try:
                service_decisions.append(services.resolve(service))
            except RedactionError as exc:
                self._collect(exc)

        message_decisions: list[MessageDecision] = []
        for message in file.all_messages():
            try:
                message_decisions.append(messages.resolve(message))
            except RedactionError as exc:
                self._collect(exc)

        logger.debug(
            "Resolved %s: %d services, %d messages",
            file.name,
            len(service_decisions),
            len(message_decisions),
        )
        return ProtoFileData(
            source=file.name,
            package=file.go_package_name,
            imports=dict(table.alias_to_path),
            references=tuple(table.references),
            services=tuple(service_decisions),
            messages=tuple(message_decisions),
        )

    def _collect(self, exc: RedactionError) -> None:
        if self.settings.fail_fast:
            raise exc
        self.sink.record(exc)
        logger.debug("Resolution error: %s", exc)
