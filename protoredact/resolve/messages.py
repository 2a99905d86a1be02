"""Message resolution with message-level ignore / nil / empty options."""

from __future__ import annotations

import logging

from protoredact.errors import DiagnosticSink, RedactionError
from protoredact.resolve.decisions import FieldDecision, MessageDecision
from protoredact.resolve.fields import FieldResolver, Qualifier, local_name
from protoredact.schema.models import MessageSpec, TypeRef
from protoredact.validation import validate_message

logger = logging.getLogger(__name__)


class MessageResolver:
    """Resolve messages field by field.

    When a :class:`DiagnosticSink` is supplied, a failing field is recorded
    and left out of the decision while its siblings are still resolved;
    without a sink the first failure propagates.
    """

    def __init__(
        self,
        field_resolver: FieldResolver | None = None,
        *,
        qualify: Qualifier | None = None,
        sink: DiagnosticSink | None = None,
    ) -> None:
        self._qualify = qualify or local_name
        self._fields = field_resolver or FieldResolver(self._qualify)
        self._sink = sink

    def resolve(
        self,
        message: MessageSpec,
        *,
        with_fields: bool = True,
        import_path: str | None = None,
    ) -> MessageDecision:
        """Resolve ``message``; ``with_fields=False`` resolves the header only."""

        validate_message(message)

        go_name = message.go_name or message.name
        location = message.full_name or message.name
        header = {
            "name": go_name,
            "qualified_name": self._qualify(TypeRef(name=go_name, import_path=import_path)),
            "full_name": location,
            "ignore": message.ignored,
            "to_nil": message.nil,
            "to_empty": message.empty,
        }

        if message.ignored:
            logger.debug("Message %s is marked as ignored", location)
            return MessageDecision(**header)
        if not with_fields:
            return MessageDecision(**header)

        fields: list[FieldDecision] = []
        for field in message.fields:
            try:
                fields.append(self._fields.resolve(field, message=location))
            except RedactionError as exc:
                if self._sink is None:
                    raise
                self._sink.record(exc)
                logger.debug("Field resolution failed in %s: %s", location, exc)

        return MessageDecision(**header, fields=tuple(fields))
