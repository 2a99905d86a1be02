"""Resolution of annotated schema trees into renderer decisions."""

from protoredact.resolve.decisions import (
    GRPC_STATUS_NAMES,
    PERMISSION_DENIED,
    FieldDecision,
    MessageDecision,
    MethodDecision,
    ProtoFileData,
    ServiceDecision,
)
from protoredact.resolve.fields import FieldResolver, Qualifier, local_name
from protoredact.resolve.messages import MessageResolver
from protoredact.resolve.process import FileProcessor
from protoredact.resolve.services import (
    DEFAULT_ERROR_MESSAGE,
    DEFAULT_STATUS_CODE,
    ServiceDefaults,
    ServiceResolver,
    substitute_placeholders,
)

__all__ = [
    "DEFAULT_ERROR_MESSAGE",
    "DEFAULT_STATUS_CODE",
    "GRPC_STATUS_NAMES",
    "PERMISSION_DENIED",
    "FieldDecision",
    "FieldResolver",
    "FileProcessor",
    "MessageDecision",
    "MessageResolver",
    "MethodDecision",
    "ProtoFileData",
    "Qualifier",
    "ServiceDecision",
    "ServiceDefaults",
    "ServiceResolver",
    "local_name",
    "substitute_placeholders",
]
