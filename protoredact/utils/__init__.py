"""Shared utilities."""

from protoredact.utils.cli_output import json_response
from protoredact.utils.schema import SchemaStamp, build_schema_stamp, strip_schema_metadata

__all__ = ["SchemaStamp", "build_schema_stamp", "json_response", "strip_schema_metadata"]
