"""Schema-wrapped JSON output for CLI commands."""

from __future__ import annotations

import json
from typing import Any

from protoredact.utils.schema import build_schema_stamp


def json_response(
    schema_id: str,
    schema_version: int,
    **data: Any,
) -> str:
    """Create schema-wrapped JSON response for CLI output.

    Example:
        >>> json_response("redaction_defaults", 1, defaults=[])
        {
          "schema_id": "redaction_defaults",
          "schema_version": 1,
          "producer": "protoredact-0.1.0",
          "produced_at": "2026-01-12T10:30:00+00:00",
          "defaults": []
        }
    """
    stamp = build_schema_stamp(schema_id=schema_id, schema_version=schema_version)
    return json.dumps(stamp.apply(data), indent=2, default=str)
