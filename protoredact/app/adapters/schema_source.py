"""Schema source adapter backed by YAML/JSON description files."""

from __future__ import annotations

import logging
from pathlib import Path

from protoredact.app.ports import SchemaSourcePort
from protoredact.schema.loader import load_file_spec
from protoredact.schema.models import FileSpec

logger = logging.getLogger(__name__)


class YAMLSchemaLoader(SchemaSourcePort):
    """Read schema descriptions with PyYAML and validate them with pydantic."""

    def load(self, path: Path) -> FileSpec:
        spec = load_file_spec(path)
        logger.debug(
            "Loaded %s: %d messages, %d services, %d imports",
            spec.name,
            len(spec.all_messages()),
            len(spec.services),
            len(spec.imports),
        )
        return spec
