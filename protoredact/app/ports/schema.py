"""Schema source port."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from protoredact.schema.models import FileSpec


class SchemaSourcePort(Protocol):
    """Port interface for reading annotated schema descriptions."""

    def load(self, path: Path) -> FileSpec:
        """Return the validated :class:`FileSpec` described at ``path``."""
        ...
