"""Load schema descriptions from YAML or JSON documents."""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from protoredact.schema.models import FileSpec


def load_file_spec(path: Path) -> FileSpec:
    """Parse ``path`` (YAML or JSON) into a validated :class:`FileSpec`.

    JSON documents are valid YAML, so a single ``yaml.safe_load`` covers both.
    """

    resolved = Path(path).resolve()
    if not resolved.exists():
        raise FileNotFoundError(f"Schema description not found: {resolved}")

    with resolved.open("r", encoding="utf-8") as handle:
        try:
            data: dict[str, Any] | None = yaml.safe_load(handle)
        except yaml.YAMLError as exc:
            raise ValueError(f"Malformed schema description at {resolved}: {exc}") from exc

    if data is None:
        raise ValueError(f"Schema description is empty: {resolved}")
    if not isinstance(data, dict):
        raise ValueError(f"Schema description must be a mapping: {resolved}")

    data.setdefault("name", resolved.name)
    try:
        return FileSpec.model_validate(data)
    except ValidationError as exc:
        raise ValueError(f"Invalid schema description at {resolved}: {exc}") from exc
