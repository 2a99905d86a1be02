"""Renderer adapter writing stamped JSON decision files."""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path

from protoredact.app.ports import RendererPort
from protoredact.config import Settings, get_settings
from protoredact.resolve.decisions import ProtoFileData
from protoredact.utils.schema import build_schema_stamp

DECISIONS_SCHEMA_ID = "redaction_decisions"
DECISIONS_SCHEMA_VERSION = 1


class JSONDecisionRenderer(RendererPort):
    """Emit one ``<stem><output_suffix>`` JSON document per resolved file.

    The write goes through a temporary file followed by ``os.replace`` so a
    crash never leaves a truncated artifact behind.
    """

    def __init__(self, settings: Settings | None = None) -> None:
        self._settings = settings or get_settings()

    def destination_for(self, data: ProtoFileData, output_dir: Path) -> Path:
        stem = Path(data.source).name
        for suffix in (".proto", ".yaml", ".yml", ".json"):
            if stem.endswith(suffix):
                stem = stem[: -len(suffix)]
                break
        return output_dir / f"{stem}{self._settings.output_suffix}"

    def render(self, data: ProtoFileData, *, output_dir: Path) -> Path:
        destination = self.destination_for(data, Path(output_dir))
        destination.parent.mkdir(parents=True, exist_ok=True)

        stamp = build_schema_stamp(
            schema_id=DECISIONS_SCHEMA_ID,
            schema_version=DECISIONS_SCHEMA_VERSION,
        )
        payload = json.dumps(stamp.apply(data.to_dict()), indent=2, ensure_ascii=False)

        fd: int | None = None
        tmp_path: str | None = None
        try:
            fd, tmp_path = tempfile.mkstemp(
                dir=str(destination.parent),
                prefix=destination.name,
                suffix=".tmp",
                text=True,
            )
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                fd = None  # Ownership transferred to file object
                handle.write(payload)
                handle.write("\n")
                handle.flush()
                os.fsync(handle.fileno())

            os.replace(tmp_path, destination)
            tmp_path = None
        finally:
            if fd is not None:
                os.close(fd)
            if tmp_path is not None:
                try:
                    os.unlink(tmp_path)
                except FileNotFoundError:
                    pass

        return destination
