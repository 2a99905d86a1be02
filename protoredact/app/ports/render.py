"""Renderer port."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol

from protoredact.resolve.decisions import ProtoFileData


class RendererPort(Protocol):
    """Port interface for emitting resolved decisions."""

    def render(self, data: ProtoFileData, *, output_dir: Path) -> Path:
        """Write ``data`` below ``output_dir`` and return the artifact path."""
        ...
