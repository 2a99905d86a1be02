"""Generation service: resolve schema files, then render them if clean.

Follows a plan/generate split: ``plan`` resolves every file and collects
diagnostics without touching the filesystem; ``generate`` renders only when
the whole run is free of errors.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from protoredact.app.ports import RendererPort, SchemaSourcePort
from protoredact.config import Settings, get_settings
from protoredact.errors import Diagnostic, DiagnosticSink
from protoredact.resolve.decisions import ProtoFileData
from protoredact.resolve.process import FileProcessor

logger = logging.getLogger(__name__)


class GenerationFailed(RuntimeError):
    """Raised when rendering is requested for a run that recorded errors."""

    def __init__(self, report: GenerationReport) -> None:
        self.report = report
        errors = report.errors
        super().__init__(
            f"Generation aborted: {len(errors)} error(s) recorded"
            + (f"; first: {errors[0].message}" if errors else "")
        )


@dataclass(frozen=True, slots=True)
class FileResult:
    """Resolution outcome for one schema file."""

    path: Path
    data: ProtoFileData | None
    failed: bool = False

    @property
    def skipped(self) -> bool:
        return self.data is None and not self.failed

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": str(self.path),
            "skipped": self.skipped,
            "failed": self.failed,
            "decisions": self.data.to_dict() if self.data is not None else None,
        }


@dataclass(slots=True)
class GenerationReport:
    """Resolved files plus every diagnostic recorded along the way."""

    files: list[FileResult] = field(default_factory=list)
    sink: DiagnosticSink = field(default_factory=DiagnosticSink)
    outputs: list[Path] = field(default_factory=list)

    @property
    def errors(self) -> list[Diagnostic]:
        return self.sink.errors

    @property
    def warnings(self) -> list[Diagnostic]:
        return self.sink.warnings

    def has_errors(self) -> bool:
        return self.sink.has_errors()

    def to_dict(self) -> dict[str, Any]:
        return {
            "files": [item.to_dict() for item in self.files],
            "diagnostics": self.sink.to_dicts(),
            "outputs": [str(path) for path in self.outputs],
            "ok": not self.has_errors(),
        }


class GenerateService:
    """Orchestrates loading, resolution and rendering. All I/O goes through ports."""

    def __init__(
        self,
        *,
        schema_source: SchemaSourcePort,
        renderer: RendererPort,
        settings: Settings | None = None,
    ) -> None:
        self.source = schema_source
        self.renderer = renderer
        self._settings = settings or get_settings()

    def plan(self, paths: Iterable[Path]) -> GenerationReport:
        """Resolve every schema in ``paths`` without rendering anything."""

        report = GenerationReport()
        processor = FileProcessor(settings=self._settings, sink=report.sink)

        for path in paths:
            spec = self.source.load(Path(path))
            recorded = len(report.errors)
            data = processor.process(spec)
            failed = data is None and len(report.errors) > recorded
            if failed:
                logger.warning("Could not resolve %s: %s", path, report.errors[-1].message)
            elif data is None:
                logger.info("Skipping %s: file marked as skipped", path)
            report.files.append(FileResult(path=Path(path), data=data, failed=failed))

        if report.has_errors():
            logger.warning("Resolution recorded %d error(s)", len(report.errors))
        return report

    def generate(self, paths: Iterable[Path], output_dir: Path | None = None) -> GenerationReport:
        """Resolve ``paths`` and render each non-skipped file.

        Raises:
            GenerationFailed: if any error was recorded; nothing is written.
        """

        report = self.plan(paths)
        if report.has_errors():
            raise GenerationFailed(report)

        destination = Path(output_dir) if output_dir is not None else self._settings.get_output_dir()
        for result in report.files:
            if result.data is None:
                continue
            report.outputs.append(self.renderer.render(result.data, output_dir=destination))

        logger.info("Rendered %d decision file(s) to %s", len(report.outputs), destination)
        return report
