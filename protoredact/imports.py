"""Go import aliases for generated files and type-name qualification."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from protoredact.errors import DiagnosticSink, RedactionError
from protoredact.schema.models import FileSpec, ImportSpec, TypeRef
from protoredact.validation import validate_import_path, validate_package_name

logger = logging.getLogger(__name__)

REDACT_IMPORT_PATH = "github.com/menta2k/protoc-gen-redact/v3/redact/v3"

STANDARD_IMPORTS: dict[str, str] = {
    "context": "context",
    "grpc": "google.golang.org/grpc",
    "codes": "google.golang.org/grpc/codes",
    "status": "google.golang.org/grpc/status",
    "redact": REDACT_IMPORT_PATH,
}

STANDARD_REFERENCES: tuple[str, ...] = (
    "grpc.Server",
    "context.Context",
    "redact.Redactor",
    "codes.Code",
    "status.Status",
)


@dataclass(slots=True)
class ImportTable:
    """Bidirectional alias <-> import path mapping for one generated file."""

    self_path: str
    alias_to_path: dict[str, str] = field(default_factory=lambda: dict(STANDARD_IMPORTS))
    path_to_alias: dict[str, str] = field(
        default_factory=lambda: {path: alias for alias, path in STANDARD_IMPORTS.items()}
    )
    references: list[str] = field(default_factory=lambda: list(STANDARD_REFERENCES))

    @classmethod
    def from_file(cls, file: FileSpec, *, sink: DiagnosticSink | None = None) -> ImportTable:
        """Assign a unique alias to every import that contributes usable types."""

        table = cls(self_path=file.go_import_path)

        for imported in file.imports:
            try:
                validate_import_path(imported.path)
            except RedactionError as exc:
                logger.debug("Skipping invalid import path: %s", exc)
                if sink is not None:
                    sink.warn(file.name, f"skipped import: {exc}")
                continue

            if imported.path == table.self_path:
                continue
            if imported.path in table.path_to_alias:
                continue
            # Annotation-only imports would produce unused Go imports.
            if not imported.has_usable_types():
                logger.debug("Skipping import %s: no usable types", imported.path)
                continue

            alias = imported.package or imported.path.rstrip("/").rsplit("/", 1)[-1]
            try:
                validate_package_name(alias)
            except RedactionError as exc:
                logger.debug("Skipping import with invalid package name %s: %s", alias, exc)
                if sink is not None:
                    sink.warn(file.name, f"skipped import {imported.path}: {exc}")
                continue

            alias = table._unique_alias(alias, imported.path)
            table.path_to_alias[imported.path] = alias
            table.alias_to_path[alias] = imported.path
            table.references.append(table._first_reference(alias, imported))

        logger.debug("Generated %d import references", len(table.references))
        return table

    def _unique_alias(self, alias: str, path: str) -> str:
        if alias not in self.alias_to_path:
            return alias
        count = 1
        while f"{alias}{count}" in self.alias_to_path:
            count += 1
        logger.debug("Resolved import alias conflict: %s -> %s%d", path, alias, count)
        return f"{alias}{count}"

    @staticmethod
    def _first_reference(alias: str, imported: ImportSpec) -> str:
        if imported.messages:
            name = imported.messages[0].go_name or imported.messages[0].name
        elif imported.enums:
            name = imported.enums[0]
        else:
            name = imported.services[0]
        return f"{alias}.{name}"

    def qualify(self, ref: TypeRef) -> str:
        """Return ``alias.Name`` for imported types, ``Name`` for local ones."""

        if ref.import_path is None or ref.import_path == self.self_path:
            return ref.name
        alias = self.path_to_alias.get(ref.import_path)
        if not alias:
            return ref.name
        return f"{alias}.{ref.name}"
