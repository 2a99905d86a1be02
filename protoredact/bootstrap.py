"""Application bootstrap wiring ports, adapters, and services."""

from __future__ import annotations

from dataclasses import dataclass

from protoredact.app import GenerateService
from protoredact.app.adapters import JSONDecisionRenderer, YAMLSchemaLoader
from protoredact.app.ports import RendererPort, SchemaSourcePort
from protoredact.config import Settings, get_settings


@dataclass(slots=True)
class ApplicationContainer:
    """Aggregates wired services and adapters for the CLI layer."""

    settings: Settings
    schema_source: SchemaSourcePort
    renderer: RendererPort
    generate_service: GenerateService


def bootstrap_application(settings: Settings | None = None) -> ApplicationContainer:
    """Create the application container with default adapters."""

    active_settings = settings or get_settings()
    schema_source = YAMLSchemaLoader()
    renderer = JSONDecisionRenderer(settings=active_settings)
    generate_service = GenerateService(
        schema_source=schema_source,
        renderer=renderer,
        settings=active_settings,
    )

    return ApplicationContainer(
        settings=active_settings,
        schema_source=schema_source,
        renderer=renderer,
        generate_service=generate_service,
    )
