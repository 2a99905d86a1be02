"""Concrete adapters wiring application ports to built-in implementations."""

from __future__ import annotations

from .json_renderer import JSONDecisionRenderer
from .schema_source import YAMLSchemaLoader

__all__ = [
    "JSONDecisionRenderer",
    "YAMLSchemaLoader",
]
