"""Application layer for protoredact.

Services orchestrate resolution without direct filesystem I/O; loading and
rendering are delegated to adapters via port interfaces.
"""

__all__ = [
    "FileResult",
    "GenerateService",
    "GenerationFailed",
    "GenerationReport",
]

from protoredact.app.generate_service import (
    FileResult,
    GenerateService,
    GenerationFailed,
    GenerationReport,
)
