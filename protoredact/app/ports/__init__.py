"""Port interfaces for the protoredact application layer.

Services depend on these protocols, never on concrete adapters.
"""

__all__ = [
    "RendererPort",
    "SchemaSourcePort",
]

from protoredact.app.ports.render import RendererPort
from protoredact.app.ports.schema import SchemaSourcePort
