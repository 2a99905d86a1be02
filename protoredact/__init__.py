"""protoredact - redaction planning for protocol-buffer code generation.

Resolves ``(redact.*)`` schema annotations into validated per-field,
per-message and per-method decisions ready for Go code emission.
"""

__version__ = "0.1.0"
__author__ = "protoredact Contributors"

from protoredact.config import Settings, get_settings

__all__ = ["Settings", "get_settings", "__version__"]
