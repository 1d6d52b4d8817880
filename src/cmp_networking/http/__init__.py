"""HTTP transport submodule for the networking facade."""

from .logger import FileHTTPLogger
from .logger import HTTPLogger
from .resolver import FallbackResolver
from .resolver import create_default_resolver
from .transport import AiohttpTransport
from .transport import Transport

__all__ = [
    "AiohttpTransport",
    "FallbackResolver",
    "FileHTTPLogger",
    "HTTPLogger",
    "Transport",
    "create_default_resolver",
]
