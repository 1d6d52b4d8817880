"""
cmp_networking - async two-method HTTP client.

Example:
    from cmp_networking import Networking

    async with Networking() as networking:
        body = await networking.get("https://httpbin.org/get")
"""

from .config import NetworkingConfig
from .exceptions import HTTPStatusError
from .exceptions import NetworkConnectionError
from .exceptions import NetworkError
from .exceptions import NetworkTimeoutError
from .exceptions import RequestCancelledError
from .http import AiohttpTransport
from .http import FallbackResolver
from .http import FileHTTPLogger
from .http import HTTPLogger
from .http import Transport
from .networking import Networking
from .types import JSON_CONTENT_TYPE
from .types import Method
from .types import Request
from .types import Response

__all__ = [
    "JSON_CONTENT_TYPE",
    "AiohttpTransport",
    "FallbackResolver",
    "FileHTTPLogger",
    "HTTPLogger",
    "HTTPStatusError",
    "Method",
    "NetworkConnectionError",
    "NetworkError",
    "NetworkTimeoutError",
    "Networking",
    "NetworkingConfig",
    "Request",
    "RequestCancelledError",
    "Response",
    "Transport",
]
