"""
Transports that carry requests for the networking facade.

The facade talks to the ``Transport`` interface only; ``AiohttpTransport`` is
the pooled aiohttp backend used by default.
"""

import asyncio
import logging
from abc import ABC
from abc import abstractmethod
from types import SimpleNamespace
from typing import Any

import aiohttp
from aiohttp.abc import AbstractResolver

from ..config import NetworkingConfig
from ..exceptions import NetworkConnectionError
from ..exceptions import NetworkError
from ..exceptions import NetworkTimeoutError
from ..types import Request
from ..types import Response
from .resolver import create_default_resolver

logger = logging.getLogger(__name__)


class Transport(ABC):
    """
    Abstract transport.

    Implementations send one request and return the fully read response
    whatever its status. Failures to obtain a response are raised as
    ``NetworkError`` subclasses; ``asyncio.CancelledError`` passes through.
    """

    @abstractmethod
    async def send(self, request: Request) -> Response:
        """
        Send a request and read the whole response.

        Args:
            request: The request to send

        Returns:
            The response, including non-2xx ones

        Raises:
            NetworkError: If no response could be obtained
        """
        pass

    async def close(self) -> None:
        """Release pooled resources. The transport stays usable afterwards."""
        return None


async def _on_request_headers_sent(
    session: aiohttp.ClientSession,
    trace_config_ctx: SimpleNamespace,
    params: aiohttp.TraceRequestHeadersSentParams,
) -> None:
    progress = trace_config_ctx.trace_request_ctx
    if progress is not None:
        progress["request_sent"] = True


class AiohttpTransport(Transport):
    """
    Transport backed by a single pooled ``aiohttp.ClientSession``.

    The session is created lazily on first use and shared by all concurrent
    calls. A connection failure that happens before the request headers were
    written is retried once when ``retry_on_connection_failure`` is set.

    Example:
        transport = AiohttpTransport(NetworkingConfig(read_timeout=10.0))
        response = await transport.send(Request(url="https://example.com"))
        await transport.close()
    """

    def __init__(
        self,
        config: NetworkingConfig | None = None,
        resolver: AbstractResolver | None = None,
    ):
        """
        Initialize the transport.

        Args:
            config: Timeouts, retry and DNS settings. Defaults to NetworkingConfig().
            resolver: Custom aiohttp resolver. When omitted, the system resolver
                      is used, wrapped with a public-nameserver fallback if
                      ``config.dns_fallback`` is set.
        """
        self.config = config or NetworkingConfig()
        self._resolver = resolver
        self._owned_resolver: AbstractResolver | None = None
        self._timeout = aiohttp.ClientTimeout(
            total=None,
            # connect covers pool wait, name resolution and the socket connect
            connect=self.config.connect_timeout,
            sock_connect=self.config.connect_timeout,
            sock_read=self.config.read_timeout,
        )
        self._trace_config = aiohttp.TraceConfig()
        self._trace_config.on_request_headers_sent.append(_on_request_headers_sent)
        self._session: aiohttp.ClientSession | None = None

    async def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if self._session is None or self._session.closed:
            resolver = self._resolver
            if resolver is None:
                nameservers = self.config.fallback_nameservers if self.config.dns_fallback else None
                resolver = create_default_resolver(nameservers)
                self._owned_resolver = resolver
            headers = {"User-Agent": self.config.user_agent} if self.config.user_agent else None
            self._session = aiohttp.ClientSession(
                connector=aiohttp.TCPConnector(resolver=resolver),
                timeout=self._timeout,
                headers=headers,
                trace_configs=[self._trace_config],
            )
            logger.debug("Opened HTTP session")
        return self._session

    async def send(self, request: Request) -> Response:
        max_attempts = 2 if self.config.retry_on_connection_failure else 1
        attempt = 1
        while True:
            progress: dict[str, Any] = {"request_sent": False}
            try:
                return await self._attempt(request, progress)
            except (aiohttp.ClientError, TimeoutError) as exc:
                if attempt < max_attempts and _is_transient(exc, progress):
                    logger.debug(f"Connection to {request.url} failed before sending ({exc}); retrying once")
                    attempt += 1
                    continue
                raise _translate(exc, self.config) from exc

    async def _attempt(self, request: Request, progress: dict[str, Any]) -> Response:
        """Send a single attempt; no retry or error translation."""
        session = await self._get_session()
        body = request.encoded_body()
        headers = {"Content-Type": request.content_type} if body is not None else None

        async with asyncio.timeout(self.config.header_deadline):
            resp = await session.request(
                request.method.value,
                request.url,
                data=body,
                headers=headers,
                trace_request_ctx=progress,
            )

        async with resp:
            try:
                data = await resp.read()
            except asyncio.CancelledError:
                # Drop the half-read connection instead of returning it to the pool
                resp.close()
                raise
            return Response(
                url=str(resp.url),
                status=resp.status,
                reason=resp.reason or "",
                body=data,
            )

    async def close(self) -> None:
        """Close the HTTP session."""
        if self._session and not self._session.closed:
            await self._session.close()
            logger.debug("Closed HTTP session")
        self._session = None
        if self._owned_resolver is not None:
            await self._owned_resolver.close()
            self._owned_resolver = None

    async def __aenter__(self) -> "AiohttpTransport":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()


def _is_transient(exc: BaseException, progress: dict[str, Any]) -> bool:
    """True for connection failures that happened before any request bytes went out."""
    if progress.get("request_sent"):
        return False
    if isinstance(exc, (TimeoutError, aiohttp.ClientConnectorDNSError, aiohttp.ClientSSLError)):
        return False
    return isinstance(exc, aiohttp.ClientConnectionError)


def _describe(exc: BaseException) -> str:
    return str(exc) or exc.__class__.__name__


def _translate(exc: BaseException, config: NetworkingConfig) -> NetworkError:
    """Map an aiohttp or asyncio failure onto the facade's error taxonomy."""
    if isinstance(exc, TimeoutError):
        return NetworkTimeoutError(
            f"Timed out (connect={config.connect_timeout}s, read={config.read_timeout}s, "
            f"write={config.write_timeout}s): {_describe(exc)}",
            cause=exc,
        )
    if isinstance(exc, aiohttp.InvalidURL):
        return NetworkError(f"Invalid URL: {_describe(exc)}", cause=exc)
    if isinstance(exc, aiohttp.ClientConnectorDNSError):
        return NetworkConnectionError(f"Unable to resolve host {exc.host}: {_describe(exc.os_error)}", cause=exc)
    if isinstance(exc, aiohttp.ClientConnectionError):
        return NetworkConnectionError(_describe(exc), cause=exc)
    return NetworkError(_describe(exc), cause=exc)
