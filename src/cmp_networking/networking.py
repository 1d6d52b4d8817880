"""
The two-method networking facade.
"""

import asyncio

from .config import NetworkingConfig
from .exceptions import HTTPStatusError
from .exceptions import NetworkError
from .http import AiohttpTransport
from .http import HTTPLogger
from .http import Transport
from .types import Method
from .types import Request


class Networking:
    """
    Async HTTP client with a two-method surface.

    Both methods return the response body as UTF-8 text, or raise a
    ``NetworkError`` subclass. One instance can be shared by any number of
    concurrent callers; it owns a single pooled session in its transport.

    Example:
        async with Networking() as networking:
            text = await networking.get("https://httpbin.org/get")
            echoed = await networking.post("https://httpbin.org/post", '{"demo": "test"}')
    """

    def __init__(
        self,
        config: NetworkingConfig | None = None,
        transport: Transport | None = None,
        logger: HTTPLogger | None = None,
    ):
        """
        Initialize the client.

        Args:
            config: Timeouts, retry and DNS settings used to build the default
                    transport. Ignored when ``transport`` is given; ``config``
                    then reflects the transport's own settings, or None if it
                    has none.
            transport: Backend that performs the requests. Defaults to an
                       AiohttpTransport built from ``config``.
            logger: Optional HTTP traffic logger
        """
        if transport is None:
            transport = AiohttpTransport(config or NetworkingConfig())
        self._transport = transport
        self.config: NetworkingConfig | None = getattr(transport, "config", None)
        self._logger = logger

    @property
    def transport(self) -> Transport:
        return self._transport

    def set_logger(self, logger: HTTPLogger | None) -> None:
        """Set the HTTP logger."""
        self._logger = logger

    async def get(self, url: str) -> str:
        """
        Perform a GET request.

        Args:
            url: The URL to fetch

        Returns:
            The response body as text; empty string for an empty body

        Raises:
            NetworkConnectionError: If no connection could be established
            NetworkTimeoutError: If a timeout was exceeded
            HTTPStatusError: If the server answered with a non-2xx status
            asyncio.CancelledError: If the calling task was cancelled; re-raised
                unchanged so caller deadlines and task groups keep working
        """
        return await self._execute(Request(url=url, method=Method.GET))

    async def post(self, url: str, body: str) -> str:
        """
        Perform a POST request with a JSON content type.

        Args:
            url: The URL to post to
            body: Request body, sent UTF-8 encoded as application/json

        Returns:
            The response body as text; empty string for an empty body

        Raises:
            Same as get()
        """
        return await self._execute(Request(url=url, method=Method.POST, body=body))

    async def _execute(self, request: Request) -> str:
        method = request.method.value
        prefix = f"{method} request failed: "

        if self._logger:
            headers = {"Content-Type": request.content_type} if request.body is not None else {}
            self._logger.log_request(method, request.url, headers, request.body)

        try:
            response = await self._transport.send(request)
        except asyncio.CancelledError as exc:
            if self._logger:
                self._logger.log_error(method, request.url, exc)
            raise
        except NetworkError as exc:
            if self._logger:
                self._logger.log_error(method, request.url, exc)
            raise exc.with_prefix(prefix) from exc.cause

        text = response.text()
        if self._logger:
            self._logger.log_response(method, request.url, response.status, text)

        if not response.ok:
            raise HTTPStatusError(response.status, response.reason or "Request failed", text, request.url, prefix)
        return text

    async def close(self) -> None:
        """Release the transport's pooled connections."""
        await self._transport.close()

    async def __aenter__(self) -> "Networking":
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.close()
