"""
Exceptions raised by the networking facade.

Every failure reaches the caller as one of these. Transport exceptions are
chained as ``__cause__`` and also kept on ``cause``.
"""

import asyncio


class NetworkError(Exception):
    """Base exception for all request failures."""

    def __init__(self, message: str, cause: BaseException | None = None):
        self.message = message
        self.cause = cause
        super().__init__(message)

    def with_prefix(self, prefix: str) -> "NetworkError":
        """Copy of this error with ``prefix`` prepended to the message."""
        return self.__class__(prefix + self.message, cause=self.cause)


class NetworkConnectionError(NetworkError):
    """
    Raised when no usable connection could be established.

    Covers refused and unreachable hosts, connections reset by the peer, and
    name resolution that failed on both the primary and the fallback resolver.
    """

    pass


class NetworkTimeoutError(NetworkError):
    """Raised when a connect, read or write deadline is exceeded."""

    pass


class HTTPStatusError(NetworkError):
    """HTTP request error with status code, URL, and response body."""

    def __init__(
        self,
        status: int,
        reason: str,
        body: str | None = None,
        url: str | None = None,
        prefix: str = "",
    ):
        self.status = status
        self.reason = reason
        self.body = body
        self.url = url
        self.prefix = prefix
        if url:
            message = f"{prefix}HTTP {status}: {reason} (url={url})"
        else:
            message = f"{prefix}HTTP {status}: {reason}"
        super().__init__(message)

    def with_prefix(self, prefix: str) -> "HTTPStatusError":
        return HTTPStatusError(self.status, self.reason, self.body, self.url, prefix=prefix + self.prefix)


# A cancelled call re-raises the caller's own CancelledError untouched;
# asyncio.timeout, wait_for and TaskGroup rely on its exact type.
RequestCancelledError = asyncio.CancelledError
