"""
Value types passed between the facade and its transport.
"""

from dataclasses import dataclass
from enum import Enum

JSON_CONTENT_TYPE = "application/json; charset=utf-8"


class Method(Enum):
    """HTTP methods supported by the facade."""

    GET = "GET"
    POST = "POST"


@dataclass(frozen=True)
class Request:
    """
    A single outgoing request.

    Built once per call and never reused. ``content_type`` is only sent
    when ``body`` is not None.
    """

    url: str
    method: Method = Method.GET
    body: str | None = None
    content_type: str = JSON_CONTENT_TYPE

    def encoded_body(self) -> bytes | None:
        """Request body as UTF-8 bytes, or None for bodyless requests."""
        if self.body is None:
            return None
        return self.body.encode("utf-8")


@dataclass(frozen=True)
class Response:
    """A fully read response as returned by a transport."""

    url: str
    status: int
    reason: str
    body: bytes = b""

    @property
    def ok(self) -> bool:
        """True for 2xx status codes."""
        return 200 <= self.status < 300

    def text(self) -> str:
        """Body decoded as UTF-8; empty bodies give an empty string."""
        if not self.body:
            return ""
        return self.body.decode("utf-8", errors="replace")
