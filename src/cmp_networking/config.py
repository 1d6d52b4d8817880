"""
Construction-time configuration for the networking client.
"""

import os
from dataclasses import dataclass

DEFAULT_TIMEOUT = 30.0
DEFAULT_FALLBACK_NAMESERVERS = ("8.8.8.8", "1.1.1.1")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class NetworkingConfig:
    """
    Timeouts, retry and DNS fallback settings.

    All values are fixed once the client is built; there is no per-call
    override.

    Attributes:
        connect_timeout: Seconds allowed for establishing the socket connection.
        read_timeout: Seconds allowed between reads while waiting for or
                      reading the response.
        write_timeout: Seconds allowed for sending the request. Together with
                       the other two it bounds the time until response headers
                       arrive.
        retry_on_connection_failure: Retry once when the connection fails
                                     before any request bytes were sent.
        dns_fallback: Try a secondary resolver when system resolution fails.
        fallback_nameservers: Nameservers queried by the secondary resolver.
        user_agent: Value of the User-Agent header, or None for aiohttp's default.
    """

    connect_timeout: float = DEFAULT_TIMEOUT
    read_timeout: float = DEFAULT_TIMEOUT
    write_timeout: float = DEFAULT_TIMEOUT
    retry_on_connection_failure: bool = True
    dns_fallback: bool = True
    fallback_nameservers: tuple[str, ...] = DEFAULT_FALLBACK_NAMESERVERS
    user_agent: str | None = None

    def __post_init__(self) -> None:
        for name in ("connect_timeout", "read_timeout", "write_timeout"):
            value = getattr(self, name)
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")
        if self.dns_fallback and not self.fallback_nameservers:
            raise ValueError("fallback_nameservers is required when dns_fallback is enabled")

    @property
    def header_deadline(self) -> float:
        """Upper bound in seconds from connect start until response headers arrive."""
        return self.connect_timeout + self.write_timeout + self.read_timeout

    @classmethod
    def from_env(cls, prefix: str = "NETWORKING_") -> "NetworkingConfig":
        """
        Build a config from environment variables.

        Unset variables keep their defaults. Recognised names (with the
        default prefix): NETWORKING_CONNECT_TIMEOUT, NETWORKING_READ_TIMEOUT,
        NETWORKING_WRITE_TIMEOUT, NETWORKING_RETRY_ON_CONNECTION_FAILURE,
        NETWORKING_DNS_FALLBACK, NETWORKING_FALLBACK_NAMESERVERS (comma
        separated) and NETWORKING_USER_AGENT.

        Raises:
            ValueError: If a variable is set but cannot be parsed
        """
        kwargs: dict[str, object] = {}

        for field_name in ("connect_timeout", "read_timeout", "write_timeout"):
            raw = os.getenv(prefix + field_name.upper())
            if raw is not None:
                kwargs[field_name] = _parse_float(prefix + field_name.upper(), raw)

        for field_name in ("retry_on_connection_failure", "dns_fallback"):
            raw = os.getenv(prefix + field_name.upper())
            if raw is not None:
                kwargs[field_name] = _parse_bool(prefix + field_name.upper(), raw)

        raw = os.getenv(prefix + "FALLBACK_NAMESERVERS")
        if raw is not None:
            kwargs["fallback_nameservers"] = tuple(ns.strip() for ns in raw.split(",") if ns.strip())

        raw = os.getenv(prefix + "USER_AGENT")
        if raw:
            kwargs["user_agent"] = raw

        return cls(**kwargs)  # type: ignore[arg-type]


def _parse_float(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")
