"""
Name resolution with a secondary lookup path.
"""

import logging
import socket
from collections.abc import Sequence

from aiohttp import AsyncResolver
from aiohttp import ThreadedResolver
from aiohttp.abc import AbstractResolver
from aiohttp.abc import ResolveResult

logger = logging.getLogger(__name__)


class FallbackResolver(AbstractResolver):
    """
    aiohttp resolver that consults a secondary resolver when the primary fails.

    When both fail, the secondary's ``OSError`` is raised chained from the
    primary's, which aiohttp reports as ``ClientConnectorDNSError``.

    Example:
        resolver = FallbackResolver(
            primary=ThreadedResolver(),
            secondary=AsyncResolver(nameservers=["8.8.8.8"]),
        )
        connector = aiohttp.TCPConnector(resolver=resolver)
    """

    def __init__(self, primary: AbstractResolver, secondary: AbstractResolver):
        self.primary = primary
        self.secondary = secondary

    async def resolve(
        self,
        host: str,
        port: int = 0,
        family: socket.AddressFamily = socket.AF_INET,
    ) -> list[ResolveResult]:
        try:
            return await self.primary.resolve(host, port, family)
        except OSError as primary_exc:
            logger.debug(f"Primary resolution failed for {host}: {primary_exc}; trying fallback resolver")
            try:
                return await self.secondary.resolve(host, port, family)
            except OSError as secondary_exc:
                raise secondary_exc from primary_exc

    async def close(self) -> None:
        try:
            await self.primary.close()
        finally:
            await self.secondary.close()


def create_default_resolver(nameservers: Sequence[str] | None) -> AbstractResolver:
    """
    Build the resolver used when the caller does not supply one.

    Must be called from inside a running event loop, since the c-ares
    resolver binds to it.

    Args:
        nameservers: Public nameservers for the fallback path, or None to
                     use only the system resolver

    Returns:
        The system resolver alone, or wrapped in a FallbackResolver
    """
    system = ThreadedResolver()
    if not nameservers:
        return system
    return FallbackResolver(primary=system, secondary=AsyncResolver(nameservers=list(nameservers)))
