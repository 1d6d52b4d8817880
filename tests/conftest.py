"""Shared fixtures: a local aiohttp server and fake resolvers."""

import asyncio
import json
import socket
from dataclasses import dataclass
from dataclasses import field

import pytest_asyncio
from aiohttp import test_utils
from aiohttp import web
from aiohttp.abc import AbstractResolver
from aiohttp.abc import ResolveResult

TEXT_BODY = "héllo wörld ✓"


@dataclass
class LocalServer:
    """Handle on the running test server."""

    server: test_utils.TestServer
    slow_started: asyncio.Event = field(default_factory=asyncio.Event)
    release: asyncio.Event = field(default_factory=asyncio.Event)

    @property
    def port(self) -> int:
        assert self.server.port is not None
        return self.server.port

    def url(self, path: str) -> str:
        return str(self.server.make_url(path))


def _build_app(state: LocalServer) -> web.Application:
    async def text(request: web.Request) -> web.Response:
        return web.Response(body=TEXT_BODY.encode("utf-8"), content_type="text/plain", charset="utf-8")

    async def empty(request: web.Request) -> web.Response:
        return web.Response(status=200)

    async def no_content(request: web.Request) -> web.Response:
        return web.Response(status=204)

    async def echo(request: web.Request) -> web.Response:
        payload = {
            "method": request.method,
            "content_type": request.headers.get("Content-Type"),
            "body": await request.text(),
        }
        return web.Response(text=json.dumps(payload), content_type="application/json")

    async def missing(request: web.Request) -> web.Response:
        return web.Response(status=404, reason="Not Found", text="no such thing")

    async def server_error(request: web.Request) -> web.Response:
        return web.Response(status=503, reason="Service Unavailable", text="busy")

    async def slow(request: web.Request) -> web.Response:
        state.slow_started.set()
        try:
            await asyncio.wait_for(state.release.wait(), timeout=5)
        except TimeoutError:
            pass
        return web.Response(text="late")

    app = web.Application()
    app.router.add_get("/text", text)
    app.router.add_get("/empty", empty)
    app.router.add_get("/no-content", no_content)
    app.router.add_post("/echo", echo)
    app.router.add_get("/missing", missing)
    app.router.add_get("/error", server_error)
    app.router.add_get("/slow", slow)
    app.router.add_post("/slow", slow)
    return app


@pytest_asyncio.fixture
async def local_server():
    state = LocalServer(server=None)  # type: ignore[arg-type]
    server = test_utils.TestServer(_build_app(state))
    state.server = server
    await server.start_server()
    try:
        yield state
    finally:
        state.release.set()
        await server.close()


def unused_port() -> int:
    """A localhost port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


class FailingResolver(AbstractResolver):
    """Resolver that never finds anything."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    async def resolve(self, host: str, port: int = 0, family: socket.AddressFamily = socket.AF_INET) -> list[ResolveResult]:
        self.calls.append(host)
        raise socket.gaierror(socket.EAI_NONAME, f"Name or service not known: {host}")

    async def close(self) -> None:
        pass


class StaticResolver(AbstractResolver):
    """Resolver that maps every host to a fixed IPv4 address."""

    def __init__(self, address: str = "127.0.0.1") -> None:
        self.address = address
        self.calls: list[str] = []

    async def resolve(self, host: str, port: int = 0, family: socket.AddressFamily = socket.AF_INET) -> list[ResolveResult]:
        self.calls.append(host)
        return [
            {
                "hostname": host,
                "host": self.address,
                "port": port,
                "family": socket.AF_INET,
                "proto": 0,
                "flags": socket.AI_NUMERICHOST,
            }
        ]

    async def close(self) -> None:
        pass


class StallingResolver(AbstractResolver):
    """Resolver that hangs until released, then maps hosts to localhost."""

    def __init__(self) -> None:
        self.calls: list[str] = []
        self.release = asyncio.Event()

    async def resolve(self, host: str, port: int = 0, family: socket.AddressFamily = socket.AF_INET) -> list[ResolveResult]:
        self.calls.append(host)
        await self.release.wait()
        return await StaticResolver().resolve(host, port, family)

    async def close(self) -> None:
        self.release.set()


@dataclass
class TrickleServer:
    """Raw TCP server that starts a response but never finishes its headers."""

    url: str = ""
    interval: float = 0.05
    max_lines: int = 60
    lines_sent: int = 0

    async def handle(self, reader: asyncio.StreamReader, writer: asyncio.StreamWriter) -> None:
        try:
            await reader.readuntil(b"\r\n\r\n")
            writer.write(b"HTTP/1.1 200 OK\r\n")
            for i in range(self.max_lines):
                await asyncio.sleep(self.interval)
                if reader.at_eof():
                    break
                writer.write(f"X-Trickle-{i}: 1\r\n".encode())
                await writer.drain()
                self.lines_sent += 1
        except (ConnectionError, asyncio.IncompleteReadError):
            pass
        finally:
            writer.close()


@pytest_asyncio.fixture
async def trickle_server():
    state = TrickleServer()
    server = await asyncio.start_server(state.handle, "127.0.0.1", 0)
    port = server.sockets[0].getsockname()[1]
    state.url = f"http://127.0.0.1:{port}/"
    try:
        yield state
    finally:
        server.close()
        await server.wait_closed()
