"""
Interactive demo of the Networking facade.

Offers the same checks as the mobile demo screen:
- IP test (bypasses DNS)
- Google test (verifies general connectivity)
- httpbin GET
- httpbin POST with a small JSON body

Configuration is read from the environment (or a .env file), for example
NETWORKING_READ_TIMEOUT=10.
"""

import asyncio
from collections.abc import Awaitable
from collections.abc import Callable
from logging import basicConfig
from logging import getLogger
from pathlib import Path

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.prompt import Prompt
from rich.text import Text

from cmp_networking import FileHTTPLogger
from cmp_networking import NetworkError
from cmp_networking import Networking
from cmp_networking import NetworkingConfig

load_dotenv()

logger = getLogger(__name__)
console = Console()

DemoAction = Callable[[Networking], Awaitable[str]]


async def ip_test(networking: Networking) -> str:
    result = await networking.get("http://142.250.185.46")
    return f"IP Test Success! Length: {len(result)}"


async def google_test(networking: Networking) -> str:
    result = await networking.get("https://www.google.com")
    return f"Google Success! Length: {len(result)}"


async def httpbin_get(networking: Networking) -> str:
    result = await networking.get("https://httpbin.org/get")
    return f"GET Success!\n{result}"


async def httpbin_post(networking: Networking) -> str:
    result = await networking.post("https://httpbin.org/post", '{"demo":"test"}')
    return f"POST Success!\n{result}"


ACTIONS: dict[str, tuple[str, DemoAction]] = {
    "1": ("Test IP (bypass DNS)", ip_test),
    "2": ("Test Google (verify network)", google_test),
    "3": ("GET httpbin.org/get", httpbin_get),
    "4": ("POST httpbin.org/post", httpbin_post),
}


async def run_action(networking: Networking, label: str, action: DemoAction) -> None:
    """Run one demo action and print its outcome."""
    with console.status(f"[dim]{label}...[/dim]"):
        try:
            message = await action(networking)
        except NetworkError as e:
            error_text = Text()
            error_text.append("Error: ", style="bold red")
            error_text.append(e.message, style="red")
            if e.cause is not None:
                error_text.append(f" ({e.cause.__class__.__name__})", style="dim red")
            console.print(error_text)
            return
    console.print(Panel(message, border_style="green"))


async def main() -> None:
    console.print(Panel.fit("[bold blue]Networking Library Demo[/bold blue]"))

    config = NetworkingConfig.from_env()
    log_file = Path("logs") / "networking-demo.txt"

    async with Networking(config, logger=FileHTTPLogger(log_file)) as networking:
        console.print(f"[blue]HTTP logging to: {log_file}[/blue]")
        while True:
            for key, (label, _) in ACTIONS.items():
                console.print(f"  [cyan]{key}[/cyan] {label}")
            console.print("  [cyan]q[/cyan] Quit")
            choice = Prompt.ask("Choose", choices=[*ACTIONS.keys(), "q"], default="q")
            if choice == "q":
                break
            label, action = ACTIONS[choice]
            await run_action(networking, label, action)

    console.print("\n[dim]Demo complete.[/dim]")


if __name__ == "__main__":
    basicConfig(
        level="INFO",
        format="[%(name)s] %(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    asyncio.run(main())
