"""
Example repository layer built on the Networking facade.

The facade always raises on failure; this collaborator decides to swallow
errors and fall back to an empty list, logging what went wrong.
"""

import asyncio
import json
from dataclasses import dataclass
from dataclasses import field
from dataclasses import fields
from logging import basicConfig
from logging import getLogger
from typing import Any

from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from cmp_networking import NetworkError
from cmp_networking import Networking
from cmp_networking import NetworkingConfig

load_dotenv()

logger = getLogger(__name__)
console = Console()

API_URL = "https://raw.githubusercontent.com/Kotlin/KMP-App-Template/main/list.json"


@dataclass
class MuseumObject:
    """A single museum collection entry."""

    objectID: int
    title: str = ""
    artistDisplayName: str = ""
    medium: str = ""
    dimensions: str = ""
    objectURL: str = ""
    objectDate: str = ""
    primaryImage: str = ""
    primaryImageSmall: str = ""
    repository: str = ""
    department: str = ""
    creditLine: str = ""
    extra: dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "MuseumObject":
        """Build from API JSON, keeping unknown keys aside."""
        known = {f.name for f in fields(cls)} - {"extra"}
        kwargs = {k: v for k, v in data.items() if k in known}
        extra = {k: v for k, v in data.items() if k not in known}
        return cls(**kwargs, extra=extra)


class MuseumApi:
    """Fetches the museum object list through an injected Networking client."""

    def __init__(self, networking: Networking, url: str = API_URL):
        self.networking = networking
        self.url = url

    async def get_data(self) -> list[MuseumObject]:
        try:
            response = await self.networking.get(self.url)
            return [MuseumObject.from_dict(item) for item in json.loads(response)]
        except NetworkError as e:
            logger.error(f"Failed to fetch museum objects: {e}")
            return []
        except (json.JSONDecodeError, TypeError, KeyError) as e:
            logger.error(f"Failed to decode museum objects: {e}")
            return []


async def main() -> None:
    async with Networking(NetworkingConfig.from_env()) as networking:
        objects = await MuseumApi(networking).get_data()

    table = Table(title=f"Museum objects ({len(objects)})")
    table.add_column("ID", style="dim")
    table.add_column("Title", style="cyan")
    table.add_column("Artist")
    for obj in objects[:20]:
        table.add_row(str(obj.objectID), obj.title, obj.artistDisplayName)
    console.print(table)


if __name__ == "__main__":
    basicConfig(
        level="INFO",
        format="[%(name)s] %(message)s",
        handlers=[RichHandler(rich_tracebacks=True)],
    )
    asyncio.run(main())
