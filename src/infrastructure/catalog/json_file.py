"""Resource store backed by a JSON file on disk."""

import asyncio
from pathlib import Path

from loguru import logger

from src.domain.resource import Resource
from src.infrastructure.catalog.base import BaseResourceStore, parse_catalog

BUNDLED_CATALOG_PATH = Path(__file__).resolve().parent / "data" / "resources.json"


class JsonFileResourceStore(BaseResourceStore):
    """Reads the catalog from a JSON file the first time it is needed.

    The file is read off the event loop. A failed read is not remembered:
    the next call tries again, so a catalog file that appears later is
    picked up without a restart.

    Args:
        path: Location of the JSON catalog.
    """

    name = "file"

    def __init__(self, path: Path) -> None:
        self.path = path
        self._resources: list[Resource] | None = None

    async def _load(self) -> list[Resource]:
        if self._resources is None:
            raw = await asyncio.to_thread(self.path.read_bytes)
            self._resources = parse_catalog(raw)
            logger.info(
                "Loaded {} resources from {}", len(self._resources), self.path
            )
        return self._resources
