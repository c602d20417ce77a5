"""In-memory resource store."""

from collections.abc import Iterable

from src.domain.resource import Resource
from src.infrastructure.catalog.base import BaseResourceStore, ensure_unique_ids


class InMemoryResourceStore(BaseResourceStore):
    """Serves a catalog held in memory.

    Args:
        resources: Catalog records; ids must be unique.

    Raises:
        ValueError: If two records share an id.
    """

    name = "memory"

    def __init__(self, resources: Iterable[Resource] = ()) -> None:
        self._resources = tuple(resources)
        ensure_unique_ids(self._resources)

    async def _load(self) -> list[Resource]:
        return list(self._resources)
