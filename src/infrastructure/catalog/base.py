"""Shared lookup logic for resource store implementations.

Concrete stores only supply ``_load()``; ``all``, ``find`` and ``filter`` are
implemented once here on top of it. Any exception escaping ``_load()`` (or
the lookup itself) is converted into an ``Err`` carrying a
``StoreUnavailableError`` so the API layer never sees a raw exception from a
store.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable

import orjson
from loguru import logger
from pydantic import TypeAdapter

from src.core.exceptions import StoreUnavailableError
from src.core.observability import trace_operation
from src.core.result import Err, Ok, Result
from src.domain.resource import Resource

_catalog_adapter = TypeAdapter(list[Resource])


def parse_catalog(raw: bytes | str) -> list[Resource]:
    """Parse a JSON catalog document.

    The document is either a bare array of records or an object with the
    records under ``data`` (the shape this API itself returns).

    Args:
        raw: JSON text.

    Returns:
        list[Resource]: Records in document order.

    Raises:
        ValueError: If the document is not a catalog or ids are not unique.
    """
    document = orjson.loads(raw)
    if isinstance(document, dict):
        document = document.get("data")
    if not isinstance(document, list):
        msg = "catalog document must be a JSON array or an object with a 'data' array"
        raise ValueError(msg)

    resources = _catalog_adapter.validate_python(document)
    ensure_unique_ids(resources)
    return resources


def ensure_unique_ids(resources: Iterable[Resource]) -> None:
    """Reject catalogs in which two records share an identifier.

    Raises:
        ValueError: On the first duplicated id.
    """
    seen: set[int] = set()
    for resource in resources:
        if resource.id in seen:
            msg = f"duplicate resource id in catalog: {resource.id}"
            raise ValueError(msg)
        seen.add(resource.id)


class BaseResourceStore(ABC):
    """Implements the store contract over a loaded list of records."""

    name = "resource-store"

    @abstractmethod
    async def _load(self) -> list[Resource]:
        """Return the full catalog. May raise on I/O or parse failure."""

    async def _run[T](
        self, operation: str, select: Callable[[list[Resource]], T]
    ) -> Result[T]:
        with trace_operation(f"catalog.{operation}", store=self.name):
            try:
                resources = await self._load()
                return Ok(select(resources))
            except Exception as exc:  # noqa: BLE001 - reported as a result
                logger.debug(
                    "Store operation {} failed: {}",
                    operation,
                    type(exc).__name__,
                    store=self.name,
                )
                return Err(StoreUnavailableError(operation, cause=exc))

    async def all(self) -> Result[list[Resource]]:
        return await self._run("all", list)

    async def find(self, resource_id: int) -> Result[Resource | None]:
        return await self._run(
            "find",
            lambda resources: next(
                (r for r in resources if r.id == resource_id), None
            ),
        )

    async def filter(self, category: str) -> Result[list[Resource]]:
        return await self._run(
            "filter",
            lambda resources: [r for r in resources if r.main_cat1 == category],
        )

    async def close(self) -> None:
        """Nothing to release by default."""
