"""Resource store that fetches the catalog from a remote JSON endpoint."""

import httpx

from src.domain.resource import Resource
from src.infrastructure.catalog.base import BaseResourceStore, parse_catalog


class RemoteResourceStore(BaseResourceStore):
    """Fetches the catalog over HTTP on every operation.

    Nothing is retained between calls, so the remote document is always the
    source of truth. Non-2xx answers and transport errors surface as store
    failures.

    Args:
        url: URL returning the catalog document.
        timeout: Request timeout in seconds.
        client: Optional preconfigured client (the store then does not own it).
    """

    name = "remote"

    def __init__(
        self,
        url: str,
        *,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.url = url
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=timeout,
            headers={"Accept": "application/json"},
        )

    async def _load(self) -> list[Resource]:
        response = await self._client.get(self.url)
        response.raise_for_status()
        return parse_catalog(response.content)

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()
