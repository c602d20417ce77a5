"""FastAPI dependency injection for the resource store.

The store is created once by the application factory and kept on
``app.state``; handlers receive it through ``CatalogStore`` instead of
importing a module-level instance, which lets tests hand the app a fake.
"""

from typing import Annotated

from fastapi import Depends, Request

from src.domain.resource import ResourceStore


def get_resource_store(request: Request) -> ResourceStore:
    """Return the store attached to the running application.

    Args:
        request: Current request.

    Returns:
        ResourceStore: The application's store.
    """
    store: ResourceStore = request.app.state.resource_store
    return store


CatalogStore = Annotated[ResourceStore, Depends(get_resource_store)]
