"""Resource store implementations.

- **InMemoryResourceStore**: records passed in by the caller
- **JsonFileResourceStore**: a JSON file (the bundled catalog by default)
- **RemoteResourceStore**: a JSON document fetched over HTTP on each read
"""

from src.infrastructure.catalog.base import BaseResourceStore, parse_catalog
from src.infrastructure.catalog.dependencies import CatalogStore, get_resource_store
from src.infrastructure.catalog.factory import build_resource_store
from src.infrastructure.catalog.json_file import (
    BUNDLED_CATALOG_PATH,
    JsonFileResourceStore,
)
from src.infrastructure.catalog.memory import InMemoryResourceStore
from src.infrastructure.catalog.remote import RemoteResourceStore

__all__ = [
    "BUNDLED_CATALOG_PATH",
    "BaseResourceStore",
    "CatalogStore",
    "InMemoryResourceStore",
    "JsonFileResourceStore",
    "RemoteResourceStore",
    "build_resource_store",
    "get_resource_store",
    "parse_catalog",
]
