"""Build the configured resource store."""

from loguru import logger

from src.core.config import CatalogConfig
from src.domain.resource import ResourceStore
from src.infrastructure.catalog.json_file import (
    BUNDLED_CATALOG_PATH,
    JsonFileResourceStore,
)
from src.infrastructure.catalog.remote import RemoteResourceStore


def build_resource_store(config: CatalogConfig) -> ResourceStore:
    """Create the store selected by ``config.source``.

    Args:
        config: Catalog configuration.

    Returns:
        ResourceStore: A store ready to serve reads.
    """
    if config.source == "remote" and config.remote_url:
        logger.info("Using remote catalog at {}", config.remote_url)
        return RemoteResourceStore(
            config.remote_url, timeout=config.remote_timeout_seconds
        )

    if config.source == "file" and config.file_path is not None:
        logger.info("Using catalog file {}", config.file_path)
        return JsonFileResourceStore(config.file_path)

    logger.info("Using bundled catalog")
    return JsonFileResourceStore(BUNDLED_CATALOG_PATH)
