"""Catalog endpoints.

- ``GET /api/resources``: every resource, or those in ``?category=``
- ``GET /api/resources/{id}``: one resource by numeric id
- ``GET /api/categories``: distinct primary categories, sorted

Handlers map store results explicitly: ``Ok`` values become ``{data, count}``
envelopes and ``Err`` values become the generic 500 envelope.
"""

import re
from typing import Final
from urllib.parse import unquote

from fastapi import APIRouter, Path, Request
from fastapi.responses import Response

from src.api.constants import (
    API_PREFIX,
    CATEGORIES_PATH,
    CATEGORY_QUERY_PARAM,
    MSG_ENDPOINT_NOT_FOUND,
    MSG_INTERNAL_ERROR,
    MSG_INVALID_RESOURCE_ID,
    RESOURCES_PATH,
)
from src.api.middleware.error_handler import render_catalog_error
from src.api.schemas.envelope import DataEnvelope, ErrorResponse
from src.api.utils.responses import collection_response, item_response
from src.core.exceptions import (
    CatalogError,
    ErrorCode,
    NotFoundError,
    Severity,
    ValidationError,
)
from src.core.result import Err, Ok
from src.domain.resource import Resource
from src.infrastructure.catalog.dependencies import CatalogStore

# ASCII digits only; str.isdigit and \d would also accept other scripts
RESOURCE_ID_PATTERN: Final = re.compile(r"[0-9]+")

_ERROR_RESPONSES: Final[dict[int | str, dict[str, object]]] = {
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}

router = APIRouter(prefix=API_PREFIX, tags=["resources"])
fallback_router = APIRouter()


@router.get(
    RESOURCES_PATH,
    response_model=DataEnvelope[list[Resource]],
    responses=_ERROR_RESPONSES,
)
async def list_resources(request: Request, store: CatalogStore) -> Response:
    """List the catalog, optionally restricted to one primary category.

    The category is decoded and uppercased before it reaches the store.
    A filter that matches nothing is a 404; an empty catalog without a
    filter is still a 200 with ``count`` 0.
    """
    # First occurrence wins when the parameter is repeated
    categories = request.query_params.getlist(CATEGORY_QUERY_PARAM)
    category = categories[0] if categories else ""

    if not category:
        match await store.all():
            case Ok(value=resources):
                return collection_response(resources)
            case Err(error=error):
                return render_catalog_error(request, error)

    try:
        normalized = unquote(category, errors="strict").upper()
    except UnicodeDecodeError as exc:
        # An escape that is not valid UTF-8 fails the request like a store error
        return render_catalog_error(
            request,
            CatalogError(
                ErrorCode.INTERNAL_ERROR,
                MSG_INTERNAL_ERROR,
                Severity.HIGH,
                context={"category": category},
                cause=exc,
            ),
        )

    match await store.filter(normalized):
        case Ok(value=[]):
            return render_catalog_error(
                request,
                NotFoundError(
                    f"No resources found for category: {normalized}",
                    context={"category": normalized},
                ),
            )
        case Ok(value=resources):
            return collection_response(resources)
        case Err(error=error):
            return render_catalog_error(request, error)


@router.get(
    f"{RESOURCES_PATH}/{{resource_id}}",
    response_model=DataEnvelope[Resource],
    responses={400: {"model": ErrorResponse}, **_ERROR_RESPONSES},
)
async def get_resource(
    request: Request,
    store: CatalogStore,
    resource_id: str = Path(..., description="Numeric resource identifier"),
) -> Response:
    """Return a single resource. The body never carries ``count``."""
    if not RESOURCE_ID_PATTERN.fullmatch(resource_id):
        return render_catalog_error(
            request,
            ValidationError(MSG_INVALID_RESOURCE_ID, context={"resource_id": resource_id}),
        )

    try:
        parsed_id = int(resource_id)
    except ValueError as exc:
        # Digit strings beyond the interpreter's int conversion limit
        return render_catalog_error(
            request, ValidationError(MSG_INVALID_RESOURCE_ID, cause=exc)
        )

    match await store.find(parsed_id):
        case Ok(value=None):
            return render_catalog_error(
                request,
                NotFoundError(
                    f"Resource with ID {parsed_id} not found",
                    context={"resource_id": parsed_id},
                ),
            )
        case Ok(value=resource):
            return item_response(resource)
        case Err(error=error):
            return render_catalog_error(request, error)


@router.get(
    CATEGORIES_PATH,
    response_model=DataEnvelope[list[str]],
    responses={500: {"model": ErrorResponse}},
)
async def list_categories(request: Request, store: CatalogStore) -> Response:
    """List the distinct ``main_cat1`` values in ascending order."""
    match await store.all():
        case Ok(value=resources):
            return collection_response(sorted({r.main_cat1 for r in resources}))
        case Err(error=error):
            return render_catalog_error(request, error)


@fallback_router.get("/{path:path}", include_in_schema=False)
async def endpoint_not_found(request: Request, path: str) -> Response:
    """Answer every GET no other route matched."""
    _ = path
    return render_catalog_error(
        request,
        NotFoundError(MSG_ENDPOINT_NOT_FOUND, context={"path": request.url.path}),
    )
