"""JSON response classes and envelope helpers using orjson serialization.

Every JSON body the API returns goes through ``ORJSONResponse``, which
pretty-prints with two-space indentation so responses stay readable when
fetched directly from a browser or curl.
"""

from collections.abc import Mapping, Sequence
from typing import Any

import orjson
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.api.schemas.envelope import DataEnvelope, ErrorResponse, dump_envelope


class ORJSONResponse(JSONResponse):
    """FastAPI response class serializing with orjson.

    Attributes:
        media_type: The media type for the response.
    """

    media_type = "application/json"

    def render(self, content: Any) -> bytes:  # noqa: ANN401 - any JSON-serializable content
        """Render the content as indented JSON.

        Args:
            content: The content to serialize to JSON.

        Returns:
            bytes: The JSON-encoded bytes.
        """
        if isinstance(content, BaseModel):
            content = dump_envelope(content)

        return orjson.dumps(content, option=orjson.OPT_INDENT_2)


def item_response(item: BaseModel) -> ORJSONResponse:
    """200 response for a single record; never carries ``count``."""
    return ORJSONResponse(content=DataEnvelope(data=item))


def collection_response(items: Sequence[Any]) -> ORJSONResponse:
    """200 response for a sequence, with ``count`` equal to its length."""
    return ORJSONResponse(content=DataEnvelope(data=list(items), count=len(items)))


def error_response(
    status_code: int,
    message: str,
    headers: Mapping[str, str] | None = None,
) -> ORJSONResponse:
    """Error envelope with the status duplicated in the body.

    Args:
        status_code: HTTP status.
        message: Client-safe message.
        headers: Extra response headers.

    Returns:
        ORJSONResponse: The rendered error.
    """
    return ORJSONResponse(
        status_code=status_code,
        content=ErrorResponse(message=message, status_code=status_code),
        headers=dict(headers) if headers else None,
    )
