"""Response envelopes shared by every endpoint.

Success bodies are ``{"data": ..., "count": n}`` (``count`` only for
sequences); error bodies are ``{"error": "Error", "message": ...,
"statusCode": n}`` with the status duplicated from the status line.
"""

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field


class DataEnvelope[T](BaseModel):
    """Successful response wrapper."""

    data: T = Field(..., description="A record, a list of records or a list of categories")
    count: int | None = Field(
        default=None,
        ge=0,
        description="Length of data; present only when data is a list",
    )


class ErrorResponse(BaseModel):
    """Error response wrapper."""

    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "error": "Error",
                    "message": "Resource with ID 3 not found",
                    "statusCode": 404,
                },
                {
                    "error": "Error",
                    "message": "Internal server error",
                    "statusCode": 500,
                },
            ]
        },
    )

    error: Literal["Error"] = "Error"
    message: str = Field(..., description="Human-readable, client-safe message")
    status_code: int = Field(
        ...,
        alias="statusCode",
        description="HTTP status code, duplicated from the status line",
    )


def dump_envelope(envelope: BaseModel) -> dict[str, Any]:
    """Serialize an envelope the way it appears on the wire."""
    return envelope.model_dump(mode="json", by_alias=True, exclude_none=True)
