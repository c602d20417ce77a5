"""The catalog record and the read-only store contract.

A ``Resource`` describes one linked external item. Records are created and
owned by a store; the API never creates, mutates or destroys them.
"""

from typing import Protocol

from pydantic import BaseModel, ConfigDict, Field, field_validator

from src.core.result import Result


class Resource(BaseModel):
    """A single catalog record."""

    model_config = ConfigDict(frozen=True)

    id: int = Field(..., description="Unique, stable identifier", examples=[1])
    title: str = Field(..., examples=["Practical MLOps"])
    description: str = Field(default="")
    url: str = Field(..., examples=["https://example.com/practical-mlops"])
    main_cat1: str = Field(..., description="Primary category", examples=["AI"])
    main_cat2: str = Field(default="", description="Secondary category")
    tag1: str = Field(default="")
    tag2: str = Field(default="")
    tag3: str = Field(default="")

    @field_validator(
        "description", "main_cat2", "tag1", "tag2", "tag3", mode="before"
    )
    @classmethod
    def none_to_empty(cls, v: str | None) -> str:
        """Treat missing optional labels as empty strings."""
        if v is None:
            return ""
        return v


class ResourceStore(Protocol):
    """Read access to the resource catalog.

    Every operation may suspend on I/O and reports failure through an
    ``Err`` result rather than by raising.
    """

    async def all(self) -> Result[list[Resource]]:
        """Return every resource in catalog order (possibly empty)."""
        ...

    async def find(self, resource_id: int) -> Result[Resource | None]:
        """Return the resource with the given id, or None when absent."""
        ...

    async def filter(self, category: str) -> Result[list[Resource]]:
        """Return the resources whose ``main_cat1`` equals ``category``."""
        ...

    async def close(self) -> None:
        """Release any resources held by the store."""
        ...
