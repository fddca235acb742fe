"""Remote store wire schemas.

The store is a spreadsheet web app:
- GET returns every row as display-formatted strings
- POST ?action=add appends one row; the store prepends the timestamp
"""

from typing import Any, Literal

from pydantic import BaseModel, Field


class StoreReadResponse(BaseModel):
    """Response to a read request."""

    status: Literal["success", "error"]
    data: list[list[Any]] = Field(default_factory=list)
    message: str | None = None


class StoreWriteRequest(BaseModel):
    """Body of an append request: every column except the timestamp."""

    values: list[Any]


class StoreWriteResponse(BaseModel):
    """Response to an append request."""

    status: Literal["success", "error"]
    message: str | None = None
