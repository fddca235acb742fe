"""Common schemas for API responses."""

from typing import Any

from pydantic import BaseModel, Field

from packtrack.schemas.record import PackingRecord


class ErrorResponse(BaseModel):
    """Standard error response."""

    success: bool = Field(default=False)
    error: str = Field(description="Error message")
    error_type: str = Field(description="Error type/class name")
    detail: dict[str, Any] | None = Field(default=None, description="Additional error details")

    model_config = {"extra": "forbid"}


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(description="Health status (healthy, degraded)")
    version: str = Field(description="Service version")
    environment: str = Field(description="Environment name")
    checks: dict[str, bool] = Field(default_factory=dict, description="Individual health checks")

    model_config = {"extra": "forbid"}


class RecordListResponse(BaseModel):
    """Records matching the requested filters."""

    source: str = Field(description="Origin of the working set (store, sample, import)")
    total: int = Field(description="Number of records returned")
    records: list[PackingRecord] = Field(default_factory=list)

    model_config = {"extra": "forbid"}


class RecordSavedResponse(BaseModel):
    """Result of submitting a new record."""

    success: bool = True
    record: PackingRecord = Field(description="The record as submitted")
    total: int = Field(description="Number of records after reloading from the store")

    model_config = {"extra": "forbid"}


class ImportResponse(BaseModel):
    """Result of a CSV import."""

    success: bool = True
    filename: str
    imported: int = Field(description="Number of records imported")

    model_config = {"extra": "forbid"}
