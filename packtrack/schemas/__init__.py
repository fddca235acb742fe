"""Pydantic schemas for records, dashboard aggregates and the store wire format."""

from packtrack.schemas.common import (
    ErrorResponse,
    HealthResponse,
    ImportResponse,
    RecordListResponse,
    RecordSavedResponse,
)
from packtrack.schemas.dashboard import (
    DashboardAggregates,
    DashboardStats,
    FilterOptions,
    NamedValue,
    RatioStat,
    TimelinePoint,
)
from packtrack.schemas.record import PackingRecord, RecordDraft
from packtrack.schemas.store import StoreReadResponse, StoreWriteRequest, StoreWriteResponse

__all__ = [
    "DashboardAggregates",
    "DashboardStats",
    "ErrorResponse",
    "FilterOptions",
    "HealthResponse",
    "ImportResponse",
    "NamedValue",
    "PackingRecord",
    "RatioStat",
    "RecordDraft",
    "RecordListResponse",
    "RecordSavedResponse",
    "StoreReadResponse",
    "StoreWriteRequest",
    "StoreWriteResponse",
    "TimelinePoint",
]
