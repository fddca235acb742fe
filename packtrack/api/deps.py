"""FastAPI dependencies for dependency injection.

Provides:
- Packing service
- Record filter from query parameters
"""

from typing import Annotated

from fastapi import Depends, Query

from packtrack.core.filters import RecordFilter
from packtrack.services.packing_service import PackingService, get_packing_service


async def get_service() -> PackingService:
    """Get packing service dependency."""
    return get_packing_service()


def _blank_to_none(value: str | None) -> str | None:
    # "All" is how the filter selects everything
    if value is None or not value.strip() or value == "All":
        return None
    return value


async def get_record_filter(
    year: Annotated[int | None, Query(ge=1900, le=9999, description="Packing year")] = None,
    month: Annotated[int | None, Query(ge=1, le=12, description="Packing month (1-12)")] = None,
    customer: Annotated[str | None, Query(description="Exact customer name")] = None,
    product: Annotated[str | None, Query(description="Exact product name")] = None,
) -> RecordFilter:
    """Build an immutable record filter from query parameters."""
    return RecordFilter(
        year=year,
        month=month,
        customer=_blank_to_none(customer),
        product=_blank_to_none(product),
    )


# Type aliases for cleaner annotations
Service = Annotated[PackingService, Depends(get_service)]
Filters = Annotated[RecordFilter, Depends(get_record_filter)]
