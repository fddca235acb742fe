"""Dashboard endpoint."""

from fastapi import APIRouter

from packtrack.api.deps import Filters, Service
from packtrack.schemas.dashboard import DashboardAggregates

router = APIRouter()


@router.get("", response_model=DashboardAggregates)
async def get_dashboard(service: Service, record_filter: Filters) -> DashboardAggregates:
    """Statistics, chart series, group totals and capacity analysis.

    Computed over the records matching the filters.
    """
    return service.dashboard(record_filter)
