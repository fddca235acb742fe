"""Record endpoints - listing, data entry, CSV import and export."""

from fastapi import APIRouter, File, HTTPException, UploadFile, status
from fastapi.responses import Response

from packtrack.api.deps import Filters, Service
from packtrack.core.csv_codec import export_filename
from packtrack.exceptions import CsvImportError, NothingToExportError, RecordSubmissionError
from packtrack.infra.logging import get_logger
from packtrack.schemas.common import ImportResponse, RecordListResponse, RecordSavedResponse
from packtrack.schemas.dashboard import FilterOptions
from packtrack.schemas.record import RecordDraft

router = APIRouter()
logger = get_logger(__name__)


@router.get("", response_model=RecordListResponse)
async def list_records(service: Service, record_filter: Filters) -> RecordListResponse:
    """List records matching the filters."""
    records = service.records(record_filter)
    return RecordListResponse(source=service.source, total=len(records), records=records)


@router.get("/filters", response_model=FilterOptions)
async def get_filter_options(service: Service) -> FilterOptions:
    """Years, customers and products available for filtering."""
    return service.filter_options()


@router.post(
    "",
    response_model=RecordSavedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Save a new packing record to the store",
)
async def create_record(draft: RecordDraft, service: Service) -> RecordSavedResponse:
    """Append a record to the remote store, then reload from it.

    Local state is only refreshed from the store, so a failed write leaves
    the working set unchanged and the client must retry.
    """
    try:
        record = await service.add_record(draft)
    except RecordSubmissionError as e:
        logger.warning("Record submission failed", customer=draft.customer)
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail=str(e),
        ) from e

    return RecordSavedResponse(record=record, total=len(service.records()))


@router.post("/reload", response_model=RecordListResponse)
async def reload_records(service: Service) -> RecordListResponse:
    """Re-read every record from the store."""
    records = await service.load()
    return RecordListResponse(source=service.source, total=len(records), records=records)


@router.post("/import", response_model=ImportResponse, summary="Replace records with a CSV file")
async def import_records(
    service: Service,
    file: UploadFile = File(..., description="CSV file (sheet layout with header row)"),
) -> ImportResponse:
    """Import a CSV export of the sheet, replacing the working set."""
    content = await file.read()

    try:
        records = service.import_csv(file.filename, content)
    except CsvImportError as e:
        logger.warning("CSV import rejected", filename=file.filename, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        ) from e

    return ImportResponse(filename=file.filename or "", imported=len(records))


@router.get("/export", summary="Download the filtered records as a CSV report")
async def export_records(service: Service, record_filter: Filters) -> Response:
    """CSV report with package group totals and capacity ratios."""
    try:
        content = service.export_csv(record_filter)
    except NothingToExportError as e:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=str(e),
        ) from e

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f'attachment; filename="{export_filename()}"'},
    )
