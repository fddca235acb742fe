"""Packing Service - the application's working record set.

Owns the records currently shown by the dashboard and table views. The
set is replaced wholesale on load or import and never mutated in place:
- load() reads the remote store, falling back to sample data only when
  no store is configured
- add_record() appends to the store and reloads on success
- import_csv() replaces the set with the records of an uploaded file
"""

import csv
import time
from pathlib import PurePath

from packtrack.config import settings
from packtrack.core.aggregation import aggregate
from packtrack.core.csv_codec import export_to_csv, parse_csv
from packtrack.core.filters import RecordFilter, apply_filter, filter_options
from packtrack.core.sample_data import generate_sample_data
from packtrack.exceptions import CsvImportError, NothingToExportError, RecordSubmissionError
from packtrack.infra.logging import get_logger
from packtrack.models.catalog import PackageCatalog
from packtrack.schemas.dashboard import DashboardAggregates, FilterOptions
from packtrack.schemas.record import PackingRecord, RecordDraft
from packtrack.services.store_client import StoreClient, get_store_client

logger = get_logger(__name__)


class PackingService:
    """Working record set plus the operations the views need."""

    def __init__(
        self,
        store: StoreClient | None = None,
        sample_size: int | None = None,
    ) -> None:
        """Initialize packing service.

        Args:
            store: Remote store client (defaults to the singleton)
            sample_size: Records generated when no store is configured
        """
        self.store = store or get_store_client()
        self.sample_size = sample_size if sample_size is not None else settings.sample_size
        self._records: tuple[PackingRecord, ...] = ()
        self._source = "none"

    @property
    def catalog(self) -> PackageCatalog:
        """Package catalog shared with the store client."""
        return self.store.catalog

    @property
    def source(self) -> str:
        """Where the current records came from: none, store, sample or import."""
        return self._source

    @property
    def loaded(self) -> bool:
        """Whether a load or import has happened."""
        return self._source != "none"

    def _replace(self, records: list[PackingRecord], source: str) -> None:
        self._records = tuple(records)
        self._source = source

    async def load(self) -> list[PackingRecord]:
        """Reload the working set from the store.

        An empty result is kept as-is when a store is configured; without a
        store, sample data is generated instead.
        """
        records = await self.store.fetch_all()

        if records:
            self._replace(records, "store")
        elif not self.store.configured:
            self._replace(
                generate_sample_data(self.sample_size, catalog=self.catalog),
                "sample",
            )
            logger.info("No store configured, using sample data", records=len(self._records))
        else:
            self._replace([], "store")
            logger.warning("Store returned no records")

        return list(self._records)

    async def add_record(self, draft: RecordDraft) -> PackingRecord:
        """Submit a new record and reload from the store.

        Raises:
            RecordSubmissionError: If the store did not accept the record;
                the working set is left untouched
        """
        record = draft.to_record(f"record-{int(time.time() * 1000)}")

        if not await self.store.append(record):
            raise RecordSubmissionError("Failed to save record to the store")

        await self.load()
        logger.info("Record submitted", record_id=record.id, records=len(self._records))
        return record

    def import_csv(self, filename: str | None, content: bytes) -> list[PackingRecord]:
        """Replace the working set with the records of a CSV file.

        Raises:
            CsvImportError: If the file is not a .csv file, is not UTF-8 text
                or holds no data rows; nothing is applied in that case
        """
        if not filename or PurePath(filename).suffix.lower() != ".csv":
            raise CsvImportError("Please upload a valid CSV file.")

        try:
            records = parse_csv(content.decode("utf-8-sig"), self.catalog)
        except (UnicodeDecodeError, csv.Error) as e:
            logger.warning("CSV parse failed", filename=filename, error=str(e))
            raise CsvImportError("Failed to parse CSV. Please check the file format.") from e

        if not records:
            raise CsvImportError("No data found in file.")

        self._replace(records, "import")
        logger.info("CSV imported", filename=filename, records=len(records))
        return records

    def records(self, record_filter: RecordFilter | None = None) -> list[PackingRecord]:
        """Records matching a filter."""
        return apply_filter(self._records, record_filter)

    def dashboard(self, record_filter: RecordFilter | None = None) -> DashboardAggregates:
        """Dashboard aggregates over the records matching a filter."""
        return aggregate(self.records(record_filter), self.catalog)

    def filter_options(self) -> FilterOptions:
        """Filter choices derived from the whole working set."""
        return filter_options(self._records)

    def export_csv(self, record_filter: RecordFilter | None = None) -> str:
        """Export report for the records matching a filter.

        Raises:
            NothingToExportError: If no record matches
        """
        selected = self.records(record_filter)
        if not selected:
            raise NothingToExportError("No records to export")
        return export_to_csv(selected, catalog=self.catalog)


# Singleton instance
_packing_service: PackingService | None = None


def get_packing_service() -> PackingService:
    """Get packing service singleton."""
    global _packing_service
    if _packing_service is None:
        _packing_service = PackingService()
    return _packing_service
