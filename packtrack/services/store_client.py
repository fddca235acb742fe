"""Store Client - HTTP client for the spreadsheet-backed record store.

The store is append-only: records can be read in full or appended one at
a time. Failures never raise; reads return an empty list and writes
return False, and both are logged.
"""

from collections.abc import Sequence
from typing import Any

import httpx

from packtrack.config import settings
from packtrack.core.values import parse_number, to_display_date, to_iso_date, to_quantity
from packtrack.infra.logging import get_logger
from packtrack.models.catalog import DEFAULT_CATALOG, PackageCatalog, PackageKey, get_catalog
from packtrack.schemas.record import PackingRecord
from packtrack.schemas.store import StoreReadResponse, StoreWriteRequest, StoreWriteResponse

logger = get_logger(__name__)

# Columns before the package block: Timestamp, Date, Shipment, Mode, Product, SI QTY, QTY
_LEADING_COLUMNS = 7

# The sheet always carries one column per package type, whatever the catalog
STORE_PACKAGE_COLUMNS: tuple[PackageKey, ...] = tuple(PackageKey)
_REMARK_COLUMN = _LEADING_COLUMNS + len(STORE_PACKAGE_COLUMNS)


def _cell(row: Sequence[Any], index: int) -> str:
    if index >= len(row) or row[index] is None:
        return ""
    return str(row[index]).strip()


def _number(text: str) -> float:
    # Display values may carry thousands separators ("1,200")
    return parse_number(text.replace(",", ""))


def _json_number(value: float) -> int | float:
    return int(value) if float(value).is_integer() else value


def record_from_row(
    row: Sequence[Any],
    index: int,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> PackingRecord:
    """Decode one store row into a record with id ``remote-<index>``.

    Row layout: Timestamp, Date, Shipment, Mode, Product, SI QTY, QTY,
    one column per package type, Remark. Only package types in the
    catalog are kept.
    """
    counts = {
        key: to_quantity(_number(_cell(row, _LEADING_COLUMNS + offset)))
        for offset, key in enumerate(STORE_PACKAGE_COLUMNS)
        if key in catalog.keys
    }
    return PackingRecord(
        id=f"remote-{index}",
        timestamp=_cell(row, 0) or None,
        date=to_iso_date(_cell(row, 1)),
        customer=_cell(row, 2),
        mode=_cell(row, 3),
        product=_cell(row, 4),
        si_qty=_number(_cell(row, 5)),
        qty=_number(_cell(row, 6)),
        remark=_cell(row, _REMARK_COLUMN),
        package_counts=counts,
    )


def record_to_values(record: PackingRecord, catalog: PackageCatalog = DEFAULT_CATALOG) -> list[Any]:
    """Encode a record as an append row (all columns except Timestamp).

    Package types outside the catalog are written as 0.
    """
    return [
        to_display_date(record.date),
        record.customer,
        record.mode,
        record.product,
        _json_number(record.si_qty),
        _json_number(record.qty),
        *(
            _json_number(record.count(key)) if key in catalog.keys else 0
            for key in STORE_PACKAGE_COLUMNS
        ),
        record.remark,
    ]


class StoreClient:
    """HTTP client for the spreadsheet record store."""

    def __init__(
        self,
        store_url: str | None = None,
        timeout: float | None = None,
        catalog: PackageCatalog = DEFAULT_CATALOG,
    ) -> None:
        """Initialize store client.

        Args:
            store_url: Store web app URL (defaults to settings)
            timeout: Request timeout in seconds (defaults to settings)
            catalog: Package catalog defining the package column block
        """
        self.store_url = (store_url if store_url is not None else settings.store_url).strip()
        self.timeout = timeout if timeout is not None else settings.store_timeout
        self.catalog = catalog
        self._client: httpx.AsyncClient | None = None

    @property
    def configured(self) -> bool:
        """Whether a store URL is set."""
        return bool(self.store_url)

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create HTTP client."""
        if self._client is None:
            # Web app deployments answer through a redirect
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
        return self._client

    async def close(self) -> None:
        """Close HTTP client."""
        if self._client:
            await self._client.aclose()
            self._client = None

    async def fetch_all(self) -> list[PackingRecord]:
        """Read every record from the store.

        Returns:
            Decoded records, or an empty list if the store is not
            configured, empty, or the request failed
        """
        if not self.configured:
            logger.debug("Store not configured, skipping fetch")
            return []

        client = await self._get_client()

        try:
            response = await client.get(self.store_url)
            response.raise_for_status()
            payload = StoreReadResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.error(
                "Store returned error status",
                status_code=e.response.status_code,
                response_text=e.response.text[:500],
            )
            return []

        except Exception as e:
            logger.error(
                "Failed to fetch records from store",
                error=str(e),
                error_type=type(e).__name__,
            )
            return []

        if payload.status != "success":
            logger.error("Store rejected read", message=payload.message)
            return []

        records = [
            record_from_row(row, index, self.catalog)
            for index, row in enumerate(payload.data)
            if any(_cell(row, i) for i in range(len(row)))
        ]
        logger.info("Records fetched from store", rows=len(payload.data), records=len(records))
        return records

    async def append(self, record: PackingRecord) -> bool:
        """Append one record to the store.

        The store assigns the timestamp. Callers should re-fetch after a
        successful append instead of trusting local state.

        Returns:
            True if the store confirmed the write, False otherwise
        """
        if not self.configured:
            logger.warning("Store not configured, cannot append", record_id=record.id)
            return False

        client = await self._get_client()
        body = StoreWriteRequest(values=record_to_values(record, self.catalog))

        try:
            response = await client.post(
                self.store_url,
                params={"action": "add"},
                json=body.model_dump(),
            )
            response.raise_for_status()
            result = StoreWriteResponse.model_validate(response.json())

        except httpx.HTTPStatusError as e:
            logger.error(
                "Store returned error status",
                record_id=record.id,
                status_code=e.response.status_code,
                response_text=e.response.text[:500],
            )
            return False

        except Exception as e:
            logger.error(
                "Failed to append record to store",
                record_id=record.id,
                error=str(e),
                error_type=type(e).__name__,
            )
            return False

        if result.status != "success":
            logger.error("Store rejected append", record_id=record.id, message=result.message)
            return False

        logger.info("Record appended to store", record_id=record.id, customer=record.customer)
        return True


# Singleton instance
_store_client: StoreClient | None = None


def get_store_client() -> StoreClient:
    """Get store client singleton."""
    global _store_client
    if _store_client is None:
        _store_client = StoreClient(catalog=get_catalog())
    return _store_client
