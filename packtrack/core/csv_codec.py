"""CSV codec - import packing records from CSV and export reports.

Import reads the sheet layout (Date, Shipment, Mode, Product, SI QTY,
QTY, one "<package> QTY" column per package type, Remark). Decoding is
lenient: malformed numbers become 0, short rows leave trailing fields at
their defaults and unknown columns are ignored.

Export is a one-way report: base fields followed by per-group package
totals and per-group capacity ratios.
"""

import csv
import io
from collections.abc import Iterable, Sequence
from datetime import date
from typing import Any

from packtrack.core.aggregation import record_group_totals, record_packages, record_ratio_totals
from packtrack.core.filters import RecordFilter, apply_filter
from packtrack.core.values import format_number, parse_number, to_display_date, to_iso_date
from packtrack.infra.logging import get_logger
from packtrack.models.catalog import DEFAULT_CATALOG, PackageCatalog, PackageGroup, PackageKey
from packtrack.schemas.record import PackingRecord

logger = get_logger(__name__)

# External column name -> PackingRecord field
BASE_COLUMNS: dict[str, str] = {
    "Timestamp": "timestamp",
    "Date": "date",
    "Shipment": "customer",
    "Mode": "mode",
    "Product": "product",
    "SI QTY": "si_qty",
    "QTY": "qty",
    "Remark": "remark",
}

EXPORT_BASE_HEADERS = ("Date", "Shipment", "Mode", "Product", "SI QTY", "QTY")

# Export report group order: (total column, ratio column)
EXPORT_GROUP_COLUMNS: dict[PackageGroup, tuple[str, str]] = {
    PackageGroup.STANDARD: ("Standard Total", "Ratio Standard"),
    PackageGroup.BOXES: ("Boxes Total", "Ratio Boxes"),
    PackageGroup.WARP: ("Warp Total", "Ratio Warp"),
    PackageGroup.RETURNABLE: ("Returnable Total", "Ratio Returnable"),
}


def split_line(line: str) -> list[str]:
    """Split one CSV line on commas, honoring double-quoted fields.

    ``""`` inside a quoted field is a literal quote. Values are trimmed.
    Quoted fields cannot span lines. A line the csv module rejects (for
    example a field over its size limit) is split on bare commas instead.
    """
    try:
        row = next(csv.reader([line], skipinitialspace=True), [])
    except csv.Error as e:
        logger.warning("CSV line not tokenizable, splitting on commas", error=str(e), length=len(line))
        row = line.split(",")
    return [value.strip() for value in row]


def _is_numeric_column(header: str, catalog: PackageCatalog) -> bool:
    if "QTY" in header or header == "SI QTY":
        return True
    key = PackageKey.from_column(header)
    return key is not None and key in catalog.keys


def decode_row(
    headers: Sequence[str],
    values: Sequence[str],
    record_id: str,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> PackingRecord:
    """Build a record from header names and positional values."""
    fields: dict[str, Any] = {"id": record_id}
    counts: dict[PackageKey, float] = {}

    for index, header in enumerate(headers):
        if index >= len(values):
            break
        raw = values[index]

        if header == "Date":
            value: Any = to_iso_date(raw)
        elif _is_numeric_column(header, catalog):
            value = parse_number(raw)
        else:
            value = raw or ""

        key = PackageKey.from_column(header)
        if key is not None and key in catalog.keys:
            counts[key] = value
        elif header in BASE_COLUMNS:
            fields[BASE_COLUMNS[header]] = value

    fields["package_counts"] = counts
    return PackingRecord(**fields)


def parse_csv(text: str, catalog: PackageCatalog = DEFAULT_CATALOG) -> list[PackingRecord]:
    """Decode CSV text into records.

    The first non-empty line is the header; every following non-empty line
    becomes one record with id ``row-<index>`` (index among data rows).

    Args:
        text: Raw CSV text
        catalog: Package catalog used to recognize package columns

    Returns:
        One record per data line (empty list for empty input)
    """
    lines = [line.strip() for line in text.splitlines()]
    lines = [line for line in lines if line]
    if not lines:
        return []

    headers = [header.replace('"', "").strip() for header in split_line(lines[0])]
    records = [
        decode_row(headers, split_line(line), f"row-{index}", catalog)
        for index, line in enumerate(lines[1:])
    ]

    logger.debug("CSV decoded", columns=len(headers), records=len(records))
    return records


def import_headers(catalog: PackageCatalog = DEFAULT_CATALOG) -> list[str]:
    """Header row of the sheet layout, as read back by parse_csv."""
    return ["Date", "Shipment", "Mode", "Product", "SI QTY", "QTY", *catalog.columns, "Remark"]


def dump_csv(records: Iterable[PackingRecord], catalog: PackageCatalog = DEFAULT_CATALOG) -> str:
    """Encode records in the sheet layout accepted by parse_csv.

    Dates are written as DD/MM/YYYY, like a spreadsheet download.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(import_headers(catalog))
    for record in records:
        writer.writerow([
            to_display_date(record.date),
            record.customer,
            record.mode,
            record.product,
            format_number(record.si_qty),
            format_number(record.qty),
            *(format_number(record.count(key)) for key in catalog.keys),
            record.remark,
        ])
    return buffer.getvalue()


def export_headers() -> list[str]:
    """Header row of the export report."""
    totals = [total for total, _ in EXPORT_GROUP_COLUMNS.values()]
    ratios = [ratio for _, ratio in EXPORT_GROUP_COLUMNS.values()]
    return [*EXPORT_BASE_HEADERS, "Total Packages", *totals, *ratios]


def export_to_csv(
    records: Iterable[PackingRecord],
    record_filter: RecordFilter | None = None,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> str:
    """Render the export report for the records matching a filter.

    Every value is double-quoted with internal quotes doubled. Ratio
    columns carry two decimals.

    Args:
        records: Records to export
        record_filter: Optional filter applied before export
        catalog: Package catalog defining groups and ratios

    Returns:
        CSV text: header row plus one row per exported record
    """
    selected = apply_filter(records, record_filter)

    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")
    writer.writerow(export_headers())

    for record in selected:
        totals = record_group_totals(record, catalog)
        ratios = record_ratio_totals(record, catalog)
        writer.writerow([
            record.date,
            record.customer,
            record.mode,
            record.product,
            format_number(record.si_qty),
            format_number(record.qty),
            format_number(record_packages(record, catalog)),
            *(format_number(totals.get(group, 0.0)) for group in EXPORT_GROUP_COLUMNS),
            *(f"{ratios.get(group, 0.0):.2f}" for group in EXPORT_GROUP_COLUMNS),
        ])

    logger.info("CSV export rendered", records=len(selected))
    return buffer.getvalue()


def export_filename(today: date | None = None) -> str:
    """Download filename for an export made on ``today``."""
    today = today or date.today()
    return f"packing_export_{today.isoformat()}.csv"
