"""Record filters and filter option derivation."""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from packtrack.core.values import parse_iso_date
from packtrack.schemas.dashboard import FilterOptions
from packtrack.schemas.record import PackingRecord


@dataclass(frozen=True)
class RecordFilter:
    """Immutable selection over a record set.

    ``None`` for a field means "All". Year and month only match records
    whose date is a valid ISO date.
    """

    year: int | None = None
    month: int | None = None
    customer: str | None = None
    product: str | None = None

    @property
    def is_active(self) -> bool:
        """Whether any constraint is set."""
        return any(v is not None for v in (self.year, self.month, self.customer, self.product))

    def matches(self, record: PackingRecord) -> bool:
        """Check whether a record passes every constraint."""
        if self.year is not None or self.month is not None:
            parsed = parse_iso_date(record.date)
            if parsed is None:
                return False
            if self.year is not None and parsed.year != self.year:
                return False
            if self.month is not None and parsed.month != self.month:
                return False
        if self.customer is not None and record.customer != self.customer:
            return False
        if self.product is not None and record.product != self.product:
            return False
        return True


def apply_filter(
    records: Iterable[PackingRecord],
    record_filter: RecordFilter | None = None,
) -> list[PackingRecord]:
    """Return the records matching a filter, preserving order."""
    if record_filter is None or not record_filter.is_active:
        return list(records)
    return [record for record in records if record_filter.matches(record)]


def filter_options(records: Sequence[PackingRecord]) -> FilterOptions:
    """Collect distinct years, customers and products from records."""
    years: set[int] = set()
    customers: set[str] = set()
    products: set[str] = set()

    for record in records:
        parsed = parse_iso_date(record.date)
        if parsed is not None:
            years.add(parsed.year)
        if record.customer:
            customers.add(record.customer)
        if record.product:
            products.add(record.product)

    return FilterOptions(
        years=sorted(years, reverse=True),
        customers=sorted(customers),
        products=sorted(products),
    )
