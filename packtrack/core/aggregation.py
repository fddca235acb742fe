"""Aggregation engine - dashboard statistics from packing records.

All functions are pure: they read an input snapshot and return fresh
results. Nothing here raises for a well-typed record list, including an
empty one.
"""

from collections.abc import Sequence
from datetime import date

from packtrack.core.values import parse_iso_date
from packtrack.models.catalog import DEFAULT_CATALOG, PackageCatalog, PackageGroup
from packtrack.schemas.dashboard import (
    NO_DATA,
    DashboardAggregates,
    DashboardStats,
    NamedValue,
    RatioStat,
    TimelinePoint,
)
from packtrack.schemas.record import PackingRecord

TOP_CUSTOMER_LIMIT = 5


def record_packages(record: PackingRecord, catalog: PackageCatalog = DEFAULT_CATALOG) -> float:
    """Total packages used by one record across all catalog keys."""
    return sum(record.count(key) for key in catalog.keys)


def record_group_totals(
    record: PackingRecord,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> dict[PackageGroup, float]:
    """Raw package count per group for one record."""
    return {
        group: sum(record.count(key) for key in members)
        for group, members in catalog.groups.items()
    }


def record_ratio_totals(
    record: PackingRecord,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> dict[PackageGroup, float]:
    """Capacity units per group for one record (count / ratio, summed)."""
    return {
        group: sum(record.count(key) / catalog.ratio(key) for key in members)
        for group, members in catalog.groups.items()
    }


def rank(totals: dict[str, float], limit: int | None = None) -> list[NamedValue]:
    """Sort totals descending; ties keep first-seen order."""
    ordered = sorted(totals.items(), key=lambda item: item[1], reverse=True)
    if limit is not None:
        ordered = ordered[:limit]
    return [NamedValue(name=name, value=value) for name, value in ordered]


def _timeline_sort_key(point: TimelinePoint) -> tuple[bool, date]:
    # Unparseable dates go last; sorted() is stable so they keep first-seen order
    parsed = parse_iso_date(point.date)
    return (parsed is None, parsed or date.min)


def aggregate(
    records: Sequence[PackingRecord],
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> DashboardAggregates:
    """Derive dashboard statistics and chart series from records.

    Args:
        records: Record snapshot to aggregate
        catalog: Package catalog defining keys, groups and ratios

    Returns:
        DashboardAggregates with global stats, timeline, package totals,
        top customers, mode distribution, group totals and ratio analysis
    """
    customer_qty: dict[str, float] = {}
    mode_counts: dict[str, float] = {}
    package_usage = {key: 0.0 for key in catalog.keys}
    timeline: dict[str, TimelinePoint] = {}

    total_items = 0.0
    total_si = 0.0

    for record in records:
        total_items += record.qty
        total_si += record.si_qty

        customer_qty[record.customer] = customer_qty.get(record.customer, 0.0) + record.qty
        mode_counts[record.mode] = mode_counts.get(record.mode, 0) + 1

        for key in catalog.keys:
            package_usage[key] += record.count(key)

        point = timeline.get(record.date)
        if point is None:
            point = timeline[record.date] = TimelinePoint(date=record.date)
        point.qty += record.qty
        point.packages += record_packages(record, catalog)

    group_stats: dict[PackageGroup, float] = {}
    ratio_stats: dict[PackageGroup, RatioStat] = {}
    for group, members in catalog.groups.items():
        used = sum(package_usage[key] for key in members)
        capacity = sum(package_usage[key] / catalog.ratio(key) for key in members)
        group_stats[group] = used
        ratio_stats[group] = RatioStat(used=used, max_capacity=capacity)

    top_customers = rank(customer_qty)
    top_modes = rank(mode_counts)

    stats = DashboardStats(
        total_items=total_items,
        total_si=total_si,
        total_packages=sum(package_usage.values()),
        top_customer=(top_customers[0].name if top_customers else "") or NO_DATA,
        top_mode=(top_modes[0].name if top_modes else "") or NO_DATA,
    )

    packages = rank({key.value: total for key, total in package_usage.items() if total > 0})

    return DashboardAggregates(
        record_count=len(records),
        stats=stats,
        timeline=sorted(timeline.values(), key=_timeline_sort_key),
        packages=packages,
        top_customers=top_customers[:TOP_CUSTOMER_LIMIT],
        modes=[NamedValue(name=mode, value=count) for mode, count in mode_counts.items()],
        group_stats=group_stats,
        ratio_stats=ratio_stats,
    )
