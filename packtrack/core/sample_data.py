"""Synthetic packing records for demos and local development."""

import random
from datetime import date, timedelta

from packtrack.models.catalog import DEFAULT_CATALOG, PackageCatalog
from packtrack.schemas.record import PackingRecord

SAMPLE_CUSTOMERS = ("Toyota", "Honda", "Nissan", "Sony", "Panasonic")
SAMPLE_MODES = ("Sea", "Air", "Truck")
SAMPLE_PRODUCTS = ("Electronics", "Auto Parts", "Batteries", "Screens")

# Probability that a record uses a given package type
PACKAGE_USE_PROBABILITY = 0.3


def generate_sample_data(
    count: int = 50,
    today: date | None = None,
    rng: random.Random | None = None,
    catalog: PackageCatalog = DEFAULT_CATALOG,
) -> list[PackingRecord]:
    """Generate one random record per day, going back from ``today``.

    Args:
        count: Number of records
        today: Date of the first record (defaults to today)
        rng: Random source; pass a seeded one for reproducible data
        catalog: Package catalog whose keys are filled

    Returns:
        Records with ids ``sample-0`` .. ``sample-<count-1>``
    """
    today = today or date.today()
    rng = rng or random.Random()

    records = []
    for i in range(count):
        counts = {
            key: float(rng.randrange(20)) if rng.random() < PACKAGE_USE_PROBABILITY else 0.0
            for key in catalog.keys
        }
        records.append(
            PackingRecord(
                id=f"sample-{i}",
                date=(today - timedelta(days=i)).isoformat(),
                customer=rng.choice(SAMPLE_CUSTOMERS),
                mode=rng.choice(SAMPLE_MODES),
                product=rng.choice(SAMPLE_PRODUCTS),
                si_qty=rng.randint(1, 5),
                qty=rng.randint(100, 1099),
                package_counts=counts,
            )
        )
    return records
