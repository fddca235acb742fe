"""Domain models - package catalog and package types."""

from packtrack.models.catalog import (
    DEFAULT_CATALOG,
    PackageCatalog,
    PackageGroup,
    PackageKey,
    get_catalog,
    load_catalog,
)

__all__ = [
    "DEFAULT_CATALOG",
    "PackageCatalog",
    "PackageGroup",
    "PackageKey",
    "get_catalog",
    "load_catalog",
]
