"""Package catalog - package types, their groups and capacity ratios.

The catalog is process-wide, read-only configuration. The built-in
definition can be overridden from YAML:

    groups:
      Standard Package: [110x110x115, 110x110x90]
      ...
    ratios:
      RETURNABLE: 2
      WARP: 10

Configuration is loaded from (first match wins):
1. settings.catalog_path
2. config/catalog.yaml (working directory)
3. config/catalog.yaml next to the package
"""

from dataclasses import dataclass, field
from enum import Enum
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml

from packtrack.config import settings
from packtrack.exceptions import CatalogError
from packtrack.infra.logging import get_logger

logger = get_logger(__name__)

COLUMN_SUFFIX = " QTY"


class PackageKey(str, Enum):
    """Package type, identified by its physical dimensions or kind."""

    PALLET_110X110X115 = "110x110x115"
    PALLET_110X110X90 = "110x110x90"
    PALLET_110X110X65 = "110x110x65"
    PALLET_80X120X115 = "80X120X115"
    PALLET_80X120X90 = "80X120X90"
    PALLET_80X120X65 = "80X120X65"
    RETURNABLE = "RETURNABLE"
    BOX_42X46X68 = "42X46X68"
    BOX_47X66X68 = "47X66X68"
    BOX_53X53X58 = "53X53X58"
    BOX_57X64X84 = "57X64X84"
    BOX_68X74X86 = "68X74X86"
    BOX_70X100X90 = "70X100X90"
    BOX_27X27X22 = "27X27X22"
    BOX_53X53X19 = "53X53X19"
    WARP = "WARP"
    UNIT = "UNIT"

    @property
    def column(self) -> str:
        """External column name, e.g. "RETURNABLE QTY"."""
        return f"{self.value}{COLUMN_SUFFIX}"

    @classmethod
    def from_column(cls, name: str) -> "PackageKey | None":
        """Resolve a column header ("WARP QTY" or bare "WARP") to a key."""
        name = name.strip()
        if name.endswith(COLUMN_SUFFIX):
            name = name[: -len(COLUMN_SUFFIX)].strip()
        try:
            return cls(name)
        except ValueError:
            return None


class PackageGroup(str, Enum):
    """Named group of package types."""

    STANDARD = "Standard Package"
    RETURNABLE = "Returnable Package"
    BOXES = "Boxes Package"
    WARP = "Warp Package"


@dataclass(frozen=True)
class PackageCatalog:
    """Ordered package keys with group membership and capacity ratios.

    A ratio is the number of physical package units equal to one
    capacity unit. Keys without an explicit ratio use 1.
    """

    keys: tuple[PackageKey, ...]
    groups: dict[PackageGroup, tuple[PackageKey, ...]]
    ratios: dict[PackageKey, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        seen: dict[PackageKey, PackageGroup] = {}
        for group, members in self.groups.items():
            for key in members:
                if key in seen:
                    raise CatalogError(
                        f"Package '{key.value}' is in both '{seen[key].value}' and '{group.value}'"
                    )
                seen[key] = group

        ungrouped = [key.value for key in self.keys if key not in seen]
        if ungrouped:
            raise CatalogError(f"Packages without a group: {ungrouped}")

        unknown = [key.value for key in seen if key not in self.keys]
        if unknown:
            raise CatalogError(f"Grouped packages missing from catalog keys: {unknown}")

        for key, ratio in self.ratios.items():
            if ratio <= 0:
                raise CatalogError(f"Ratio for '{key.value}' must be positive, got {ratio}")

    @property
    def columns(self) -> tuple[str, ...]:
        """External column names in catalog order."""
        return tuple(key.column for key in self.keys)

    def group_keys(self, group: PackageGroup) -> tuple[PackageKey, ...]:
        """Get the keys belonging to a group (empty if the group is unused)."""
        return self.groups.get(group, ())

    def group_of(self, key: PackageKey) -> PackageGroup:
        """Get the group a key belongs to."""
        for group, members in self.groups.items():
            if key in members:
                return group
        raise KeyError(key)

    def ratio(self, key: PackageKey) -> float:
        """Get the capacity ratio of a key (default 1)."""
        return self.ratios.get(key, 1.0)

    @classmethod
    def from_dict(cls, data: dict[str, Any], base: "PackageCatalog | None" = None) -> "PackageCatalog":
        """Build a catalog from a parsed YAML mapping.

        Sections missing from ``data`` are taken from ``base``; ratios are
        merged over the base ratios.

        Raises:
            CatalogError: If a key is unknown or the result is inconsistent
        """
        base = base or DEFAULT_CATALOG

        groups = dict(base.groups)
        if "groups" in data:
            groups = {}
            for group_name, members in (data["groups"] or {}).items():
                group = _parse_enum(PackageGroup, group_name, "group")
                groups[group] = tuple(_parse_key(m) for m in members or [])

        ratios = dict(base.ratios)
        for key_name, value in (data.get("ratios") or {}).items():
            try:
                ratios[_parse_key(key_name)] = float(value)
            except (TypeError, ValueError) as e:
                raise CatalogError(f"Invalid ratio for '{key_name}': {value!r}") from e

        keys = tuple(key for key in PackageKey if any(key in m for m in groups.values()))
        return cls(keys=keys, groups=groups, ratios=ratios)

    @classmethod
    def from_yaml(cls, yaml_content: str) -> "PackageCatalog":
        """Parse YAML content into a catalog."""
        try:
            data = yaml.safe_load(yaml_content) or {}
        except yaml.YAMLError as e:
            raise CatalogError(f"Invalid catalog YAML: {e}") from e
        if not isinstance(data, dict):
            raise CatalogError("Catalog YAML must be a mapping")
        return cls.from_dict(data)


def _parse_key(name: Any) -> PackageKey:
    key = PackageKey.from_column(str(name))
    if key is None:
        raise CatalogError(f"Unknown package key: {name!r}")
    return key


def _parse_enum(enum_cls: type[Enum], value: Any, label: str) -> Any:
    try:
        return enum_cls(value)
    except ValueError as e:
        raise CatalogError(f"Unknown package {label}: {value!r}") from e


DEFAULT_CATALOG = PackageCatalog(
    keys=tuple(PackageKey),
    groups={
        PackageGroup.STANDARD: (
            PackageKey.PALLET_110X110X115,
            PackageKey.PALLET_110X110X90,
            PackageKey.PALLET_110X110X65,
            PackageKey.PALLET_80X120X115,
            PackageKey.PALLET_80X120X90,
            PackageKey.PALLET_80X120X65,
        ),
        PackageGroup.RETURNABLE: (PackageKey.RETURNABLE,),
        PackageGroup.BOXES: (
            PackageKey.BOX_42X46X68,
            PackageKey.BOX_47X66X68,
            PackageKey.BOX_53X53X58,
            PackageKey.BOX_57X64X84,
            PackageKey.BOX_68X74X86,
            PackageKey.BOX_70X100X90,
            PackageKey.BOX_27X27X22,
            PackageKey.BOX_53X53X19,
        ),
        PackageGroup.WARP: (PackageKey.WARP, PackageKey.UNIT),
    },
    ratios={
        PackageKey.PALLET_110X110X115: 1,
        PackageKey.PALLET_110X110X90: 1,
        PackageKey.PALLET_110X110X65: 1,
        PackageKey.PALLET_80X120X115: 1,
        PackageKey.PALLET_80X120X90: 1,
        PackageKey.PALLET_80X120X65: 1,
        PackageKey.RETURNABLE: 2,
        PackageKey.BOX_42X46X68: 3,
        PackageKey.BOX_47X66X68: 3,
        PackageKey.BOX_53X53X58: 3,
        PackageKey.BOX_57X64X84: 3,
        PackageKey.BOX_68X74X86: 3,
        PackageKey.BOX_70X100X90: 3,
        PackageKey.BOX_27X27X22: 30,
        PackageKey.BOX_53X53X19: 30,
        PackageKey.WARP: 10,
        PackageKey.UNIT: 1,
    },
)


def load_catalog(path: str | None = None) -> PackageCatalog:
    """Load the package catalog from YAML, falling back to the built-in one.

    Args:
        path: Explicit YAML path. Defaults to settings.catalog_path.

    Raises:
        CatalogError: If a catalog file exists but is invalid
    """
    path = path if path is not None else settings.catalog_path
    search_paths = [
        Path("config") / "catalog.yaml",
        Path(__file__).parent.parent.parent / "config" / "catalog.yaml",
    ]
    if path:
        search_paths.insert(0, Path(path))

    for candidate in search_paths:
        if candidate.exists():
            logger.info("Loading package catalog from file", path=str(candidate))
            catalog = PackageCatalog.from_yaml(candidate.read_text(encoding="utf-8"))
            logger.info(
                "Package catalog loaded",
                keys=len(catalog.keys),
                groups=[group.value for group in catalog.groups],
            )
            return catalog

    logger.warning("Catalog file not found, using built-in catalog", searched=str(search_paths))
    return DEFAULT_CATALOG


@lru_cache
def get_catalog() -> PackageCatalog:
    """Get the cached process-wide catalog."""
    return load_catalog()
