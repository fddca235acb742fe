"""Packing record schemas."""

from datetime import date as date_type
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from packtrack.core.values import to_quantity
from packtrack.models.catalog import PackageKey

SUGGESTED_MODES = ("Sea", "Air", "Truck", "Courier")


class PackingRecord(BaseModel):
    """One shipment packing event.

    Records are immutable. Quantities are coerced to non-negative numbers
    and package counts default to 0 for keys that are not present.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    id: str = Field(min_length=1, description="Identifier assigned by the creating side")
    timestamp: str | None = Field(default=None, description="Server-assigned creation time")
    date: str = Field(default="", description="Packing date, ISO YYYY-MM-DD")
    customer: str = Field(default="", description="Customer / shipment identifier")
    mode: str = Field(default="", description="Transport mode (Sea, Air, Truck, ...)")
    product: str = Field(default="", description="Product description")
    si_qty: float = Field(default=0, description="Number of shipping instruction jobs")
    qty: float = Field(default=0, description="Total product quantity packed")
    remark: str = Field(default="", description="Free-text note")
    package_counts: dict[PackageKey, float] = Field(
        default_factory=dict,
        description="Packages used per package type",
    )

    @field_validator("si_qty", "qty", mode="before")
    @classmethod
    def coerce_quantity(cls, v: Any) -> float:
        """Coerce malformed or negative quantities to 0."""
        return to_quantity(v)

    @field_validator("package_counts", mode="before")
    @classmethod
    def coerce_counts(cls, v: Any) -> Any:
        """Coerce every package count to a non-negative number."""
        if v is None:
            return {}
        if isinstance(v, dict):
            return {key: to_quantity(count) for key, count in v.items()}
        return v

    @field_validator("timestamp", mode="before")
    @classmethod
    def blank_timestamp(cls, v: Any) -> Any:
        """Treat an empty timestamp cell as missing."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def count(self, key: PackageKey) -> float:
        """Get the number of packages of one type (0 when absent)."""
        return self.package_counts.get(key, 0.0)


class RecordDraft(BaseModel):
    """A new record as captured by the data entry form.

    The identifier is assigned when the draft is submitted.
    """

    model_config = {"extra": "forbid"}

    date: date_type = Field(default_factory=date_type.today, description="Packing date")
    customer: str = Field(min_length=1, description="Customer / shipment identifier")
    mode: str = Field(
        default=SUGGESTED_MODES[0],
        description="Transport mode; free text, the examples are the usual choices",
        examples=list(SUGGESTED_MODES),
    )
    product: str = Field(default="", description="Product description")
    si_qty: float = Field(default=1, ge=0, description="Number of shipping instruction jobs")
    qty: float = Field(default=0, ge=0, description="Total product quantity packed")
    remark: str = Field(default="", description="Free-text note")
    package_counts: dict[PackageKey, float] = Field(default_factory=dict)

    @field_validator("package_counts")
    @classmethod
    def validate_counts(cls, v: dict[PackageKey, float]) -> dict[PackageKey, float]:
        """Reject negative package counts."""
        negative = [key.value for key, count in v.items() if count < 0]
        if negative:
            raise ValueError(f"Package counts must not be negative: {negative}")
        return v

    def to_record(self, record_id: str) -> PackingRecord:
        """Build the immutable record for this draft."""
        return PackingRecord(
            id=record_id,
            date=self.date.isoformat(),
            customer=self.customer.strip(),
            mode=self.mode.strip(),
            product=self.product.strip(),
            si_qty=self.si_qty,
            qty=self.qty,
            remark=self.remark.strip(),
            package_counts=self.package_counts,
        )
