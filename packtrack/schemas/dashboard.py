"""Dashboard aggregate schemas."""

from pydantic import BaseModel, Field

from packtrack.models.catalog import PackageGroup

NO_DATA = "N/A"


class DashboardStats(BaseModel):
    """Headline numbers over a record set."""

    total_items: float = Field(default=0, description="Sum of product quantities")
    total_si: float = Field(default=0, description="Sum of shipping instruction jobs")
    total_packages: float = Field(default=0, description="Sum of all package counts")
    top_customer: str = Field(default=NO_DATA, description="Customer with the highest quantity")
    top_mode: str = Field(default=NO_DATA, description="Most frequent transport mode")

    model_config = {"extra": "forbid"}


class TimelinePoint(BaseModel):
    """Quantity and packages for one packing date."""

    date: str
    qty: float = 0
    packages: float = 0

    model_config = {"extra": "forbid"}


class NamedValue(BaseModel):
    """Chart entry: a label and its value."""

    name: str
    value: float

    model_config = {"extra": "forbid"}


class RatioStat(BaseModel):
    """Capacity analysis for one package group."""

    used: float = Field(default=0, description="Raw package units used")
    max_capacity: float = Field(default=0, description="Usage converted to capacity units")

    model_config = {"extra": "forbid"}


class DashboardAggregates(BaseModel):
    """Everything the dashboard derives from a record set."""

    record_count: int = 0
    stats: DashboardStats = Field(default_factory=DashboardStats)
    timeline: list[TimelinePoint] = Field(default_factory=list)
    packages: list[NamedValue] = Field(
        default_factory=list,
        description="Non-zero package totals, largest first",
    )
    top_customers: list[NamedValue] = Field(
        default_factory=list,
        description="Top five customers by quantity",
    )
    modes: list[NamedValue] = Field(
        default_factory=list,
        description="Record count per transport mode",
    )
    group_stats: dict[PackageGroup, float] = Field(default_factory=dict)
    ratio_stats: dict[PackageGroup, RatioStat] = Field(default_factory=dict)

    model_config = {"extra": "forbid"}


class FilterOptions(BaseModel):
    """Values available for each record filter."""

    years: list[int] = Field(default_factory=list, description="Most recent first")
    customers: list[str] = Field(default_factory=list)
    products: list[str] = Field(default_factory=list)

    model_config = {"extra": "forbid"}
