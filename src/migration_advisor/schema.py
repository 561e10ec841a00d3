"""Pydantic models for the Migration Advisor.

Raw input schemas matching the ``appdata.json`` inventory export, the typed
inventory the engine works on, and the immutable recommendation it produces.
"""

import re
from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


_COUNT_PATTERN = re.compile(r"^\+?\d+$")

MONEY_QUANTUM = Decimal("0.01")


def to_money(value: Any) -> Decimal:
    """Round a currency amount to two decimal places."""
    return Decimal(str(value)).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def parse_count(value: Any) -> Optional[int]:
    """Parse a free-text count field.

    Returns None when the value is missing or is not a non-negative whole
    number ("eight", "12.5", "-4", ""). Callers decide what to substitute.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value if value >= 0 else None
    if isinstance(value, float):
        return int(value) if value.is_integer() and value >= 0 else None
    text = str(value).strip()
    if not _COUNT_PATTERN.match(text):
        return None
    try:
        return int(text)
    except ValueError:
        # exceeds the interpreter's integer string conversion limit
        return None


def _count_or_zero(value: Any) -> int:
    parsed = parse_count(value)
    return parsed if parsed is not None else 0


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


# =============================================================================
# Raw Input Models (matching the appdata.json export)
# =============================================================================


class RawServerData(BaseModel):
    """Raw server entry from the inventory export. All values are free text."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    server_name: str = Field("", alias="server_Name")
    environment: str = Field("", alias="environment_Association")
    server_status: str = Field("", alias="server_Status")
    operating_system: str = Field("", alias="operating_System")
    cores: str = Field("", alias="cpUs_Cores")
    memory_mb: str = Field("", alias="memory_Size_MB")
    disk_gb: str = Field("", alias="disk_Size_GB")
    ip_address: str = Field("", alias="tcP_IP_Address")
    city: str = ""
    state: str = ""

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


class RawApplicationData(BaseModel):
    """Raw application entry from the inventory export."""
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    application_id: str = Field("", alias="application_ID")
    application_name: str = Field("", alias="application_Name")
    application_acronym: str = Field("", alias="application_Acronym")
    criticality: str = ""
    host_platform: str = Field("", alias="host_Platform")
    languages: str = ""
    region: str = ""
    total_servers: str = Field("", alias="in_Use_Server_Associations")
    production_servers: str = Field("", alias="in_Use_Prod_Servers")
    non_production_servers: str = Field("", alias="in_Use_Non_Prod_Servers")
    hosting_model: str = Field("", alias="application_Hosting_Model")
    servers: list[RawServerData] = Field(default_factory=list, alias="mALServers")
    description: str = ""
    business_impact: str = Field("", alias="business_Impact")

    @field_validator("servers", mode="before")
    @classmethod
    def _servers_default(cls, value: Any) -> Any:
        return [] if value is None else value

    @field_validator(
        "application_id", "application_name", "application_acronym", "criticality",
        "host_platform", "languages", "region", "total_servers", "production_servers",
        "non_production_servers", "hosting_model", "description", "business_impact",
        mode="before",
    )
    @classmethod
    def _coerce_text(cls, value: Any) -> str:
        return _as_text(value)


# =============================================================================
# Typed Inventory Models
# =============================================================================


class ServerRecord(BaseModel):
    """One on-premises server with parsed resource counts."""
    model_config = ConfigDict(frozen=True)

    server_name: str = ""
    environment: str = ""
    operating_system: str = ""
    cores: int = Field(0, ge=0)
    memory_mb: int = Field(0, ge=0)
    disk_gb: int = Field(0, ge=0)
    city: str = ""
    state: str = ""

    @field_validator("cores", "memory_mb", "disk_gb", mode="before")
    @classmethod
    def _degrade_to_zero(cls, value: Any) -> int:
        return _count_or_zero(value)

    @property
    def location(self) -> str:
        return f"{self.city}, {self.state}"


class ApplicationInventory(BaseModel):
    """One application under migration.

    Declared server counts are taken as given and never recounted from
    ``servers``.
    """
    model_config = ConfigDict(frozen=True)

    application_id: str = ""
    application_name: str = ""
    application_acronym: str = ""
    criticality: str = ""
    hosting_model: str = ""
    languages: str = ""
    total_servers: int = Field(0, ge=0)
    production_servers: int = Field(0, ge=0)
    non_production_servers: int = Field(0, ge=0)
    servers: tuple[ServerRecord, ...] = ()

    # Display-only context
    host_platform: str = ""
    region: str = ""
    description: str = ""
    business_impact: str = ""

    # Field parse failures recovered while loading
    parse_warnings: tuple[str, ...] = ()

    @field_validator("total_servers", "production_servers", "non_production_servers", mode="before")
    @classmethod
    def _degrade_to_zero(cls, value: Any) -> int:
        return _count_or_zero(value)

    @property
    def technologies(self) -> list[str]:
        """Language list split on commas, blanks dropped."""
        return [item.strip() for item in self.languages.split(",") if item.strip()]


class Aggregates(BaseModel):
    """Resource totals summed across every server in an inventory."""
    model_config = ConfigDict(frozen=True)

    total_cores: int = 0
    total_memory_mb: int = 0
    total_disk_gb: int = 0

    @property
    def total_memory_gb(self) -> int:
        return self.total_memory_mb // 1024


# =============================================================================
# Recommendation Models
# =============================================================================


class RecommendedService(BaseModel):
    """A target Azure offering with sizing and a monthly cost estimate."""
    model_config = ConfigDict(frozen=True)

    service_type: str
    service_name: str
    sku: str
    size: str
    recommended_cores: int = 0
    recommended_memory_gb: int = 0
    recommended_storage_gb: int = 0
    tier: str = ""
    justification: str = ""
    estimated_monthly_cost: Decimal = Decimal("0.00")

    @field_validator("estimated_monthly_cost", mode="before")
    @classmethod
    def _round_cost(cls, value: Any) -> Decimal:
        return to_money(value)


class CurrentStateArchitecture(BaseModel):
    """Summary of the on-premises footprint."""
    model_config = ConfigDict(frozen=True)

    total_servers: int = 0
    production_servers: int = 0
    non_production_servers: int = 0
    server_specifications: tuple[ServerRecord, ...] = ()
    hosting_model: str = ""
    technologies: tuple[str, ...] = ()
    business_criticality: str = ""


class SecurityRecommendations(BaseModel):
    """Security guidance grouped by area."""
    model_config = ConfigDict(frozen=True)

    identity_and_access: tuple[str, ...] = ()
    network_security: tuple[str, ...] = ()
    data_protection: tuple[str, ...] = ()


class TargetStateArchitecture(BaseModel):
    """Proposed Azure landing."""
    model_config = ConfigDict(frozen=True)

    recommended_services: tuple[RecommendedService, ...] = ()
    region: str = ""
    security: SecurityRecommendations = Field(default_factory=SecurityRecommendations)


class MigrationComplexity(BaseModel):
    """Complexity rating with supporting factors."""
    model_config = ConfigDict(frozen=True)

    overall_complexity: str
    complexity_factors: tuple[str, ...] = ()
    estimated_timeframe: str = ""
    prerequisites: tuple[str, ...] = ()


class CostBreakdown(BaseModel):
    """Monthly, annual and one-time cost estimates (USD)."""
    model_config = ConfigDict(frozen=True)

    monthly_compute_cost: Decimal
    monthly_storage_cost: Decimal
    monthly_networking_cost: Decimal
    total_monthly_cost: Decimal
    annual_cost: Decimal
    migration_cost: Decimal
    cost_optimization_tips: str = ""

    @field_validator(
        "monthly_compute_cost", "monthly_storage_cost", "monthly_networking_cost",
        "total_monthly_cost", "annual_cost", "migration_cost",
        mode="before",
    )
    @classmethod
    def _round_cost(cls, value: Any) -> Decimal:
        return to_money(value)


class MigrationRecommendation(BaseModel):
    """Complete migration recommendation for one application."""
    model_config = ConfigDict(frozen=True)

    application_name: str
    application_id: str
    current_state: CurrentStateArchitecture
    target_state: TargetStateArchitecture
    key_recommendations: tuple[str, ...] = ()
    complexity: MigrationComplexity
    estimated_costs: CostBreakdown
    risks_and_considerations: tuple[str, ...] = ()
    processing_warnings: tuple[str, ...] = ()
