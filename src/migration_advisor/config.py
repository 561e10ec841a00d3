"""Centralized configuration management for the migration advisor.

Every heuristic table the engine uses (compute tiers, fixed costs, the region
map, complexity markers) lives here so a deployment can swap them without a
code change.
"""

import os
from decimal import Decimal
from pathlib import Path
from typing import Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator


class ComputeTierConfig(BaseModel):
    """One compute sizing band.

    A band matches when the aggregate cores AND the aggregate memory (in whole
    GB) are both at or above its thresholds. The same row drives the SKU
    shown to the user and the monthly cost attached to it.
    """
    model_config = ConfigDict(frozen=True)

    min_cores: int = Field(0, ge=0, description="Minimum aggregate cores for this band")
    min_memory_gb: int = Field(0, ge=0, description="Minimum aggregate memory (GB) for this band")
    sku: str = Field(..., description="Azure VM SKU offered for this band")
    size_label: str = Field(..., description="Human readable size of the SKU")
    monthly_cost: Decimal = Field(..., ge=0, description="Flat monthly cost (USD)")


def _default_compute_tiers() -> tuple[ComputeTierConfig, ...]:
    return (
        ComputeTierConfig(
            min_cores=8, min_memory_gb=32,
            sku="Standard_D8s_v5", size_label="8 vCPUs, 32 GB RAM",
            monthly_cost=Decimal("350.00"),
        ),
        ComputeTierConfig(
            min_cores=4, min_memory_gb=16,
            sku="Standard_D4s_v5", size_label="4 vCPUs, 16 GB RAM",
            monthly_cost=Decimal("175.00"),
        ),
        ComputeTierConfig(
            min_cores=2, min_memory_gb=8,
            sku="Standard_D2s_v5", size_label="2 vCPUs, 8 GB RAM",
            monthly_cost=Decimal("87.50"),
        ),
    )


def _default_fallback_tier() -> ComputeTierConfig:
    return ComputeTierConfig(
        sku="Standard_B2s", size_label="2 vCPUs, 4 GB RAM",
        monthly_cost=Decimal("43.75"),
    )


class ManagedPlatformConfig(BaseModel):
    """Managed platform (PaaS) offering attached for managed-runtime languages."""
    model_config = ConfigDict(frozen=True)

    language_markers: tuple[str, ...] = Field(
        ("C#",),
        description="Substrings of the language list that trigger the managed platform option"
    )
    service_type: str = Field("App Service", description="Service type shown to the user")
    service_name: str = Field("Azure App Service", description="Service name shown to the user")
    sku: str = Field("P2V3", description="Managed platform SKU")
    size_label: str = Field("Premium P2V3", description="Human readable plan size")
    tier: str = Field("Premium", description="Plan tier")
    min_cores: int = Field(2, ge=0, description="Platform minimum for recommended cores")
    min_memory_gb: int = Field(8, ge=0, description="Platform minimum for recommended memory (GB)")
    storage_gb: int = Field(250, ge=0, description="Storage included in the plan (GB)")
    monthly_cost: Decimal = Field(Decimal("292.00"), ge=0, description="Flat monthly cost (USD)")
    justification: str = Field(
        "Recommended for C# applications with moderate to high traffic. "
        "Provides auto-scaling, deployment slots, and integrated monitoring.",
        description="Why the managed platform is recommended"
    )


class CostConfig(BaseModel):
    """Fixed cost components added on top of the per-service compute costs."""
    model_config = ConfigDict(frozen=True)

    monthly_storage_cost: Decimal = Field(Decimal("50.00"), ge=0, description="Monthly storage overhead (USD)")
    monthly_networking_cost: Decimal = Field(Decimal("25.00"), ge=0, description="Monthly networking overhead (USD)")
    migration_cost: Decimal = Field(
        Decimal("15000.00"), ge=0,
        description="One-time migration cost (USD); not derived from inventory size"
    )
    cost_optimization_tips: str = Field(
        "Use Azure Hybrid Benefit for Windows licenses, implement auto-scaling, "
        "consider Reserved Instances for predictable workloads",
        description="Cost optimization advice shown with the estimate"
    )


class RegionConfig(BaseModel):
    """Mapping from on-prem city to target Azure region."""
    model_config = ConfigDict(frozen=True)

    city_regions: dict[str, str] = Field(
        default_factory=lambda: {
            "denver": "West US 2",
            "broomfield": "West US 2",
        },
        description="Lower-case city name to Azure region"
    )
    default_region: str = Field("East US", description="Region used when the city is unknown or missing")

    @field_validator("city_regions")
    @classmethod
    def _lowercase_cities(cls, value: dict[str, str]) -> dict[str, str]:
        return {city.strip().lower(): region for city, region in value.items()}


class ComplexityConfig(BaseModel):
    """Complexity rating rules."""
    model_config = ConfigDict(frozen=True)

    non_critical_marker: str = Field(
        "Non-Critical",
        description="Exact criticality value that lowers the rating to the reduced level"
    )
    reduced_complexity: str = Field("Medium", description="Rating for non-critical applications")
    default_complexity: str = Field("High", description="Rating for every other criticality")
    estimated_timeframe: str = Field(
        "3-6 months",
        description="Estimated migration timeframe; not varied by size or complexity"
    )


class NarrativeConfig(BaseModel):
    """Settings for the language model narrative generator."""
    model_config = ConfigDict(frozen=True)

    model: str = Field("gpt-4o", description="Model (OpenAI) or deployment name (Azure OpenAI)")
    azure_endpoint: Optional[str] = Field(
        None,
        description="Azure OpenAI endpoint; falls back to AZURE_OPENAI_ENDPOINT when unset"
    )
    api_version: str = Field("2024-10-21", description="Azure OpenAI API version")
    azure_api_key_env: str = Field("AZURE_OPENAI_API_KEY", description="Environment variable holding the Azure OpenAI key")
    openai_api_key_env: str = Field("OPENAI_API_KEY", description="Environment variable holding the OpenAI key")
    temperature: float = Field(0.3, ge=0.0, le=2.0, description="Sampling temperature")
    max_tokens: int = Field(1500, gt=0, description="Maximum tokens in a generated answer")
    timeout_seconds: float = Field(60.0, gt=0, description="Request timeout passed to the client")
    max_retries: int = Field(2, ge=0, description="Retries performed by the client")


class AdvisorConfig(BaseModel):
    """Complete configuration for the migration advisor."""
    model_config = ConfigDict(frozen=True)

    compute_tiers: tuple[ComputeTierConfig, ...] = Field(default_factory=_default_compute_tiers)
    default_tier: ComputeTierConfig = Field(default_factory=_default_fallback_tier)
    managed_platform: ManagedPlatformConfig = Field(default_factory=ManagedPlatformConfig)
    costs: CostConfig = Field(default_factory=CostConfig)
    regions: RegionConfig = Field(default_factory=RegionConfig)
    complexity: ComplexityConfig = Field(default_factory=ComplexityConfig)
    narrative: NarrativeConfig = Field(default_factory=NarrativeConfig)

    @field_validator("compute_tiers")
    @classmethod
    def _tiers_descend(cls, tiers: tuple[ComputeTierConfig, ...]) -> tuple[ComputeTierConfig, ...]:
        """Bands are evaluated top-down, so each must be strictly smaller than the one above."""
        for upper, lower in zip(tiers, tiers[1:]):
            if lower.min_cores > upper.min_cores or lower.min_memory_gb > upper.min_memory_gb:
                raise ValueError(
                    f"compute tier {lower.sku} has larger thresholds than {upper.sku}; "
                    "list tiers from largest to smallest"
                )
            if lower.min_cores == upper.min_cores and lower.min_memory_gb == upper.min_memory_gb:
                raise ValueError(f"compute tiers {upper.sku} and {lower.sku} share the same thresholds")
        return tiers


# Global config instance
_config: Optional[AdvisorConfig] = None


def get_config() -> AdvisorConfig:
    """Get the current configuration.

    Returns the global config, initializing with defaults if not yet loaded.
    """
    global _config
    if _config is None:
        _config = AdvisorConfig()
    return _config


def load_config(path: Path) -> AdvisorConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        The loaded AdvisorConfig.
    """
    global _config

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    _config = AdvisorConfig.model_validate(data or {})
    return _config


def reset_config() -> None:
    """Reset configuration to defaults."""
    global _config
    _config = AdvisorConfig()


def find_config_file() -> Optional[Path]:
    """Find an advisor configuration file.

    Looks in (order of priority):
    1. MIGRATION_ADVISOR_CONFIG environment variable
    2. ./advisor-config.yaml
    3. ./advisor-config.yml
    4. ~/.config/migration-advisor/config.yaml
    """
    env_path = os.environ.get("MIGRATION_ADVISOR_CONFIG")
    if env_path:
        path = Path(env_path)
        if path.exists():
            return path

    for name in ["advisor-config.yaml", "advisor-config.yml"]:
        path = Path(name)
        if path.exists():
            return path

    user_config = Path.home() / ".config" / "migration-advisor" / "config.yaml"
    if user_config.exists():
        return user_config

    return None


def save_default_config(path: Path) -> None:
    """Save the default configuration to a YAML file.

    Args:
        path: Path where to save the configuration.
    """
    config = AdvisorConfig()

    # JSON mode keeps Decimal costs as plain strings safe_load can read back
    data = config.model_dump(mode="json")

    yaml_content = """# Migration Advisor Configuration
# ===============================
#
# This file configures the compute tier table, fixed cost components,
# region mapping, complexity rules and the narrative generator.
#
# Copy this file to one of these locations:
#   - ./advisor-config.yaml (current directory)
#   - ~/.config/migration-advisor/config.yaml (user config)
#
# Or set the MIGRATION_ADVISOR_CONFIG environment variable.

"""
    yaml_content += yaml.dump(data, default_flow_style=False, sort_keys=False, allow_unicode=True)

    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, 'w', encoding='utf-8') as f:
        f.write(yaml_content)
