"""Sizing Classifier.

Maps aggregate on-prem resources to Azure compute tiers and builds the
recommended services: a lift-and-shift virtual machine, plus a managed
platform option for applications written in a managed-runtime language.
Services leave here unpriced; the cost estimator attaches their cost.
"""

import logging
from typing import Optional

from .config import AdvisorConfig, ComputeTierConfig
from .schema import Aggregates, ApplicationInventory, RecommendedService

logger = logging.getLogger(__name__)


class SizingClassifier:
    """Classifies resource totals into compute tiers.

    Tiers are evaluated top-down; the first one whose core AND memory
    thresholds are both met wins, otherwise the default tier applies.
    """

    VM_SERVICE_TYPE = "Virtual Machine"
    VM_SERVICE_NAME = "Azure Virtual Machine"
    VM_TIER = "Standard"
    VM_JUSTIFICATION = "Lift-and-shift option maintaining current architecture with minimal changes."

    def __init__(self, config: AdvisorConfig):
        self.tiers = config.compute_tiers
        self.default_tier = config.default_tier
        self.platform = config.managed_platform

    def classify(self, cores: int, memory_mb: int) -> ComputeTierConfig:
        """Return the compute tier for the given totals."""
        memory_gb = memory_mb // 1024
        for tier in self.tiers:
            if cores >= tier.min_cores and memory_gb >= tier.min_memory_gb:
                return tier
        return self.default_tier

    def virtual_machine_service(self, aggregates: Aggregates) -> RecommendedService:
        """Build the lift-and-shift VM recommendation for the whole footprint."""
        tier = self.classify(aggregates.total_cores, aggregates.total_memory_mb)
        logger.debug(
            "Classified %d cores / %d GB as %s",
            aggregates.total_cores, aggregates.total_memory_gb, tier.sku,
        )
        return RecommendedService(
            service_type=self.VM_SERVICE_TYPE,
            service_name=self.VM_SERVICE_NAME,
            sku=tier.sku,
            size=tier.size_label,
            recommended_cores=aggregates.total_cores,
            recommended_memory_gb=aggregates.total_memory_gb,
            recommended_storage_gb=aggregates.total_disk_gb,
            tier=self.VM_TIER,
            justification=self.VM_JUSTIFICATION,
        )

    def uses_managed_runtime(self, languages: str) -> bool:
        """Check whether the language list names a managed-runtime language."""
        haystack = languages.lower()
        return any(marker.lower() in haystack for marker in self.platform.language_markers if marker)

    def managed_platform_service(
        self,
        inventory: ApplicationInventory,
        aggregates: Aggregates,
    ) -> Optional[RecommendedService]:
        """Build the managed platform recommendation, or None if it does not apply.

        The platform is never sized below its minimum cores/memory, even when
        the on-prem footprint is smaller.
        """
        if not self.uses_managed_runtime(inventory.languages):
            return None

        return RecommendedService(
            service_type=self.platform.service_type,
            service_name=self.platform.service_name,
            sku=self.platform.sku,
            size=self.platform.size_label,
            recommended_cores=max(self.platform.min_cores, aggregates.total_cores // 2),
            recommended_memory_gb=max(self.platform.min_memory_gb, aggregates.total_memory_gb),
            recommended_storage_gb=self.platform.storage_gb,
            tier=self.platform.tier,
            justification=self.platform.justification,
        )

    def recommend_services(
        self,
        inventory: ApplicationInventory,
        aggregates: Aggregates,
    ) -> tuple[RecommendedService, ...]:
        """All recommended services in display order (managed platform first)."""
        services: list[RecommendedService] = []

        platform = self.managed_platform_service(inventory, aggregates)
        if platform is not None:
            services.append(platform)

        services.append(self.virtual_machine_service(aggregates))
        return tuple(services)
