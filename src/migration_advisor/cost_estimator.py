"""Cost Estimator.

Prices compute from the same tier table the sizing classifier uses and adds
the fixed storage and networking overhead. Figures are static heuristics,
not live Azure pricing.
"""

from decimal import Decimal
from typing import Iterable

from .config import AdvisorConfig
from .schema import Aggregates, CostBreakdown, RecommendedService, to_money
from .sizing import SizingClassifier


class CostEstimator:
    """Builds monthly, annual and one-time cost figures."""

    MONTHS_PER_YEAR = 12

    def __init__(self, config: AdvisorConfig, classifier: SizingClassifier):
        self.costs = config.costs
        self.platform = config.managed_platform
        self.classifier = classifier

    def estimate_vm_cost(self, cores: int, memory_mb: int) -> Decimal:
        """Flat monthly cost of the tier matching the given totals."""
        return to_money(self.classifier.classify(cores, memory_mb).monthly_cost)

    def managed_platform_cost(self) -> Decimal:
        return to_money(self.platform.monthly_cost)

    def price_service(self, service: RecommendedService, aggregates: Aggregates) -> RecommendedService:
        """Return a copy of the service carrying its monthly cost.

        Virtual machines are priced from the tier matching the aggregate
        footprint, the same tier that chose their SKU.
        """
        if service.service_type == SizingClassifier.VM_SERVICE_TYPE:
            cost = self.estimate_vm_cost(aggregates.total_cores, aggregates.total_memory_mb)
        else:
            cost = self.managed_platform_cost()
        return service.model_copy(update={"estimated_monthly_cost": cost})

    def price_services(
        self,
        services: Iterable[RecommendedService],
        aggregates: Aggregates,
    ) -> tuple[RecommendedService, ...]:
        return tuple(self.price_service(service, aggregates) for service in services)

    @property
    def fixed_overhead(self) -> Decimal:
        """Monthly storage plus networking overhead."""
        return to_money(self.costs.monthly_storage_cost + self.costs.monthly_networking_cost)

    def build_breakdown(self, services: Iterable[RecommendedService]) -> CostBreakdown:
        """Compose service costs and fixed overhead into a cost breakdown.

        The overhead is always included, even when no service was attached.
        """
        compute = sum((service.estimated_monthly_cost for service in services), Decimal("0"))
        total_monthly = to_money(compute) + self.fixed_overhead

        return CostBreakdown(
            monthly_compute_cost=compute,
            monthly_storage_cost=self.costs.monthly_storage_cost,
            monthly_networking_cost=self.costs.monthly_networking_cost,
            total_monthly_cost=total_monthly,
            annual_cost=total_monthly * self.MONTHS_PER_YEAR,
            migration_cost=self.costs.migration_cost,
            cost_optimization_tips=self.costs.cost_optimization_tips,
        )
