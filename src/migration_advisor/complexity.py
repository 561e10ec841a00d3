"""Complexity & Risk Assessor.

Rates migration complexity from business criticality and renders the fixed
factor, prerequisite, recommendation, security and risk statements.
"""

from . import templates
from .config import AdvisorConfig
from .schema import (
    ApplicationInventory,
    CurrentStateArchitecture,
    MigrationComplexity,
    SecurityRecommendations,
)


class ComplexityAssessor:
    """Derives the complexity assessment and template statements.

    The rating is two-valued: only the exact non-critical marker lowers it.
    """

    def __init__(self, config: AdvisorConfig):
        self.rules = config.complexity

    def overall_complexity(self, criticality: str) -> str:
        if criticality == self.rules.non_critical_marker:
            return self.rules.reduced_complexity
        return self.rules.default_complexity

    def assess(
        self,
        inventory: ApplicationInventory,
        current_state: CurrentStateArchitecture,
    ) -> MigrationComplexity:
        """Build the complexity assessment for an inventory."""
        return MigrationComplexity(
            overall_complexity=self.overall_complexity(inventory.criticality),
            complexity_factors=templates.render(
                templates.COMPLEXITY_FACTORS,
                languages=inventory.languages,
                hosting_model=inventory.hosting_model,
                production=current_state.production_servers,
                non_production=current_state.non_production_servers,
            ),
            estimated_timeframe=self.rules.estimated_timeframe,
            prerequisites=templates.render(templates.PREREQUISITES),
        )

    def key_recommendations(self, region: str) -> tuple[str, ...]:
        return templates.render(templates.KEY_RECOMMENDATIONS, region=region)

    def security_recommendations(self) -> SecurityRecommendations:
        return SecurityRecommendations(
            identity_and_access=templates.render(templates.IDENTITY_AND_ACCESS),
            network_security=templates.render(templates.NETWORK_SECURITY),
            data_protection=templates.render(templates.DATA_PROTECTION),
        )

    def risks(self) -> tuple[str, ...]:
        return templates.render(templates.RISKS_AND_CONSIDERATIONS)
