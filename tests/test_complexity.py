"""Tests for the Complexity & Risk Assessor."""

import pytest

from migration_advisor.complexity import ComplexityAssessor
from migration_advisor.config import AdvisorConfig, ComplexityConfig
from migration_advisor.schema import ApplicationInventory, CurrentStateArchitecture
from migration_advisor import templates


@pytest.fixture
def assessor() -> ComplexityAssessor:
    return ComplexityAssessor(AdvisorConfig())


@pytest.fixture
def inventory() -> ApplicationInventory:
    return ApplicationInventory(
        application_name="Claims",
        criticality="Critical",
        languages="C#, SQL Server",
        hosting_model="On-Premises Virtualized",
        production_servers=2,
        non_production_servers=3,
    )


@pytest.fixture
def current_state(inventory) -> CurrentStateArchitecture:
    return CurrentStateArchitecture(
        production_servers=inventory.production_servers,
        non_production_servers=inventory.non_production_servers,
    )


class TestOverallComplexity:
    """Tests for the two-valued complexity rating."""

    def test_non_critical_is_medium(self, assessor):
        assert assessor.overall_complexity("Non-Critical") == "Medium"

    @pytest.mark.parametrize("criticality", [
        "Critical",
        "Mission Critical",
        "non-critical",
        "Non-critical",
        "Non-Critical ",
        "",
    ])
    def test_anything_else_is_high(self, assessor, criticality):
        assert assessor.overall_complexity(criticality) == "High"

    def test_marker_is_configurable(self):
        assessor = ComplexityAssessor(AdvisorConfig(complexity=ComplexityConfig(non_critical_marker="Low")))
        assert assessor.overall_complexity("Low") == "Medium"
        assert assessor.overall_complexity("Non-Critical") == "High"


class TestAssess:
    """Tests for the complexity assessment."""

    def test_factors_interpolate_inventory(self, assessor, inventory, current_state):
        complexity = assessor.assess(inventory, current_state)

        assert complexity.complexity_factors == (
            "Application uses C#, SQL Server - Azure native support available",
            "Current hosting model: On-Premises Virtualized",
            "Multiple environments: 2 Prod, 3 Non-Prod",
            "No disaster recovery plan currently in place",
        )

    def test_timeframe_is_constant(self, assessor, inventory, current_state):
        assert assessor.assess(inventory, current_state).estimated_timeframe == "3-6 months"

    def test_prerequisites(self, assessor, inventory, current_state):
        prerequisites = assessor.assess(inventory, current_state).prerequisites
        assert prerequisites == templates.PREREQUISITES
        assert "Application dependency mapping" in prerequisites

    def test_rating_follows_criticality(self, assessor, current_state):
        inventory = ApplicationInventory(criticality="Non-Critical")
        assert assessor.assess(inventory, current_state).overall_complexity == "Medium"


class TestTemplateStatements:
    """Tests for the fixed recommendation statements."""

    def test_key_recommendations_name_region(self, assessor):
        recommendations = assessor.key_recommendations("West US 2")

        assert len(recommendations) == 7
        assert recommendations[-1] == "Deploy in West US 2 region for optimal performance"
        assert "Implement Azure Key Vault for secure credential management" in recommendations

    def test_security_recommendations(self, assessor):
        security = assessor.security_recommendations()

        assert len(security.identity_and_access) == 3
        assert len(security.network_security) == 3
        assert len(security.data_protection) == 3
        assert "Enable multi-factor authentication (MFA)" in security.identity_and_access

    def test_risks(self, assessor):
        risks = assessor.risks()
        assert len(risks) == 5
        assert risks[1] == "Data migration requires careful planning to minimize downtime"

    def test_render_is_deterministic(self):
        first = templates.render(templates.COMPLEXITY_FACTORS, languages="Java", hosting_model="VM",
                                 production=1, non_production=0)
        second = templates.render(templates.COMPLEXITY_FACTORS, languages="Java", hosting_model="VM",
                                  production=1, non_production=0)
        assert first == second
