"""Tests for the Sizing Classifier."""

from decimal import Decimal

import pytest

from migration_advisor.config import AdvisorConfig
from migration_advisor.schema import Aggregates, ApplicationInventory
from migration_advisor.sizing import SizingClassifier


GB = 1024


@pytest.fixture
def classifier() -> SizingClassifier:
    return SizingClassifier(AdvisorConfig())


class TestClassify:
    """Tests for tier band selection."""

    @pytest.mark.parametrize("cores,memory_mb,expected_sku", [
        (8, 32 * GB, "Standard_D8s_v5"),
        (12, 40 * GB, "Standard_D8s_v5"),
        (64, 512 * GB, "Standard_D8s_v5"),
        (8, 16 * GB, "Standard_D4s_v5"),  # memory below band 1
        (4, 16 * GB, "Standard_D4s_v5"),
        (4, 64 * GB, "Standard_D4s_v5"),
        (3, 16 * GB, "Standard_D2s_v5"),  # cores below band 2
        (2, 8 * GB, "Standard_D2s_v5"),
        (16, 8 * GB, "Standard_D2s_v5"),
        (16, 8 * GB - 1, "Standard_B2s"),  # 7 GB after integer division
        (1, 64 * GB, "Standard_B2s"),
        (0, 0, "Standard_B2s"),
    ])
    def test_band_selection(self, classifier, cores, memory_mb, expected_sku):
        assert classifier.classify(cores, memory_mb).sku == expected_sku

    def test_size_labels(self, classifier):
        assert classifier.classify(8, 32 * GB).size_label == "8 vCPUs, 32 GB RAM"
        assert classifier.classify(4, 16 * GB).size_label == "4 vCPUs, 16 GB RAM"
        assert classifier.classify(2, 8 * GB).size_label == "2 vCPUs, 8 GB RAM"
        assert classifier.classify(0, 0).size_label == "2 vCPUs, 4 GB RAM"

    @pytest.mark.parametrize("cores", range(0, 12))
    @pytest.mark.parametrize("memory_gb", [0, 4, 8, 15, 16, 31, 32, 48])
    def test_first_matching_band_wins(self, classifier, cores, memory_gb):
        """The chosen band is the highest-priority band whose thresholds are both met."""
        matching = [
            tier for tier in classifier.tiers
            if cores >= tier.min_cores and memory_gb >= tier.min_memory_gb
        ]
        expected = matching[0] if matching else classifier.default_tier
        assert classifier.classify(cores, memory_gb * GB) == expected


class TestVirtualMachineService:
    """Tests for the lift-and-shift VM recommendation."""

    def test_vm_uses_aggregate_footprint(self, classifier):
        aggregates = Aggregates(total_cores=12, total_memory_mb=40 * GB, total_disk_gb=750)
        service = classifier.virtual_machine_service(aggregates)

        assert service.service_type == "Virtual Machine"
        assert service.service_name == "Azure Virtual Machine"
        assert service.sku == "Standard_D8s_v5"
        assert service.size == "8 vCPUs, 32 GB RAM"
        assert service.recommended_cores == 12
        assert service.recommended_memory_gb == 40
        assert service.recommended_storage_gb == 750
        assert service.tier == "Standard"

    def test_services_leave_unpriced(self, classifier):
        aggregates = Aggregates(total_cores=2, total_memory_mb=8 * GB)
        assert classifier.virtual_machine_service(aggregates).estimated_monthly_cost == Decimal("0.00")


class TestManagedPlatformService:
    """Tests for the App Service recommendation."""

    def test_not_attached_without_marker(self, classifier):
        inventory = ApplicationInventory(languages="Java, Oracle")
        assert classifier.managed_platform_service(inventory, Aggregates()) is None

    def test_marker_matched_case_insensitively(self, classifier):
        assert classifier.uses_managed_runtime("c#, sql")
        assert classifier.uses_managed_runtime("ASP.NET (C#)")
        assert not classifier.uses_managed_runtime("")

    def test_sizing_floors(self, classifier):
        inventory = ApplicationInventory(languages="C#")
        aggregates = Aggregates(total_cores=2, total_memory_mb=4 * GB)
        service = classifier.managed_platform_service(inventory, aggregates)

        assert service is not None
        assert service.recommended_cores == 2
        assert service.recommended_memory_gb == 8

    def test_sizing_scales_with_footprint(self, classifier):
        inventory = ApplicationInventory(languages="C#, SQL Server")
        aggregates = Aggregates(total_cores=12, total_memory_mb=40 * GB)
        service = classifier.managed_platform_service(inventory, aggregates)

        assert service.recommended_cores == 6
        assert service.recommended_memory_gb == 40
        assert service.recommended_storage_gb == 250
        assert service.sku == "P2V3"
        assert service.size == "Premium P2V3"
        assert service.tier == "Premium"
        assert service.service_name == "Azure App Service"

    def test_odd_cores_round_down(self, classifier):
        inventory = ApplicationInventory(languages="C#")
        service = classifier.managed_platform_service(inventory, Aggregates(total_cores=9))
        assert service.recommended_cores == 4


class TestRecommendServices:
    """Tests for service attachment order."""

    def test_managed_platform_listed_first(self, classifier):
        inventory = ApplicationInventory(languages="C#")
        services = classifier.recommend_services(inventory, Aggregates(total_cores=4, total_memory_mb=16 * GB))

        assert [s.service_type for s in services] == ["App Service", "Virtual Machine"]

    def test_vm_only(self, classifier):
        inventory = ApplicationInventory(languages="COBOL")
        services = classifier.recommend_services(inventory, Aggregates())

        assert len(services) == 1
        assert services[0].sku == "Standard_B2s"
