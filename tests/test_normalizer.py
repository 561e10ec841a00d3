"""Tests for the Inventory Normalizer.

This test suite validates that the normalizer:
1. Parses free-text counts, degrading malformed values to zero
2. Maps the appdata.json export onto the typed inventory
3. Records a warning for every field it could not parse
4. Sums server resources exactly, regardless of server order
"""

import pytest

from migration_advisor.normalizer import InventoryNormalizer
from migration_advisor.schema import (
    ApplicationInventory,
    RawApplicationData,
    ServerRecord,
    parse_count,
)


@pytest.fixture
def normalizer() -> InventoryNormalizer:
    return InventoryNormalizer()


@pytest.fixture
def raw_payload() -> dict:
    """A small appdata.json payload with one malformed server field."""
    return {
        "application_ID": "APP-7",
        "application_Name": "Payroll",
        "application_Acronym": "PAY",
        "criticality": "Critical",
        "languages": "C#, .NET,, SQL Server",
        "in_Use_Server_Associations": "5",
        "in_Use_Prod_Servers": "3",
        "in_Use_Non_Prod_Servers": "two",
        "application_Hosting_Model": "Virtualized",
        "mALServers": [
            {
                "server_Name": "PAYAPP01",
                "environment_Association": "Production",
                "operating_System": "Windows Server 2016",
                "cpUs_Cores": "eight",
                "memory_Size_MB": "16384",
                "disk_Size_GB": "",
                "city": "Denver",
                "state": "CO",
            },
            {
                "server_Name": "PAYDB01",
                "environment_Association": "Production",
                "cpUs_Cores": 4,
                "memory_Size_MB": "8192",
                "disk_Size_GB": "200",
            },
        ],
    }


class TestParseCount:
    """Tests for free-text count parsing."""

    @pytest.mark.parametrize("value,expected", [
        ("8", 8),
        (" 16 ", 16),
        ("+4", 4),
        ("0", 0),
        (7, 7),
        (7.0, 7),
    ])
    def test_parses_whole_numbers(self, value, expected):
        assert parse_count(value) == expected

    @pytest.mark.parametrize("value", ["eight", "12.5", "-4", "", "   ", None, True, -3, 2.5, "1_000"])
    def test_rejects_everything_else(self, value):
        assert parse_count(value) is None

    def test_oversized_digit_string_rejected(self):
        assert parse_count("9" * 5000) is None

    def test_oversized_server_field_degrades_to_zero(self, normalizer):
        raw = RawApplicationData.model_validate({"mALServers": [{"server_Name": "big", "cpUs_Cores": "9" * 5000}]})
        inventory = normalizer.normalize(raw)

        assert inventory.servers[0].cores == 0
        assert any("could not parse cores" in w for w in inventory.parse_warnings)


class TestServerRecord:
    """Tests for the typed server record."""

    def test_malformed_counts_become_zero(self):
        server = ServerRecord(server_name="web01", cores="abc", memory_mb="", disk_gb=None)
        assert server.cores == 0
        assert server.memory_mb == 0
        assert server.disk_gb == 0

    def test_text_counts_are_parsed(self):
        server = ServerRecord(cores="4", memory_mb="2048", disk_gb=" 100 ")
        assert (server.cores, server.memory_mb, server.disk_gb) == (4, 2048, 100)

    def test_location(self):
        server = ServerRecord(city="Denver", state="CO")
        assert server.location == "Denver, CO"


class TestNormalize:
    """Tests for mapping raw exports onto the inventory."""

    def test_maps_aliased_fields(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))

        assert inventory.application_id == "APP-7"
        assert inventory.application_name == "Payroll"
        assert inventory.application_acronym == "PAY"
        assert inventory.criticality == "Critical"
        assert inventory.hosting_model == "Virtualized"
        assert len(inventory.servers) == 2
        assert inventory.servers[0].city == "Denver"
        assert inventory.servers[0].memory_mb == 16384

    def test_malformed_core_count_degrades_to_zero(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))
        assert inventory.servers[0].cores == 0

    def test_numeric_json_values_are_accepted(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))
        assert inventory.servers[1].cores == 4

    def test_declared_counts_are_trusted(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))
        assert inventory.total_servers == 5
        assert inventory.production_servers == 3
        assert inventory.non_production_servers == 0

    def test_warnings_recorded_for_unparseable_fields(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))

        assert len(inventory.parse_warnings) == 2
        assert any("PAYAPP01" in w and "cores value 'eight'" in w for w in inventory.parse_warnings)
        assert any("non-production server count value 'two'" in w for w in inventory.parse_warnings)

    def test_blank_fields_are_not_warnings(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))
        assert not any("disk" in w for w in inventory.parse_warnings)

    def test_missing_servers_list(self, normalizer):
        raw = RawApplicationData.model_validate({"application_Name": "Empty", "mALServers": None})
        inventory = normalizer.normalize(raw)
        assert inventory.servers == ()

    def test_technologies_split(self, normalizer, raw_payload):
        inventory = normalizer.normalize(RawApplicationData.model_validate(raw_payload))
        assert inventory.technologies == ["C#", ".NET", "SQL Server"]


class TestAggregate:
    """Tests for resource aggregation."""

    def test_exact_sums(self, normalizer):
        inventory = ApplicationInventory(servers=(
            ServerRecord(cores=8, memory_mb=32768, disk_gb=500),
            ServerRecord(cores=4, memory_mb=8192, disk_gb=250),
            ServerRecord(cores=2, memory_mb=4096, disk_gb=0),
        ))
        aggregates = normalizer.aggregate(inventory)

        assert aggregates.total_cores == 14
        assert aggregates.total_memory_mb == 45056
        assert aggregates.total_disk_gb == 750
        assert aggregates.total_memory_gb == 44

    def test_order_does_not_matter(self, normalizer):
        servers = (
            ServerRecord(cores=3, memory_mb=1500, disk_gb=10),
            ServerRecord(cores=5, memory_mb=700, disk_gb=20),
            ServerRecord(cores=1, memory_mb=300, disk_gb=30),
        )
        forward = normalizer.aggregate(ApplicationInventory(servers=servers))
        backward = normalizer.aggregate(ApplicationInventory(servers=tuple(reversed(servers))))
        assert forward == backward

    def test_memory_gb_uses_integer_division_of_total(self, normalizer):
        inventory = ApplicationInventory(servers=(
            ServerRecord(memory_mb=1536),
            ServerRecord(memory_mb=1536),
        ))
        assert normalizer.aggregate(inventory).total_memory_gb == 3

    def test_no_servers(self, normalizer):
        aggregates = normalizer.aggregate(ApplicationInventory())
        assert (aggregates.total_cores, aggregates.total_memory_mb, aggregates.total_disk_gb) == (0, 0, 0)

    def test_malformed_server_contributes_zero(self, normalizer):
        inventory = ApplicationInventory(servers=(
            ServerRecord(cores="n/a", memory_mb="4096"),
            ServerRecord(cores="4", memory_mb="4096"),
        ))
        aggregates = normalizer.aggregate(inventory)
        assert aggregates.total_cores == 4
        assert aggregates.total_memory_mb == 8192
