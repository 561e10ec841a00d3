"""Inventory Normalizer.

Converts the raw inventory export into a typed ApplicationInventory and sums
the per-server resources into Aggregates. Handles the messy reality of
hand-maintained server lists: counts typed as words, decimals, blanks.
"""

import logging

from .schema import (
    Aggregates,
    ApplicationInventory,
    RawApplicationData,
    RawServerData,
    ServerRecord,
    parse_count,
)

logger = logging.getLogger(__name__)


class InventoryNormalizer:
    """Normalizes raw inventory exports and aggregates server resources."""

    SERVER_COUNT_FIELDS = {
        "cores": "cores",
        "memory_mb": "memory",
        "disk_gb": "disk",
    }

    APPLICATION_COUNT_FIELDS = {
        "total_servers": "total server count",
        "production_servers": "production server count",
        "non_production_servers": "non-production server count",
    }

    def normalize(self, raw: RawApplicationData) -> ApplicationInventory:
        """Normalize a raw application export into an ApplicationInventory."""
        warnings: list[str] = []

        counts = {
            field: self._parse_field(getattr(raw, field), label, raw.application_name or "application", warnings)
            for field, label in self.APPLICATION_COUNT_FIELDS.items()
        }
        servers = tuple(self._normalize_server(server, warnings) for server in raw.servers)

        return ApplicationInventory(
            application_id=raw.application_id,
            application_name=raw.application_name,
            application_acronym=raw.application_acronym,
            criticality=raw.criticality,
            hosting_model=raw.hosting_model,
            languages=raw.languages,
            servers=servers,
            host_platform=raw.host_platform,
            region=raw.region,
            description=raw.description,
            business_impact=raw.business_impact,
            parse_warnings=tuple(warnings),
            **counts,
        )

    def aggregate(self, inventory: ApplicationInventory) -> Aggregates:
        """Sum cores, memory and disk across every server."""
        return Aggregates(
            total_cores=sum(server.cores for server in inventory.servers),
            total_memory_mb=sum(server.memory_mb for server in inventory.servers),
            total_disk_gb=sum(server.disk_gb for server in inventory.servers),
        )

    def _normalize_server(self, raw: RawServerData, warnings: list[str]) -> ServerRecord:
        owner = f"Server {raw.server_name}" if raw.server_name else "Unnamed server"
        counts = {
            field: self._parse_field(getattr(raw, field), label, owner, warnings)
            for field, label in self.SERVER_COUNT_FIELDS.items()
        }
        return ServerRecord(
            server_name=raw.server_name,
            environment=raw.environment,
            operating_system=raw.operating_system,
            city=raw.city,
            state=raw.state,
            **counts,
        )

    def _parse_field(self, value: str, label: str, owner: str, warnings: list[str]) -> int:
        """Parse one count, substituting 0 and recording a warning on failure.

        Blank values are treated as missing, not malformed.
        """
        parsed = parse_count(value)
        if parsed is not None:
            return parsed
        if value.strip():
            message = f"{owner}: could not parse {label} value '{value}'; using 0"
            logger.warning(message)
            warnings.append(message)
        return 0
