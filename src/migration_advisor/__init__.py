"""Azure Migration Advisor.

Deterministic sizing, cost and complexity recommendations for moving
on-premises applications to Azure.
"""

from .engine import MigrationAdvisor, validate_inventory
from .exceptions import InvalidInventoryError, MigrationAdvisorError, NarrativeGenerationError
from .schema import ApplicationInventory, MigrationRecommendation, ServerRecord

__version__ = "1.0.0"

__all__ = [
    "ApplicationInventory",
    "InvalidInventoryError",
    "MigrationAdvisor",
    "MigrationAdvisorError",
    "MigrationRecommendation",
    "NarrativeGenerationError",
    "ServerRecord",
    "validate_inventory",
]
