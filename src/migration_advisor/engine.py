"""Migration Advisor engine.

Ties the pipeline together:

    raw inventory -> InventoryNormalizer -> Aggregates
                  -> SizingClassifier / CostEstimator / ComplexityAssessor / RegionResolver
                  -> MigrationRecommendation

Analysis is pure: no I/O, no randomness, no clock. A single advisor can be
shared between threads.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import ValidationError

from .complexity import ComplexityAssessor
from .config import AdvisorConfig, get_config
from .cost_estimator import CostEstimator
from .exceptions import InvalidInventoryError
from .normalizer import InventoryNormalizer
from .region import RegionResolver
from .schema import (
    ApplicationInventory,
    CurrentStateArchitecture,
    MigrationRecommendation,
    RawApplicationData,
    TargetStateArchitecture,
)
from .sizing import SizingClassifier

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


class MigrationAdvisor:
    """Produces Azure migration recommendations for application inventories.

    The configuration is bound at construction; pass a custom AdvisorConfig
    to swap tier tables, costs or the region map for a deployment.
    """

    def __init__(self, config: Optional[AdvisorConfig] = None):
        self.config = config or get_config()
        self.normalizer = InventoryNormalizer()
        self.classifier = SizingClassifier(self.config)
        self.cost_estimator = CostEstimator(self.config, self.classifier)
        self.complexity_assessor = ComplexityAssessor(self.config)
        self.region_resolver = RegionResolver(self.config)

    def analyze(self, inventory: Optional[ApplicationInventory]) -> MigrationRecommendation:
        """Analyze an inventory and assemble a migration recommendation.

        Raises:
            InvalidInventoryError: If no inventory was given.
        """
        if inventory is None:
            raise InvalidInventoryError("An application inventory is required for analysis")

        aggregates = self.normalizer.aggregate(inventory)
        current_state = self._current_state(inventory)
        services = self.cost_estimator.price_services(
            self.classifier.recommend_services(inventory, aggregates), aggregates
        )
        region = self.region_resolver.resolve(inventory)

        recommendation = MigrationRecommendation(
            application_name=inventory.application_name,
            application_id=inventory.application_id,
            current_state=current_state,
            target_state=TargetStateArchitecture(
                recommended_services=services,
                region=region,
                security=self.complexity_assessor.security_recommendations(),
            ),
            key_recommendations=self.complexity_assessor.key_recommendations(region),
            complexity=self.complexity_assessor.assess(inventory, current_state),
            estimated_costs=self.cost_estimator.build_breakdown(services),
            risks_and_considerations=self.complexity_assessor.risks(),
            processing_warnings=inventory.parse_warnings,
        )

        logger.info(
            "Analyzed %s: %d services, %s complexity, $%s/month in %s",
            inventory.application_name or "<unnamed>",
            len(services),
            recommendation.complexity.overall_complexity,
            recommendation.estimated_costs.total_monthly_cost,
            region,
        )
        return recommendation

    def normalize(self, data: Any) -> ApplicationInventory:
        """Validate a decoded appdata payload and normalize it.

        Accepts a single application object or a list holding one.
        """
        if isinstance(data, list):
            if len(data) != 1:
                raise InvalidInventoryError(
                    f"Inventory file must describe exactly one application, found {len(data)}"
                )
            data = data[0]
        if not isinstance(data, dict):
            raise InvalidInventoryError("Inventory must be a JSON object")

        try:
            raw = RawApplicationData.model_validate(data)
        except ValidationError as e:
            raise InvalidInventoryError(f"Invalid inventory: {e}") from e
        return self.normalizer.normalize(raw)

    def load_inventory(self, path: PathLike) -> ApplicationInventory:
        """Load and normalize an appdata.json file."""
        path = Path(path)
        try:
            with open(path, "r", encoding="utf-8-sig") as f:
                # counts are parsed as text by the normalizer
                data = json.load(f, parse_int=str)
        except FileNotFoundError as e:
            raise InvalidInventoryError(f"Inventory file not found: {path}") from e
        except UnicodeDecodeError as e:
            raise InvalidInventoryError(f"Inventory file is not valid UTF-8: {e}") from e
        except json.JSONDecodeError as e:
            raise InvalidInventoryError(f"Inventory file is not valid JSON: {e}") from e
        except OSError as e:
            raise InvalidInventoryError(f"Inventory file could not be read: {e}") from e

        inventory = self.normalize(data)
        logger.info(
            "Loaded application %s (%s) with %d servers from %s",
            inventory.application_name, inventory.application_acronym, len(inventory.servers), path,
        )
        return inventory

    def analyze_file(self, path: PathLike) -> MigrationRecommendation:
        """Load an appdata.json file and analyze it."""
        return self.analyze(self.load_inventory(path))

    def _current_state(self, inventory: ApplicationInventory) -> CurrentStateArchitecture:
        return CurrentStateArchitecture(
            total_servers=inventory.total_servers,
            production_servers=inventory.production_servers,
            non_production_servers=inventory.non_production_servers,
            server_specifications=inventory.servers,
            hosting_model=inventory.hosting_model,
            technologies=tuple(inventory.technologies),
            business_criticality=inventory.criticality,
        )


def validate_inventory(path: PathLike) -> tuple[bool, list[str]]:
    """Check an inventory file.

    Returns (is_valid, issues). Fields that degrade to zero are reported as
    issues but do not make the file invalid.
    """
    try:
        inventory = MigrationAdvisor().load_inventory(path)
    except InvalidInventoryError as e:
        return False, [e.message]

    issues = list(inventory.parse_warnings)
    if not inventory.application_name:
        issues.append("Missing application name")
    if not inventory.servers:
        issues.append("No servers listed; sizing will use the smallest tier")
    return True, issues
