"""Region Resolver - picks the target Azure region from the primary server's city."""

import logging

from .config import AdvisorConfig
from .schema import ApplicationInventory

logger = logging.getLogger(__name__)


class RegionResolver:
    """Resolves a target region from the first server's city.

    Only the first server is consulted; multi-site inventories land in the
    region of whichever server is listed first.
    """

    def __init__(self, config: AdvisorConfig):
        self.city_regions = config.regions.city_regions
        self.default_region = config.regions.default_region

    def resolve(self, inventory: ApplicationInventory) -> str:
        if not inventory.servers:
            return self.default_region

        city = inventory.servers[0].city.strip().lower()
        region = self.city_regions.get(city)
        if region is None:
            logger.debug("No region mapping for city %r; using %s", city, self.default_region)
            return self.default_region
        return region
