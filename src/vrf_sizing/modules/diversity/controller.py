"""
Diversity Controller - Orchestration layer

Couples the resolver with the factor tables served by the catalog service.

Author: VRF Sizing Project
Date: 2026-10-17
"""

from typing import Dict, Optional, Tuple

from vrf_sizing.core.catalog import Brand, DiversityFactor, ProductFamily
from vrf_sizing.core.catalog_service import CatalogService, get_catalog_service
from vrf_sizing.modules.diversity.model import DiversityFactorResolver, DiversityResolution


class DiversityController:
    """
    Controller for diversity factor selection.

    Attributes:
        service: Source of the factor tables
        resolver: Underlying resolver
        family: Product family whose table is used
    """

    def __init__(
        self,
        service: Optional[CatalogService] = None,
        family: ProductFamily = ProductFamily.VRF,
        ceilings: Optional[Dict[Brand, float]] = None,
    ):
        self.service = service if service is not None else get_catalog_service()
        self.family = family
        self.resolver = DiversityFactorResolver(ceilings)
        self.last_resolution: Optional[DiversityResolution] = None

    def options(self) -> Tuple[DiversityFactor, ...]:
        """Factors the user can choose from."""
        return self.service.factors(self.family)

    def default_factor(self) -> DiversityFactor:
        return self.resolver.default_factor(self.options(), self.family)

    def select(self, token) -> DiversityResolution:
        """
        Resolve a selection token against the current table.

        Args:
            token: Category, factor name, number or maximum capacity sentinel

        Returns:
            DiversityResolution
        """
        self.last_resolution = self.resolver.resolve_selection(token, self.options(), self.family)
        return self.last_resolution

    def effective_factors(self, resolution: Optional[DiversityResolution] = None) -> Dict[Brand, Tuple[float, bool]]:
        """
        Effective multiplier of every brand for a resolution.

        Returns:
            {brand: (multiplier, capped)}
        """
        resolution = resolution or self.last_resolution or self.select(None)
        return {brand: self.resolver.effective_factor(resolution, brand) for brand in Brand}
