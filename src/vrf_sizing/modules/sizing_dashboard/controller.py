"""
Sizing Controller

Owns the session configuration and re-runs the full sizing computation after
every change, notifying subscribed views.
"""

import logging
from typing import Callable, Dict, List, Optional

from vrf_sizing.core.catalog import Brand, Orientation, ProductFamily
from vrf_sizing.core.catalog_service import CatalogService, get_catalog_service
from vrf_sizing.core.settings import AppSettings, get_settings
from vrf_sizing.modules.condenser import SizingRules
from vrf_sizing.modules.demand import DemandController
from vrf_sizing.modules.diversity import DiversityController
from .model import SizingModel, SizingReport, SizingState

logger = logging.getLogger(__name__)

Observer = Callable[[Optional[SizingReport]], None]


class SizingController:
    """Controller for a sizing session."""

    def __init__(self, service: Optional[CatalogService] = None, settings: Optional[AppSettings] = None):
        """
        Args:
            service: Catalog and factor source (global service when None)
            settings: Application settings (global settings when None)
        """
        self.service = service if service is not None else get_catalog_service()
        self.settings = settings if settings is not None else get_settings()

        self.rules = SizingRules.from_settings(self.settings)
        self.family = ProductFamily.parse(self.settings.get("product_family", "vrf"))
        self.default_brand = Brand.parse(self.settings.get("default_brand", "samsung"))
        self.default_orientation = Orientation.parse(self.settings.get("default_orientation", "vertical"))

        self.model = SizingModel(self.rules)
        self.demand = DemandController(self.service.catalog, self.default_brand)
        self.diversity = DiversityController(self.service, self.family, self.rules.brand_ceilings)

        self.orientation = self.default_orientation
        self.diversity_token: Optional[str] = None
        self.last_report: Optional[SizingReport] = None

        self._observers: List[Observer] = []
        self._logged_warnings = set()

    # ========== Observers ==========

    def subscribe(self, observer: Observer) -> Callable[[], None]:
        """
        Register a callback receiving every new report (None when empty).

        Returns:
            Function removing the subscription
        """
        self._observers.append(observer)

        def unsubscribe():
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    # ========== State ==========

    @property
    def brand(self) -> Brand:
        return self.demand.brand

    @property
    def state(self) -> SizingState:
        return SizingState(
            selections=self.demand.selections.snapshot(),
            diversity_token=self.diversity_token,
            brand=self.brand,
            orientation=self.orientation,
            family=self.family,
        )

    def recompute(self) -> Optional[SizingReport]:
        """Run the full computation on the current state and notify observers."""
        for warning in self.service.warnings:
            if warning not in self._logged_warnings:
                logger.warning(warning)
                self._logged_warnings.add(warning)

        self.diversity.select(self.diversity_token)
        self.last_report = self.model.compute(
            self.state,
            self.service.catalog,
            factors=self.diversity.options(),
            data_warnings=self.service.warnings,
        )
        logger.debug(
            f"Recomputed: {len(self.demand.selections)} line(s), brand={self.brand.value}, "
            f"orientation={self.orientation.value}, diversity={self.diversity_token!r}"
        )

        for observer in list(self._observers):
            observer(self.last_report)
        return self.last_report

    # ========== Mutations ==========

    def add_evaporator(self, evaporator_type, nominal, quantity=1) -> Optional[SizingReport]:
        self.demand.add(evaporator_type, nominal, quantity)
        return self.recompute()

    def set_quantity(self, index: int, value) -> Optional[SizingReport]:
        self.demand.set_quantity(index, value)
        return self.recompute()

    def remove(self, index: int) -> Optional[SizingReport]:
        self.demand.remove(index)
        return self.recompute()

    def set_brand(self, brand) -> Optional[SizingReport]:
        self.demand.set_brand(brand)
        return self.recompute()

    def set_orientation(self, orientation) -> Optional[SizingReport]:
        self.orientation = Orientation.parse(orientation)
        return self.recompute()

    def set_diversity(self, token) -> Optional[SizingReport]:
        self.diversity_token = token
        return self.recompute()

    def clear(self) -> Optional[SizingReport]:
        """Empty the indoor unit list and restore default orientation and diversity."""
        self.demand.clear()
        self.orientation = self.default_orientation
        self.diversity_token = None
        return self.recompute()

    def on_data_loaded(self, warnings: Optional[List[str]] = None) -> Optional[SizingReport]:
        """Re-price the list against the freshly loaded catalog and recompute."""
        self.demand.set_catalog(self.service.catalog)
        return self.recompute()

    def get_default_params(self) -> Dict:
        """Get default parameter set for UI initialization."""
        return {
            "brand": self.default_brand.value,
            "orientation": self.default_orientation.value,
            "diversity": self.diversity.default_factor().name,
            "evaporator_type": "hi-wall",
            "nominal": 7,
            "quantity": 1,
        }
