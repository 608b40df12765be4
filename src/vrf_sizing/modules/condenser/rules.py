"""
Condenser Rules - Business-rule advisories layered on top of the selection

Rules never block a computation; they only annotate it.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from vrf_sizing.core.catalog import Brand, Orientation
from vrf_sizing.modules.diversity.model import DEFAULT_BRAND_CEILINGS

INVALID_COMBINATION = (
    "Invalid combination: the {percent}% residential limit is only allowed for "
    "{orientation} condensing units."
)
FACTOR_CAPPED = (
    "{brand} allows at most {ceiling}% diversity; {brand} results use {ceiling}% "
    "instead of the selected {selected}%."
)
ESTIMATED_CAPACITY = (
    "{brand}: no catalog capacity for {items}; the default capacity {default:g} was used."
)


@dataclass(frozen=True)
class SizingRules:
    """
    Brand and orientation constraints on diversity factors.

    Attributes:
        brand_ceilings: Highest multiplier accepted per brand
        reserved_percent: Diversity tier restricted to one orientation
        reserved_orientation: Only orientation allowed for the reserved tier
    """
    brand_ceilings: Dict[Brand, float] = field(default_factory=lambda: dict(DEFAULT_BRAND_CEILINGS))
    reserved_percent: int = 145
    reserved_orientation: Orientation = Orientation.HORIZONTAL

    @classmethod
    def from_settings(cls, settings) -> "SizingRules":
        """
        Build rules from AppSettings (ceilings are given in percent there).
        """
        ceilings = settings.get("brand_factor_ceilings") or {}
        return cls(
            brand_ceilings={Brand.parse(name): float(value) / 100.0 for name, value in ceilings.items()},
            reserved_percent=int(settings.get("reserved_diversity_percent", 145)),
            reserved_orientation=Orientation.parse(settings.get("reserved_orientation", "horizontal")),
        )

    def is_invalid_combination(self, selected_percent: int, orientation: Orientation) -> bool:
        return selected_percent == self.reserved_percent and orientation is not self.reserved_orientation

    def configuration_advisories(
        self,
        selected_percent: int,
        orientation: Orientation,
        brand: Brand,
        capped_percent: Optional[int] = None,
    ) -> List[str]:
        """
        Advisories for a brand's computation.

        Args:
            selected_percent: Diversity percentage chosen by the user
            orientation: Unit orientation
            brand: Brand being computed
            capped_percent: Percentage actually applied when a brand ceiling
                reduced the selection; None when nothing was capped
        """
        advisories = []
        if self.is_invalid_combination(selected_percent, orientation):
            advisories.append(INVALID_COMBINATION.format(
                percent=self.reserved_percent,
                orientation=self.reserved_orientation.value,
            ))
        if capped_percent is not None:
            advisories.append(FACTOR_CAPPED.format(
                brand=brand.label,
                ceiling=capped_percent,
                selected=selected_percent,
            ))
        return advisories
