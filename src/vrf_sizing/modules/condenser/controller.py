"""
Condenser Controller - Orchestration layer

Runs the selection engine and layers the business-rule advisories on its result.

Author: VRF Sizing Project
Date: 2026-10-17
"""

from dataclasses import replace
from typing import Optional, Sequence

from vrf_sizing.core.catalog import Brand, Catalog, Orientation
from vrf_sizing.modules.condenser.model import CondenserSelectionModel, SelectionResult
from vrf_sizing.modules.condenser.rules import SizingRules


class CondenserController:
    """
    Controller for condensing unit selection.

    Attributes:
        model: Selection engine
        rules: Business rules producing advisories
    """

    def __init__(self, rules: Optional[SizingRules] = None):
        self.model = CondenserSelectionModel()
        self.rules = rules if rules is not None else SizingRules()

    def solve(
        self,
        total_demand: float,
        diversity_factor: float,
        brand: Brand,
        orientation: Orientation,
        catalog: Catalog,
        selected_percent: Optional[int] = None,
        maximum_capacity: bool = False,
        capped: bool = False,
        extra_advisories: Sequence[str] = (),
    ) -> Optional[SelectionResult]:
        """
        Select a condensing unit and annotate the result.

        Args:
            total_demand: Aggregated indoor unit capacity
            diversity_factor: Multiplier applied for this brand
            brand: Catalog brand
            orientation: Unit orientation
            catalog: Catalog to search
            selected_percent: Diversity percentage chosen by the user
            maximum_capacity: Largest-unit mode
            capped: The brand ceiling reduced the selected factor
            extra_advisories: Advisories from upstream (data, catalog fallbacks)

        Returns:
            SelectionResult with advisories and flags, or None without demand
        """
        result = self.model.select(
            total_demand=total_demand,
            diversity_factor=diversity_factor,
            brand=brand,
            orientation=orientation,
            catalog=catalog,
            maximum_capacity=maximum_capacity,
            selected_percent=selected_percent,
        )
        if result is None:
            return None

        advisories = []
        if not maximum_capacity:
            advisories = self.rules.configuration_advisories(
                result.selected_percent, orientation, brand,
                result.effective_percent if capped else None,
            )
        for advisory in extra_advisories:
            if advisory not in advisories:
                advisories.append(advisory)

        flags = dict(result.flags)
        flags["invalid_configuration"] = (
            not maximum_capacity
            and self.rules.is_invalid_combination(result.selected_percent, orientation)
        )
        flags["factor_capped"] = capped

        return replace(result, advisories=tuple(advisories), flags=flags)
