"""
Condenser Model - Condensing unit selection engine

Applies the diversity factor to the total demand and searches a brand /
orientation catalog table for the smallest unit that covers it, together with
its neighbours.

Author: VRF Sizing Project
Date: 2026-10-17
"""

from dataclasses import dataclass, field
import math
from typing import Dict, Optional, Tuple

import numpy as np

from vrf_sizing.core.catalog import Brand, Catalog, CondenserEntry, Orientation


@dataclass(frozen=True)
class CondenserMatch:
    """
    A catalog unit proposed by the engine.

    Attributes:
        entry: Catalog entry
        diversity_percent: Diversity percentage used for the computation
        meets_requirement: real capacity >= required minimum capacity
    """
    entry: CondenserEntry
    diversity_percent: int
    meets_requirement: bool

    @property
    def real_capacity(self) -> float:
        return self.entry.real_capacity

    @property
    def model(self) -> str:
        return self.entry.model


@dataclass(frozen=True)
class SelectionResult:
    """
    Result of a condensing unit selection for one brand.

    Attributes:
        brand: Catalog brand searched
        orientation: Orientation searched
        total_demand: Aggregated indoor unit capacity
        diversity_factor: Multiplier applied (after brand ceilings)
        required_minimum_capacity: total_demand x diversity_factor
        ideal_match: Smallest unit covering the requirement, None when none does
        one_below: Predecessor of the ideal match (undersized alternative);
            the largest unit when no ideal match exists
        one_above: Successor of the ideal match
        selected_percent: Diversity percentage selected by the user
        is_maximum_capacity: Largest-unit mode, no diversity applied
        advisories: Non-fatal business-rule warnings
        flags: Diagnostic flags dictionary
    """
    brand: Brand
    orientation: Orientation
    total_demand: float
    diversity_factor: float
    required_minimum_capacity: float
    ideal_match: Optional[CondenserMatch]
    one_below: Optional[CondenserMatch]
    one_above: Optional[CondenserMatch]
    selected_percent: int
    is_maximum_capacity: bool = False
    advisories: Tuple[str, ...] = ()
    flags: Dict[str, bool] = field(default_factory=dict)

    @property
    def effective_percent(self) -> int:
        return round(self.diversity_factor * 100)

    @property
    def capacity_unit(self) -> str:
        return self.brand.capacity_unit

    @property
    def has_match(self) -> bool:
        return self.ideal_match is not None


class CondenserSelectionModel:
    """
    Stateless condensing unit selection.

    Brand-agnostic: capacities and demand must already share a unit.
    """

    def select(
        self,
        total_demand: float,
        diversity_factor: float,
        brand: Brand,
        orientation: Orientation,
        catalog: Catalog,
        maximum_capacity: bool = False,
        selected_percent: Optional[int] = None,
    ) -> Optional[SelectionResult]:
        """
        Select a condensing unit.

        Args:
            total_demand: Aggregated indoor unit capacity
            diversity_factor: Multiplier (1.10 for 110%)
            brand: Catalog brand
            orientation: Unit orientation
            catalog: Catalog to search
            maximum_capacity: Ignore the requirement and propose the largest unit
            selected_percent: User-selected percentage, for display (defaults to
                the applied one)

        Returns:
            SelectionResult, or None when there is no demand

        Raises:
            ValueError: If demand or factor is not a finite number
        """
        if not math.isfinite(total_demand) or not math.isfinite(diversity_factor):
            raise ValueError(
                f"Selection inputs must be finite: demand={total_demand}, factor={diversity_factor}"
            )
        if total_demand <= 0:
            return None

        factor = 1.0 if maximum_capacity else diversity_factor
        required = round(total_demand * factor, 6)
        percent = round(factor * 100)

        table = catalog.condensers(brand, orientation)
        capacities = np.array([entry.real_capacity for entry in table], dtype=float)
        n = len(table)

        ideal_index: Optional[int] = None
        if n and maximum_capacity:
            ideal_index = int(np.searchsorted(capacities, capacities[-1], side="left"))
        elif n:
            index = int(np.searchsorted(capacities, required, side="left"))
            ideal_index = index if index < n else None

        if ideal_index is not None:
            below_index = ideal_index - 1
            above = int(np.searchsorted(capacities, capacities[ideal_index], side="right"))
            above_index = above if above < n else None
        else:
            below_index = n - 1
            above_index = None

        def match(index: Optional[int]) -> Optional[CondenserMatch]:
            if index is None or index < 0:
                return None
            entry = table[index]
            return CondenserMatch(entry, percent, entry.real_capacity >= required)

        return SelectionResult(
            brand=brand,
            orientation=orientation,
            total_demand=total_demand,
            diversity_factor=factor,
            required_minimum_capacity=required,
            ideal_match=match(ideal_index),
            one_below=match(below_index),
            one_above=match(above_index),
            selected_percent=percent if selected_percent is None else selected_percent,
            is_maximum_capacity=maximum_capacity,
            flags={
                "no_match_found": ideal_index is None,
                "empty_catalog": n == 0,
            },
        )
