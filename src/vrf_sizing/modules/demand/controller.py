"""
Demand Controller - Orchestration layer

Owns the indoor unit list of a sizing session and recomputes the aggregated
demand after every change.

Author: VRF Sizing Project
Date: 2026-10-17
"""

from typing import Optional

from vrf_sizing.core.catalog import Brand, Catalog
from vrf_sizing.modules.demand.model import (
    DemandResult,
    EvaporatorSelection,
    SelectionList,
    summarize,
)


class DemandController:
    """
    Controller for indoor unit selection.

    Attributes:
        catalog: Catalog used to price indoor units
        brand: Active brand
        selections: Current indoor unit list
    """

    def __init__(self, catalog: Catalog, brand: Brand = Brand.SAMSUNG):
        self.catalog = catalog
        self.brand = Brand.parse(brand)
        self.selections = SelectionList()
        self.last_result: Optional[DemandResult] = None

    def add(self, evaporator_type, nominal, quantity=1) -> EvaporatorSelection:
        item = self.selections.add(self.catalog, self.brand, evaporator_type, nominal, quantity)
        self.solve()
        return item

    def set_quantity(self, index: int, value) -> int:
        quantity = self.selections.set_quantity(index, value)
        self.solve()
        return quantity

    def remove(self, index: int) -> EvaporatorSelection:
        item = self.selections.remove(index)
        self.solve()
        return item

    def clear(self) -> None:
        self.selections.clear()
        self.solve()

    def set_brand(self, brand) -> None:
        """Switch brand and re-price every line."""
        self.brand = Brand.parse(brand)
        self.selections.reprice(self.catalog, self.brand)
        self.solve()

    def set_catalog(self, catalog: Catalog) -> None:
        """Replace the catalog (after a data load) and re-price every line."""
        self.catalog = catalog
        self.selections.reprice(self.catalog, self.brand)
        self.solve()

    def solve(self) -> DemandResult:
        """
        Aggregate the current list.

        Returns:
            DemandResult with the total demand and diagnostics
        """
        self.last_result = summarize(self.selections)
        return self.last_result
