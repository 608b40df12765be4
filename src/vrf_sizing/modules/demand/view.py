"""
Demand View - Console output for the indoor unit list

Author: VRF Sizing Project
Date: 2026-10-17
"""

from typing import Iterable

from vrf_sizing.core.catalog import Brand
from vrf_sizing.modules.demand.model import DemandResult, EvaporatorSelection


class DemandView:
    """Formats indoor unit lists. No computation here."""

    @staticmethod
    def display_selections(
        selections: Iterable[EvaporatorSelection],
        brand: Brand,
        grouped: bool = True,
    ) -> None:
        """
        Display the indoor unit list.

        Args:
            selections: Lines to display
            brand: Brand whose unit labels the real capacity
            grouped: One row per line with its quantity; otherwise one row per unit
        """
        selections = list(selections)
        if not selections:
            print("Add indoor units to compute a selection")
            return

        unit = brand.capacity_unit
        print(f"{'#':>3}  {'Type':<16}{'Nominal':>8}  {'Real (' + unit + ')':>20}{'Qty':>6}")
        row = 0
        for item in selections:
            marker = " *" if item.estimated else ""
            repeats = [item.quantity] if grouped else [1] * item.quantity
            for qty in repeats:
                row += 1
                print(
                    f"{row:>3}  {item.evaporator_type.label:<16}{item.nominal_capacity:>8}  "
                    f"{item.real_capacity:>20,.1f}{qty:>6}{marker}"
                )
        if any(item.estimated for item in selections):
            print("  * default capacity, not found in catalog")

    @staticmethod
    def display_summary(result: DemandResult, brand: Brand) -> None:
        print(f"Demand: {result.total_demand:,.1f} {brand.capacity_unit} "
              f"from {result.unit_count} indoor unit(s)")
