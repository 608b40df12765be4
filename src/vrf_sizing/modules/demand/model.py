"""
Demand Model - Indoor unit selection and cooling demand aggregation

Author: VRF Sizing Project
Date: 2026-10-17
"""

import logging
import math
from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Tuple

from vrf_sizing.core.catalog import Brand, Catalog, EvaporatorType

logger = logging.getLogger(__name__)

DEFAULT_NOMINAL = 7


@dataclass
class EvaporatorSelection:
    """
    One line of the indoor unit list.

    Attributes:
        evaporator_type: Indoor unit type
        nominal_capacity: Nominal rating
        real_capacity: Catalog real capacity for the active brand
        quantity: Number of identical units (>= 1)
        estimated: real_capacity is the catalog default, not a catalog entry
    """
    evaporator_type: EvaporatorType
    nominal_capacity: int
    real_capacity: float
    quantity: int = 1
    estimated: bool = False

    @property
    def total_capacity(self) -> float:
        return self.real_capacity * self.quantity


@dataclass
class DemandResult:
    """
    Aggregated demand of a selection list.

    Attributes:
        total_demand: Sum of real capacity x quantity
        unit_count: Number of indoor units
        estimated: (type, nominal) pairs priced with the default capacity
        flags: Diagnostic flags dictionary
    """
    total_demand: float
    unit_count: int
    estimated: List[Tuple[EvaporatorType, int]] = field(default_factory=list)
    flags: Dict[str, bool] = field(default_factory=dict)


def clamp_quantity(value) -> int:
    """
    Normalize a user-entered quantity.

    Non-integers are rounded down; anything below 1, non-numeric or
    non-finite becomes 1.
    """
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return 1
    if not math.isfinite(number):
        return 1
    return max(1, math.floor(number))


def parse_nominal(value, default: int = DEFAULT_NOMINAL) -> int:
    """Parse a nominal rating, falling back to default when missing or invalid."""
    try:
        number = float(value.strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return default
    if not math.isfinite(number) or number <= 0:
        return default
    return int(number)


def aggregate(selections: Iterable[EvaporatorSelection]) -> float:
    """
    Total cooling demand of a selection list.

    Returns:
        Sum of real_capacity x quantity (0.0 for an empty list)
    """
    return math.fsum(s.real_capacity * s.quantity for s in selections)


def price_selection(
    catalog: Catalog,
    brand: Brand,
    evaporator_type: EvaporatorType,
    nominal: int,
    quantity: int = 1,
) -> EvaporatorSelection:
    """Build a selection line priced in a brand's catalog."""
    return EvaporatorSelection(
        evaporator_type=evaporator_type,
        nominal_capacity=nominal,
        real_capacity=catalog.lookup(brand, evaporator_type, nominal),
        quantity=quantity,
        estimated=not catalog.is_cataloged(brand, evaporator_type, nominal),
    )


def reprice(selections: Iterable[EvaporatorSelection], catalog: Catalog, brand: Brand) -> List[EvaporatorSelection]:
    """
    Copies of the selections with real capacities looked up for another brand.

    Type, nominal rating and quantity are preserved.
    """
    return [
        price_selection(catalog, brand, s.evaporator_type, s.nominal_capacity, s.quantity)
        for s in selections
    ]


def summarize(selections: Iterable[EvaporatorSelection]) -> DemandResult:
    """Aggregate a selection list with its diagnostics."""
    selections = list(selections)
    estimated = [(s.evaporator_type, s.nominal_capacity) for s in selections if s.estimated]
    total = aggregate(selections)
    return DemandResult(
        total_demand=total,
        unit_count=sum(s.quantity for s in selections),
        estimated=estimated,
        flags={
            "empty_selection": not selections,
            "estimated_capacity": bool(estimated),
        },
    )


class SelectionList:
    """
    Ordered list of indoor unit selections.

    (type, nominal) pairs are unique: adding an existing pair increases its
    quantity instead of creating a new line.
    """

    def __init__(self):
        self._items: List[EvaporatorSelection] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[EvaporatorSelection]:
        return iter(self._items)

    def __getitem__(self, index: int) -> EvaporatorSelection:
        return self._items[index]

    def find(self, evaporator_type: EvaporatorType, nominal: int):
        for item in self._items:
            if item.evaporator_type is evaporator_type and item.nominal_capacity == nominal:
                return item
        return None

    def add(
        self,
        catalog: Catalog,
        brand: Brand,
        evaporator_type: EvaporatorType,
        nominal,
        quantity=1,
    ) -> EvaporatorSelection:
        """
        Add indoor units, merging with an existing line of the same type and rating.

        Args:
            catalog: Catalog used to price the line
            brand: Active brand
            evaporator_type: Indoor unit type
            nominal: Nominal rating (invalid values default to 7)
            quantity: Units to add (clamped to >= 1)

        Returns:
            The new or updated line
        """
        evaporator_type = EvaporatorType.parse(evaporator_type)
        nominal = parse_nominal(nominal)
        quantity = clamp_quantity(quantity)

        existing = self.find(evaporator_type, nominal)
        if existing is not None:
            existing.quantity += quantity
            return existing

        item = price_selection(catalog, brand, evaporator_type, nominal, quantity)
        self._items.append(item)
        return item

    def _check_index(self, index: int) -> int:
        if not 0 <= index < len(self._items):
            raise IndexError(f"Selection index {index} out of range (0..{len(self._items) - 1})")
        return index

    def set_quantity(self, index: int, value) -> int:
        """
        Edit the quantity of a line.

        Raises:
            IndexError: If index is out of range
        """
        item = self._items[self._check_index(index)]
        item.quantity = clamp_quantity(value)
        return item.quantity

    def remove(self, index: int) -> EvaporatorSelection:
        """
        Remove a line.

        Raises:
            IndexError: If index is out of range
        """
        return self._items.pop(self._check_index(index))

    def clear(self) -> None:
        self._items.clear()

    def reprice(self, catalog: Catalog, brand: Brand) -> None:
        """Refresh every line's real capacity for a brand, in place."""
        for item, priced in zip(self._items, reprice(self._items, catalog, brand)):
            item.real_capacity = priced.real_capacity
            item.estimated = priced.estimated

    def snapshot(self) -> Tuple[EvaporatorSelection, ...]:
        """Independent copies of the current lines."""
        return tuple(replace(item) for item in self._items)
