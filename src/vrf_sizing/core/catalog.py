"""
Catalog - Read-only reference data for VRF sizing

Holds the evaporator nominal -> real capacity tables per brand and type, and the
condensing unit tables per brand and orientation.

Author: VRF Sizing Project
Date: 2026-10-17
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Iterable, List, Optional, Tuple

logger = logging.getLogger(__name__)

# Substituted when a (brand, type, nominal) combination is missing from the catalog
DEFAULT_REAL_CAPACITY = 7507.0


class _LookupEnum(str, Enum):
    """String enum parsed case-insensitively from user or data input."""

    @classmethod
    def parse(cls, value):
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        for member in cls:
            if member.value == key or member.name.lower() == key.replace("-", "_"):
                return member
        raise ValueError(f"Unknown {cls.__name__}: {value!r}")


class Brand(_LookupEnum):
    """Condensing unit manufacturers with a VRF catalog."""

    SAMSUNG = "samsung"
    DAIKIN = "daikin"

    @property
    def label(self) -> str:
        return self.value.capitalize()

    @property
    def capacity_unit(self) -> str:
        """Unit in which this brand's catalog rates real capacity."""
        return "BTU/h" if self is Brand.SAMSUNG else "Daikin index"


class Orientation(_LookupEnum):
    """Installation posture of a condensing unit."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @property
    def label(self) -> str:
        return self.value.capitalize()


class EvaporatorType(_LookupEnum):
    """Indoor unit types."""

    HI_WALL = "hi-wall"
    CASSETTE_1_WAY = "cassette-1-way"
    CASSETTE_4_WAY = "cassette-4-way"
    DUCTED = "ducted"
    FLOOR_CEILING = "floor-ceiling"

    @property
    def label(self) -> str:
        return _EVAPORATOR_LABELS[self]


_EVAPORATOR_LABELS = {
    EvaporatorType.HI_WALL: "Hi Wall",
    EvaporatorType.CASSETTE_1_WAY: "Cassette 1 Way",
    EvaporatorType.CASSETTE_4_WAY: "Cassette 4 Way",
    EvaporatorType.DUCTED: "Ducted",
    EvaporatorType.FLOOR_CEILING: "Floor Ceiling",
}


class ProductFamily(_LookupEnum):
    """Product families with independent diversity factor tables."""

    MULTI_SPLIT = "multi-split"
    VRF = "vrf"


@dataclass(frozen=True)
class CondenserEntry:
    """
    One condensing unit of a brand catalog.

    Attributes:
        brand: Manufacturer
        orientation: Vertical or horizontal unit
        capacity_rating: Catalog rating [HP]
        real_capacity: Deliverable capacity in the brand's capacity unit
        model: Model identifier
        voltage: Supply voltage, when the catalog lists one
    """
    brand: Brand
    orientation: Orientation
    capacity_rating: int
    real_capacity: float
    model: str
    voltage: Optional[str] = None

    @property
    def display_name(self) -> str:
        if self.voltage:
            return f"{self.model} ({self.voltage}V)"
        return self.model


@dataclass(frozen=True)
class DiversityFactor:
    """
    One row of a diversity (simultaneity) factor table.

    Tables store either fractions (1.10) or percentages (110); values above 10
    are read as percentages.
    """
    name: str
    value: float

    @property
    def multiplier(self) -> float:
        return self.value / 100.0 if self.value > 10 else self.value

    @property
    def percent(self) -> int:
        return round(self.value) if self.value > 10 else round(self.value * 100)


EvaporatorKey = Tuple[Brand, EvaporatorType]
CondenserKey = Tuple[Brand, Orientation]


class Catalog:
    """
    Immutable in-memory catalog.

    Evaporator tables are keyed by (brand, type) and map a nominal rating to a
    real capacity. Condenser tables are keyed by (brand, orientation) and kept
    sorted by ascending real capacity.
    """

    def __init__(
        self,
        evaporators: Dict[EvaporatorKey, Dict[int, float]],
        condensers: Iterable[CondenserEntry],
        default_capacities: Optional[Dict[Brand, float]] = None,
    ):
        self._evaporators = {
            key: dict(sorted(table.items())) for key, table in evaporators.items()
        }

        grouped: Dict[CondenserKey, List[CondenserEntry]] = {}
        for entry in condensers:
            grouped.setdefault((entry.brand, entry.orientation), []).append(entry)
        self._condensers = {
            key: tuple(sorted(entries, key=lambda e: (e.real_capacity, e.capacity_rating)))
            for key, entries in grouped.items()
        }
        self._default_capacities = dict(default_capacities or {})

    # ========== Evaporators ==========

    def is_cataloged(self, brand: Brand, evaporator_type: EvaporatorType, nominal: int) -> bool:
        """True if the catalog has a real capacity for this combination."""
        return nominal in self._evaporators.get((brand, evaporator_type), {})

    def default_capacity(self, brand: Brand) -> float:
        return self._default_capacities.get(brand, DEFAULT_REAL_CAPACITY)

    def lookup(self, brand: Brand, evaporator_type: EvaporatorType, nominal: int) -> float:
        """
        Look up the real capacity of an evaporator.

        Args:
            brand: Catalog brand
            evaporator_type: Indoor unit type
            nominal: Nominal rating

        Returns:
            Real capacity, or the brand's default capacity when the combination
            is missing from the catalog
        """
        table = self._evaporators.get((brand, evaporator_type), {})
        if nominal in table:
            return table[nominal]

        fallback = self.default_capacity(brand)
        logger.warning(
            f"No catalog entry for {brand.label} {evaporator_type.label} nominal {nominal}; "
            f"substituting default capacity {fallback}"
        )
        return fallback

    def nominal_options(self, brand: Brand, evaporator_type: EvaporatorType) -> List[int]:
        """Nominal ratings available for a brand and type, ascending."""
        return list(self._evaporators.get((brand, evaporator_type), {}))

    def evaporator_table(self, brand: Brand, evaporator_type: EvaporatorType) -> Dict[int, float]:
        return dict(self._evaporators.get((brand, evaporator_type), {}))

    # ========== Condensers ==========

    def condensers(self, brand: Brand, orientation: Orientation) -> Tuple[CondenserEntry, ...]:
        """Condensing units for a brand and orientation, ascending by real capacity."""
        return self._condensers.get((brand, orientation), ())

    def brands(self) -> List[Brand]:
        """Brands present in the catalog, in declaration order."""
        present = {brand for brand, _ in self._evaporators} | {brand for brand, _ in self._condensers}
        return [brand for brand in Brand if brand in present]

    # ========== Construction ==========

    @classmethod
    def from_dict(cls, data: dict) -> "Catalog":
        """
        Build a catalog from its JSON representation.

        Expected layout::

            {
              "default_capacity": {"samsung": 7507},
              "evaporators": {"samsung": {"hi-wall": {"7": 7034, ...}, ...}, ...},
              "condensers": [
                {"brand": "samsung", "orientation": "vertical", "hp": 8,
                 "real": 76400, "model": "AM080...", "voltage": "380"}, ...
              ]
            }

        Raises:
            ValueError: If a brand, type or orientation is unknown or a number is invalid
        """
        evaporators: Dict[EvaporatorKey, Dict[int, float]] = {}
        for brand_name, types in data.get("evaporators", {}).items():
            brand = Brand.parse(brand_name)
            for type_name, table in types.items():
                evaporator_type = EvaporatorType.parse(type_name)
                evaporators[(brand, evaporator_type)] = {
                    int(nominal): float(real) for nominal, real in table.items()
                }

        condensers = [
            CondenserEntry(
                brand=Brand.parse(row["brand"]),
                orientation=Orientation.parse(row["orientation"]),
                capacity_rating=int(row["hp"]),
                real_capacity=float(row["real"]),
                model=str(row.get("model") or ""),
                voltage=str(row["voltage"]) if row.get("voltage") else None,
            )
            for row in data.get("condensers", [])
        ]

        default_capacities = {
            Brand.parse(brand_name): float(value)
            for brand_name, value in data.get("default_capacity", {}).items()
        }

        return cls(evaporators, condensers, default_capacities)
