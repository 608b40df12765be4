"""
Unit tests for the Catalog model

Tests enum parsing, evaporator lookups with default fallback and condenser
table ordering.
"""

import pytest
from vrf_sizing.core.catalog import (
    DEFAULT_REAL_CAPACITY,
    Brand,
    Catalog,
    CondenserEntry,
    DiversityFactor,
    EvaporatorType,
    Orientation,
)
from vrf_sizing.core.catalog_service import builtin_catalog


@pytest.fixture
def catalog():
    """Fixture providing the packaged catalog."""
    return builtin_catalog()


@pytest.fixture
def small_catalog():
    """Fixture providing a small hand-built catalog with unsorted condensers."""
    return Catalog(
        evaporators={(Brand.SAMSUNG, EvaporatorType.HI_WALL): {9: 9041.0, 7: 7034.0}},
        condensers=[
            CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 10, 95500.0, "B"),
            CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 8, 76400.0, "A"),
        ],
    )


class TestEnums:
    """Test case-insensitive enum parsing."""

    def test_parse_values_and_names(self):
        assert Brand.parse("Samsung") is Brand.SAMSUNG
        assert Brand.parse(Brand.DAIKIN) is Brand.DAIKIN
        assert Orientation.parse(" VERTICAL ") is Orientation.VERTICAL
        assert EvaporatorType.parse("hi_wall") is EvaporatorType.HI_WALL
        assert EvaporatorType.parse("cassette-4-way") is EvaporatorType.CASSETTE_4_WAY

    def test_parse_unknown_raises(self):
        with pytest.raises(ValueError):
            Brand.parse("lg")

    def test_capacity_units(self):
        assert Brand.SAMSUNG.capacity_unit == "BTU/h"
        assert Brand.DAIKIN.capacity_unit == "Daikin index"


class TestDiversityFactor:
    """Test fraction / percentage normalization."""

    @pytest.mark.parametrize("value,multiplier,percent", [
        (1.1, 1.1, 110),
        (110, 1.1, 110),
        (1.4, 1.4, 140),
        (145, 1.45, 145),
    ])
    def test_normalization(self, value, multiplier, percent):
        factor = DiversityFactor("x", value)
        assert factor.multiplier == pytest.approx(multiplier)
        assert factor.percent == percent


class TestEvaporatorLookup:
    """Test evaporator real capacity lookups."""

    def test_known_entry(self, catalog):
        assert catalog.lookup(Brand.SAMSUNG, EvaporatorType.HI_WALL, 7) == 7034
        assert catalog.is_cataloged(Brand.SAMSUNG, EvaporatorType.HI_WALL, 7)

    def test_missing_entry_uses_brand_default(self, catalog):
        assert not catalog.is_cataloged(Brand.SAMSUNG, EvaporatorType.HI_WALL, 60)
        assert catalog.lookup(Brand.SAMSUNG, EvaporatorType.HI_WALL, 60) == 7507
        assert catalog.lookup(Brand.DAIKIN, EvaporatorType.HI_WALL, 60) == pytest.approx(22.4)

    def test_missing_entry_without_brand_default(self, small_catalog):
        value = small_catalog.lookup(Brand.DAIKIN, EvaporatorType.DUCTED, 7)
        assert value == DEFAULT_REAL_CAPACITY, "Catalogs without defaults fall back to 7507"

    def test_missing_entry_is_logged(self, catalog, caplog):
        with caplog.at_level("WARNING"):
            catalog.lookup(Brand.SAMSUNG, EvaporatorType.FLOOR_CEILING, 7)
        assert "Floor Ceiling nominal 7; substituting default capacity 7507" in caplog.text

    def test_nominal_options_sorted(self, small_catalog):
        assert small_catalog.nominal_options(Brand.SAMSUNG, EvaporatorType.HI_WALL) == [7, 9]
        assert small_catalog.nominal_options(Brand.DAIKIN, EvaporatorType.HI_WALL) == []


class TestCondenserTables:
    """Test condenser table ordering and structure."""

    def test_sorted_by_real_capacity(self, small_catalog):
        table = small_catalog.condensers(Brand.SAMSUNG, Orientation.VERTICAL)
        assert [e.model for e in table] == ["A", "B"]

    def test_packaged_tables_ascending(self, catalog):
        for brand in Brand:
            for orientation in Orientation:
                capacities = [e.real_capacity for e in catalog.condensers(brand, orientation)]
                assert capacities, f"{brand.value}/{orientation.value} should not be empty"
                assert capacities == sorted(capacities)

    def test_missing_table_is_empty(self, small_catalog):
        assert small_catalog.condensers(Brand.DAIKIN, Orientation.HORIZONTAL) == ()

    def test_brands(self, catalog, small_catalog):
        assert catalog.brands() == [Brand.SAMSUNG, Brand.DAIKIN]
        assert small_catalog.brands() == [Brand.SAMSUNG]

    def test_display_name(self):
        entry = CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 8, 76400.0, "AM080", "380")
        assert entry.display_name == "AM080 (380V)"
        assert CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 8, 1.0, "X").display_name == "X"


class TestFromDict:
    """Test catalog construction from JSON data."""

    def test_round_trip_fields(self):
        catalog = Catalog.from_dict({
            "default_capacity": {"daikin": 20},
            "evaporators": {"daikin": {"hi-wall": {"7": 20}}},
            "condensers": [
                {"brand": "daikin", "orientation": "vertical", "hp": 8, "real": 200,
                 "model": "RXYQ8", "voltage": 380},
            ],
        })
        entry = catalog.condensers(Brand.DAIKIN, Orientation.VERTICAL)[0]
        assert entry.capacity_rating == 8
        assert entry.voltage == "380"
        assert catalog.default_capacity(Brand.DAIKIN) == 20
        assert catalog.lookup(Brand.DAIKIN, EvaporatorType.HI_WALL, 7) == 20

    def test_unknown_brand_raises(self):
        with pytest.raises(ValueError):
            Catalog.from_dict({"evaporators": {"lg": {}}})
