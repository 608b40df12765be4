"""
Unit tests for Condenser module

Tests the selection engine (ideal match and neighbours), business-rule
advisories and diagnostic flags.
"""

import math

import pytest
from vrf_sizing.core.catalog import Brand, Catalog, CondenserEntry, Orientation
from vrf_sizing.core.catalog_service import builtin_catalog
from vrf_sizing.core.settings import AppSettings
from vrf_sizing.modules.condenser import (
    CondenserController,
    CondenserSelectionModel,
    CondenserView,
    SizingRules,
)


@pytest.fixture
def catalog():
    """Fixture providing the packaged catalog."""
    return builtin_catalog()


@pytest.fixture
def model():
    """Fixture providing a CondenserSelectionModel instance."""
    return CondenserSelectionModel()


@pytest.fixture
def controller():
    """Fixture providing a CondenserController with default rules."""
    return CondenserController()


def vertical_capacities(catalog, brand=Brand.SAMSUNG):
    return [e.real_capacity for e in catalog.condensers(brand, Orientation.VERTICAL)]


class TestSelectionNominal:
    """Test nominal selections."""

    def test_hi_wall_pair_corporate(self, model, catalog):
        """
        Two 7k hi-wall units (7034 each) at 110%.

        Required capacity is 15474.8; the smallest vertical unit covers it.
        """
        result = model.select(14068, 1.10, Brand.SAMSUNG, Orientation.VERTICAL, catalog)

        assert result.total_demand == 14068
        assert result.required_minimum_capacity == pytest.approx(15474.8)
        assert result.ideal_match.real_capacity == 76400
        assert result.ideal_match.meets_requirement
        assert result.one_below is None, "Smallest unit has no predecessor"
        assert result.one_above.real_capacity == 95500
        assert not result.flags["no_match_found"]

    def test_neighbours_in_middle_of_table(self, model, catalog):
        result = model.select(100000, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)

        assert result.ideal_match.real_capacity == 114600
        assert result.one_below.real_capacity == 95500
        assert not result.one_below.meets_requirement
        assert result.one_above.real_capacity == 136500

    def test_exact_capacity_is_enough(self, model, catalog):
        result = model.select(95500, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)
        assert result.ideal_match.real_capacity == 95500

    def test_orientation_selects_table(self, model, catalog):
        result = model.select(14068, 1.10, Brand.SAMSUNG, Orientation.HORIZONTAL, catalog)
        assert result.ideal_match.model == "AM040BXMDGH"

    def test_diversity_percent_recorded(self, model, catalog):
        result = model.select(14068, 1.45, Brand.SAMSUNG, Orientation.VERTICAL, catalog)
        assert result.ideal_match.diversity_percent == 145
        assert result.effective_percent == 145
        assert result.selected_percent == 145


class TestSelectionEdgeCases:
    """Test out-of-range demand, empty tables and invalid input."""

    def test_demand_exceeds_largest_unit(self, model, catalog):
        result = model.select(300000, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)

        assert result.ideal_match is None
        assert result.one_below.real_capacity == 284600, "Largest unit is the closest alternative"
        assert result.one_above is None
        assert result.flags["no_match_found"]
        assert not result.has_match

    def test_zero_demand_is_no_result(self, model, catalog):
        assert model.select(0, 1.1, Brand.SAMSUNG, Orientation.VERTICAL, catalog) is None

    def test_non_finite_input_raises(self, model, catalog):
        with pytest.raises(ValueError):
            model.select(math.nan, 1.1, Brand.SAMSUNG, Orientation.VERTICAL, catalog)
        with pytest.raises(ValueError):
            model.select(1000, math.inf, Brand.SAMSUNG, Orientation.VERTICAL, catalog)

    def test_empty_catalog(self, model):
        result = model.select(1000, 1.1, Brand.SAMSUNG, Orientation.VERTICAL, Catalog({}, []))

        assert result.ideal_match is None
        assert result.one_below is None
        assert result.one_above is None
        assert result.flags["empty_catalog"]

    def test_tied_capacities_keep_strict_neighbours(self, model):
        catalog = Catalog({}, [
            CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 4, 100.0, "A"),
            CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 5, 100.0, "B"),
            CondenserEntry(Brand.SAMSUNG, Orientation.VERTICAL, 6, 200.0, "C"),
        ])
        result = model.select(100, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)

        assert result.ideal_match.model == "A"
        assert result.one_below is None
        assert result.one_above.model == "C", "Successor must be strictly larger"


class TestMaximumCapacity:
    """Test largest-unit mode."""

    def test_largest_unit_selected(self, model, catalog):
        result = model.select(14068, 1.45, Brand.SAMSUNG, Orientation.VERTICAL, catalog,
                              maximum_capacity=True)

        assert result.is_maximum_capacity
        assert result.diversity_factor == 1.0
        assert result.required_minimum_capacity == 14068
        assert result.ideal_match.real_capacity == 284600
        assert result.one_below.real_capacity == 266100
        assert result.one_above is None


class TestSelectionProperties:
    """Test properties that hold for every demand."""

    @pytest.mark.parametrize("demand", [1, 5000, 76399, 76400, 76401, 150000, 250000, 284600])
    def test_ideal_is_minimal(self, model, catalog, demand):
        result = model.select(demand, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)
        capacities = vertical_capacities(catalog)
        covering = [c for c in capacities if c >= demand]

        assert result.ideal_match.real_capacity == min(covering)
        if result.one_below is not None:
            assert result.one_below.real_capacity < result.ideal_match.real_capacity
        if result.one_above is not None:
            assert result.one_above.real_capacity > result.ideal_match.real_capacity

    def test_idempotent(self, model, catalog):
        first = model.select(52000, 1.2, Brand.DAIKIN, Orientation.VERTICAL, catalog)
        second = model.select(52000, 1.2, Brand.DAIKIN, Orientation.VERTICAL, catalog)
        assert first == second

    def test_monotonic_in_demand(self, model, catalog):
        previous = 0.0
        for demand in range(10, 500, 37):
            result = model.select(demand, 1.0, Brand.DAIKIN, Orientation.VERTICAL, catalog)
            assert result.ideal_match.real_capacity >= previous
            previous = result.ideal_match.real_capacity


class TestSizingRules:
    """Test configuration advisories."""

    def test_invalid_combination_on_vertical(self, controller, catalog):
        result = controller.solve(14068, 1.45, Brand.SAMSUNG, Orientation.VERTICAL, catalog,
                                  selected_percent=145)

        assert any("Invalid combination" in a for a in result.advisories)
        assert result.flags["invalid_configuration"]
        assert result.ideal_match is not None, "Advisories never block the selection"

    def test_reserved_tier_allowed_on_horizontal(self, controller, catalog):
        result = controller.solve(14068, 1.45, Brand.SAMSUNG, Orientation.HORIZONTAL, catalog,
                                  selected_percent=145)
        assert result.advisories == ()
        assert not result.flags["invalid_configuration"]

    def test_capped_advisory(self, controller, catalog):
        result = controller.solve(40, 1.30, Brand.DAIKIN, Orientation.HORIZONTAL, catalog,
                                  selected_percent=145, capped=True)

        assert result.effective_percent == 130
        assert result.selected_percent == 145
        assert any("at most 130%" in a for a in result.advisories)
        assert result.flags["factor_capped"]

    def test_capped_without_configured_ceiling(self, catalog):
        controller = CondenserController(SizingRules(brand_ceilings={}))
        result = controller.solve(40, 1.3, Brand.DAIKIN, Orientation.VERTICAL, catalog,
                                  selected_percent=145, capped=True)

        assert result.flags["factor_capped"]
        assert any("at most 130%" in a for a in result.advisories), "Advisory uses the applied factor"

    def test_maximum_mode_skips_rules(self, controller, catalog):
        result = controller.solve(14068, 1.45, Brand.SAMSUNG, Orientation.VERTICAL, catalog,
                                  selected_percent=145, maximum_capacity=True)
        assert result.advisories == ()

    def test_extra_advisories_deduplicated(self, controller, catalog):
        result = controller.solve(14068, 1.1, Brand.SAMSUNG, Orientation.VERTICAL, catalog,
                                  extra_advisories=["data", "data"])
        assert result.advisories == ("data",)

    def test_from_settings(self, tmp_path):
        settings = AppSettings(str(tmp_path / "settings.json"), load=False)
        settings.set("brand_factor_ceilings", {"samsung": 140})
        settings.set("reserved_diversity_percent", 150)

        rules = SizingRules.from_settings(settings)
        assert rules.brand_ceilings == {Brand.SAMSUNG: pytest.approx(1.40)}
        assert rules.is_invalid_combination(150, Orientation.VERTICAL)
        assert not rules.is_invalid_combination(145, Orientation.VERTICAL)


class TestCondenserView:
    """Test console output."""

    def test_display_no_match(self, model, catalog, capsys):
        result = model.select(300000, 1.0, Brand.SAMSUNG, Orientation.VERTICAL, catalog)
        CondenserView.display_result(result)
        out = capsys.readouterr().out

        assert "No suitable unit" in out
        assert "Ideal: -" in out
        assert "AM300BXVGGR" in out

    def test_display_none(self, capsys):
        CondenserView.display_result(None)
        assert "Add indoor units" in capsys.readouterr().out

    def test_summary_lists_active_flags(self, controller, catalog, capsys):
        result = controller.solve(14068, 1.45, Brand.SAMSUNG, Orientation.VERTICAL, catalog,
                                  selected_percent=145)
        CondenserView.display_summary(result)
        assert "invalid_configuration" in capsys.readouterr().out
