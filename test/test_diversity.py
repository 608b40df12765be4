"""
Unit tests for Diversity module

Tests selection token resolution, family defaults and brand ceilings.
"""

import pytest
from vrf_sizing.core.catalog import Brand, DiversityFactor, ProductFamily
from vrf_sizing.core.catalog_service import CatalogService, JsonDataSource
from vrf_sizing.modules.diversity import (
    DiversityController,
    DiversityFactorResolver,
    DiversityView,
)


@pytest.fixture
def resolver():
    """Fixture providing a resolver with the default Daikin ceiling."""
    return DiversityFactorResolver()


@pytest.fixture
def vrf_factors():
    """Fixture providing a VRF table stored as percentages."""
    return [
        DiversityFactor("Corporate", 110),
        DiversityFactor("Commercial", 120),
        DiversityFactor("Residential", 145),
    ]


@pytest.fixture
def service():
    """Fixture providing a service loaded from the packaged data."""
    service = CatalogService(JsonDataSource())
    service.load()
    return service


class TestTokenResolution:
    """Test mapping of user tokens to factors."""

    @pytest.mark.parametrize("token,expected", [
        ("corporate", "Corporate"),
        ("Corporativo", "Corporate"),
        ("residential", "Residential"),
        ("RESIDENCIAL", "Residential"),
        ("commercial", "Commercial"),
    ])
    def test_named_tokens(self, resolver, vrf_factors, token, expected):
        resolution = resolver.resolve_selection(token, vrf_factors)
        assert resolution.factor.name == expected
        assert not resolution.used_default

    def test_corporate_resolves_to_110(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("corporate", vrf_factors)
        assert resolution.multiplier == pytest.approx(1.10)
        assert resolution.percent == 110

    def test_numeric_fraction_matches_table_entry(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("1.45", vrf_factors)
        assert resolution.factor.name == "Residential", "1.45 and 145 are the same tier"

    def test_numeric_percent_outside_table(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("125", vrf_factors)
        assert resolution.factor.name == "125%"
        assert resolution.multiplier == pytest.approx(1.25)

    @pytest.mark.parametrize("token,multiplier", [
        ("10", 0.10),
        ("10.5", 0.105),
        ("2.5", 0.025),
        ("2", 2.0),
        ("1.3", 1.30),
    ])
    def test_numbers_above_two_are_percentages(self, resolver, token, multiplier):
        resolution = resolver.resolve_selection(token, [])
        assert resolution.multiplier == pytest.approx(multiplier)
        assert not resolution.used_default

    def test_implausible_number_uses_default(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("5000", vrf_factors)
        assert resolution.factor.name == "Corporate"
        assert resolution.used_default

    def test_decimal_comma(self, resolver, vrf_factors):
        assert resolver.resolve_selection("1,2", vrf_factors).percent == 120

    @pytest.mark.parametrize("token", ["maximum", "Max", "maximo", "Máximo"])
    def test_maximum_sentinel(self, resolver, vrf_factors, token):
        resolution = resolver.resolve_selection(token, vrf_factors)
        assert resolution.is_maximum
        assert resolution.multiplier == 1.0

    def test_unknown_token_uses_default(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("stadium", vrf_factors)
        assert resolution.factor.name == "Corporate"
        assert resolution.used_default

    def test_non_positive_number_uses_default(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("0", vrf_factors)
        assert resolution.factor.name == "Corporate"
        assert resolution.used_default

    def test_no_token_is_default_without_flag(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection(None, vrf_factors)
        assert resolution.factor.name == "Corporate"
        assert not resolution.used_default

    def test_empty_table_uses_builtin(self, resolver):
        resolution = resolver.resolve_selection("residential", [])
        assert resolution.used_builtin_factors
        assert resolution.percent == 145


class TestDefaults:
    """Test family default selection."""

    def test_vrf_highest_corporate(self, resolver):
        factors = [
            DiversityFactor("Corporate", 110),
            DiversityFactor("Corporate Plus", 125),
            DiversityFactor("Residential", 145),
        ]
        assert resolver.default_factor(factors, ProductFamily.VRF).name == "Corporate Plus"

    def test_vrf_without_corporate_uses_first(self, resolver):
        factors = [DiversityFactor("Hotel", 115), DiversityFactor("Residential", 145)]
        assert resolver.default_factor(factors, ProductFamily.VRF).name == "Hotel"

    def test_multi_split_defaults_to_residential(self, resolver):
        factors = [DiversityFactor("Corporate", 1.1), DiversityFactor("Residential", 1.4)]
        assert resolver.default_factor(factors, ProductFamily.MULTI_SPLIT).name == "Residential"

    def test_builtin_defaults(self, resolver):
        assert resolver.default_factor([], ProductFamily.VRF).percent == 110
        assert resolver.default_factor([], ProductFamily.MULTI_SPLIT).percent == 140


class TestBrandCeiling:
    """Test per-brand ceilings applied to a shared selection."""

    def test_daikin_capped_samsung_not(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("residential", vrf_factors)
        samsung, samsung_capped = resolver.effective_factor(resolution, Brand.SAMSUNG)
        daikin, daikin_capped = resolver.effective_factor(resolution, Brand.DAIKIN)

        assert samsung == pytest.approx(1.45) and not samsung_capped
        assert daikin == pytest.approx(1.30) and daikin_capped

    def test_below_ceiling_unchanged(self, resolver, vrf_factors):
        assert resolver.resolve("commercial", vrf_factors, Brand.DAIKIN) == pytest.approx(1.20)

    def test_maximum_never_capped(self, resolver, vrf_factors):
        resolution = resolver.resolve_selection("maximum", vrf_factors)
        assert resolver.effective_factor(resolution, Brand.DAIKIN) == (1.0, False)

    def test_custom_ceilings(self, vrf_factors):
        resolver = DiversityFactorResolver({Brand.SAMSUNG: 1.2})
        assert resolver.resolve("residential", vrf_factors, Brand.SAMSUNG) == pytest.approx(1.2)
        assert resolver.resolve("residential", vrf_factors, Brand.DAIKIN) == pytest.approx(1.45)


class TestDiversityController:
    """Test the controller against the service tables."""

    def test_options_and_default(self, service):
        controller = DiversityController(service)
        assert controller.default_factor().name == "Corporate"
        assert len(controller.options()) == 4

    def test_select_stores_resolution(self, service):
        controller = DiversityController(service)
        resolution = controller.select("residential")
        assert controller.last_resolution is resolution

        effective = controller.effective_factors()
        assert effective[Brand.SAMSUNG] == (pytest.approx(1.45), False)
        assert effective[Brand.DAIKIN] == (pytest.approx(1.30), True)

    def test_multi_split_family(self, service):
        controller = DiversityController(service, ProductFamily.MULTI_SPLIT)
        assert controller.default_factor().name == "Residential"


class TestDiversityView:
    """Test console output."""

    def test_format_option(self):
        assert DiversityView.format_option(DiversityFactor("Corporate", 1.1)) == "Corporate (110%)"

    def test_display_resolution(self, resolver, vrf_factors, capsys):
        resolution = resolver.resolve_selection("residential", vrf_factors)
        effective = {b: resolver.effective_factor(resolution, b) for b in Brand}
        DiversityView.display_resolution(resolution, effective)

        out = capsys.readouterr().out
        assert "Residential (145%)" in out
        assert "Daikin: 130% (capped)" in out
        assert "Samsung: 145%" in out
