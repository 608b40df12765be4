"""
Sizing Model

Combines demand aggregation, diversity resolution and condensing unit selection
into one pure computation over an explicit session state. Every brand in the
catalog is computed independently, with the indoor units priced in that
brand's own capacity unit.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from vrf_sizing.core.catalog import Brand, Catalog, DiversityFactor, Orientation, ProductFamily
from vrf_sizing.core.catalog_service import FACTORS_UNAVAILABLE
from vrf_sizing.modules.condenser import CondenserController, SelectionResult, SizingRules
from vrf_sizing.modules.condenser.rules import ESTIMATED_CAPACITY
from vrf_sizing.modules.demand.model import EvaporatorSelection, aggregate, reprice
from vrf_sizing.modules.diversity.model import DiversityFactorResolver, DiversityResolution


@dataclass(frozen=True)
class SizingState:
    """
    Inputs of a sizing computation.

    Attributes:
        selections: Indoor unit lines (type, nominal, quantity are used)
        diversity_token: User diversity selection; None selects the family default
        brand: Brand shown to the user
        orientation: Condensing unit orientation
        family: Product family of the diversity table
    """
    selections: Tuple[EvaporatorSelection, ...] = ()
    diversity_token: Optional[str] = None
    brand: Brand = Brand.SAMSUNG
    orientation: Orientation = Orientation.VERTICAL
    family: ProductFamily = ProductFamily.VRF


@dataclass(frozen=True)
class SizingReport:
    """
    One selection per brand for a single user configuration.

    Attributes:
        state: Inputs the report was computed from
        resolution: Resolved diversity selection (shared by all brands)
        results: Selection result per brand
    """
    state: SizingState
    resolution: DiversityResolution
    results: Dict[Brand, SelectionResult] = field(default_factory=dict)

    @property
    def active(self) -> Optional[SelectionResult]:
        """Result of the brand shown to the user."""
        return self.results.get(self.state.brand)

    @property
    def advisories(self) -> List[str]:
        """Advisories of every brand, those of the active brand first."""
        ordered = [self.active] if self.active else []
        ordered += [r for b, r in self.results.items() if b is not self.state.brand]
        merged: List[str] = []
        for result in ordered:
            for advisory in result.advisories:
                if advisory not in merged:
                    merged.append(advisory)
        return merged


def _estimated_advisory(selections: Iterable[EvaporatorSelection], brand: Brand, catalog: Catalog) -> List[str]:
    missing = [f"{s.evaporator_type.label} {s.nominal_capacity}" for s in selections if s.estimated]
    if not missing:
        return []
    return [ESTIMATED_CAPACITY.format(
        brand=brand.label,
        items=", ".join(missing),
        default=catalog.default_capacity(brand),
    )]


def compute_selection(
    selections: Sequence[EvaporatorSelection],
    diversity_token,
    brand,
    orientation,
    catalog: Catalog,
    factors: Sequence[DiversityFactor] = (),
    family: ProductFamily = ProductFamily.VRF,
    rules: Optional[SizingRules] = None,
    data_warnings: Sequence[str] = (),
) -> Optional[SelectionResult]:
    """
    Compute the condensing unit selection for one brand.

    Args:
        selections: Indoor unit lines priced in the brand's capacity unit
        diversity_token: Category, factor name, number or maximum capacity sentinel
        brand: Catalog brand
        orientation: Condensing unit orientation
        catalog: Catalog to search
        factors: Diversity table of the family (empty: built-in defaults)
        family: Product family of the diversity table
        rules: Business rules; defaults when None
        data_warnings: Data-load warnings to surface as advisories

    Returns:
        SelectionResult, or None when there is no demand
    """
    brand = Brand.parse(brand)
    orientation = Orientation.parse(orientation)
    rules = rules if rules is not None else SizingRules()

    total_demand = aggregate(selections)
    if total_demand <= 0:
        return None

    resolver = DiversityFactorResolver(rules.brand_ceilings)
    resolution = resolver.resolve_selection(diversity_token, factors, family)
    multiplier, capped = resolver.effective_factor(resolution, brand)

    upstream = list(data_warnings)
    if resolution.used_builtin_factors and FACTORS_UNAVAILABLE not in upstream:
        upstream.append(FACTORS_UNAVAILABLE)
    upstream.extend(_estimated_advisory(selections, brand, catalog))

    result = CondenserController(rules).solve(
        total_demand=total_demand,
        diversity_factor=multiplier,
        brand=brand,
        orientation=orientation,
        catalog=catalog,
        selected_percent=resolution.percent,
        maximum_capacity=resolution.is_maximum,
        capped=capped,
        extra_advisories=upstream,
    )
    result.flags["estimated_capacity"] = any(s.estimated for s in selections)
    result.flags["data_unavailable"] = bool(data_warnings) or resolution.used_builtin_factors
    return result


class SizingModel:
    """Computes a SizingReport for every brand of a catalog."""

    def __init__(self, rules: Optional[SizingRules] = None):
        self.rules = rules if rules is not None else SizingRules()
        self.resolver = DiversityFactorResolver(self.rules.brand_ceilings)

    def compute(
        self,
        state: SizingState,
        catalog: Catalog,
        factors: Sequence[DiversityFactor] = (),
        data_warnings: Sequence[str] = (),
    ) -> Optional[SizingReport]:
        """
        Compute one selection per brand.

        Returns:
            SizingReport, or None when the indoor unit list is empty
        """
        if not state.selections:
            return None

        results = {}
        for brand in catalog.brands():
            result = compute_selection(
                selections=reprice(state.selections, catalog, brand),
                diversity_token=state.diversity_token,
                brand=brand,
                orientation=state.orientation,
                catalog=catalog,
                factors=factors,
                family=state.family,
                rules=self.rules,
                data_warnings=data_warnings,
            )
            if result is not None:
                results[brand] = result

        if not results:
            return None

        return SizingReport(
            state=state,
            resolution=self.resolver.resolve_selection(state.diversity_token, factors, state.family),
            results=results,
        )


def _match_to_dict(match) -> Optional[Dict]:
    if match is None:
        return None
    entry = match.entry
    return {
        "model": entry.model,
        "hp": entry.capacity_rating,
        "real_capacity": entry.real_capacity,
        "voltage": entry.voltage,
        "diversity_percent": match.diversity_percent,
        "meets_requirement": match.meets_requirement,
    }


def report_to_dict(report: SizingReport) -> Dict:
    """JSON-ready representation of a report, used for exports."""
    state = report.state
    return {
        "brand": state.brand.value,
        "orientation": state.orientation.value,
        "diversity": {
            "name": report.resolution.factor.name,
            "percent": report.resolution.percent,
            "is_maximum": report.resolution.is_maximum,
        },
        "evaporators": [
            {
                "type": s.evaporator_type.value,
                "nominal": s.nominal_capacity,
                "quantity": s.quantity,
            }
            for s in state.selections
        ],
        "results": {
            brand.value: {
                "capacity_unit": result.capacity_unit,
                "total_demand": result.total_demand,
                "applied_percent": result.effective_percent,
                "required_minimum_capacity": result.required_minimum_capacity,
                "ideal": _match_to_dict(result.ideal_match),
                "one_below": _match_to_dict(result.one_below),
                "one_above": _match_to_dict(result.one_above),
                "advisories": list(result.advisories),
                "flags": dict(result.flags),
            }
            for brand, result in report.results.items()
        },
    }
