"""
Diversity Model - Simultaneity factor resolution

Maps a user selection (category name, factor name, number or the maximum
capacity sentinel) to a diversity factor, and applies brand ceilings.

Author: VRF Sizing Project
Date: 2026-10-17
"""

import logging
import math
from dataclasses import dataclass
from typing import Dict, Optional, Sequence, Tuple

from vrf_sizing.core.catalog import Brand, DiversityFactor, ProductFamily
from vrf_sizing.core.catalog_service import BUILTIN_FACTORS

logger = logging.getLogger(__name__)

# Daikin accepts at most 130% diversity
DEFAULT_BRAND_CEILINGS: Dict[Brand, float] = {Brand.DAIKIN: 1.30}

MAXIMUM_TOKENS = ("maximum", "maximum capacity", "max", "maximo", "máximo")
MAXIMUM_FACTOR = DiversityFactor("Maximum capacity", 1.0)

CATEGORY_ALIASES = {
    "corporate": ("corporate", "corporativo"),
    "corporativo": ("corporate", "corporativo"),
    "residential": ("residential", "residencial"),
    "residencial": ("residential", "residencial"),
}
CORPORATE_PREFIX = "corporat"

# Typed numbers above this are percentages ("10" is 10%, "125" is 125%);
# at or below it they are multipliers ("1.25" is 125%)
TOKEN_PERCENT_THRESHOLD = 2.0
# Typed selections resolving above this multiplier are rejected
MAX_TOKEN_MULTIPLIER = 10.0


@dataclass(frozen=True)
class DiversityResolution:
    """
    Outcome of resolving a diversity selection.

    Attributes:
        factor: Selected factor, as shown to the user (before brand ceilings)
        family: Product family whose table was used
        is_maximum: Maximum capacity sentinel; the engine picks the largest unit
        used_default: The token matched nothing and the family default was taken
        used_builtin_factors: No table was available; built-in factors were used
    """
    factor: DiversityFactor
    family: ProductFamily
    is_maximum: bool = False
    used_default: bool = False
    used_builtin_factors: bool = False

    @property
    def multiplier(self) -> float:
        return self.factor.multiplier

    @property
    def percent(self) -> int:
        return self.factor.percent


def _parse_number(token: str) -> Optional[float]:
    try:
        value = float(token.replace(",", "."))
    except ValueError:
        return None
    return value if math.isfinite(value) else None


class DiversityFactorResolver:
    """Resolves diversity selections against a family's factor table."""

    def __init__(self, ceilings: Optional[Dict[Brand, float]] = None):
        """
        Args:
            ceilings: Highest multiplier accepted per brand (1.30 = 130%)
        """
        self.ceilings = dict(DEFAULT_BRAND_CEILINGS if ceilings is None else ceilings)

    def default_factor(self, factors: Sequence[DiversityFactor], family: ProductFamily) -> DiversityFactor:
        """
        Default selection of a family.

        VRF defaults to the highest-valued "Corporate..." entry, multi-split to
        the "Residential" entry; either falls back to the first entry.
        """
        factors = list(factors) or list(BUILTIN_FACTORS[family])

        if family is ProductFamily.VRF:
            corporate = [f for f in factors if f.name.lower().startswith(CORPORATE_PREFIX)]
            if corporate:
                return max(corporate, key=lambda f: f.multiplier)
        else:
            for factor in factors:
                if factor.name.lower() in CATEGORY_ALIASES["residential"]:
                    return factor

        return factors[0]

    def resolve_selection(
        self,
        token,
        factors: Sequence[DiversityFactor],
        family: ProductFamily = ProductFamily.VRF,
    ) -> DiversityResolution:
        """
        Resolve a selection token.

        Args:
            token: Category ("corporate", "residential"), factor name, number
                ("1.25" or "125") or the maximum capacity sentinel
            factors: Available factors of the family (may be empty)
            family: Product family

        Returns:
            DiversityResolution with the selected factor
        """
        used_builtin = not factors
        table = list(factors) or list(BUILTIN_FACTORS[family])
        key = "" if token is None else str(token).strip().lower()

        def resolved(factor: DiversityFactor, used_default: bool = False) -> DiversityResolution:
            return DiversityResolution(
                factor=factor,
                family=family,
                used_default=used_default,
                used_builtin_factors=used_builtin,
            )

        if key in MAXIMUM_TOKENS:
            return DiversityResolution(
                factor=MAXIMUM_FACTOR,
                family=family,
                is_maximum=True,
                used_builtin_factors=used_builtin,
            )

        number = _parse_number(key) if key else None
        if number is not None:
            multiplier = number / 100.0 if number > TOKEN_PERCENT_THRESHOLD else number
            if multiplier <= 0 or multiplier > MAX_TOKEN_MULTIPLIER:
                logger.warning(f"Ignoring out-of-range diversity value {token!r}")
                return resolved(self.default_factor(table, family), used_default=True)
            candidate = DiversityFactor(f"{round(multiplier * 100)}%", multiplier)
            for factor in table:
                if factor.percent == candidate.percent:
                    return resolved(factor)
            return resolved(candidate)

        if key in CATEGORY_ALIASES:
            aliases = CATEGORY_ALIASES[key]
            for factor in table:
                if factor.name.lower() in aliases:
                    return resolved(factor)
            if "corporate" in aliases:
                corporate = [f for f in table if f.name.lower().startswith(CORPORATE_PREFIX)]
                if corporate:
                    return resolved(max(corporate, key=lambda f: f.multiplier))
        elif key:
            for factor in table:
                if factor.name.lower() == key:
                    return resolved(factor)

        if key:
            logger.info(f"Diversity selection {token!r} not found, using {family.value} default")
        return resolved(self.default_factor(table, family), used_default=bool(key))

    def effective_factor(self, resolution: DiversityResolution, brand: Brand) -> Tuple[float, bool]:
        """
        Multiplier used for a brand's computation.

        Returns:
            (multiplier, capped) where capped is True when the brand ceiling applied
        """
        multiplier = resolution.multiplier
        if resolution.is_maximum:
            return multiplier, False

        ceiling = self.ceilings.get(brand)
        if ceiling is not None and multiplier > ceiling:
            logger.debug(f"{brand.label}: diversity {multiplier:.2f} capped to {ceiling:.2f}")
            return ceiling, True
        return multiplier, False

    def resolve(
        self,
        token,
        factors: Sequence[DiversityFactor],
        brand: Brand,
        family: ProductFamily = ProductFamily.VRF,
    ) -> float:
        """
        Resolve a selection straight to the multiplier used for a brand.

        Returns:
            Effective multiplier (1.10 for 110%)
        """
        return self.effective_factor(self.resolve_selection(token, factors, family), brand)[0]
