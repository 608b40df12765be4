"""
Diversity View - Console output for diversity selections

Author: VRF Sizing Project
Date: 2026-10-17
"""

from typing import Dict, Sequence, Tuple

from vrf_sizing.core.catalog import Brand, DiversityFactor
from vrf_sizing.modules.diversity.model import DiversityResolution


class DiversityView:
    """Formats diversity tables and resolutions. No computation here."""

    @staticmethod
    def format_option(factor: DiversityFactor) -> str:
        """Label used in selection lists, e.g. 'Corporate (110%)'."""
        return f"{factor.name} ({factor.percent}%)"

    @staticmethod
    def display_options(factors: Sequence[DiversityFactor]) -> None:
        print("Diversity factors:")
        for factor in factors:
            print(f"  - {DiversityView.format_option(factor)}")

    @staticmethod
    def display_resolution(
        resolution: DiversityResolution,
        effective: Dict[Brand, Tuple[float, bool]],
    ) -> None:
        """
        Display a resolved selection and the factor used for each brand.

        Args:
            resolution: Resolved selection
            effective: {brand: (multiplier, capped)}
        """
        if resolution.is_maximum:
            print("Diversity: maximum capacity (largest available unit)")
        else:
            print(f"Diversity: {DiversityView.format_option(resolution.factor)}")

        for brand, (multiplier, capped) in effective.items():
            note = " (capped)" if capped else ""
            print(f"  {brand.label}: {round(multiplier * 100)}%{note}")

        if resolution.used_default:
            print("  Selection not found, family default used")
        if resolution.used_builtin_factors:
            print("  Built-in diversity factors in use")
