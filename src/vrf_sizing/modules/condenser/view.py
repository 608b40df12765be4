"""
Condenser View - Display and reporting functionality

Handles console output for condensing unit selections.

Author: VRF Sizing Project
Date: 2026-10-17
"""

from typing import Optional

from vrf_sizing.modules.condenser.model import CondenserMatch, SelectionResult


class CondenserView:
    """
    View component for condensing unit selections.

    Responsible for formatting and displaying selection results.
    No computation should occur here - only presentation.
    """

    @staticmethod
    def format_match(label: str, match: Optional[CondenserMatch], unit: str) -> str:
        """One line describing a proposed unit."""
        if match is None:
            return f"{label}: -"
        entry = match.entry
        status = "OK" if match.meets_requirement else "UNDERSIZED"
        return (
            f"{label}: {entry.display_name} - {entry.capacity_rating} HP - "
            f"{entry.real_capacity:,.1f} {unit} [{status}, diversity {match.diversity_percent}%]"
        )

    @staticmethod
    def display_result(result: Optional[SelectionResult], verbose: bool = True) -> None:
        """
        Display a selection result.

        Args:
            result: Selection to display (None when there is no demand)
            verbose: If True, show demand details and flags
        """
        if result is None:
            print("Add indoor units to see a condensing unit selection")
            return

        unit = result.capacity_unit
        print("=" * 60)
        print(f"CONDENSING UNIT SELECTION - {result.brand.label} ({result.orientation.label})")
        print("=" * 60)

        if verbose:
            print(f"\nIndoor units total: {result.total_demand:,.1f} {unit}")
            if result.is_maximum_capacity:
                print("Diversity: maximum capacity (largest available unit)")
            else:
                print(f"Diversity selected: {result.selected_percent}%  applied: {result.effective_percent}%")
            print(f"Required minimum capacity: {result.required_minimum_capacity:,.1f} {unit}\n")

        if result.ideal_match is None:
            print("No suitable unit: the required capacity exceeds the largest catalog unit")
        print(CondenserView.format_match("Ideal", result.ideal_match, unit))
        print(CondenserView.format_match("One below", result.one_below, unit))
        print(CondenserView.format_match("One above", result.one_above, unit))

        if result.advisories:
            print("\nAdvisories:")
            for advisory in result.advisories:
                print(f"  ! {advisory}")

        if verbose:
            print("\nDiagnostic Flags:")
            for flag_name, flag_value in result.flags.items():
                status = "ACTIVE" if flag_value else "OK"
                print(f"  {flag_name}: {status}")

        print("=" * 60)

    @staticmethod
    def display_summary(result: Optional[SelectionResult]) -> None:
        """
        Display compact summary of a selection.

        Args:
            result: Selection to summarize
        """
        if result is None:
            print("Condenser: no demand")
            return

        ideal = result.ideal_match.entry.display_name if result.ideal_match else "none"
        print(f"Condenser {result.brand.label}: {ideal}, "
              f"required={result.required_minimum_capacity:,.1f} {result.capacity_unit}", end="")

        active_flags = [k for k, v in result.flags.items() if v]
        if active_flags:
            print(f" [WARNINGS: {', '.join(active_flags)}]")
        else:
            print()
