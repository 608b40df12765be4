"""Modules package - Sizing steps from indoor units to condensing unit"""

from vrf_sizing.modules.condenser import CondenserController, SelectionResult
from vrf_sizing.modules.demand import DemandController
from vrf_sizing.modules.diversity import DiversityController
from vrf_sizing.modules.sizing_dashboard import SizingController, compute_selection

__all__ = [
    "CondenserController",
    "SelectionResult",
    "DemandController",
    "DiversityController",
    "SizingController",
    "compute_selection",
]
