"""
Demand Module - Indoor unit list and demand aggregation

Components:
- model.py: Selection lines, quantity clamping, aggregation
- controller.py: Session-owned selection list
- view.py: Console output

Author: VRF Sizing Project
Date: 2026-10-17
"""

from vrf_sizing.modules.demand.model import (
    DemandResult,
    EvaporatorSelection,
    SelectionList,
    aggregate,
    clamp_quantity,
)
from vrf_sizing.modules.demand.controller import DemandController
from vrf_sizing.modules.demand.view import DemandView

__all__ = [
    "DemandResult",
    "EvaporatorSelection",
    "SelectionList",
    "aggregate",
    "clamp_quantity",
    "DemandController",
    "DemandView",
]
