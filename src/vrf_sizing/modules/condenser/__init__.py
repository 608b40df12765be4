"""
Condenser Module - Condensing unit selection for VRF systems

Architecture: MVC (Model-View-Controller)

Components:
- model.py: Selection engine (required capacity, ideal match and neighbours)
- rules.py: Business-rule advisories (brand ceilings, reserved diversity tier)
- controller.py: Orchestration and result annotation
- view.py: Console output

Author: VRF Sizing Project
Date: 2026-10-17
"""

from vrf_sizing.modules.condenser.model import CondenserMatch, CondenserSelectionModel, SelectionResult
from vrf_sizing.modules.condenser.rules import SizingRules
from vrf_sizing.modules.condenser.controller import CondenserController
from vrf_sizing.modules.condenser.view import CondenserView

__all__ = [
    "CondenserMatch",
    "CondenserSelectionModel",
    "SelectionResult",
    "SizingRules",
    "CondenserController",
    "CondenserView",
]
