"""
Diversity Module - Simultaneity factor resolution

Components:
- model.py: Token resolution, family defaults and brand ceilings
- controller.py: Binds the resolver to the loaded factor tables
- view.py: Console output

Author: VRF Sizing Project
Date: 2026-10-17
"""

from vrf_sizing.modules.diversity.model import DiversityFactorResolver, DiversityResolution
from vrf_sizing.modules.diversity.controller import DiversityController
from vrf_sizing.modules.diversity.view import DiversityView

__all__ = [
    "DiversityFactorResolver",
    "DiversityResolution",
    "DiversityController",
    "DiversityView",
]
