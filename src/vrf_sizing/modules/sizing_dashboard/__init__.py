"""
Sizing Dashboard Module

Provides the sizing session with:
- Explicit session state and the pure per-brand computation
- Controller dispatching recomputation to subscribed views
- Tkinter dashboard with a catalog capacity chart
"""

from .controller import SizingController
from .model import SizingModel, SizingReport, SizingState, compute_selection, report_to_dict

__all__ = [
    "SizingController",
    "SizingModel",
    "SizingReport",
    "SizingState",
    "compute_selection",
    "report_to_dict",
]
