"""
UI Package - Tkinter user interface for the VRF sizing tool
"""

from vrf_sizing.ui.app import MainWindow

__all__ = ["MainWindow"]
