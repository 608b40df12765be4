"""
Entry point for the VRF sizing tool

Allows running the application with: python -m vrf_sizing
"""

from vrf_sizing.ui.app import main

if __name__ == "__main__":
    main()
