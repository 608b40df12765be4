"""
Main entry point for the VRF sizing tool

Launch the application with: python main.py
"""

from vrf_sizing.ui.app import main

if __name__ == "__main__":
    main()
