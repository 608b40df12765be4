"""
Main Application Window - VRF Condensing Unit Sizing

Provides the main window with access to the sizing dashboard.

Author: VRF Sizing Project
Date: 2026-10-17
"""

import logging
import tkinter as tk
from tkinter import ttk

from vrf_sizing.core.logging_config import LoggingConfig
from vrf_sizing.core.settings import get_settings

logger = logging.getLogger(__name__)


class MainWindow:
    """
    Main application window for the VRF sizing tool.
    """

    def __init__(self):
        """Initialize the main application window."""
        self.root = tk.Tk()
        self.root.title("VRF Sizing - Condensing unit selection")
        self.root.geometry("520x320")

        self._setup_ui()

    def _setup_ui(self):
        """Set up the user interface components."""
        header = ttk.Label(
            self.root,
            text="VRF Condensing Unit Sizing",
            font=("Arial", 16, "bold"),
        )
        header.pack(pady=20)

        desc = ttk.Label(
            self.root,
            text="Select a condensing unit from the indoor units of a project",
            font=("Arial", 10),
        )
        desc.pack(pady=10)

        ttk.Separator(self.root, orient="horizontal").pack(fill="x", pady=20)

        tools_frame = ttk.LabelFrame(self.root, text="Tools", padding=20)
        tools_frame.pack(padx=20, pady=10, fill="both", expand=True)

        btn_dashboard = ttk.Button(
            tools_frame,
            text="Sizing Dashboard",
            command=self._open_sizing_dashboard,
            width=25,
            padding=10,
        )
        btn_dashboard.grid(row=0, column=0, padx=10, pady=5, sticky="ew")
        tools_frame.columnconfigure(0, weight=1)

        footer = ttk.Label(
            self.root,
            text="VRF Sizing Project - 2026",
            font=("Arial", 8),
            foreground="gray",
        )
        footer.pack(side="bottom", pady=10)

    def _open_sizing_dashboard(self):
        """Open the sizing dashboard window."""
        # Import here to allow headless testing
        from vrf_sizing.modules.sizing_dashboard.view import open_sizing_dashboard

        open_sizing_dashboard(self.root)

    def run(self):
        """Start the application main loop."""
        self.root.mainloop()


def main():
    """Entry point for the UI application."""
    settings = get_settings()
    LoggingConfig.setup_logging(
        log_level=settings.get("log_level", "INFO"),
        log_dir=settings.get("log_dir"),
    )
    logger.info("Starting VRF sizing application")
    app = MainWindow()
    app.run()


if __name__ == "__main__":
    main()
