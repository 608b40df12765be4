"""
Sizing Dashboard View

Tkinter UI for VRF condensing unit sizing with:
- Metrics cards display
- Indoor unit list and configuration controls
- Catalog capacity chart with the required capacity
"""

import json
import queue
import tkinter as tk
from tkinter import ttk, messagebox
from typing import Optional

import numpy as np

# Matplotlib integration
import matplotlib
matplotlib.use('TkAgg')
from matplotlib.backends.backend_tkagg import FigureCanvasTkAgg
from matplotlib.figure import Figure

from vrf_sizing.core.catalog import Brand, EvaporatorType, Orientation
from vrf_sizing.modules.condenser.view import CondenserView
from vrf_sizing.modules.diversity.view import DiversityView
from .controller import SizingController
from .model import SizingReport, report_to_dict

MAXIMUM_LABEL = "Maximum capacity"
LOAD_POLL_MS = 100


class SizingDashboardView:
    """Complete sizing dashboard UI (Toplevel window)."""

    def __init__(self, parent, controller: Optional[SizingController] = None):
        """
        Initialize dashboard window.

        Args:
            parent: Parent Tk window
            controller: Session controller (new session when None)
        """
        self.parent = parent
        self.controller = controller if controller is not None else SizingController()

        self.window = tk.Toplevel(parent)
        self.window.title("VRF Condensing Unit Sizing")
        self.window.geometry("1300x850")

        self._build_ui()
        self._load_default_params()

        self._poll_id = None
        self._unsubscribe = self.controller.subscribe(self._on_report)
        self.window.protocol("WM_DELETE_WINDOW", self._close)

        self.controller.recompute()
        self._start_data_load()

    def _build_ui(self):
        """Build complete UI with 3 sections."""
        main_frame = ttk.Frame(self.window)
        main_frame.pack(fill=tk.BOTH, expand=True)

        main_frame.columnconfigure(0, weight=1)
        main_frame.rowconfigure(0, weight=0)  # Metrics (fixed height)
        main_frame.rowconfigure(1, weight=1)  # Controls + list
        main_frame.rowconfigure(2, weight=1)  # Chart

        self._build_metrics_section(main_frame)
        self._build_middle_section(main_frame)
        self._build_chart_section(main_frame)

    def _build_metrics_section(self, parent):
        """Build metrics cards section (top)."""
        metrics_frame = ttk.Frame(parent, relief=tk.RIDGE, borderwidth=2)
        metrics_frame.grid(row=0, column=0, sticky='ew', padx=10, pady=10)

        for i in range(4):
            metrics_frame.columnconfigure(i, weight=1)

        card_style = {'relief': tk.RAISED, 'borderwidth': 2, 'padding': 10}

        self.metric_labels = {}
        cards = [
            ("demand", "Indoor Units Total"),
            ("required", "Required Minimum"),
            ("ideal", "Ideal Unit"),
            ("diversity", "Diversity Applied"),
        ]
        for column, (key, title) in enumerate(cards):
            card = ttk.LabelFrame(metrics_frame, text=title, **card_style)
            card.grid(row=0, column=column, padx=5, pady=5, sticky='nsew')
            value = ttk.Label(card, text="--", font=('Arial', 18, 'bold'))
            value.pack()
            status = ttk.Label(card, text="", foreground='gray')
            status.pack()
            self.metric_labels[key] = (value, status)

        status_frame = ttk.Frame(metrics_frame)
        status_frame.grid(row=1, column=0, columnspan=4, pady=(5, 0))
        ttk.Label(status_frame, text="Status:").pack(side=tk.LEFT, padx=5)
        self.lbl_global_status = ttk.Label(status_frame, text="● Loading data...", foreground='gray',
                                           font=('Arial', 10, 'bold'))
        self.lbl_global_status.pack(side=tk.LEFT)

    def _build_middle_section(self, parent):
        """Build configuration controls and indoor unit list (middle)."""
        middle_frame = ttk.Frame(parent)
        middle_frame.grid(row=1, column=0, sticky='nsew', padx=10, pady=5)
        middle_frame.columnconfigure(0, weight=2)
        middle_frame.columnconfigure(1, weight=3)
        middle_frame.rowconfigure(0, weight=1)

        # ===== LEFT: CONFIGURATION =====
        config_frame = ttk.LabelFrame(middle_frame, text="Configuration", padding=10)
        config_frame.grid(row=0, column=0, sticky='nsew', padx=(0, 5))
        config_frame.columnconfigure(1, weight=1)

        ttk.Label(config_frame, text="Diversity:").grid(row=0, column=0, sticky='w', pady=2)
        self.var_diversity = tk.StringVar()
        self.cmb_diversity = ttk.Combobox(config_frame, textvariable=self.var_diversity, state='readonly')
        self.cmb_diversity.grid(row=0, column=1, sticky='ew', pady=2)
        self.cmb_diversity.bind('<<ComboboxSelected>>', lambda _e: self._on_diversity())

        ttk.Label(config_frame, text="Orientation:").grid(row=1, column=0, sticky='w', pady=2)
        self.var_orientation = tk.StringVar()
        orientation_frame = ttk.Frame(config_frame)
        orientation_frame.grid(row=1, column=1, sticky='w')
        for orientation in Orientation:
            ttk.Radiobutton(orientation_frame, text=orientation.label, value=orientation.value,
                            variable=self.var_orientation,
                            command=lambda: self.controller.set_orientation(self.var_orientation.get()),
                            ).pack(side=tk.LEFT, padx=2)

        ttk.Label(config_frame, text="Brand:").grid(row=2, column=0, sticky='w', pady=2)
        self.var_brand = tk.StringVar()
        brand_frame = ttk.Frame(config_frame)
        brand_frame.grid(row=2, column=1, sticky='w')
        for brand in Brand:
            ttk.Radiobutton(brand_frame, text=brand.label, value=brand.value,
                            variable=self.var_brand, command=self._on_brand,
                            ).pack(side=tk.LEFT, padx=2)

        ttk.Separator(config_frame, orient='horizontal').grid(row=3, column=0, columnspan=2, sticky='ew', pady=8)

        ttk.Label(config_frame, text="Indoor unit:").grid(row=4, column=0, sticky='w', pady=2)
        self.var_type = tk.StringVar()
        self.cmb_type = ttk.Combobox(config_frame, textvariable=self.var_type, state='readonly',
                                     values=[t.label for t in EvaporatorType])
        self.cmb_type.grid(row=4, column=1, sticky='ew', pady=2)
        self.cmb_type.bind('<<ComboboxSelected>>', lambda _e: self._refresh_nominals())

        ttk.Label(config_frame, text="Nominal:").grid(row=5, column=0, sticky='w', pady=2)
        self.var_nominal = tk.StringVar()
        self.cmb_nominal = ttk.Combobox(config_frame, textvariable=self.var_nominal, state='readonly')
        self.cmb_nominal.grid(row=5, column=1, sticky='ew', pady=2)

        ttk.Label(config_frame, text="Quantity:").grid(row=6, column=0, sticky='w', pady=2)
        self.var_quantity = tk.StringVar(value="1")
        ttk.Spinbox(config_frame, from_=1, to=10, textvariable=self.var_quantity, width=6).grid(
            row=6, column=1, sticky='w', pady=2)

        buttons = ttk.Frame(config_frame)
        buttons.grid(row=7, column=0, columnspan=2, pady=8)
        ttk.Button(buttons, text="Add", command=self._on_add).pack(side=tk.LEFT, padx=3)
        ttk.Button(buttons, text="Clear", command=self._on_clear).pack(side=tk.LEFT, padx=3)
        ttk.Button(buttons, text="Export...", command=self._export_results).pack(side=tk.LEFT, padx=3)

        self.lbl_advisories = ttk.Label(config_frame, text="", foreground='#b36b00', wraplength=380,
                                        justify=tk.LEFT)
        self.lbl_advisories.grid(row=8, column=0, columnspan=2, sticky='w', pady=(8, 0))

        # ===== RIGHT: INDOOR UNIT LIST AND SELECTION =====
        list_frame = ttk.LabelFrame(middle_frame, text="Indoor Units", padding=10)
        list_frame.grid(row=0, column=1, sticky='nsew', padx=(5, 0))
        list_frame.columnconfigure(0, weight=1)
        list_frame.rowconfigure(0, weight=1)

        columns = ('type', 'nominal', 'real', 'qty')
        self.tree = ttk.Treeview(list_frame, columns=columns, show='headings', height=8)
        for column, title, width in zip(columns, ("Type", "Nominal", "Real", "Qty"), (160, 80, 120, 60)):
            self.tree.heading(column, text=title)
            self.tree.column(column, width=width, anchor=tk.CENTER)
        self.tree.grid(row=0, column=0, sticky='nsew')

        edit_frame = ttk.Frame(list_frame)
        edit_frame.grid(row=1, column=0, sticky='w', pady=5)
        ttk.Label(edit_frame, text="Quantity:").pack(side=tk.LEFT)
        self.var_edit_quantity = tk.StringVar(value="1")
        ttk.Entry(edit_frame, textvariable=self.var_edit_quantity, width=6).pack(side=tk.LEFT, padx=3)
        ttk.Button(edit_frame, text="Set", command=self._on_set_quantity).pack(side=tk.LEFT, padx=3)
        ttk.Button(edit_frame, text="Remove", command=self._on_remove).pack(side=tk.LEFT, padx=3)

        self.txt_selection = tk.Text(list_frame, height=7, wrap='word')
        self.txt_selection.grid(row=2, column=0, sticky='nsew')
        self.txt_selection.config(state='disabled')

    def _build_chart_section(self, parent):
        """Build catalog capacity chart (bottom)."""
        chart_frame = ttk.LabelFrame(parent, text="Catalog Capacities", relief=tk.RIDGE, borderwidth=2)
        chart_frame.grid(row=2, column=0, sticky='nsew', padx=10, pady=5)

        self.fig = Figure(figsize=(12, 3.5), dpi=80)
        self.ax = self.fig.add_subplot(111)
        self.canvas = FigureCanvasTkAgg(self.fig, master=chart_frame)
        self.canvas.get_tk_widget().pack(fill=tk.BOTH, expand=True)

        self._plot_empty_chart()

    def _plot_empty_chart(self):
        """Plot empty chart with placeholder text."""
        self.ax.clear()
        self.ax.set_title('Condensing units')
        self.ax.text(0.5, 0.5, 'Add indoor units to compute a selection',
                     transform=self.ax.transAxes, ha='center', va='center',
                     fontsize=14, color='gray')
        self.canvas.draw()

    # ========== Defaults and data loading ==========

    def _load_default_params(self):
        """Load default parameters into UI widgets."""
        defaults = self.controller.get_default_params()
        self.var_brand.set(defaults['brand'])
        self.var_orientation.set(defaults['orientation'])
        self.var_type.set(EvaporatorType.parse(defaults['evaporator_type']).label)
        self.var_quantity.set(str(defaults['quantity']))
        self._refresh_diversity_options()
        self._refresh_nominals(preferred=defaults['nominal'])

    def _start_data_load(self):
        """Load catalog and factor tables in the background, then refresh."""
        # The loader thread only touches the queue; Tk is polled from its own thread
        self._load_queue = queue.Queue()
        self.controller.service.load_in_background(self._load_queue.put)
        self._poll_data_load()

    def _poll_data_load(self):
        try:
            warnings = self._load_queue.get_nowait()
        except queue.Empty:
            self._poll_id = self.window.after(LOAD_POLL_MS, self._poll_data_load)
            return
        self._poll_id = None
        self._on_data_loaded(warnings)

    def _on_data_loaded(self, warnings):
        self._refresh_diversity_options()
        self._refresh_nominals()
        self.controller.on_data_loaded(warnings)
        if warnings:
            messagebox.showwarning("Data unavailable", "\n".join(warnings))

    def _refresh_diversity_options(self):
        options = self.controller.diversity.options()
        self._diversity_labels = {DiversityView.format_option(f): f.name for f in options}
        self._diversity_labels[MAXIMUM_LABEL] = "maximum"
        self.cmb_diversity['values'] = list(self._diversity_labels)

        resolution = self.controller.diversity.select(self.controller.diversity_token)
        if resolution.is_maximum:
            self.var_diversity.set(MAXIMUM_LABEL)
        else:
            self.var_diversity.set(DiversityView.format_option(resolution.factor))

    def _refresh_nominals(self, preferred=None):
        evaporator_type = self._selected_type()
        options = self.controller.service.catalog.nominal_options(self.controller.brand, evaporator_type)
        self.cmb_nominal['values'] = [str(n) for n in options]
        if preferred is not None and preferred in options:
            self.var_nominal.set(str(preferred))
        elif options and self.var_nominal.get() not in self.cmb_nominal['values']:
            self.var_nominal.set(str(options[0]))

    def _selected_type(self) -> EvaporatorType:
        label = self.var_type.get()
        for evaporator_type in EvaporatorType:
            if evaporator_type.label == label:
                return evaporator_type
        return EvaporatorType.HI_WALL

    # ========== Event handlers ==========

    def _on_diversity(self):
        self.controller.set_diversity(self._diversity_labels.get(self.var_diversity.get()))

    def _on_brand(self):
        self.controller.set_brand(self.var_brand.get())
        self._refresh_nominals()

    def _on_add(self):
        self.controller.add_evaporator(self._selected_type(), self.var_nominal.get(), self.var_quantity.get())

    def _on_clear(self):
        self.controller.clear()
        self._load_default_params()

    def _selected_index(self) -> Optional[int]:
        selected = self.tree.selection()
        if not selected:
            messagebox.showinfo("Indoor units", "Select a line first.")
            return None
        return self.tree.index(selected[0])

    def _on_set_quantity(self):
        index = self._selected_index()
        if index is not None:
            self.controller.set_quantity(index, self.var_edit_quantity.get())

    def _on_remove(self):
        index = self._selected_index()
        if index is not None:
            self.controller.remove(index)

    # ========== Rendering ==========

    def _on_report(self, report: Optional[SizingReport]):
        """Observer callback: redraw everything from a new report."""
        self._update_list()
        self._update_metrics(report)
        self._update_chart(report)

    def _update_list(self):
        self.tree.delete(*self.tree.get_children())
        for item in self.controller.demand.selections:
            real = f"{item.real_capacity:,.1f}" + (" *" if item.estimated else "")
            self.tree.insert('', tk.END, values=(item.evaporator_type.label, item.nominal_capacity,
                                                 real, item.quantity))

    def _set_selection_text(self, text: str):
        self.txt_selection.config(state='normal')
        self.txt_selection.delete('1.0', tk.END)
        self.txt_selection.insert('1.0', text)
        self.txt_selection.config(state='disabled')

    def _update_metrics(self, report: Optional[SizingReport]):
        """Update metrics cards and selection text."""
        result = report.active if report is not None else None
        if result is None:
            for value, status in self.metric_labels.values():
                value.config(text="--")
                status.config(text="")
            self.lbl_advisories.config(text="")
            self._set_selection_text("Add indoor units to see the results")
            self.lbl_global_status.config(text="● Waiting for indoor units", foreground='gray')
            return

        unit = result.capacity_unit
        self.metric_labels['demand'][0].config(text=f"{result.total_demand:,.0f}")
        self.metric_labels['demand'][1].config(text=unit)
        self.metric_labels['required'][0].config(text=f"{result.required_minimum_capacity:,.0f}")
        self.metric_labels['required'][1].config(text=unit)

        if result.ideal_match is not None:
            self.metric_labels['ideal'][0].config(text=result.ideal_match.model)
            self.metric_labels['ideal'][1].config(
                text=f"{result.ideal_match.entry.capacity_rating} HP - {result.ideal_match.real_capacity:,.0f}")
        else:
            self.metric_labels['ideal'][0].config(text="None")
            self.metric_labels['ideal'][1].config(text="no suitable unit")

        if result.is_maximum_capacity:
            self.metric_labels['diversity'][0].config(text="MAX")
            self.metric_labels['diversity'][1].config(text="largest unit")
        else:
            self.metric_labels['diversity'][0].config(text=f"{result.effective_percent}%")
            capped = " (capped)" if result.flags.get('factor_capped') else ""
            self.metric_labels['diversity'][1].config(text=f"selected {result.selected_percent}%{capped}")

        self._set_selection_text("\n".join([
            CondenserView.format_match("Ideal", result.ideal_match, unit),
            CondenserView.format_match("One below", result.one_below, unit),
            CondenserView.format_match("One above", result.one_above, unit),
        ]))
        self.lbl_advisories.config(text="\n".join(f"⚠ {a}" for a in report.advisories))

        if result.flags.get('no_match_found'):
            self.lbl_global_status.config(text="● No suitable unit", foreground='red')
        elif report.advisories:
            self.lbl_global_status.config(text="● Check advisories", foreground='orange')
        else:
            self.lbl_global_status.config(text="● OK", foreground='green')

    def _update_chart(self, report: Optional[SizingReport]):
        """Bar chart of the catalog table with the required capacity line."""
        result = report.active if report is not None else None
        if result is None:
            self._plot_empty_chart()
            return

        table = self.controller.service.catalog.condensers(result.brand, result.orientation)
        self.ax.clear()
        if not table:
            self._plot_empty_chart()
            return

        positions = np.arange(len(table))
        capacities = np.array([entry.real_capacity for entry in table])
        highlighted = {
            match.entry: color for match, color in (
                (result.ideal_match, 'tab:green'),
                (result.one_below, 'tab:red'),
                (result.one_above, 'tab:blue'),
            ) if match is not None
        }
        colors = [highlighted.get(entry, 'lightgray') for entry in table]

        self.ax.bar(positions, capacities, color=colors, edgecolor='black', linewidth=0.5)
        self.ax.axhline(result.required_minimum_capacity, color='darkorange', linestyle='--',
                        linewidth=2, label=f"Required {result.required_minimum_capacity:,.0f}")
        self.ax.set_xticks(positions)
        self.ax.set_xticklabels([f"{e.capacity_rating} HP" for e in table], fontsize=8)
        self.ax.set_ylabel(result.capacity_unit)
        self.ax.set_title(f"{result.brand.label} - {result.orientation.label}")
        self.ax.grid(True, axis='y', alpha=0.3)
        self.ax.legend(loc='upper left', fontsize=9)
        self.fig.tight_layout()
        self.canvas.draw()

    def _export_results(self):
        """Export the current report to a JSON file."""
        report = self.controller.last_report
        if not report:
            messagebox.showwarning("Export", "No result to export. Add indoor units first.")
            return

        from tkinter import filedialog

        filename = filedialog.asksaveasfilename(
            defaultextension=".json",
            filetypes=[("JSON files", "*.json"), ("All files", "*.*")],
        )
        if not filename:
            return
        try:
            with open(filename, 'w', encoding='utf-8') as f:
                json.dump(report_to_dict(report), f, indent=2)
        except OSError as e:
            messagebox.showerror("Export", f"Export failed:\n{e}")
            return
        messagebox.showinfo("Export", f"Results exported to:\n{filename}")

    def _close(self):
        if self._poll_id is not None:
            self.window.after_cancel(self._poll_id)
        self._unsubscribe()
        self.window.destroy()


def open_sizing_dashboard(parent, controller: Optional[SizingController] = None):
    """Open sizing dashboard window."""
    return SizingDashboardView(parent, controller)
