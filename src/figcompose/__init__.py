# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Compose Matplotlib figures: grids, shared legends and layered canvases."""

from figcompose.canvas import Canvas
from figcompose.config import ComposeDefaults, get_defaults
from figcompose.datasets import list_datasets, load_dataset
from figcompose.export import export_figure, plot_size, save_plot
from figcompose.grid import (
    GridCanvas,
    add_sub,
    plot_grid,
    stamp,
    stamp_bad,
    stamp_good,
    stamp_ugly,
    stamp_wrong,
)
from figcompose.legends import LegendPanel, get_legend, without_legend
from figcompose.render import build_figure
from figcompose.renderables import (
    Annotations,
    AxesPlot,
    Blank,
    FigurePlot,
    FigureSnapshot,
    ImageSource,
    LabelSpec,
    Primitives,
    Renderable,
    as_renderable,
)
from figcompose.themes import THEMES, apply_theme, background_grid, get_theme, panel_border, theme_context

__version__ = "0.1.0"

__all__ = [
    "Annotations",
    "AxesPlot",
    "Blank",
    "Canvas",
    "ComposeDefaults",
    "FigurePlot",
    "FigureSnapshot",
    "GridCanvas",
    "ImageSource",
    "LabelSpec",
    "LegendPanel",
    "Primitives",
    "Renderable",
    "THEMES",
    "add_sub",
    "apply_theme",
    "as_renderable",
    "background_grid",
    "build_figure",
    "export_figure",
    "get_defaults",
    "get_legend",
    "get_theme",
    "list_datasets",
    "load_dataset",
    "panel_border",
    "plot_grid",
    "plot_size",
    "save_plot",
    "stamp",
    "stamp_bad",
    "stamp_good",
    "stamp_ugly",
    "stamp_wrong",
    "theme_context",
    "without_legend",
    "__version__",
]
