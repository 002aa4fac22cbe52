# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Saving composed figures to disk."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Optional

from matplotlib.colors import is_color_like
from matplotlib.figure import Figure

from .config import get_defaults
from .render import build_figure

log = logging.getLogger(__name__)

__all__ = ["export_figure", "plot_size", "save_plot"]


def _apply_export_background(fig: Figure, background: str) -> Dict[str, object]:
    """Set the figure background and return savefig kwargs for it."""
    if str(background).lower() == "transparent":
        fig.patch.set_facecolor("none")
        fig.patch.set_alpha(0.0)
        return {"transparent": True}
    if not is_color_like(background):
        raise ValueError(f"background must be 'transparent' or a color, got {background!r}")
    fig.patch.set_facecolor(background)
    fig.patch.set_alpha(1.0)
    return {"transparent": False, "facecolor": background, "edgecolor": background}


def export_figure(
    fig: Figure,
    path: str | Path,
    dpi: Optional[float] = None,
    background: str = "white",
) -> Path:
    """Write ``fig`` to ``path``; the format follows the file extension."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    dpi = float(dpi or fig.dpi)
    w_in, h_in = fig.get_size_inches()
    width_px = w_in * dpi
    height_px = h_in * dpi

    max_dim = get_defaults().max_export_px
    if width_px > max_dim or height_px > max_dim:
        scale = max_dim / max(width_px, height_px)
        old_dpi = dpi
        dpi = dpi * scale
        log.warning(
            "Export size clamped from %.0f×%.0f px (%.0f dpi) to %.0f×%.0f px (%.0f dpi) "
            "to stay under max_dim=%d",
            width_px,
            height_px,
            old_dpi,
            w_in * dpi,
            h_in * dpi,
            dpi,
            max_dim,
        )

    savefig_kwargs = _apply_export_background(fig, background)
    fig.savefig(path, dpi=dpi, **savefig_kwargs)
    log.info("Saved %s (%.2f x %.2f in at %.0f dpi)", path, w_in, h_in, dpi)
    return path


def plot_size(
    ncol: int = 1,
    nrow: int = 1,
    base_height: Optional[float] = None,
    base_asp: Optional[float] = None,
    base_width: Optional[float] = None,
) -> tuple[float, float]:
    """Page size in inches for ``ncol`` x ``nrow`` panels of a base size."""
    if ncol <= 0 or nrow <= 0:
        raise ValueError(f"ncol and nrow must be positive, got {ncol} x {nrow}")
    defaults = get_defaults()
    base_asp = float(base_asp or defaults.base_asp)
    if base_asp <= 0:
        raise ValueError(f"base_asp must be positive, got {base_asp}")
    if base_width is None:
        base_height = float(base_height or defaults.base_height)
        base_width = base_height * base_asp
    elif base_height is None:
        base_height = float(base_width) / base_asp
    return float(base_width) * ncol, float(base_height) * nrow


def save_plot(
    path: str | Path,
    plot: Any,
    ncol: int = 1,
    nrow: int = 1,
    base_height: Optional[float] = None,
    base_asp: Optional[float] = None,
    base_width: Optional[float] = None,
    dpi: Optional[float] = None,
    background: str = "white",
    theme: Optional[str] = None,
) -> Path:
    """Build ``plot`` at a size derived from one panel's size and save it.

    ``ncol``/``nrow`` describe how many panels the plot holds, so a 2 x 1
    grid gets twice the base width.
    """
    width, height = plot_size(ncol, nrow, base_height, base_asp, base_width)
    fig = build_figure(plot, width=width, height=height, dpi=dpi, background=background, theme=theme)
    return export_figure(fig, path, dpi=dpi, background=background)
