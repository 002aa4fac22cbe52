# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Shared legends: extract a legend from one plot and place it in its own cell."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, List, Optional, Tuple

from matplotlib.figure import Figure, FigureBase

from .render import RenderContext
from .renderables import (
    AxesPlot,
    FigurePlot,
    FigureSnapshot,
    Renderable,
    as_renderable,
    iter_legends,
)

if TYPE_CHECKING:
    from matplotlib.artist import Artist
    from matplotlib.axes import Axes
    from matplotlib.legend import Legend

log = logging.getLogger(__name__)

__all__ = ["LegendPanel", "get_legend", "without_legend"]


@dataclass(frozen=True, eq=False)
class LegendPanel(Renderable):
    """A legend drawn on its own, centred (by default) in its cell."""

    handles: Tuple["Artist", ...]
    labels: Tuple[str, ...]
    loc: str = "center"
    ncol: int = 1
    title: Optional[str] = None
    fontsize: Optional[float] = None
    frameon: bool = False

    def horizontal(self) -> "LegendPanel":
        """Same legend laid out in a single row."""
        return replace(self, ncol=max(len(self.labels), 1))

    def render(self, container: FigureBase, ctx: RenderContext) -> List["Axes"]:
        container.legend(
            list(self.handles),
            list(self.labels),
            loc=self.loc,
            ncol=self.ncol,
            title=self.title,
            fontsize=self.fontsize,
            frameon=self.frameon,
        )
        return []


def _legend_entries(leg: "Legend") -> List[Tuple["Artist", str]]:
    texts = [t.get_text() for t in leg.get_texts()]
    return [(h, lbl) for h, lbl in zip(leg.legend_handles, texts) if h is not None]


def _legend_title(leg: "Legend") -> Optional[str]:
    title = leg.get_title().get_text()
    return title or None


def _walk_axes(container: FigureBase) -> List["Axes"]:
    axes = list(container.axes)
    for sub in container.subfigs:
        axes.extend(_walk_axes(sub))
    return axes


def _entries_from_figure(fig: FigureBase) -> Tuple[List[Tuple["Artist", str]], Optional[str]]:
    """Legend entries of a figure: drawn legends first, then labelled artists."""
    for leg in iter_legends(fig):
        entries = _legend_entries(leg)
        if entries:
            return entries, _legend_title(leg)
    entries: List[Tuple["Artist", str]] = []
    for ax in _walk_axes(fig):
        handles, labels = ax.get_legend_handles_labels()
        entries.extend(zip(handles, labels))
    return entries, None


def _dedupe(entries: List[Tuple["Artist", str]]) -> List[Tuple["Artist", str]]:
    seen = set()
    unique = []
    for handle, label in entries:
        if label in seen:
            continue
        seen.add(label)
        unique.append((handle, label))
    return unique


def get_legend(
    plot: Any,
    loc: str = "center",
    ncol: int = 1,
    title: Optional[str] = None,
    fontsize: Optional[float] = None,
    frameon: bool = False,
) -> LegendPanel:
    """Extract the legend of ``plot`` as a standalone renderable.

    Works with a Figure (its legends, or labelled artists when it has none)
    and with drawing functions, which are drawn on a scratch figure first.
    """
    source = plot if isinstance(plot, Figure) else as_renderable(plot)
    if isinstance(source, LegendPanel):
        return source
    if isinstance(source, FigureSnapshot):
        source = source.figure

    if isinstance(source, Figure):
        entries, found_title = _entries_from_figure(source)
    elif isinstance(source, (AxesPlot, FigurePlot)):
        # Keep the scratch legend even if the plot is marked legend-free.
        scratch = Figure()
        probe = replace(source, legend=True)
        probe.render(scratch, RenderContext(dpi=scratch.dpi))
        entries, found_title = _entries_from_figure(scratch)
    else:
        raise TypeError(f"Cannot extract a legend from {type(source).__name__}")

    entries = _dedupe(entries)
    if not entries:
        raise ValueError("Plot has no legend entries to extract; label its artists first")
    log.debug("Extracted legend with %d entries", len(entries))
    handles, labels = zip(*entries)
    return LegendPanel(
        handles=tuple(handles),
        labels=tuple(labels),
        loc=loc,
        ncol=ncol,
        title=title if title is not None else found_title,
        fontsize=fontsize,
        frameon=frameon,
    )


def without_legend(plot: Any) -> Renderable:
    """Return a copy of ``plot`` that renders without any legend."""
    renderable = as_renderable(plot)
    if isinstance(renderable, (AxesPlot, FigurePlot, FigureSnapshot)):
        return replace(renderable, legend=False)
    raise TypeError(f"{type(renderable).__name__} has no legend to remove")
