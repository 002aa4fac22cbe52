# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Grid composition: ``plot_grid`` and the helpers built on top of it."""

from __future__ import annotations

import logging
from collections import defaultdict
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Sequence, Tuple

from matplotlib.artist import Artist
from matplotlib.figure import FigureBase

from .canvas import Canvas
from .config import get_defaults
from .layout import GridLayout, auto_labels, parse_align, parse_axis, recycle, scale_rect
from .renderables import Annotations, Blank, LabelSpec, as_renderable

if TYPE_CHECKING:
    from matplotlib.axes import Axes

    from .render import RenderContext

log = logging.getLogger(__name__)

__all__ = [
    "GridCanvas",
    "add_sub",
    "align_edges",
    "plot_grid",
    "stamp",
    "stamp_bad",
    "stamp_good",
    "stamp_ugly",
    "stamp_wrong",
]


def align_edges(axes: Sequence["Axes"], horizontal: bool, low: bool, high: bool) -> None:
    """Give ``axes`` common panel edges.

    ``horizontal=True`` works on left (``low``) and right (``high``) edges,
    otherwise on bottom and top. The common edge is the most inset one, so
    every panel keeps room for its own labels.
    """
    if len(axes) < 2 or not (low or high):
        return
    boxes = [ax.get_window_extent() for ax in axes]
    if horizontal:
        lows = [b.x0 for b in boxes]
        highs = [b.x1 for b in boxes]
    else:
        lows = [b.y0 for b in boxes]
        highs = [b.y1 for b in boxes]
    target_low = max(lows)
    target_high = min(highs)

    for ax, box, cur_low, cur_high in zip(axes, boxes, lows, highs):
        new_low = target_low if low else cur_low
        new_high = target_high if high else cur_high
        if new_high - new_low <= 0:
            log.warning("Alignment would collapse a panel; leaving it in place")
            continue
        parent = ax.figure.bbox
        if horizontal:
            x0, x1, y0, y1 = new_low, new_high, box.y0, box.y1
        else:
            x0, x1, y0, y1 = box.x0, box.x1, new_low, new_high
        ax.set_position(
            [
                (x0 - parent.x0) / parent.width,
                (y0 - parent.y0) / parent.height,
                (x1 - x0) / parent.width,
                (y1 - y0) / parent.height,
            ]
        )


class GridCanvas(Canvas):
    """Canvas produced by :func:`plot_grid`; knows which layer sits in which cell."""

    def __init__(self, layout: GridLayout, align: str = "none", axis: str = "") -> None:
        super().__init__()
        self.layout = layout
        self.align = align
        self.axis = axis

    def _after_render(self, placed: List[List["Axes"]], ctx: "RenderContext") -> None:
        if self.align == "none":
            return
        entries: List[Tuple[int, int, "Axes"]] = []
        skipped = 0
        for layer, axes in zip(self.layers, placed):
            if layer.cell is None or isinstance(layer.renderable, Blank):
                continue
            if len(axes) != 1:
                skipped += 1
                continue
            row, col = layer.cell
            entries.append((row, col, axes[0]))
        if skipped:
            log.warning(
                "%d cell(s) are not single-axes plots and cannot be aligned; "
                "pass drawing functions to align them",
                skipped,
            )
        if entries:
            ctx.request_alignment(lambda renderer: self._align(entries))

    def _align(self, entries: List[Tuple[int, int, "Axes"]]) -> None:
        sides = self.axis
        if "v" in self.align:
            by_col: Dict[int, List["Axes"]] = defaultdict(list)
            for _row, col, ax in entries:
                by_col[col].append(ax)
            for axes in by_col.values():
                align_edges(axes, horizontal=True, low=not sides or "l" in sides, high=not sides or "r" in sides)
        if "h" in self.align:
            by_row: Dict[int, List["Axes"]] = defaultdict(list)
            for row, _col, ax in entries:
                by_row[row].append(ax)
            for axes in by_row.values():
                align_edges(axes, horizontal=False, low=not sides or "b" in sides, high=not sides or "t" in sides)

    def __repr__(self) -> str:
        return (
            f"GridCanvas({self.layout.nrow}x{self.layout.ncol}, "
            f"layers={len(self.layers)}, align={self.align!r})"
        )


def _unpack_plots(plots: Tuple[Any, ...]) -> List[Any]:
    if len(plots) == 1 and isinstance(plots[0], (list, tuple)):
        items = plots[0]
        artists_only = items and all(
            isinstance(item, Artist) and not isinstance(item, FigureBase) for item in items
        )
        if not artists_only:
            return list(items)
    return list(plots)


def plot_grid(
    *plots: Any,
    nrow: Optional[int] = None,
    ncol: Optional[int] = None,
    byrow: bool = True,
    rel_widths: Any = 1,
    rel_heights: Any = 1,
    labels: Any = None,
    label_size: Optional[float] = None,
    label_fontfamily: Optional[str] = None,
    label_fontface: Optional[str] = None,
    label_color: str = "black",
    label_x: Any = None,
    label_y: Any = None,
    hjust: Any = None,
    vjust: Any = None,
    align: str = "none",
    axis: str = "none",
    scale: Any = 1.0,
) -> GridCanvas:
    """Arrange plots in a grid.

    Plots may be passed as separate arguments or as one list; ``None``
    leaves a cell empty. ``labels="AUTO"`` (or ``"auto"``) labels the panels
    A, B, C... in fill order. ``rel_widths``/``rel_heights`` give relative
    column widths and row heights. ``align`` ('h', 'v' or 'hv') lines up the
    panel edges of single-axes plots along rows and/or columns; ``axis``
    ('l', 'r', 't', 'b' or combinations) restricts which edges move.
    ``label_x``, ``label_y``, ``hjust``, ``vjust`` and ``scale`` may be given
    per plot.

    Example::

        plot_grid(scatter, boxes, labels="AUTO", rel_widths=[2, 1])
    """
    items = _unpack_plots(plots)
    defaults = get_defaults()
    layout = GridLayout.build(
        len(items), nrow=nrow, ncol=ncol, byrow=byrow, rel_widths=rel_widths, rel_heights=rel_heights
    )
    n = layout.n
    texts = auto_labels(labels, n)
    scales = recycle(scale, n)
    label_xs = recycle(defaults.label_x if label_x is None else label_x, n)
    label_ys = recycle(defaults.label_y if label_y is None else label_y, n)
    hjusts = recycle(defaults.label_hjust if hjust is None else hjust, n)
    vjusts = recycle(defaults.label_vjust if vjust is None else vjust, n)

    grid = GridCanvas(layout, align=parse_align(align), axis=parse_axis(axis))
    specs: List[LabelSpec] = []
    for index, (plot, cell) in enumerate(zip(items, layout.cells())):
        if plot is None:
            continue
        rect = scale_rect(*cell.rect, float(scales[index]))
        grid.add_layer(as_renderable(plot), *rect, cell=(cell.row, cell.col))
        if texts[index]:
            specs.append(
                LabelSpec(
                    text=texts[index],
                    x=cell.x + float(label_xs[index]) * cell.width,
                    y=cell.y + float(label_ys[index]) * cell.height,
                    hjust=float(hjusts[index]),
                    vjust=float(vjusts[index]),
                    size=label_size or defaults.label_size,
                    fontfamily=label_fontfamily,
                    fontface=label_fontface or defaults.label_fontface,
                    color=label_color,
                )
            )
    if specs:
        grid.add_layer(Annotations(tuple(specs)))
    log.debug("plot_grid: %d plots in %d x %d cells", n, layout.nrow, layout.ncol)
    return grid


def add_sub(
    plot: Any,
    label: str,
    x: float = 0.5,
    y: float = 0.5,
    hjust: float = 0.5,
    vjust: float = 0.5,
    size: float = 14.0,
    fontface: str = "plain",
    fontfamily: Optional[str] = None,
    color: str = "black",
    rel_height: float = 0.1,
) -> GridCanvas:
    """Put a caption (sub-title) underneath a plot."""
    caption = Canvas().draw_label(
        label,
        x=x,
        y=y,
        hjust=hjust,
        vjust=vjust,
        size=size,
        fontface=fontface,
        fontfamily=fontfamily,
        color=color,
    )
    return plot_grid(plot, caption, ncol=1, rel_heights=[1.0, rel_height])


def stamp(
    plot: Any,
    label: str,
    color: str,
    alpha: float = 0.3,
    angle: float = 30.0,
    size: float = 48.0,
) -> Canvas:
    """Overlay a large rotated word across a plot."""
    return Canvas(plot).draw_label(
        label,
        size=size,
        color=color,
        alpha=alpha,
        angle=angle,
        fontface="bold",
    )


def stamp_good(plot: Any, **kwargs: Any) -> Canvas:
    return stamp(plot, "Good", "#009E73", **kwargs)


def stamp_bad(plot: Any, **kwargs: Any) -> Canvas:
    return stamp(plot, "Bad", "#D55E00", **kwargs)


def stamp_wrong(plot: Any, **kwargs: Any) -> Canvas:
    return stamp(plot, "Wrong", "#D55E00", **kwargs)


def stamp_ugly(plot: Any, **kwargs: Any) -> Canvas:
    return stamp(plot, "Ugly", "#E69F00", **kwargs)
