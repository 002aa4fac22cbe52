# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Figure building for composed plots.

Renderables draw into Matplotlib figures or subfigures. After everything has
been drawn once, a single Agg pass measures every plot cell and moves its
axes so tick labels, axis labels, titles and legends stay inside the cell,
then runs any alignment requested by a grid. Rendering never touches pyplot
state, so the same composition can be rebuilt headless any number of times.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Callable, List, Optional, Sequence, Tuple

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.gridspec import GridSpec
from matplotlib.transforms import Bbox

from .config import get_defaults
from .renderables import as_renderable

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.backend_bases import RendererBase
    from matplotlib.figure import FigureBase, SubFigure

log = logging.getLogger(__name__)

_MIN_PAGE_IN = 0.5
_MAX_PAGE_IN = 50.0
# Below this share of the cell the fitted panel would be unreadable.
_MIN_PANEL_FRACTION = 0.15

__all__ = [
    "RenderContext",
    "build_figure",
    "fit_axes_to_cell",
    "subfigure_at",
]


@dataclass
class RenderContext:
    """Per-build state shared by all renderables of one figure."""

    dpi: float
    theme: Optional[str] = None
    fit_pad_in: float = 0.05
    fit_tasks: List[Tuple["FigureBase", List["Axes"]]] = field(default_factory=list)
    align_tasks: List[Callable[["RendererBase"], None]] = field(default_factory=list)

    def request_fit(self, container: "FigureBase", axes: Sequence["Axes"]) -> None:
        if axes:
            self.fit_tasks.append((container, list(axes)))

    def request_alignment(self, task: Callable[["RendererBase"], None]) -> None:
        self.align_tasks.append(task)

    def finalize(self, fig: Figure) -> None:
        """Measure once with Agg, fit plot cells, then align grids."""
        if not self.fit_tasks and not self.align_tasks:
            return
        canvas = FigureCanvasAgg(fig)
        canvas.draw()
        renderer = canvas.get_renderer()
        pad_px = self.fit_pad_in * fig.dpi
        fitted = 0
        for container, axes in self.fit_tasks:
            if fit_axes_to_cell(container, axes, renderer, pad_px):
                fitted += 1
        log.debug("Fitted %d of %d plot cells", fitted, len(self.fit_tasks))
        for task in self.align_tasks:
            task(renderer)


def subfigure_at(
    container: "FigureBase",
    x: float,
    y: float,
    width: float,
    height: float,
    **kwargs: Any,
) -> Optional["SubFigure"]:
    """Add a subfigure covering a unit-coordinate box of ``container``.

    The box is clipped to the container; a box entirely outside it yields
    ``None``.
    """
    if width <= 0 or height <= 0:
        raise ValueError(f"Layer width and height must be positive, got {width} x {height}")
    x0 = min(max(x, 0.0), 1.0)
    x1 = min(max(x + width, 0.0), 1.0)
    y0 = min(max(y, 0.0), 1.0)
    y1 = min(max(y + height, 0.0), 1.0)
    if x1 <= x0 or y1 <= y0:
        log.warning("Layer at (%.3f, %.3f) size %.3f x %.3f lies outside the canvas", x, y, width, height)
        return None
    if (x0, y0, x1, y1) != (x, y, x + width, y + height):
        log.debug("Layer clipped to the canvas: (%.3f, %.3f)-(%.3f, %.3f)", x0, y0, x1, y1)

    # 3x3 grid whose middle cell is the requested box; ratios may be zero.
    grid = GridSpec(
        3,
        3,
        figure=container,
        width_ratios=[x0, x1 - x0, 1.0 - x1],
        height_ratios=[1.0 - y1, y1 - y0, y0],
        left=0.0,
        right=1.0,
        bottom=0.0,
        top=1.0,
        wspace=0.0,
        hspace=0.0,
    )
    return container.add_subfigure(grid[1, 1], **kwargs)


def fit_axes_to_cell(
    container: "FigureBase",
    axes: Sequence["Axes"],
    renderer: "RendererBase",
    pad_px: float,
) -> bool:
    """Move ``axes`` so their decorations fit inside ``container``.

    All axes of the cell are scaled together, so multi-panel cells keep their
    internal geometry. Returns ``False`` when the cell is left untouched.
    """
    visible = [ax for ax in axes if ax.get_visible()]
    if not visible:
        return False
    cell = container.bbox
    if cell.width <= 0 or cell.height <= 0:
        return False
    try:
        boxes = [ax.get_window_extent(renderer) for ax in visible]
        inner = Bbox.union(boxes)
        tight_boxes = [ax.get_tightbbox(renderer) for ax in visible]
        tight = Bbox.union([b for b in tight_boxes if b is not None] + [inner])
    except Exception:
        log.debug("Failed to measure cell contents", exc_info=True)
        return False
    if inner.width <= 0 or inner.height <= 0:
        return False

    left = inner.x0 - tight.x0 + pad_px
    right = tight.x1 - inner.x1 + pad_px
    bottom = inner.y0 - tight.y0 + pad_px
    top = tight.y1 - inner.y1 + pad_px
    avail_w = cell.width - left - right
    avail_h = cell.height - bottom - top
    if avail_w < _MIN_PANEL_FRACTION * cell.width or avail_h < _MIN_PANEL_FRACTION * cell.height:
        log.warning(
            "Cell of %.0f x %.0f px is too small for its labels; keeping default placement",
            cell.width,
            cell.height,
        )
        return False

    sx = avail_w / inner.width
    sy = avail_h / inner.height
    # Twinned axes share positions; compute everything before moving anything.
    positions = []
    for ax, box in zip(visible, boxes):
        x0 = cell.x0 + left + (box.x0 - inner.x0) * sx
        y0 = cell.y0 + bottom + (box.y0 - inner.y0) * sy
        positions.append(
            (
                ax,
                [
                    (x0 - cell.x0) / cell.width,
                    (y0 - cell.y0) / cell.height,
                    box.width * sx / cell.width,
                    box.height * sy / cell.height,
                ],
            )
        )
    for ax, pos in positions:
        ax.set_position(pos)
    return True


def _clamp_page_size(width: float, height: float) -> Tuple[float, float]:
    """Keep the page within sane physical bounds."""
    w = min(max(float(width), _MIN_PAGE_IN), _MAX_PAGE_IN)
    h = min(max(float(height), _MIN_PAGE_IN), _MAX_PAGE_IN)
    if (w, h) != (float(width), float(height)):
        log.warning("Page size %.2f x %.2f in clamped to %.2f x %.2f in", width, height, w, h)
    return w, h


def build_figure(
    plot: Any,
    width: float = 7.0,
    height: float = 5.0,
    dpi: Optional[float] = None,
    background: str = "white",
    theme: Optional[str] = None,
) -> Figure:
    """Render anything composable into a new Figure of ``width`` x ``height`` inches.

    ``theme=None`` uses the configured default theme; ``theme="none"`` leaves
    Matplotlib's rcParams alone.
    """
    defaults = get_defaults()
    renderable = as_renderable(plot)
    width, height = _clamp_page_size(width, height)
    dpi = float(dpi or defaults.dpi)

    fig = Figure(figsize=(width, height), dpi=dpi)
    if str(background).lower() == "transparent":
        fig.patch.set_facecolor("none")
        fig.patch.set_alpha(0.0)
    else:
        fig.patch.set_facecolor(background)

    ctx = RenderContext(
        dpi=dpi,
        theme=theme if theme is not None else defaults.theme,
        fit_pad_in=defaults.fit_pad_in,
    )
    renderable.render(fig, ctx)
    ctx.finalize(fig)
    log.debug("Built %s as %.2f x %.2f in figure at %.0f dpi", type(renderable).__name__, width, height, dpi)
    return fig
