# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Layered drawing canvas in unit coordinates."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, List, Optional, Sequence, Tuple

from matplotlib.lines import Line2D

from .layout import justify_rect, recycle, scale_rect
from .render import subfigure_at
from .renderables import Annotations, ImageSource, LabelSpec, Primitives, Renderable, as_renderable

if TYPE_CHECKING:
    from matplotlib.axes import Axes
    from matplotlib.figure import FigureBase

    from .render import RenderContext

__all__ = ["Canvas", "Layer", "FIGURE_LABEL_POSITIONS"]

# position -> (x, y, hjust, vjust)
FIGURE_LABEL_POSITIONS = {
    "top.left": (0.01, 0.99, 0.0, 1.0),
    "top": (0.5, 0.99, 0.5, 1.0),
    "top.right": (0.99, 0.99, 1.0, 1.0),
    "bottom.left": (0.01, 0.01, 0.0, 0.0),
    "bottom": (0.5, 0.01, 0.5, 0.0),
    "bottom.right": (0.99, 0.01, 1.0, 0.0),
    "left": (0.01, 0.5, 0.0, 0.5),
    "right": (0.99, 0.5, 1.0, 0.5),
}


@dataclass(eq=False)
class Layer:
    renderable: Renderable
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0
    cell: Optional[Tuple[int, int]] = None


class Canvas(Renderable):
    """Drawing surface where plots, images, text and shapes are layered.

    Coordinates run from 0 to 1 in both directions with the origin at the
    bottom-left. Layers are drawn in the order they were added, each one on
    top of the previous ones. All ``draw_*`` methods return the canvas so
    calls can be chained::

        Canvas(plot).draw_label("DRAFT", angle=45, size=40, alpha=0.3)
    """

    def __init__(self, plot: Any = None, background: Optional[str] = None) -> None:
        self.layers: List[Layer] = []
        self.background = background
        if plot is not None:
            self.draw_plot(plot)

    def add_layer(
        self,
        renderable: Renderable,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 1.0,
        height: float = 1.0,
        cell: Optional[Tuple[int, int]] = None,
    ) -> Layer:
        if width <= 0 or height <= 0:
            raise ValueError(f"Layer width and height must be positive, got {width} x {height}")
        layer = Layer(renderable, float(x), float(y), float(width), float(height), cell)
        self.layers.append(layer)
        return layer

    def draw_plot(
        self,
        plot: Any,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 1.0,
        height: float = 1.0,
        scale: float = 1.0,
        hjust: float = 0.0,
        vjust: float = 0.0,
    ) -> "Canvas":
        """Place a plot in the box (x, y, width, height)."""
        rect = justify_rect(x, y, width, height, hjust, vjust)
        rect = scale_rect(*rect, scale)
        self.add_layer(as_renderable(plot), *rect)
        return self

    def draw_label(
        self,
        label: str,
        x: float = 0.5,
        y: float = 0.5,
        hjust: float = 0.5,
        vjust: float = 0.5,
        size: float = 14.0,
        fontfamily: Optional[str] = None,
        fontface: str = "plain",
        color: str = "black",
        angle: float = 0.0,
        alpha: float = 1.0,
        lineheight: float = 1.2,
    ) -> "Canvas":
        spec = LabelSpec(
            text=str(label),
            x=x,
            y=y,
            hjust=hjust,
            vjust=vjust,
            size=size,
            fontfamily=fontfamily,
            fontface=fontface,
            color=color,
            angle=angle,
            alpha=alpha,
            lineheight=lineheight,
        )
        self.add_layer(Annotations((spec,)))
        return self

    def draw_text(
        self,
        texts: Any,
        x: Any = 0.5,
        y: Any = 0.5,
        size: Any = 12.0,
        hjust: Any = 0.5,
        vjust: Any = 0.5,
        fontface: Any = "plain",
        color: Any = "black",
        angle: Any = 0.0,
        fontfamily: Optional[str] = None,
    ) -> "Canvas":
        """Draw several labels at once; every parameter is recycled per text."""
        texts = [texts] if isinstance(texts, str) else list(texts)
        if not texts:
            return self
        n = len(texts)
        columns = [recycle(v, n) for v in (x, y, size, hjust, vjust, fontface, color, angle)]
        specs = tuple(
            LabelSpec(
                text=str(text),
                x=xi,
                y=yi,
                size=si,
                hjust=hj,
                vjust=vj,
                fontface=ff,
                color=ci,
                angle=ai,
                fontfamily=fontfamily,
            )
            for text, xi, yi, si, hj, vj, ff, ci, ai in zip(texts, *columns)
        )
        self.add_layer(Annotations(specs))
        return self

    def draw_image(
        self,
        image: Any,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 1.0,
        height: float = 1.0,
        scale: float = 1.0,
        hjust: float = 0.0,
        vjust: float = 0.0,
        halign: float = 0.5,
        valign: float = 0.5,
        interpolate: bool = True,
    ) -> "Canvas":
        """Draw a raster image inside the box, keeping its aspect ratio."""
        rect = justify_rect(x, y, width, height, hjust, vjust)
        rect = scale_rect(*rect, scale)
        source = ImageSource(image, interpolate=interpolate, halign=halign, valign=valign)
        self.add_layer(source, *rect)
        return self

    def draw_line(
        self,
        x: Sequence[float],
        y: Sequence[float],
        color: str = "black",
        linewidth: float = 0.5,
        linestyle: str = "-",
        alpha: float = 1.0,
    ) -> "Canvas":
        """Draw a polyline through the given canvas coordinates."""
        xs = [float(v) for v in x]
        ys = [float(v) for v in y]
        if len(xs) != len(ys) or len(xs) < 2:
            raise ValueError("draw_line needs matching x and y with at least two points")
        line = Line2D(xs, ys, color=color, linewidth=linewidth, linestyle=linestyle, alpha=alpha)
        self.add_layer(Primitives((line,)))
        return self

    def draw_primitives(
        self,
        items: Any,
        x: float = 0.0,
        y: float = 0.0,
        width: float = 1.0,
        height: float = 1.0,
        scale: float = 1.0,
    ) -> "Canvas":
        """Draw artists (or ``fn(ax)`` callables) in the unit square of the box."""
        primitives = items if isinstance(items, Primitives) else Primitives(items)
        self.add_layer(primitives, *scale_rect(x, y, width, height, scale))
        return self

    def draw_figure_label(
        self,
        label: str,
        position: str = "top.left",
        size: Optional[float] = None,
        fontface: Optional[str] = None,
        color: str = "black",
    ) -> "Canvas":
        """Label the whole figure in one of its corners or edges."""
        try:
            x, y, hjust, vjust = FIGURE_LABEL_POSITIONS[position]
        except KeyError:
            raise ValueError(
                f"position must be one of {sorted(FIGURE_LABEL_POSITIONS)}, got {position!r}"
            ) from None
        return self.draw_label(
            label,
            x=x,
            y=y,
            hjust=hjust,
            vjust=vjust,
            size=size or 14.0,
            fontface=fontface or "bold",
            color=color,
        )

    def render(self, container: "FigureBase", ctx: "RenderContext") -> List["Axes"]:
        if self.background is not None:
            container.set_facecolor(self.background)
        placed: List[List["Axes"]] = []
        for layer in self.layers:
            sub = subfigure_at(container, layer.x, layer.y, layer.width, layer.height)
            if sub is None:
                placed.append([])
                continue
            placed.append(layer.renderable.render(sub, ctx))
        self._after_render(placed, ctx)
        return []

    def _after_render(self, placed: List[List["Axes"]], ctx: "RenderContext") -> None:
        """Hook for subclasses that post-process the drawn layers."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(layers={len(self.layers)})"
