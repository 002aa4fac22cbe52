# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Composable plot kinds.

Each renderable draws itself into a Matplotlib figure or subfigure through
``render(container, ctx)`` and returns the axes that grid alignment may move
(only single-axes plots return one). Renderables are reusable: rendering the
same object twice builds two independent drawings.
"""

from __future__ import annotations

import copy
import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import TYPE_CHECKING, Any, Callable, Dict, Iterator, List, Optional, Tuple

import numpy as np
from matplotlib.artist import Artist
from matplotlib.axes import Axes
from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.collections import Collection
from matplotlib.figure import Figure, FigureBase
from matplotlib.lines import Line2D
from matplotlib.offsetbox import AnnotationBbox, TextArea
from matplotlib.patches import Patch
from PIL import Image

from .themes import theme_context

if TYPE_CHECKING:
    from matplotlib.legend import Legend

    from .render import RenderContext

log = logging.getLogger(__name__)

__all__ = [
    "Annotations",
    "AxesPlot",
    "Blank",
    "FigurePlot",
    "FigureSnapshot",
    "ImageSource",
    "LabelSpec",
    "Primitives",
    "Renderable",
    "as_renderable",
    "iter_legends",
    "load_image",
    "rasterize_figure",
    "remove_legends",
]

FONTFACES: Dict[str, Tuple[str, str]] = {
    "plain": ("normal", "normal"),
    "bold": ("bold", "normal"),
    "italic": ("normal", "italic"),
    "bold.italic": ("bold", "italic"),
}


class Renderable:
    """Base class for everything that can be placed on a canvas."""

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        raise NotImplementedError


@dataclass(frozen=True, eq=False)
class Blank(Renderable):
    """An empty cell."""

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        return []


def iter_legends(container: FigureBase) -> Iterator["Legend"]:
    """Yield figure-level and axes-level legends, subfigures included."""
    yield from list(container.legends)
    for ax in container.axes:
        leg = ax.get_legend()
        if leg is not None:
            yield leg
    for sub in container.subfigs:
        yield from iter_legends(sub)


def remove_legends(container: FigureBase) -> int:
    removed = 0
    for leg in list(iter_legends(container)):
        leg.remove()
        removed += 1
    return removed


@dataclass(frozen=True, eq=False)
class AxesPlot(Renderable):
    """Imperative plotting: ``draw(ax)`` issues plotting calls on one Axes."""

    draw: Callable[[Axes], Any]
    theme: Optional[str] = None
    legend: bool = True
    subplot_kw: Optional[Dict[str, Any]] = None

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        theme = self.theme if self.theme is not None else ctx.theme
        with theme_context(theme) as preset:
            ax = container.add_subplot(111, **(self.subplot_kw or {}))
            self.draw(ax)
            if preset is not None and not preset.show_axes:
                ax.set_axis_off()
        if not self.legend:
            remove_legends(container)
        ctx.request_fit(container, container.axes)
        return [ax]


@dataclass(frozen=True, eq=False)
class FigurePlot(Renderable):
    """Multi-panel (trellis) plotting: ``draw(subfigure)`` creates its own axes."""

    draw: Callable[[FigureBase], Any]
    theme: Optional[str] = None
    legend: bool = True

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        theme = self.theme if self.theme is not None else ctx.theme
        with theme_context(theme):
            self.draw(container)
        if not self.legend:
            remove_legends(container)
        ctx.request_fit(container, container.axes)
        return []


def rasterize_figure(
    fig: Figure, width_in: float, height_in: float, dpi: float, legend: bool = True
) -> np.ndarray:
    """Draw ``fig`` at the given physical size and return RGBA pixels.

    The figure's size, dpi, canvas and legend visibility are restored.
    """
    original_size = fig.get_size_inches().copy()
    original_dpi = fig.dpi
    original_canvas = fig.canvas
    hidden: List[Artist] = []
    if not legend:
        for leg in iter_legends(fig):
            if leg.get_visible():
                leg.set_visible(False)
                hidden.append(leg)
    try:
        fig.set_size_inches(width_in, height_in, forward=False)
        fig.set_dpi(dpi)
        canvas = FigureCanvasAgg(fig)
        canvas.draw()
        log.debug("Rasterized figure at %.2f x %.2f in, %.0f dpi", width_in, height_in, dpi)
        return np.asarray(canvas.buffer_rgba()).copy()
    finally:
        fig.set_size_inches(original_size, forward=False)
        fig.set_dpi(original_dpi)
        fig.set_canvas(original_canvas)
        for leg in hidden:
            leg.set_visible(True)


@dataclass(frozen=True, eq=False)
class FigureSnapshot(Renderable):
    """A prebuilt Figure, re-laid-out at the cell size and embedded as pixels."""

    figure: Figure
    legend: bool = True

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        dpi = float(container.dpi)
        width_in = container.bbox.width / dpi
        height_in = container.bbox.height / dpi
        if width_in <= 0 or height_in <= 0:
            return []
        pixels = rasterize_figure(self.figure, width_in, height_in, dpi, legend=self.legend)
        ax = container.add_axes([0.0, 0.0, 1.0, 1.0])
        ax.imshow(pixels, aspect="auto", interpolation="antialiased")
        ax.set_axis_off()
        return []


def load_image(image: Any) -> np.ndarray:
    """Return pixels for a PIL image, an array, or an image file path."""
    if isinstance(image, Image.Image):
        return np.asarray(image.convert("RGBA"))
    if isinstance(image, (str, PurePath)):
        with Image.open(image) as img:
            return np.asarray(img.convert("RGBA"))
    pixels = np.asarray(image)
    if pixels.ndim not in (2, 3) or (pixels.ndim == 3 and pixels.shape[2] not in (3, 4)):
        raise ValueError(f"Image array must be HxW, HxWx3 or HxWx4, got shape {pixels.shape}")
    return pixels


@dataclass(frozen=True, eq=False)
class ImageSource(Renderable):
    """A raster image drawn with its aspect ratio kept, anchored inside the cell."""

    image: Any
    interpolate: bool = True
    halign: float = 0.5
    valign: float = 0.5

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        pixels = load_image(self.image)
        ax = container.add_axes([0.0, 0.0, 1.0, 1.0])
        ax.imshow(
            pixels,
            interpolation="antialiased" if self.interpolate else "nearest",
            aspect="equal",
        )
        ax.set_anchor((self.halign, self.valign))
        ax.set_axis_off()
        return []


def _overlay_axes(container: FigureBase) -> Axes:
    """Full-size invisible axes with unit data coordinates."""
    ax = container.add_axes([0.0, 0.0, 1.0, 1.0])
    ax.set_xlim(0.0, 1.0)
    ax.set_ylim(0.0, 1.0)
    ax.set_axis_off()
    return ax


def _attach(ax: Axes, artist: Artist) -> None:
    if isinstance(artist, Patch):
        ax.add_patch(artist)
    elif isinstance(artist, Line2D):
        ax.add_line(artist)
    elif isinstance(artist, Collection):
        ax.add_collection(artist, autolim=False)
    else:
        ax.add_artist(artist)


@dataclass(frozen=True, eq=False)
class Primitives(Renderable):
    """Low-level drawing: artists or ``fn(ax)`` callables in unit coordinates."""

    items: Tuple[Any, ...]

    def __post_init__(self) -> None:
        items = self.items
        if isinstance(items, Artist) or callable(items):
            items = (items,)
        items = tuple(items)
        for item in items:
            if isinstance(item, Artist):
                if getattr(item, "axes", None) is not None or item.get_figure() is not None:
                    raise ValueError(
                        f"{type(item).__name__} already belongs to a figure; "
                        "pass a fresh artist or a drawing function"
                    )
            elif not callable(item):
                raise TypeError(f"Primitives accept artists or callables, got {type(item).__name__}")
        object.__setattr__(self, "items", items)

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        ax = _overlay_axes(container)
        for item in self.items:
            if isinstance(item, Artist):
                # Artists can live in one figure only; every render gets a copy.
                _attach(ax, copy.deepcopy(item))
            else:
                item(ax)
        return []


@dataclass(frozen=True)
class LabelSpec:
    """Text placed at (x, y) with grid-style justification.

    ``hjust``/``vjust`` are fractions of the text's own box, so ``hjust=-0.5``
    starts the text half its width to the right of ``x``.
    """

    text: str
    x: float = 0.5
    y: float = 0.5
    hjust: float = 0.5
    vjust: float = 0.5
    size: float = 14.0
    fontfamily: Optional[str] = None
    fontface: str = "plain"
    color: str = "black"
    angle: float = 0.0
    alpha: float = 1.0
    lineheight: float = 1.2

    def __post_init__(self) -> None:
        if self.fontface not in FONTFACES:
            raise ValueError(f"fontface must be one of {sorted(FONTFACES)}, got {self.fontface!r}")

    def text_props(self) -> Dict[str, Any]:
        weight, style = FONTFACES[self.fontface]
        props: Dict[str, Any] = {
            "fontsize": self.size,
            "fontweight": weight,
            "fontstyle": style,
            "color": self.color,
            "alpha": self.alpha,
            "linespacing": self.lineheight,
        }
        if self.fontfamily:
            props["family"] = self.fontfamily
        return props


def _nearest_ha(hjust: float) -> str:
    if hjust <= 0.25:
        return "left"
    if hjust >= 0.75:
        return "right"
    return "center"


def _nearest_va(vjust: float) -> str:
    if vjust <= 0.25:
        return "bottom"
    if vjust >= 0.75:
        return "top"
    return "center"


def place_label(ax: Axes, spec: LabelSpec) -> Artist:
    props = spec.text_props()
    if spec.angle:
        # Offset boxes do not rotate; rotated text snaps to the nearest anchor.
        return ax.text(
            spec.x,
            spec.y,
            spec.text,
            transform=ax.transAxes,
            rotation=spec.angle,
            rotation_mode="anchor",
            ha=_nearest_ha(spec.hjust),
            va=_nearest_va(spec.vjust),
            clip_on=False,
            **props,
        )
    box = AnnotationBbox(
        TextArea(spec.text, textprops=props),
        (spec.x, spec.y),
        xycoords="axes fraction",
        box_alignment=(spec.hjust, spec.vjust),
        frameon=False,
        pad=0.0,
        annotation_clip=False,
    )
    ax.add_artist(box)
    return box


@dataclass(frozen=True, eq=False)
class Annotations(Renderable):
    """One or more text labels sharing an overlay layer."""

    labels: Tuple[LabelSpec, ...]

    def render(self, container: FigureBase, ctx: "RenderContext") -> List[Axes]:
        ax = _overlay_axes(container)
        for spec in self.labels:
            place_label(ax, spec)
        return []


def _is_artist_list(obj: Any) -> bool:
    return (
        isinstance(obj, (list, tuple))
        and len(obj) > 0
        and all(isinstance(item, Artist) and not isinstance(item, (FigureBase, Axes)) for item in obj)
    )


def as_renderable(obj: Any) -> Renderable:
    """Wrap anything composable in the matching renderable."""
    if obj is None:
        return Blank()
    if isinstance(obj, Renderable):
        return obj
    if isinstance(obj, Figure):
        return FigureSnapshot(obj)
    if isinstance(obj, FigureBase):
        raise TypeError("Subfigures cannot be composed; pass the parent Figure or a drawing function")
    if isinstance(obj, Axes):
        raise TypeError("Axes cannot be composed; pass a function that draws on an Axes instead")
    if isinstance(obj, (Image.Image, np.ndarray, str, PurePath)):
        return ImageSource(obj)
    if isinstance(obj, Artist):
        return Primitives((obj,))
    if _is_artist_list(obj):
        return Primitives(tuple(obj))
    if callable(obj):
        return AxesPlot(obj)
    raise TypeError(
        f"Cannot compose object of type {type(obj).__name__}; expected a Figure, "
        "a drawing function, an image, artists or a renderable"
    )
