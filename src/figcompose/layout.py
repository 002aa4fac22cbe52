# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Grid arithmetic for plot composition.

Everything here works in unit canvas coordinates (origin bottom-left,
``[0, 1]`` on both axes). Keep this file free of Matplotlib imports so the
layout rules can be tested without a drawing backend.
"""

from __future__ import annotations

import math
import string
from dataclasses import dataclass
from typing import Any, List, Optional, Tuple

__all__ = [
    "ALIGN_CHOICES",
    "CellRect",
    "GridLayout",
    "auto_labels",
    "justify_rect",
    "parse_align",
    "parse_axis",
    "recycle",
    "resolve_grid_shape",
    "scale_rect",
]

ALIGN_CHOICES = ("none", "h", "v", "hv")
_AXIS_SIDES = "lrtb"

Rect = Tuple[float, float, float, float]


@dataclass(frozen=True)
class CellRect:
    """One grid cell; ``x``/``y`` are the lower-left corner."""

    row: int
    col: int
    x: float
    y: float
    width: float
    height: float

    @property
    def rect(self) -> Rect:
        return (self.x, self.y, self.width, self.height)


def resolve_grid_shape(
    n: int, nrow: Optional[int] = None, ncol: Optional[int] = None
) -> Tuple[int, int]:
    """Return ``(nrow, ncol)`` able to hold ``n`` plots."""
    if n <= 0:
        raise ValueError("Nothing to lay out: at least one plot is required")
    if nrow is not None and nrow <= 0:
        raise ValueError(f"nrow must be positive, got {nrow}")
    if ncol is not None and ncol <= 0:
        raise ValueError(f"ncol must be positive, got {ncol}")

    if nrow is None and ncol is None:
        ncol = math.ceil(math.sqrt(n))
        nrow = math.ceil(n / ncol)
    elif nrow is None:
        nrow = math.ceil(n / ncol)
    elif ncol is None:
        ncol = math.ceil(n / nrow)

    if nrow * ncol < n:
        raise ValueError(
            f"Grid of {nrow} x {ncol} cells cannot hold {n} plots; "
            "increase nrow or ncol"
        )
    return int(nrow), int(ncol)


def recycle(value: Any, n: int) -> List[Any]:
    """Recycle a scalar or a sequence to exactly ``n`` items."""
    if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
        return [value] * n
    items = list(value)
    if not items:
        raise ValueError("Cannot recycle an empty sequence")
    return [items[i % len(items)] for i in range(n)]


def _normalized_sizes(values: Any, n: int, what: str) -> List[float]:
    sizes = [float(v) for v in recycle(values, n)]
    if any(v < 0 for v in sizes):
        raise ValueError(f"{what} must be non-negative, got {sizes}")
    total = sum(sizes)
    if total <= 0:
        raise ValueError(f"{what} must not all be zero")
    return [v / total for v in sizes]


@dataclass(frozen=True)
class GridLayout:
    """Resolved grid: shape, fill order and relative row/column sizes."""

    n: int
    nrow: int
    ncol: int
    byrow: bool = True
    rel_widths: Tuple[float, ...] = (1.0,)
    rel_heights: Tuple[float, ...] = (1.0,)

    @classmethod
    def build(
        cls,
        n: int,
        nrow: Optional[int] = None,
        ncol: Optional[int] = None,
        byrow: bool = True,
        rel_widths: Any = 1,
        rel_heights: Any = 1,
    ) -> "GridLayout":
        nrow, ncol = resolve_grid_shape(n, nrow, ncol)
        widths = tuple(_normalized_sizes(rel_widths, ncol, "rel_widths"))
        heights = tuple(_normalized_sizes(rel_heights, nrow, "rel_heights"))
        return cls(n=n, nrow=nrow, ncol=ncol, byrow=byrow, rel_widths=widths, rel_heights=heights)

    def position(self, index: int) -> Tuple[int, int]:
        """Return ``(row, col)`` of the ``index``-th plot; row 0 is the top row."""
        if self.byrow:
            return index // self.ncol, index % self.ncol
        return index % self.nrow, index // self.nrow

    def cells(self) -> List[CellRect]:
        widths = _normalized_sizes(self.rel_widths, self.ncol, "rel_widths")
        heights = _normalized_sizes(self.rel_heights, self.nrow, "rel_heights")
        x_edges = [sum(widths[:c]) for c in range(self.ncol)]
        # Rows are counted from the top, canvas y from the bottom.
        y_edges = [1.0 - sum(heights[: r + 1]) for r in range(self.nrow)]

        cells: List[CellRect] = []
        for index in range(self.n):
            row, col = self.position(index)
            cells.append(
                CellRect(
                    row=row,
                    col=col,
                    x=x_edges[col],
                    y=max(y_edges[row], 0.0),
                    width=widths[col],
                    height=heights[row],
                )
            )
        return cells


def justify_rect(x: float, y: float, width: float, height: float, hjust: float, vjust: float) -> Rect:
    """Shift a box so that (x, y) sits at the ``hjust``/``vjust`` fraction of it."""
    return (x - hjust * width, y - vjust * height, width, height)


def scale_rect(x: float, y: float, width: float, height: float, scale: float) -> Rect:
    """Scale a box around its centre."""
    if scale <= 0:
        raise ValueError(f"scale must be positive, got {scale}")
    new_w = width * scale
    new_h = height * scale
    return (x + (width - new_w) / 2.0, y + (height - new_h) / 2.0, new_w, new_h)


def _alpha_label(index: int, alphabet: str) -> str:
    """0 -> A, 25 -> Z, 26 -> AA (spreadsheet-style)."""
    label = ""
    index += 1
    while index > 0:
        index, rem = divmod(index - 1, len(alphabet))
        label = alphabet[rem] + label
    return label


def auto_labels(labels: Any, n: int) -> List[str]:
    """Expand the ``labels`` argument of ``plot_grid`` to ``n`` strings."""
    if labels is None:
        return [""] * n
    if isinstance(labels, str):
        if labels == "AUTO":
            return [_alpha_label(i, string.ascii_uppercase) for i in range(n)]
        if labels == "auto":
            return [_alpha_label(i, string.ascii_lowercase) for i in range(n)]
        labels = [labels]
    items = ["" if lbl is None else str(lbl) for lbl in labels]
    if len(items) > n:
        raise ValueError(f"Got {len(items)} labels for {n} plots")
    return items + [""] * (n - len(items))


def parse_align(align: Optional[str]) -> str:
    value = (align or "none").lower()
    if value == "vh":
        value = "hv"
    if value not in ALIGN_CHOICES:
        raise ValueError(f"align must be one of {ALIGN_CHOICES}, got {align!r}")
    return value


def parse_axis(axis: Optional[str]) -> str:
    """Return the requested sides as a subset of ``'lrtb'`` ('' means none)."""
    value = (axis or "none").lower()
    if value == "none":
        return ""
    unknown = set(value) - set(_AXIS_SIDES)
    if unknown:
        raise ValueError(
            f"axis must be 'none' or a combination of 'l', 'r', 't', 'b', got {axis!r}"
        )
    return "".join(side for side in _AXIS_SIDES if side in value)
