# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Theme presets for composed plots.

A theme is a set of rcParams applied while a plot draws itself, plus a few
axes-level helpers (grid lines, panel border) that can be added afterwards.
"""

from __future__ import annotations

import contextlib
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Dict, Iterator, Optional

import matplotlib

if TYPE_CHECKING:
    from matplotlib.axes import Axes

__all__ = [
    "ThemePreset",
    "THEMES",
    "apply_theme",
    "background_grid",
    "get_theme",
    "panel_border",
    "theme_context",
]

_BASE_RC: Dict[str, Any] = {
    "font.size": 11.0,
    "axes.titlesize": 12.0,
    "axes.titleweight": "bold",
    "axes.titlelocation": "left",
    "axes.labelsize": 11.0,
    "axes.edgecolor": "black",
    "axes.linewidth": 0.8,
    "xtick.labelsize": 9.0,
    "ytick.labelsize": 9.0,
    "xtick.direction": "out",
    "ytick.direction": "out",
    "legend.fontsize": 9.0,
    "legend.frameon": False,
    "figure.facecolor": "white",
    "axes.facecolor": "white",
}


@dataclass(frozen=True)
class ThemePreset:
    name: str
    description: str
    rc: Dict[str, Any]
    show_axes: bool = True


def _preset(name: str, description: str, show_axes: bool = True, **rc: Any) -> ThemePreset:
    merged = dict(_BASE_RC)
    merged.update({key.replace("__", "."): value for key, value in rc.items()})
    return ThemePreset(name=name, description=description, rc=merged, show_axes=show_axes)


THEMES: Dict[str, ThemePreset] = {
    "classic": _preset(
        "classic",
        "Open left/bottom spines, no grid (publication default).",
        axes__spines__top=False,
        axes__spines__right=False,
        axes__grid=False,
    ),
    "half_open": _preset(
        "half_open",
        "Open spines with slightly larger text for single panels.",
        axes__spines__top=False,
        axes__spines__right=False,
        axes__grid=False,
        font__size=12.0,
        axes__labelsize=12.0,
    ),
    "minimal_grid": _preset(
        "minimal_grid",
        "No spines, light major grid on both axes.",
        axes__spines__top=False,
        axes__spines__right=False,
        axes__spines__left=False,
        axes__spines__bottom=False,
        axes__grid=True,
        axes__grid__axis="both",
        grid__color="#d9d9d9",
        grid__linewidth=0.6,
        xtick__major__size=0.0,
        ytick__major__size=0.0,
    ),
    "minimal_hgrid": _preset(
        "minimal_hgrid",
        "Bottom spine only, horizontal grid lines.",
        axes__spines__top=False,
        axes__spines__right=False,
        axes__spines__left=False,
        axes__grid=True,
        axes__grid__axis="y",
        grid__color="#d9d9d9",
        grid__linewidth=0.6,
        ytick__major__size=0.0,
    ),
    "minimal_vgrid": _preset(
        "minimal_vgrid",
        "Left spine only, vertical grid lines.",
        axes__spines__top=False,
        axes__spines__right=False,
        axes__spines__bottom=False,
        axes__grid=True,
        axes__grid__axis="x",
        grid__color="#d9d9d9",
        grid__linewidth=0.6,
        xtick__major__size=0.0,
    ),
    "nothing": _preset(
        "nothing",
        "No axes decorations at all; for images and drawings.",
        show_axes=False,
        axes__spines__top=False,
        axes__spines__right=False,
        axes__spines__left=False,
        axes__spines__bottom=False,
        axes__grid=False,
    ),
}


def get_theme(name: str) -> ThemePreset:
    """Return the preset for ``name``."""
    key = name.strip().lower().replace("-", "_")
    try:
        return THEMES[key]
    except KeyError:
        known = ", ".join(sorted(THEMES))
        raise KeyError(f"Unknown theme {name!r}; known themes: {known}") from None


@contextlib.contextmanager
def theme_context(name: Optional[str]) -> Iterator[Optional[ThemePreset]]:
    """Apply a theme's rcParams for the duration of the block.

    ``None`` and ``"none"`` leave the current rcParams untouched.
    """
    if name is None or name.strip().lower() == "none":
        yield None
        return
    preset = get_theme(name)
    with matplotlib.rc_context(preset.rc):
        yield preset


def apply_theme(ax: "Axes", name: str) -> None:
    """Restyle an existing Axes; rc-driven defaults only reach new artists."""
    preset = get_theme(name)
    rc = preset.rc
    if not preset.show_axes:
        ax.set_axis_off()
        return
    for side in ("top", "right", "left", "bottom"):
        visible = rc.get(f"axes.spines.{side}", True)
        ax.spines[side].set_visible(bool(visible))
    if rc.get("axes.grid", False):
        which_axis = rc.get("axes.grid.axis", "both")
        ax.grid(
            True,
            axis=which_axis,
            color=rc.get("grid.color", "#d9d9d9"),
            linewidth=rc.get("grid.linewidth", 0.6),
        )
    else:
        ax.grid(False)
    ax.tick_params(axis="both", labelsize=rc.get("xtick.labelsize", 9.0))


def background_grid(
    ax: "Axes",
    major: str = "xy",
    minor: str = "none",
    color_major: str = "#d9d9d9",
    color_minor: str = "#f2f2f2",
    linewidth_major: float = 0.5,
    linewidth_minor: float = 0.25,
) -> None:
    """Add background grid lines; ``major``/``minor`` take 'x', 'y', 'xy' or 'none'."""

    def _axis_arg(value: str) -> Optional[str]:
        value = (value or "none").lower()
        if value == "none":
            return None
        if value in ("xy", "yx"):
            return "both"
        if value in ("x", "y"):
            return value
        raise ValueError(f"Grid selection must be 'x', 'y', 'xy' or 'none', got {value!r}")

    major_axis = _axis_arg(major)
    minor_axis = _axis_arg(minor)
    ax.grid(False, which="both")
    if major_axis is not None:
        ax.grid(True, which="major", axis=major_axis, color=color_major, linewidth=linewidth_major)
    if minor_axis is not None:
        ax.minorticks_on()
        ax.grid(True, which="minor", axis=minor_axis, color=color_minor, linewidth=linewidth_minor)
    ax.set_axisbelow(True)


def panel_border(
    ax: "Axes",
    color: str = "#d9d9d9",
    linewidth: float = 1.0,
    linestyle: str = "-",
    remove: bool = False,
) -> None:
    """Draw (or with ``remove=True`` hide) a border around the panel."""
    for spine in ax.spines.values():
        if remove:
            spine.set_visible(False)
            continue
        spine.set_visible(True)
        spine.set_edgecolor(color)
        spine.set_linewidth(linewidth)
        spine.set_linestyle(linestyle)
