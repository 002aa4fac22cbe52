import matplotlib
import pytest
from matplotlib.figure import Figure

from figcompose.themes import THEMES, apply_theme, background_grid, get_theme, panel_border, theme_context


def _axes():
    ax = Figure().add_subplot()
    ax.plot([0, 1, 2], [0, 1, 4])
    return ax


def test_presets_and_lookup():
    assert {"classic", "half_open", "minimal_grid", "minimal_hgrid", "minimal_vgrid", "nothing"} <= set(THEMES)
    assert get_theme("Minimal-Grid").name == "minimal_grid"
    with pytest.raises(KeyError, match="classic"):
        get_theme("neon")


def test_theme_context_scopes_rcparams():
    before = matplotlib.rcParams["axes.spines.top"]
    with theme_context("classic") as preset:
        assert preset.name == "classic"
        assert matplotlib.rcParams["axes.spines.top"] is False
    assert matplotlib.rcParams["axes.spines.top"] == before

    with theme_context("none") as preset:
        assert preset is None
    with theme_context(None) as preset:
        assert preset is None


def test_apply_theme_to_existing_axes():
    ax = _axes()
    apply_theme(ax, "minimal_grid")
    assert not any(spine.get_visible() for spine in ax.spines.values())
    assert any(line.get_visible() for line in ax.get_xgridlines())

    bare = _axes()
    apply_theme(bare, "nothing")
    assert not bare.axison


def test_background_grid():
    ax = _axes()
    background_grid(ax, major="y")
    assert any(line.get_visible() for line in ax.get_ygridlines())
    assert not any(line.get_visible() for line in ax.get_xgridlines())
    with pytest.raises(ValueError):
        background_grid(ax, major="z")


def test_panel_border():
    ax = _axes()
    panel_border(ax, color="red", linewidth=2.0)
    assert all(spine.get_visible() for spine in ax.spines.values())
    assert ax.spines["top"].get_linewidth() == 2.0
    panel_border(ax, remove=True)
    assert not any(spine.get_visible() for spine in ax.spines.values())
