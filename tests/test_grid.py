import logging

import pytest
from matplotlib.patches import Circle, Rectangle

from figcompose.canvas import Canvas
from figcompose.grid import GridCanvas, add_sub, align_edges, plot_grid, stamp, stamp_good, stamp_ugly
from figcompose.render import build_figure
from figcompose.renderables import Annotations, AxesPlot, FigurePlot, Primitives


def _line(ax):
    ax.plot([0, 1, 2], [1, 3, 2])
    ax.set_ylabel("value")


def _long_ticks(ax):
    ax.barh(["a very long category name", "short"], [3, 5])
    ax.set_xlabel("count")


def _plot_layers(grid):
    return [layer for layer in grid.layers if not isinstance(layer.renderable, Annotations)]


def _label_texts(grid):
    texts = []
    for layer in grid.layers:
        if isinstance(layer.renderable, Annotations):
            texts.extend(spec.text for spec in layer.renderable.labels)
    return texts


def test_plot_grid_places_plots_and_labels():
    grid = plot_grid(_line, _long_ticks, labels="AUTO")
    assert isinstance(grid, GridCanvas)
    assert (grid.layout.nrow, grid.layout.ncol) == (1, 2)
    layers = _plot_layers(grid)
    assert [(layer.x, layer.width) for layer in layers] == [(0.0, 0.5), (0.5, 0.5)]
    assert [layer.cell for layer in layers] == [(0, 0), (0, 1)]
    assert _label_texts(grid) == ["A", "B"]

    (labels,) = [layer.renderable for layer in grid.layers if isinstance(layer.renderable, Annotations)]
    first = labels.labels[0]
    assert (first.x, first.y) == pytest.approx((0.0, 1.0))
    assert (first.hjust, first.vjust) == pytest.approx((-0.5, 1.5))
    assert first.fontface == "bold"
    assert first.size == pytest.approx(14.0)


def test_plot_grid_accepts_a_list_and_skips_none():
    grid = plot_grid([_line, None, _line], labels="AUTO", ncol=3)
    assert len(_plot_layers(grid)) == 2
    assert _label_texts(grid) == ["A", "C"]


def test_list_of_artists_is_one_plot():
    grid = plot_grid([Circle((0.5, 0.5), 0.2), Rectangle((0.1, 0.1), 0.2, 0.2)])
    assert grid.layout.n == 1
    assert isinstance(grid.layers[0].renderable, Primitives)


def test_per_plot_scale_and_too_many_labels():
    grid = plot_grid(_line, _line, scale=[1.0, 0.5])
    second = _plot_layers(grid)[1]
    assert second.width == pytest.approx(0.25)
    assert second.x == pytest.approx(0.625)

    with pytest.raises(ValueError):
        plot_grid(_line, labels=["A", "B"])
    with pytest.raises(ValueError):
        plot_grid(_line, _line, align="sideways")


def test_nested_grids_build():
    inner = plot_grid(_line, _line, labels=["B", "C"])
    fig = build_figure(plot_grid(_line, inner, ncol=1, labels=["A", ""]), width=4, height=4, dpi=40)
    assert len(fig.subfigs) == 3


def _left_right(fig, index):
    box = fig.subfigs[index].axes[0].get_window_extent()
    return box.x0, box.x1


def test_vertical_alignment_shares_left_and_right_edges():
    fig = build_figure(plot_grid(_line, _long_ticks, ncol=1, align="v"), width=4, height=4, dpi=50)
    left0, right0 = _left_right(fig, 0)
    left1, right1 = _left_right(fig, 1)
    assert left0 == pytest.approx(left1, abs=0.5)
    assert right0 == pytest.approx(right1, abs=0.5)


def test_unaligned_grid_keeps_own_edges():
    fig = build_figure(plot_grid(_line, _long_ticks, ncol=1), width=4, height=4, dpi=50)
    left0, _ = _left_right(fig, 0)
    left1, _ = _left_right(fig, 1)
    assert left1 > left0 + 5


def test_axis_restricts_aligned_edges():
    fig = build_figure(plot_grid(_line, _long_ticks, ncol=1, align="v", axis="l"), width=4, height=4, dpi=50)
    left0, _ = _left_right(fig, 0)
    left1, _ = _left_right(fig, 1)
    assert left0 == pytest.approx(left1, abs=0.5)


def test_multi_axes_cells_are_not_aligned(caplog):
    def panels(subfig):
        subfig.subplots(1, 2)

    with caplog.at_level(logging.WARNING, logger="figcompose"):
        build_figure(plot_grid(FigurePlot(panels), _line, align="h"), width=4, height=2, dpi=40)
    assert "cannot be aligned" in caplog.text


def test_align_edges_uses_most_inset_edge():
    fig = build_figure(plot_grid(_line, _line, ncol=1), width=3, height=3, dpi=50)
    ax0 = fig.subfigs[0].axes[0]
    ax1 = fig.subfigs[1].axes[0]
    pos = ax1.get_position()
    ax1.set_position([pos.x0 + 0.1, pos.y0, pos.width - 0.1, pos.height])
    align_edges([ax0, ax1], horizontal=True, low=True, high=False)
    assert ax0.get_window_extent().x0 == pytest.approx(ax1.get_window_extent().x0, abs=0.5)


def test_add_sub_and_stamps():
    captioned = add_sub(_line, "A caption", rel_height=0.25)
    assert captioned.layout.rel_heights == pytest.approx((0.8, 0.2))
    assert isinstance(captioned.layers[1].renderable, Canvas)

    stamped = stamp(_line, "Draft", color="grey", alpha=0.5)
    (spec,) = stamped.layers[1].renderable.labels
    assert (spec.text, spec.color, spec.alpha, spec.angle) == ("Draft", "grey", 0.5, 30.0)
    assert stamp_good(_line).layers[1].renderable.labels[0].text == "Good"
    assert stamp_ugly(_line, angle=0).layers[1].renderable.labels[0].angle == 0

    fig = build_figure(plot_grid(captioned, stamped), width=5, height=3, dpi=40)
    assert fig.subfigs


def test_axes_plot_options_survive_grid():
    plot = AxesPlot(_line, theme="minimal_grid")
    fig = build_figure(plot_grid(plot), width=3, height=3, dpi=40)
    ax = fig.subfigs[0].axes[0]
    assert not ax.spines["left"].get_visible()
