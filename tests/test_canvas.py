import logging

import pytest
from matplotlib.colors import to_rgba
from matplotlib.patches import Circle
from PIL import Image

from figcompose.canvas import Canvas
from figcompose.render import build_figure, subfigure_at
from figcompose.renderables import Annotations, AxesPlot, ImageSource, Primitives


def _line(ax):
    ax.plot([0, 1], [0, 1])


def test_draw_methods_chain_and_keep_order():
    canvas = Canvas(_line)
    result = canvas.draw_label("hello").draw_line([0, 1], [0, 1]).draw_image(Image.new("RGB", (2, 2)))
    assert result is canvas
    kinds = [type(layer.renderable) for layer in canvas.layers]
    assert kinds == [AxesPlot, Annotations, Primitives, ImageSource]


def test_draw_plot_justifies_and_scales_the_box():
    canvas = Canvas().draw_plot(_line, x=0.5, y=0.5, width=0.4, height=0.2, hjust=0.5, vjust=0.5)
    layer = canvas.layers[0]
    assert (layer.x, layer.y, layer.width, layer.height) == pytest.approx((0.3, 0.4, 0.4, 0.2))

    scaled = Canvas().draw_plot(_line, scale=0.5).layers[0]
    assert (scaled.x, scaled.y, scaled.width, scaled.height) == pytest.approx((0.25, 0.25, 0.5, 0.5))


def test_draw_text_recycles_arguments():
    canvas = Canvas().draw_text(["a", "b", "c"], x=[0.1, 0.9], size=[10, 12], fontface="italic")
    specs = canvas.layers[0].renderable.labels
    assert [s.size for s in specs] == [10, 12, 10]
    assert [s.x for s in specs] == [0.1, 0.9, 0.1]
    assert {s.fontface for s in specs} == {"italic"}
    assert Canvas().draw_text([]).layers == []


def test_draw_line_validation():
    with pytest.raises(ValueError):
        Canvas().draw_line([0.5], [0.5])
    with pytest.raises(ValueError):
        Canvas().draw_line([0, 1, 2], [0, 1])


def test_draw_figure_label_positions():
    canvas = Canvas().draw_figure_label("Figure 1", position="bottom.right")
    (spec,) = canvas.layers[0].renderable.labels
    assert (spec.x, spec.y, spec.hjust, spec.vjust) == (0.99, 0.01, 1.0, 0.0)
    assert spec.fontface == "bold"
    with pytest.raises(ValueError, match="position"):
        Canvas().draw_figure_label("x", position="middle")


def test_layer_size_must_be_positive():
    with pytest.raises(ValueError):
        Canvas().add_layer(Primitives(()), width=0.0)
    with pytest.raises(ValueError):
        Canvas().draw_plot(_line, height=-1)


def test_layers_render_in_insertion_order():
    canvas = Canvas(_line).draw_primitives([Circle((0.5, 0.5), 0.1)]).draw_label("top")
    fig = build_figure(canvas, width=3, height=2, dpi=40)
    assert len(fig.subfigs) == 3
    assert len(fig.subfigs[0].axes[0].get_lines()) == 1
    assert len(fig.subfigs[1].axes[0].patches) == 1
    assert len(fig.subfigs[2].axes[0].artists) == 1


def test_background_colour():
    fig = build_figure(Canvas(background="#eeeeee").draw_label("x"), width=2, height=2, dpi=30)
    assert fig.get_facecolor() == pytest.approx(to_rgba("#eeeeee"))


def test_layers_outside_the_canvas_are_skipped(caplog):
    canvas = Canvas().draw_plot(_line, x=2.0, y=2.0, width=0.5, height=0.5).draw_label("kept")
    with caplog.at_level(logging.WARNING, logger="figcompose"):
        fig = build_figure(canvas, width=2, height=2, dpi=30)
    assert "outside the canvas" in caplog.text
    assert len(fig.subfigs) == 1


def test_subfigure_at_clips_to_the_container():
    fig = build_figure(Canvas(), width=4, height=4, dpi=25)
    sub = subfigure_at(fig, 0.75, -0.25, 0.5, 0.5)
    box = sub.bbox
    assert box.x0 == pytest.approx(75)
    assert box.x1 == pytest.approx(100)
    assert box.y0 == pytest.approx(0)
    assert box.y1 == pytest.approx(25)
    with pytest.raises(ValueError):
        subfigure_at(fig, 0, 0, 0, 1)


def test_canvas_renders_twice():
    canvas = Canvas(_line).draw_primitives([Circle((0.5, 0.5), 0.1)])
    first = build_figure(canvas, width=2, height=2, dpi=30)
    second = build_figure(canvas, width=2, height=2, dpi=30)
    assert len(first.subfigs) == len(second.subfigs) == 2
