import numpy as np
import pytest

from figcompose.layout import (
    GridLayout,
    auto_labels,
    justify_rect,
    parse_align,
    parse_axis,
    recycle,
    resolve_grid_shape,
    scale_rect,
)


@pytest.mark.parametrize(
    "n, nrow, ncol, expected",
    [
        (1, None, None, (1, 1)),
        (3, None, None, (2, 2)),
        (4, None, None, (2, 2)),
        (5, None, None, (2, 3)),
        (5, None, 1, (5, 1)),
        (5, 1, None, (1, 5)),
        (7, 2, 4, (2, 4)),
    ],
)
def test_resolve_grid_shape(n, nrow, ncol, expected):
    assert resolve_grid_shape(n, nrow, ncol) == expected


def test_resolve_grid_shape_rejects_bad_input():
    with pytest.raises(ValueError):
        resolve_grid_shape(0)
    with pytest.raises(ValueError):
        resolve_grid_shape(5, nrow=2, ncol=2)
    with pytest.raises(ValueError):
        resolve_grid_shape(2, ncol=0)


def test_recycle_scalars_sequences_and_arrays():
    assert recycle(2, 3) == [2, 2, 2]
    assert recycle("ab", 2) == ["ab", "ab"]
    assert recycle([1, 2], 5) == [1, 2, 1, 2, 1]
    assert recycle(np.array([0.5, 1.0]), 3) == [0.5, 1.0, 0.5]
    with pytest.raises(ValueError):
        recycle([], 2)


def test_cells_fill_by_row_from_the_top():
    layout = GridLayout.build(4, ncol=2)
    cells = layout.cells()
    assert [(c.row, c.col) for c in cells] == [(0, 0), (0, 1), (1, 0), (1, 1)]
    first = cells[0]
    assert first.x == pytest.approx(0.0)
    assert first.y == pytest.approx(0.5)
    assert first.width == pytest.approx(0.5)
    assert first.height == pytest.approx(0.5)
    assert cells[3].y == pytest.approx(0.0)


def test_cells_fill_by_column():
    layout = GridLayout.build(4, ncol=2, byrow=False)
    assert [(c.row, c.col) for c in layout.cells()] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_relative_widths_and_heights():
    layout = GridLayout.build(4, ncol=2, rel_widths=[3, 1], rel_heights=[1, 3])
    cells = layout.cells()
    assert cells[0].width == pytest.approx(0.75)
    assert cells[1].x == pytest.approx(0.75)
    assert cells[0].height == pytest.approx(0.25)
    assert cells[0].y == pytest.approx(0.75)
    assert cells[2].height == pytest.approx(0.75)


def test_relative_sizes_validated():
    with pytest.raises(ValueError):
        GridLayout.build(2, ncol=2, rel_widths=[1, -1])
    with pytest.raises(ValueError):
        GridLayout.build(2, ncol=2, rel_widths=[0, 0])


def test_justify_and_scale_rect():
    assert justify_rect(0.5, 0.5, 0.2, 0.4, 0.5, 1.0) == pytest.approx((0.4, 0.1, 0.2, 0.4))
    assert scale_rect(0.0, 0.0, 1.0, 1.0, 0.5) == pytest.approx((0.25, 0.25, 0.5, 0.5))
    with pytest.raises(ValueError):
        scale_rect(0.0, 0.0, 1.0, 1.0, 0.0)


def test_auto_labels():
    assert auto_labels("AUTO", 3) == ["A", "B", "C"]
    assert auto_labels("auto", 2) == ["a", "b"]
    assert auto_labels("AUTO", 28)[-2:] == ["AA", "AB"]
    assert auto_labels(["x"], 3) == ["x", "", ""]
    assert auto_labels(None, 2) == ["", ""]
    with pytest.raises(ValueError):
        auto_labels(["a", "b", "c"], 2)


def test_parse_align_and_axis():
    assert parse_align(None) == "none"
    assert parse_align("VH") == "hv"
    assert parse_axis("none") == ""
    assert parse_axis("bl") == "lb"
    with pytest.raises(ValueError):
        parse_align("diagonal")
    with pytest.raises(ValueError):
        parse_axis("lx")
