import logging

import pytest
from matplotlib.figure import Figure
from PIL import Image

from figcompose import config
from figcompose.export import export_figure, plot_size, save_plot
from figcompose.grid import plot_grid


def _line(ax):
    ax.plot([0, 1, 2], [2, 0, 1])
    ax.set_xlabel("x")


def test_plot_size():
    assert plot_size() == pytest.approx((3.71 * 1.618, 3.71))
    assert plot_size(ncol=2, nrow=3, base_height=2.0, base_asp=1.5) == pytest.approx((6.0, 6.0))
    assert plot_size(base_width=4.0, base_asp=2.0) == pytest.approx((4.0, 2.0))
    with pytest.raises(ValueError):
        plot_size(ncol=0)


def test_save_plot_writes_image_of_expected_size(tmp_path):
    out = save_plot(tmp_path / "nested" / "grid.png", plot_grid(_line, _line), ncol=2, base_height=2.0, base_asp=1.5, dpi=50)
    assert out.exists()
    with Image.open(out) as img:
        assert img.size == (300, 100)


def test_export_clamps_to_max_pixels(tmp_path, monkeypatch, caplog):
    monkeypatch.setenv("FIGCOMPOSE_MAX_EXPORT_PX", "200")
    config.reload()
    fig = Figure(figsize=(4.0, 2.0), dpi=100)
    fig.add_subplot().plot([0, 1], [0, 1])
    with caplog.at_level(logging.WARNING, logger="figcompose"):
        out = export_figure(fig, tmp_path / "big.png")
    assert "clamped" in caplog.text
    with Image.open(out) as img:
        assert img.size[0] <= 200
        assert img.size[0] >= 199


def test_transparent_background(tmp_path):
    out = save_plot(tmp_path / "clear.png", _line, base_height=1.0, base_asp=1.0, dpi=40, background="transparent")
    with Image.open(out) as img:
        assert img.mode == "RGBA"
        assert img.getpixel((0, 0))[3] == 0


def test_bad_background(tmp_path):
    fig = Figure(figsize=(1, 1))
    with pytest.raises(ValueError, match="background"):
        export_figure(fig, tmp_path / "x.png", background="not-a-colour")
