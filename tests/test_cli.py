import logging

import pytest

from figcompose.cli import main
from figcompose.logging_config import setup_logging


def _run(tmp_path, *args):
    return main(["--log-dir", str(tmp_path / "logs"), *args])


def test_list(tmp_path, capsys):
    assert _run(tmp_path, "list") == 0
    out = capsys.readouterr().out
    assert "introduction" in out
    assert "Shared legends" in out


def test_init_and_force(tmp_path, capsys):
    dest = tmp_path / "site"
    assert _run(tmp_path, "init", str(dest)) == 0
    assert (dest / "vignettes" / "README.md").exists()
    capsys.readouterr()

    assert _run(tmp_path, "init", str(dest)) == 0
    assert "Nothing to do" in capsys.readouterr().out
    assert _run(tmp_path, "init", str(dest), "--force") == 0
    assert "Wrote" in capsys.readouterr().out


def test_render(tmp_path):
    doc = tmp_path / "doc.md"
    doc.write_text("```python\nfrom figcompose import Canvas\nCanvas().draw_label('hi')\n```\n", encoding="utf-8")
    assert _run(tmp_path, "render", str(doc), "--out", str(tmp_path / "site"), "--dpi", "30") == 0
    assert (tmp_path / "site" / "doc.md").exists()
    assert (tmp_path / "site" / "doc-1.png").stat().st_size > 0


def test_check_exit_status(tmp_path, capsys):
    good = tmp_path / "good.md"
    good.write_text("```python\nx = 1\n```\n", encoding="utf-8")
    bad = tmp_path / "bad.md"
    bad.write_text("```python\nraise ValueError('nope')\n```\n", encoding="utf-8")

    assert _run(tmp_path, "check", str(good)) == 0
    assert _run(tmp_path, "check", str(good), str(bad)) == 1
    out = capsys.readouterr().out
    assert "FAIL  bad" in out
    assert "1 passed, 1 failed" in out
    assert "nope" in (tmp_path / "logs" / "errors.log").read_text(encoding="utf-8")


def test_unknown_command(tmp_path):
    with pytest.raises(SystemExit):
        _run(tmp_path, "publish")


def test_setup_logging_does_not_stack_handlers(tmp_path):
    log_dir = setup_logging(log_dir=tmp_path)
    setup_logging(log_dir=tmp_path)
    assert log_dir == tmp_path
    assert len(logging.getLogger("figcompose").handlers) == 3

    logging.getLogger("figcompose.test").warning("hello from the test")
    for handler in logging.getLogger("figcompose").handlers:
        handler.flush()
    assert "hello from the test" in (tmp_path / "figcompose.log").read_text(encoding="utf-8")
