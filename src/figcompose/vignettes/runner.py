# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Run vignette chunks, render their figures and write the finished document."""

from __future__ import annotations

import ast
import logging
import tempfile
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from matplotlib.figure import Figure
from PIL import Image
from pydantic import BaseModel, Field

from ..export import export_figure
from ..render import build_figure
from ..renderables import Renderable
from .document import Chunk, Vignette, load_vignette

log = logging.getLogger(__name__)

DEFAULT_VIGNETTE_DPI = 100.0

__all__ = [
    "CheckReport",
    "ChunkExecutionError",
    "ChunkResult",
    "VignetteResult",
    "check_vignettes",
    "render_markdown",
    "render_vignette",
    "run_vignette",
]


class ChunkExecutionError(RuntimeError):
    """A vignette chunk raised; the original exception is the ``__cause__``."""

    def __init__(self, vignette: str, index: int, label: Optional[str], error: BaseException) -> None:
        where = f"chunk {index}" + (f" ({label})" if label else "")
        super().__init__(f"{vignette}: {where} failed: {type(error).__name__}: {error}")
        self.vignette = vignette
        self.index = index
        self.label = label


class ChunkResult(BaseModel):
    index: int
    label: Optional[str] = None
    evaluated: bool = True
    image: Optional[Path] = None


class VignetteResult(BaseModel):
    name: str
    title: str
    out_dir: Path
    chunks: List[ChunkResult] = Field(default_factory=list)

    @property
    def images(self) -> List[Path]:
        return [c.image for c in self.chunks if c.image is not None]


class CheckReport(BaseModel):
    name: str
    ok: bool
    images: int = 0
    error: Optional[str] = None


def _is_composable(value: Any) -> bool:
    return isinstance(value, (Renderable, Figure, Image.Image))


def _execute(source: str, namespace: Dict[str, Any], filename: str) -> Any:
    """Exec ``source`` in ``namespace``; return the value of a trailing expression."""
    tree = ast.parse(source, filename=filename, mode="exec")
    trailing = None
    if tree.body and isinstance(tree.body[-1], ast.Expr):
        trailing = ast.Expression(tree.body.pop().value)
    exec(compile(tree, filename, "exec"), namespace)
    if trailing is None:
        return None
    return eval(compile(trailing, filename, "eval"), namespace)


def run_vignette(vignette: Vignette, out_dir: str | Path, dpi: Optional[float] = None) -> VignetteResult:
    """Run every code chunk in order, in one namespace, saving composed figures."""
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    namespace: Dict[str, Any] = {"__name__": f"vignette_{vignette.name}"}
    results: List[ChunkResult] = []

    for index, chunk in enumerate(vignette.code_chunks, start=1):
        opts = chunk.options
        if not opts.eval:
            results.append(ChunkResult(index=index, label=opts.label, evaluated=False))
            continue
        filename = f"<{vignette.name} chunk {index}>"
        try:
            value = _execute(chunk.text, namespace, filename)
            image = None
            if _is_composable(value):
                image = out_dir / f"{vignette.name}-{index}.png"
                chunk_dpi = dpi or opts.dpi or DEFAULT_VIGNETTE_DPI
                fig = build_figure(value, width=opts.fig_width, height=opts.fig_height, dpi=chunk_dpi)
                export_figure(fig, image, dpi=chunk_dpi)
        except Exception as exc:
            raise ChunkExecutionError(vignette.name, index, opts.label, exc) from exc
        log.debug("%s: chunk %d done%s", vignette.name, index, f" -> {image.name}" if image else "")
        results.append(ChunkResult(index=index, label=opts.label, image=image))

    return VignetteResult(name=vignette.name, title=vignette.title, out_dir=out_dir, chunks=results)


def _code_block(chunk: Chunk) -> str:
    return f"```python\n{chunk.text}\n```"


def render_markdown(vignette: Vignette, result: VignetteResult) -> str:
    """Markdown with each chunk followed by the image it produced."""
    by_index = {c.index: c for c in result.chunks}
    parts: List[str] = []
    code_index = 0
    for chunk in vignette.chunks:
        if chunk.kind == "prose":
            parts.append(chunk.text)
            continue
        code_index += 1
        parts.append(_code_block(chunk))
        chunk_result = by_index.get(code_index)
        if chunk_result is not None and chunk_result.image is not None:
            alt = chunk_result.label or f"{vignette.name} figure {code_index}"
            parts.append(f"![{alt}]({chunk_result.image.name})")
    return "\n\n".join(parts) + "\n"


def render_vignette(path: str | Path, out_dir: str | Path, dpi: Optional[float] = None) -> Path:
    """Run a vignette file and write ``<name>.md`` with its images into ``out_dir``."""
    vignette = load_vignette(path)
    result = run_vignette(vignette, out_dir, dpi=dpi)
    out_path = Path(out_dir) / f"{vignette.name}.md"
    with out_path.open("w", encoding="utf-8") as f:
        f.write(render_markdown(vignette, result))
    log.info("Rendered %s with %d figure(s) to %s", vignette.name, len(result.images), out_path)
    return out_path


def _image_ok(path: Path) -> bool:
    if not path.is_file() or path.stat().st_size == 0:
        return False
    try:
        with Image.open(path) as img:
            width, height = img.size
    except OSError:
        log.debug("Pillow could not read %s", path, exc_info=True)
        return False
    return width > 0 and height > 0


def _check_one(path: Path, work_dir: Path, dpi: Optional[float]) -> CheckReport:
    name = path.stem
    try:
        vignette = load_vignette(path)
        result = run_vignette(vignette, work_dir / name, dpi=dpi)
        bad = [p.name for p in result.images if not _image_ok(p)]
    except (ChunkExecutionError, ValueError, OSError) as exc:
        log.error("Vignette %s failed: %s", name, exc)
        return CheckReport(name=name, ok=False, error=str(exc))
    if bad:
        log.error("Vignette %s produced unreadable image(s): %s", name, ", ".join(bad))
        return CheckReport(
            name=name, ok=False, images=len(result.images), error=f"empty or unreadable image(s): {', '.join(bad)}"
        )
    return CheckReport(name=name, ok=True, images=len(result.images))


def check_vignettes(
    paths: Iterable[str | Path],
    work_dir: Optional[str | Path] = None,
    dpi: Optional[float] = 72.0,
) -> List[CheckReport]:
    """Smoke-test vignettes: every chunk runs and every image is non-empty."""
    paths = [Path(p) for p in paths]
    if work_dir is not None:
        return [_check_one(p, Path(work_dir), dpi) for p in paths]
    with tempfile.TemporaryDirectory(prefix="figcompose-check-") as tmp:
        return [_check_one(p, Path(tmp), dpi) for p in paths]
