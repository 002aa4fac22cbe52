# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Vignettes shipped with the package and the example-repository generator."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from .document import Vignette, load_vignette

log = logging.getLogger(__name__)

DOCS_DIR = Path(__file__).resolve().parent / "docs"

__all__ = ["DOCS_DIR", "bundled_paths", "bundled_vignettes", "init_vignettes"]


def bundled_vignettes() -> List[Vignette]:
    """Bundled vignettes in reading order."""
    vignettes = [load_vignette(p) for p in sorted(DOCS_DIR.glob("*.md"))]
    return sorted(vignettes, key=lambda v: (v.order, v.name))


def bundled_paths() -> List[Path]:
    return [v.source_path for v in bundled_vignettes() if v.source_path is not None]


def _readme(vignettes: List[Vignette]) -> str:
    lines = [
        "# figcompose vignettes",
        "",
        "Render them with `figcompose render vignettes/*.md --out site/`",
        "or smoke-test them with `figcompose check vignettes/*.md`.",
        "",
    ]
    for vignette in vignettes:
        entry = f"- [{vignette.title}]({vignette.name}.md)"
        if vignette.description:
            entry += f": {vignette.description}"
        lines.append(entry)
    return "\n".join(lines) + "\n"


def init_vignettes(dest: str | Path, overwrite: bool = False) -> List[Path]:
    """Copy the bundled vignettes into ``dest/vignettes`` with a README index.

    Existing files are left alone unless ``overwrite`` is set. Returns the
    files that were written.
    """
    target = Path(dest) / "vignettes"
    target.mkdir(parents=True, exist_ok=True)
    vignettes = bundled_vignettes()
    written: List[Path] = []

    for vignette in vignettes:
        out = target / f"{vignette.name}.md"
        if out.exists() and not overwrite:
            log.info("Keeping existing %s", out)
            continue
        shutil.copyfile(vignette.source_path, out)
        written.append(out)

    readme = target / "README.md"
    if overwrite or not readme.exists():
        with readme.open("w", encoding="utf-8") as f:
            f.write(_readme(vignettes))
        written.append(readme)

    log.info("Wrote %d file(s) to %s", len(written), target)
    return written
