# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Narrative vignettes: parse, run, render and smoke-test them."""

from .bundled import DOCS_DIR, bundled_paths, bundled_vignettes, init_vignettes
from .document import Chunk, ChunkOptions, Vignette, load_vignette, parse_vignette
from .runner import (
    CheckReport,
    ChunkExecutionError,
    ChunkResult,
    VignetteResult,
    check_vignettes,
    render_markdown,
    render_vignette,
    run_vignette,
)

__all__ = [
    "DOCS_DIR",
    "CheckReport",
    "Chunk",
    "ChunkExecutionError",
    "ChunkOptions",
    "ChunkResult",
    "Vignette",
    "VignetteResult",
    "bundled_paths",
    "bundled_vignettes",
    "check_vignettes",
    "init_vignettes",
    "load_vignette",
    "parse_vignette",
    "render_markdown",
    "render_vignette",
    "run_vignette",
]
