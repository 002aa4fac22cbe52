# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Vignette documents: Markdown prose with runnable Python chunks.

A vignette may start with a front-matter block::

    ---
    title: Shared legends
    order: 2
    ---

Code chunks are fenced ``python`` blocks; options go in braces after the
language, e.g. ``{label=grid, fig_width=8, fig_height=3, eval=false}``.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Dict, List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, field_validator

__all__ = [
    "Chunk",
    "ChunkOptions",
    "Vignette",
    "load_vignette",
    "parse_vignette",
]

_FENCE_OPEN = re.compile(r"^```\s*(?P<lang>[A-Za-z0-9_+-]*)\s*(?:\{(?P<opts>[^}]*)\})?\s*$")
_HEADING = re.compile(r"^#\s+(?P<title>.+?)\s*$")
_PYTHON_LANGS = {"python", "py", "python3"}


class ChunkOptions(BaseModel):
    model_config = ConfigDict(extra="forbid")

    label: Optional[str] = None
    fig_width: float = 7.0
    fig_height: float = 4.5
    dpi: Optional[float] = None
    eval: bool = True

    @field_validator("fig_width", "fig_height")
    def _size_positive(cls, value: float) -> float:
        if value <= 0:
            raise ValueError("figure size must be > 0")
        return value

    @field_validator("dpi")
    def _dpi_positive(cls, value: Optional[float]) -> Optional[float]:
        if value is not None and value <= 0:
            raise ValueError("dpi must be > 0")
        return value


class Chunk(BaseModel):
    kind: Literal["prose", "code"]
    text: str
    line: int = 0
    options: ChunkOptions = Field(default_factory=ChunkOptions)


class Vignette(BaseModel):
    name: str
    title: str = ""
    description: str = ""
    order: int = 100
    chunks: List[Chunk] = Field(default_factory=list)
    source_path: Optional[Path] = None

    @property
    def code_chunks(self) -> List[Chunk]:
        return [chunk for chunk in self.chunks if chunk.kind == "code"]


def _parse_options(raw: Optional[str], where: str) -> ChunkOptions:
    if not raw or not raw.strip():
        return ChunkOptions()
    values: Dict[str, str] = {}
    for token in re.split(r"[,\s]+", raw.strip()):
        if not token:
            continue
        if "=" not in token:
            raise ValueError(f"{where}: chunk option {token!r} must look like key=value")
        key, value = token.split("=", 1)
        values[key.strip()] = value.strip().strip("'\"")
    return ChunkOptions(**values)


def _front_matter(lines: List[str]) -> Tuple[Dict[str, str], int]:
    if not lines or lines[0].strip() != "---":
        return {}, 0
    meta: Dict[str, str] = {}
    for index in range(1, len(lines)):
        line = lines[index]
        if line.strip() == "---":
            return meta, index + 1
        if not line.strip() or line.lstrip().startswith("#"):
            continue
        if ":" not in line:
            raise ValueError(f"front matter line {index + 1} must look like 'key: value'")
        key, value = line.split(":", 1)
        meta[key.strip().lower()] = value.strip().strip("'\"")
    raise ValueError("front matter block is not closed with '---'")


def parse_vignette(text: str, name: str, source_path: Optional[Path] = None) -> Vignette:
    """Split vignette source into prose and code chunks."""
    lines = text.splitlines()
    meta, start = _front_matter(lines)
    chunks: List[Chunk] = []
    prose: List[str] = []
    prose_start = start + 1

    def _flush_prose() -> None:
        if "".join(prose).strip():
            chunks.append(Chunk(kind="prose", text="\n".join(prose).strip("\n"), line=prose_start))
        prose.clear()

    index = start
    while index < len(lines):
        match = _FENCE_OPEN.match(lines[index])
        if match is None:
            if not prose:
                prose_start = index + 1
            prose.append(lines[index])
            index += 1
            continue
        end = index + 1
        while end < len(lines) and lines[end].strip() != "```":
            end += 1
        if end >= len(lines):
            raise ValueError(f"{name}: code fence opened at line {index + 1} is never closed")
        lang = match.group("lang").lower()
        if lang in _PYTHON_LANGS:
            _flush_prose()
            options = _parse_options(match.group("opts"), f"{name}:{index + 1}")
            chunks.append(
                Chunk(kind="code", text="\n".join(lines[index + 1 : end]), line=index + 1, options=options)
            )
        else:
            if not prose:
                prose_start = index + 1
            prose.extend(lines[index : end + 1])
        index = end + 1
    _flush_prose()

    title = meta.get("title", "")
    if not title:
        for chunk in chunks:
            if chunk.kind != "prose":
                continue
            heading = next((m for m in map(_HEADING.match, chunk.text.splitlines()) if m), None)
            if heading is not None:
                title = heading.group("title")
                break

    return Vignette(
        name=name,
        title=title or name.replace("_", " ").title(),
        description=meta.get("description", ""),
        order=int(meta.get("order", 100)),
        chunks=chunks,
        source_path=source_path,
    )


def load_vignette(path: str | Path) -> Vignette:
    path = Path(path)
    with path.open("r", encoding="utf-8") as f:
        text = f.read()
    return parse_vignette(text, name=path.stem, source_path=path)
