# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Composition defaults with ``FIGCOMPOSE_*`` environment overrides."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, replace
from functools import lru_cache
from typing import Callable, Dict, Mapping, Optional

from .themes import get_theme

log = logging.getLogger(__name__)

ENV_PREFIX = "FIGCOMPOSE_"


@dataclass(frozen=True)
class ComposeDefaults:
    dpi: float = 300.0
    label_size: float = 14.0
    label_fontface: str = "bold"
    label_x: float = 0.0
    label_y: float = 1.0
    label_hjust: float = -0.5
    label_vjust: float = 1.5
    base_height: float = 3.71
    base_asp: float = 1.618
    fit_pad_in: float = 0.05
    max_export_px: int = 8000
    theme: str = "classic"


def _positive_float(raw: str) -> float:
    value = float(raw)
    if value <= 0:
        raise ValueError("must be > 0")
    return value


def _positive_int(raw: str) -> int:
    value = int(raw)
    if value <= 0:
        raise ValueError("must be > 0")
    return value


def _theme_name(raw: str) -> str:
    if raw.strip().lower() == "none":
        return "none"
    try:
        return get_theme(raw).name
    except KeyError as exc:
        raise ValueError(exc.args[0]) from None


# env suffix -> (field, parser)
_ENV_FIELDS: Dict[str, tuple[str, Callable[[str], object]]] = {
    "DPI": ("dpi", _positive_float),
    "LABEL_SIZE": ("label_size", _positive_float),
    "MAX_EXPORT_PX": ("max_export_px", _positive_int),
    "THEME": ("theme", _theme_name),
}


def _parse_environment(env: Mapping[str, str]) -> Dict[str, object]:
    overrides: Dict[str, object] = {}
    for suffix, (field_name, parser) in _ENV_FIELDS.items():
        key = ENV_PREFIX + suffix
        raw = env.get(key)
        if raw is None or not raw.strip():
            continue
        try:
            overrides[field_name] = parser(raw)
        except ValueError as exc:
            log.warning("Ignoring %s=%r: %s", key, raw, exc)
    return overrides


@lru_cache(maxsize=1)
def _cached_defaults() -> ComposeDefaults:
    return replace(ComposeDefaults(), **_parse_environment(os.environ))


def reload() -> None:
    """Clear the cached defaults (useful for tests)."""

    _cached_defaults.cache_clear()


def get_defaults(env: Optional[Mapping[str, str]] = None) -> ComposeDefaults:
    """Return the active defaults; pass ``env`` to parse a specific mapping."""

    if env is not None:
        return replace(ComposeDefaults(), **_parse_environment(env))
    return _cached_defaults()
