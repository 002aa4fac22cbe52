# figcompose
# Copyright © 2025 Osvaldo J. Vega Rodríguez
# Licensed under CC BY-NC-SA 4.0 International
# http://creativecommons.org/licenses/by-nc-sa/4.0/

"""Small deterministic example datasets used throughout the vignettes."""

from __future__ import annotations

from typing import Callable, Dict, List

import numpy as np
import pandas as pd

__all__ = ["list_datasets", "load_dataset"]


def _cars(seed: int) -> pd.DataFrame:
    """Engine size vs fuel economy for a fleet of cars."""
    rng = np.random.default_rng(seed)
    n = 90
    drv = rng.choice(["f", "4", "r"], size=n, p=[0.5, 0.35, 0.15])
    cyl = rng.choice([4, 6, 8], size=n, p=[0.4, 0.35, 0.25])
    displ = np.round(np.clip(cyl * 0.55 + rng.normal(0.0, 0.35, size=n), 1.6, 7.0), 1)
    drive_penalty = np.select([drv == "4", drv == "r"], [3.0, 2.0], default=0.0)
    hwy = np.round(38.0 - 3.2 * displ - drive_penalty + rng.normal(0.0, 1.8, size=n))
    cty = np.round(hwy * 0.72 + rng.normal(0.0, 0.8, size=n))
    vehicle_class = np.where(
        displ > 5.0, "suv", np.where(displ > 3.0, "midsize", "compact")
    )
    return pd.DataFrame(
        {
            "displ": displ,
            "cyl": cyl,
            "drv": drv,
            "hwy": hwy.astype(int),
            "cty": cty.astype(int),
            "class": vehicle_class,
        }
    )


def _growth(seed: int) -> pd.DataFrame:
    """Daily plant height under three treatments."""
    rng = np.random.default_rng(seed)
    days = np.arange(0, 31)
    rates = {"control": 0.8, "low": 1.1, "high": 1.5}
    frames = []
    for treatment, rate in rates.items():
        height = 2.0 + rate * days * (1.0 - days / 90.0) + rng.normal(0.0, 0.4, size=days.size)
        frames.append(pd.DataFrame({"day": days, "treatment": treatment, "height": np.round(height, 2)}))
    return pd.concat(frames, ignore_index=True)


def _flowers(seed: int) -> pd.DataFrame:
    """Sepal and petal measurements of three flower species (50 each)."""
    rng = np.random.default_rng(seed)
    # species -> (sepal_length, sepal_width, petal_length, petal_width) means
    means = {
        "setosa": (5.0, 3.4, 1.5, 0.25),
        "versicolor": (5.9, 2.8, 4.3, 1.3),
        "virginica": (6.6, 3.0, 5.6, 2.0),
    }
    spreads = (0.35, 0.35, 0.3, 0.15)
    frames = []
    for species, centre in means.items():
        values = rng.normal(centre, spreads, size=(50, 4))
        frame = pd.DataFrame(
            np.round(np.clip(values, 0.1, None), 1),
            columns=["sepal_length", "sepal_width", "petal_length", "petal_width"],
        )
        frame["species"] = species
        frames.append(frame)
    return pd.concat(frames, ignore_index=True)


_DATASETS: Dict[str, Callable[[int], pd.DataFrame]] = {
    "cars": _cars,
    "growth": _growth,
    "flowers": _flowers,
}


def list_datasets() -> List[str]:
    return sorted(_DATASETS)


def load_dataset(name: str, seed: int = 2025) -> pd.DataFrame:
    """Return a fresh copy of the named dataset; the same seed gives the same rows."""
    try:
        factory = _DATASETS[name]
    except KeyError:
        raise KeyError(f"Unknown dataset {name!r}; available: {', '.join(list_datasets())}") from None
    return factory(seed)
