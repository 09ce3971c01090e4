from __future__ import annotations

import copy
import os
from pathlib import Path

import yaml

CONFIG_PATH = Path("config/config.yaml")

DEFAULTS: dict = {
    "predictor": "wt",
    "response": "mpg",
    # axis titles and x-limits are keyed by column; other columns get their name and a data-driven range
    "labels": {
        "wt": "Weight (1000 lbs)",
        "mpg": "Miles per Gallon (MPG)",
    },
    "charts": {
        "x_limits": {"wt": [1.5, 5.5]},
        "histogram_binwidth": 1.0,
        "histogram_max_bins": 100,
        "figsize": [8, 4.5],
        "panels_figsize": [7, 9],
    },
    "artifacts_dir": "artifacts",
}


def load_cfg(path: str | Path | None = None) -> dict:
    """
    Defaults, then config/config.yaml (or REGRESSION_CONFIG), then env overrides.
    A missing file is fine; a file that is not a mapping is not.
    """
    cfg = copy.deepcopy(DEFAULTS)
    path = Path(path or os.environ.get("REGRESSION_CONFIG", CONFIG_PATH))
    if path.exists():
        with open(path, "r") as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ValueError(f"Config {path} must be a mapping, got {type(loaded).__name__}")
        for key, value in loaded.items():
            if isinstance(value, dict) and isinstance(cfg.get(key), dict):
                cfg[key].update(value)
            else:
                cfg[key] = value

    for key, env in (("predictor", "PREDICTOR"), ("response", "RESPONSE"), ("artifacts_dir", "ARTIFACTS_DIR")):
        if os.environ.get(env):
            cfg[key] = os.environ[env]
    return cfg
