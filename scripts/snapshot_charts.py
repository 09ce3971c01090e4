#!/usr/bin/env python3
"""
Render the diagnostic charts as CI artifacts (no display needed).
Outputs (under ARTIFACTS_DIR, default artifacts/):
  decomposition.png
  segment_panels.png
  residuals.png
  residuals_mad.png
  squared_errors.png
"""
from __future__ import annotations

import matplotlib

matplotlib.use("Agg")

from regression_errors.utils.analysis import run_analysis
from regression_errors.utils.charts import build_catalog, save_catalog
from regression_errors.utils.config import load_cfg


def main():
    cfg = load_cfg()
    analysis = run_analysis(cfg["predictor"], cfg["response"])
    for out in save_catalog(build_catalog(analysis, cfg), cfg["artifacts_dir"]):
        print(f"[snapshot] Wrote {out}")

if __name__ == "__main__":
    main()
