#!/usr/bin/env python3
"""
Fit the regression, print SST/SSR/SSE/MSE/R-squared and show the diagnostic charts.

Usage:
  python scripts/error_metrics.py
  python scripts/error_metrics.py --predictor hp --response mpg --save-dir artifacts
Env (optional):
  REGRESSION_CONFIG (default: config/config.yaml)
  PREDICTOR / RESPONSE (override the config)
"""
from __future__ import annotations

import argparse
import sys

import matplotlib.pyplot as plt

from regression_errors.utils.analysis import format_summary, run_analysis
from regression_errors.utils.charts import build_catalog, save_catalog
from regression_errors.utils.config import load_cfg
from regression_errors.utils.insights import DegenerateInputError


def eprint(*a, **k):
    print(*a, file=sys.stderr, **k)


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Regression error decomposition and diagnostics")
    p.add_argument("--config", default=None, help="YAML config path")
    p.add_argument("--predictor", default=None)
    p.add_argument("--response", default=None)
    p.add_argument("--no-show", action="store_true", help="Do not open chart windows")
    p.add_argument("--save-dir", default=None, help="Write the charts as PNGs here instead of showing them")
    return p.parse_args(argv)


def main(argv: list[str] | None = None) -> None:
    args = parse_args(argv)
    cfg = load_cfg(args.config)
    predictor = args.predictor or cfg["predictor"]
    response = args.response or cfg["response"]

    eprint(f"[analysis] Fitting {response} ~ {predictor}")
    analysis = run_analysis(predictor, response)
    eprint(
        f"[analysis] n={analysis.metrics.n} intercept={analysis.fit.intercept:.4f} "
        f"slope={analysis.fit.slope:.4f} MAD={analysis.metrics.mad:.4f}"
    )

    for line in format_summary(analysis.metrics):
        print(line)

    figures = build_catalog(analysis, cfg)
    if args.save_dir:
        for out in save_catalog(figures, args.save_dir):
            eprint(f"[charts] Wrote {out}")
    elif args.no_show:
        plt.close("all")
    else:
        eprint(f"[charts] Showing {len(figures)} charts")
        plt.show()


if __name__ == "__main__":
    try:
        main()
    except DegenerateInputError as e:
        eprint(f"[FATAL][input:{e.check}] {e}")
        sys.exit(2)
    except KeyError as e:
        eprint(f"[FATAL][config] {e}")
        sys.exit(2)
    except Exception as e:
        eprint(f"[FATAL] {type(e).__name__}: {e}")
        sys.exit(1)
