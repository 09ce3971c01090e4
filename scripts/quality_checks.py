#!/usr/bin/env python3
"""
Fast-fail data contracts & sanity checks before fitting.

Usage:
  python scripts/quality_checks.py
  python scripts/quality_checks.py --predictor hp --response qsec
"""
from __future__ import annotations

import argparse
import sys

import duckdb

from regression_errors.utils.config import load_cfg
from regression_errors.utils.db import OBSERVATIONS_TABLE, get_con
from regression_errors.utils.quality import check_observations


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pre-fit data quality checks")
    p.add_argument("--config", default=None)
    p.add_argument("--predictor", default=None)
    p.add_argument("--response", default=None)
    return p.parse_args()


def main():
    args = parse_args()
    cfg = load_cfg(args.config)
    predictor = args.predictor or cfg["predictor"]
    response = args.response or cfg["response"]

    print(f"[quality] TABLE={OBSERVATIONS_TABLE} X={predictor} Y={response}")
    failures = check_observations(get_con(), predictor, response)

    if failures:
        print("\n[QUALITY FAIL] One or more data contracts were violated:")
        for i, f in enumerate(failures, 1):
            print(f" {i:02d}. {f}")
        print("\nPick another predictor/response pair and rerun.")
        sys.exit(2)

    print("[quality] All checks passed ✔")


if __name__ == "__main__":
    try:
        main()
    except duckdb.Error as e:
        print(f"[FATAL][DuckDB] {e}", file=sys.stderr)
        sys.exit(1)
    except KeyError as e:
        print(f"[FATAL][config] {e}", file=sys.stderr)
        sys.exit(2)
    except Exception as e:
        print(f"[FATAL] {type(e).__name__}: {e}", file=sys.stderr)
        sys.exit(1)
