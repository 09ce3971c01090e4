"""
End-to-end pipeline: observations -> OLS fit -> error metrics -> segment frame.
Shared by the scripts and the Streamlit pages.
"""
from __future__ import annotations

from dataclasses import dataclass

import pandas as pd

from regression_errors.utils.db import load_observations
from regression_errors.utils.glossary import SUMMARY_LABELS
from regression_errors.utils.insights import (
    ErrorMetrics,
    OLSResult,
    error_metrics,
    ols_fit,
    segments_frame,
)


@dataclass(frozen=True)
class Analysis:
    predictor: str
    response: str
    frame: pd.DataFrame     # observations + fitted/residual/segment_type columns
    fit: OLSResult
    metrics: ErrorMetrics


def run_analysis(
    predictor: str = "wt",
    response: str = "mpg",
    observations: pd.DataFrame | None = None,
) -> Analysis:
    """
    Fit `response ~ predictor` and derive every summary the charts need.

    `observations` defaults to the built-in table. Any degenerate input raises
    DegenerateInputError before metrics are produced.
    """
    df = load_observations(predictor, response) if observations is None else observations
    x = df[predictor].astype(float).to_numpy()
    y = df[response].astype(float).to_numpy()

    fit = ols_fit(x, y)
    metrics = error_metrics(y, fit.y_hat)
    frame = segments_frame(df, predictor, response, fit)
    return Analysis(predictor=predictor, response=response, frame=frame, fit=fit, metrics=metrics)


def format_summary(metrics: ErrorMetrics) -> list[str]:
    """The five console lines, 7 significant digits like R's cat()."""
    return [f"{SUMMARY_LABELS[key]}: {getattr(metrics, key):.7g}" for key in SUMMARY_LABELS]
