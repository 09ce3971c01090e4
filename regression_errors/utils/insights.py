"""
Regression helpers used by the scripts, the app and unit tests.
OLS fit, sum-of-squares decomposition and segment labels. NumPy/pandas only.
"""
from __future__ import annotations

from dataclasses import dataclass
import numpy as np
import pandas as pd

SEGMENT_TYPES = ("SST", "SSR", "SSE", "Other")


class DegenerateInputError(ValueError):
    """Data that cannot support a well-defined fit or metric.

    `check` names the precondition that failed, e.g. ``zero_variance_predictor``.
    """

    def __init__(self, check: str, message: str):
        super().__init__(message)
        self.check = check


@dataclass(frozen=True)
class OLSResult:
    beta: np.ndarray        # [intercept, slope]
    y_hat: np.ndarray
    resid: np.ndarray

    @property
    def intercept(self) -> float:
        return float(self.beta[0])

    @property
    def slope(self) -> float:
        return float(self.beta[1])

    @property
    def n(self) -> int:
        return int(self.y_hat.size)


@dataclass(frozen=True)
class ErrorMetrics:
    n: int
    mean: float
    sst: float
    ssr: float
    sse: float
    mse: float
    r2: float
    mad: float

    @property
    def decomposition_gap(self) -> float:
        return abs(self.sst - (self.ssr + self.sse))


def _as_vector(values, name: str) -> np.ndarray:
    arr = np.asarray(values, dtype=float).reshape(-1)
    if not np.all(np.isfinite(arr)):
        raise DegenerateInputError("non_finite_input", f"{name} contains NaN or infinite values")
    return arr


def _paired(a, b, names: tuple[str, str]) -> tuple[np.ndarray, np.ndarray]:
    a = _as_vector(a, names[0])
    b = _as_vector(b, names[1])
    if a.size != b.size:
        raise DegenerateInputError(
            "length_mismatch", f"{names[0]} has {a.size} values but {names[1]} has {b.size}"
        )
    if a.size == 0:
        raise DegenerateInputError("empty", "No observations")
    return a, b


def _frozen(arr: np.ndarray) -> np.ndarray:
    arr.setflags(write=False)
    return arr


def predict(beta, x) -> np.ndarray:
    """Fitted values intercept + slope * x."""
    x = np.asarray(x, dtype=float).reshape(-1)
    return beta[0] + beta[1] * x


def ols_fit(x, y) -> OLSResult:
    """
    Fit y = a + b*x via ordinary least squares (closed form).

    slope = cov(x, y) / var(x), intercept = mean(y) - slope * mean(x).
    Rejects empty, mismatched or non-finite input and a predictor with zero
    variance instead of returning NaN coefficients.
    """
    x, y = _paired(x, y, ("predictor", "response"))

    x_bar = x.mean()
    y_bar = y.mean()
    sxx = float(np.sum((x - x_bar) ** 2))
    if sxx == 0.0:
        raise DegenerateInputError(
            "zero_variance_predictor", "Predictor has zero variance; the slope is undefined"
        )
    sxy = float(np.sum((x - x_bar) * (y - y_bar)))
    slope = sxy / sxx
    beta = np.array([y_bar - slope * x_bar, slope])

    y_hat = predict(beta, x)
    if not (np.all(np.isfinite(beta)) and np.all(np.isfinite(y_hat))):
        raise DegenerateInputError("non_finite_result", "OLS fit produced NaN or infinite values")
    resid = y - y_hat

    return OLSResult(beta=_frozen(beta), y_hat=_frozen(y_hat), resid=_frozen(resid))


def error_metrics(observed, fitted, mean: float | None = None) -> ErrorMetrics:
    """
    Sum-of-squares decomposition and error summaries of a fit.

    SST = sum((y - mean)^2), SSR = sum((y_hat - mean)^2), SSE = sum((y - y_hat)^2),
    MSE = mean(resid^2), R^2 = SSR / SST, MAD = mean(|resid|).
    """
    y, y_hat = _paired(observed, fitted, ("observed", "fitted"))
    y_bar = float(y.mean()) if mean is None else float(mean)

    resid = y - y_hat
    sst = float(np.sum((y - y_bar) ** 2))
    if sst == 0.0:
        raise DegenerateInputError(
            "zero_variance_response", "Response has zero variance (SST = 0); R-squared is undefined"
        )
    ssr = float(np.sum((y_hat - y_bar) ** 2))
    sse = float(np.sum(resid ** 2))

    metrics = ErrorMetrics(
        n=int(y.size),
        mean=y_bar,
        sst=sst,
        ssr=ssr,
        sse=sse,
        mse=float(np.mean(resid ** 2)),
        r2=ssr / sst,
        mad=float(np.mean(np.abs(resid))),
    )
    values = [metrics.mean, metrics.sst, metrics.ssr, metrics.sse, metrics.mse, metrics.r2, metrics.mad]
    if not all(np.isfinite(values)):
        raise DegenerateInputError("non_finite_result", "Error metrics produced NaN or infinite values")
    return metrics


def classify_segment(observed: float, mean: float, fitted: float) -> str:
    """Label one observation by its position relative to the mean and the fitted line."""
    if observed > mean:
        return "SST" if observed > fitted else "SSR"
    if observed <= fitted:
        return "SSE"
    # below the mean but above the fitted line
    return "Other"


def segment_labels(observed, mean: float, fitted) -> np.ndarray:
    """Vectorised `classify_segment`; one label per observation."""
    y, y_hat = _paired(observed, fitted, ("observed", "fitted"))
    if not np.isfinite(mean):
        raise DegenerateInputError("non_finite_input", "mean is NaN or infinite")
    above_mean = y > mean
    above_fit = y > y_hat
    return np.select(
        [above_mean & above_fit, above_mean & ~above_fit, ~above_mean & ~above_fit],
        ["SST", "SSR", "SSE"],
        default="Other",
    )


def segments_frame(df: pd.DataFrame, predictor: str, response: str, fit: OLSResult) -> pd.DataFrame:
    """
    Per-observation view of a fit: fitted value, response mean, residual,
    squared error and segment type next to the original columns.
    """
    if len(df) != fit.n:
        raise DegenerateInputError(
            "length_mismatch", f"Frame has {len(df)} rows but the fit has {fit.n}"
        )
    out = df.copy()
    y = out[response].astype(float).to_numpy()
    y_bar = float(y.mean())
    out["fitted"] = fit.y_hat
    out[f"mean_{response}"] = y_bar
    out["residual"] = fit.resid
    out["squared_error"] = fit.resid ** 2
    out["segment_type"] = segment_labels(y, y_bar, fit.y_hat)
    return out
