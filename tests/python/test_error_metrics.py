import numpy as np
import pytest
from regression_errors.utils.datasets import MTCARS_COLUMNS, mtcars_frame
from regression_errors.utils.insights import DegenerateInputError, error_metrics, ols_fit


def _mtcars_metrics(predictor="wt", response="mpg"):
    df = mtcars_frame()
    y = df[response].to_numpy()
    fit = ols_fit(df[predictor], y)
    return fit, error_metrics(y, fit.y_hat)


def test_mtcars_decomposition_matches_reference_values():
    fit, m = _mtcars_metrics()
    assert m.n == 32
    assert m.mean == pytest.approx(20.090625)
    assert m.sst == pytest.approx(1126.047, abs=1e-3)
    assert m.ssr == pytest.approx(847.725, abs=1e-3)
    assert m.sse == pytest.approx(278.322, abs=1e-3)
    assert m.mse == pytest.approx(8.6976, abs=1e-4)
    assert m.r2 == pytest.approx(0.75283, abs=1e-5)
    assert m.mad == pytest.approx(float(np.mean(np.abs(fit.resid))))


@pytest.mark.parametrize("predictor", [c for c in MTCARS_COLUMNS if c != "mpg"])
def test_sum_of_squares_identity_holds_for_every_predictor(predictor):
    _, m = _mtcars_metrics(predictor=predictor)
    assert m.decomposition_gap < 1e-9 * m.sst, f"SST != SSR + SSE for {predictor}: gap={m.decomposition_gap}"
    assert 0.0 <= m.r2 <= 1.0
    assert m.mse == pytest.approx(m.sse / m.n, rel=1e-12)


def test_identity_and_bounds_on_random_data():
    rng = np.random.default_rng(7)
    for _ in range(20):
        n = int(rng.integers(3, 200))
        x = rng.normal(0, rng.uniform(0.1, 100), size=n)
        y = rng.uniform(-5, 5) * x + rng.normal(0, rng.uniform(0.01, 50), size=n)
        fit = ols_fit(x, y)
        m = error_metrics(y, fit.y_hat)
        assert m.decomposition_gap <= 1e-9 * m.sst
        assert 0.0 <= m.r2 <= 1.0 + 1e-12
        assert m.mad >= 0.0


def test_perfect_fit_has_no_error():
    x = np.arange(10, dtype=float)
    y = 3.0 + 0.25 * x
    fit = ols_fit(x, y)
    m = error_metrics(y, fit.y_hat)
    assert m.sse == pytest.approx(0.0, abs=1e-20)
    assert m.mad == pytest.approx(0.0, abs=1e-12)
    assert m.r2 == pytest.approx(1.0)


def test_mad_is_positive_when_any_residual_is_non_zero():
    m = error_metrics([1.0, 2.0, 3.0], [1.0, 2.0, 2.5])
    assert m.mad == pytest.approx(0.5 / 3)


def test_explicit_mean_is_used():
    m = error_metrics([1.0, 3.0], [1.0, 3.0], mean=0.0)
    assert m.mean == 0.0
    assert m.sst == pytest.approx(10.0)
    assert m.ssr == pytest.approx(10.0)


def test_zero_variance_response_is_rejected():
    x = [1.0, 2.0, 3.0, 4.0]
    y = [5.0, 5.0, 5.0, 5.0]
    fit = ols_fit(x, y)  # a flat response still has a well-defined line
    assert fit.slope == 0.0
    with pytest.raises(DegenerateInputError) as exc:
        error_metrics(y, fit.y_hat)
    assert exc.value.check == "zero_variance_response"


@pytest.mark.parametrize(
    "observed, fitted, check",
    [
        ([], [], "empty"),
        ([1.0, 2.0, 3.0], [1.0, 2.0], "length_mismatch"),
        ([1.0, 2.0, np.nan], [1.0, 2.0, 3.0], "non_finite_input"),
    ],
)
def test_malformed_metric_input_is_rejected(observed, fitted, check):
    with pytest.raises(DegenerateInputError) as exc:
        error_metrics(observed, fitted)
    assert exc.value.check == check
