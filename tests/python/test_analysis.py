import pandas as pd
import pytest
from regression_errors.utils.analysis import format_summary, run_analysis
from regression_errors.utils.insights import DegenerateInputError


def test_run_analysis_on_builtin_table():
    analysis = run_analysis("wt", "mpg")
    assert analysis.predictor == "wt"
    assert analysis.response == "mpg"
    assert len(analysis.frame) == 32
    assert analysis.fit.slope == pytest.approx(-5.3445, abs=1e-4)
    assert analysis.metrics.sst == pytest.approx(1126.047, abs=1e-3)
    assert set(analysis.frame["segment_type"]) <= {"SST", "SSR", "SSE", "Other"}


def test_format_summary_prints_five_labeled_lines():
    lines = format_summary(run_analysis().metrics)
    labels = [line.split(":")[0] for line in lines]
    assert labels == [
        "Sum of Squares Total (SST)",
        "Sum of Squares Regression (SSR)",
        "Sum of Squares Error (SSE)",
        "Mean Squared Error (MSE)",
        "R-squared",
    ]
    values = [float(line.split(": ")[1]) for line in lines]
    assert values[0] == pytest.approx(1126.047, abs=1e-3)
    assert values[4] == pytest.approx(0.7528, abs=1e-4)


def test_custom_observations_with_flat_response_abort():
    df = pd.DataFrame({"model": list("abcd"), "wt": [1.0, 2.0, 3.0, 4.0], "mpg": [20.0] * 4})
    with pytest.raises(DegenerateInputError) as exc:
        run_analysis("wt", "mpg", observations=df)
    assert exc.value.check == "zero_variance_response"


def test_custom_observations_with_flat_predictor_abort():
    df = pd.DataFrame({"model": list("abc"), "wt": [3.0] * 3, "mpg": [18.0, 20.0, 22.0]})
    with pytest.raises(DegenerateInputError) as exc:
        run_analysis("wt", "mpg", observations=df)
    assert exc.value.check == "zero_variance_predictor"


def test_empty_observations_abort():
    df = pd.DataFrame({"model": [], "wt": [], "mpg": []})
    with pytest.raises(DegenerateInputError) as exc:
        run_analysis("wt", "mpg", observations=df)
    assert exc.value.check == "empty"


def test_unknown_column_is_rejected():
    with pytest.raises(KeyError):
        run_analysis("weight", "mpg")
