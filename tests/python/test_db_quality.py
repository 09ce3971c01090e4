import duckdb
import pytest
from regression_errors.utils.db import (
    OBSERVATIONS_TABLE,
    get_con,
    load_observations,
    query_df,
    resolve_column,
    table_columns,
    table_exists,
)
from regression_errors.utils.datasets import MTCARS_COLUMNS, mtcars_frame
from regression_errors.utils.quality import check_observations


def test_builtin_table_is_registered():
    assert table_exists(OBSERVATIONS_TABLE)
    assert table_columns(OBSERVATIONS_TABLE) == ["row_id", "model", *MTCARS_COLUMNS]
    n = query_df(f"SELECT COUNT(*) AS n FROM {OBSERVATIONS_TABLE}")["n"].iloc[0]
    assert n == 32


def test_unknown_table_does_not_exist():
    assert not table_exists("raw_orders")


def test_load_observations_keeps_row_order():
    df = load_observations("wt", "mpg")
    assert list(df.columns) == ["model", "wt", "mpg"]
    assert df["model"].tolist() == mtcars_frame()["model"].tolist()
    assert df.loc[0, "model"] == "Mazda RX4"
    assert df.loc[0, "wt"] == pytest.approx(2.62)


def test_mtcars_frame_is_a_fresh_copy():
    df = mtcars_frame()
    df.loc[0, "mpg"] = -1.0
    assert mtcars_frame().loc[0, "mpg"] == 21.0


@pytest.mark.parametrize("name", ["weight", "mpg; DROP TABLE raw_mtcars", "model"])
def test_resolve_column_rejects_unknown_names(name):
    with pytest.raises(KeyError):
        resolve_column(name)


def test_builtin_pair_passes_contracts():
    assert check_observations(get_con(), "wt", "mpg") == []


def _table(rows):
    con = duckdb.connect(":memory:")
    con.execute("CREATE TABLE t (model VARCHAR, wt DOUBLE, mpg DOUBLE)")
    if rows:
        con.executemany("INSERT INTO t VALUES (?, ?, ?)", rows)
    return con


def test_contracts_flag_constant_predictor():
    con = _table([("a", 3.0, 20.0), ("b", 3.0, 22.0), ("c", 3.0, 18.0)])
    failures = check_observations(con, "wt", "mpg", table="t")
    assert any("Zero variance in predictor wt" in f for f in failures), failures
    assert not any("response" in f for f in failures), failures


def test_contracts_flag_constant_response_and_duplicate_keys():
    con = _table([("a", 2.0, 20.0), ("a", 3.0, 20.0), ("c", 4.0, 20.0)])
    failures = check_observations(con, "wt", "mpg", table="t")
    assert any("Zero variance in response mpg" in f for f in failures), failures
    assert any("PK not unique" in f for f in failures), failures


def test_contracts_flag_missing_values():
    con = _table([("a", 2.0, 20.0), ("b", None, 21.0), ("c", 4.0, 19.0)])
    failures = check_observations(con, "wt", "mpg", table="t")
    assert any("Missing predictor/response values" in f for f in failures), failures


def test_contracts_stop_at_empty_table():
    con = _table([])
    assert check_observations(con, "wt", "mpg", table="t") == ["Empty table: t"]
