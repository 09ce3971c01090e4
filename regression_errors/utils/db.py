from __future__ import annotations

from functools import lru_cache

import duckdb
import pandas as pd

from regression_errors.utils.datasets import MTCARS_COLUMNS, mtcars_frame

OBSERVATIONS_TABLE = "raw_mtcars"


@lru_cache(maxsize=1)
def _connect() -> duckdb.DuckDBPyConnection:
    # In-memory only; nothing is persisted between runs
    con = duckdb.connect(":memory:")
    ensure_demo_db(con)
    return con

def get_con() -> duckdb.DuckDBPyConnection:
    return _connect()

def query_df(sql: str, params: tuple = ()) -> pd.DataFrame:
    con = get_con()
    return con.execute(sql, params).fetchdf()

def table_exists(name: str, con: duckdb.DuckDBPyConnection | None = None) -> bool:
    con = con or get_con()
    try:
        con.execute(f"SELECT 1 FROM {name} LIMIT 1")
        return True
    except duckdb.Error:
        return False

def table_columns(name: str, con: duckdb.DuckDBPyConnection | None = None) -> list[str]:
    con = con or get_con()
    rows = con.execute(
        "SELECT column_name FROM information_schema.columns WHERE table_name = ? ORDER BY ordinal_position",
        (name,),
    ).fetchall()
    return [r[0] for r in rows]

def ensure_demo_db(con: duckdb.DuckDBPyConnection) -> None:
    """
    Register the built-in observation table as `raw_mtcars` with a `row_id`
    column so queries can return rows in their original order.
    """
    if table_exists(OBSERVATIONS_TABLE, con):
        return
    df = mtcars_frame()
    df.insert(0, "row_id", range(1, len(df) + 1))
    con.register("df_mtcars", df)
    con.execute(f"CREATE OR REPLACE TABLE {OBSERVATIONS_TABLE} AS SELECT * FROM df_mtcars")
    con.unregister("df_mtcars")

def resolve_column(name: str) -> str:
    """Only known numeric columns ever reach SQL text."""
    if name not in MTCARS_COLUMNS:
        raise KeyError(f"Unknown column {name!r}; expected one of {', '.join(MTCARS_COLUMNS)}")
    return name

def load_observations(predictor: str, response: str) -> pd.DataFrame:
    """`model`, predictor and response columns in table order."""
    x = resolve_column(predictor)
    y = resolve_column(response)
    cols = ", ".join(dict.fromkeys([x, y]))
    return query_df(f"""
        SELECT model, {cols}
        FROM {OBSERVATIONS_TABLE}
        ORDER BY row_id
    """)
