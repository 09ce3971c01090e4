"""
Fast-fail data contracts on the observation table before fitting.
Each check appends a human-readable failure; an empty list means all passed.
"""
from __future__ import annotations

import duckdb

from regression_errors.utils.db import OBSERVATIONS_TABLE, resolve_column


def _run_scalar(con: duckdb.DuckDBPyConnection, sql: str):
    return con.execute(sql).fetchone()[0]


def _assert_zero(con: duckdb.DuckDBPyConnection, sql: str, msg: str, failures: list[str]) -> None:
    cnt = int(_run_scalar(con, sql))
    if cnt != 0:
        failures.append(f"{msg} (violations={cnt})")


def _assert_positive(con: duckdb.DuckDBPyConnection, sql: str, msg: str, failures: list[str]) -> None:
    value = _run_scalar(con, sql) or 0
    if value <= 0:
        failures.append(f"{msg} (value={value})")


def check_observations(
    con: duckdb.DuckDBPyConnection,
    predictor: str,
    response: str,
    table: str = OBSERVATIONS_TABLE,
) -> list[str]:
    """Contracts for a predictor/response pair on the observation table."""
    failures: list[str] = []
    x = resolve_column(predictor)
    y = resolve_column(response)

    # ---------- presence ----------
    cnt = int(_run_scalar(con, f"SELECT COUNT(*) FROM {table}"))
    if cnt == 0:
        failures.append(f"Empty table: {table}")
        return failures

    # ---------- PK uniqueness ----------
    _assert_zero(
        con,
        f"""
        WITH a AS (
          SELECT model, COUNT(*) c
          FROM {table}
          GROUP BY model
        )
        SELECT COUNT(*) FROM a WHERE c>1
        """,
        f"PK not unique on {table} (model)",
        failures,
    )
    _assert_zero(con, f"SELECT COUNT(*) FROM {table} WHERE model IS NULL",
                 f"PK contains NULLs on {table} (model)", failures)

    # ---------- value constraints ----------
    _assert_zero(
        con,
        f"SELECT COUNT(*) FROM {table} WHERE {x} IS NULL OR {y} IS NULL OR isnan({x}) OR isnan({y})",
        f"Missing predictor/response values ({x}, {y})",
        failures,
    )
    _assert_positive(con, f"SELECT var_pop({x}) FROM {table}",
                     f"Zero variance in predictor {x}", failures)
    _assert_positive(con, f"SELECT var_pop({y}) FROM {table}",
                     f"Zero variance in response {y}", failures)

    return failures
