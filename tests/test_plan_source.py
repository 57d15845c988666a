"""Tests for plan text sources."""

from __future__ import annotations

import pytest
from sqlalchemy import create_engine, text

from plantree.core.config import Settings, DatabaseSettings
from plantree.core.exceptions import PlanFetchError
from plantree.database.plan_source import (
    CallablePlanSource,
    PlanTextSource,
    SqlAlchemyPlanSource,
)


@pytest.fixture
def engine():
    engine = create_engine("sqlite://")
    with engine.begin() as conn:
        conn.execute(text("CREATE TABLE t1 (id INTEGER, name TEXT)"))
    yield engine
    engine.dispose()


def sqlite_source() -> SqlAlchemyPlanSource:
    # EXPLAIN QUERY PLAN rows are (id, parent, notused, detail)
    return SqlAlchemyPlanSource(explain_prefix="EXPLAIN QUERY PLAN ", column=3)


def test_build_statement_prefixes_query() -> None:
    """It should prepend the explain prefix and drop a trailing semicolon."""

    source = SqlAlchemyPlanSource()

    assert source.build_statement(" SELECT * FROM t1; ") == "EXPLAIN PLAN FOR SELECT * FROM t1"


def test_fetches_plan_rows_on_connection(engine) -> None:
    """It should join the plan column of every row into plan text."""

    with engine.connect() as conn:
        plan_text = sqlite_source().fetch_plan_text(conn, "SELECT * FROM t1")

    assert plan_text.startswith("SCAN")
    assert "t1" in plan_text


def test_borrows_connection_from_engine(engine) -> None:
    """It should accept an Engine as the session."""

    plan_text = sqlite_source().fetch_plan_text(engine, "SELECT name FROM t1")

    assert "t1" in plan_text


def test_driver_error_becomes_plan_fetch_error(engine) -> None:
    """It should wrap SQLAlchemy errors in PlanFetchError."""

    with engine.connect() as conn:
        with pytest.raises(PlanFetchError) as excinfo:
            sqlite_source().fetch_plan_text(conn, "SELECT * FROM missing_table")

    assert excinfo.value.query == "SELECT * FROM missing_table"
    assert excinfo.value.details["query"] == "SELECT * FROM missing_table"


def test_missing_column_becomes_plan_fetch_error(engine) -> None:
    """It should report a plan column the result does not have."""

    source = SqlAlchemyPlanSource(explain_prefix="EXPLAIN QUERY PLAN ", column=42)

    with engine.connect() as conn:
        with pytest.raises(PlanFetchError):
            source.fetch_plan_text(conn, "SELECT * FROM t1")


def test_negative_column_is_rejected() -> None:
    """It should refuse a negative column index."""

    with pytest.raises(ValueError):
        SqlAlchemyPlanSource(column=-1)


def test_from_settings() -> None:
    """It should read the explain prefix and column from the settings."""

    settings = Settings(database=DatabaseSettings(explain_prefix="EXPLAIN ", plan_column=1))

    source = SqlAlchemyPlanSource.from_settings(settings)

    assert source.explain_prefix == "EXPLAIN "
    assert source.column == 1


def test_callable_source_satisfies_protocol() -> None:
    """It should adapt a plain function into a plan text source."""

    source = CallablePlanSource(lambda session, query: f"{session}:{query}")

    assert isinstance(source, PlanTextSource)
    assert isinstance(sqlite_source(), PlanTextSource)
    assert source.fetch_plan_text("s", "q") == "s:q"
