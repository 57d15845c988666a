"""
Plan text sources

A plan text source asks the database for the EXPLAIN PLAN output of a query
and hands back the raw text. Connection lifecycle belongs to the caller.
"""

from typing import Any, Callable, Optional, Protocol, TYPE_CHECKING, runtime_checkable

from sqlalchemy import text
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError

from plantree.core.constants import DEFAULT_EXPLAIN_PREFIX, DEFAULT_PLAN_COLUMN
from plantree.core.exceptions import PlanFetchError
from plantree.core.logger import get_logger

if TYPE_CHECKING:
    from plantree.core.config import Settings

logger = get_logger('database.plan_source')

PlanTextFetcher = Callable[[Any, str], str]


@runtime_checkable
class PlanTextSource(Protocol):
    """Returns raw plan text for a query on an open session"""

    def fetch_plan_text(self, session: Any, query: str) -> str:
        ...


class CallablePlanSource:
    """Adapts a plain (session, query) -> str function to PlanTextSource"""

    def __init__(self, fetcher: PlanTextFetcher):
        self._fetcher = fetcher

    def fetch_plan_text(self, session: Any, query: str) -> str:
        return self._fetcher(session, query)


class SqlAlchemyPlanSource:
    """
    Plan text through a SQLAlchemy connection

    Runs ``explain_prefix + query`` and joins one column of every returned row
    with newlines, which gives the indented plan text for databases that
    return their plan as rows of text.

    Example:
        source = SqlAlchemyPlanSource("EXPLAIN PLAN FOR ")
        with engine.connect() as conn:
            plan_text = source.fetch_plan_text(conn, "SELECT * FROM t1")
    """

    def __init__(
        self,
        explain_prefix: str = DEFAULT_EXPLAIN_PREFIX,
        column: int = DEFAULT_PLAN_COLUMN,
    ):
        if column < 0:
            raise ValueError(f"column must not be negative, got {column}")
        self.explain_prefix = explain_prefix
        self.column = column

    @classmethod
    def from_settings(cls, settings: Optional['Settings'] = None) -> 'SqlAlchemyPlanSource':
        if settings is None:
            from plantree.core.config import get_settings
            settings = get_settings()
        return cls(
            explain_prefix=settings.database.explain_prefix,
            column=settings.database.plan_column,
        )

    def build_statement(self, query: str) -> str:
        return f"{self.explain_prefix}{query.strip().rstrip(';')}"

    def _fetch(self, conn: Connection, statement: str) -> str:
        result = conn.execute(text(statement))
        if not result.returns_rows:
            return ""
        lines = []
        for row in result:
            value = row[self.column]
            lines.append("" if value is None else str(value))
        return "\n".join(lines)

    def fetch_plan_text(self, session: Any, query: str) -> str:
        """
        Fetch plan text for a query

        Args:
            session: SQLAlchemy Connection, or an Engine to borrow one from
            query: SQL query to explain

        Returns:
            Raw plan text, one plan row per line

        Raises:
            PlanFetchError: If the explain statement fails
        """
        statement = self.build_statement(query)

        try:
            if isinstance(session, Engine):
                with session.connect() as conn:
                    plan_text = self._fetch(conn, statement)
            else:
                plan_text = self._fetch(session, statement)
        except SQLAlchemyError as e:
            raise PlanFetchError(f"Explain plan failed: {e}", query=query) from e
        except IndexError as e:
            raise PlanFetchError(
                f"Explain result has no column {self.column}", query=query
            ) from e

        logger.debug(f"Fetched plan text: {len(plan_text.splitlines())} line(s)")
        return plan_text
