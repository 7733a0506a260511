from typing import Any, List, Mapping, Optional, Sequence

import duckdb
import structlog
from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.engine import Connection, Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncConnection, AsyncSession

from app.core.config import settings
from app.core.exceptions import QueryExecutionError
from app.models.engagement import Artist, User, UserEvent
from app.schemas.engagement import EngagementRow
from app.services.scoring import (
    DEFAULT_ENGAGEMENT_SCORE,
    ENGAGEMENT_SCORES,
    order_rows,
    score_expression,
)

logger = structlog.get_logger()


def build_report_query():
    """Events joined to their user and artist, scored and ordered"""
    engagement_score = score_expression(UserEvent.event_type).label("engagement_score")

    return (
        select(
            Artist.name.label("artist_name"),
            UserEvent.event_type.label("event_type"),
            engagement_score,
            UserEvent.created_at.label("created_at"),
            User.timezone.label("timezone"),
        )
        .select_from(UserEvent)
        .join(User, UserEvent.user_id == User.id)
        .join(Artist, UserEvent.artist_id == Artist.id)
        .order_by(
            Artist.name.asc(),
            engagement_score.desc(),
            UserEvent.created_at.desc(),
            # Stable final key so repeated runs return ties in the same order
            UserEvent.id.asc(),
        )
    )


def _duckdb_score_case() -> str:
    whens = "\n".join(
        "        WHEN e.event_type = ? THEN CAST(? AS INTEGER)" for _ in ENGAGEMENT_SCORES
    )
    return f"CASE\n{whens}\n        ELSE {DEFAULT_ENGAGEMENT_SCORE}\n    END"


DUCKDB_REPORT_QUERY = f"""
SELECT
    a.name AS artist_name,
    e.event_type AS event_type,
    {_duckdb_score_case()} AS engagement_score,
    e.created_at AS created_at,
    u.timezone AS timezone
FROM user_events e
JOIN users u ON e.user_id = u.id
JOIN artists a ON e.artist_id = a.id
ORDER BY
    a.name ASC, engagement_score DESC, e.created_at DESC, e.id ASC
"""

DUCKDB_REPORT_PARAMS = [value for item in ENGAGEMENT_SCORES.items() for value in item]


class EngagementReportService:
    """Runs the engagement report against a SQLAlchemy or DuckDB store"""

    def __init__(self, portable_ordering: Optional[bool] = None):
        if portable_ordering is None:
            portable_ordering = settings.report_portable_ordering
        self.portable_ordering = portable_ordering

    def run(self, store: Any) -> List[EngagementRow]:
        """
        Run the report on a synchronous store.

        Args:
            store: SQLAlchemy Engine or Connection, or a DuckDB connection

        Raises:
            QueryExecutionError: store missing or unusable, or the query failed
        """
        if isinstance(store, duckdb.DuckDBPyConnection):
            return self._run_duckdb(store)

        if isinstance(store, Engine):
            try:
                with store.connect() as conn:
                    return self._run_sqlalchemy(conn)
            except SQLAlchemyError as e:
                logger.error("engagement_report_connect_failed", error=str(e))
                raise QueryExecutionError(f"Could not connect to store: {e}") from e

        if isinstance(store, Connection):
            return self._run_sqlalchemy(store)

        raise QueryExecutionError(f"Unsupported store: {type(store).__name__}")

    async def run_async(self, session: AsyncSession | AsyncConnection) -> List[EngagementRow]:
        """Run the report on an async SQLAlchemy session or connection"""
        if not isinstance(session, (AsyncSession, AsyncConnection)):
            raise QueryExecutionError(f"Unsupported store: {type(session).__name__}")

        try:
            result = await session.execute(build_report_query())
            records = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error("engagement_report_query_failed", backend="database", error=str(e))
            raise QueryExecutionError(f"Engagement report query failed: {e}") from e

        rows = self._to_rows(records)
        logger.info("engagement_report_query_database", rows=len(rows))
        return rows

    def _run_sqlalchemy(self, conn: Connection) -> List[EngagementRow]:
        try:
            result = conn.execute(build_report_query())
            records = result.mappings().all()
        except SQLAlchemyError as e:
            logger.error("engagement_report_query_failed", backend="database", error=str(e))
            raise QueryExecutionError(f"Engagement report query failed: {e}") from e

        rows = self._to_rows(records)
        logger.info("engagement_report_query_database", rows=len(rows))
        return rows

    def _run_duckdb(self, conn: duckdb.DuckDBPyConnection) -> List[EngagementRow]:
        try:
            result = conn.execute(DUCKDB_REPORT_QUERY, DUCKDB_REPORT_PARAMS).fetchall()
        except duckdb.Error as e:
            logger.error("engagement_report_query_failed", backend="duckdb", error=str(e))
            raise QueryExecutionError(f"Engagement report query failed: {e}") from e

        records = [
            {
                "artist_name": row[0],
                "event_type": row[1],
                "engagement_score": row[2],
                "created_at": row[3],
                "timezone": row[4]
            }
            for row in result
        ]

        rows = self._to_rows(records)
        logger.info("engagement_report_query_duckdb", rows=len(rows))
        return rows

    def _to_rows(self, records: Sequence[Mapping[str, Any]]) -> List[EngagementRow]:
        try:
            rows = [EngagementRow.model_validate(dict(record)) for record in records]
        except ValidationError as e:
            logger.error("engagement_report_invalid_row", error=str(e))
            raise QueryExecutionError(f"Store returned an invalid report row: {e}") from e

        if self.portable_ordering:
            rows = order_rows(rows)
        return rows
