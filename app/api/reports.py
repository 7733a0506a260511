# GET /reports/*

from fastapi import APIRouter, Depends, HTTPException, status
from fastapi.concurrency import run_in_threadpool
from sqlalchemy.ext.asyncio import AsyncSession
import duckdb
import structlog

from app.core.config import settings
from app.core.database import get_db, get_duckdb_connection
from app.core.exceptions import QueryExecutionError
from app.schemas.engagement import EngagementReportResponse
from app.services.engagement_report import EngagementReportService

logger = structlog.get_logger()
router = APIRouter(prefix="/reports", tags=["reports"])


def _run_duckdb_report(service: EngagementReportService):
    """Open the DuckDB copy, run the report, close. Blocking."""
    conn = get_duckdb_connection()
    try:
        return service.run(conn)
    finally:
        conn.close()


@router.get("/engagement", response_model=EngagementReportResponse)
async def get_engagement_report(db: AsyncSession = Depends(get_db)):
    """
    Every artist-related event with its engagement score and the user's timezone.

    Ordered by artist name, then engagement score (highest first),
    then event time (newest first).
    """
    service = EngagementReportService()

    try:
        if settings.report_backend == "duckdb":
            # DuckDB is synchronous; keep it off the event loop
            rows = await run_in_threadpool(_run_duckdb_report, service)
        else:
            rows = await service.run_async(db)

    except (QueryExecutionError, duckdb.Error) as e:
        logger.error("engagement_report_failed", backend=settings.report_backend, error=str(e))
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to load engagement report"
        )

    logger.info("engagement_report_loaded", backend=settings.report_backend, rows=len(rows))
    return EngagementReportResponse(data=rows)
