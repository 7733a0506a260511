"""
DuckDB Sync - Copies the report source tables into the DuckDB analytics file

Usage:
    python scripts/sync_duckdb.py [duckdb-path]
"""
import sys
from pathlib import Path

# Add parent directory to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from app.core.config import settings
from app.core.database import sync_engine, get_duckdb_connection
import structlog
import pandas as pd

logger = structlog.get_logger()

TABLES = {
    "users": "SELECT id, timezone FROM users",
    "artists": "SELECT id, name FROM artists",
    "user_events": "SELECT id, user_id, artist_id, event_type, created_at FROM user_events",
}


def load_frames(engine) -> dict:
    """Read each source table into a DataFrame"""
    frames = {}
    with engine.connect() as conn:
        for table, query in TABLES.items():
            frames[table] = pd.read_sql(query, conn)

    # DuckDB copy keeps created_at as naive UTC timestamps
    events = frames["user_events"]
    if not events.empty:
        events["created_at"] = pd.to_datetime(events["created_at"], utc=True).dt.tz_localize(None)

    return frames


def write_frames(frames: dict, con) -> dict:
    """Replace the DuckDB tables with the given DataFrames"""
    counts = {}
    for table, df in frames.items():
        con.register("source_df", df)
        con.execute(f"CREATE OR REPLACE TABLE {table} AS SELECT * FROM source_df")
        con.unregister("source_df")
        counts[table] = len(df)
    return counts


def sync(duckdb_path: str | None = None, engine=None) -> dict:
    """Copy users, artists and user_events from the database into DuckDB"""
    duckdb_path = Path(duckdb_path or settings.duckdb_path)
    duckdb_path.parent.mkdir(parents=True, exist_ok=True)

    frames = load_frames(engine or sync_engine)

    con = get_duckdb_connection(str(duckdb_path), read_only=False)
    try:
        counts = write_frames(frames, con)
    finally:
        con.close()

    logger.info("duckdb_sync_success", path=str(duckdb_path), **counts)
    return counts


def main():
    path = sys.argv[1] if len(sys.argv) > 1 else None

    try:
        counts = sync(path)
    except Exception as e:
        logger.error("duckdb_sync_failed", error=str(e))
        raise

    print("DuckDB sync complete: " + ", ".join(f"{t}={n}" for t, n in counts.items()))


if __name__ == "__main__":
    main()
