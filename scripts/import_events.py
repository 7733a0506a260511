"""
CSV Import Script for User Events

Usage:
    python scripts/import_events.py <path-to-csv>

CSV Format:
    id,user_id,artist_id,event_type,created_at

Rows whose id already exists are skipped, so a file can be imported twice.
"""

import sys
import csv
from pathlib import Path
from datetime import datetime

# Add parent directory to path to import app modules
sys.path.insert(0, str(Path(__file__).parent.parent))

from sqlalchemy import create_engine
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.orm import sessionmaker
from app.core.config import settings
from app.models.engagement import UserEvent

REQUIRED_HEADERS = {'id', 'user_id', 'artist_id', 'event_type', 'created_at'}

# Dialects with INSERT ... ON CONFLICT DO NOTHING
UPSERT_INSERTS = {
    "postgresql": pg_insert,
    "sqlite": sqlite_insert,
}


def parse_row(row: dict) -> dict:
    """Convert one CSV row into user_events column values"""
    event_type = row['event_type'].strip() if row['event_type'] else None

    return {
        "id": int(row['id']),
        "user_id": int(row['user_id']),
        "artist_id": int(row['artist_id']),
        "event_type": event_type or None,
        "created_at": datetime.fromisoformat(row['created_at'].replace('Z', '+00:00'))
    }


def insert_batch(session, batch: list) -> int:
    """Insert a batch, ignoring ids that already exist. Returns rows inserted."""
    dialect = session.get_bind().dialect.name
    if dialect not in UPSERT_INSERTS:
        raise ValueError(f"Unsupported database dialect for import: {dialect}")

    # Use INSERT ... ON CONFLICT for idempotency
    stmt = UPSERT_INSERTS[dialect](UserEvent).values(batch)
    stmt = stmt.on_conflict_do_nothing(index_elements=['id'])

    result = session.execute(stmt)
    session.commit()

    return result.rowcount if result.rowcount >= 0 else len(batch)


def import_csv(file_path: str, batch_size: int = 1000, engine=None) -> dict:
    """
    Import user events from CSV file

    Args:
        file_path: Path to CSV file
        batch_size: Number of events to insert per batch
        engine: SQLAlchemy engine (defaults to settings.database_url_sync)

    Returns:
        dict with 'processed', 'inserted', 'duplicates' and 'skipped' counts
    """
    file_path = Path(file_path)

    if not file_path.exists():
        print(f"Error: File not found: {file_path}")
        sys.exit(1)

    print(f"Starting import from: {file_path}")

    if engine is None:
        engine = create_engine(settings.database_url_sync)
    Session = sessionmaker(bind=engine)

    total_processed = 0
    total_inserted = 0
    total_duplicates = 0
    total_skipped = 0

    with Session() as session:
        with open(file_path, 'r', encoding='utf-8') as f:
            reader = csv.DictReader(f)

            # Validate headers
            if not reader.fieldnames or not REQUIRED_HEADERS.issubset(reader.fieldnames):
                print(f"Error: CSV must have headers: {REQUIRED_HEADERS}")
                print(f"Found headers: {reader.fieldnames}")
                sys.exit(1)

            batch = []

            for i, row in enumerate(reader, 1):
                total_processed += 1
                try:
                    batch.append(parse_row(row))
                except (KeyError, TypeError, ValueError) as e:
                    total_skipped += 1
                    print(f"Error on row {i}: {e}")
                    print(f"Row data: {row}")
                    continue

                if len(batch) >= batch_size:
                    inserted = insert_batch(session, batch)
                    total_inserted += inserted
                    total_duplicates += len(batch) - inserted

                    print(f"Processed {total_processed} events | "
                          f"Inserted: {total_inserted} | "
                          f"Duplicates: {total_duplicates} | "
                          f"Skipped: {total_skipped}")

                    batch = []

            # Insert remaining events
            if batch:
                inserted = insert_batch(session, batch)
                total_inserted += inserted
                total_duplicates += len(batch) - inserted

    print("\n" + "=" * 50)
    print("Import completed!")
    print(f"Total processed: {total_processed}")
    print(f"Total inserted: {total_inserted}")
    print(f"Total duplicates: {total_duplicates}")
    print(f"Total skipped: {total_skipped}")
    print("=" * 50)

    return {
        "processed": total_processed,
        "inserted": total_inserted,
        "duplicates": total_duplicates,
        "skipped": total_skipped
    }


def main():
    if len(sys.argv) != 2:
        print("Usage: python scripts/import_events.py <path-to-csv>")
        sys.exit(1)

    file_path = sys.argv[1]
    import_csv(file_path)


if __name__ == "__main__":
    main()
