"""
Seed data and helpers shared by the store and API tests.
"""

from datetime import datetime

from sqlalchemy import insert

from app.models.engagement import Artist, User, UserEvent


AURORA_USERS = [{"id": 1, "timezone": "UTC"}]
AURORA_ARTISTS = [{"id": 10, "name": "Aurora"}]
AURORA_EVENTS = [
    {"id": 1, "user_id": 1, "artist_id": 10, "event_type": "play_track",
     "created_at": datetime(2024, 1, 1)},
    {"id": 2, "user_id": 1, "artist_id": 10, "event_type": "share_artist",
     "created_at": datetime(2024, 1, 2)},
]

MIXED_USERS = [
    {"id": 1, "timezone": "UTC"},
    {"id": 2, "timezone": "Europe/Oslo"},
    {"id": 3, "timezone": "America/New_York"},
]
MIXED_ARTISTS = [
    {"id": 10, "name": "Aurora"},
    {"id": 20, "name": "Bjork"},
    {"id": 30, "name": "Caribou"},
]
MIXED_EVENTS = [
    {"id": 1, "user_id": 1, "artist_id": 20, "event_type": "like_track",
     "created_at": datetime(2024, 3, 1, 9, 0)},
    {"id": 2, "user_id": 2, "artist_id": 10, "event_type": "play_track",
     "created_at": datetime(2024, 3, 2, 9, 0)},
    {"id": 3, "user_id": 3, "artist_id": 10, "event_type": "follow_artist",
     "created_at": datetime(2024, 3, 1, 8, 0)},
    {"id": 4, "user_id": 1, "artist_id": 10, "event_type": "share_track",
     "created_at": datetime(2024, 3, 3, 8, 0)},
    {"id": 5, "user_id": 2, "artist_id": 20, "event_type": None,
     "created_at": datetime(2024, 3, 4, 8, 0)},
    {"id": 6, "user_id": 3, "artist_id": 30, "event_type": "skip_track",
     "created_at": datetime(2024, 3, 5, 8, 0)},
    {"id": 7, "user_id": 1, "artist_id": 20, "event_type": "add_track_to_playlist",
     "created_at": datetime(2024, 3, 2, 12, 0)},
    # Dangling references, excluded by the join
    {"id": 8, "user_id": 99, "artist_id": 10, "event_type": "share_artist",
     "created_at": datetime(2024, 3, 6, 8, 0)},
    {"id": 9, "user_id": 1, "artist_id": 99, "event_type": "share_artist",
     "created_at": datetime(2024, 3, 6, 9, 0)},
]

DUCKDB_SCHEMA = [
    "CREATE TABLE users (id INTEGER PRIMARY KEY, timezone VARCHAR NOT NULL)",
    "CREATE TABLE artists (id INTEGER PRIMARY KEY, name VARCHAR NOT NULL)",
    """
    CREATE TABLE user_events (
        id INTEGER PRIMARY KEY,
        user_id INTEGER NOT NULL,
        artist_id INTEGER NOT NULL,
        event_type VARCHAR,
        created_at TIMESTAMP NOT NULL
    )
    """,
]


def seed_sqlalchemy(conn, users=(), artists=(), events=()):
    """Insert rows through a SQLAlchemy sync connection"""
    for model, rows in ((User, users), (Artist, artists), (UserEvent, events)):
        if rows:
            conn.execute(insert(model), list(rows))


def seed_duckdb(con, users=(), artists=(), events=()):
    """Insert rows into a DuckDB connection created with DUCKDB_SCHEMA"""
    for row in users:
        con.execute("INSERT INTO users VALUES (?, ?)", [row["id"], row["timezone"]])
    for row in artists:
        con.execute("INSERT INTO artists VALUES (?, ?)", [row["id"], row["name"]])
    for row in events:
        con.execute(
            "INSERT INTO user_events VALUES (?, ?, ?, ?, ?)",
            [row["id"], row["user_id"], row["artist_id"], row["event_type"], row["created_at"]],
        )


# Same artist, score and created_at; inserted out of id order
TIE_USERS = [
    {"id": 1, "timezone": "UTC"},
    {"id": 2, "timezone": "Europe/Oslo"},
]
TIE_ARTISTS = [{"id": 10, "name": "Aurora"}]
TIE_EVENTS = [
    {"id": 3, "user_id": 1, "artist_id": 10, "event_type": "like_track",
     "created_at": datetime(2024, 5, 1, 12, 0)},
    {"id": 1, "user_id": 2, "artist_id": 10, "event_type": "add_track_to_playlist",
     "created_at": datetime(2024, 5, 1, 12, 0)},
]
