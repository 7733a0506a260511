# SQLAlchemy models

from sqlalchemy import Column, Integer, String, DateTime, Index
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True)
    timezone = Column(String, nullable=False)


class Artist(Base):
    __tablename__ = "artists"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)


class UserEvent(Base):
    __tablename__ = "user_events"

    id = Column(Integer, primary_key=True)
    # No foreign keys: events pointing at missing users/artists are dropped by the report join
    user_id = Column(Integer, nullable=False, index=True)
    artist_id = Column(Integer, nullable=False, index=True)
    event_type = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        # Report join + ordering
        Index('idx_artist_created', 'artist_id', 'created_at'),
    )
