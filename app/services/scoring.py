"""
Engagement scoring and report ordering.

The score is a fixed weight per event type, used only to rank events of the
same artist. The same table feeds the SQL ``CASE`` expression and the Python
``score`` lookup so both stay in step.
"""

from functools import cmp_to_key
from types import MappingProxyType
from typing import Any, Iterable, List, Mapping, Optional

from sqlalchemy import case

ENGAGEMENT_SCORES: Mapping[str, int] = MappingProxyType({
    "play_track": 1,
    "add_track_to_playlist": 2,
    "like_track": 2,
    "share_track": 3,
    "follow_artist": 3,
    "share_artist": 4,
})

# Unknown, empty and NULL event types
DEFAULT_ENGAGEMENT_SCORE = 0


def score(event_type: Optional[str]) -> int:
    """Return the engagement score for an event type (exact, case-sensitive match)"""
    if event_type is None:
        return DEFAULT_ENGAGEMENT_SCORE
    return ENGAGEMENT_SCORES.get(event_type, DEFAULT_ENGAGEMENT_SCORE)


def score_expression(column):
    """SQL ``CASE`` computing the engagement score of ``column``"""
    return case(dict(ENGAGEMENT_SCORES), value=column, else_=DEFAULT_ENGAGEMENT_SCORE)


def _field(row: Any, name: str) -> Any:
    if isinstance(row, Mapping):
        return row[name]
    return getattr(row, name)


def _cmp(a: Any, b: Any) -> int:
    return (a > b) - (a < b)


def compare_rows(a: Any, b: Any) -> int:
    """
    Compare two report rows.

    Keys, in precedence order:
        1. artist_name ascending
        2. engagement_score descending
        3. created_at descending

    Returns a negative number if ``a`` sorts first, positive if ``b`` does,
    0 when all three keys tie.
    """
    result = _cmp(_field(a, "artist_name"), _field(b, "artist_name"))
    if result:
        return result

    result = _cmp(_field(b, "engagement_score"), _field(a, "engagement_score"))
    if result:
        return result

    return _cmp(_field(b, "created_at"), _field(a, "created_at"))


def order_rows(rows: Iterable[Any]) -> List[Any]:
    """Sort rows by ``compare_rows``. Full ties keep their input order."""
    return sorted(rows, key=cmp_to_key(compare_rows))


def is_ordered(rows: List[Any]) -> bool:
    """True if every adjacent pair of rows is in report order"""
    return all(compare_rows(a, b) <= 0 for a, b in zip(rows, rows[1:]))
