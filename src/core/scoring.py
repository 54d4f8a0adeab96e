"""
Recency and urgency scoring for breaking headlines
"""
import re
from datetime import datetime, timezone
from typing import Optional

URGENT_TITLE = re.compile(r"(breaking|live|updates?)", re.IGNORECASE)

# Age assigned to entries without a usable publish time.
UNKNOWN_AGE_MINUTES = 99999.0


def keyword_boost(title: Optional[str]) -> float:
    return 2.0 if URGENT_TITLE.search(title or "") else 1.0


def age_minutes(published_at: Optional[datetime], now: Optional[datetime] = None) -> float:
    if published_at is None:
        return UNKNOWN_AGE_MINUTES
    now = now or datetime.now(timezone.utc)
    if published_at.tzinfo is None:
        published_at = published_at.replace(tzinfo=timezone.utc)
    return (now - published_at).total_seconds() / 60.0


def breaking_score(
    title: Optional[str],
    published_at: Optional[datetime],
    now: Optional[datetime] = None,
) -> float:
    """
    keyword boost divided by age in minutes, with age floored at one minute.
    """
    return keyword_boost(title) / max(1.0, age_minutes(published_at, now))
