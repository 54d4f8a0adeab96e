from datetime import datetime, timezone
from typing import Iterable, List, Optional

from core.entities import BreakingItem
from core.scoring import breaking_score
from ingestion.base import FeedEntry


def rank_breaking(
    entries: Iterable[FeedEntry],
    *,
    now: Optional[datetime] = None,
    top_k: int = 5,
) -> List[BreakingItem]:
    """
    Score entries and return the top_k by descending score.
    Ties keep the order in which entries were collected.
    """
    now = now or datetime.now(timezone.utc)

    scored = [
        BreakingItem(
            title=entry.title,
            link=entry.link,
            source=entry.source,
            score=breaking_score(entry.title, entry.published_at, now),
        )
        for entry in entries
    ]
    scored.sort(key=lambda item: item.score, reverse=True)

    return scored[:top_k]
