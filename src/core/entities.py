from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional, Dict, Any


@dataclass(frozen=True)
class FeedItem:
    """
    Summarized syndication entry served by the feed endpoint.
    """
    title: str
    link: str
    summary: str
    bullets: List[str]
    published_at: Optional[datetime]
    source: str
    image_url: Optional[str]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "summary": self.summary,
            "bullets": list(self.bullets),
            "pubDate": self.published_at.isoformat() if self.published_at else None,
            "source": self.source,
            "image": self.image_url,
        }


@dataclass(frozen=True)
class BreakingItem:
    """
    Headline ranked by recency and urgency keywords.
    """
    title: str
    link: str
    source: str
    score: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "title": self.title,
            "link": self.link,
            "source": self.source,
            "score": self.score,
        }


class PostKind(str, Enum):
    TEXT = "text"
    PHOTO = "photo"
    VIDEO = "video"


@dataclass(frozen=True)
class StudioPost:
    """
    Channel post or private submission received through the Telegram webhook.
    """
    id: int
    kind: PostKind
    file_id: Optional[str]
    title: str
    caption: str
    posted_at: datetime
    tags: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.kind.value,
            "file_id": self.file_id,
            "title": self.title,
            "caption": self.caption,
            "date": int(self.posted_at.timestamp()),
            "tags": list(self.tags),
        }


@dataclass(frozen=True)
class WeatherSnapshot:
    """
    Tomorrow's forecast for a coordinate.
    """
    high: int
    low: int
    pop: float
    code: int

    def to_dict(self) -> Dict[str, Any]:
        return {"high": self.high, "low": self.low, "pop": self.pop, "code": self.code}


@dataclass(frozen=True)
class GoldQuote:
    """
    INR per gram for 24k and 22k gold, today and a trend-based estimate.
    """
    g24: int
    g22: int
    tomorrow_g24: int
    tomorrow_g22: int

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": "INR",
            "current": {"g24": self.g24, "g22": self.g22},
            "tomorrow_estimate": {"g24": self.tomorrow_g24, "g22": self.tomorrow_g22},
            "note": "Estimate based on recent trend. Retail rates vary by city/jeweller.",
        }
