"""
Base classes for Ingestion
"""
from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional
from pydantic import BaseModel


class FeedEntry(BaseModel):
    """
    One syndication entry as read from a feed.
    """
    title: str
    link: str
    description: str
    published_at: Optional[datetime]
    source: str
    image_url: Optional[str]


class SourceAdapter(ABC):
    """
    Base interface for feed sources.
    """

    @abstractmethod
    async def fetch_entries(self, url: str) -> List[FeedEntry]:
        """
        Fetch the most recent entries of one feed, newest first as published.
        Raises on network or parse failures; fan_out() isolates them.
        """
        raise NotImplementedError
