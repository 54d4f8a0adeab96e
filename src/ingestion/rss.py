"""
Ingestion from RSS sources
"""

from datetime import datetime, timezone
from typing import Any, List, Optional
import feedparser
import httpx

from ingestion.base import SourceAdapter, FeedEntry
from processing.text import safe_domain, strip_html

USER_AGENT = "newsdesk/1.0 (+feed reader)"


def _published(entry: Any) -> Optional[datetime]:
    for key in ("published_parsed", "updated_parsed"):
        parsed = entry.get(key)
        if parsed:
            return datetime(*parsed[:6], tzinfo=timezone.utc)
    return None


def _image(entry: Any) -> Optional[str]:
    for enclosure in entry.get("enclosures", []):
        href = enclosure.get("href") or enclosure.get("url")
        if href:
            return href
    for media in entry.get("media_content", []) + entry.get("media_thumbnail", []):
        if media.get("url"):
            return media["url"]
    return None


class RSSAdapter(SourceAdapter):
    def __init__(
        self,
        *,
        max_entries: int = 10,
        timeout: float = 12.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.max_entries = max_entries
        self.timeout = timeout
        self.transport = transport

    async def fetch_entries(self, url: str) -> List[FeedEntry]:
        async with httpx.AsyncClient(
            timeout=self.timeout,
            transport=self.transport,
            follow_redirects=True,
            headers={"User-Agent": USER_AGENT},
        ) as client:
            resp = await client.get(url)
            resp.raise_for_status()

        feed = feedparser.parse(resp.content)
        if feed.bozo and not feed.entries:
            raise ValueError(f"Malformed feed at {url}: {feed.get('bozo_exception')}")

        feed_domain = safe_domain(url)
        entries: List[FeedEntry] = []

        for entry in feed.entries[: self.max_entries]:
            link = entry.get("link", "")
            entries.append(
                FeedEntry(
                    title=entry.get("title", ""),
                    link=link,
                    description=strip_html(entry.get("summary", "")),
                    published_at=_published(entry),
                    source=feed_domain or safe_domain(link),
                    image_url=_image(entry),
                )
            )

        return entries
