import asyncio
import logging
from typing import List, Optional, Tuple

from core.entities import FeedItem
from core.sources import SourceTable
from ingestion.base import FeedEntry, SourceAdapter
from ingestion.fanout import DEFAULT_TIMEOUT, fan_out
from processing.dedup import dedupe_by_link
from services.llm import TextService
from workflows.base import Pipeline

logger = logging.getLogger(__name__)


class FeedPipeline(Pipeline):
    """
    Current summarized feed for a category.
    """
    name = "feed"

    def __init__(
        self,
        *,
        sources: SourceTable,
        adapter: SourceAdapter,
        text_service: TextService,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.sources = sources
        self.adapter = adapter
        self.text_service = text_service
        self.timeout = timeout

    async def _enrich(self, entry: FeedEntry) -> FeedItem:
        summary = await self.text_service.summarize(entry.link)

        return FeedItem(
            title=entry.title,
            link=entry.link,
            summary=summary.short_story or entry.description,
            bullets=list(summary.bullets),
            published_at=entry.published_at,
            source=entry.source,
            image_url=entry.image_url,
        )

    async def run(self, category: Optional[str] = None) -> Tuple[str, List[FeedItem]]:
        resolved = self.sources.resolve(category)
        if category and resolved.lower() != category.strip().lower():
            logger.info(f"Unknown category {category!r}, falling back to {resolved}")

        entries = await fan_out(
            self.sources.urls_for(resolved),
            self.adapter.fetch_entries,
            timeout=self.timeout,
        )
        logger.info(f"[{resolved}] Fetched {len(entries)} entries")

        items = await asyncio.gather(*(self._enrich(entry) for entry in entries))

        return resolved, dedupe_by_link(items)
