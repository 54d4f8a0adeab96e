import logging
from datetime import datetime
from typing import List, Optional

from core.entities import BreakingItem
from core.sources import SourceTable
from ingestion.base import SourceAdapter
from ingestion.fanout import DEFAULT_TIMEOUT, fan_out
from processing.ranking import rank_breaking
from workflows.base import Pipeline

logger = logging.getLogger(__name__)


class BreakingPipeline(Pipeline):
    """
    Most urgent headlines across the national and international feeds.
    """
    name = "breaking"

    def __init__(
        self,
        *,
        sources: SourceTable,
        adapter: SourceAdapter,
        top_k: int = 5,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.sources = sources
        self.adapter = adapter
        self.top_k = top_k
        self.timeout = timeout

    async def run(self, now: Optional[datetime] = None) -> List[BreakingItem]:
        entries = await fan_out(
            self.sources.breaking_urls(),
            self.adapter.fetch_entries,
            timeout=self.timeout,
        )
        ranked = rank_breaking(entries, now=now, top_k=self.top_k)
        logger.info(f"Ranked {len(entries)} entries, returning {len(ranked)}")
        return ranked
