"""
Wires shared services from configuration.
"""
import logging
from dataclasses import dataclass, field
from typing import List

from core.sources import SourceTable
from delivery.base import DeliveryChannel
from delivery.telegram_delivery import TelegramDelivery
from ingestion.base import SourceAdapter
from ingestion.rss import RSSAdapter
from services.config import Config
from services.llm import TextService
from services.quotes import QuoteSource
from services.studio import StudioBuffer
from services.telegram_inbox import TelegramInbox
from workflows.breaking import BreakingPipeline
from workflows.feed import FeedPipeline

logger = logging.getLogger(__name__)


@dataclass
class Services:
    config: Config
    sources: SourceTable
    adapter: SourceAdapter
    text_service: TextService
    quotes: QuoteSource
    inbox: TelegramInbox
    buffer: StudioBuffer
    deliveries: List[DeliveryChannel] = field(default_factory=list)

    @property
    def feed(self) -> FeedPipeline:
        return FeedPipeline(
            sources=self.sources,
            adapter=self.adapter,
            text_service=self.text_service,
            timeout=self.config.FETCH_TIMEOUT,
        )

    @property
    def breaking(self) -> BreakingPipeline:
        return BreakingPipeline(
            sources=self.sources,
            adapter=self.adapter,
            top_k=self.config.BREAKING_TOP_K,
            timeout=self.config.FETCH_TIMEOUT,
        )


def build_services(config: Config) -> Services:
    text_service = TextService(
        base_url=config.OLLAMA_BASE_URL,
        model=config.OLLAMA_MODEL,
        vision_model=config.OLLAMA_VISION_MODEL,
        temperature=config.LLM_TEMPERATURE,
        timeout=config.LLM_TIMEOUT,
        fetch_timeout=config.FETCH_TIMEOUT,
        openai_api_key=config.OPENAI_API_KEY,
        tts_model=config.TTS_MODEL,
        tts_voice=config.TTS_VOICE,
    )

    deliveries: List[DeliveryChannel] = []
    if config.BOT_TOKEN and config.TELEGRAM_NOTIFY_CHAT_ID:
        deliveries.append(
            TelegramDelivery(
                bot_token=config.BOT_TOKEN,
                chat_id=config.TELEGRAM_NOTIFY_CHAT_ID,
            )
        )
    else:
        logger.info("Telegram notifications disabled (BOT_TOKEN or TELEGRAM_NOTIFY_CHAT_ID missing)")

    return Services(
        config=config,
        sources=config.source_table(),
        adapter=RSSAdapter(max_entries=config.MAX_FEED_ENTRIES, timeout=config.FETCH_TIMEOUT),
        text_service=text_service,
        quotes=QuoteSource(timeout=config.FETCH_TIMEOUT),
        inbox=TelegramInbox(
            bot_token=config.BOT_TOKEN,
            secret=config.ADMIN_KEY,
            timeout=config.FETCH_TIMEOUT,
        ),
        buffer=StudioBuffer(capacity=config.STUDIO_CAPACITY),
        deliveries=deliveries,
    )
