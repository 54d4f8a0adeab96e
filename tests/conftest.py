import asyncio
from datetime import datetime, timedelta, timezone
from email.utils import format_datetime
from typing import Dict, List, Optional

import pytest

from core.entities import GoldQuote, PostKind, StudioPost, WeatherSnapshot
from core.schemas import ArticleSummary
from core.sources import SourceTable
from ingestion.base import FeedEntry, SourceAdapter
from services.config import Config
from services.container import Services
from services.llm import SpeechUnavailableError
from services.studio import StudioBuffer
from services.telegram_inbox import TelegramInbox

NOW = datetime(2025, 6, 1, 12, 0, tzinfo=timezone.utc)

TEST_SOURCES = {
    "India": ["https://a.example/feed", "https://b.example/feed"],
    "International": ["https://c.example/feed"],
    "Sports": ["https://sports.example/feed"],
}


class FakeAdapter(SourceAdapter):
    """Serves canned entries per URL; an Exception value raises, "hang" never returns."""

    def __init__(self, feeds: Dict[str, object]):
        self.feeds = feeds
        self.calls: List[str] = []

    async def fetch_entries(self, url: str) -> List[FeedEntry]:
        self.calls.append(url)
        result = self.feeds.get(url, [])
        if isinstance(result, Exception):
            raise result
        if result == "hang":
            await asyncio.sleep(30)
        return list(result)


class FakeTextService:
    def __init__(
        self,
        summaries: Optional[Dict[str, ArticleSummary]] = None,
        translation: str = "",
        audio: bytes = b"ID3-fake-mp3",
        verdict: Optional[dict] = None,
        speech_available: bool = True,
        healthy: bool = True,
    ):
        self.summaries = summaries or {}
        self.translation = translation
        self.audio = audio
        self.verdict = verdict or {"ok": True, "amount": 599}
        self.speech_available = speech_available
        self.healthy = healthy
        self.translations: List[tuple] = []
        self.images: List[tuple] = []

    async def summarize(self, url: str) -> ArticleSummary:
        return self.summaries.get(url, ArticleSummary())

    async def translate(self, text: str, target: str) -> str:
        self.translations.append((text, target))
        return self.translation

    async def speak(self, text: str) -> bytes:
        if not self.speech_available:
            raise SpeechUnavailableError("OPENAI_API_KEY is not configured")
        return self.audio

    async def verify_receipt(self, image: bytes, mime_type: str = "image/png") -> dict:
        self.images.append((image, mime_type))
        return self.verdict

    async def health_check(self) -> bool:
        return self.healthy


class FakeQuotes:
    def __init__(self, weather=None, gold=None, error: Optional[Exception] = None):
        self._weather = weather
        self._gold = gold
        self.error = error
        self.weather_calls: List[tuple] = []

    async def weather(self, lat: float, lon: float) -> Optional[WeatherSnapshot]:
        self.weather_calls.append((lat, lon))
        return self._weather

    async def gold_rate(self) -> Optional[GoldQuote]:
        if self.error:
            raise self.error
        return self._gold


class FakeDelivery:
    name = "fake"

    def __init__(self, fail: bool = False):
        self.fail = fail
        self.sent: List[tuple] = []

    async def deliver(self, *, headline, entries) -> None:
        if self.fail:
            raise RuntimeError("channel down")
        self.sent.append((headline, list(entries)))


@pytest.fixture
def make_entry():
    def _make(
        title: str,
        link: str,
        minutes_ago: Optional[float] = None,
        description: str = "",
        source: str = "a.example",
        now: datetime = NOW,
    ) -> FeedEntry:
        published = None if minutes_ago is None else now - timedelta(minutes=minutes_ago)
        return FeedEntry(
            title=title,
            link=link,
            description=description,
            published_at=published,
            source=source,
            image_url=None,
        )
    return _make


@pytest.fixture
def make_post():
    def _make(
        post_id: int,
        kind: PostKind = PostKind.TEXT,
        file_id: Optional[str] = None,
        caption: str = "",
    ) -> StudioPost:
        return StudioPost(
            id=post_id,
            kind=kind,
            file_id=file_id,
            title=caption.split("\n")[0][:100],
            caption=caption,
            posted_at=NOW,
            tags=[],
        )
    return _make


@pytest.fixture
def rss_feed():
    """Render (title, link, published, description) tuples as an RSS 2.0 document."""
    def _render(entries, image: Optional[str] = None) -> bytes:
        items = []
        for title, link, published, description in entries:
            pub = f"<pubDate>{format_datetime(published)}</pubDate>" if published else ""
            enclosure = f'<enclosure url="{image}" type="image/jpeg" length="0"/>' if image else ""
            items.append(
                f"<item><title>{title}</title><link>{link}</link>"
                f"<description>{description}</description>{pub}{enclosure}</item>"
            )
        return (
            '<?xml version="1.0" encoding="UTF-8"?>'
            '<rss version="2.0"><channel><title>Test</title><link>https://a.example/</link>'
            "<description>Test feed</description>"
            + "".join(items)
            + "</channel></rss>"
        ).encode("utf-8")
    return _render


@pytest.fixture
def make_services():
    def _make(
        feeds: Optional[Dict[str, object]] = None,
        text_service: Optional[FakeTextService] = None,
        quotes: Optional[FakeQuotes] = None,
        inbox: Optional[TelegramInbox] = None,
        deliveries: Optional[list] = None,
        admin_key: Optional[str] = "admin-secret",
        fetch_timeout: float = 0.2,
    ) -> Services:
        config = Config(
            ADMIN_KEY=admin_key,
            FETCH_TIMEOUT=fetch_timeout,
            sources=TEST_SOURCES,
        )
        return Services(
            config=config,
            sources=SourceTable(TEST_SOURCES),
            adapter=FakeAdapter(feeds or {}),
            text_service=text_service or FakeTextService(),
            quotes=quotes or FakeQuotes(),
            inbox=inbox or TelegramInbox(secret=admin_key),
            buffer=StudioBuffer(capacity=config.STUDIO_CAPACITY),
            deliveries=deliveries or [],
        )
    return _make

