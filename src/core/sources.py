"""
Category -> feed URL table.
"""
from typing import Dict, Iterable, List, Mapping, Optional, Tuple

DEFAULT_CATEGORY = "India"

CATEGORIES = (
    "Hyderabad",
    "Telangana",
    "India",
    "International",
    "Sports",
    "Gadgets",
    "Health",
)

DEFAULT_SOURCES: Dict[str, List[str]] = {
    "Hyderabad": ["https://telanganatoday.com/hyderabad/feed"],
    "Telangana": [
        "https://telanganatoday.com/telangana/feed",
        "https://www.thehindu.com/news/national/feeder/default.rss",
    ],
    "India": [
        "https://feeds.feedburner.com/ndtvnews-top-stories",
        "https://www.thehindu.com/news/national/feeder/default.rss",
    ],
    "International": ["https://www.thehindu.com/news/international/feeder/default.rss"],
    "Sports": [
        "https://feeds.feedburner.com/ndtvsports-latest",
        "https://www.thehindu.com/sport/feeder/default.rss",
    ],
    "Gadgets": [
        "https://feeds.feedburner.com/gadgets360-latest",
        "https://www.thehindu.com/sci-tech/technology/feeder/default.rss",
    ],
    "Health": ["https://www.thehindu.com/sci-tech/health/feeder/default.rss"],
}

BREAKING_CATEGORIES = ("India", "International")


class SourceTable:
    """
    Immutable mapping of category name to its ordered feed URLs.
    """

    def __init__(self, sources: Optional[Mapping[str, Iterable[str]]] = None):
        sources = DEFAULT_SOURCES if sources is None else sources
        self._sources: Dict[str, Tuple[str, ...]] = {
            name: tuple(urls) for name, urls in sources.items()
        }
        if DEFAULT_CATEGORY not in self._sources:
            raise ValueError(f"Source table must define the '{DEFAULT_CATEGORY}' category")
        self._by_lower = {name.lower(): name for name in self._sources}

    @property
    def categories(self) -> List[str]:
        return list(self._sources)

    def resolve(self, category: Optional[str]) -> str:
        """Canonical category name; anything unknown falls back to India."""
        if not category:
            return DEFAULT_CATEGORY
        return self._by_lower.get(category.strip().lower(), DEFAULT_CATEGORY)

    def urls_for(self, category: Optional[str]) -> Tuple[str, ...]:
        return self._sources[self.resolve(category)]

    def breaking_urls(self) -> Tuple[str, ...]:
        urls: List[str] = []
        for name in BREAKING_CATEGORIES:
            urls.extend(self._sources.get(name, ()))
        return tuple(urls)
