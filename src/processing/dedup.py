import logging
from typing import Iterable, List, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def dedupe_by_link(items: Iterable[T]) -> List[T]:
    """
    Keep the first item for every link, preserving order.
    """
    unique_items: List[T] = []
    seen_links = set()
    total = 0

    for item in items:
        total += 1
        link = getattr(item, "link")
        if link in seen_links:
            logger.debug(f"Skipping duplicate link: {link}")
            continue
        seen_links.add(link)
        unique_items.append(item)

    if total != len(unique_items):
        logger.info(f"Dedup filter: {total} -> {len(unique_items)} items")
    return unique_items
