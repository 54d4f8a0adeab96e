"""
Concurrent best-effort fetch across many sources.

Each source runs as its own task under its own deadline. A failing or slow
source produces a failed FetchOutcome and never disturbs its siblings.
"""
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Awaitable, Callable, Generic, Iterable, List, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 12.0


@dataclass(frozen=True)
class FetchOutcome(Generic[T]):
    source: str
    items: List[T] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


async def _fetch_one(
    source: str,
    fetch: Callable[[str], Awaitable[Iterable[T]]],
    timeout: float,
) -> FetchOutcome[T]:
    try:
        items = await asyncio.wait_for(fetch(source), timeout=timeout)
    except asyncio.TimeoutError:
        logger.warning(f"Source timed out after {timeout}s: {source}")
        return FetchOutcome(source=source, error=f"timeout after {timeout}s")
    except Exception as e:
        logger.warning(f"Source failed: {source}: {e!r}")
        return FetchOutcome(source=source, error=str(e) or e.__class__.__name__)

    return FetchOutcome(source=source, items=list(items))


async def gather_outcomes(
    sources: Iterable[str],
    fetch: Callable[[str], Awaitable[Iterable[T]]],
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[FetchOutcome[T]]:
    """One outcome per source, in source order."""
    return list(
        await asyncio.gather(*(_fetch_one(source, fetch, timeout) for source in sources))
    )


async def fan_out(
    sources: Iterable[str],
    fetch: Callable[[str], Awaitable[Iterable[T]]],
    *,
    timeout: float = DEFAULT_TIMEOUT,
) -> List[T]:
    """
    Fetch every source concurrently and concatenate what succeeded.
    Returns an empty list when every source fails.
    """
    outcomes = await gather_outcomes(sources, fetch, timeout=timeout)

    items: List[T] = []
    failed = 0
    for outcome in outcomes:
        if outcome.ok:
            items.extend(outcome.items)
        else:
            failed += 1

    logger.info(f"Fan-out: {len(outcomes) - failed}/{len(outcomes)} sources ok, {len(items)} items")
    return items
