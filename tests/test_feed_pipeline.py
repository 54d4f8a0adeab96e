import pytest

from conftest import FakeAdapter, FakeTextService
from core.schemas import ArticleSummary
from core.sources import SourceTable
from workflows import BreakingPipeline, FeedPipeline

SOURCES = SourceTable({
    "India": ["https://a.example/feed", "https://b.example/feed"],
    "International": ["https://c.example/feed"],
    "Sports": ["https://sports.example/feed"],
})


def _pipeline(feeds, summaries=None, timeout=0.1):
    adapter = FakeAdapter(feeds)
    pipeline = FeedPipeline(
        sources=SOURCES,
        adapter=adapter,
        text_service=FakeTextService(summaries=summaries),
        timeout=timeout,
    )
    return pipeline, adapter


@pytest.mark.asyncio
async def test_one_source_timing_out_still_serves_the_other(make_entry):
    entries = [make_entry(f"Story {n}", f"https://a.example/{n}", minutes_ago=n) for n in range(3)]
    pipeline, _ = _pipeline({"https://a.example/feed": entries, "https://b.example/feed": "hang"})

    category, items = await pipeline.run("India")

    assert category == "India"
    assert len(items) <= 3
    assert [i.link for i in items] == [f"https://a.example/{n}" for n in range(3)]
    assert len({i.link for i in items}) == len(items)


@pytest.mark.asyncio
async def test_summaries_are_used_and_failures_fall_back(make_entry):
    ok = make_entry("Rain", "https://a.example/rain", description="Rain expected")
    broken = make_entry("Traffic", "https://a.example/traffic", description="Roads jammed")
    summaries = {"https://a.example/rain": ArticleSummary(short_story="Heavy rain today.", bullets=["IMD alert"])}
    pipeline, _ = _pipeline({"https://a.example/feed": [ok, broken]}, summaries=summaries)

    _, items = await pipeline.run("India")

    rain, traffic = items
    assert rain.summary == "Heavy rain today."
    assert rain.bullets == ["IMD alert"]
    assert traffic.summary == "Roads jammed"
    assert traffic.bullets == []


@pytest.mark.asyncio
async def test_duplicate_links_across_sources_are_removed(make_entry):
    shared = "https://news.example/shared"
    pipeline, _ = _pipeline({
        "https://a.example/feed": [make_entry("From A", shared), make_entry("Only A", "https://a.example/1")],
        "https://b.example/feed": [make_entry("From B", shared)],
    })

    _, items = await pipeline.run("India")

    assert [i.title for i in items] == ["From A", "Only A"]


@pytest.mark.asyncio
async def test_unknown_category_uses_india_sources(make_entry):
    pipeline, adapter = _pipeline({})

    category, items = await pipeline.run("Mars")

    assert category == "India"
    assert items == []
    assert sorted(adapter.calls) == ["https://a.example/feed", "https://b.example/feed"]


@pytest.mark.asyncio
async def test_every_source_failing_gives_empty_feed():
    pipeline, _ = _pipeline({
        "https://a.example/feed": RuntimeError("dns"),
        "https://b.example/feed": ValueError("bad xml"),
    })

    assert await pipeline.run("India") == ("India", [])


@pytest.mark.asyncio
async def test_breaking_pipeline_reads_india_and_international(make_entry):
    from conftest import NOW

    adapter = FakeAdapter({
        "https://a.example/feed": [make_entry("Local news", "https://a.example/1", minutes_ago=1)],
        "https://b.example/feed": RuntimeError("down"),
        "https://c.example/feed": [
            make_entry("Breaking: summit ends", "https://c.example/1", minutes_ago=1),
            make_entry("Old analysis", "https://c.example/2", minutes_ago=None),
        ],
        "https://sports.example/feed": [make_entry("Live: final", "https://sports.example/1", minutes_ago=1)],
    })
    pipeline = BreakingPipeline(sources=SOURCES, adapter=adapter, top_k=5, timeout=0.1)

    items = await pipeline.run(now=NOW)

    assert [i.link for i in items] == ["https://c.example/1", "https://a.example/1", "https://c.example/2"]
    assert "https://sports.example/feed" not in adapter.calls
