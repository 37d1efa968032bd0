from __future__ import annotations

import asyncio
from dataclasses import replace
from pathlib import Path

from translation_seo.adapters.db_sqlite_trends import TrendStore
from translation_seo.config import get_settings
from translation_seo.context import build_context
from translation_seo.domain import Region, ScoreKey, ScoreRecord


def test_build_context_primes_cache_from_store(tmp_path: Path) -> None:
    db_path = tmp_path / "trends.db"
    seed = TrendStore(db_path)
    seed.put(ScoreRecord(key=ScoreKey("flood", Region.BRITAIN), score=17.0))
    seed.close()

    settings = replace(get_settings(), trends_db_path=db_path, trends_cache_capacity=100)
    ctx = build_context(settings)

    async def unexpected(key: ScoreKey) -> float:
        raise AssertionError("should be served from the cache")

    ctx.fetch_trend = unexpected
    try:
        assert ScoreKey("flood", Region.BRITAIN) in ctx.cache
        assert asyncio.run(ctx.score("flood", Region.BRITAIN)) == 17.0
    finally:
        ctx.close()


def test_context_score_fetches_and_persists(tmp_path: Path) -> None:
    settings = replace(get_settings(), trends_db_path=tmp_path / "trends.db")
    ctx = build_context(settings)
    calls = []

    async def fetch(key: ScoreKey) -> float:
        calls.append(key)
        return 2.5

    ctx.fetch_trend = fetch
    try:
        assert asyncio.run(ctx.score("flood", Region.AMERICA)) == 2.5
        assert asyncio.run(ctx.score("flood", Region.AMERICA)) == 2.5
    finally:
        ctx.close()

    assert calls == [ScoreKey("flood", Region.AMERICA)]
    assert TrendStore(tmp_path / "trends.db").count() == 1
