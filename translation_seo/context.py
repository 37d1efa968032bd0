from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from translation_seo.adapters.db_sqlite_trends import TrendStore
from translation_seo.adapters.http_bbc import PageFetcher
from translation_seo.adapters.http_google_translate import GoogleTranslateClient
from translation_seo.adapters.http_trends import TrendsClient
from translation_seo.adapters.llm_translate import ChatClient
from translation_seo.adapters.rate_limiter import RateLimiters
from translation_seo.adapters.translation import Translator
from translation_seo.adapters.trends_cache import FetchFn, TrendCache
from translation_seo.config import Settings, get_settings
from translation_seo.domain import Region, ScoreKey


@dataclass
class PipelineContext:
    """Process-wide collaborators, built once at startup and passed to the workers."""

    settings: Settings
    limiters: RateLimiters
    store: TrendStore
    cache: TrendCache
    fetch_trend: FetchFn
    translator: Translator
    pages: PageFetcher

    async def score(self, word: str, region: Region) -> float:
        return await self.cache.get_or_fetch(ScoreKey(word=word, region=region), self.fetch_trend)

    def close(self) -> None:
        self.store.close()


def build_context(settings: Optional[Settings] = None) -> PipelineContext:
    settings = settings or get_settings()
    limiters = RateLimiters.from_settings(settings)
    store = TrendStore(settings.trends_db_path)
    cache = TrendCache.from_store(store, capacity=settings.trends_cache_capacity)
    trends = TrendsClient(settings.gcloud_key, limiters.trends, timeout=settings.http_timeout)
    translator = Translator(
        GoogleTranslateClient(settings.gcloud_project_id, timeout=settings.http_timeout),
        ChatClient(
            settings.openai_api_key,
            limiters.chat,
            base_url=settings.openai_base_url,
            model=settings.chat_model_name,
            timeout=settings.http_timeout,
        ),
    )
    pages = PageFetcher(limiters.scrape, timeout=settings.http_timeout)
    return PipelineContext(
        settings=settings,
        limiters=limiters,
        store=store,
        cache=cache,
        fetch_trend=trends.fetch,
        translator=translator,
        pages=pages,
    )


__all__ = ["PipelineContext", "build_context"]
