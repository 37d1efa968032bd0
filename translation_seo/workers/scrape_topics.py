from __future__ import annotations

import asyncio
from pathlib import Path
from typing import List, Optional, Sequence, Tuple

from translation_seo.adapters.http_bbc import PageFetcher, dedup_urls, parse_topic_line
from translation_seo.adapters.rate_limiter import TokenBucket
from translation_seo.config import get_settings
from translation_seo.domain import read_file_lines
from translation_seo.workers import log_info, worker_session

WORKER = "scrape-topics"


async def collect_links(fetcher: PageFetcher, topics: Sequence[Tuple[str, int]]) -> List[str]:
    """Walk every topic's pages in order; each page fetch costs one scrape token."""
    collected: List[str] = []
    for topic_url, num_pages in topics:
        links = await fetcher.topic_article_urls(topic_url, num_pages)
        log_info(WORKER, f"{topic_url}: {len(links)} links over {num_pages} pages")
        collected.extend(links)
    return collected


def run(topics_path: Path, output: Path, *, fetcher: Optional[PageFetcher] = None) -> List[str]:
    topics = [parse_topic_line(line) for line in read_file_lines(topics_path)]
    if fetcher is None:
        settings = get_settings()
        fetcher = PageFetcher(TokenBucket.per_second(settings.scrape_rate_per_second), timeout=settings.http_timeout)

    with worker_session(WORKER):
        urls = dedup_urls(asyncio.run(collect_links(fetcher, topics)))
        output.write_text("".join(f"{url}\n" for url in urls), encoding="utf-8")
        log_info(WORKER, f"wrote {len(urls)} unique URLs to {output}")
    return urls


__all__ = ["collect_links", "run"]
