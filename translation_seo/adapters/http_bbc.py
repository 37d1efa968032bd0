"""BBC Chinese page fetching: article descriptions and topic listings."""
from __future__ import annotations

import asyncio
import logging
from typing import Iterable, List, Optional

import requests
from bs4 import BeautifulSoup

from translation_seo.adapters.rate_limiter import TokenBucket

LOGGER = logging.getLogger(__name__)

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/115.0.0.0 Safari/537.36"
)
ARTICLE_LINK_SELECTOR = "a.bbc-uk8dsi"
DEFAULT_TIMEOUT = 15


class ScrapeError(RuntimeError):
    """A page did not contain the element we were looking for."""


def _session() -> requests.Session:
    s = requests.Session()
    s.headers.update({"User-Agent": USER_AGENT})
    return s


def extract_description(html: str) -> Optional[str]:
    """Content of the first ``<meta name="description">`` tag, if any."""
    soup = BeautifulSoup(html or "", "html.parser")
    el = soup.find("meta", attrs={"name": "description"})
    if el is None:
        return None
    return el.get("content")


def extract_article_links(html: str) -> List[str]:
    soup = BeautifulSoup(html or "", "html.parser")
    anchors = soup.select(ARTICLE_LINK_SELECTOR)
    if not anchors:
        raise ScrapeError("no matching nodes")
    return [a["href"] for a in anchors if a.get("href")]


def dedup_urls(urls: Iterable[str]) -> List[str]:
    """Drop repeated URLs, keeping the first occurrence of each."""
    seen = set()
    result: List[str] = []
    for url in urls:
        if url in seen:
            continue
        seen.add(url)
        result.append(url)
    return result


class PageFetcher:
    def __init__(
        self,
        limiter: TokenBucket,
        *,
        timeout: int = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._limiter = limiter
        self._timeout = timeout
        self._session = session or _session()

    def fetch_html(self, url: str) -> str:
        resp = self._session.get(url, timeout=self._timeout)
        resp.raise_for_status()
        return resp.text

    async def description_of_page(self, url: str) -> str:
        await self._limiter.acquire()
        html = await asyncio.to_thread(self.fetch_html, url)
        description = extract_description(html)
        if description is None:
            raise ScrapeError("page had no description tag")
        return description

    async def topic_article_urls(self, topic_url: str, num_pages: int) -> List[str]:
        urls: List[str] = []
        for page in range(1, num_pages + 1):
            page_url = f"{topic_url}?page={page}"
            await self._limiter.acquire()
            LOGGER.info("fetching topic page %s", page_url)
            html = await asyncio.to_thread(self.fetch_html, page_url)
            urls.extend(extract_article_links(html))
        return urls


def parse_topic_line(line: str) -> tuple[str, int]:
    """Parse a ``"<topic url> <page count>"`` line."""
    parts = line.split()
    if len(parts) != 2:
        raise ValueError(f"expected '<url> <pages>', got {line!r}")
    url, pages = parts
    return url, int(pages)


__all__ = [
    "ARTICLE_LINK_SELECTOR",
    "PageFetcher",
    "ScrapeError",
    "dedup_urls",
    "extract_article_links",
    "extract_description",
    "parse_topic_line",
]
