from __future__ import annotations

import asyncio
import csv
import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping

import pytest

from translation_seo.adapters.db_sqlite_trends import TrendStore
from translation_seo.adapters.http_bbc import ScrapeError
from translation_seo.adapters.llm_translate import FatalUpstreamError
from translation_seo.adapters.trends_cache import TrendCache
from translation_seo.domain import Prompt, Region, ScoreKey, Translations
from translation_seo.workers import score_urls

OK_URL = "https://www.bbc.com/zhongwen/articles/ok"
BROKEN_URL = "https://www.bbc.com/zhongwen/articles/broken"


@dataclass
class FakePages:
    descriptions: Mapping[str, str]

    async def description_of_page(self, url: str) -> str:
        if url not in self.descriptions:
            raise ScrapeError("page had no description tag")
        return self.descriptions[url]


@dataclass
class FakeTranslator:
    fatal: bool = False

    async def translate(self, chinese_text: str, prompts: Mapping[str, Prompt]) -> Translations:
        if self.fatal:
            raise FatalUpstreamError("chat API code 401")
        return Translations(
            chinese_text=chinese_text,
            google="Hello brave world",
            chatgpt={name: ("Hello brave new world", prompt.region) for name, prompt in prompts.items()},
        )


@dataclass
class FakeContext:
    pages: FakePages
    translator: FakeTranslator
    cache: TrendCache
    fetched: List[ScoreKey] = field(default_factory=list)

    async def _fetch(self, key: ScoreKey) -> float:
        self.fetched.append(key)
        return float(len(key.word))

    async def score(self, word: str, region: Region) -> float:
        return await self.cache.get_or_fetch(ScoreKey(word, region), self._fetch)


def _context(tmp_path: Path, *, fatal: bool = False) -> FakeContext:
    return FakeContext(
        pages=FakePages({OK_URL: "中文描述"}),
        translator=FakeTranslator(fatal=fatal),
        cache=TrendCache(TrendStore(tmp_path / "trends.db")),
    )


def _inputs(tmp_path: Path) -> tuple[Path, Path]:
    urls = tmp_path / "urls.txt"
    urls.write_text(f"{OK_URL}\n{BROKEN_URL}\n", encoding="utf-8")
    prompts = tmp_path / "prompts.json"
    prompts.write_text(json.dumps({"american_english": {"text": "Translate: {chinese}"}}), encoding="utf-8")
    return urls, prompts


def test_run_writes_one_line_per_url(tmp_path: Path) -> None:
    urls, prompts = _inputs(tmp_path)
    output = tmp_path / "scores.csv"
    ctx = _context(tmp_path)

    rows = score_urls.run(urls, prompts, output, context=ctx)

    assert [row.url for row in rows] == [OK_URL, BROKEN_URL]
    with output.open(encoding="utf-8", newline="") as fh:
        lines = list(csv.reader(fh))
    header, first, second = lines
    assert header == [
        "url",
        "chinese_text",
        "google",
        "american_english",
        "google_us_score",
        "google_uk_score",
        "american_english_score",
    ]
    # hello/brave/world are shared, so google keeps no words and scores NaN
    assert first == [OK_URL, "中文描述", "Hello brave world", "Hello brave new world", "", "", "3"]
    assert len(second) == len(header)
    assert second[0] == BROKEN_URL
    assert second[1:] == [""] * (len(header) - 1)
    assert ctx.fetched == [ScoreKey("new", Region.AMERICA)]


def test_limit_truncates_urls(tmp_path: Path) -> None:
    urls, prompts = _inputs(tmp_path)
    output = tmp_path / "scores.csv"

    rows = score_urls.run(urls, prompts, output, limit=1, context=_context(tmp_path))

    assert [row.url for row in rows] == [OK_URL]
    assert len(output.read_text(encoding="utf-8").splitlines()) == 2


def test_scoring_failure_keeps_translations(tmp_path: Path) -> None:
    ctx = _context(tmp_path)

    async def failing_fetch(key: ScoreKey) -> float:
        raise RuntimeError("quota exceeded")

    async def score(word: str, region: Region) -> float:
        return await ctx.cache.get_or_fetch(ScoreKey(word, region), failing_fetch)

    ctx.score = score  # type: ignore[method-assign]
    prompts = {"american_english": Prompt(text="{chinese}")}

    row = asyncio.run(score_urls.process_row(ctx, OK_URL, prompts, set()))

    assert row.translations is not None
    assert row.scores is None
    assert row.is_partial


def test_fatal_upstream_error_aborts_batch(tmp_path: Path) -> None:
    urls, prompts = _inputs(tmp_path)
    output = tmp_path / "scores.csv"

    with pytest.raises(FatalUpstreamError):
        score_urls.run(urls, prompts, output, context=_context(tmp_path, fatal=True))

    assert not output.exists()
