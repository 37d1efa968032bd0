from __future__ import annotations

import asyncio
from pathlib import Path
from typing import AbstractSet, List, Mapping, Optional, Sequence

from translation_seo.adapters.llm_translate import FatalUpstreamError
from translation_seo.context import PipelineContext, build_context
from translation_seo.core.reporting import write_results_csv
from translation_seo.domain import (
    Prompt,
    RowResult,
    load_function_words,
    load_prompts,
    read_file_lines,
    score_translations,
)
from translation_seo.workers import (
    StageProgress,
    log_cache_stats,
    log_error,
    log_info,
    log_row_outcomes,
    worker_session,
)

WORKER = "score"


async def process_row(
    ctx: PipelineContext,
    url: str,
    prompts: Mapping[str, Prompt],
    function_words: AbstractSet[str],
    progress: Optional[StageProgress] = None,
) -> RowResult:
    """
    Run one URL through description, translation and scoring.

    A failing stage leaves the later fields empty; only a fatal upstream error
    escapes.
    """
    try:
        chinese_description = await ctx.pages.description_of_page(url)
    except Exception as exc:
        log_error(WORKER, url, exc)
        return RowResult(url=url)
    if progress is not None:
        progress.advance("descriptions")

    try:
        translations = await ctx.translator.translate(chinese_description, prompts)
    except FatalUpstreamError:
        raise
    except Exception as exc:
        log_error(WORKER, url, exc)
        return RowResult(url=url)
    if progress is not None:
        progress.advance("translations")

    try:
        scores = await score_translations(ctx.score, translations, function_words)
    except Exception as exc:
        log_error(WORKER, url, exc)
        return RowResult(url=url, translations=translations)
    if progress is not None:
        progress.advance("scores")

    return RowResult(url=url, translations=translations, scores=scores)


async def process_rows(
    ctx: PipelineContext,
    urls: Sequence[str],
    prompts: Mapping[str, Prompt],
    function_words: AbstractSet[str],
) -> List[RowResult]:
    """Process every URL concurrently; results keep the input order."""
    progress = StageProgress(WORKER, total=len(urls))
    return list(
        await asyncio.gather(*(process_row(ctx, url, prompts, function_words, progress) for url in urls))
    )


def run(
    urls_path: Path,
    prompts_path: Path,
    output: Path,
    *,
    function_words_path: Optional[Path] = None,
    limit: Optional[int] = None,
    context: Optional[PipelineContext] = None,
) -> List[RowResult]:
    urls = read_file_lines(urls_path)
    if limit is not None:
        urls = urls[:limit]
    function_words = load_function_words(function_words_path)
    prompts = load_prompts(prompts_path)

    with worker_session(WORKER, limit=limit):
        ctx = context or build_context()
        try:
            rows = asyncio.run(process_rows(ctx, urls, prompts, function_words))
        finally:
            if context is None:
                ctx.close()

        log_info(WORKER, f"writing output to {output}")
        with output.open("w", encoding="utf-8", newline="") as fh:
            write_results_csv(fh, prompts, rows)

        log_row_outcomes(WORKER, rows)
        log_cache_stats(WORKER, ctx.cache.stats)
    return rows


__all__ = ["process_row", "process_rows", "run"]
