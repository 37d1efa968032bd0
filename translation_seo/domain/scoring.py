from __future__ import annotations

import asyncio
from typing import AbstractSet, Awaitable, Callable, Dict, Iterable, Set, Tuple

from .dedup import dedup_sets
from .models import Region, TranslationScores, Translations
from .tokens import extract, extract_prompts

ScoreLookup = Callable[[str, Region], Awaitable[float]]


async def average_score(lookup: ScoreLookup, words: AbstractSet[str], region: Region) -> float:
    """
    Mean trend score of ``words`` in ``region``.

    Every word is looked up concurrently and any failed lookup fails the
    whole average. An empty set gives NaN.
    """
    if not words:
        return float("nan")
    scores = await asyncio.gather(*(lookup(word, region) for word in words))
    return float(sum(scores)) / len(words)


async def score_translations(
    lookup: ScoreLookup,
    translations: Translations,
    function_words: Iterable[str] = (),
) -> TranslationScores:
    """Relative SEO score of the machine translation and of every prompt's translation."""
    excluded = set(function_words)
    google = extract(translations.google, excluded)
    chatgpt: Dict[str, Tuple[Set[str], Region]] = extract_prompts(translations.chatgpt, excluded)

    # remove the words every translation shares
    dedup_sets([google] + [words for words, _region in chatgpt.values()])

    google_us, google_uk = await asyncio.gather(
        average_score(lookup, google, Region.AMERICA),
        average_score(lookup, google, Region.BRITAIN),
    )
    names = list(chatgpt.keys())
    prompt_scores = await asyncio.gather(
        *(average_score(lookup, words, region) for words, region in chatgpt.values())
    )
    return TranslationScores(
        google_us_score=google_us,
        google_uk_score=google_uk,
        chatgpt_scores=dict(zip(names, prompt_scores)),
    )


__all__ = ["ScoreLookup", "average_score", "score_translations"]
