"""Domain-level objects shared across workers and adapters."""

from __future__ import annotations

from .dedup import common_words, dedup_sets
from .models import (
    Prompt,
    Region,
    RowResult,
    ScoreKey,
    ScoreRecord,
    TranslationScores,
    Translations,
)
from .prompts import load_prompts, parse_prompts, read_file_lines, render_prompt
from .scoring import ScoreLookup, average_score, score_translations
from .tokens import extract, extract_prompts, load_function_words

__all__ = [
    "Prompt",
    "Region",
    "RowResult",
    "ScoreKey",
    "ScoreLookup",
    "ScoreRecord",
    "TranslationScores",
    "Translations",
    "average_score",
    "common_words",
    "dedup_sets",
    "extract",
    "extract_prompts",
    "load_function_words",
    "load_prompts",
    "parse_prompts",
    "read_file_lines",
    "render_prompt",
    "score_translations",
]
