"""
tables.py

CSV writers for the scoring results and the statistics tables.
"""
from __future__ import annotations

import csv
from typing import Iterable, List, Mapping, Sequence, TextIO

from translation_seo.domain.models import Prompt, RowResult

from .formatters import format_float, format_score


def _writer(out: TextIO):
    return csv.writer(out, lineterminator="\n")


# ─────────────────────────────────────────────────────────────────────────────
# Results table
# ─────────────────────────────────────────────────────────────────────────────
def results_header(prompts: Mapping[str, Prompt]) -> List[str]:
    header = ["url", "chinese_text", "google"]
    header.extend(prompts.keys())
    header.extend(["google_us_score", "google_uk_score"])
    header.extend(f"{name}_score" for name in prompts.keys())
    return header


def results_row(row: RowResult, prompts: Mapping[str, Prompt]) -> List[str]:
    """
    Flatten one row; each stage that did not run contributes
    ``len(prompts) + 2`` empty fields.
    """
    block_width = len(prompts) + 2
    fields: List[str] = [row.url]

    if row.translations is not None:
        translations = row.translations
        fields.append(translations.chinese_text)
        fields.append(translations.google)
        for name in prompts.keys():
            text, _region = translations.chatgpt.get(name, ("", None))
            fields.append(text)
    else:
        fields.extend([""] * block_width)

    if row.scores is not None:
        scores = row.scores
        fields.append(format_score(scores.google_us_score))
        fields.append(format_score(scores.google_uk_score))
        for name in prompts.keys():
            fields.append(format_score(scores.chatgpt_scores.get(name)))
    else:
        fields.extend([""] * block_width)

    return fields


def write_results_csv(out: TextIO, prompts: Mapping[str, Prompt], rows: Iterable[RowResult]) -> int:
    writer = _writer(out)
    writer.writerow(results_header(prompts))
    count = 0
    for row in rows:
        writer.writerow(results_row(row, prompts))
        count += 1
    return count


# ─────────────────────────────────────────────────────────────────────────────
# Statistics tables
# ─────────────────────────────────────────────────────────────────────────────
def write_summary_table(out: TextIO, columns: Sequence[str], rows: Iterable[Sequence[float]]) -> None:
    """Header of column names followed by one line per statistic."""
    writer = _writer(out)
    writer.writerow(list(columns))
    for values in rows:
        writer.writerow([format_float(value) for value in values])


def write_matrix(out: TextIO, columns: Sequence[str], matrix: Sequence[Sequence[float]]) -> None:
    """Square table: blank corner cell, then each row labelled by its column name."""
    writer = _writer(out)
    writer.writerow([""] + list(columns))
    for name, values in zip(columns, matrix):
        writer.writerow([name] + [format_float(value) for value in values])


__all__ = [
    "results_header",
    "results_row",
    "write_matrix",
    "write_results_csv",
    "write_summary_table",
]
