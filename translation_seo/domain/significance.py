"""
Pairwise two-sample Z tests between translation-strategy score columns.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np
import pandas as pd
from scipy.stats import norm

SCORE_COLUMNS: Tuple[str, ...] = (
    "google_us_score",
    "google_uk_score",
    "default_english_us_score",
    "default_english_uk_score",
    "american_english_us_score",
    "british_english_uk_score",
    "american_english_seo_us_score",
    "british_english_seo_uk_score",
)
BASELINE_MARKER = "google"
Z_THRESHOLD = 2.0


@dataclass(frozen=True)
class ColumnSummary:
    mean: float
    std: float


@dataclass(frozen=True)
class SummaryStatistics:
    columns: Tuple[str, ...]
    means: Dict[str, float]
    stds: Dict[str, float]
    n: int

    def column(self, name: str) -> ColumnSummary:
        return ColumnSummary(mean=self.means[name], std=self.stds[name])

    def as_rows(self) -> List[List[float]]:
        return [
            [self.means[name] for name in self.columns],
            [self.stds[name] for name in self.columns],
        ]


def summarize(frame: pd.DataFrame, columns: Sequence[str] = SCORE_COLUMNS) -> SummaryStatistics:
    """
    Mean and sample standard deviation (ddof=1) of each score column.

    Rows with a missing value anywhere are dropped first, so every column is
    summarized over the same ``n`` complete rows.
    """
    missing = [name for name in columns if name not in frame.columns]
    if missing:
        raise KeyError(f"missing score columns: {', '.join(missing)}")
    complete = frame.dropna()
    scores = complete.loc[:, list(columns)].astype("float64")
    means = scores.mean()
    stds = scores.std(ddof=1)
    return SummaryStatistics(
        columns=tuple(columns),
        means={name: float(means[name]) for name in columns},
        stds={name: float(stds[name]) for name in columns},
        n=int(len(scores)),
    )


def z_score(mean1: float, std1: float, mean2: float, std2: float, n: int) -> float:
    """Two-sample Z statistic for the difference of means (mean2 - mean1)."""
    with np.errstate(divide="ignore", invalid="ignore"):
        n_ = np.float64(n)
        denominator = np.sqrt(np.float64(std2) ** 2 / n_ + np.float64(std1) ** 2 / n_)
        return float((np.float64(mean2) - np.float64(mean1)) / denominator)


def p_value(z: float) -> float:
    """Tail probability of the standard normal at -|z|."""
    return float(norm.cdf(-abs(z)))


def column_z_score(stats: SummaryStatistics, col1: str, col2: str) -> float:
    first = stats.column(col1)
    second = stats.column(col2)
    return z_score(first.mean, first.std, second.mean, second.std, stats.n)


def z_matrix(stats: SummaryStatistics) -> List[List[float]]:
    return [[column_z_score(stats, col1, col2) for col2 in stats.columns] for col1 in stats.columns]


def p_matrix(stats: SummaryStatistics) -> List[List[float]]:
    return [[p_value(z) for z in row] for row in z_matrix(stats)]


def significant_pairs(
    stats: SummaryStatistics,
    *,
    threshold: float = Z_THRESHOLD,
    baseline_marker: str = BASELINE_MARKER,
) -> List[Tuple[str, str, float]]:
    """Ordered pairs with |z| above the threshold, ignoring baseline columns."""
    flagged: List[Tuple[str, str, float]] = []
    for col1 in stats.columns:
        for col2 in stats.columns:
            if col1 == col2:
                continue
            if baseline_marker in col1 or baseline_marker in col2:
                continue
            z = column_z_score(stats, col1, col2)
            if abs(z) > threshold:
                flagged.append((col1, col2, z))
    return flagged


__all__ = [
    "BASELINE_MARKER",
    "ColumnSummary",
    "SCORE_COLUMNS",
    "SummaryStatistics",
    "Z_THRESHOLD",
    "column_z_score",
    "p_matrix",
    "p_value",
    "significant_pairs",
    "summarize",
    "z_matrix",
    "z_score",
]
