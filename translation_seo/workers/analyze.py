from __future__ import annotations

from pathlib import Path
from typing import Optional

import pandas as pd

from translation_seo.core.reporting import write_matrix, write_summary_table
from translation_seo.domain.significance import (
    SCORE_COLUMNS,
    SummaryStatistics,
    p_matrix,
    significant_pairs,
    summarize,
    z_matrix,
)
from translation_seo.workers import log_info, worker_session

WORKER = "analyze"

ANALYSIS_FILE = "analysis.csv"
Z_SCORES_FILE = "z_scores.csv"
P_VALUES_FILE = "p_values.csv"


def load_scores(path: Path) -> pd.DataFrame:
    # empty fields become NaN so incomplete rows drop out of the summary
    return pd.read_csv(path, keep_default_na=False, na_values=[""])


def run(input_path: Path, *, output_dir: Optional[Path] = None) -> SummaryStatistics:
    out_dir = output_dir or Path.cwd()
    out_dir.mkdir(parents=True, exist_ok=True)

    with worker_session(WORKER):
        frame = load_scores(input_path)
        stats = summarize(frame, SCORE_COLUMNS)

        with (out_dir / ANALYSIS_FILE).open("w", encoding="utf-8", newline="") as fh:
            write_summary_table(fh, stats.columns, stats.as_rows())

        for name in stats.columns:
            log_info(WORKER, f"{name}: mean={stats.means[name]} std={stats.stds[name]}")
        log_info(WORKER, f"rows: {stats.n}")

        for col1, col2, z in significant_pairs(stats):
            log_info(WORKER, f"{col1} <=> {col2} - {z}")

        with (out_dir / Z_SCORES_FILE).open("w", encoding="utf-8", newline="") as fh:
            write_matrix(fh, stats.columns, z_matrix(stats))
        with (out_dir / P_VALUES_FILE).open("w", encoding="utf-8", newline="") as fh:
            write_matrix(fh, stats.columns, p_matrix(stats))

    return stats


__all__ = ["ANALYSIS_FILE", "P_VALUES_FILE", "Z_SCORES_FILE", "load_scores", "run"]
