from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from time import perf_counter
from typing import Dict, Iterable, Iterator, Optional

from translation_seo.domain import RowResult

STAGES = ("descriptions", "translations", "scores")


def log_info(worker: str, message: str) -> None:
    print(f"[{worker}] {message}")


def log_error(worker: str, item: str, error: BaseException) -> None:
    log_info(worker, f"ERROR {item}: {type(error).__name__}: {error}")


@dataclass
class StageProgress:
    """Per-stage completion counters, one log line each time a row advances."""

    worker: str
    total: int
    done: Dict[str, int] = field(default_factory=lambda: dict.fromkeys(STAGES, 0))

    def advance(self, stage: str) -> None:
        if stage not in self.done:
            raise KeyError(f"unknown stage {stage!r}")
        self.done[stage] += 1
        log_info(self.worker, f"{stage}: {self.done[stage]}/{self.total}")


def log_row_outcomes(worker: str, rows: Iterable[RowResult]) -> Dict[str, int]:
    """Count rows by the last stage they reached and log the breakdown."""
    counts = {"scored": 0, "unscored": 0, "untranslated": 0}
    for row in rows:
        if row.translations is None:
            counts["untranslated"] += 1
        elif row.scores is None:
            counts["unscored"] += 1
        else:
            counts["scored"] += 1
    log_info(worker, "result: " + " ".join(f"{name}={count}" for name, count in counts.items()))
    return counts


def log_cache_stats(worker: str, stats) -> None:
    log_info(
        worker,
        f"trend lookups: memory={stats.memory_hits} store={stats.store_hits} fetched={stats.fetches}",
    )


@contextmanager
def worker_session(worker: str, *, limit: Optional[int] = None) -> Iterator[None]:
    start = perf_counter()
    limit_note = f" (limit={limit})" if limit is not None else ""
    log_info(worker, f"start{limit_note}")
    try:
        yield
    except BaseException as exc:
        log_info(worker, f"aborted: {type(exc).__name__}: {exc}")
        raise
    finally:
        log_info(worker, f"finished in {perf_counter() - start:.2f}s")


__all__ = [
    "STAGES",
    "StageProgress",
    "log_cache_stats",
    "log_error",
    "log_info",
    "log_row_outcomes",
    "worker_session",
]
