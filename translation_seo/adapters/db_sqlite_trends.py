from __future__ import annotations

import asyncio
import contextlib
import logging
import sqlite3
import threading
from pathlib import Path
from typing import Iterator, List, Optional, Union

from translation_seo.domain import Region, ScoreKey, ScoreRecord

LOGGER = logging.getLogger(__name__)

CREATE_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS trends (
    text TEXT NOT NULL,
    region TEXT NOT NULL,
    score REAL NOT NULL
)
"""
CREATE_INDEX_SQL = "CREATE INDEX IF NOT EXISTS trends_text_region ON trends (text, region)"


class TrendStore:
    """Append-only SQLite table of observed trend scores."""

    def __init__(self, path: Union[str, Path]) -> None:
        self.path = str(path)
        self._lock = threading.Lock()
        self._conn = sqlite3.connect(self.path, check_same_thread=False)
        self._conn.row_factory = sqlite3.Row
        with self._cursor() as cur:
            cur.execute(CREATE_TABLE_SQL)
            cur.execute(CREATE_INDEX_SQL)

    @contextlib.contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        with self._lock:
            cur = self._conn.cursor()
            try:
                yield cur
                self._conn.commit()
            except Exception:
                self._conn.rollback()
                raise
            finally:
                cur.close()

    def close(self) -> None:
        with self._lock:
            self._conn.close()

    # ------------------------------------------------------------------
    # Blocking API
    # ------------------------------------------------------------------
    def load_all(self) -> List[ScoreRecord]:
        with self._cursor() as cur:
            cur.execute("SELECT text, region, score FROM trends")
            rows = cur.fetchall()
        return [_row_to_record(row) for row in rows]

    def get(self, key: ScoreKey) -> Optional[ScoreRecord]:
        with self._cursor() as cur:
            cur.execute(
                "SELECT text, region, score FROM trends WHERE text = ? AND region = ? LIMIT 1",
                (key.word, key.region.value),
            )
            row = cur.fetchone()
        return _row_to_record(row) if row is not None else None

    def put(self, record: ScoreRecord) -> None:
        with self._cursor() as cur:
            cur.execute(
                "INSERT INTO trends (text, region, score) VALUES (:word, :region, :score)",
                {"word": record.word, "region": record.region.value, "score": record.score},
            )

    def count(self) -> int:
        with self._cursor() as cur:
            cur.execute("SELECT COUNT(*) FROM trends")
            return int(cur.fetchone()[0])

    # ------------------------------------------------------------------
    # Event-loop friendly wrappers
    # ------------------------------------------------------------------
    async def aget(self, key: ScoreKey) -> Optional[ScoreRecord]:
        return await asyncio.to_thread(self.get, key)

    async def aput(self, record: ScoreRecord) -> None:
        await asyncio.to_thread(self.put, record)


def _row_to_record(row: sqlite3.Row) -> ScoreRecord:
    return ScoreRecord(
        key=ScoreKey(word=row["text"], region=Region.parse(row["region"])),
        score=float(row["score"]),
    )


__all__ = ["CREATE_TABLE_SQL", "TrendStore"]
