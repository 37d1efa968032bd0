"""Domain dataclasses shared across the pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional, Tuple


class Region(str, Enum):
    BRITAIN = "britain"
    AMERICA = "america"

    @property
    def geo_code(self) -> str:
        return "GB" if self is Region.BRITAIN else "US"

    @classmethod
    def parse(cls, value: str) -> "Region":
        try:
            return cls(value.strip().lower())
        except ValueError as exc:
            raise ValueError(f"unknown region: {value!r}") from exc


@dataclass(frozen=True, slots=True)
class ScoreKey:
    word: str
    region: Region


@dataclass(frozen=True, slots=True)
class ScoreRecord:
    key: ScoreKey
    score: float

    @property
    def word(self) -> str:
        return self.key.word

    @property
    def region(self) -> Region:
        return self.key.region


@dataclass(frozen=True, slots=True)
class Prompt:
    text: str
    region: Region = Region.AMERICA


@dataclass(slots=True)
class Translations:
    chinese_text: str
    google: str
    # prompt name -> (translated text, region), in prompt-file order
    chatgpt: Dict[str, Tuple[str, Region]] = field(default_factory=dict)


@dataclass(slots=True)
class TranslationScores:
    google_us_score: float
    google_uk_score: float
    chatgpt_scores: Dict[str, float] = field(default_factory=dict)


@dataclass(slots=True)
class RowResult:
    url: str
    translations: Optional[Translations] = None
    scores: Optional[TranslationScores] = None

    @property
    def is_partial(self) -> bool:
        return self.translations is None or self.scores is None
