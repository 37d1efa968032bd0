from __future__ import annotations

import asyncio
import logging
from typing import Any, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from translation_seo.adapters.rate_limiter import TokenBucket
from translation_seo.domain import ScoreKey

LOGGER = logging.getLogger(__name__)
TRENDS_URL = "https://www.googleapis.com/trends/v1beta/graph"


class TrendsApiError(RuntimeError):
    """The trends API answered with an error body or an unusable graph."""


class TrendPoint(BaseModel):
    value: float


class TrendLine(BaseModel):
    points: List[TrendPoint]


class TrendsSuccess(BaseModel):
    lines: List[TrendLine]

    def latest_value(self) -> float:
        if not self.lines or not self.lines[0].points:
            raise TrendsApiError("trends response contained no data points")
        return self.lines[0].points[-1].value


class TrendsFailure(BaseModel):
    model_config = ConfigDict(extra="allow")

    error: Optional[Any] = None

    def describe(self) -> str:
        if self.error is not None:
            return str(self.error)
        return str(self.model_dump())


TrendsResponse = Union[TrendsSuccess, TrendsFailure]


def decode_trends_response(payload: Any) -> TrendsResponse:
    """Try the success shape first and fall back to the error shape."""
    try:
        return TrendsSuccess.model_validate(payload)
    except ValidationError:
        pass
    if isinstance(payload, dict):
        return TrendsFailure.model_validate(payload)
    return TrendsFailure(error=payload)


class TrendsClient:
    """Fetches the latest popularity value of a word in a region."""

    def __init__(
        self,
        api_key: Optional[str],
        limiter: TokenBucket,
        *,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._api_key = api_key
        self._limiter = limiter
        self._timeout = timeout
        self._session = session or requests.Session()

    def _get(self, key: ScoreKey) -> Any:
        if not self._api_key:
            raise RuntimeError("Missing GCLOUD_KEY environment variable")
        params = {
            "terms": key.word,
            "key": self._api_key,
            "restrictions_geo": key.region.geo_code,
        }
        response = self._session.get(TRENDS_URL, params=params, timeout=self._timeout)
        return response.json()

    async def fetch(self, key: ScoreKey) -> float:
        await self._limiter.acquire()
        payload = await asyncio.to_thread(self._get, key)
        decoded = decode_trends_response(payload)
        if isinstance(decoded, TrendsFailure):
            raise TrendsApiError(f"trends lookup failed for {key.word!r} ({key.region.value}): {decoded.describe()}")
        value = decoded.latest_value()
        LOGGER.debug("trend score %s/%s = %s", key.word, key.region.value, value)
        return value


__all__ = [
    "TRENDS_URL",
    "TrendsApiError",
    "TrendsClient",
    "TrendsFailure",
    "TrendsSuccess",
    "decode_trends_response",
]
