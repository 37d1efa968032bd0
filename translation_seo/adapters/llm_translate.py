from __future__ import annotations

import asyncio
import logging
import time
from typing import Any, List, Optional, Union

import requests
from pydantic import BaseModel, ConfigDict, ValidationError

from translation_seo.adapters.rate_limiter import TokenBucket

LOGGER = logging.getLogger(__name__)


class FatalUpstreamError(RuntimeError):
    """The chat API returned an error code that retrying cannot fix."""


class ChatMessage(BaseModel):
    content: str


class ChatChoice(BaseModel):
    message: ChatMessage


class ChatSuccess(BaseModel):
    choices: List[ChatChoice]


class ChatFailure(BaseModel):
    model_config = ConfigDict(extra="allow")

    code: Optional[Union[int, str]] = None

    def numeric_code(self) -> Optional[int]:
        if isinstance(self.code, int):
            return self.code
        if isinstance(self.code, str) and self.code.strip().isdigit():
            return int(self.code.strip())
        return None

    def is_transient(self) -> bool:
        # no code at all, or a server-side 5xx
        if self.code is None:
            return True
        code = self.numeric_code()
        return code is not None and 500 <= code <= 599


ChatResponse = Union[ChatSuccess, ChatFailure]


def decode_chat_response(payload: Any) -> ChatResponse:
    """Try the success shape first and fall back to the error shape."""
    try:
        return ChatSuccess.model_validate(payload)
    except ValidationError:
        pass
    if isinstance(payload, dict):
        try:
            return ChatFailure.model_validate(payload)
        except ValidationError:
            return ChatFailure.model_validate({k: v for k, v in payload.items() if k != "code"})
    return ChatFailure()


def build_payload(prompt: str, model: str) -> dict[str, Any]:
    return {
        "model": model,
        "messages": [{"role": "user", "content": prompt}],
        "temperature": 0,
    }


def join_choices(response: ChatSuccess) -> str:
    result = "\n".join(choice.message.content for choice in response.choices)
    return result.strip('"')


class ChatClient:
    """
    Chat-completion client that treats every prompt as a fresh conversation.

    Transient failures (a 5xx status, or an error body whose code is missing or
    in 500-599, numeric strings included) are retried forever; any other error
    code raises `FatalUpstreamError`.
    """

    def __init__(
        self,
        api_key: Optional[str],
        limiter: TokenBucket,
        *,
        base_url: str = "https://api.openai.com/v1",
        model: str = "gpt-3.5-turbo",
        timeout: int = 30,
        session: Optional[requests.Session] = None,
        sleep=time.sleep,
    ) -> None:
        self._api_key = api_key
        self._limiter = limiter
        self._url = f"{base_url.rstrip('/')}/chat/completions"
        self._model = model
        self._timeout = timeout
        self._session = session or requests.Session()
        self._sleep = sleep

    def _post_until_answered(self, prompt: str) -> ChatSuccess:
        if not self._api_key:
            raise RuntimeError("Missing OPENAI_KEY environment variable")
        headers = {"Authorization": f"Bearer {self._api_key}", "Content-Type": "application/json"}
        payload = build_payload(prompt, self._model)

        backoff = 1.0
        attempt = 0
        while True:
            attempt += 1
            response = self._session.post(self._url, json=payload, headers=headers, timeout=self._timeout)
            if response.status_code >= 500:
                LOGGER.warning("chat API %s on attempt %d, retrying", response.status_code, attempt)
                self._sleep(backoff)
                backoff = min(backoff * 2, 8)
                continue
            decoded = decode_chat_response(response.json())
            if isinstance(decoded, ChatSuccess):
                return decoded
            if decoded.is_transient():
                LOGGER.warning("chat API transient error (code %s) on attempt %d, retrying", decoded.code, attempt)
                self._sleep(backoff)
                backoff = min(backoff * 2, 8)
                continue
            raise FatalUpstreamError(f"chat API code {decoded.code}, error: {decoded.model_dump()}")

    async def ask(self, prompt: str) -> str:
        await self._limiter.acquire()
        answer = await asyncio.to_thread(self._post_until_answered, prompt)
        return join_choices(answer)


__all__ = [
    "ChatClient",
    "ChatFailure",
    "ChatSuccess",
    "FatalUpstreamError",
    "build_payload",
    "decode_chat_response",
    "join_choices",
]
