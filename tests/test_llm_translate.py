from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from typing import Any, List

import pytest

from translation_seo.adapters import llm_translate as chat
from translation_seo.adapters.rate_limiter import TokenBucket


@dataclass
class FakeResponse:
    status_code: int
    payload: Any

    def json(self) -> Any:
        return self.payload


@dataclass
class FakeSession:
    responses: List[FakeResponse]
    requests: List[dict] = field(default_factory=list)

    def post(self, url, json=None, headers=None, timeout=None):
        self.requests.append({"url": url, "json": json, "headers": headers})
        return self.responses.pop(0)


def _success(*contents: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": text}} for text in contents]}


def _client(session: FakeSession, sleeps: List[float]) -> chat.ChatClient:
    return chat.ChatClient(
        "sk-test",
        TokenBucket.per_second(100),
        model="gpt-3.5-turbo",
        session=session,
        sleep=sleeps.append,
    )


def test_decode_prefers_success_shape() -> None:
    decoded = chat.decode_chat_response(_success("Hello"))

    assert isinstance(decoded, chat.ChatSuccess)
    assert decoded.choices[0].message.content == "Hello"


def test_decode_falls_back_to_failure_shape() -> None:
    with_code = chat.decode_chat_response({"code": 401, "message": "invalid key"})
    without_code = chat.decode_chat_response({"error": {"message": "overloaded"}})
    server_error = chat.decode_chat_response({"code": 503})

    assert isinstance(with_code, chat.ChatFailure)
    assert not with_code.is_transient()
    assert without_code.code is None
    assert without_code.is_transient()
    assert server_error.is_transient()


def test_string_codes_are_read_as_numbers() -> None:
    assert chat.decode_chat_response({"code": "503", "message": "overloaded"}).is_transient()
    assert not chat.decode_chat_response({"code": "401"}).is_transient()
    assert not chat.decode_chat_response({"code": "invalid_api_key"}).is_transient()


def test_ask_retries_server_error_given_as_string_code() -> None:
    session = FakeSession(
        [
            FakeResponse(200, {"code": "502", "message": "upstream unavailable"}),
            FakeResponse(200, _success("Flood warning issued")),
        ]
    )
    sleeps: List[float] = []

    assert asyncio.run(_client(session, sleeps).ask("prompt")) == "Flood warning issued"
    assert sleeps == [1.0]


def test_join_choices_strips_wrapping_quotes() -> None:
    decoded = chat.decode_chat_response(_success('"Budget approved', 'by parliament"'))

    assert chat.join_choices(decoded) == "Budget approved\nby parliament"


def test_build_payload_is_single_fresh_message() -> None:
    payload = chat.build_payload("Translate this", "gpt-3.5-turbo")

    assert payload == {
        "model": "gpt-3.5-turbo",
        "messages": [{"role": "user", "content": "Translate this"}],
        "temperature": 0,
    }


def test_ask_retries_transient_failures() -> None:
    session = FakeSession(
        [
            FakeResponse(502, {"error": "bad gateway"}),
            FakeResponse(200, {"error": {"message": "try again"}}),
            FakeResponse(200, _success('"Translated text"')),
        ]
    )
    sleeps: List[float] = []

    answer = asyncio.run(_client(session, sleeps).ask("prompt"))

    assert answer == "Translated text"
    assert len(session.requests) == 3
    assert sleeps == [1.0, 2.0]
    assert session.requests[0]["headers"]["Authorization"] == "Bearer sk-test"


def test_ask_aborts_on_explicit_error_code() -> None:
    session = FakeSession([FakeResponse(401, {"code": 401, "message": "invalid key"})])

    with pytest.raises(chat.FatalUpstreamError):
        asyncio.run(_client(session, []).ask("prompt"))


def test_missing_api_key() -> None:
    client = chat.ChatClient(None, TokenBucket.per_second(1), session=FakeSession([]))

    with pytest.raises(RuntimeError):
        asyncio.run(client.ask("prompt"))
