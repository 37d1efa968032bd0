from __future__ import annotations

import asyncio
import subprocess
from typing import Callable, List, Optional

import requests
from pydantic import BaseModel, ConfigDict, Field

TRANSLATE_URL = "https://translate.googleapis.com/v3beta1"
SOURCE_LANGUAGE = "zh-CN"
TARGET_LANGUAGE = "en-US"


class _Translation(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    translated_text: str = Field(alias="translatedText")


class _TranslateResponse(BaseModel):
    translations: List[_Translation]


def gcloud_access_token() -> str:
    """Ask the `gcloud` CLI for a short-lived access token."""
    output = subprocess.run(
        ["gcloud", "auth", "print-access-token"],
        check=True,
        capture_output=True,
        text=True,
    )
    return output.stdout.strip()


class GoogleTranslateClient:
    """Chinese to English translation through the Cloud Translation v3 API."""

    def __init__(
        self,
        project_id: Optional[str],
        *,
        token_provider: Callable[[], str] = gcloud_access_token,
        timeout: int = 30,
        session: Optional[requests.Session] = None,
    ) -> None:
        self._project_id = project_id
        self._token_provider = token_provider
        self._token: Optional[str] = None
        self._timeout = timeout
        self._session = session or requests.Session()

    def _headers(self) -> dict[str, str]:
        if self._token is None:
            self._token = self._token_provider()
        return {
            "Authorization": f"Bearer {self._token}",
            "x-goog-user-project": self._project_id or "",
            "Content-Type": "application/json",
        }

    def translate_sync(self, text: str) -> str:
        if not self._project_id:
            raise RuntimeError("Missing GCLOUD_PROJECT_ID environment variable")
        url = f"{TRANSLATE_URL}/projects/{self._project_id}:translateText"
        body = {
            "contents": [text],
            "sourceLanguageCode": SOURCE_LANGUAGE,
            "targetLanguageCode": TARGET_LANGUAGE,
        }
        response = self._session.post(url, json=body, headers=self._headers(), timeout=self._timeout)
        if response.status_code != 200:
            raise RuntimeError(f"Translate API {response.status_code}: {response.text[:160]}")
        parsed = _TranslateResponse.model_validate(response.json())
        if not parsed.translations:
            raise RuntimeError("Translate API returned no translations")
        return parsed.translations[0].translated_text

    async def translate(self, text: str) -> str:
        return await asyncio.to_thread(self.translate_sync, text)


__all__ = ["GoogleTranslateClient", "gcloud_access_token"]
