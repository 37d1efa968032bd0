from __future__ import annotations

from typing import Dict, Mapping, Tuple

from translation_seo.adapters.http_google_translate import GoogleTranslateClient
from translation_seo.adapters.llm_translate import ChatClient
from translation_seo.domain import Prompt, Region, Translations
from translation_seo.domain.prompts import render_prompt


class Translator:
    """Produces the machine translation and every prompted chat translation."""

    def __init__(self, google: GoogleTranslateClient, chat: ChatClient) -> None:
        self._google = google
        self._chat = chat

    async def translate(self, chinese_text: str, prompts: Mapping[str, Prompt]) -> Translations:
        google = await self._google.translate(chinese_text)

        chatgpt: Dict[str, Tuple[str, Region]] = {}
        for name, prompt in prompts.items():
            translated = await self._chat.ask(render_prompt(prompt, chinese_text))
            chatgpt[name] = (translated, prompt.region)

        return Translations(chinese_text=chinese_text, google=google, chatgpt=chatgpt)


__all__ = ["Translator"]
