from __future__ import annotations

import json
from pathlib import Path

import pytest

from translation_seo.domain import Prompt, Region, load_prompts, parse_prompts, read_file_lines, render_prompt


def test_load_prompts_preserves_order_and_default_region(tmp_path: Path) -> None:
    path = tmp_path / "prompts.json"
    path.write_text(
        json.dumps(
            {
                "default_english": {"text": "Translate into English: {chinese}"},
                "british_english": {"text": "Translate into British English: {chinese}", "region": "britain"},
            }
        ),
        encoding="utf-8",
    )

    prompts = load_prompts(path)

    assert list(prompts) == ["default_english", "british_english"]
    assert prompts["default_english"].region is Region.AMERICA
    assert prompts["british_english"].region is Region.BRITAIN


def test_parse_prompts_rejects_bad_entries() -> None:
    with pytest.raises(ValueError):
        parse_prompts(["not", "a", "mapping"])
    with pytest.raises(ValueError):
        parse_prompts({"broken": {"region": "britain"}})
    with pytest.raises(ValueError):
        parse_prompts({"broken": {"text": "x", "region": "canada"}})


def test_render_prompt_substitutes_source_text() -> None:
    prompt = Prompt(text="Translate: {chinese}\nKeep it short.")

    assert render_prompt(prompt, "你好") == "Translate: 你好\nKeep it short."


def test_read_file_lines_skips_blank_lines(tmp_path: Path) -> None:
    path = tmp_path / "urls.txt"
    path.write_text("https://a\n\n  https://b  \n", encoding="utf-8")

    assert read_file_lines(path) == ["https://a", "https://b"]
