"""
Loading the named chat prompts and other line-based inputs.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List

from .models import Prompt, Region

CHINESE_PLACEHOLDER = "{chinese}"


def read_file_lines(path: Path) -> List[str]:
    """Return the lines of a UTF-8 text file, skipping blank ones."""
    return [line.strip() for line in path.read_text(encoding="utf-8").splitlines() if line.strip()]


def parse_prompts(data: object) -> Dict[str, Prompt]:
    """
    Build prompts from a mapping of name -> {"text": ..., "region": ...}.

    The region defaults to America; file order is preserved.
    """
    if not isinstance(data, dict):
        raise ValueError("prompts file must contain a JSON object")
    prompts: Dict[str, Prompt] = {}
    for name, spec in data.items():
        if not isinstance(spec, dict) or not isinstance(spec.get("text"), str):
            raise ValueError(f"prompt {name!r} needs a 'text' string")
        region = Region.parse(spec["region"]) if spec.get("region") else Region.AMERICA
        prompts[str(name)] = Prompt(text=spec["text"], region=region)
    return prompts


def load_prompts(path: Path) -> Dict[str, Prompt]:
    return parse_prompts(json.loads(path.read_text(encoding="utf-8")))


def render_prompt(prompt: Prompt, chinese_text: str) -> str:
    return prompt.text.replace(CHINESE_PLACEHOLDER, chinese_text)


__all__ = ["CHINESE_PLACEHOLDER", "load_prompts", "parse_prompts", "read_file_lines", "render_prompt"]
