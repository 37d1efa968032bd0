"""
Helpers for turning translated text into sets of SEO-relevant words.
"""

from __future__ import annotations

import re
from pathlib import Path
from typing import Iterable, Mapping, Optional, Set, Tuple

from .models import Region

# Unicode White_Space; str.isspace() also accepts the \x1c-\x1f separators
_WHITESPACE = (
    "\t\n\x0b\x0c\r \x85\xa0\u1680"
    "\u2000\u2001\u2002\u2003\u2004\u2005\u2006\u2007\u2008\u2009\u200a"
    "\u2028\u2029\u202f\u205f\u3000"
)
_SPLIT_PATTERN = re.compile("[" + re.escape(_WHITESPACE) + r",.:;\[\](){}]+")


def _is_word(token: str) -> bool:
    return all(ch.isalpha() or ch == "'" for ch in token)


def extract(text: str, function_words: Iterable[str] = ()) -> Set[str]:
    """
    Split text into a set of lowercase content words.

    Tokens are separated by whitespace and ``,.:;[](){}``. Tokens containing
    anything other than letters or apostrophes are dropped, as are any
    tokens present in ``function_words``.
    """
    excluded = function_words if isinstance(function_words, (set, frozenset)) else set(function_words)
    words: Set[str] = set()
    for raw in _SPLIT_PATTERN.split(text or ""):
        token = raw.strip(_WHITESPACE).lower()
        if not token:
            continue
        if not _is_word(token):
            continue
        if token in excluded:
            continue
        words.add(token)
    return words


def extract_prompts(
    chatgpt: Mapping[str, Tuple[str, Region]],
    function_words: Iterable[str] = (),
) -> dict[str, Tuple[Set[str], Region]]:
    """Run `extract` over every chat translation, keeping each prompt's region."""
    excluded = set(function_words)
    return {
        name: (extract(translation, excluded), region)
        for name, (translation, region) in chatgpt.items()
    }


def load_function_words(path: Optional[Path]) -> Set[str]:
    """
    Load function words from a plaintext file, one per line.

    Returns an empty set when no path is given.
    """
    if path is None:
        return set()
    words: Set[str] = set()
    for raw_line in path.read_text(encoding="utf-8").splitlines():
        token = raw_line.strip().lower()
        if token:
            words.add(token)
    return words


__all__ = ["extract", "extract_prompts", "load_function_words"]
