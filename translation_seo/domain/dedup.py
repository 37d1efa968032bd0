from __future__ import annotations

from typing import List, MutableSet, Sequence, Set


def common_words(sets: Sequence[MutableSet[str]]) -> Set[str]:
    """Words of the first set that every other set also contains."""
    if not sets:
        return set()
    first = sets[0]
    return {word for word in first if all(word in other for other in sets[1:])}


def dedup_sets(sets: Sequence[MutableSet[str]]) -> Set[str]:
    """
    Remove the words shared by every set, in place, and return them.

    Only words from ``sets[0]`` are candidates: a word missing from the first
    set is kept everywhere even if all the other sets contain it. A single
    set is left untouched.
    """
    sets: List[MutableSet[str]] = list(sets)
    if len(sets) < 2:
        return set()
    shared = common_words(sets)
    for words in sets:
        for word in shared:
            words.discard(word)
    return shared


__all__ = ["common_words", "dedup_sets"]
