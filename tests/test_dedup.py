from __future__ import annotations

from translation_seo.domain import common_words, dedup_sets


def test_dedup_removes_only_words_in_every_set() -> None:
    set1 = {"hello", "world", "foo"}
    set2 = {"hello", "world"}
    set3 = {"hello", "foo"}

    removed = dedup_sets([set1, set2, set3])

    assert removed == {"hello"}
    assert set1 == {"world", "foo"}
    assert set2 == {"world"}
    assert set3 == {"foo"}


def test_dedup_is_anchored_on_first_set() -> None:
    first = {"alpha"}
    second = {"alpha", "beta"}
    third = {"alpha", "beta"}

    dedup_sets([first, second, third])

    # beta is in every set except the first, so it stays
    assert first == set()
    assert second == {"beta"}
    assert third == {"beta"}


def test_dedup_single_set_is_unchanged() -> None:
    only = {"one", "two"}

    removed = dedup_sets([only])

    assert removed == set()
    assert only == {"one", "two"}


def test_dedup_empty_input() -> None:
    assert dedup_sets([]) == set()
    assert common_words([]) == set()


def test_dedup_keeps_words_missing_from_any_set() -> None:
    sets = [{"a", "b", "c"}, {"a", "b"}, {"a", "c"}, {"a"}]

    dedup_sets(sets)

    assert sets == [{"b", "c"}, {"b"}, {"c"}, set()]
