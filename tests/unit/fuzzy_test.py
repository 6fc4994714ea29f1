"""Unit tests for the fuzzy candidate filter."""

from glimmer_complete.core.fuzzy import fuzzy_filter


def _identity(value: str) -> str:
    return value


def test_empty_query_keeps_everything_in_order() -> None:
    items = ["b", "a", "c"]
    assert fuzzy_filter(items, "", _identity) == ["b", "a", "c"]


def test_requires_characters_in_order() -> None:
    items = ["foo-bar", "bar-foo", "baz"]
    assert fuzzy_filter(items, "fb", _identity) == ["foo-bar"]


def test_is_case_insensitive() -> None:
    assert fuzzy_filter(["FooBar"], "foob", _identity) == ["FooBar"]


def test_closer_matches_rank_first() -> None:
    items = ["link-to-extra", "link-to"]
    assert fuzzy_filter(items, "link-to", _identity) == ["link-to", "link-to-extra"]


def test_ties_keep_input_order() -> None:
    items = ["abx", "aby"]
    assert fuzzy_filter(items, "ab", _identity) == ["abx", "aby"]


def test_uses_key_function() -> None:
    items = [{"label": "each"}, {"label": "if"}]
    assert fuzzy_filter(items, "ea", lambda item: item["label"]) == [{"label": "each"}]


def test_no_match_returns_empty() -> None:
    assert fuzzy_filter(["alpha"], "zz", _identity) == []
