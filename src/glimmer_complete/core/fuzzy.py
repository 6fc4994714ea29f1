from collections.abc import Callable, Sequence
from typing import TypeVar

from rapidfuzz import fuzz

T = TypeVar("T")


def _is_subsequence(needle: str, haystack: str) -> bool:
    remaining = iter(haystack)
    return all(char in remaining for char in needle)


def fuzzy_filter(items: Sequence[T], query: str, key: Callable[[T], str]) -> list[T]:
    """Keep items whose key contains every query character in order, best match first.

    Matching ignores case. Items with equal scores keep their input order, and
    an empty query keeps everything.
    """
    if not query:
        return list(items)

    needle = query.lower()
    scored: list[tuple[float, int, T]] = []
    for position, item in enumerate(items):
        label = key(item).lower()
        if _is_subsequence(needle, label):
            scored.append((fuzz.ratio(needle, label), position, item))
    scored.sort(key=lambda entry: (-entry[0], entry[1]))
    return [item for _, _, item in scored]
