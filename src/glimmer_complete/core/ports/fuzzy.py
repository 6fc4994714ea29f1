from collections.abc import Callable, Sequence
from typing import Protocol, TypeVar

T = TypeVar("T")


class FuzzyFilter(Protocol):
    def __call__(self, items: Sequence[T], query: str, key: Callable[[T], str]) -> list[T]: ...
