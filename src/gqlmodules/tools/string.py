from collections.abc import Callable, Hashable, Iterable
from typing import TypeVar

T = TypeVar("T", bound=Hashable)


def with_quotes(value: str) -> str:
    return f"'{value}'"


def indent(size: int) -> Callable[[str], str]:
    """Return a function that prefixes a line with ``size`` spaces."""
    space = " " * max(size, 0)

    def _indent(value: str) -> str:
        return f"{space}{value}"

    return _indent


def unique(values: Iterable[T]) -> list[T]:
    """Drop repeated values, keeping the first occurrence of each in its original position."""
    return list(dict.fromkeys(values))
