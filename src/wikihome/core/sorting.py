"""Natural ordering for sibling entries."""

import re
import unicodedata
from typing import Callable, Iterable, TypeVar

T = TypeVar("T")

_DIGITS = re.compile(r"(\d+)")


def _fold(text: str) -> str:
    decomposed = unicodedata.normalize("NFKD", text)
    return "".join(c for c in decomposed if not unicodedata.combining(c)).casefold()


def natural_key(text: str) -> tuple:
    """Sort key comparing digit runs by value, ignoring case and accents.

    ``re.split`` with a capturing group always alternates text and digit
    chunks, so equal positions hold equal types. The raw string breaks ties.
    """
    chunks = _DIGITS.split(_fold(text))
    parts = tuple(int(chunk) if i % 2 else chunk for i, chunk in enumerate(chunks))
    return parts, text


def natural_compare(a: str, b: str) -> int:
    """Three-way comparison: -1, 0 or 1."""
    key_a, key_b = natural_key(a), natural_key(b)
    return (key_a > key_b) - (key_a < key_b)


def natural_sorted(
    items: Iterable[T],
    key: Callable[[T], str] = str,
    tiebreak: Callable[[T], str] | None = None,
) -> list[T]:
    """Sort ``items`` naturally by ``key``, then by ``tiebreak`` if given."""
    if tiebreak is None:
        return sorted(items, key=lambda item: natural_key(key(item)))
    return sorted(items, key=lambda item: (natural_key(key(item)), tiebreak(item)))
