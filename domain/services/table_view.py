"""Sort, filter and paginate in-memory collections for table display.

Sorting is stable: rows that compare equal keep their insertion order in
both directions, because descending order negates the comparator instead
of reversing the sorted list.
"""

from __future__ import annotations

import math
import unicodedata
from dataclasses import dataclass, fields, is_dataclass
from decimal import Decimal
from functools import cmp_to_key
from typing import Any, Callable, Generic, Iterable, Sequence, TypeVar

from config.constants import DEFAULT_PAGE_SIZE, SORT_ASC, SORT_DESC

T = TypeVar("T")


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def text_sort_key(value: str) -> str:
    """Accent- and case-insensitive key used for locale-aware comparison."""
    normalized = unicodedata.normalize("NFKD", value)
    stripped = "".join(ch for ch in normalized if not unicodedata.combining(ch))
    return stripped.casefold()


def _sign(left: Any, right: Any) -> int:
    return (left > right) - (left < right)


def compare_values(left: Any, right: Any) -> int:
    """Compare two cell values; mixed or missing types compare equal."""
    if _is_number(left) and _is_number(right):
        return _sign(left, right)
    if isinstance(left, str) and isinstance(right, str):
        result = _sign(text_sort_key(left), text_sort_key(right))
        if result == 0:
            result = _sign(left, right)
        return result
    return 0


def make_comparator(sort_key: str, direction: str) -> Callable[[Any, Any], int]:
    if direction not in (SORT_ASC, SORT_DESC):
        raise ValueError(f"Invalid sort direction: {direction}")
    sign = 1 if direction == SORT_ASC else -1

    def comparator(left: Any, right: Any) -> int:
        return sign * compare_values(
            getattr(left, sort_key, None),
            getattr(right, sort_key, None),
        )

    return comparator


def sort_entities(entities: Iterable[T], sort_key: str, direction: str) -> list[T]:
    return sorted(entities, key=cmp_to_key(make_comparator(sort_key, direction)))


def _searchable_values(value: Any) -> Iterable[Any]:
    if is_dataclass(value) and not isinstance(value, type):
        for f in fields(value):
            if f.name == "id":
                continue
            yield from _searchable_values(getattr(value, f.name))
    elif isinstance(value, (list, tuple)):
        for item in value:
            yield from _searchable_values(item)
    elif value is not None:
        yield value


def matches_search(entity: Any, term: str) -> bool:
    """True when any field (ingredients included) contains ``term``."""
    needle = term.strip().casefold()
    if not needle:
        return True
    return any(needle in str(value).casefold() for value in _searchable_values(entity))


@dataclass(frozen=True)
class TableView(Generic[T]):
    """Visible slice of a collection plus the numbers a paginator needs."""

    rows: tuple[T, ...]
    total_count: int
    page: int
    page_size: int

    @property
    def page_count(self) -> int:
        return max(1, math.ceil(self.total_count / self.page_size))

    @property
    def first_row_number(self) -> int:
        if self.total_count == 0:
            return 0
        return self.page * self.page_size + 1

    @property
    def last_row_number(self) -> int:
        return self.page * self.page_size + len(self.rows)


def clamp_page(page: int, total_count: int, page_size: int) -> int:
    page_count = max(1, math.ceil(total_count / page_size))
    return min(max(page, 0), page_count - 1)


def view(
    entities: Sequence[T],
    sort_key: str,
    direction: str,
    page: int,
    page_size: int,
    search: str = "",
) -> TableView[T]:
    """Filter, sort and slice ``entities``.

    A page past the end (e.g. after deletions shrank the collection) is
    clamped to the last valid page.
    """
    if page_size <= 0:
        raise ValueError(f"Page size must be positive: {page_size}")
    filtered = [entity for entity in entities if matches_search(entity, search)]
    ordered = sort_entities(filtered, sort_key, direction)
    current = clamp_page(page, len(ordered), page_size)
    start = current * page_size
    return TableView(
        rows=tuple(ordered[start:start + page_size]),
        total_count=len(ordered),
        page=current,
        page_size=page_size,
    )


@dataclass
class TableState:
    """Sort/page/search settings of one manager table."""

    sort_key: str
    direction: str = SORT_ASC
    page: int = 0
    page_size: int = DEFAULT_PAGE_SIZE
    search: str = ""

    def toggle_sort(self, key: str) -> None:
        """Same key flips asc -> desc -> asc; a new key starts ascending."""
        if self.sort_key == key and self.direction == SORT_ASC:
            self.direction = SORT_DESC
        else:
            self.direction = SORT_ASC
        self.sort_key = key
        self.page = 0

    def set_page(self, page: int) -> None:
        self.page = max(page, 0)

    def set_page_size(self, page_size: int) -> None:
        if page_size <= 0:
            raise ValueError(f"Page size must be positive: {page_size}")
        self.page_size = page_size
        self.page = 0

    def set_search(self, term: str) -> None:
        self.search = term
        self.page = 0

    def apply(self, entities: Sequence[T]) -> TableView[T]:
        result = view(
            entities,
            self.sort_key,
            self.direction,
            self.page,
            self.page_size,
            self.search,
        )
        self.page = result.page
        return result
