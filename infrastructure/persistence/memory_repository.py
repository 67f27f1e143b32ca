"""In-memory collection store.

Ordered collection of records keyed by a numeric id. Seeded once from a
fixture and lost on exit; there is no backing persistence. Access is
single-threaded and synchronous, so no locking is done.
"""

import logging
import time
from operator import attrgetter
from typing import Callable, Generic, Iterable, Optional, TypeVar

T = TypeVar("T")


class IdGenerator:
    """Hand out unique, increasing ids seeded from the current time (ms)."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self._last = 0

    def observe(self, used_id: int) -> None:
        """Make sure future ids stay above an id already in use."""
        self._last = max(self._last, used_id)

    def next_id(self) -> int:
        candidate = int(self._clock() * 1000)
        self._last = max(candidate, self._last + 1)
        return self._last


class CollectionStore(Generic[T]):
    """Insertion-ordered store of records of one entity type."""

    def __init__(
        self,
        initial: Optional[Iterable[T]] = None,
        id_of: Callable[[T], int] = attrgetter("id"),
        id_generator: Optional[IdGenerator] = None,
    ) -> None:
        """Initialize store.

        Args:
            initial: Seed records, kept in the given order
            id_of: Identity accessor (default: the ``id`` attribute)
            id_generator: Source of fresh ids (default: time based)
        """
        self._id_of = id_of
        self._ids = id_generator if id_generator is not None else IdGenerator()
        self._items: list[T] = []
        for item in initial or ():
            self.create(item)

    def create(self, entity: T) -> None:
        """Append a record. The caller guarantees its id is unique."""
        self._items.append(entity)
        self._ids.observe(self._id_of(entity))
        logging.debug("store create id=%s size=%s", self._id_of(entity), len(self._items))

    def update_by_id(self, entity_id: int, new_value: T) -> bool:
        """Replace the first record with ``entity_id`` in place.

        Returns:
            False (and leaves the store untouched) when no record matches
        """
        for index, item in enumerate(self._items):
            if self._id_of(item) == entity_id:
                self._items[index] = new_value
                logging.debug("store update id=%s index=%s", entity_id, index)
                return True
        logging.debug("store update id=%s not found", entity_id)
        return False

    def delete_by_id(self, entity_id: int) -> bool:
        """Remove the first record with ``entity_id``.

        Returns:
            False (and leaves the store untouched) when no record matches
        """
        for index, item in enumerate(self._items):
            if self._id_of(item) == entity_id:
                del self._items[index]
                logging.debug("store delete id=%s size=%s", entity_id, len(self._items))
                return True
        logging.debug("store delete id=%s not found", entity_id)
        return False

    def get(self, entity_id: int) -> Optional[T]:
        for item in self._items:
            if self._id_of(item) == entity_id:
                return item
        return None

    def all(self) -> tuple[T, ...]:
        """Snapshot of the records in insertion order.

        The snapshot does not follow later mutations; fetch again after
        changing the store.
        """
        return tuple(self._items)

    def count(self) -> int:
        return len(self._items)

    def next_id(self) -> int:
        """Fresh id, unique among every id this store has seen."""
        return self._ids.next_id()

    def __contains__(self, entity_id: object) -> bool:
        return any(self._id_of(item) == entity_id for item in self._items)

    def __len__(self) -> int:
        return len(self._items)
