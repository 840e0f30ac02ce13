"""In-memory superhero store.

The store owns the process-wide superhero collection. Every operation runs
under a single lock, and callers only ever receive copies of the stored
records, so the collection can only change through the methods below.
"""

import threading
from collections.abc import Iterable

from loguru import logger

from superhero_api.core.observability import trace_operation
from superhero_api.domain.models import SEED_SUPERHEROES, Superhero
from superhero_api.domain.outcomes import Outcome, OutcomeKind


class SuperheroStore:
    """Identifier-keyed superhero collection kept in insertion order.

    Seed records are inserted as given, without the duplicate-identifier
    check that ``create`` applies.

    Args:
        seed: Records the store starts with (and returns to on ``reset``).

    Example:
        store = SuperheroStore()
        outcome = store.create(Superhero(id=4, name="Wonder Woman"))
        assert outcome.succeeded
    """

    def __init__(self, seed: Iterable[Superhero] = SEED_SUPERHEROES) -> None:
        self._seed = tuple(item.model_copy() for item in seed)
        self._lock = threading.Lock()
        self._items: list[Superhero] = []
        self._load_seed()
        logger.debug("Initialized superhero store with {} records", len(self._items))

    def _load_seed(self) -> None:
        self._items = [item.model_copy() for item in self._seed]

    def _index_of(self, superhero_id: int | None) -> int | None:
        """Position of the first record with ``superhero_id``. Caller holds the lock."""
        if superhero_id is None:
            return None
        return next(
            (i for i, item in enumerate(self._items) if item.id == superhero_id), None
        )

    def _find(self, superhero_id: int | None) -> Superhero | None:
        index = self._index_of(superhero_id)
        return None if index is None else self._items[index]

    def list(self) -> list[Superhero]:
        """Return every superhero, in insertion order.

        Returns:
            list[Superhero]: Copies of all stored records.
        """
        with trace_operation("superhero_store.list"), self._lock:
            items = [item.model_copy() for item in self._items]

        logger.debug("Listed {} superheroes", len(items))
        return items

    def get_by_id(self, superhero_id: int | None) -> Outcome:
        """Look up a superhero by identifier.

        Args:
            superhero_id: The identifier to look for. ``None`` never matches.

        Returns:
            Outcome: SUCCESS carrying a copy of the record, or NOT_FOUND.
        """
        span_name = "superhero_store.get_by_id"
        with trace_operation(span_name, superhero_id=str(superhero_id)), self._lock:
            existing = self._find(superhero_id)
            found = existing.model_copy() if existing is not None else None

        if found is None:
            logger.debug("Superhero not found with ID: {}", superhero_id)
            return Outcome.failure(OutcomeKind.NOT_FOUND)

        logger.debug("Found superhero with ID: {}", superhero_id)
        return Outcome.success(found)

    def create(self, item: Superhero) -> Outcome:
        """Append a new superhero unless its identifier is already taken.

        Args:
            item: The superhero to add.

        Returns:
            Outcome: SUCCESS carrying a copy of the created record, or CONFLICT
                with the collection left unchanged.
        """
        with (
            trace_operation("superhero_store.create", superhero_id=item.id),
            self._lock,
        ):
            conflict = self._find(item.id) is not None
            if not conflict:
                self._items.append(item.model_copy())

        if conflict:
            logger.info("Rejected superhero creation, ID {} already exists", item.id)
            return Outcome.failure(OutcomeKind.CONFLICT)

        logger.info("Created superhero with ID: {}", item.id)
        return Outcome.success(item.model_copy())

    def update(self, item: Superhero) -> Outcome:
        """Rename an existing superhero in place.

        The identifier of ``item`` selects the record; only the name is copied.

        Args:
            item: Identifier of the record to update and its new name.

        Returns:
            Outcome: SUCCESS without payload, or INVALID_REQUEST with the
                collection left unchanged.
        """
        with (
            trace_operation("superhero_store.update", superhero_id=item.id),
            self._lock,
        ):
            existing = self._find(item.id)
            if existing is not None:
                existing.name = item.name

        if existing is None:
            logger.info("Rejected update of unknown superhero ID: {}", item.id)
            return Outcome.failure(OutcomeKind.INVALID_REQUEST)

        logger.info("Updated superhero with ID: {}", item.id)
        return Outcome.success()

    def delete(self, superhero_id: int | None) -> Outcome:
        """Remove a superhero by identifier.

        Args:
            superhero_id: The identifier of the record to remove.

        Returns:
            Outcome: SUCCESS without payload, or NOT_FOUND with the collection
                left unchanged.
        """
        span_name = "superhero_store.delete"
        with trace_operation(span_name, superhero_id=str(superhero_id)), self._lock:
            index = self._index_of(superhero_id)
            if index is not None:
                del self._items[index]

        if index is None:
            logger.debug("Superhero not found for deletion - ID: {}", superhero_id)
            return Outcome.failure(OutcomeKind.NOT_FOUND)

        logger.info("Deleted superhero with ID: {}", superhero_id)
        return Outcome.success()

    def count(self) -> int:
        """Return the number of stored superheroes."""
        with self._lock:
            return len(self._items)

    def reset(self) -> None:
        """Discard every change and restore the seed records."""
        with self._lock:
            self._load_seed()
        logger.info("Superhero store reset to {} seed records", len(self._seed))
