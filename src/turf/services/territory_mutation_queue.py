import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Callable, Deque, Dict, Set

from src.turf.domain.errors import ProvisionalTerritoryError
from src.turf.interfaces.mutation_dispatcher import (
    FailureCallback,
    MutationDispatcher,
    SuccessCallback,
)

logger = logging.getLogger(__name__)

KeyedOperation = Callable[[str], Any]


@dataclass
class _PendingMutation:
    label: str
    operation: KeyedOperation
    on_success: SuccessCallback
    on_failure: FailureCallback


class TerritoryMutationQueue:
    """
    Serializes store mutations per territory while letting different
    territories run concurrently.

    Each operation is called with the territory id current at dispatch
    time, so work queued behind a create on a provisional id goes out with
    the id the store assigned. Not thread-safe: every call, including the
    dispatcher's callbacks, must happen on the engine's thread.
    """

    def __init__(self, dispatcher: MutationDispatcher):
        self.dispatcher = dispatcher
        self._pending: Dict[str, Deque[_PendingMutation]] = {}
        self._in_flight: Set[str] = set()
        self._aliases: Dict[str, str] = {}
        self._abandoned: Set[str] = set()

    def submit(
            self,
            key: str,
            operation: KeyedOperation,
            on_success: SuccessCallback,
            on_failure: FailureCallback,
            label: str = "mutation"
    ) -> None:
        key = self.canonical(key)
        if key in self._abandoned:
            logger.info(f"Rejecting {label} for never-persisted territory {key}")
            on_failure(ProvisionalTerritoryError(key))
            return

        self._pending.setdefault(key, deque()).append(
            _PendingMutation(label, operation, on_success, on_failure)
        )
        if key not in self._in_flight:
            self._dispatch_next(key)

    def canonical(self, key: str) -> str:
        return self._aliases.get(key, key)

    def resolve_alias(self, provisional_id: str, authoritative_id: str) -> None:
        """
        Routes everything queued (now or later) under the provisional id to
        the authoritative one.
        """
        self._aliases[provisional_id] = authoritative_id
        waiting = self._pending.pop(provisional_id, None)
        if waiting:
            self._pending.setdefault(authoritative_id, deque()).extend(waiting)

    def abandon(self, provisional_id: str) -> int:
        """
        Fails everything queued behind a create that did not succeed.
        """
        self._abandoned.add(provisional_id)
        waiting = self._pending.pop(provisional_id, deque())
        for mutation in waiting:
            logger.info(f"Dropping queued {mutation.label} for never-persisted territory {provisional_id}")
            mutation.on_failure(ProvisionalTerritoryError(provisional_id))
        return len(waiting)

    def reset(self) -> None:
        """
        Forgets queued work, aliases and abandoned ids. Completions of work
        already dispatched still arrive but release nothing.
        """
        self._pending.clear()
        self._in_flight.clear()
        self._aliases.clear()
        self._abandoned.clear()

    def in_flight(self, key: str) -> bool:
        return self.canonical(key) in self._in_flight

    def pending_count(self, key: str) -> int:
        return len(self._pending.get(self.canonical(key), ()))

    def _dispatch_next(self, key: str) -> None:
        queue = self._pending.get(key)
        if not queue:
            self._pending.pop(key, None)
            return

        mutation = queue.popleft()
        self._in_flight.add(key)
        territory_id = self.canonical(key)
        logger.debug(f"Dispatching {mutation.label} for territory {territory_id}")

        def succeeded(result: Any) -> None:
            try:
                mutation.on_success(result)
            finally:
                self._advance(key)

        def failed(error: Exception) -> None:
            try:
                mutation.on_failure(error)
            finally:
                self._advance(key)

        self.dispatcher.submit(
            lambda: mutation.operation(territory_id),
            succeeded,
            failed,
        )

    def _advance(self, key: str) -> None:
        self._in_flight.discard(key)
        next_key = self.canonical(key)
        if next_key not in self._in_flight:
            self._dispatch_next(next_key)
