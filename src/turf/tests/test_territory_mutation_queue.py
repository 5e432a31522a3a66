from typing import Any, List, Tuple

import pytest

from src.turf.domain.errors import ProvisionalTerritoryError
from src.turf.interfaces.mutation_dispatcher import MutationDispatcher
from src.turf.services.territory_mutation_queue import TerritoryMutationQueue


# --- Mocks ---

class ManualDispatcher(MutationDispatcher):
    """
    Holds submitted work until the test decides to run it, in any order.
    Callbacks run on the test thread, like a UI loop.
    """

    def __init__(self):
        self.jobs: List[Tuple[Any, Any, Any]] = []

    def submit(self, operation, on_success, on_failure) -> None:
        self.jobs.append((operation, on_success, on_failure))

    def run_next(self, index: int = 0) -> None:
        operation, on_success, on_failure = self.jobs.pop(index)
        try:
            result = operation()
        except Exception as e:
            on_failure(e)
            return
        on_success(result)

    def run_all(self, limit: int = 1000) -> None:
        while self.jobs and limit:
            self.run_next()
            limit -= 1


class Recorder:
    def __init__(self):
        self.calls: List[str] = []
        self.successes: List[Any] = []
        self.failures: List[Exception] = []

    def op(self, name: str, result: Any = None, error: Exception = None):
        def run(territory_id: str):
            self.calls.append(f"{name}:{territory_id}")
            if error:
                raise error
            return result
        return run

    def ok(self, value):
        self.successes.append(value)

    def fail(self, error):
        self.failures.append(error)


# --- Fixtures ---

@pytest.fixture
def dispatcher():
    return ManualDispatcher()


@pytest.fixture
def queue(dispatcher):
    return TerritoryMutationQueue(dispatcher)


@pytest.fixture
def rec():
    return Recorder()


# --- Tests ---

def test_different_territories_run_concurrently(queue, dispatcher, rec):
    queue.submit("1", rec.op("update"), rec.ok, rec.fail)
    queue.submit("2", rec.op("update"), rec.ok, rec.fail)

    assert len(dispatcher.jobs) == 2


def test_same_territory_is_serialized_in_order(queue, dispatcher, rec):
    queue.submit("1", rec.op("first"), rec.ok, rec.fail)
    queue.submit("1", rec.op("second"), rec.ok, rec.fail)

    assert len(dispatcher.jobs) == 1
    assert queue.pending_count("1") == 1

    dispatcher.run_next()
    assert len(dispatcher.jobs) == 1
    dispatcher.run_next()

    assert rec.calls == ["first:1", "second:1"]
    assert not queue.in_flight("1")


def test_failure_still_releases_the_next_mutation(queue, dispatcher, rec):
    queue.submit("1", rec.op("first", error=RuntimeError("boom")), rec.ok, rec.fail)
    queue.submit("1", rec.op("second", result="done"), rec.ok, rec.fail)

    dispatcher.run_all()

    assert len(rec.failures) == 1
    assert rec.successes == ["done"]


def test_work_queued_behind_create_uses_authoritative_id(queue, dispatcher, rec):
    def created(result):
        queue.resolve_alias("prov-1", "42")

    queue.submit("prov-1", rec.op("create", result="42"), created, rec.fail)
    queue.submit("prov-1", rec.op("update"), rec.ok, rec.fail)
    assert len(dispatcher.jobs) == 1

    dispatcher.run_all()

    assert rec.calls == ["create:prov-1", "update:42"]
    assert queue.canonical("prov-1") == "42"


def test_abandon_fails_queued_and_later_work(queue, dispatcher, rec):
    queue.submit(
        "prov-1",
        rec.op("create", error=RuntimeError("store down")),
        rec.ok,
        lambda e: queue.abandon("prov-1"),
    )
    queue.submit("prov-1", rec.op("update"), rec.ok, rec.fail)

    dispatcher.run_all()
    queue.submit("prov-1", rec.op("delete"), rec.ok, rec.fail)

    assert rec.calls == ["create:prov-1"]
    assert len(rec.failures) == 2
    assert all(isinstance(e, ProvisionalTerritoryError) for e in rec.failures)
    assert dispatcher.jobs == []


def test_reset_forgets_aliases_and_abandoned_ids(queue, dispatcher, rec):
    queue.submit("prov-1", rec.op("create"), lambda r: queue.resolve_alias("prov-1", "42"), rec.fail)
    queue.submit("prov-2", rec.op("create", error=RuntimeError("store down")), rec.ok,
                 lambda e: queue.abandon("prov-2"))
    dispatcher.run_all()

    queue.reset()

    assert queue.canonical("prov-1") == "prov-1"
    queue.submit("prov-2", rec.op("update"), rec.ok, rec.fail)
    assert len(dispatcher.jobs) == 1
    assert rec.failures == []


def test_completion_after_reset_releases_nothing(queue, dispatcher, rec):
    queue.submit("7", rec.op("update"), rec.ok, rec.fail)
    queue.submit("7", rec.op("delete"), rec.ok, rec.fail)

    queue.reset()
    dispatcher.run_all()

    assert rec.calls == ["update:7"]
    assert not queue.in_flight("7")
    assert queue.pending_count("7") == 0
