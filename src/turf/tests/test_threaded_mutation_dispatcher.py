import threading

import pytest

from src.turf.adapters.threaded_mutation_dispatcher import ThreadedMutationDispatcher


@pytest.fixture
def dispatcher():
    d = ThreadedMutationDispatcher(workers=2)
    d.start()
    yield d
    d.stop()


def test_callbacks_run_on_pumping_thread(dispatcher):
    seen = []
    worker_threads = []

    def operation():
        worker_threads.append(threading.current_thread())
        return 42

    dispatcher.submit(operation, lambda result: seen.append((result, threading.current_thread())), seen.append)

    assert dispatcher.pump_until_idle(timeout=5.0)
    assert seen == [(42, threading.current_thread())]
    assert worker_threads[0] is not threading.current_thread()


def test_failures_are_delivered_to_failure_callback(dispatcher):
    failures = []

    def operation():
        raise RuntimeError("store down")

    dispatcher.submit(operation, lambda result: None, failures.append)

    assert dispatcher.pump_until_idle(timeout=5.0)
    assert len(failures) == 1
    assert str(failures[0]) == "store down"


def test_follow_up_work_from_callbacks_is_awaited(dispatcher):
    results = []

    def chain(result):
        results.append(result)
        if result < 3:
            dispatcher.submit(lambda: result + 1, chain, results.append)

    dispatcher.submit(lambda: 1, chain, results.append)

    assert dispatcher.pump_until_idle(timeout=5.0)
    assert results == [1, 2, 3]
    assert dispatcher.outstanding() == 0
