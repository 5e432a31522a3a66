import logging
import queue
import threading
import time
from typing import Any, Callable, List, Optional, Tuple

from src.turf.interfaces.mutation_dispatcher import (
    FailureCallback,
    MutationDispatcher,
    Operation,
    SuccessCallback,
)

logger = logging.getLogger(__name__)

_Job = Tuple[Operation, SuccessCallback, FailureCallback]
_Completion = Callable[[], None]


class ThreadedMutationDispatcher(MutationDispatcher):
    """
    Runs store calls on background worker threads.

    Completions are parked on an inbox and only delivered when the owning
    loop calls `pump()`, so engine callbacks never run on a worker thread.
    """

    def __init__(self, workers: int = 4):
        self.worker_count = max(1, int(workers))
        self._jobs: "queue.Queue[Optional[_Job]]" = queue.Queue()
        self._completions: "queue.Queue[_Completion]" = queue.Queue()
        self._threads: List[threading.Thread] = []
        self._outstanding = 0
        self._lock = threading.Lock()

    def start(self) -> None:
        if self._threads:
            return
        for idx in range(self.worker_count):
            thread = threading.Thread(
                target=self._run_forever,
                name=f"turf-mutation-{idx}",
                daemon=True,
            )
            thread.start()
            self._threads.append(thread)

    def stop(self) -> None:
        for _ in self._threads:
            self._jobs.put(None)
        for thread in self._threads:
            thread.join(timeout=2.0)
        self._threads = []

    def submit(
            self,
            operation: Operation,
            on_success: SuccessCallback,
            on_failure: FailureCallback
    ) -> None:
        if not self._threads:
            self.start()
        with self._lock:
            self._outstanding += 1
        self._jobs.put((operation, on_success, on_failure))

    def pump(self, max_items: Optional[int] = None) -> int:
        """
        Delivers finished callbacks on the calling thread. Returns how many ran.
        """
        delivered = 0
        while max_items is None or delivered < max_items:
            try:
                completion = self._completions.get_nowait()
            except queue.Empty:
                break
            with self._lock:
                self._outstanding -= 1
            completion()
            delivered += 1
        return delivered

    def pump_until_idle(self, timeout: float = 5.0, poll_interval: float = 0.01) -> bool:
        """
        Pumps until no job is queued, running or waiting for delivery.
        Callbacks may submit follow-up work; that is waited for too.
        """
        deadline = time.monotonic() + timeout
        while time.monotonic() < deadline:
            self.pump()
            if self.outstanding() == 0:
                return True
            time.sleep(poll_interval)
        return self.outstanding() == 0

    def outstanding(self) -> int:
        with self._lock:
            return self._outstanding

    def _run_forever(self) -> None:
        while True:
            job = self._jobs.get()
            if job is None:
                return
            operation, on_success, on_failure = job
            try:
                result = operation()
            except Exception as e:
                logger.debug(f"Mutation failed on worker: {e}")
                self._completions.put(self._bind(on_failure, e))
            else:
                self._completions.put(self._bind(on_success, result))

    @staticmethod
    def _bind(callback: Callable[[Any], None], value: Any) -> _Completion:
        return lambda: callback(value)
