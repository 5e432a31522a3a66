from abc import ABC, abstractmethod
from typing import Any, Callable

Operation = Callable[[], Any]
SuccessCallback = Callable[[Any], None]
FailureCallback = Callable[[Exception], None]


class MutationDispatcher(ABC):
    """
    Runs store calls without blocking the map.
    Callbacks must be delivered on the thread that owns the engine.
    """
    @abstractmethod
    def submit(
            self,
            operation: Operation,
            on_success: SuccessCallback,
            on_failure: FailureCallback
    ) -> None:
        pass
