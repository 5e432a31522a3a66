from abc import ABC, abstractmethod

from src.turf.domain.notification import Notification


class Notifier(ABC):
    """
    User-facing notification channel (toasts in the web client).
    """
    @abstractmethod
    def notify(self, notification: Notification) -> None:
        pass
