import logging
from typing import List

from src.turf.domain.notification import Notification, NotificationLevel
from src.turf.interfaces.notifier import Notifier

logger = logging.getLogger(__name__)


class LoggingNotifier(Notifier):
    """
    Headless notifier: logs every notification and keeps the history so a
    host UI (or a test) can render or inspect it.
    """

    def __init__(self):
        self.history: List[Notification] = []

    def notify(self, notification: Notification) -> None:
        self.history.append(notification)
        if notification.level == NotificationLevel.ERROR:
            logger.error(f"{notification.title}: {notification.message}")
        else:
            logger.info(f"{notification.title}: {notification.message}")

    def errors(self) -> List[Notification]:
        return [n for n in self.history if n.level == NotificationLevel.ERROR]
