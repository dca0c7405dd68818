from dataclasses import dataclass
from typing import Protocol
import logging

logger = logging.getLogger(__name__)

DEFAULT = "default"
DESTRUCTIVE = "destructive"


@dataclass(frozen=True)
class Notification:
    title: str
    description: str
    variant: str = DEFAULT

    @classmethod
    def success(cls, description: str) -> "Notification":
        return cls(title="Success", description=description)

    @classmethod
    def failure(cls, description: str) -> "Notification":
        return cls(title="Error", description=description, variant=DESTRUCTIVE)


class NotificationSink(Protocol):
    """Показывает пользователю результат операции"""

    def notify(self, notification: Notification) -> None:
        ...


class LoggingNotificationSink:
    """Уведомления в журнал, когда интерфейса нет"""

    def notify(self, notification: Notification) -> None:
        if notification.variant == DESTRUCTIVE:
            logger.warning(f"{notification.title}: {notification.description}")
        else:
            logger.info(f"{notification.title}: {notification.description}")
