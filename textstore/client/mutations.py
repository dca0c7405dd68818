from typing import Set
import logging
import uuid

from textstore.client.cache import EntryCache
from textstore.client.notifications import Notification, NotificationSink
from textstore.client.session import SessionMonitor
from textstore.client.store import RemoteStore
from textstore.core.errors import AuthAbsent, RemoteError

logger = logging.getLogger(__name__)


class MutationPipeline:
    """Создание, изменение и удаление записей в удаленном хранилище

    После успешной операции кэш только инвалидируется, локальных правок нет.
    Ошибки хранилища превращаются в уведомления и дальше не пробрасываются.
    """

    def __init__(
        self,
        store: RemoteStore,
        cache: EntryCache,
        monitor: SessionMonitor,
        notifier: NotificationSink
    ):
        self.store = store
        self.cache = cache
        self.monitor = monitor
        self.notifier = notifier
        self.pending_deletes: Set[uuid.UUID] = set()

    def _require_session(self):
        session = self.monitor.session
        if session is None:
            raise AuthAbsent()
        return session

    async def create(self, title: str, content: str) -> bool:
        """Создание записи от имени текущего пользователя"""
        session = self._require_session()

        try:
            await self.store.insert_entry(title, content, session.user_id)
        except RemoteError as e:
            return self._failed("create", e)

        return self._succeeded("Text entry saved successfully!")

    async def update(self, entry_id: uuid.UUID, title: str, content: str) -> bool:
        """Изменение заголовка и текста существующей записи"""
        self._require_session()

        try:
            await self.store.update_entry(entry_id, title, content)
        except RemoteError as e:
            return self._failed("update", e)

        return self._succeeded("Text entry updated successfully!")

    async def delete(self, entry_id: uuid.UUID) -> bool:
        """Удаление записи без подтверждения, его запрашивает вызывающий"""
        self._require_session()

        self.pending_deletes.add(entry_id)
        try:
            await self.store.delete_entry(entry_id)
        except RemoteError as e:
            return self._failed("delete", e)
        finally:
            self.pending_deletes.discard(entry_id)

        return self._succeeded("Text entry deleted successfully!")

    def _succeeded(self, message: str) -> bool:
        self.cache.invalidate()
        self.notifier.notify(Notification.success(message))
        return True

    def _failed(self, operation: str, error: RemoteError) -> bool:
        logger.warning(f"Entry {operation} failed: {error.message}")
        self.notifier.notify(Notification.failure(error.message))
        return False
