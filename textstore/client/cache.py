"""Кэш записей текущего пользователя.

Единственный способ изменить кэш - ``invalidate()``: он увеличивает счетчик
поколений и ставит загрузку в очередь. Все загрузки выполняет одна фоновая
задача, поэтому повторная инвалидация во время загрузки не порождает
параллельного запроса, а добавляет еще один проход после текущего.
Результат загрузки помечен поколением, с которым она стартовала, и
применяется, только если это поколение не старше уже примененного.
"""
import asyncio
import logging
from typing import List, Optional

from textstore.client.models import Entry, Session, sort_newest_first
from textstore.client.session import SessionMonitor
from textstore.client.store import RemoteStore
from textstore.core.errors import RemoteError

logger = logging.getLogger(__name__)


class EntryCache:
    """Кэш записей с инвалидацией после каждой записи"""

    def __init__(self, store: RemoteStore, monitor: SessionMonitor):
        self.store = store
        self.monitor = monitor
        self._entries: List[Entry] = []
        self._generation = 0
        self._started_generation = 0
        self._applied_generation = 0
        self._loaded = False
        self._error: Optional[RemoteError] = None
        self._task: Optional[asyncio.Task] = None
        self._user_id = monitor.user_id
        self._unsubscribe = monitor.subscribe(self._on_session)

    @property
    def entries(self) -> List[Entry]:
        """Последнее успешно загруженное значение"""
        return list(self._entries)

    @property
    def enabled(self) -> bool:
        return self.monitor.is_authenticated

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def is_loading(self) -> bool:
        return self._task is not None and not self._task.done()

    @property
    def is_stale(self) -> bool:
        return self._applied_generation < self._generation

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    @property
    def error(self) -> Optional[RemoteError]:
        return self._error

    async def list(self) -> List[Entry]:
        """Записи текущего пользователя, новые первыми"""
        if not self.enabled:
            return []

        if (not self._loaded or self._error is not None) and not self.is_loading:
            self.invalidate()

        await self.settle()
        return self.entries

    def invalidate(self) -> None:
        """Пометить кэш устаревшим и запустить повторную загрузку"""
        if not self.enabled:
            return

        self._generation += 1
        if self._task is None or self._task.done():
            self._task = asyncio.get_running_loop().create_task(self._drain())

    async def settle(self) -> None:
        """Дождаться, пока кэш отразит последнюю инвалидацию"""
        while self._task is not None and not self._task.done():
            await asyncio.shield(self._task)

        if self._error is not None:
            raise self._error

    def close(self) -> None:
        self._unsubscribe()

    async def _drain(self) -> None:
        while self._started_generation < self._generation:
            generation = self._started_generation = self._generation
            try:
                entries = await self.store.list_entries()
            except RemoteError as e:
                logger.warning(f"Fetching entries (generation {generation}) failed: {e.message}")
                if generation >= self._applied_generation:
                    self._error = e
                continue

            self._apply(generation, entries)

    def _apply(self, generation: int, entries: List[Entry]) -> None:
        if generation < self._applied_generation:
            logger.debug(f"Discarding stale entries from generation {generation}")
            return

        self._entries = sort_newest_first(entries)
        self._applied_generation = generation
        self._loaded = True
        self._error = None
        logger.debug(f"Applied {len(entries)} entries from generation {generation}")

    def _on_session(self, session: Optional[Session]) -> None:
        user_id = session.user_id if session else None
        # Обновление токена того же пользователя кэш не трогает
        if user_id == self._user_id:
            return

        self._reset()
        self._user_id = user_id

        if session is not None:
            self.invalidate()

    def _reset(self) -> None:
        # Загрузки, начатые до смены пользователя, больше не применяются
        self._generation += 1
        self._started_generation = self._generation
        self._applied_generation = self._generation
        self._entries = []
        self._loaded = False
        self._error = None
