from typing import Callable, List, Optional
import logging

from textstore.client.models import AuthEvent, Session
from textstore.client.store import SessionFeed, Unsubscribe
from textstore.core.errors import RemoteError

logger = logging.getLogger(__name__)

SessionListener = Callable[[Optional[Session]], None]


class SessionMonitor:
    """Наблюдаемая ячейка с текущей сессией

    Хранит только последнее опубликованное значение. Слушатели получают его
    при каждой публикации, истории нет.
    """

    def __init__(self, feed: SessionFeed):
        self.feed = feed
        self._session: Optional[Session] = None
        self._listeners: List[SessionListener] = []
        self._unsubscribe: Optional[Unsubscribe] = None
        self._publications = 0
        self.resolved = False

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user_id(self):
        return self._session.user_id if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    async def start(self) -> Optional[Session]:
        """Подписка на ленту и однократное определение текущей сессии"""
        if self._unsubscribe is None:
            self._unsubscribe = self.feed.on_session_change(self._on_auth_event)

        publications_before = self._publications
        try:
            session = await self.feed.current_session()
        except RemoteError as e:
            # Ошибка определения сессии равносильна ее отсутствию
            logger.warning(f"Could not resolve current session: {e}")
            session = None

        # Событие из ленты пришло раньше, чем закончилось определение
        if self._publications == publications_before:
            self._publish(session)
        self.resolved = True

        return self._session

    def stop(self) -> None:
        """Отписка от ленты"""
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def subscribe(self, listener: SessionListener) -> Unsubscribe:
        """Подписка на изменения сессии"""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _on_auth_event(self, event: AuthEvent, session: Optional[Session]) -> None:
        logger.info(f"Auth event {event.value}")
        self._publish(session)

    def _publish(self, session: Optional[Session]) -> None:
        self._session = session
        self._publications += 1
        for listener in list(self._listeners):
            listener(session)
