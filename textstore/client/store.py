from typing import Callable, List, Optional, Protocol
import uuid

from textstore.client.models import AuthEvent, Entry, Session

SessionCallback = Callable[[AuthEvent, Optional[Session]], None]
Unsubscribe = Callable[[], None]


class RemoteStore(Protocol):
    """Удаленное хранилище записей

    Все методы выбрасывают RemoteError при отказе хранилища. Список
    ограничен записями вызывающего пользователя и упорядочен по created_at
    по убыванию.
    """

    async def list_entries(self) -> List[Entry]:
        ...

    async def insert_entry(self, title: str, content: str, owner_id: uuid.UUID) -> None:
        ...

    async def update_entry(self, entry_id: uuid.UUID, title: str, content: str) -> None:
        ...

    async def delete_entry(self, entry_id: uuid.UUID) -> None:
        ...


class SessionFeed(Protocol):
    """Источник состояния аутентификации"""

    async def current_session(self) -> Optional[Session]:
        ...

    def on_session_change(self, callback: SessionCallback) -> Unsubscribe:
        ...

    async def sign_out(self) -> None:
        ...
