from dataclasses import dataclass, field
from typing import Awaitable, Callable, List, Optional, Union
import inspect
import logging
import uuid

from textstore.client.cache import EntryCache
from textstore.client.editor import EntryEditor
from textstore.client.models import Entry, Session
from textstore.client.mutations import MutationPipeline
from textstore.client.notifications import Notification, NotificationSink
from textstore.client.session import SessionMonitor
from textstore.client.store import RemoteStore, SessionFeed
from textstore.core.config import settings
from textstore.core.errors import AuthAbsent, RemoteError, ValidationError

logger = logging.getLogger(__name__)

DELETE_CONFIRMATION = "Are you sure you want to delete this entry?"
EMPTY_LIST_MESSAGE = "No entries yet. Create one!"

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]
Redirect = Callable[[str], None]


@dataclass
class ScreenState:
    """Снимок состояния экрана для отрисовки"""
    heading: str
    submit_label: str
    submit_enabled: bool
    show_cancel: bool
    title: str
    content: str
    entries: List[Entry] = field(default_factory=list)
    is_loading: bool = False
    empty_message: Optional[str] = None


class EntriesScreen:
    """Единственный экран приложения: форма и список записей

    Связывает монитор сессии, кэш, конвейер изменений и редактор. Без
    сессии уводит пользователя на страницу входа.
    """

    def __init__(
        self,
        feed: SessionFeed,
        store: RemoteStore,
        notifier: NotificationSink,
        confirm: Confirm,
        redirect: Redirect,
        auth_path: str = None
    ):
        self.feed = feed
        self.notifier = notifier
        self.confirm = confirm
        self.redirect = redirect
        self.auth_path = auth_path or settings.auth_path

        self.monitor = SessionMonitor(feed)
        self.cache = EntryCache(store, self.monitor)
        self.pipeline = MutationPipeline(store, self.cache, self.monitor, notifier)
        self.editor = EntryEditor(self.pipeline)
        self._unsubscribe = self.monitor.subscribe(self._on_session)

    async def start(self) -> Optional[Session]:
        session = await self.monitor.start()
        if session is None:
            self._redirect_to_auth()
        return session

    def stop(self) -> None:
        self._unsubscribe()
        self.cache.close()
        self.monitor.stop()

    def state(self) -> ScreenState:
        entries = self.cache.entries
        is_loading = self.cache.is_loading and not self.cache.is_loaded
        return ScreenState(
            heading=self.editor.heading,
            submit_label=self.editor.submit_label,
            submit_enabled=self.editor.can_submit,
            show_cancel=self.editor.can_cancel,
            title=self.editor.draft.title,
            content=self.editor.draft.content,
            entries=entries,
            is_loading=is_loading,
            empty_message=EMPTY_LIST_MESSAGE if not entries and not is_loading else None
        )

    def set_title(self, title: str) -> None:
        self.editor.set_title(title)

    def set_content(self, content: str) -> None:
        self.editor.set_content(content)

    def edit(self, entry: Entry) -> None:
        self.editor.start_edit(entry)

    def cancel(self) -> None:
        self.editor.cancel_edit()

    async def submit(self) -> bool:
        try:
            return await self.editor.submit()
        except ValidationError as e:
            logger.debug(f"Submission blocked: {e.message}")
            return False
        except AuthAbsent:
            self._redirect_to_auth()
            return False

    async def delete(self, entry_id: uuid.UUID) -> bool:
        """Удаление записи после подтверждения пользователем"""
        confirmed = self.confirm(DELETE_CONFIRMATION)
        if inspect.isawaitable(confirmed):
            confirmed = await confirmed

        if not confirmed:
            return False

        try:
            return await self.pipeline.delete(entry_id)
        except AuthAbsent:
            self._redirect_to_auth()
            return False

    async def sign_out(self) -> bool:
        # Переход на страницу входа делает _on_session по событию SIGNED_OUT
        try:
            await self.feed.sign_out()
        except RemoteError as e:
            self.notifier.notify(Notification.failure(e.message))
            return False

        return True

    def _on_session(self, session: Optional[Session]) -> None:
        if session is None and self.monitor.resolved:
            self._redirect_to_auth()

    def _redirect_to_auth(self) -> None:
        logger.info(f"No active session, redirecting to {self.auth_path}")
        self.redirect(self.auth_path)
