from dataclasses import dataclass, replace
from enum import Enum
from typing import Optional
import logging

from textstore.client.models import Entry
from textstore.client.mutations import MutationPipeline
from textstore.core.errors import ValidationError

logger = logging.getLogger(__name__)


class EditorMode(Enum):
    CREATING = "creating"
    EDITING = "editing"


@dataclass(frozen=True)
class EditorDraft:
    """Несохраненные заголовок и текст"""
    mode: EditorMode = EditorMode.CREATING
    entry: Optional[Entry] = None
    title: str = ""
    content: str = ""

    @property
    def is_empty(self) -> bool:
        return self.mode is EditorMode.CREATING and not self.title and not self.content


class EntryEditor:
    """Форма создания и редактирования записи

    Черновик принадлежит только редактору. Пока отправка не завершилась,
    повторная отправка игнорируется.
    """

    def __init__(self, pipeline: MutationPipeline):
        self.pipeline = pipeline
        self.draft = EditorDraft()
        self.is_pending = False

    @property
    def mode(self) -> EditorMode:
        return self.draft.mode

    @property
    def heading(self) -> str:
        return "Edit Entry" if self.mode is EditorMode.EDITING else "New Entry"

    @property
    def submit_label(self) -> str:
        return "Update" if self.mode is EditorMode.EDITING else "Save"

    @property
    def can_cancel(self) -> bool:
        return self.mode is EditorMode.EDITING

    @property
    def can_submit(self) -> bool:
        return not self.is_pending

    def set_title(self, title: str) -> None:
        self.draft = replace(self.draft, title=title)

    def set_content(self, content: str) -> None:
        self.draft = replace(self.draft, content=content)

    def start_edit(self, entry: Entry) -> None:
        """Загрузка записи в черновик"""
        self.draft = EditorDraft(
            mode=EditorMode.EDITING,
            entry=entry,
            title=entry.title,
            content=entry.content
        )

    def cancel_edit(self) -> None:
        """Возврат к пустому черновику новой записи"""
        self.draft = EditorDraft()

    def validate(self) -> None:
        if not self.draft.title.strip():
            raise ValidationError("Title is required", field="title")
        if not self.draft.content.strip():
            raise ValidationError("Content is required", field="content")

    async def submit(self) -> bool:
        """Отправка черновика: создание или изменение записи"""
        if self.is_pending:
            logger.debug("Submission already in flight, ignoring")
            return False

        self.validate()

        draft = self.draft
        self.is_pending = True
        try:
            if draft.mode is EditorMode.EDITING:
                succeeded = await self.pipeline.update(draft.entry.id, draft.title, draft.content)
            else:
                succeeded = await self.pipeline.create(draft.title, draft.content)
        finally:
            self.is_pending = False

        if succeeded:
            self.draft = EditorDraft()

        return succeeded
