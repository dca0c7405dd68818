from typing import Optional, List
from sqlalchemy.ext.asyncio import AsyncSession
import logging
import uuid

from textstore.db.repositories.entry_repository import EntryRepository
from textstore.domains.entries.entities import Entry
from textstore.domains.entries.schemas import EntryCreate, EntryUpdate

logger = logging.getLogger(__name__)


class EntryService:
    """Сервис для работы с текстовыми записями

    Каждая операция выполняется от имени пользователя и видит только его записи.
    """

    def __init__(self, session: AsyncSession):
        self.session = session
        self.entry_repository = EntryRepository(session)

    async def create_entry(self, entry_data: EntryCreate, user_id: uuid.UUID) -> Entry:
        """Создание новой записи"""
        if entry_data.owner_id is not None and entry_data.owner_id != user_id:
            raise PermissionError("Cannot create entries on behalf of another user")

        entry = Entry.create_entry(
            title=entry_data.title,
            content=entry_data.content,
            owner_id=user_id
        )

        created_entry = await self.entry_repository.create(entry)
        logger.info(f"User {user_id} created entry {created_entry.uuid}")
        return created_entry

    async def get_user_entries(self, user_id: uuid.UUID) -> List[Entry]:
        """Получение записей пользователя"""
        return await self.entry_repository.get_by_owner(user_id)

    async def update_entry(
        self,
        entry_uuid: uuid.UUID,
        update_data: EntryUpdate,
        user_id: uuid.UUID
    ) -> Optional[Entry]:
        """Обновление записи"""
        entry = await self.entry_repository.get_by_uuid(entry_uuid)

        if not entry:
            return None

        if not entry.is_owned_by(user_id):
            raise PermissionError("You don't have permission to edit this entry")

        entry.edit(update_data.title, update_data.content)
        updated_entry = await self.entry_repository.update(entry)
        logger.info(f"User {user_id} updated entry {entry_uuid}")
        return updated_entry

    async def delete_entry(self, entry_uuid: uuid.UUID, user_id: uuid.UUID) -> bool:
        """Удаление записи"""
        entry = await self.entry_repository.get_by_uuid(entry_uuid)

        if not entry:
            return False

        # Только владелец может удалить запись
        if not entry.is_owned_by(user_id):
            raise PermissionError("Only the owner can delete this entry")

        deleted = await self.entry_repository.delete(entry_uuid)
        logger.info(f"User {user_id} deleted entry {entry_uuid}")
        return deleted
