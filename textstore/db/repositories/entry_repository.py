from typing import Optional, List, TYPE_CHECKING
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update, delete
from sqlalchemy.exc import IntegrityError
import uuid

from textstore.db.models.entry import TextEntry as TextEntryModel

if TYPE_CHECKING:
    from textstore.domains.entries.entities import Entry


class EntryRepository:
    """Репозиторий для работы с текстовыми записями"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, entry: "Entry") -> "Entry":
        """Создание новой записи"""
        db_entry = TextEntryModel(
            uuid=entry.uuid,
            title=entry.title,
            content=entry.content,
            owner_id=entry.owner_id,
            created_at=entry.created_at,
            updated_at=entry.updated_at
        )

        self.session.add(db_entry)
        try:
            await self.session.commit()
            await self.session.refresh(db_entry)
            return self._to_domain(db_entry)
        except IntegrityError:
            await self.session.rollback()
            raise ValueError("Invalid owner_id")

    async def get_by_uuid(self, entry_uuid: uuid.UUID) -> Optional["Entry"]:
        """Получение записи по UUID"""
        result = await self.session.execute(
            select(TextEntryModel).where(TextEntryModel.uuid == entry_uuid)
        )
        db_entry = result.scalar_one_or_none()
        return self._to_domain(db_entry) if db_entry else None

    async def get_by_owner(self, owner_id: uuid.UUID) -> List["Entry"]:
        """Получение записей владельца, новые первыми"""
        result = await self.session.execute(
            select(TextEntryModel)
            .where(TextEntryModel.owner_id == owner_id)
            .order_by(TextEntryModel.created_at.desc(), TextEntryModel.uuid)
        )
        db_entries = result.scalars().all()
        return [self._to_domain(entry) for entry in db_entries]

    async def update(self, entry: "Entry") -> "Entry":
        """Обновление заголовка и текста записи"""
        stmt = (
            update(TextEntryModel)
            .where(TextEntryModel.uuid == entry.uuid)
            .values(
                title=entry.title,
                content=entry.content,
                updated_at=entry.updated_at
            )
        )

        await self.session.execute(stmt)
        await self.session.commit()

        return await self.get_by_uuid(entry.uuid)

    async def delete(self, entry_uuid: uuid.UUID) -> bool:
        """Удаление записи"""
        stmt = delete(TextEntryModel).where(TextEntryModel.uuid == entry_uuid)
        result = await self.session.execute(stmt)
        await self.session.commit()
        return result.rowcount > 0

    def _to_domain(self, db_entry: TextEntryModel) -> "Entry":
        """Преобразование модели БД в доменную сущность"""
        from textstore.domains.entries.entities import Entry

        return Entry(
            uuid=db_entry.uuid,
            title=db_entry.title,
            content=db_entry.content,
            owner_id=db_entry.owner_id,
            created_at=db_entry.created_at,
            updated_at=db_entry.updated_at
        )
