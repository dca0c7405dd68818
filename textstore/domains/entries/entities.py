import uuid
from datetime import datetime
from typing import Optional


class Entry:
    """Сущность текстовой записи"""

    def __init__(
        self,
        uuid: uuid.UUID,
        title: str,
        content: str,
        owner_id: uuid.UUID,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None
    ):
        self.uuid = uuid
        self.title = title
        self.content = content
        self.owner_id = owner_id
        self.created_at = created_at or datetime.utcnow()
        self.updated_at = updated_at or datetime.utcnow()

    def edit(self, title: str, content: str) -> None:
        """Изменение заголовка и текста; владелец и дата создания не меняются"""
        self.title = title
        self.content = content
        self.updated_at = datetime.utcnow()

    def is_owned_by(self, user_id: uuid.UUID) -> bool:
        """Проверка владельца записи"""
        return self.owner_id == user_id

    @classmethod
    def create_entry(cls, title: str, content: str, owner_id: uuid.UUID) -> "Entry":
        """Создание новой записи"""
        return cls(
            uuid=uuid.uuid4(),
            title=title,
            content=content,
            owner_id=owner_id
        )

    def __eq__(self, other) -> bool:
        if not isinstance(other, Entry):
            return False
        return self.uuid == other.uuid

    def __repr__(self) -> str:
        return f"Entry(uuid={self.uuid}, title={self.title}, owner_id={self.owner_id})"
