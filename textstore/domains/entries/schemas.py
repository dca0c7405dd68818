from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
import uuid
from datetime import datetime


class EntryBase(BaseModel):
    """Базовая схема записи"""
    title: str = Field(..., max_length=255)
    content: str = Field(..., max_length=1000000)

    @field_validator('title', 'content')
    @classmethod
    def validate_not_blank(cls, v, info):
        if not v.strip():
            raise ValueError(f'{info.field_name.capitalize()} cannot be empty')
        return v


class EntryCreate(EntryBase):
    """Схема для создания записи"""
    owner_id: Optional[uuid.UUID] = None


class EntryUpdate(EntryBase):
    """Схема для обновления записи"""
    pass


class EntryResponse(EntryBase):
    """Схема для ответа с данными записи"""
    id: uuid.UUID
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: datetime


class EntryListResponse(BaseModel):
    """Схема для списка записей"""
    entries: List[EntryResponse]
    total: int
