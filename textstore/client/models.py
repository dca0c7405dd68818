from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from pydantic import BaseModel, ConfigDict


class Entry(BaseModel):
    """Запись в том виде, в каком ее отдает хранилище"""
    id: uuid.UUID
    title: str
    content: str
    owner_id: uuid.UUID
    created_at: datetime
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(frozen=True, extra="ignore")


class Session(BaseModel):
    """Текущий аутентифицированный пользователь"""
    user_id: uuid.UUID
    email: str
    access_token: str

    model_config = ConfigDict(frozen=True)


class AuthEvent(Enum):
    """События ленты аутентификации"""
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"


def sort_newest_first(entries):
    """Сортировка по дате создания, новые первыми"""
    return sorted(entries, key=lambda entry: entry.created_at, reverse=True)
