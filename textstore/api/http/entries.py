from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession
import uuid

from textstore.api.http.auth import get_current_user
from textstore.core.db import get_db
from textstore.domains.entries.entities import Entry
from textstore.domains.entries.schemas import (
    EntryCreate, EntryUpdate, EntryResponse, EntryListResponse
)
from textstore.domains.entries.services import EntryService
from textstore.domains.identity.entities import User

router = APIRouter(prefix="/entries", tags=["entries"])


def to_entry_response(entry: Entry) -> EntryResponse:
    return EntryResponse(
        id=entry.uuid,
        title=entry.title,
        content=entry.content,
        owner_id=entry.owner_id,
        created_at=entry.created_at,
        updated_at=entry.updated_at
    )


@router.get("/", response_model=EntryListResponse)
async def list_entries(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Получение записей текущего пользователя, новые первыми"""
    entry_service = EntryService(db)

    entries = await entry_service.get_user_entries(current_user.uuid)

    return EntryListResponse(
        entries=[to_entry_response(entry) for entry in entries],
        total=len(entries)
    )


@router.post("/", response_model=EntryResponse, status_code=status.HTTP_201_CREATED)
async def create_entry(
    entry_data: EntryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Создание новой записи"""
    entry_service = EntryService(db)

    try:
        entry = await entry_service.create_entry(entry_data, current_user.uuid)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

    return to_entry_response(entry)


@router.put("/{entry_id}", response_model=EntryResponse)
async def update_entry(
    entry_id: uuid.UUID,
    update_data: EntryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Обновление записи"""
    entry_service = EntryService(db)

    try:
        entry = await entry_service.update_entry(entry_id, update_data, current_user.uuid)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )

    if not entry:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Entry not found"
        )

    return to_entry_response(entry)


@router.delete("/{entry_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_entry(
    entry_id: uuid.UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
):
    """Удаление записи"""
    entry_service = EntryService(db)

    try:
        deleted = await entry_service.delete_entry(entry_id, current_user.uuid)
    except PermissionError as e:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=str(e)
        )

    if not deleted:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Entry not found"
        )

    return Response(status_code=status.HTTP_204_NO_CONTENT)
