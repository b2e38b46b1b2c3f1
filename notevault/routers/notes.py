"""Notes CRUD API endpoints.

Provides endpoints for creating, listing, editing, trashing and
permanently deleting notes, plus the share toggle. All endpoints require
authentication and only ever see the caller's own notes.
"""

import logging
from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..database import get_db
from ..models.user import User
from ..schemas.note import (
    MessageResponse,
    NoteCreate,
    NoteListItem,
    NoteResponse,
    NoteUpdate,
)
from ..services import note_service, share_service
from ..services.auth_service import get_current_user

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/notes", tags=["Notes"])


@router.get("", response_model=list[NoteListItem])
async def list_notes(
    folder: Optional[UUID] = Query(None, description="Only notes in this folder"),
    search: Optional[str] = Query(
        None, max_length=200, description="Case-insensitive text to find in title or content"
    ),
    trashed: bool = Query(False, description="List the trash instead of active notes"),
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[NoteListItem]:
    """
    List the user's notes.

    Pinned notes come first, then the rest by last update (newest first).
    Each item carries a plain-text ``preview`` of its content.
    """
    notes = await note_service.list_notes(
        db,
        current_user.id,
        folder_id=folder,
        search=search,
        trashed=trashed,
    )

    items = []
    for note in notes:
        item = NoteListItem.model_validate(note)
        item.preview = note_service.build_preview(note.content, settings.note_preview_length)
        items.append(item)
    return items


@router.post("", response_model=NoteResponse, status_code=status.HTTP_201_CREATED)
async def create_note(
    body: NoteCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """Create a note. Title defaults to "New Note", content to empty."""
    note = await note_service.create_note(db, current_user.id, body)
    return NoteResponse.model_validate(note)


@router.get("/{note_id}", response_model=NoteResponse)
async def get_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """Get a single note (trashed notes included)."""
    note = await note_service.get_owned_note(db, current_user.id, note_id)
    return NoteResponse.model_validate(note)


@router.put("/{note_id}", response_model=NoteResponse)
async def update_note(
    note_id: UUID,
    body: NoteUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """
    Partially update a note.

    Only the fields present in the body are changed. Send ``folder: null``
    to unfile the note. Concurrent updates are last-write-wins.
    """
    note = await note_service.update_note(db, current_user.id, note_id, body.changes())
    return NoteResponse.model_validate(note)


@router.put("/{note_id}/trash", response_model=NoteResponse)
async def trash_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """Move a note to the trash."""
    note = await note_service.trash_note(db, current_user.id, note_id)
    return NoteResponse.model_validate(note)


@router.put("/{note_id}/restore", response_model=NoteResponse)
async def restore_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """Restore a note from the trash."""
    note = await note_service.restore_note(db, current_user.id, note_id)
    return NoteResponse.model_validate(note)


@router.delete("/{note_id}", response_model=MessageResponse)
async def delete_note(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """
    Permanently delete a note and its whole version history.

    This action is irreversible.
    """
    await note_service.delete_note_permanently(db, current_user.id, note_id)
    return MessageResponse(message="Note permanently deleted")


@router.put("/{note_id}/share", response_model=NoteResponse)
async def toggle_share(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """
    Toggle the public read link.

    Enabling mints a fresh token (``shareToken``); disabling clears it.
    """
    note = await share_service.toggle_sharing(db, current_user.id, note_id)
    return NoteResponse.model_validate(note)
