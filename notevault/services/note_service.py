"""Note business logic service.

Owner-scoped note CRUD, listing with folder/search/trash filters, soft
delete (trash) and permanent deletion. A note that belongs to another
user is reported exactly like a missing one (404), so note ids cannot
be probed across accounts.
"""

import logging
import re
from datetime import datetime
from typing import Optional, Sequence
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.folder import Folder
from ..models.note import DEFAULT_NOTE_TITLE, Note
from ..schemas.note import NoteCreate

logger = logging.getLogger(__name__)

_TAG_RE = re.compile(r"<[^>]*>")

# Attributes a partial update may touch
UPDATABLE_FIELDS = {"title", "content", "folder_id", "is_pinned", "is_locked", "tags"}


def note_not_found(note_id: UUID) -> HTTPException:
    """404 used for missing and foreign notes alike."""
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Note {note_id} not found",
    )


def build_preview(content: Optional[str], length: int = 120) -> str:
    """Strip markup tags and return the first ``length`` characters."""
    if not content:
        return ""
    return _TAG_RE.sub("", content)[:length]


def escape_like(term: str) -> str:
    """Escape LIKE wildcards so the search text matches literally."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


async def get_owned_note(
    db: AsyncSession,
    owner_id: UUID,
    note_id: UUID,
    refresh: bool = False,
) -> Note:
    """
    Load a note owned by ``owner_id``.

    Args:
        db: Database session
        owner_id: Authenticated user's id
        note_id: Note to load
        refresh: Overwrite any copy already in the session identity map

    Returns:
        The Note

    Raises:
        HTTPException: 404 if the note does not exist or is not owned
    """
    query = select(Note).where(Note.id == note_id, Note.user_id == owner_id)
    if refresh:
        query = query.execution_options(populate_existing=True)
    result = await db.execute(query)
    note = result.scalar_one_or_none()

    if note is None:
        raise note_not_found(note_id)

    return note


async def verify_folder_ownership(
    db: AsyncSession,
    owner_id: UUID,
    folder_id: UUID,
) -> None:
    """
    Check the folder exists and belongs to the user.

    Raises:
        HTTPException: 404 if the folder is missing or foreign
    """
    found = await db.scalar(
        select(Folder.id).where(Folder.id == folder_id, Folder.user_id == owner_id)
    )
    if found is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Folder {folder_id} not found",
        )


async def create_note(db: AsyncSession, owner_id: UUID, data: NoteCreate) -> Note:
    """
    Create a note for the user.

    A missing or blank title becomes "New Note"; missing content becomes "".
    """
    if data.folder_id is not None:
        await verify_folder_ownership(db, owner_id, data.folder_id)

    title = (data.title or "").strip() or DEFAULT_NOTE_TITLE

    note = Note(
        user_id=owner_id,
        title=title,
        content=data.content or "",
        folder_id=data.folder_id,
        tags=[],
    )
    db.add(note)
    await db.commit()
    await db.refresh(note)

    logger.info(f"Created note {note.id} for user {owner_id}")
    return note


async def update_note(
    db: AsyncSession,
    owner_id: UUID,
    note_id: UUID,
    changes: dict,
) -> Note:
    """
    Apply a partial update.

    ``changes`` holds only the fields the client supplied, so absent keys
    leave the stored value untouched while ``folder_id: None`` unfiles the
    note. There is no precondition check: concurrent writers overwrite
    each other (last write wins).
    """
    note = await get_owned_note(db, owner_id, note_id)

    if changes.get("folder_id") is not None:
        await verify_folder_ownership(db, owner_id, changes["folder_id"])

    for field, value in changes.items():
        if field not in UPDATABLE_FIELDS:
            continue
        if field == "title":
            value = value.strip()
        setattr(note, field, value)

    note.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(note)
    return note


async def list_notes(
    db: AsyncSession,
    owner_id: UUID,
    folder_id: Optional[UUID] = None,
    search: Optional[str] = None,
    trashed: bool = False,
) -> Sequence[Note]:
    """
    List the user's notes, pinned first then most recently updated.

    Args:
        db: Database session
        owner_id: Authenticated user's id
        folder_id: Only notes in this folder
        search: Case-insensitive substring matched against title or content
        trashed: True lists only the trash, False hides trashed notes

    Returns:
        Matching notes
    """
    query = select(Note).where(Note.user_id == owner_id, Note.is_trashed == trashed)

    if folder_id is not None:
        query = query.where(Note.folder_id == folder_id)

    if search:
        pattern = f"%{escape_like(search)}%"
        query = query.where(
            Note.title.ilike(pattern, escape="\\") | Note.content.ilike(pattern, escape="\\")
        )

    query = query.order_by(
        Note.is_pinned.desc(),
        Note.updated_at.desc(),
        Note.created_at.desc(),
    )

    result = await db.execute(query)
    return result.scalars().all()


async def trash_note(db: AsyncSession, owner_id: UUID, note_id: UUID) -> Note:
    """Move a note to the trash (soft delete)."""
    note = await get_owned_note(db, owner_id, note_id)

    note.is_trashed = True
    note.trashed_at = datetime.utcnow()
    note.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(note)
    return note


async def restore_note(db: AsyncSession, owner_id: UUID, note_id: UUID) -> Note:
    """Take a note back out of the trash."""
    note = await get_owned_note(db, owner_id, note_id)

    note.is_trashed = False
    note.trashed_at = None
    note.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(note)
    return note


async def delete_note_permanently(db: AsyncSession, owner_id: UUID, note_id: UUID) -> None:
    """
    Hard-delete a note together with all of its versions.

    This action is irreversible.
    """
    from .version_service import delete_versions_for_note, note_locks

    async with note_locks.hold(note_id):
        note = await get_owned_note(db, owner_id, note_id)

        removed = await delete_versions_for_note(db, note.id)
        await db.delete(note)
        await db.commit()

    logger.info(f"Permanently deleted note {note_id} and {removed} version(s)")
