"""Folder business logic service."""

import logging
from datetime import datetime
from typing import Optional
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.folder import Folder
from ..models.note import Note

logger = logging.getLogger(__name__)

DEFAULT_FOLDER_NAME = "New Folder"
DEFAULT_FOLDER_ICON = "📁"


async def get_owned_folder(db: AsyncSession, owner_id: UUID, folder_id: UUID) -> Folder:
    """
    Load a folder owned by the user.

    Raises:
        HTTPException: 404 if the folder is missing or foreign
    """
    result = await db.execute(
        select(Folder).where(Folder.id == folder_id, Folder.user_id == owner_id)
    )
    folder = result.scalar_one_or_none()

    if folder is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Folder {folder_id} not found",
        )

    return folder


async def count_notes(db: AsyncSession, owner_id: UUID, folder_id: UUID) -> int:
    """Number of non-trashed notes in a folder."""
    count = await db.scalar(
        select(func.count(Note.id)).where(
            Note.user_id == owner_id,
            Note.folder_id == folder_id,
            Note.is_trashed == False,  # noqa: E712
        )
    )
    return count or 0


async def list_folders(db: AsyncSession, owner_id: UUID) -> list[tuple[Folder, int]]:
    """
    List the user's folders by name, each with its note count.

    Returns:
        (folder, note_count) pairs
    """
    # Trashed notes are left out of the count; they only show up in the trash view
    note_counts = (
        select(Note.folder_id, func.count(Note.id).label("note_count"))
        .where(Note.user_id == owner_id, Note.is_trashed == False)  # noqa: E712
        .group_by(Note.folder_id)
        .subquery()
    )

    result = await db.execute(
        select(Folder, func.coalesce(note_counts.c.note_count, 0))
        .outerjoin(note_counts, note_counts.c.folder_id == Folder.id)
        .where(Folder.user_id == owner_id)
        .order_by(Folder.name.asc(), Folder.created_at.asc())
    )
    return [(folder, count) for folder, count in result.all()]


async def create_folder(
    db: AsyncSession,
    owner_id: UUID,
    name: Optional[str] = None,
    icon: Optional[str] = None,
) -> Folder:
    """Create a folder, falling back to the default name and icon."""
    folder = Folder(
        user_id=owner_id,
        name=name or DEFAULT_FOLDER_NAME,
        icon=icon or DEFAULT_FOLDER_ICON,
    )
    db.add(folder)
    await db.commit()
    await db.refresh(folder)

    logger.info(f"Created folder {folder.id} for user {owner_id}")
    return folder


async def update_folder(
    db: AsyncSession,
    owner_id: UUID,
    folder_id: UUID,
    changes: dict,
) -> Folder:
    """Apply a partial update (name and/or icon)."""
    folder = await get_owned_folder(db, owner_id, folder_id)

    for field in ("name", "icon"):
        if field in changes:
            setattr(folder, field, changes[field])
    folder.updated_at = datetime.utcnow()

    await db.commit()
    await db.refresh(folder)
    return folder


async def delete_folder(db: AsyncSession, owner_id: UUID, folder_id: UUID) -> int:
    """
    Delete a folder. Its notes are kept and become unfiled.

    Returns:
        Number of notes that were unlinked
    """
    folder = await get_owned_folder(db, owner_id, folder_id)

    result = await db.execute(
        update(Note)
        .where(Note.folder_id == folder.id, Note.user_id == owner_id)
        .values(folder_id=None)
        .execution_options(synchronize_session=False)
    )
    unlinked = result.rowcount or 0

    await db.delete(folder)
    await db.commit()

    logger.info(f"Deleted folder {folder_id}, unlinked {unlinked} note(s)")
    return unlinked
