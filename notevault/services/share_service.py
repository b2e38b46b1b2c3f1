"""Public share link service.

A shared note is readable by anyone holding its token, without
authentication. Every enable mints a fresh random token and every
disable drops it, so a revoked link never comes back to life. The public
lookup re-checks is_shared and is_trashed on every call.
"""

import logging
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..config import settings
from ..models.note import Note
from ..utils.security import generate_share_token
from .note_service import get_owned_note

logger = logging.getLogger(__name__)

# Collisions at 128 bits are not expected; the bound only guards a broken RNG
MAX_TOKEN_ATTEMPTS = 5


async def _token_in_use(db: AsyncSession, token: str) -> bool:
    found = await db.scalar(select(Note.id).where(Note.share_token == token))
    return found is not None


async def mint_share_token(db: AsyncSession) -> str:
    """
    Generate a share token not currently held by any note.

    Raises:
        RuntimeError: if no unused token could be drawn
    """
    for _ in range(MAX_TOKEN_ATTEMPTS):
        token = generate_share_token(settings.share_token_bytes)
        if not await _token_in_use(db, token):
            return token
        logger.warning("Share token collision, drawing again")
    raise RuntimeError("Could not generate a unique share token")


async def enable_sharing(db: AsyncSession, note: Note) -> str:
    """Turn on the public link with a newly minted token."""
    token = await mint_share_token(db)
    note.is_shared = True
    note.share_token = token
    return token


def disable_sharing(note: Note) -> None:
    """Turn off the public link and forget its token."""
    note.is_shared = False
    note.share_token = None


async def toggle_sharing(db: AsyncSession, owner_id: UUID, note_id: UUID) -> Note:
    """
    Flip a note's sharing state.

    Raises:
        HTTPException: 404 if the note is missing or not owned
    """
    note = await get_owned_note(db, owner_id, note_id)

    if note.is_shared:
        disable_sharing(note)
        action = "disabled"
    else:
        await enable_sharing(db, note)
        action = "enabled"

    await db.commit()
    await db.refresh(note)

    logger.info(f"Sharing {action} for note {note_id}")
    return note


async def resolve_shared_note(db: AsyncSession, token: str) -> Note:
    """
    Find the note behind a public token.

    Raises:
        HTTPException: 404 if no shared, non-trashed note has this token
    """
    result = await db.execute(
        select(Note).where(
            Note.share_token == token,
            Note.is_shared == True,  # noqa: E712
            Note.is_trashed == False,  # noqa: E712
        )
    )
    note = result.scalar_one_or_none()

    if note is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Shared note not found or sharing is disabled",
        )

    return note
