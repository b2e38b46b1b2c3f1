"""Note version history service.

Versions are immutable snapshots of a note's title and content, numbered
1, 2, 3, ... per note. The next number lives on the note row
(Notes.next_version_number) and is claimed with a single atomic
UPDATE ... RETURNING, so PostgreSQL row locking keeps numbers unique
across workers. Within one process, appends on the same note are also
serialized by a per-note asyncio lock; the note is read, numbered,
copied and committed while that lock is held.

Restoring a version always snapshots the current state first, so a
restore never loses history. Both steps commit in one transaction.
"""

import asyncio
import logging
from contextlib import asynccontextmanager
from datetime import datetime
from typing import AsyncIterator, Dict, Sequence
from uuid import UUID

from fastapi import HTTPException, status
from sqlalchemy import delete, select, update
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from ..models.note import Note
from ..models.note_version import NoteVersion
from .note_service import get_owned_note

logger = logging.getLogger(__name__)


class NoteLockRegistry:
    """
    In-process asyncio locks keyed by note id.

    Locks are created on first use and dropped once nobody holds or waits
    for them, so the registry only grows with the number of notes being
    written concurrently.
    """

    def __init__(self) -> None:
        self._locks: Dict[UUID, asyncio.Lock] = {}
        self._users: Dict[UUID, int] = {}

    @asynccontextmanager
    async def hold(self, note_id: UUID) -> AsyncIterator[None]:
        """Hold the lock for ``note_id`` for the duration of the block."""
        lock = self._locks.get(note_id)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[note_id] = lock
        self._users[note_id] = self._users.get(note_id, 0) + 1

        try:
            async with lock:
                yield
        finally:
            self._users[note_id] -= 1
            if self._users[note_id] == 0:
                del self._users[note_id]
                self._locks.pop(note_id, None)

    def __len__(self) -> int:
        return len(self._locks)


# Global registry instance
note_locks = NoteLockRegistry()


def version_not_found(version_id: UUID) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail=f"Version {version_id} not found",
    )


async def claim_version_number(db: AsyncSession, note_id: UUID) -> int:
    """
    Atomically reserve the next version number for a note.

    The note's updated_at is written back unchanged so taking a snapshot
    does not count as editing the note.

    Returns:
        The reserved number (1 for the first version)
    """
    result = await db.execute(
        update(Note)
        .where(Note.id == note_id)
        .values(
            next_version_number=Note.next_version_number + 1,
            updated_at=Note.updated_at,
        )
        .returning(Note.next_version_number)
        .execution_options(synchronize_session=False)
    )
    return result.scalar_one() - 1


async def append_version(db: AsyncSession, note: Note) -> NoteVersion:
    """
    Append a snapshot of ``note``'s current title and content.

    Must be called with ``note_locks.hold(note.id)`` held. The caller
    commits.

    Args:
        db: Database session
        note: The note to snapshot (already ownership-checked)

    Returns:
        The new NoteVersion (flushed, not yet committed)
    """
    number = await claim_version_number(db, note.id)

    version = NoteVersion(
        note_id=note.id,
        user_id=note.user_id,
        title=note.title,
        content=note.content,
        version_number=number,
        created_at=datetime.utcnow(),
    )
    db.add(version)
    await db.flush()

    return version


async def list_versions(db: AsyncSession, note_id: UUID) -> Sequence[Row]:
    """
    List a note's versions, newest number first.

    Only summary columns are selected; the content snapshots are not loaded.
    """
    result = await db.execute(
        select(
            NoteVersion.id,
            NoteVersion.version_number,
            NoteVersion.title,
            NoteVersion.created_at,
        )
        .where(NoteVersion.note_id == note_id)
        .order_by(NoteVersion.version_number.desc())
    )
    return result.all()


async def get_version(db: AsyncSession, note_id: UUID, version_id: UUID) -> NoteVersion:
    """
    Load one version of a note.

    A version that exists but belongs to a different note is reported as
    not found.

    Raises:
        HTTPException: 404 if there is no such version on this note
    """
    result = await db.execute(
        select(NoteVersion).where(
            NoteVersion.id == version_id,
            NoteVersion.note_id == note_id,
        )
    )
    version = result.scalar_one_or_none()

    if version is None:
        raise version_not_found(version_id)

    return version


async def delete_versions_for_note(db: AsyncSession, note_id: UUID) -> int:
    """Delete every version of a note. Returns the number of rows removed."""
    result = await db.execute(
        delete(NoteVersion)
        .where(NoteVersion.note_id == note_id)
        .execution_options(synchronize_session=False)
    )
    return result.rowcount or 0


# ============================================================================
# Snapshot / restore
# ============================================================================


async def save_snapshot(db: AsyncSession, owner_id: UUID, note_id: UUID) -> NoteVersion:
    """
    Store the note's current title and content as a new version.

    The note itself is not modified.

    Raises:
        HTTPException: 404 if the note is missing or not owned by the caller
    """
    async with note_locks.hold(note_id):
        note = await get_owned_note(db, owner_id, note_id, refresh=True)
        try:
            version = await append_version(db, note)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info(f"Saved version {version.version_number} of note {note_id}")
    return version


async def restore_version(
    db: AsyncSession,
    owner_id: UUID,
    note_id: UUID,
    version_id: UUID,
) -> Note:
    """
    Restore a note to a stored version.

    The current state is snapshotted first, then the version's title and
    content are copied onto the note. Both happen in one transaction: if
    the snapshot fails nothing is changed.

    Raises:
        HTTPException: 404 if the note is missing or not owned, or the
            version does not belong to this note
    """
    async with note_locks.hold(note_id):
        note = await get_owned_note(db, owner_id, note_id, refresh=True)
        target = await get_version(db, note.id, version_id)

        try:
            backup = await append_version(db, note)

            note.title = target.title
            note.content = target.content
            note.updated_at = datetime.utcnow()

            await db.commit()
        except Exception:
            await db.rollback()
            raise

    logger.info(
        f"Restored note {note_id} to version {target.version_number} "
        f"(previous state saved as version {backup.version_number})"
    )
    return note
