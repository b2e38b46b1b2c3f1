"""Note version history API endpoints.

Snapshots are numbered per note starting at 1. Restoring a version first
saves the note's current state as a new version, so history is never lost.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..schemas.note import NoteResponse
from ..schemas.version import VersionResponse, VersionSummary
from ..services import version_service
from ..services.auth_service import get_current_user
from ..services.note_service import get_owned_note

router = APIRouter(prefix="/notes/{note_id}/versions", tags=["Versions"])


@router.post(
    "",
    response_model=VersionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={404: {"description": "Note not found"}},
)
async def create_version(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VersionResponse:
    """Save the note's current title and content as the next version."""
    version = await version_service.save_snapshot(db, current_user.id, note_id)
    return VersionResponse.model_validate(version)


@router.get("", response_model=list[VersionSummary])
async def list_versions(
    note_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[VersionSummary]:
    """List versions, highest number first. Content is not included."""
    note = await get_owned_note(db, current_user.id, note_id)
    rows = await version_service.list_versions(db, note.id)
    return [VersionSummary.model_validate(row) for row in rows]


@router.get("/{version_id}", response_model=VersionResponse)
async def get_version(
    note_id: UUID,
    version_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> VersionResponse:
    """Get one version with its content."""
    note = await get_owned_note(db, current_user.id, note_id)
    version = await version_service.get_version(db, note.id, version_id)
    return VersionResponse.model_validate(version)


@router.put(
    "/{version_id}/restore",
    response_model=NoteResponse,
    responses={404: {"description": "Note or version not found"}},
)
async def restore_version(
    note_id: UUID,
    version_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> NoteResponse:
    """
    Restore the note to a version.

    The current state is saved as a new version before the note's title
    and content are replaced. Returns the updated note.
    """
    note = await version_service.restore_version(db, current_user.id, note_id, version_id)
    return NoteResponse.model_validate(note)
