"""Public shared-note endpoint.

No authentication: the share token alone grants read access, and only
while the owner keeps sharing enabled and the note is out of the trash.
"""

from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.note import SharedNoteResponse
from ..services.share_service import resolve_shared_note

router = APIRouter(prefix="/shared", tags=["Shared"])


@router.get("/{token}", response_model=SharedNoteResponse)
async def read_shared_note(
    token: str = Path(..., min_length=1),
    db: AsyncSession = Depends(get_db),
) -> SharedNoteResponse:
    """Read a shared note: title, content, tags and timestamps only."""
    note = await resolve_shared_note(db, token)
    return SharedNoteResponse.model_validate(note)
