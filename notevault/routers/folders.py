"""Folder CRUD API endpoints.

Folders are flat, per-user groupings of notes. Deleting a folder keeps
its notes and moves them to unfiled. All endpoints require authentication.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..models.user import User
from ..schemas.folder import FolderCreate, FolderResponse, FolderUpdate
from ..schemas.note import MessageResponse
from ..services import folder_service
from ..services.auth_service import get_current_user

router = APIRouter(prefix="/folders", tags=["Folders"])


def _folder_response(folder, note_count: int) -> FolderResponse:
    response = FolderResponse.model_validate(folder)
    response.note_count = note_count
    return response


@router.get("", response_model=list[FolderResponse])
async def list_folders(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> list[FolderResponse]:
    """List the user's folders sorted by name, with note counts."""
    rows = await folder_service.list_folders(db, current_user.id)
    return [_folder_response(folder, count) for folder, count in rows]


@router.post("", response_model=FolderResponse, status_code=status.HTTP_201_CREATED)
async def create_folder(
    body: FolderCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FolderResponse:
    """Create a folder (defaults: name "New Folder", icon "📁")."""
    folder = await folder_service.create_folder(db, current_user.id, body.name, body.icon)
    return _folder_response(folder, 0)


@router.put("/{folder_id}", response_model=FolderResponse)
async def update_folder(
    folder_id: UUID,
    body: FolderUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> FolderResponse:
    """Rename a folder or change its icon. Omitted fields are kept."""
    folder = await folder_service.update_folder(
        db, current_user.id, folder_id, body.model_dump(exclude_unset=True)
    )
    note_count = await folder_service.count_notes(db, current_user.id, folder.id)
    return _folder_response(folder, note_count)


@router.delete("/{folder_id}", response_model=MessageResponse)
async def delete_folder(
    folder_id: UUID,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db),
) -> MessageResponse:
    """Delete a folder and unlink its notes."""
    await folder_service.delete_folder(db, current_user.id, folder_id)
    return MessageResponse(message="Folder deleted")
