"""Pydantic schemas for NoteVersion responses."""

from datetime import datetime
from uuid import UUID

from .base import CamelModel


class VersionSummary(CamelModel):
    """Version list item (no content payload)."""

    id: UUID
    version_number: int
    title: str
    created_at: datetime


class VersionResponse(VersionSummary):
    """Full version including the content snapshot."""

    note_id: UUID
    content: str
