"""Pydantic schemas for Note model validation."""

from datetime import datetime
from typing import Literal, Optional
from uuid import UUID

from pydantic import Field, field_validator, model_validator

from .base import CamelModel

TagColor = Literal["red", "orange", "yellow", "green", "blue", "purple", "pink"]

# Fields that may be omitted from an update but never set to null
NON_NULLABLE_UPDATE_FIELDS = ("title", "content", "is_pinned", "is_locked", "tags")


def _dedupe_tags(tags: list[str]) -> list[str]:
    """Drop repeated labels, keeping first-seen order."""
    return list(dict.fromkeys(tags))


class NoteCreate(CamelModel):
    """Schema for creating a new note."""

    title: Optional[str] = Field(
        None,
        max_length=255,
        description="Note title (defaults to 'New Note')",
        examples=["Groceries"],
    )
    content: Optional[str] = Field(
        None,
        description="Rich text markup",
        examples=["<p>Milk, eggs</p>"],
    )
    folder_id: Optional[UUID] = Field(
        None,
        alias="folder",
        description="Folder to place the note in (null = unfiled)",
    )


class NoteUpdate(CamelModel):
    """Schema for a partial note update.

    Only fields present in the request body are applied; the set of
    supplied fields is read from ``model_fields_set``. ``folder`` may be
    sent as null to unfile a note; the other fields reject null.
    """

    title: Optional[str] = Field(
        None,
        max_length=255,
        description="Note title",
    )
    content: Optional[str] = Field(
        None,
        description="Rich text markup",
    )
    folder_id: Optional[UUID] = Field(
        None,
        alias="folder",
        description="Move note to this folder (null = unfiled)",
    )
    is_pinned: Optional[bool] = None
    is_locked: Optional[bool] = None
    tags: Optional[list[TagColor]] = Field(
        None,
        description="Color labels; duplicates are dropped",
    )

    @field_validator("tags")
    @classmethod
    def dedupe_tags(cls, v: Optional[list[str]]) -> Optional[list[str]]:
        """Tags are a set; keep each label once."""
        if v is None:
            return v
        return _dedupe_tags(v)

    @model_validator(mode="after")
    def reject_explicit_nulls(self) -> "NoteUpdate":
        """Reject null for fields that cannot be cleared."""
        for name in NON_NULLABLE_UPDATE_FIELDS:
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self

    def changes(self) -> dict:
        """Return only the explicitly supplied fields, keyed by attribute name."""
        return self.model_dump(exclude_unset=True, by_alias=False)


class NoteResponse(CamelModel):
    """Schema for full note response."""

    id: UUID
    user_id: UUID
    title: str
    content: str
    folder_id: Optional[UUID] = Field(None, alias="folder")
    is_pinned: bool = False
    is_locked: bool = False
    is_trashed: bool = False
    trashed_at: Optional[datetime] = None
    tags: list[str] = Field(default_factory=list)
    is_shared: bool = False
    share_token: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class NoteListItem(NoteResponse):
    """Note in a listing, with a plain-text preview of the content."""

    preview: str = ""


class SharedNoteResponse(CamelModel):
    """Public projection of a shared note. No owner id, no flags."""

    title: str
    content: str
    tags: list[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class MessageResponse(CamelModel):
    """Plain confirmation message."""

    message: str
