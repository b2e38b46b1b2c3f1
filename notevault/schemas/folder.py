"""Pydantic schemas for Folder model validation."""

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import Field, field_validator

from .base import CamelModel


class FolderCreate(CamelModel):
    """Schema for creating a new folder."""

    name: Optional[str] = Field(
        None,
        max_length=100,
        description="Folder name (defaults to 'New Folder')",
        examples=["Recipes"],
    )
    icon: Optional[str] = Field(
        None,
        max_length=16,
        description="Icon shown next to the folder name",
        examples=["📁"],
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace; an all-blank name counts as not supplied."""
        if v is None:
            return v
        return v.strip() or None


class FolderUpdate(CamelModel):
    """Schema for updating a folder. Only supplied fields change."""

    name: Optional[str] = Field(
        None,
        min_length=1,
        max_length=100,
        description="Folder name",
    )
    icon: Optional[str] = Field(
        None,
        min_length=1,
        max_length=16,
        description="Icon shown next to the folder name",
    )

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        """Trim whitespace and reject blank names."""
        if v is None:
            raise ValueError("Folder name cannot be null")
        v = v.strip()
        if not v:
            raise ValueError("Folder name cannot be blank")
        return v

    @field_validator("icon")
    @classmethod
    def icon_not_null(cls, v: Optional[str]) -> str:
        """Icon may be omitted but not set to null."""
        if v is None:
            raise ValueError("Folder icon cannot be null")
        return v


class FolderResponse(CamelModel):
    """Schema for folder response."""

    id: UUID
    name: str
    icon: str
    note_count: int = 0
    created_at: datetime
    updated_at: datetime
