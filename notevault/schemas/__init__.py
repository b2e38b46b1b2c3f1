"""Pydantic schemas package for request/response validation."""

from .folder import FolderCreate, FolderResponse, FolderUpdate
from .note import (
    MessageResponse,
    NoteCreate,
    NoteListItem,
    NoteResponse,
    NoteUpdate,
    SharedNoteResponse,
    TagColor,
)
from .user import AuthResponse, LoginRequest, UserCreate, UserResponse
from .version import VersionResponse, VersionSummary

__all__ = [
    # Folder schemas
    "FolderCreate",
    "FolderResponse",
    "FolderUpdate",
    # Note schemas
    "MessageResponse",
    "NoteCreate",
    "NoteListItem",
    "NoteResponse",
    "NoteUpdate",
    "SharedNoteResponse",
    "TagColor",
    # User schemas
    "AuthResponse",
    "LoginRequest",
    "UserCreate",
    "UserResponse",
    # Version schemas
    "VersionResponse",
    "VersionSummary",
]
