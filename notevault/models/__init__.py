"""SQLAlchemy ORM models package."""

from .folder import Folder
from .note import DEFAULT_NOTE_TITLE, Note
from .note_version import NoteVersion
from .user import User

__all__ = [
    "DEFAULT_NOTE_TITLE",
    "Folder",
    "Note",
    "NoteVersion",
    "User",
]
