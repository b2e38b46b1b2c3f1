"""Note SQLAlchemy model.

Notes hold opaque rich-text markup and a set of independent flags
(pinned, locked, trashed, shared). Soft delete is tracked by is_trashed
plus trashed_at; public sharing by is_shared plus a unique share_token.
The next_version_number column is the per-note counter used to number
snapshots in NoteVersions.
"""

import uuid
from datetime import datetime

from sqlalchemy import (
    JSON,
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)

from ..database import Base

DEFAULT_NOTE_TITLE = "New Note"


class Note(Base):
    """
    Note model representing a single user-owned note.

    Attributes:
        id: Unique identifier (UUID)
        user_id: FK to the owning user (never changes)
        folder_id: FK to Folder (nullable - null means unfiled)
        title: Note title
        content: Rich text markup (stored as-is)
        is_pinned: Pinned notes sort before the rest
        is_locked: View gate for the client; content is still returned
        is_trashed: Soft-deleted flag
        trashed_at: When the note was trashed (set iff is_trashed)
        tags: List of color labels
        is_shared: Whether the public read link is enabled
        share_token: Public token (set iff is_shared, globally unique)
        next_version_number: Number the next snapshot of this note will get
        created_at: Timestamp when note was created
        updated_at: Timestamp when note was last updated
    """

    __tablename__ = "Notes"
    __allow_unmapped__ = True

    # Primary key
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

    # Ownership
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("Users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # Folder association (null = unfiled)
    folder_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("Folders.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )

    # Note details
    title = Column(
        String(255),
        nullable=False,
        default=DEFAULT_NOTE_TITLE,
    )

    content = Column(
        Text,
        nullable=False,
        default="",
    )

    # Flags
    is_pinned = Column(Boolean, nullable=False, default=False)
    is_locked = Column(Boolean, nullable=False, default=False)

    # Soft delete
    is_trashed = Column(Boolean, nullable=False, default=False, index=True)
    trashed_at = Column(DateTime, nullable=True)

    # Color labels
    tags = Column(
        JSON,
        nullable=False,
        default=list,
    )

    # Public sharing
    is_shared = Column(Boolean, nullable=False, default=False)
    share_token = Column(
        String(64),
        nullable=True,
        unique=True,
    )

    # Version counter
    next_version_number = Column(
        Integer,
        nullable=False,
        default=1,
    )

    # Timestamps
    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    updated_at = Column(
        DateTime,
        default=datetime.utcnow,
        onupdate=datetime.utcnow,
        nullable=False,
    )

    __table_args__ = (
        CheckConstraint(
            "(is_trashed AND trashed_at IS NOT NULL)"
            " OR (NOT is_trashed AND trashed_at IS NULL)",
            name="ck_notes_trashed_at",
        ),
        CheckConstraint(
            "(is_shared AND share_token IS NOT NULL)"
            " OR (NOT is_shared AND share_token IS NULL)",
            name="ck_notes_share_token",
        ),
        Index("ix_notes_user_updated", "user_id", "updated_at"),
    )

    def __repr__(self) -> str:
        """String representation of Note."""
        return f"<Note(id={self.id}, title={self.title[:30] if self.title else ''})>"
