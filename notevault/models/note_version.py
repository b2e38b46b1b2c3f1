"""NoteVersion SQLAlchemy model for note version history."""

import uuid
from datetime import datetime

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    UniqueConstraint,
    Uuid,
)

from ..database import Base


class NoteVersion(Base):
    """
    NoteVersion model storing an immutable copy of a note's title and content.

    Versions are numbered 1, 2, 3, ... per note in creation order. Rows are
    never updated; they are removed only when the note is permanently deleted.

    Attributes:
        id: Unique identifier (UUID)
        note_id: FK to the parent note
        user_id: FK to the note's owner
        title: Snapshot of the note title
        content: Snapshot of the note content
        version_number: Per-note sequence number, starting at 1
        created_at: Timestamp when the snapshot was taken
    """

    __tablename__ = "NoteVersions"
    __allow_unmapped__ = True

    # Primary key
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

    # Parent note
    note_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("Notes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("Users.id", ondelete="CASCADE"),
        nullable=False,
    )

    # Snapshot content
    title = Column(
        String(255),
        nullable=False,
        default="",
    )

    content = Column(
        Text,
        nullable=False,
        default="",
    )

    version_number = Column(
        Integer,
        nullable=False,
    )

    created_at = Column(
        DateTime,
        default=datetime.utcnow,
        nullable=False,
    )

    __table_args__ = (
        UniqueConstraint("note_id", "version_number", name="uq_note_versions_note_number"),
    )

    def __repr__(self) -> str:
        """String representation of NoteVersion."""
        return f"<NoteVersion(id={self.id}, note_id={self.note_id}, number={self.version_number})>"
