"""Folder SQLAlchemy model for grouping a user's notes."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, ForeignKey, Index, String, Uuid

from ..database import Base


class Folder(Base):
    """
    Folder model. Flat (no nesting); a note belongs to at most one folder.

    Attributes:
        id: Unique identifier (UUID)
        user_id: FK to the owning user
        name: Folder display name
        icon: Short icon string (emoji) shown next to the name
        created_at: Timestamp when folder was created
        updated_at: Timestamp when folder was last updated
    """

    __tablename__ = "Folders"
    __allow_unmapped__ = True

    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("Users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name = Column(
        String(100),
        nullable=False,
    )

    icon = Column(
        String(16),
        nullable=False,
        default="📁",
    )

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
        Index("ix_folders_user_name", "user_id", "name"),
    )

    def __repr__(self) -> str:
        """String representation of Folder."""
        return f"<Folder(id={self.id}, name={self.name})>"
