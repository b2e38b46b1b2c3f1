"""User SQLAlchemy model for authentication and note ownership."""

import uuid
from datetime import datetime

from sqlalchemy import Column, DateTime, String, Uuid

from ..database import Base


class User(Base):
    """
    User model representing note owners.

    Attributes:
        id: Unique identifier (UUID)
        email: User's email address (unique, stored lower-cased)
        password_hash: bcrypt hash of the password
        display_name: User's display name
        created_at: Timestamp when user was created
        updated_at: Timestamp when user was last updated
    """

    __tablename__ = "Users"
    __allow_unmapped__ = True

    # Primary key - UUID
    id = Column(
        Uuid(as_uuid=True),
        primary_key=True,
        default=uuid.uuid4,
        nullable=False,
    )

    # Authentication fields
    email = Column(
        String(255),
        unique=True,
        nullable=False,
        index=True,
    )
    password_hash = Column(
        String(255),
        nullable=False,
    )

    # Profile fields
    display_name = Column(
        String(100),
        nullable=True,
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

    def __repr__(self) -> str:
        """String representation of User."""
        return f"<User(id={self.id}, email={self.email})>"
