"""create_notes_schema

Revision ID: 3f1c9a7d2b40
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '3f1c9a7d2b40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade database schema."""
    op.create_table('Users',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('email', sa.String(length=255), nullable=False),
    sa.Column('password_hash', sa.String(length=255), nullable=False),
    sa.Column('display_name', sa.String(length=100), nullable=True),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_Users_email'), 'Users', ['email'], unique=True)

    op.create_table('Folders',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.Column('name', sa.String(length=100), nullable=False),
    sa.Column('icon', sa.String(length=16), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['user_id'], ['Users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_Folders_user_id'), 'Folders', ['user_id'], unique=False)
    op.create_index('ix_folders_user_name', 'Folders', ['user_id', 'name'], unique=False)

    # Notes: trashed_at tracks is_trashed, share_token tracks is_shared
    op.create_table('Notes',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.Column('folder_id', sa.Uuid(), nullable=True),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('is_pinned', sa.Boolean(), nullable=False),
    sa.Column('is_locked', sa.Boolean(), nullable=False),
    sa.Column('is_trashed', sa.Boolean(), nullable=False),
    sa.Column('trashed_at', sa.DateTime(), nullable=True),
    sa.Column('tags', sa.JSON(), nullable=False),
    sa.Column('is_shared', sa.Boolean(), nullable=False),
    sa.Column('share_token', sa.String(length=64), nullable=True),
    sa.Column('next_version_number', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.Column('updated_at', sa.DateTime(), nullable=False),
    sa.CheckConstraint(
        '(is_trashed AND trashed_at IS NOT NULL) OR (NOT is_trashed AND trashed_at IS NULL)',
        name='ck_notes_trashed_at',
    ),
    sa.CheckConstraint(
        '(is_shared AND share_token IS NOT NULL) OR (NOT is_shared AND share_token IS NULL)',
        name='ck_notes_share_token',
    ),
    sa.ForeignKeyConstraint(['user_id'], ['Users.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['folder_id'], ['Folders.id'], ondelete='SET NULL'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('share_token')
    )
    op.create_index(op.f('ix_Notes_user_id'), 'Notes', ['user_id'], unique=False)
    op.create_index(op.f('ix_Notes_folder_id'), 'Notes', ['folder_id'], unique=False)
    op.create_index(op.f('ix_Notes_is_trashed'), 'Notes', ['is_trashed'], unique=False)
    op.create_index('ix_notes_user_updated', 'Notes', ['user_id', 'updated_at'], unique=False)

    op.create_table('NoteVersions',
    sa.Column('id', sa.Uuid(), nullable=False),
    sa.Column('note_id', sa.Uuid(), nullable=False),
    sa.Column('user_id', sa.Uuid(), nullable=False),
    sa.Column('title', sa.String(length=255), nullable=False),
    sa.Column('content', sa.Text(), nullable=False),
    sa.Column('version_number', sa.Integer(), nullable=False),
    sa.Column('created_at', sa.DateTime(), nullable=False),
    sa.ForeignKeyConstraint(['note_id'], ['Notes.id'], ondelete='CASCADE'),
    sa.ForeignKeyConstraint(['user_id'], ['Users.id'], ondelete='CASCADE'),
    sa.PrimaryKeyConstraint('id'),
    sa.UniqueConstraint('note_id', 'version_number', name='uq_note_versions_note_number')
    )
    op.create_index(op.f('ix_NoteVersions_note_id'), 'NoteVersions', ['note_id'], unique=False)


def downgrade() -> None:
    """Downgrade database schema."""
    op.drop_index(op.f('ix_NoteVersions_note_id'), table_name='NoteVersions')
    op.drop_table('NoteVersions')
    op.drop_index('ix_notes_user_updated', table_name='Notes')
    op.drop_index(op.f('ix_Notes_is_trashed'), table_name='Notes')
    op.drop_index(op.f('ix_Notes_folder_id'), table_name='Notes')
    op.drop_index(op.f('ix_Notes_user_id'), table_name='Notes')
    op.drop_table('Notes')
    op.drop_index('ix_folders_user_name', table_name='Folders')
    op.drop_index(op.f('ix_Folders_user_id'), table_name='Folders')
    op.drop_table('Folders')
    op.drop_index(op.f('ix_Users_email'), table_name='Users')
    op.drop_table('Users')
