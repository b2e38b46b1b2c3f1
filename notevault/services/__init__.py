"""Business logic services."""

from .auth_service import (
    authenticate_user,
    create_access_token,
    create_token_for_user,
    create_user,
    decode_access_token,
    get_current_user,
    get_user_by_email,
)
from .folder_service import (
    create_folder,
    delete_folder,
    list_folders,
    update_folder,
)
from .note_service import (
    build_preview,
    create_note,
    delete_note_permanently,
    get_owned_note,
    list_notes,
    restore_note,
    trash_note,
    update_note,
)
from .share_service import (
    disable_sharing,
    enable_sharing,
    resolve_shared_note,
    toggle_sharing,
)
from .version_service import (
    NoteLockRegistry,
    append_version,
    delete_versions_for_note,
    get_version,
    list_versions,
    note_locks,
    restore_version,
    save_snapshot,
)

__all__ = [
    # Auth service
    "authenticate_user",
    "create_access_token",
    "create_token_for_user",
    "create_user",
    "decode_access_token",
    "get_current_user",
    "get_user_by_email",
    # Folder service
    "create_folder",
    "delete_folder",
    "list_folders",
    "update_folder",
    # Note service
    "build_preview",
    "create_note",
    "delete_note_permanently",
    "get_owned_note",
    "list_notes",
    "restore_note",
    "trash_note",
    "update_note",
    # Share service
    "disable_sharing",
    "enable_sharing",
    "resolve_shared_note",
    "toggle_sharing",
    # Version service
    "NoteLockRegistry",
    "append_version",
    "delete_versions_for_note",
    "get_version",
    "list_versions",
    "note_locks",
    "restore_version",
    "save_snapshot",
]
