"""Personal notes REST API: notes, folders, version history and share links."""

__version__ = "1.0.0"
