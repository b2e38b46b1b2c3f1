"""Utility functions and helpers."""

from .security import generate_share_token, get_password_hash, verify_password

__all__ = [
    "generate_share_token",
    "get_password_hash",
    "verify_password",
]
