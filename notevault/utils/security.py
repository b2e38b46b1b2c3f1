"""Security utilities for password hashing and share token generation."""

import secrets

import bcrypt


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain text password against a hashed password.

    Args:
        plain_password: The plain text password to verify
        hashed_password: The hashed password to compare against

    Returns:
        True if the password matches, False otherwise
    """
    try:
        return bcrypt.checkpw(
            plain_password.encode("utf-8"),
            hashed_password.encode("utf-8"),
        )
    except ValueError:
        # Malformed hash or over-long password
        return False


def get_password_hash(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Args:
        password: The plain text password to hash

    Returns:
        The hashed password string
    """
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def generate_share_token(nbytes: int = 16) -> str:
    """
    Generate an unguessable public share token.

    Args:
        nbytes: Bytes of randomness (16 bytes = 128 bits)

    Returns:
        Hex-encoded token, 2 * nbytes characters long
    """
    return secrets.token_hex(nbytes)
