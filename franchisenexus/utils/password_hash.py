"""
Password hashing utilities using bcrypt.

Usage:
    from franchisenexus.utils.password_hash import hash_password, verify_password

    hashed = hash_password("s3cret-passw0rd")
    is_valid = verify_password("s3cret-passw0rd", hashed)
"""
import bcrypt
import logging

logger = logging.getLogger(__name__)

# bcrypt only looks at the first 72 bytes; newer releases raise instead of truncating
BCRYPT_MAX_BYTES = 72


def _encode(plaintext: str) -> bytes:
    return plaintext.encode('utf-8')[:BCRYPT_MAX_BYTES]


def hash_password(plaintext: str) -> str:
    """
    Hash a password using bcrypt.

    Salt is generated per call and embedded in the result, so the same
    password hashes differently each time.

    Args:
        plaintext: Plain text password

    Returns:
        Bcrypt hash as string (UTF-8 decoded, 60 characters)

    Raises:
        ValueError: If the password is empty
    """
    if not plaintext:
        raise ValueError("Cannot hash empty password")

    hashed_bytes = bcrypt.hashpw(_encode(plaintext), bcrypt.gensalt())

    # Return as string for database storage
    return hashed_bytes.decode('utf-8')


def verify_password(plaintext: str, password_hash: str) -> bool:
    """
    Verify a password against a stored bcrypt hash.

    Never raises: malformed hashes and empty inputs verify as False.

    Args:
        plaintext: Plain text password to verify
        password_hash: Stored bcrypt hash to verify against

    Returns:
        True if password matches hash, False otherwise
    """
    if not plaintext or not password_hash:
        logger.warning("Attempted to verify with empty password or hash")
        return False

    try:
        return bcrypt.checkpw(_encode(plaintext), password_hash.encode('utf-8'))
    except ValueError as e:
        logger.error(f"Error verifying password hash: {e}")
        return False
