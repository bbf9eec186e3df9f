"""Keyed digests that keep user text and identifiers out of logs.

Journal entries, posts and chat messages are sensitive, and short ones
("I want to die") are trivially recovered from a plain hash. Every digest
here is an HMAC-SHA256 keyed with the process salt, so log records can be
correlated within a deployment but not reversed by dictionary lookup.

User ids and text are digested under separate labels, so a fingerprint can
never collide with a user id hash for the same string.
"""
import hashlib
import hmac
import logging
from typing import Optional

logger = logging.getLogger(__name__)

MIN_SALT_LENGTH = 32
FINGERPRINT_LENGTH = 16

# Logged instead of a fingerprint when no salt is configured yet
UNKEYED_FINGERPRINT = "unkeyed"

_USER_ID_LABEL = b"user_id:"
_TEXT_LABEL = b"text:"

_hash_key: Optional[bytes] = None


def configure_hash_salt(salt: str) -> None:
    """Install the process-wide key for user id hashes and text fingerprints.

    Called once at service startup, before any request is handled.

    Raises:
        ValueError: If salt is empty or shorter than MIN_SALT_LENGTH
    """
    global _hash_key
    if not salt or len(salt) < MIN_SALT_LENGTH:
        logger.critical(
            "HASH_SALT_REJECTED",
            extra={"salt_length": len(salt or ""), "min_length": MIN_SALT_LENGTH}
        )
        raise ValueError(f"Hash salt must be at least {MIN_SALT_LENGTH} characters")

    _hash_key = salt.encode()
    logger.info("HASH_SALT_CONFIGURED", extra={"salt_length": len(salt)})


def is_hash_salt_configured() -> bool:
    return _hash_key is not None


def _keyed_digest(label: bytes, value: str) -> str:
    return hmac.new(_hash_key, label + value.encode(), hashlib.sha256).hexdigest()


def hash_user_id(user_id: str) -> str:
    """Hash a user identifier for logs and notification payloads.

    Returns:
        64-char hex HMAC-SHA256 of the user id

    Raises:
        RuntimeError: If the salt has not been configured
    """
    if _hash_key is None:
        logger.critical(
            "USER_ID_HASH_FAILED",
            extra={"reason": "salt_not_configured", "action": "call configure_hash_salt()"}
        )
        raise RuntimeError("Hash salt not configured. Call configure_hash_salt() first.")

    return _keyed_digest(_USER_ID_LABEL, user_id)


def fingerprint_text(text: Optional[str]) -> str:
    """Short keyed fingerprint so repeated submissions can be correlated.

    Never raises: logging must not block analysis. Without a configured
    salt it returns UNKEYED_FINGERPRINT rather than an unkeyed hash.
    """
    if _hash_key is None:
        return UNKEYED_FINGERPRINT
    return _keyed_digest(_TEXT_LABEL, text or "")[:FINGERPRINT_LENGTH]
