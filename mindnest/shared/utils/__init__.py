"""Shared utilities for MindNest services."""
from .pii import (
    UNKEYED_FINGERPRINT,
    configure_hash_salt,
    fingerprint_text,
    hash_user_id,
    is_hash_salt_configured,
)

__all__ = [
    "UNKEYED_FINGERPRINT",
    "configure_hash_salt",
    "fingerprint_text",
    "hash_user_id",
    "is_hash_salt_configured",
]
