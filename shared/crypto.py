"""
Cryptographic helpers: password hashing and one-way code hashing.

Uses argon2 for account passwords (via argon2-cffi) and SHA-256 for OTP codes.
"""

from __future__ import annotations

import hashlib

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError

_password_hasher = PasswordHasher()


def hash_password(plain_password: str) -> str:
    """Hash *plain_password* with argon2id.

    Returns:
        Argon2 hash string (includes algorithm parameters and salt).
    """
    return _password_hasher.hash(plain_password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Verify *plain_password* against an argon2 *password_hash*.

    Returns:
        ``True`` if the password matches, ``False`` for a wrong password or a
        malformed hash.
    """
    try:
        return _password_hasher.verify(password_hash, plain_password)
    except (VerificationError, InvalidHashError):
        return False


def hash_code(code: str) -> str:
    """Return the hex-encoded SHA-256 digest of *code*.

    OTP codes are hashed before they are stored so the plaintext is never
    persisted. The digest is deterministic, which lets verification look a
    code up by recomputing its hash.

    Returns:
        64-character lowercase hex string.
    """
    return hashlib.sha256(code.encode("utf-8")).hexdigest()
