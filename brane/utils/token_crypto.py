"""
Credential generation, encoding, and hashing utilities.

Responsibilities:
- Generate high-entropy bearer secrets and session tokens as raw bytes
- Encode/decode them for callers using URL-safe base64
- Hash passwords using Argon2id and verify them without leaking why a check failed
- Derive the digest under which a bearer value is persisted
"""
from __future__ import annotations

import base64
import binascii
import hashlib
import hmac
import os
import secrets
from typing import Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError
from argon2.low_level import Type

TOKEN_LENGTH = int(os.getenv("BRANE_TOKEN_LENGTH", "24"))
SECRET_LENGTH = int(os.getenv("BRANE_SECRET_LENGTH", "128"))

_hasher = PasswordHasher(
    time_cost=int(os.getenv("BRANE_ARGON2_TIME_COST", "2")),
    memory_cost=int(os.getenv("BRANE_ARGON2_MEMORY_COST", "102400")),
    parallelism=int(os.getenv("BRANE_ARGON2_PARALLELISM", "8")),
    hash_len=32,
    type=Type.ID,
)

# Verified against when no hash is stored so both failure paths cost the same.
_DUMMY_HASH = _hasher.hash("brane-dummy-password")


def random_bytes(size: int) -> bytes:
    return secrets.token_bytes(size)


def encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).decode("ascii")


def decode(value: str) -> Optional[bytes]:
    """Decode a URL-safe base64 string, returning None if it is malformed."""
    if not isinstance(value, str) or not value:
        return None
    try:
        return base64.b64decode(value.encode("ascii"), altchars=b"-_", validate=True)
    except (binascii.Error, ValueError, UnicodeEncodeError):
        return None


def digest(raw: bytes) -> str:
    """Return the hex SHA-256 digest a bearer value is stored under."""
    return hashlib.sha256(raw).hexdigest()


def digests_match(left: str, right: str) -> bool:
    return hmac.compare_digest(left.encode("ascii"), right.encode("ascii"))


def generate_secret() -> bytes:
    return random_bytes(SECRET_LENGTH)


def generate_token() -> bytes:
    return random_bytes(TOKEN_LENGTH)


def hash_password(password: str) -> str:
    """Hash a password with a fresh salt using Argon2id."""
    return _hasher.hash(password)


def verify_password(password: str, encoded_hash: Optional[str]) -> bool:
    """Return True only if ``password`` matches ``encoded_hash``.

    A missing hash is verified against a dummy hash and reported as a plain
    mismatch, so callers cannot tell an unknown user from a wrong password.
    """
    target = encoded_hash or _DUMMY_HASH
    try:
        matched = _hasher.verify(target, password)
    except (VerificationError, InvalidHashError):
        return False
    return matched and encoded_hash is not None
