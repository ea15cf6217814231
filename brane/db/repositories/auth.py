"""
Credential repository functions.

Implements password hashes, bearer secrets, and short-lived session tokens.
Each user has at most one hash, one live secret, and one live token; issuing
a new secret or token replaces the previous one in the same write. Secret and
token plaintext is returned once at creation and only digests are stored.
"""
from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Optional, Tuple

from sqlalchemy.orm import Session

from brane.db import models
from brane.db.database import transaction
from brane.db.upsert import upsert
from brane.utils import token_crypto

logger = logging.getLogger(__name__)

TOKEN_TTL = int(os.getenv("BRANE_TOKEN_TTL", str(60 * 60 * 24)))


def _now() -> int:
    return models.now_unix()


@dataclass(frozen=True)
class TokenStat:
    owner: Optional[str]
    valid: bool


# Passwords

def set_password(db: Session, user_id: str, password: str) -> None:
    """Store a fresh salted hash of ``password``, replacing any previous one."""
    encoded = token_crypto.hash_password(password)
    with transaction(db):
        upsert(db, models.Credential, {"id": user_id, "hash": encoded})
    logger.info(f"Password set for user {user_id}")


def check_password(db: Session, user_id: str, password: str) -> bool:
    """Return True if ``password`` matches the stored hash.

    A user without a stored hash and a wrong password both yield False.
    """
    encoded = db.query(models.Credential.hash).filter(models.Credential.id == user_id).scalar()
    return token_crypto.verify_password(password, encoded)


# Secrets

def create_secret(db: Session, user_id: str) -> str:
    """Issue a new secret for ``user_id`` and return its plaintext."""
    raw = token_crypto.generate_secret()
    with transaction(db):
        upsert(db, models.Secret, {"id": user_id, "secret": token_crypto.digest(raw)})
    logger.info(f"Secret issued for user {user_id}")
    return token_crypto.encode(raw)


def check_secret(db: Session, user_id: str, secret: str) -> bool:
    stored = db.query(models.Secret.secret).filter(models.Secret.id == user_id).scalar()
    if stored is None:
        return False
    raw = token_crypto.decode(secret)
    if raw is None:
        return False
    return token_crypto.digests_match(stored, token_crypto.digest(raw))


def revoke_secret_of(db: Session, user_id: str) -> bool:
    with transaction(db):
        deleted = db.query(models.Secret).filter(models.Secret.id == user_id).delete(synchronize_session=False)
    if deleted:
        logger.info(f"Secret revoked for user {user_id}")
    return bool(deleted)


# Tokens

def create_token(db: Session, user_id: str) -> Tuple[str, int]:
    """Issue a new session token for ``user_id``.

    Returns the plaintext token and the unix time it stops being valid.
    """
    raw = token_crypto.generate_token()
    created = _now()
    with transaction(db):
        upsert(db, models.Token, {"id": user_id, "token": token_crypto.digest(raw), "created": created})
    logger.info(f"Token issued for user {user_id}")
    return token_crypto.encode(raw), created + TOKEN_TTL


def read_token_stat(db: Session, token: str, now: Optional[int] = None) -> TokenStat:
    """Look up who owns ``token`` and whether it is still within its lifetime.

    Unknown and malformed tokens are reported as not valid.
    """
    raw = token_crypto.decode(token)
    if raw is None:
        return TokenStat(owner=None, valid=False)
    row = (
        db.query(models.Token.id, models.Token.created)
        .filter(models.Token.token == token_crypto.digest(raw))
        .first()
    )
    if row is None:
        return TokenStat(owner=None, valid=False)
    if now is None:
        now = _now()
    return TokenStat(owner=row.id, valid=row.created <= now <= row.created + TOKEN_TTL)


def revoke_token(db: Session, token: str) -> bool:
    raw = token_crypto.decode(token)
    if raw is None:
        return False
    with transaction(db):
        deleted = (
            db.query(models.Token)
            .filter(models.Token.token == token_crypto.digest(raw))
            .delete(synchronize_session=False)
        )
    return bool(deleted)


def revoke_token_of(db: Session, user_id: str) -> bool:
    with transaction(db):
        deleted = db.query(models.Token).filter(models.Token.id == user_id).delete(synchronize_session=False)
    if deleted:
        logger.info(f"Token revoked for user {user_id}")
    return bool(deleted)
