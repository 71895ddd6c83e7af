"""
security helpers:
- Argon2id password hashing via argon2-cffi
- Access token (JWT, HS256) creation/validation via PyJWT
- Opaque refresh token generation
"""
from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta, timezone
from typing import Union

import jwt
from jwt.exceptions import InvalidSubjectError
from argon2 import PasswordHasher
from argon2 import exceptions as argon2_exc

from utils.errors import (
    HashingError,
    TokenExpired,
    TokenInvalid,
    TokenMalformed,
)

logger = logging.getLogger(__name__)

ACCESS_TOKEN_ISSUER = "chirpy-access"
JWT_ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 32

SigningKey = Union[str, bytes]

# argon2-cffi defaults: Argon2id, time_cost=3, memory_cost=64 MiB,
# parallelism=4, 16 byte salt, 32 byte digest. All of them are encoded
# in the hash string itself.
ph = PasswordHasher()

# Verified against when the login email is unknown so both failure paths
# cost the same.
_DUMMY_HASH = ph.hash(b"chirpy-timing-equalizer")


def _encode(password: str) -> bytes:
    # JSON can carry lone surrogates; they must hash, not crash
    return password.encode("utf-8", "surrogatepass")


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2id
    """
    try:
        return ph.hash(_encode(password))
    except argon2_exc.HashingError as exc:
        raise HashingError("password hashing failed") from exc


def verify_password(password: str, password_hash: str) -> bool:
    """Verify a plaintext password against an encoded Argon2 hash.

    A plain mismatch returns False; a hash that cannot be decoded raises
    HashingError.
    """
    try:
        return ph.verify(password_hash, _encode(password))
    except argon2_exc.VerifyMismatchError:
        return False
    except (argon2_exc.InvalidHashError, argon2_exc.VerificationError) as exc:
        raise HashingError("stored password hash is malformed") from exc


def password_needs_rehash(password_hash: str) -> bool:
    try:
        return ph.check_needs_rehash(password_hash)
    except argon2_exc.InvalidHashError as exc:
        raise HashingError("stored password hash is malformed") from exc


def burn_dummy_verify(password: str) -> None:
    """Spend one verification on a throwaway hash (unknown user on login)."""
    verify_password(password, _DUMMY_HASH)


def _now() -> datetime:
    return datetime.now(timezone.utc)


def issue_access_token(subject: uuid.UUID, signing_key: SigningKey, ttl: timedelta) -> str:
    """Sign a short-lived access token for ``subject``.

    Claims are iss/sub/exp/iat with whole-second NumericDate values.
    """
    issued_at = int(_now().timestamp())
    expires_at = issued_at + int(ttl.total_seconds())
    payload = {
        "iss": ACCESS_TOKEN_ISSUER,
        "sub": str(subject),
        "exp": expires_at,
        "iat": issued_at,
    }
    return jwt.encode(payload, signing_key, algorithm=JWT_ALGORITHM)


def validate_access_token(token: str, signing_key: SigningKey, leeway: int = 0) -> uuid.UUID:
    """
    Verify signature, expiry and issuer of an access token and return its subject.

    Raises TokenExpired, TokenInvalid or TokenMalformed.
    """
    try:
        decoded = jwt.decode(
            token,
            signing_key,
            algorithms=[JWT_ALGORITHM],
            issuer=ACCESS_TOKEN_ISSUER,
            leeway=leeway,
            options={"require": ["exp", "sub"]},
        )
    except jwt.ExpiredSignatureError as exc:
        raise TokenExpired("token expired") from exc
    except jwt.MissingRequiredClaimError as exc:
        if exc.claim == "sub":
            raise TokenMalformed("token has no subject") from exc
        raise TokenInvalid(f"invalid token: {exc}") from exc
    except InvalidSubjectError as exc:
        raise TokenMalformed("token subject is not a string") from exc
    except jwt.InvalidTokenError as exc:
        raise TokenInvalid(f"invalid token: {exc}") from exc

    try:
        return uuid.UUID(decoded["sub"])
    except (TypeError, ValueError) as exc:
        raise TokenMalformed("token subject is not a user id") from exc


def issue_refresh_token() -> str:
    """Generate a 256-bit random refresh token, hex encoded (64 chars).
    """
    return secrets.token_hex(REFRESH_TOKEN_BYTES)
