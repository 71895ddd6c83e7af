from __future__ import annotations
from functools import wraps
import hmac
from typing import Any, Mapping, Optional
import uuid

from flask import request, g, current_app

from utils.errors import (
    EmptyToken,
    Forbidden,
    MalformedHeader,
    MissingHeader,
    NotFound,
    Unauthorized,
)
from utils.security import validate_access_token

BEARER_PREFIX = "Bearer "
API_KEY_PREFIX = "ApiKey "


def _extract_credential(headers: Mapping[str, str], prefix: str) -> str:
    auth = headers.get("Authorization")
    if not auth:
        raise MissingHeader("authorization header not found")
    if not auth.startswith(prefix):
        raise MalformedHeader(f"authorization header must start with {prefix.strip()}")
    token = auth[len(prefix):].strip()
    if not token:
        raise EmptyToken("authorization credential is empty")
    return token


def extract_bearer_token(headers: Mapping[str, str]) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` header.

    Raises MissingHeader, MalformedHeader or EmptyToken. Pure, no I/O.
    """
    return _extract_credential(headers, BEARER_PREFIX)


def extract_api_key(headers: Mapping[str, str]) -> str:
    """Same contract as extract_bearer_token for ``Authorization: ApiKey <key>``."""
    return _extract_credential(headers, API_KEY_PREFIX)


def jwt_required():
    """
    Authenticate the request with an access token before the view runs.
    The resolved user id is stored on ``g.current_user_id``.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            token = extract_bearer_token(request.headers)
            g.current_user_id = validate_access_token(
                token,
                current_app.config["JWT_SECRET"],
                leeway=current_app.config.get("JWT_LEEWAY_SECONDS", 0),
            )
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def webhook_key_required():
    """
    Require ``Authorization: ApiKey <POLKA_KEY>`` when POLKA_KEY is configured.
    """
    def decorator(fn):
        @wraps(fn)
        def wrapper(*args, **kwargs):
            expected = current_app.config.get("POLKA_KEY")
            if expected:
                key = extract_api_key(request.headers)
                if not secrets_equal(key, expected):
                    raise Unauthorized("api key mismatch")
            return fn(*args, **kwargs)

        return wrapper

    return decorator


def secrets_equal(a: str, b: str) -> bool:
    return hmac.compare_digest(a.encode(), b.encode())


def require_owner(resource: Optional[Any], user_id: uuid.UUID, owner_attr: str = "user_id"):
    """
    Allow a mutation only when ``user_id`` owns ``resource``.

    Existence is checked first: a missing resource raises NotFound, someone
    else's resource raises Forbidden.
    """
    if resource is None:
        raise NotFound("resource not found")
    if str(getattr(resource, owner_attr)) != str(user_id):
        raise Forbidden("not the owner of this resource")
    return resource
