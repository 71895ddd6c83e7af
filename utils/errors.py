"""
Authentication / authorization error taxonomy.

The fine-grained classes exist for logging and tests. At the HTTP boundary
(api/errors.py) every Unauthorized subclass collapses into one generic 401.
"""
from __future__ import annotations


class AuthError(Exception):
    """Base class for every error raised by the auth core."""


class HashingError(AuthError):
    """Password hashing failed internally, or a stored hash is malformed."""


class Unauthorized(AuthError):
    """The request could not be authenticated."""


class Forbidden(AuthError):
    """Authenticated, but the caller does not own the resource."""


class NotFound(AuthError):
    """The resource does not exist."""


class TokenError(Unauthorized):
    pass


class TokenExpired(TokenError):
    pass


class TokenInvalid(TokenError):
    pass


class TokenMalformed(TokenError):
    pass


class HeaderError(Unauthorized):
    pass


class MissingHeader(HeaderError):
    pass


class MalformedHeader(HeaderError):
    pass


class EmptyToken(HeaderError):
    pass
