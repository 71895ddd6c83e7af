"""
Authentication blueprint:
- POST /api/login    -> access token (JWT, 1h) + refresh token (opaque, 60d)
- POST /api/refresh  -> new access token for a live refresh token
- POST /api/revoke   -> revoke a refresh token

Refresh tokens are not rotated: the same one keeps minting access tokens
until it is revoked or expires.
"""
from __future__ import annotations

from flask import Blueprint, request, jsonify, abort, current_app

from models import storage
from models.base_model import utcnow
from models.user import User
from models.schemas.user import UserLoginSchema, UserOutSchema

from utils.decorators import extract_bearer_token
from utils.errors import Unauthorized
from utils.security import (
    burn_dummy_verify,
    hash_password,
    issue_access_token,
    issue_refresh_token,
    password_needs_rehash,
    verify_password,
)

bp = Blueprint("auth", __name__)

user_login_schema = UserLoginSchema()
user_out_schema = UserOutSchema()

INVALID_CREDENTIALS = "Incorrect email or password"


def _make_access_token(user_id) -> str:
    return issue_access_token(
        user_id,
        current_app.config["JWT_SECRET"],
        current_app.config["ACCESS_TOKEN_EXPIRES"],
    )


@bp.post("/login")
def login():
    """
    Login: return the user with access and refresh tokens
    ---
    tags:
      - Auth
    consumes:
      - application/json
    parameters:
      -  in: body
         name: body
         schema:
           type: object
           properties:
             email: { type: string }
             password: { type: string }
    responses:
      200:
        description: OK (returns user, token and refresh_token)
      401:
        description: Incorrect email or password
    """
    payload = request.get_json(silent=True) or {}
    data = user_login_schema.load(payload)

    user: User | None = storage.get_user_by_email(data["email"])
    if user is None:
        burn_dummy_verify(data["password"])
        abort(401, description=INVALID_CREDENTIALS)
    if not verify_password(data["password"], user.hashed_password):
        abort(401, description=INVALID_CREDENTIALS)

    if password_needs_rehash(user.hashed_password):
        user.hashed_password = hash_password(data["password"])
        user.save()

    access_token = _make_access_token(user.id)
    refresh_token = issue_refresh_token()
    storage.create_refresh_token(
        refresh_token,
        user.id,
        utcnow() + current_app.config["REFRESH_TOKEN_EXPIRES"],
    )
    current_app.logger.info("user %s logged in", user.id)

    out = user_out_schema.dump(user)
    out["token"] = access_token
    out["refresh_token"] = refresh_token
    return jsonify(out), 200


@bp.post("/refresh")
def refresh():
    """
    Exchange a refresh token (Authorization: Bearer) for a new access token
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      200:
        description: OK (returns token)
      401:
        description: Unknown, revoked or expired refresh token
    """
    token = extract_bearer_token(request.headers)
    user = storage.get_user_from_refresh_token(token)
    if user is None:
        raise Unauthorized("refresh token unknown, revoked or expired")

    return jsonify({"token": _make_access_token(user.id)}), 200


@bp.post("/revoke")
def revoke():
    """
    Revoke a refresh token (Authorization: Bearer)
    ---
    tags:
      - Auth
    security:
      - Bearer: []
    responses:
      204:
        description: Revoked
      401:
        description: Missing or malformed Authorization header
    """
    token = extract_bearer_token(request.headers)
    if not storage.revoke_refresh_token(token):
        current_app.logger.info("revoke requested for an unknown refresh token")
    return "", 204
