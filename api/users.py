from __future__ import annotations

from flask import Blueprint, request, jsonify, g, abort

from models import storage
from models.user import User
from models.schemas.user import UserCreateSchema, UserOutSchema, UserUpdateSchema
from utils.decorators import jwt_required
from utils.errors import Unauthorized
from utils.security import hash_password

bp = Blueprint("users", __name__)

user_create_schema = UserCreateSchema()
user_update_schema = UserUpdateSchema()
user_out_schema = UserOutSchema()


def _ensure_email_free(email: str, exclude_id: str | None = None):
    existing = storage.get_user_by_email(email)
    if existing and existing.id != exclude_id:
        abort(409, description="Email already registered")


@bp.post("/users")
def create_user():
    """
    Register a new user
    ---
    tags:
      - Users
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      201:
        description: Created
      409:
        description: Email already registered
      422:
        description: Validation error
    """
    payload = request.get_json(silent=True) or {}
    data = user_create_schema.load(payload)
    _ensure_email_free(data["email"])

    user = User(email=data["email"], hashed_password=hash_password(data["password"]))
    storage.new(user)
    storage.save()

    return jsonify(user_out_schema.dump(user)), 201


@bp.put("/users")
@jwt_required()
def update_user():
    """
    Change the authenticated user's email and password
    ---
    tags:
      - Users
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            email: { type: string }
            password: { type: string }
    responses:
      200:
        description: Updated user
      401:
        description: Unauthorized
      409:
        description: Email already registered
    """
    user = storage.get(User, g.current_user_id)
    if user is None:
        # valid token for an account that no longer exists
        raise Unauthorized("token subject has no account")

    payload = request.get_json(silent=True) or {}
    data = user_update_schema.load(payload)
    _ensure_email_free(data["email"], exclude_id=user.id)

    user.email = data["email"]
    user.hashed_password = hash_password(data["password"])
    user.save()

    return jsonify(user_out_schema.dump(user)), 200
