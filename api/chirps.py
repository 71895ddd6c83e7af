from __future__ import annotations

import uuid

from flask import Blueprint, request, jsonify, g, abort, current_app

from models import storage
from models.chirp import CHIRP_MAX_LENGTH, Chirp
from models.schemas.chirp import ChirpCreateSchema, ChirpOutSchema
from utils.decorators import jwt_required, require_owner
from utils.profanity import clean_profanity

bp = Blueprint("chirps", __name__)

chirp_create_schema = ChirpCreateSchema()
chirp_out_schema = ChirpOutSchema()
chirps_out_schema = ChirpOutSchema(many=True)


def parse_uuid(value: str, what: str) -> uuid.UUID:
    try:
        return uuid.UUID(value)
    except ValueError:
        abort(400, description=f"Invalid {what}")


@bp.post("/chirps")
@jwt_required()
def create_chirp():
    """
    Post a chirp as the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        required: true
        schema:
          type: object
          properties:
            body: { type: string, description: at most 140 UTF-8 bytes }
    responses:
      201:
        description: Created
      400:
        description: Chirp is too long, or the body is not a JSON object
      401:
        description: Unauthorized
    """
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        abort(400, description="Couldn't decode parameters")
    data = chirp_create_schema.load(payload)
    if len(data["body"].encode("utf-8", "surrogatepass")) > CHIRP_MAX_LENGTH:
        abort(400, description="Chirp is too long")

    chirp = Chirp(
        body=clean_profanity(data["body"], current_app.config["PROFANE_WORDS"]),
        user_id=str(g.current_user_id),
    )
    storage.new(chirp)
    storage.save()

    return jsonify(chirp_out_schema.dump(chirp)), 201


@bp.get("/chirps")
def list_chirps():
    """
    List chirps
    ---
    tags:
      - Chirps
    parameters:
      - in: query
        name: author_id
        type: string
        required: false
      - in: query
        name: sort
        type: string
        enum: [asc, desc]
        default: asc
    responses:
      200: { description: OK }
    """
    query = storage.get_session().query(Chirp)

    author_id = request.args.get("author_id")
    if author_id:
        query = query.filter(Chirp.user_id == str(parse_uuid(author_id, "author_id")))

    sort = request.args.get("sort", "asc").lower()
    if sort not in ("asc", "desc"):
        abort(400, description="sort must be 'asc' or 'desc'")
    order = Chirp.created_at.desc() if sort == "desc" else Chirp.created_at.asc()

    rows = query.order_by(order).all()
    return jsonify(chirps_out_schema.dump(rows)), 200


@bp.get("/chirps/<chirp_id>")
def get_chirp(chirp_id):
    """
    Fetch one chirp
    ---
    tags:
      - Chirps
    parameters:
      - in: path
        name: chirp_id
        type: string
        required: true
    responses:
      200: { description: OK }
      400: { description: Invalid chirp ID }
      404: { description: Chirp not found }
    """
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp ID"))
    if chirp is None:
        abort(404, description="Chirp not found")
    return jsonify(chirp_out_schema.dump(chirp)), 200


@bp.delete("/chirps/<chirp_id>")
@jwt_required()
def delete_chirp(chirp_id):
    """
    Delete a chirp owned by the authenticated user
    ---
    tags:
      - Chirps
    security:
      - Bearer: []
    responses:
      204: { description: Deleted }
      401: { description: Unauthorized }
      403: { description: Not the author }
      404: { description: Chirp not found }
    """
    chirp = storage.get(Chirp, parse_uuid(chirp_id, "chirp ID"))
    require_owner(chirp, g.current_user_id)

    chirp.delete()
    storage.save()
    return "", 204
