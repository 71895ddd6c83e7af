from marshmallow import Schema, fields

from models.base_model import JSON_TIME_FMT


class ChirpCreateSchema(Schema):
    # the length limit counts UTF-8 bytes and is enforced in the view
    body = fields.String(required=True)


class ChirpOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime(format=JSON_TIME_FMT)
    updated_at = fields.DateTime(format=JSON_TIME_FMT)
    body = fields.String()
    user_id = fields.String()
