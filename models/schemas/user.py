from marshmallow import Schema, fields, pre_load

from models.base_model import JSON_TIME_FMT


def _norm_email(v):
    return v.strip().lower() if isinstance(v, str) else v


class _EmailNormalizingSchema(Schema):
    @pre_load
    def normalize(self, data, **kwargs):
        if isinstance(data, dict) and "email" in data:
            data["email"] = _norm_email(data["email"])
        return data


class UserCreateSchema(_EmailNormalizingSchema):
    email = fields.Email(required=True)
    # no strength policy: any string, including empty, is hashed as-is
    password = fields.String(required=True, load_only=True)


class UserLoginSchema(_EmailNormalizingSchema):
    email = fields.String(required=True)
    password = fields.String(required=True, load_only=True)


class UserUpdateSchema(_EmailNormalizingSchema):
    email = fields.Email(required=True)
    password = fields.String(required=True, load_only=True)


class UserOutSchema(Schema):
    id = fields.String()
    created_at = fields.DateTime(format=JSON_TIME_FMT)
    updated_at = fields.DateTime(format=JSON_TIME_FMT)
    email = fields.String()
    is_chirpy_red = fields.Boolean()

