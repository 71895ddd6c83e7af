from marshmallow import EXCLUDE, Schema, fields, validates_schema, ValidationError

USER_UPGRADED = "user.upgraded"


class WebhookDataSchema(Schema):
    class Meta:
        unknown = EXCLUDE

    user_id = fields.UUID(required=True)


class WebhookEventSchema(Schema):
    """Payload posted by the payment provider; extra fields are ignored."""

    class Meta:
        unknown = EXCLUDE

    event = fields.String(required=True)
    data = fields.Nested(WebhookDataSchema, required=False)

    @validates_schema
    def _require_data_for_upgrade(self, data, **kwargs):
        if data.get("event") == USER_UPGRADED and not data.get("data"):
            raise ValidationError("data.user_id is required for user.upgraded", "data")
