from flask import Blueprint, request, abort, current_app

from models import storage
from models.user import User
from models.schemas.webhook import USER_UPGRADED, WebhookEventSchema
from utils.decorators import webhook_key_required

bp = Blueprint("webhooks", __name__)

webhook_event_schema = WebhookEventSchema()


@bp.post("/polka/webhooks")
@webhook_key_required()
def polka_webhook():
    """
    Payment provider events; user.upgraded turns on Chirpy Red
    ---
    tags:
      - Webhooks
    security:
      - ApiKey: []
    consumes:
      - application/json
    parameters:
      - in: body
        name: body
        schema:
          type: object
          properties:
            event: { type: string, example: user.upgraded }
            data:
              type: object
              properties:
                user_id: { type: string, format: uuid }
    responses:
      204:
        description: Handled (or ignored)
      401:
        description: Bad API key
      404:
        description: User not found
    """
    payload = request.get_json(silent=True) or {}
    data = webhook_event_schema.load(payload)

    if data["event"] != USER_UPGRADED:
        return "", 204

    user = storage.get(User, data["data"]["user_id"])
    if user is None:
        abort(404, description="User not found")

    user.is_chirpy_red = True
    user.save()
    current_app.logger.info("user %s upgraded to Chirpy Red", user.id)
    return "", 204
