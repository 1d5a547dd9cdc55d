from __future__ import annotations

import json
import logging

from fastapi import APIRouter, BackgroundTasks, Request, Response
from fastapi.responses import PlainTextResponse
from pydantic import ValidationError

from app.application.dto.webhook_event import WebhookEventDTO
from app.core.config import settings
from app.infrastructure.line.webhook_verify import verify_post_signature
from app.wiring import dependencies


router = APIRouter()
logger = logging.getLogger(__name__)


@router.get("/webhooks/line")
def webhook_health() -> PlainTextResponse:
    return PlainTextResponse("LINE Bot is Active")


@router.post("/webhooks/line")
async def line_webhook(
    request: Request,
    background_tasks: BackgroundTasks,
) -> Response:
    body = await request.body()
    signature = request.headers.get("X-Line-Signature")
    if not verify_post_signature(body, signature, settings.LINE_CHANNEL_SECRET):
        logger.warning("Webhook rejected: invalid signature", extra={"has_signature": bool(signature)})
        return PlainTextResponse("Unauthorized", status_code=401)

    try:
        payload = json.loads(body.decode("utf-8")) if body else {}
        event = WebhookEventDTO.model_validate(payload)
    except (UnicodeDecodeError, json.JSONDecodeError, ValidationError) as e:
        logger.exception("Failed to parse webhook body", extra={"error": str(e)})
        return PlainTextResponse("Error: unparseable body", status_code=500)

    try:
        use_case = dependencies.get_handle_incoming_message_use_case()
    except Exception as e:
        logger.exception("Failed to initialize use case", extra={"error": str(e)})
        return Response(status_code=500)

    events = event.extract_events()
    logger.info("Webhook received", extra={"event_count": len(events)})

    # runs after the response is sent; the reply token stays valid only briefly
    for inbound in events:
        background_tasks.add_task(use_case.handle, inbound)

    return PlainTextResponse("OK")
