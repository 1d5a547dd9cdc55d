from __future__ import annotations

import logging
from typing import Any

from pydantic import BaseModel

from app.domain.entities.message import InboundEvent

logger = logging.getLogger(__name__)


class WebhookEventDTO(BaseModel):
    destination: str | None = None
    events: list[Any] | None = None

    def extract_events(self) -> list[InboundEvent]:
        out: list[InboundEvent] = []
        for raw in self.events or []:
            try:
                event = _to_inbound_event(raw)
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Malformed webhook event skipped", extra={"reason": str(e)})
                continue
            if event is not None:
                out.append(event)
        return out


def _to_inbound_event(raw: dict[str, Any]) -> InboundEvent | None:
    reply_token = raw.get("replyToken")
    if not reply_token:
        # follow/unfollow style events without a reply handle have nothing to answer
        return None

    user_id = (raw.get("source") or {}).get("userId")
    user_id = str(user_id) if user_id else None

    message = raw.get("message") or {}
    if raw.get("type") != "message":
        return InboundEvent(kind="other", reply_token=str(reply_token), user_id=user_id)

    message_type = message.get("type")
    if message_type == "text":
        return InboundEvent(
            kind="text",
            reply_token=str(reply_token),
            user_id=user_id,
            text=str(message.get("text") or ""),
        )
    if message_type == "location":
        return InboundEvent(
            kind="location",
            reply_token=str(reply_token),
            user_id=user_id,
            latitude=float(message["latitude"]),
            longitude=float(message["longitude"]),
            address=message.get("address"),
        )
    return InboundEvent(kind="other", reply_token=str(reply_token), user_id=user_id)
