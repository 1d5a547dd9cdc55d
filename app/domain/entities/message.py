from dataclasses import dataclass


@dataclass(frozen=True)
class InboundEvent:
    kind: str  # "text", "location", "other"
    reply_token: str
    user_id: str | None = None
    text: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
