from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class ChatTurn:
    user_id: str
    role: str  # "user" | "assistant"
    content: str
    created_at: datetime | None = None
    sequence: int | None = None
