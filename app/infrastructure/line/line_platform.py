from __future__ import annotations

from app.application.ports.message_platform import MessagePlatformPort
from app.infrastructure.line.line_client import LineClient


class LinePlatform(MessagePlatformPort):
    def __init__(self, client: LineClient) -> None:
        self._client = client

    def reply_text(self, reply_token: str, text: str) -> None:
        self._client.reply_text(reply_token=reply_token, text=text)
