from __future__ import annotations

import logging

from app.application.ports.message_platform import MessagePlatformPort


class MockLinePlatform(MessagePlatformPort):
    def __init__(self) -> None:
        self._logger = logging.getLogger(__name__)
        self.sent: list[tuple[str, str]] = []

    def reply_text(self, reply_token: str, text: str) -> None:
        self.sent.append((reply_token, text))
        self._logger.info("Mock reply to LINE", extra={"reply_text": text})
