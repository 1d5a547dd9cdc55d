from __future__ import annotations

import logging

from app.application.ports.message_platform import MessagePlatformPort


class SendReplyUseCase:
    def __init__(self, platform: MessagePlatformPort, auto_reply_enabled: bool = True) -> None:
        self._platform = platform
        self._auto_reply_enabled = auto_reply_enabled
        self._logger = logging.getLogger(__name__)

    def execute(self, reply_token: str, text: str) -> bool:
        """Send a reply. Returns True if actually sent, False if skipped."""
        if not text:
            return False
        if not self._auto_reply_enabled:
            self._logger.info("WOULD_SEND_REPLY", extra={"reply_text": text})
            self._logger.info("AUTO_REPLY_ENABLED=false -> skipping send")
            return False
        self._platform.reply_text(reply_token=reply_token, text=text)
        return True
