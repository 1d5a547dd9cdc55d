from abc import ABC, abstractmethod


class MessagePlatformPort(ABC):
    @abstractmethod
    def reply_text(self, reply_token: str, text: str) -> None:
        """Send one text message through a single-use reply token."""
        raise NotImplementedError
