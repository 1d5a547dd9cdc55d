from abc import ABC, abstractmethod

from app.domain.entities.chat_turn import ChatTurn


class ConversationStorePort(ABC):
    @abstractmethod
    def get_recent_messages(self, user_id: str, limit: int = 6) -> list[ChatTurn]:
        """
        Get recent turns for context.
        Returns at most `limit` most recent turns, oldest first.
        A user without history gets an empty list.
        """
        raise NotImplementedError

    @abstractmethod
    def append_message(self, user_id: str, role: str, text: str) -> None:
        """
        Append one turn to the user's history.
        Raises ConversationStoreError when the turn cannot be stored.
        """
        raise NotImplementedError
