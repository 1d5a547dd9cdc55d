from abc import ABC, abstractmethod

from app.domain.entities.chat_turn import ChatTurn


class LLMPort(ABC):
    @abstractmethod
    def complete(self, system_prompt: str, history: list[ChatTurn], message: str) -> str:
        """
        Produce the assistant's next reply for a conversation.

        Requirements:
        - Messages are sent in order: system instruction, history turns
          (oldest first, as given), then `message` as the final user turn
        - Returns the raw completion text, which may contain a structured
          booking block; callers strip it before anything reaches the user

        Args:
            system_prompt: Full system instruction for this turn
            history: Chronological recent turns for the same user
            message: The new user message

        Returns:
            Raw completion text (never empty)

        Raises:
            LLMUpstreamError: provider/network failures or non-success status
            LLMContractError: success response without extractable text
        """
        raise NotImplementedError
