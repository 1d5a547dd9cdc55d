from __future__ import annotations

from typing import Any

from openai import OpenAI

from app.application.exceptions import LLMContractError, LLMUpstreamError
from app.application.ports.llm import LLMPort
from app.core.config import settings
from app.domain.entities.chat_turn import ChatTurn


class OpenAILLM(LLMPort):
    """
    OpenAI-backed adapter implementing LLMPort.

    Works against any OpenAI-compatible chat completions endpoint
    (set OPENAI_BASE_URL for a gateway).

    Contract guarantees:
    - complete returns non-empty text
    - Raises:
        LLMUpstreamError: networking/provider failures, non-success status
        LLMContractError: success response without message content
    """

    def __init__(self, client: OpenAI | None = None) -> None:
        self.client = client or OpenAI(
            api_key=settings.OPENAI_API_KEY,
            base_url=settings.OPENAI_BASE_URL or None,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=1,
        )

    def complete(self, system_prompt: str, history: list[ChatTurn], message: str) -> str:
        return self._call_text(
            model=settings.OPENAI_MODEL_REPLY,
            messages=build_messages(system_prompt, history, message),
            temperature=settings.OPENAI_TEMPERATURE_REPLY,
            max_tokens=settings.OPENAI_MAX_TOKENS_REPLY,
        )

    def _call_text(self, model: str, messages: list[dict[str, str]], temperature: float, max_tokens: int) -> str:
        try:
            kwargs: dict[str, Any] = {
                "model": model,
                "messages": messages,
                "temperature": temperature,
                "max_tokens": max_tokens,
            }
            resp = self.client.chat.completions.create(**kwargs)
        except Exception as e:
            raise LLMUpstreamError(f"OpenAI API error: {e}") from e

        content = (resp.choices[0].message.content or "").strip() if resp.choices else ""
        if not content:
            raise LLMContractError("LLM returned empty response text.")

        return content


def build_messages(system_prompt: str, history: list[ChatTurn], message: str) -> list[dict[str, str]]:
    messages = [{"role": "system", "content": system_prompt}]
    for turn in history:
        role = "user" if turn.role == "user" else "assistant"
        messages.append({"role": role, "content": turn.content})
    messages.append({"role": "user", "content": message})
    return messages
