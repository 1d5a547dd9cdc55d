from __future__ import annotations

from app.application.ports.llm import LLMPort
from app.domain.entities.chat_turn import ChatTurn


class MockLLM(LLMPort):
    def complete(self, system_prompt: str, history: list[ChatTurn], message: str) -> str:
        normalized = message.lower()
        if any(word in normalized for word in ("價", "price", "多少")):
            return "我們的服務價格請參考目前的服務項目，請問您想了解哪一項呢？"
        if any(word in normalized for word in ("預約", "book")):
            return "好的，請提供您的姓名、電話、想要的服務、時間以及門市名稱。"
        return "您好！我是洗車預約小幫手，請問有什麼可以幫您？"
