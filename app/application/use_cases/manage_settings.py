from __future__ import annotations

from app.application.ports.settings_store import SettingsStorePort
from app.infrastructure.llm.prompts import DEFAULT_SYSTEM_PROMPT

SYSTEM_PROMPT_DESCRIPTION = "LINE Bot AI 助理的系統指令"


class SystemPromptSettingsUseCase:
    def __init__(self, settings_store: SettingsStorePort, setting_key: str) -> None:
        self._settings_store = settings_store
        self._setting_key = setting_key

    def get(self) -> tuple[str, bool]:
        """Returns (prompt, is_default)."""
        value = self._settings_store.get_setting(self._setting_key)
        if value:
            return value, False
        return DEFAULT_SYSTEM_PROMPT, True

    def set(self, value: str) -> None:
        value = (value or "").strip()
        if not value:
            raise ValueError("system prompt must not be empty")
        self._settings_store.set_setting(self._setting_key, value, description=SYSTEM_PROMPT_DESCRIPTION)
