from __future__ import annotations

from abc import ABC, abstractmethod


class SettingsStorePort(ABC):
    @abstractmethod
    def get_setting(self, key: str) -> str | None:
        """Stored value for `key`, or None when unset."""
        raise NotImplementedError

    @abstractmethod
    def set_setting(self, key: str, value: str, description: str | None = None) -> None:
        raise NotImplementedError
