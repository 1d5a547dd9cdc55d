from __future__ import annotations

from datetime import datetime
from zoneinfo import ZoneInfo

import pytest

from app.application.exceptions import LLMUpstreamError
from app.application.ports.llm import LLMPort
from app.application.use_cases.build_system_prompt import BuildSystemPromptUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.extract_booking import ExtractBookingUseCase
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.locate_store import LocateStoreUseCase
from app.application.use_cases.send_reply import SendReplyUseCase
from app.domain.entities.chat_turn import ChatTurn
from app.domain.entities.service_catalog import ServiceCatalogEntry
from app.domain.entities.store import StoreRecord
from app.infrastructure.knowledge.catalog_store import InMemoryCatalog
from app.infrastructure.line.mock_platform import MockLinePlatform
from app.infrastructure.store.memory_store import (
    MemoryBookingRepository,
    MemoryConversationStore,
    MemorySettingsStore,
)

TAIPEI = ZoneInfo("Asia/Taipei")


class ScriptedLLM(LLMPort):
    def __init__(self, reply: str = "", error: Exception | None = None) -> None:
        self.reply = reply
        self.error = error
        self.calls: list[tuple[str, list[ChatTurn], str]] = []

    def complete(self, system_prompt: str, history: list[ChatTurn], message: str) -> str:
        self.calls.append((system_prompt, list(history), message))
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def stores() -> list[StoreRecord]:
    return [
        StoreRecord(id="s-north", name="北區店", address="北路1號", lat=25.05, lng=121.52),
        StoreRecord(id="s-central", name="中區店", address="中路2號", lat=24.15, lng=120.67),
        StoreRecord(id="s-south", name="南區店", address="南路3號", lat=22.63, lng=120.30),
        StoreRecord(id="s-closed", name="歇業店", address="舊路4號", lat=25.00, lng=121.50, is_active=False),
    ]


@pytest.fixture
def services() -> list[ServiceCatalogEntry]:
    return [
        ServiceCatalogEntry(
            id=1, name="基本洗車", pricing_mode="TIERED", price_small="500", price_medium="600", price_large="700"
        ),
        ServiceCatalogEntry(id=2, name="頂級鍍膜", pricing_mode="FLAT", price_flat="6000"),
        ServiceCatalogEntry(id=3, name="停售服務", pricing_mode="FLAT", price_flat="1", is_active=False),
    ]


@pytest.fixture
def catalog(services, stores) -> InMemoryCatalog:
    return InMemoryCatalog(services=services, stores=stores)


@pytest.fixture
def conversation_store() -> MemoryConversationStore:
    return MemoryConversationStore()


@pytest.fixture
def booking_repository() -> MemoryBookingRepository:
    return MemoryBookingRepository()


@pytest.fixture
def settings_store() -> MemorySettingsStore:
    return MemorySettingsStore()


@pytest.fixture
def platform() -> MockLinePlatform:
    return MockLinePlatform()


@pytest.fixture
def llm() -> ScriptedLLM:
    return ScriptedLLM(reply="您好！請問需要什麼服務？")


@pytest.fixture
def fixed_now():
    return lambda: datetime(2026, 10, 19, 14, 30, tzinfo=TAIPEI)


@pytest.fixture
def build_handler(catalog, conversation_store, booking_repository, settings_store, platform, fixed_now):
    def _build(llm: LLMPort, require_store: bool = True, history_limit: int = 6) -> HandleIncomingMessageUseCase:
        return HandleIncomingMessageUseCase(
            store=conversation_store,
            llm=llm,
            build_system_prompt=BuildSystemPromptUseCase(
                catalog=catalog,
                settings_store=settings_store,
                timezone=TAIPEI,
                setting_key="GEMINI_SYSTEM_PROMPT",
                now=fixed_now,
            ),
            extract_booking=ExtractBookingUseCase(catalog=catalog),
            create_booking=CreateBookingUseCase(repository=booking_repository, catalog=catalog),
            locate_store=LocateStoreUseCase(catalog=catalog),
            send_reply=SendReplyUseCase(platform=platform),
            timezone=TAIPEI,
            history_limit=history_limit,
            require_store=require_store,
        )

    return _build


@pytest.fixture
def failing_llm() -> ScriptedLLM:
    return ScriptedLLM(error=LLMUpstreamError("OpenAI API error: 503"))


@pytest.fixture
def make_llm():
    return ScriptedLLM
