from functools import lru_cache
import logging
from zoneinfo import ZoneInfo

from supabase import Client

from app.core.config import settings
from app.application.ports.booking_repository import BookingRepositoryPort
from app.application.ports.catalog import CatalogPort
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.llm import LLMPort
from app.application.ports.message_platform import MessagePlatformPort
from app.application.ports.settings_store import SettingsStorePort
from app.application.use_cases.build_system_prompt import BuildSystemPromptUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.extract_booking import ExtractBookingUseCase
from app.application.use_cases.handle_incoming_message import HandleIncomingMessageUseCase
from app.application.use_cases.locate_store import LocateStoreUseCase
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.application.use_cases.manage_settings import SystemPromptSettingsUseCase
from app.application.use_cases.send_reply import SendReplyUseCase
from app.infrastructure.knowledge.catalog_store import InMemoryCatalog
from app.infrastructure.line.line_client import LineClient
from app.infrastructure.line.line_platform import LinePlatform
from app.infrastructure.line.mock_platform import MockLinePlatform
from app.infrastructure.llm.mock_llm import MockLLM
from app.infrastructure.llm.openai_llm import OpenAILLM
from app.infrastructure.store.memory_store import (
    MemoryBookingRepository,
    MemoryConversationStore,
    MemorySettingsStore,
)
from app.infrastructure.store.supabase_store import (
    SupabaseBookingRepository,
    SupabaseCatalog,
    SupabaseConversationStore,
    SupabaseSettingsStore,
    create_supabase_client,
)


logger = logging.getLogger(__name__)


@lru_cache
def get_supabase_client() -> Client | None:
    if settings.SUPABASE_URL and settings.SUPABASE_SERVICE_ROLE_KEY:
        return create_supabase_client(settings.SUPABASE_URL, settings.SUPABASE_SERVICE_ROLE_KEY)
    logger.info("Supabase credentials missing; using in-memory stores")
    return None


@lru_cache
def get_llm() -> LLMPort:
    if settings.OPENAI_API_KEY and settings.OPENAI_API_KEY.strip():
        return OpenAILLM()
    return MockLLM()


@lru_cache
def get_conversation_store() -> ConversationStorePort:
    client = get_supabase_client()
    if client is not None:
        return SupabaseConversationStore(client)
    return MemoryConversationStore()


@lru_cache
def get_catalog() -> CatalogPort:
    client = get_supabase_client()
    if client is not None:
        return SupabaseCatalog(client)
    return InMemoryCatalog()


@lru_cache
def get_settings_store() -> SettingsStorePort:
    client = get_supabase_client()
    if client is not None:
        return SupabaseSettingsStore(client)
    return MemorySettingsStore()


@lru_cache
def get_booking_repository() -> BookingRepositoryPort:
    client = get_supabase_client()
    if client is not None:
        return SupabaseBookingRepository(client)
    return MemoryBookingRepository()


@lru_cache
def get_line_platform() -> MessagePlatformPort:
    if not settings.LINE_CHANNEL_ACCESS_TOKEN:
        if settings.ENV.lower() in {"dev", "local"}:
            logger.info("Using MockLinePlatform (token missing, ENV=dev/local)")
            return MockLinePlatform()
        raise ValueError("LINE_CHANNEL_ACCESS_TOKEN is required to send LINE replies.")

    logger.info("Using real LinePlatform")
    client = LineClient(
        access_token=settings.LINE_CHANNEL_ACCESS_TOKEN,
        reply_endpoint=settings.LINE_REPLY_ENDPOINT,
        timeout=settings.LINE_REPLY_TIMEOUT_SECONDS,
    )
    return LinePlatform(client=client)


def get_timezone() -> ZoneInfo:
    return ZoneInfo(settings.BUSINESS_TIMEZONE)


def get_create_booking_use_case() -> CreateBookingUseCase:
    return CreateBookingUseCase(repository=get_booking_repository(), catalog=get_catalog())


def get_handle_incoming_message_use_case() -> HandleIncomingMessageUseCase:
    catalog = get_catalog()
    return HandleIncomingMessageUseCase(
        store=get_conversation_store(),
        llm=get_llm(),
        build_system_prompt=BuildSystemPromptUseCase(
            catalog=catalog,
            settings_store=get_settings_store(),
            timezone=get_timezone(),
            setting_key=settings.SYSTEM_PROMPT_SETTING_KEY,
        ),
        extract_booking=ExtractBookingUseCase(catalog=catalog),
        create_booking=get_create_booking_use_case(),
        locate_store=LocateStoreUseCase(catalog=catalog),
        send_reply=SendReplyUseCase(
            platform=get_line_platform(),
            auto_reply_enabled=settings.AUTO_REPLY_ENABLED,
        ),
        timezone=get_timezone(),
        history_limit=settings.HISTORY_LIMIT,
        require_store=settings.BOOKING_REQUIRE_STORE,
    )


def get_manage_bookings_use_case() -> ManageBookingsUseCase:
    return ManageBookingsUseCase(
        repository=get_booking_repository(),
        catalog=get_catalog(),
        create_booking=get_create_booking_use_case(),
    )


def get_system_prompt_settings_use_case() -> SystemPromptSettingsUseCase:
    return SystemPromptSettingsUseCase(
        settings_store=get_settings_store(),
        setting_key=settings.SYSTEM_PROMPT_SETTING_KEY,
    )
