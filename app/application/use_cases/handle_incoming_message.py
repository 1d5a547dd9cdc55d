from __future__ import annotations

import logging
from zoneinfo import ZoneInfo

from app.application.exceptions import (
    CatalogUnavailableError,
    ConversationStoreError,
    LLMContractError,
    LLMUpstreamError,
    MessageSendError,
)
from app.application.ports.conversation_store import ConversationStorePort
from app.application.ports.llm import LLMPort
from app.application.use_cases.build_system_prompt import BuildSystemPromptUseCase
from app.application.use_cases.create_booking import CreateBookingUseCase
from app.application.use_cases.extract_booking import ExtractBookingUseCase, ExtractionResult
from app.application.use_cases.locate_store import LocateStoreUseCase, format_nearest_store_message
from app.application.use_cases.send_reply import SendReplyUseCase
from app.domain.entities.booking import BookingRecord
from app.domain.entities.chat_turn import ChatTurn
from app.domain.entities.message import InboundEvent
from app.domain.entities.store import StoreRecord

# Reply tokens LINE sends when the console verifies the webhook URL.
VERIFICATION_REPLY_TOKENS = frozenset({"0" * 32, "f" * 32})

BUSY_TEXT = "系統忙碌中，請稍後再試。"
NO_STORES_TEXT = "抱歉，目前沒有營業中的店家。"
BOOKING_FORMAT_ERROR_TEXT = "預約資料格式有誤，請人工確認。"
BOOKING_FAILED_TEXT = "抱歉，系統建立訂單時發生錯誤，請稍後再試。"
STORE_NOT_FOUND_TEXT = "找不到店家 \"{store_name}\"，請確認店名是否正確。"
STORE_REQUIRED_TEXT = "請問您要預約哪一家門市呢？請告訴我店名，或傳送您的位置讓我幫您找最近的門市。"


class HandleIncomingMessageUseCase:
    def __init__(
        self,
        store: ConversationStorePort,
        llm: LLMPort,
        build_system_prompt: BuildSystemPromptUseCase,
        extract_booking: ExtractBookingUseCase,
        create_booking: CreateBookingUseCase,
        locate_store: LocateStoreUseCase,
        send_reply: SendReplyUseCase,
        timezone: ZoneInfo,
        history_limit: int = 6,
        require_store: bool = True,
    ) -> None:
        self._store = store
        self._llm = llm
        self._build_system_prompt = build_system_prompt
        self._extract_booking = extract_booking
        self._create_booking = create_booking
        self._locate_store = locate_store
        self._send_reply = send_reply
        self._timezone = timezone
        self._history_limit = history_limit
        self._require_store = require_store
        self._logger = logging.getLogger(__name__)

    def handle(self, event: InboundEvent) -> None:
        """Process one event. Runs after the webhook has answered, so nothing may escape."""
        try:
            if event.reply_token in VERIFICATION_REPLY_TOKENS:
                self._logger.info("Verification event ignored")
                return

            if event.kind == "location":
                self._handle_location(event)
            elif event.kind == "text":
                self._handle_text(event)
            else:
                self._logger.debug("Unsupported event ignored", extra={"event_type": event.kind})
        except Exception as e:
            self._logger.exception(
                "Fatal error while handling event",
                extra={"event_type": event.kind, "user_id": event.user_id, "error": str(e)},
            )

    def _handle_location(self, event: InboundEvent) -> None:
        if event.latitude is None or event.longitude is None:
            self._logger.warning("Location event without coordinates", extra={"user_id": event.user_id})
            return

        try:
            result = self._locate_store.execute(event.latitude, event.longitude)
        except CatalogUnavailableError as e:
            self._logger.error("Store lookup failed", extra={"reason": str(e)})
            self._deliver(event.reply_token, BUSY_TEXT)
            return
        except Exception:
            self._logger.exception("Unexpected error during store lookup", extra={"user_id": event.user_id})
            self._deliver(event.reply_token, BUSY_TEXT)
            return

        if result is None:
            self._deliver(event.reply_token, NO_STORES_TEXT)
            return

        self._logger.info(
            "Nearest store resolved",
            extra={"user_id": event.user_id, "store_id": result.store.id, "distance_km": round(result.distance_km, 2)},
        )
        self._deliver(event.reply_token, format_nearest_store_message(result))

        # primes the next text turn so the model can confirm the suggested store
        self._remember(
            event.user_id,
            ("user", f"[User Location: {event.latitude}, {event.longitude}]"),
            ("assistant", f"System: Nearest store is {result.store.name}"),
        )

    def _handle_text(self, event: InboundEvent) -> None:
        user_message = event.text or ""
        if not user_message.strip():
            return

        try:
            system_prompt = self._build_system_prompt.execute()
            history = self._load_history(event.user_id)
            completion = self._llm.complete(system_prompt, history, user_message)
        except (LLMUpstreamError, LLMContractError, CatalogUnavailableError) as e:
            self._logger.error(
                "Completion failed",
                extra={"user_id": event.user_id, "reason": str(e), "error_type": type(e).__name__},
            )
            self._deliver(event.reply_token, BUSY_TEXT)
            return
        except Exception:
            self._logger.exception("Unexpected error before completion", extra={"user_id": event.user_id})
            self._deliver(event.reply_token, BUSY_TEXT)
            return

        try:
            reply_text = self._compose_reply(self._extract_booking.execute(completion))
        except CatalogUnavailableError as e:
            self._logger.error("Store resolution failed", extra={"user_id": event.user_id, "reason": str(e)})
            reply_text = BUSY_TEXT
        except Exception:
            self._logger.exception("Unexpected error while composing reply", extra={"user_id": event.user_id})
            self._deliver(event.reply_token, BUSY_TEXT)
            return

        self._deliver(event.reply_token, reply_text)
        self._remember(event.user_id, ("user", user_message), ("assistant", reply_text))

    def _compose_reply(self, extraction: ExtractionResult) -> str:
        draft = extraction.draft
        if draft is None:
            if extraction.parse_error and not extraction.cleaned_reply:
                return BOOKING_FORMAT_ERROR_TEXT
            return extraction.cleaned_reply

        if extraction.unresolved_store_name is not None:
            return STORE_NOT_FOUND_TEXT.format(store_name=extraction.unresolved_store_name)

        if extraction.store is None and self._require_store:
            self._logger.info("Booking draft without store; asking for one")
            return STORE_REQUIRED_TEXT

        outcome = self._create_booking.execute(draft, extraction.store.id if extraction.store else None)
        if not outcome.success or outcome.booking is None:
            return BOOKING_FAILED_TEXT

        return self.format_confirmation(outcome.booking, extraction.store)

    def format_confirmation(self, booking: BookingRecord, store: StoreRecord | None) -> str:
        local_start = booking.start_time.astimezone(self._timezone).strftime("%Y/%m/%d %H:%M")
        store_line = f"店家：{store.name}\n" if store else ""
        return (
            "✅ 預約成功！\n\n"
            f"{store_line}"
            f"時間：{local_start}\n"
            f"項目：{booking.service_type}\n\n"
            "店家確認後會發送通知給您。"
        )

    def _load_history(self, user_id: str | None) -> list[ChatTurn]:
        if not user_id:
            return []
        try:
            return self._store.get_recent_messages(user_id, limit=self._history_limit)
        except ConversationStoreError as e:
            self._logger.warning("History unavailable; continuing without it", extra={"user_id": user_id, "reason": str(e)})
            return []

    def _deliver(self, reply_token: str, text: str) -> None:
        try:
            self._send_reply.execute(reply_token=reply_token, text=text)
        except MessageSendError as e:
            self._logger.error("Reply delivery failed", extra={"reason": str(e)})

    def _remember(self, user_id: str | None, *turns: tuple[str, str]) -> None:
        if not user_id:
            return
        for role, text in turns:
            try:
                self._store.append_message(user_id, role=role, text=text)
            except ConversationStoreError as e:
                self._logger.error(
                    "History append failed",
                    extra={"user_id": user_id, "role": role, "reason": str(e)},
                )
