from __future__ import annotations

import json
import logging
import re
from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Any

from app.domain.entities.booking import BookingDraft

BOOKING_DELIMITER = "<<<BOOKING>>>"
REQUIRED_FIELDS = ("customer_name", "phone", "service_type", "start_time")
# the prompt pins booking times to Taipei local time
REQUIRED_UTC_OFFSET = timedelta(hours=8)

_BLOCK_RE = re.compile(re.escape(BOOKING_DELIMITER) + r"(.*?)" + re.escape(BOOKING_DELIMITER), re.DOTALL)
_FENCE_RE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)

logger = logging.getLogger(__name__)


class BookingBlockError(ValueError):
    pass


@dataclass(frozen=True)
class ParsedBlock:
    cleaned_reply: str
    draft: BookingDraft | None
    block_found: bool = False
    parse_error: str | None = None


def split_booking_block(text: str) -> ParsedBlock:
    """
    Find the first delimited booking block in a completion.

    Without any delimiter the text comes back unchanged.
    Every complete delimited span is stripped from the reply and the first
    span is parsed; a malformed span is logged and yields no draft.
    A left-over opening delimiter (a reply cut off mid-block) is dropped
    together with everything after it.
    """
    if BOOKING_DELIMITER not in text:
        return ParsedBlock(cleaned_reply=text, draft=None)

    match = _BLOCK_RE.search(text)
    cleaned, unterminated = _strip_blocks(text)

    if match is None:
        logger.warning("Booking block not terminated", extra={"reason": "missing closing delimiter"})
        return ParsedBlock(cleaned_reply=cleaned, draft=None, block_found=True, parse_error="unterminated booking block")

    if unterminated:
        logger.warning("Trailing booking delimiter dropped")

    try:
        draft = parse_booking_json(match.group(1))
    except BookingBlockError as e:
        logger.warning("Booking block malformed", extra={"reason": str(e)})
        return ParsedBlock(cleaned_reply=cleaned, draft=None, block_found=True, parse_error=str(e))

    return ParsedBlock(cleaned_reply=cleaned, draft=draft, block_found=True)


def _strip_blocks(text: str) -> tuple[str, bool]:
    cleaned = _BLOCK_RE.sub("", text)
    head, sep, _ = cleaned.partition(BOOKING_DELIMITER)
    return head.strip(), bool(sep)


def parse_booking_json(raw: str) -> BookingDraft:
    body = _FENCE_RE.sub("", raw.strip())
    try:
        data: Any = json.loads(body)
    except json.JSONDecodeError as e:
        snippet = body[:200].replace("\n", " ")
        raise BookingBlockError(f"invalid JSON: {e.msg}. Snippet: {snippet!r}") from e

    if not isinstance(data, dict):
        raise BookingBlockError("expected a JSON object")

    values: dict[str, str] = {}
    for field in REQUIRED_FIELDS:
        value = data.get(field)
        if not isinstance(value, str) or not value.strip():
            raise BookingBlockError(f"missing or empty field: {field}")
        values[field] = value.strip()

    store_name = data.get("store_name")
    if store_name is not None and not isinstance(store_name, str):
        raise BookingBlockError("store_name must be a string")

    return BookingDraft(
        customer_name=values["customer_name"],
        phone=values["phone"],
        service_type=values["service_type"],
        start_time=parse_start_time(values["start_time"]),
        store_name=(store_name or "").strip() or None,
    )


def parse_start_time(value: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as e:
        raise BookingBlockError(f"start_time is not ISO-8601: {value!r}") from e
    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise BookingBlockError(f"start_time has no UTC offset: {value!r}")
    if parsed.utcoffset() != REQUIRED_UTC_OFFSET:
        raise BookingBlockError(f"start_time must carry a +08:00 offset: {value!r}")
    return parsed
