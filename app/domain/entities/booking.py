from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class BookingStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class BookingDraft:
    customer_name: str
    phone: str
    service_type: str
    start_time: datetime  # always offset-aware
    store_name: str | None = None


@dataclass(frozen=True)
class BookingRecord:
    customer_name: str
    phone: str
    service_type: str
    start_time: datetime
    store_id: str | None = None
    status: BookingStatus = BookingStatus.PENDING
    id: str | None = None
    created_at: datetime | None = None
