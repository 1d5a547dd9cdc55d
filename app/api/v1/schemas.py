from datetime import datetime

from pydantic import AwareDatetime, BaseModel, Field

from app.domain.entities.booking import BookingStatus


class BookingCreateSchema(BaseModel):
    customer_name: str = Field(min_length=1)
    phone: str = Field(min_length=1)
    service_type: str = Field(min_length=1)
    start_time: AwareDatetime
    store_id: str | None = None


class BookingSchema(BaseModel):
    id: str | None
    customer_name: str
    phone: str
    service_type: str
    start_time: datetime
    store_id: str | None = None
    status: BookingStatus
    created_at: datetime | None = None


class BookingStatusUpdateSchema(BaseModel):
    status: BookingStatus


class SystemPromptSchema(BaseModel):
    value: str
    is_default: bool = False


class SystemPromptUpdateSchema(BaseModel):
    value: str = Field(min_length=1)


class ServiceSchema(BaseModel):
    id: int | None = None
    name: str
    pricing_mode: str
    price_small: str | None = None
    price_medium: str | None = None
    price_large: str | None = None
    price_flat: str | None = None
    description: str | None = None


class StoreSchema(BaseModel):
    id: str
    name: str
    address: str
    lat: float | None = None
    lng: float | None = None
