from dataclasses import asdict

from fastapi import APIRouter, Depends, HTTPException

from app.api.v1.schemas import (
    BookingCreateSchema,
    BookingSchema,
    BookingStatusUpdateSchema,
    ServiceSchema,
    StoreSchema,
)
from app.application.exceptions import (
    BookingNotFoundError,
    BookingPersistenceError,
    CatalogUnavailableError,
    InvalidStatusTransitionError,
)
from app.application.ports.catalog import CatalogPort
from app.application.use_cases.manage_bookings import ManageBookingsUseCase
from app.domain.entities.booking import BookingRecord, BookingStatus
from app.wiring.dependencies import get_catalog, get_manage_bookings_use_case

router = APIRouter()


def _to_schema(booking: BookingRecord) -> BookingSchema:
    return BookingSchema(**asdict(booking))


@router.post("/bookings", response_model=BookingSchema, status_code=201)
def create_booking(
    req: BookingCreateSchema,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        booking = uc.submit(
            customer_name=req.customer_name,
            phone=req.phone,
            service_type=req.service_type,
            start_time=req.start_time,
            store_id=req.store_id,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except (BookingPersistenceError, CatalogUnavailableError) as e:
        raise HTTPException(status_code=502, detail=str(e))

    return _to_schema(booking)


@router.get("/bookings", response_model=list[BookingSchema])
def list_bookings(
    status: BookingStatus | None = None,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        bookings = uc.list_bookings(status=status)
    except BookingPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [_to_schema(b) for b in bookings]


@router.patch("/bookings/{booking_id}/status", response_model=BookingSchema)
def update_booking_status(
    booking_id: str,
    req: BookingStatusUpdateSchema,
    uc: ManageBookingsUseCase = Depends(get_manage_bookings_use_case),
):
    try:
        booking = uc.update_status(booking_id, req.status)
    except BookingNotFoundError:
        raise HTTPException(status_code=404, detail=f"booking {booking_id} not found")
    except InvalidStatusTransitionError as e:
        raise HTTPException(status_code=409, detail=f"invalid status transition: {e}")
    except BookingPersistenceError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return _to_schema(booking)


@router.get("/catalog/services", response_model=list[ServiceSchema])
def list_services(catalog: CatalogPort = Depends(get_catalog)):
    try:
        services = catalog.list_active_services()
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [
        ServiceSchema(
            id=s.id,
            name=s.name,
            pricing_mode=s.pricing_mode,
            price_small=s.price_small,
            price_medium=s.price_medium,
            price_large=s.price_large,
            price_flat=s.price_flat,
            description=s.description,
        )
        for s in services
    ]


@router.get("/catalog/stores", response_model=list[StoreSchema])
def list_stores(catalog: CatalogPort = Depends(get_catalog)):
    try:
        stores = catalog.list_active_stores()
    except CatalogUnavailableError as e:
        raise HTTPException(status_code=502, detail=str(e))
    return [StoreSchema(id=s.id, name=s.name, address=s.address, lat=s.lat, lng=s.lng) for s in stores]
