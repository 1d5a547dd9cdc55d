import logging

from fastapi import FastAPI

from app.api.v1.bookings import router as bookings_router
from app.api.v1.system_settings import router as system_settings_router
from app.api.webhooks import router as webhooks_router
from app.core.config import settings

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in (
            "user_id",
            "event_type",
            "event_count",
            "store_id",
            "store_name",
            "booking_id",
            "status",
            "distance_km",
            "reply_text",
            "reason",
            "error",
        ):
            value = getattr(record, key, None)
            if value not in (None, ""):
                extras.append(f"{key}={value}")
        base = super().format(record)
        if extras:
            return f"{base} | " + " ".join(extras)
        return base


handler = logging.StreamHandler()
handler.setFormatter(ContextFormatter("%(levelname)s:%(name)s:%(message)s"))

root = logging.getLogger()
root.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
root.handlers.clear()
root.addHandler(handler)

app = FastAPI(title="Car Wash Booking Bot", version="1.0.0")

app.include_router(webhooks_router, tags=["webhooks"])
app.include_router(bookings_router, prefix="/api/v1", tags=["bookings"])
app.include_router(system_settings_router, prefix="/api/v1", tags=["settings"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
