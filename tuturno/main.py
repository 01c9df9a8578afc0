import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI

from tuturno.api.appointments import router as appointments_router
from tuturno.api.booking import router as booking_router
from tuturno.core.config import settings
from tuturno.wiring.dependencies import shutdown_backend_clients

class ContextFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        extras = []
        for key in ("appointment_id", "action", "service_id", "status", "reason", "error"):
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

@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    shutdown_backend_clients()


app = FastAPI(title="TuTurno", version="1.0.0", lifespan=lifespan)

app.include_router(appointments_router, prefix="/api", tags=["appointments"])
app.include_router(booking_router, prefix="/api", tags=["booking"])


@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}
