"""Main FastAPI application for the Luna sleep coach backend."""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sleepcoach.api.routes.health import router as health_router
from sleepcoach.api.routes.morning_routine import router as morning_routine_router
from sleepcoach.api.routes.schedule import router as schedule_router
from sleepcoach.api.routes.sleep_assistant import router as sleep_assistant_router
from sleepcoach.core.config import settings
from sleepcoach.core.errors import SleepCoachError, sleep_coach_error_handler
from sleepcoach.core.logging import configure_logging
from sleepcoach.core.middleware import RequestIDMiddleware
from sleepcoach.observability.client import init_opik

configure_logging(log_level=settings.log_level)

app = FastAPI(title=settings.app_name, version="0.1.0", debug=settings.debug)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-Id"],
)
app.add_middleware(RequestIDMiddleware)
app.add_exception_handler(SleepCoachError, sleep_coach_error_handler)
app.include_router(health_router)
app.include_router(schedule_router)
app.include_router(morning_routine_router)
app.include_router(sleep_assistant_router)


@app.on_event("startup")
async def startup_observability() -> None:
    """Initialize observability backends after the event loop starts."""
    init_opik()
