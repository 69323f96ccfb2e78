from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from tracker.core.config import settings
from tracker.core.logging import configure_logging
from tracker.routers import goals as goals_router
from tracker.routers import metrics as metrics_router
from tracker.routers import schedule as schedule_router
from tracker.routers import streaks as streaks_router
from tracker.core.errors import (
    TrackerException,
    tracker_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
)

configure_logging(settings.LOG_LEVEL, json_logs=settings.LOG_JSON)

app = FastAPI(
    title="Daily Tracker API",
    description=(
        "**Schedules, goals and streaks for daily-logged metrics**\n\n"
        "Stateless evaluation over metric and log snapshots supplied by the "
        "caller: whether a metric is due, whether a value meets its goal, and "
        "how long the current and best streaks are.\n\n"
        "All error responses follow the `{code, message, details}` envelope."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

# --- CORS ---
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# --- Exception handlers (most specific first) ---
app.add_exception_handler(TrackerException, tracker_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# --- Routers ---
app.include_router(schedule_router.router)
app.include_router(goals_router.router)
app.include_router(streaks_router.router)
app.include_router(metrics_router.router)


@app.get("/health", tags=["health"], summary="Health check")
def health():
    """
    Returns `{"status": "ok"}` when the API is up.
    Used by Railway / Render for liveness probes.
    """
    return {"status": "ok", "env": settings.APP_ENV}
