"""Main FastAPI application with modularized routes."""
import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse, JSONResponse
from fastapi.staticfiles import StaticFiles

from portal.config import SEED_SAMPLE_TESTS, STATIC_DIR
from portal.database import SessionLocal, init_db
from portal.exceptions import APIException
from portal.logging_setup import setup_console_logging
from portal.routes import attempts, sessions, tests
from portal.services.cleanup_service import schedule_sessions_cleanup
from portal.services.seed_service import seed_mock_tests_if_empty
from portal.services.session_registry import SessionRegistry

setup_console_logging()
logger = logging.getLogger(__name__)

app = FastAPI(title="Student Portal Mock Tests API")
app.state.session_registry = SessionRegistry(SessionLocal)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(APIException)
async def api_exception_handler(request: Request, exc: APIException) -> JSONResponse:
    """Render domain errors with their error code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": exc.error_code.value},
        headers=exc.headers,
    )


# Startup events
@app.on_event("startup")
def startup_events() -> None:
    """Initialize database, seed samples and schedule cleanup on startup."""
    init_db()
    if SEED_SAMPLE_TESTS:
        db = SessionLocal()
        try:
            seed_mock_tests_if_empty(db)
        finally:
            db.close()
    app.state.cleanup_stop = schedule_sessions_cleanup(app.state.session_registry)


@app.on_event("shutdown")
def shutdown_events() -> None:
    """Stop session timers and the cleanup worker."""
    app.state.session_registry.shutdown()
    cleanup_stop = getattr(app.state, "cleanup_stop", None)
    if cleanup_stop is not None:
        cleanup_stop.set()


# Root endpoint
@app.get("/")
def index() -> FileResponse:
    """Serve frontend index.html."""
    index_path = STATIC_DIR / "index.html"
    if not index_path.exists():
        raise HTTPException(status_code=404, detail="Frontend not found")
    return FileResponse(index_path)


# Mount static files
if STATIC_DIR.is_dir():
    app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")
else:
    logger.info(f"Static directory {STATIC_DIR} not found; serving API only")

# Include routers
app.include_router(tests.router)
app.include_router(sessions.router)
app.include_router(attempts.router)
