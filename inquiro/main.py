"""FastAPI application entry point."""
import os

# Force UTC before any module caches timezone information
os.environ['TZ'] = 'UTC'

import time
import sys

if hasattr(time, "tzset"):
    time.tzset()

# Ensure console streams can emit Unicode on Windows
for stream in (sys.stdout, sys.stderr):
    if hasattr(stream, "reconfigure"):
        stream.reconfigure(encoding="utf-8", errors="backslashreplace")

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path
from contextlib import asynccontextmanager

from inquiro.config import get_settings
from inquiro.version import APP_VERSION
from inquiro.routers import ai, auth, health, questions, responses, survey_tokens, surveys
from inquiro.routers.errors import register_exception_handlers

LOGS_DIR = Path("logs")
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
MEGABYTE = 1024 * 1024


def _rotating_handler(filename: str, max_mb: int, backups: int, fmt: str = LOG_FORMAT) -> RotatingFileHandler:
    handler = RotatingFileHandler(
        LOGS_DIR / filename, maxBytes=max_mb * MEGABYTE, backupCount=backups, encoding='utf-8'
    )
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _dedicated_logger(name: str, handler: logging.Handler) -> logging.Logger:
    """Route ``name`` to ``handler`` only, keeping it out of the general log."""
    dedicated = logging.getLogger(name)
    dedicated.handlers.clear()
    dedicated.addHandler(handler)
    dedicated.setLevel(logging.INFO)
    dedicated.propagate = False
    return dedicated


class SQLTransactionFilter(logging.Filter):
    """Drop transaction bookkeeping lines and put each statement on one line."""

    NOISE = ('ROLLBACK', 'BEGIN', 'COMMIT', 'generated in')
    STATEMENTS = ('SELECT', 'DELETE', 'INSERT', 'UPDATE')

    def filter(self, record):
        if record.levelno != logging.INFO:
            return True
        message = record.getMessage()
        if any(keyword in message for keyword in self.NOISE):
            return False
        if any(keyword in message for keyword in self.STATEMENTS):
            record.msg = ' '.join(message.split())
            record.args = ()
        return True


LOGS_DIR.mkdir(exist_ok=True)
general_handler = _rotating_handler("inquiro.log", max_mb=1, backups=5)

# force=True replaces whatever uvicorn configured before import
logging.basicConfig(
    level=logging.INFO,
    format=LOG_FORMAT,
    handlers=[logging.StreamHandler(), general_handler],
    force=True,
)

logger = logging.getLogger(__name__)
api_logger = _dedicated_logger(
    "inquiro.api",
    _rotating_handler("inquiro_api.log", max_mb=2, backups=15, fmt='%(asctime)s - %(levelname)s - %(message)s'),
)
sqlalchemy_logger = _dedicated_logger(
    "sqlalchemy.engine.Engine", _rotating_handler("inquiro_sql.log", max_mb=1, backups=5)
)
sqlalchemy_logger.addFilter(SQLTransactionFilter())

uvicorn_access_logger = logging.getLogger("uvicorn.access")
uvicorn_access_logger.setLevel(logging.INFO)
if general_handler not in uvicorn_access_logger.handlers:
    uvicorn_access_logger.addHandler(general_handler)

settings = get_settings()


@asynccontextmanager
async def lifespan(app_instance: FastAPI):
    """Log startup and shutdown."""
    logger.info("=" * 60)
    logger.info(f"Inquiro API {APP_VERSION} starting")
    logger.info(f"Environment: {settings.environment}")
    logger.info(f"Database: {settings.database_url.split('@')[-1] if '@' in settings.database_url else 'SQLite'}")
    logger.info(f"AI drafting: {'enabled' if settings.openai_api_key else 'disabled (no OPENAI_API_KEY)'}")
    logger.info("=" * 60)

    try:
        yield
    finally:
        logger.info("Inquiro API shutting down")


app = FastAPI(
    title="Inquiro API",
    description="Survey creation and response collection",
    version=APP_VERSION,
    lifespan=lifespan,
)

register_exception_handlers(app)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Write one START and one COMPLETE (or EXCEPTION) line per request to the API log."""
    started = time.perf_counter()
    client_ip = request.client.host if request.client else "unknown"
    user_agent = request.headers.get("user-agent", "unknown")[:50]
    label = f"{request.method} {request.url.path}"
    if request.query_params:
        label += f"?{request.query_params}"

    api_logger.info(f">> START | {label} | IP: {client_ip} | UA: {user_agent}")
    try:
        response = await call_next(request)
    except Exception as exc:
        api_logger.error(
            f"<< EXCEPTION | {label} | {type(exc).__name__}: {str(exc)[:100]} | "
            f"Time: {time.perf_counter() - started:.3f}s | IP: {client_ip}"
        )
        raise

    level = logging.WARNING if response.status_code >= 400 else logging.INFO
    api_logger.log(
        level,
        f"<< COMPLETE | {label} | Status: {response.status_code} | "
        f"Time: {time.perf_counter() - started:.3f}s | IP: {client_ip}",
    )
    return response


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins(),
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["*"],
)

app.include_router(health.router, tags=["health"])
app.include_router(auth.router, prefix="/auth", tags=["auth"])
app.include_router(surveys.router, prefix="/surveys", tags=["surveys"])
app.include_router(questions.router, prefix="/questions", tags=["questions"])
app.include_router(responses.router, prefix="/responses", tags=["responses"])
app.include_router(survey_tokens.router, prefix="/survey-tokens", tags=["survey-tokens"])
app.include_router(ai.router, prefix="/ai", tags=["ai"])


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": "Inquiro API",
        "version": APP_VERSION,
        "environment": settings.environment,
        "docs": "/docs",
    }
