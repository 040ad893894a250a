import json
import locale
import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from config import settings
from core.gateway import GatewayError
from db import dispose_engine
from core.log_config import configure_logging
from api.assets.views import router as assets_router
from api.report.views import router as report_router
from api.statistics.views import router as statistics_router
from api.session.views import router as session_router
from api.preferences.views import router as preferences_router

logger = logging.getLogger("repair_tracker")


def get_cors_origins() -> list[str]:
    """Get CORS origins from settings or use defaults."""
    cors_env = settings.CORS_ORIGINS

    # Try to parse as JSON array
    if cors_env:
        try:
            origins = json.loads(cors_env)
            if isinstance(origins, list):
                return origins
        except json.JSONDecodeError:
            # If not valid JSON, treat as comma-separated
            return [o.strip() for o in cors_env.split(",") if o.strip()]

    # Default origins for development
    return [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://127.0.0.1:3000",
    ]


@asynccontextmanager
async def lifespan(app: FastAPI):
    configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
    try:
        # List sorting collates with the environment locale
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as exc:
        logger.warning("collation locale unavailable, using default: %s", exc)
    logger.info("repair tracker starting (env=%s)", settings.APP_ENV)
    yield
    await dispose_engine()


app = FastAPI(
    title="Repair Tracker API",
    description="Track assets awaiting repair, their follow-up dates and completion",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_cors_origins(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(GatewayError)
async def gateway_error_handler(request: Request, exc: GatewayError) -> JSONResponse:
    # Already logged by the gateway; the client decides whether to retry.
    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"detail": f"Data store error during {exc.operation}"},
    )


# Session endpoints
app.include_router(session_router, prefix="/api/v1")
app.include_router(preferences_router, prefix="/api/v1")

# Business endpoints
app.include_router(assets_router, prefix="/api/v1")
app.include_router(report_router, prefix="/api/v1")
app.include_router(statistics_router, prefix="/api/v1")


# Health check endpoint
@app.get("/health", tags=["system"])
async def health_check():
    """Health check endpoint for monitoring."""
    return {"status": "healthy"}
