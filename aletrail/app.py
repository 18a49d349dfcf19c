from __future__ import annotations

import logging
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from .config import DEFAULT_CONFIG, AppConfig, get_config
from .errors import AleTrailError
from .routes import admin, breweries, ratings, recommendations, trails, validation

logging.basicConfig(
    level=DEFAULT_CONFIG.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="AleTrail API", version=DEFAULT_CONFIG.version)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    logger.info("%s %s", request.method, request.url.path)
    return await call_next(request)


# ── Error envelopes ──────────────────────────────────────────────────────


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"success": False, "error": message})


def _resolve_config(request: Request) -> AppConfig:
    """Return the config the routes see, honouring dependency overrides."""
    return request.app.dependency_overrides.get(get_config, get_config)()


@app.exception_handler(AleTrailError)
async def handle_app_error(request: Request, exc: AleTrailError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return _error(exc.status_code, exc.message)


@app.exception_handler(RequestValidationError)
async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = "; ".join(
        f"{'.'.join(str(p) for p in err['loc'][1:])}: {err['msg']}" for err in exc.errors()
    )
    return _error(400, details or "Invalid request")


@app.exception_handler(Exception)
async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    if _resolve_config(request).is_production:
        return _error(500, "Something went wrong")
    return _error(500, str(exc))


# ── Routes ───────────────────────────────────────────────────────────────


@app.get("/api/health")
def health() -> dict[str, str]:
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "version": DEFAULT_CONFIG.version,
    }


app.include_router(trails.router)
app.include_router(breweries.router)
app.include_router(validation.router)
app.include_router(ratings.router)
app.include_router(recommendations.router)
app.include_router(admin.router)
