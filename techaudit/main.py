"""
TechAudit backend: main entry point.
Serves the dashboard from static/ and proxies audits to PageSpeed Insights.
"""
import os
import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import get_settings
from .errors import TechAuditError
from .middleware.request_log import RequestLogMiddleware
from .models import HealthStatus
from .routers.audit_router import router as audit_router
from .utils.secret import require_secret_for_health

settings = get_settings()

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    current = get_settings()
    if not current.techaudit_secret:
        logger.warning("TECHAUDIT_SECRET is not set, protected routes will answer 500")
    if not current.pagespeed_api_key:
        logger.warning("PAGESPEED_API_KEY is not set, audit routes will answer 500")
    logger.info("TechAudit backend ready (environment=%s)", current.environment)
    yield


app = FastAPI(
    title="TechAudit API",
    description=(
        "**TechAudit**: PageSpeed Insights proxy\n\n"
        "Every API route expects the `x-techaudit-secret` header.\n"
    ),
    version="1.0.0",
    docs_url="/docs" if settings.environment != "production" else None,
    redoc_url="/redoc" if settings.environment != "production" else None,
    lifespan=lifespan,
)

app.add_middleware(RequestLogMiddleware)

# Dashboard is same-origin by default; EXTRA_ALLOWED_ORIGINS (comma-separated)
# lets it be hosted elsewhere.
_dev_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra_origins = [o.strip() for o in settings.extra_allowed_origins.split(",") if o.strip()]

ALLOWED_ORIGINS = _extra_origins + (
    _dev_origins if settings.environment != "production" else []
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["GET", "HEAD"],
    allow_headers=["x-techaudit-secret"],
)


# ── Error envelope: {"error": ..., "detail"?: ...} ─────────────────────────────

@app.exception_handler(TechAuditError)
async def techaudit_error_handler(request: Request, exc: TechAuditError):
    return JSONResponse(status_code=exc.status_code, content=exc.envelope())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": "Internal error"})


# Routers
app.include_router(audit_router)


@app.api_route("/health", methods=["GET", "HEAD"], tags=["Health"], response_model=HealthStatus)
async def health(_: None = Depends(require_secret_for_health)):
    return HealthStatus()


# Static dashboard last, so the API routes above win
os.makedirs(settings.static_dir, exist_ok=True)
app.mount("/", StaticFiles(directory=settings.static_dir, html=True), name="static")
