import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from search_portal.config import settings
from search_portal.core.rate_limiter import rate_limiter
from search_portal.database import init_db, engine
from search_portal.logging_config import setup_logging
from search_portal.routers import admin, auth, search

setup_logging()
logger = logging.getLogger(__name__)

PLACEHOLDER_SECRET = "replace-with-a-long-random-secret-key"

app = FastAPI(
    title="Media Search Portal API",
    description="Admin-curated search strings combined with analyst names into search-engine queries.",
    version="1.0.0",
)

cors_origins = [o.strip() for o in settings.cors_allow_origins.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(search.router)
app.include_router(admin.router)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request, exc):
    logger.exception("Unhandled server error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


def _limit_for_path(path: str) -> int | None:
    if path == "/auth/login":
        return settings.rate_limit_auth_per_min
    if path == "/search/execute":
        return settings.rate_limit_search_per_min
    return None


@app.middleware("http")
async def apply_rate_limits(request, call_next):
    path = request.url.path
    if request.method == "OPTIONS":
        return await call_next(request)

    limit = _limit_for_path(path)
    if limit is not None and limit > 0:
        client_ip = request.client.host if request.client else "unknown"
        key = f"{client_ip}:{path}"
        allowed, retry_after = rate_limiter.allow(key, limit=limit, window_seconds=60)
        if not allowed:
            logger.warning("Rate limit hit for %s on %s", client_ip, path)
            return JSONResponse(
                status_code=429,
                content={"detail": "Too many requests. Please retry shortly."},
                headers={"Retry-After": str(retry_after)},
            )

    return await call_next(request)


@app.get("/health/live")
def health_live():
    return {"status": "ok"}


@app.get("/health/ready")
def health_ready():
    try:
        with engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return {"status": "ready"}
    except Exception:
        logger.exception("Readiness check failed")
        return JSONResponse(status_code=503, content={"status": "not_ready"})


@app.on_event("startup")
def on_startup():
    logger.info("Starting Media Search Portal API")
    env = (settings.app_env or "development").lower()
    if env in {"production", "prod"}:
        if settings.secret_key == PLACEHOLDER_SECRET:
            raise RuntimeError("SECRET_KEY placeholder is not allowed in production")
        if "username:password@" in settings.database_url:
            raise RuntimeError("DATABASE_URL placeholder credentials are not allowed in production")
    else:
        if settings.secret_key == PLACEHOLDER_SECRET:
            logger.warning("SECRET_KEY is using placeholder default. Set SECRET_KEY in .env for secure deployments.")
        if "username:password@" in settings.database_url:
            logger.warning("DATABASE_URL appears to use placeholder credentials. Set DATABASE_URL in .env.")
    init_db()


@app.get("/")
def root():
    return {"message": "Media Search Portal API. Sign in at /auth/login, then POST names to /search/execute."}
