import logging
import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.endpoints import admin_auth, admin_management, auth, users
from app.api.error_handlers import register_exception_handlers
from app.core.config import settings
from app.db.database import check_database_health, close_database_connection, connect_to_database, get_database_stats

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not connect_to_database(app):
        logger.error("Database is unreachable; /health will report unhealthy until it recovers")
    yield
    close_database_connection(app)


app = FastAPI(title="Resume Builder API", version=settings.APP_VERSION, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    started = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - started) * 1000
    logger.info(f"{request.method} {request.url.path} {response.status_code} {duration_ms:.1f}ms")
    return response


register_exception_handlers(app)

app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(admin_auth.router, prefix="/api/admin", tags=["admin-auth"])
app.include_router(admin_management.router, prefix="/api/admin-management", tags=["admin-management"])
app.include_router(users.router, prefix="/api/users", tags=["users"])
app.include_router(users.root_router, prefix="/api", tags=["users"])


@app.get("/health", tags=["health"])
def health(request: Request):
    """Process uptime and store reachability; 503 when the store is down."""
    store = request.app.state.store
    db_health = check_database_health(store)
    payload = {
        "status": "healthy" if db_health["status"] == "healthy" else "unhealthy",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "environment": settings.ENVIRONMENT,
        "database": db_health,
        "databaseStats": get_database_stats(store),
        "version": settings.APP_VERSION,
    }
    return JSONResponse(status_code=200 if payload["status"] == "healthy" else 503, content=payload)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("main:app", host="0.0.0.0", port=settings.API_PORT, reload=not settings.is_production)
