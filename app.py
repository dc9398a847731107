"""Main FastAPI application entry point for MindJournal."""

import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config.settings import settings
from config.database import database
from config.logging_utils import log_error, log_success
from api.error_handlers import register_error_handlers
from api.routers.auth import router as auth_router
from api.routers.user_mode import router as user_mode_router
from services.auth_service import create_email_index
from services.user_mode_service import create_user_mode_indexes

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Handle startup and shutdown events."""
    try:
        await database.connect()
    except Exception as e:
        log_error(f"MongoDB connection failed: {e}", prefix="DB")
        raise
    log_success(f"Connected to MongoDB: {settings.DATABASE_NAME}", prefix="DB")

    db = database.get_database()
    await create_email_index(db)
    await create_user_mode_indexes(db)
    log_success("Database indexes created", prefix="DB")

    fallbacks = settings.uses_fallback_secrets()
    if fallbacks and not settings.is_development:
        logger.warning(f"Using fallback secrets in {settings.ENVIRONMENT}: {', '.join(fallbacks)}")

    logger.info(f"Environment: {settings.ENVIRONMENT}, CORS enabled for: {settings.FRONTEND_URL}")
    yield
    await database.disconnect()
    log_success("Disconnected from MongoDB", prefix="DB")


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="Authentication and mood journal API",
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_origin_regex=r"https?://localhost(:\d+)?" if settings.is_development else None,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(user_mode_router)


@app.get("/health")
async def health_check():
    """Liveness probe; reports database reachability without failing on it."""
    db_healthy = await database.health_check()
    return {
        "success": True,
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if db_healthy else "disconnected"
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "app:app",
        host="0.0.0.0",
        port=settings.PORT,
        reload=settings.DEBUG
    )
