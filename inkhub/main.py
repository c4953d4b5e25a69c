"""FastAPI application entrypoint."""

from contextlib import asynccontextmanager
from typing import AsyncGenerator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from inkhub.api.affiliations import router as affiliations_router
from inkhub.api.errors import domain_error_handler
from inkhub.api.health import router as health_router
from inkhub.api.users import router as users_router
from inkhub.config import settings
from inkhub.core.errors import DomainError
from inkhub.core.logging import get_logger, setup_logging
from inkhub.db.database import engine as db_engine
from inkhub.db.models import Base

setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan handler for startup and shutdown events."""
    logger.info("Creating database tables...")
    Base.metadata.create_all(bind=db_engine)
    logger.info("Database tables created.")

    yield

    logger.info("Shutting down...")
    db_engine.dispose()


app = FastAPI(title="InkHub", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
    allow_credentials=True,
)
app.add_exception_handler(DomainError, domain_error_handler)

app.include_router(health_router)
app.include_router(users_router, prefix="/api")
app.include_router(affiliations_router, prefix="/api")
