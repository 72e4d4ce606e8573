"""FastAPI application for the Truth Engine service."""

import contextlib
import logging

from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

# Load environment variables from .env file
load_dotenv()

from ..infrastructure.dependencies import get_service_container
from ..infrastructure.settings import get_settings
from .endpoints import health, ledger, sources, verify

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize providers on startup and release them on shutdown."""
    container = get_service_container()
    await container.startup()
    logger.info("🚀 Truth Engine API started")

    yield  # Application runs here

    await container.shutdown()
    logger.info("👋 Truth Engine API stopped")


# Create FastAPI application
app = FastAPI(
    title="Truth Engine API",
    description="Claim extraction, evidence gathering and verification API",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(health.router)
app.include_router(verify.router)
app.include_router(sources.router)
app.include_router(ledger.router)
