import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from contextlib import asynccontextmanager
from wwfm.config import get_settings
from wwfm.routers.detect import router as detect_router
from wwfm.routers.categories import router as categories_router
from wwfm.routers.admin import router as admin_router
from wwfm.services.backend_factory import build_search_backend
from wwfm.services.cache import cache
from wwfm.services.detection import DetectionService

settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the search backend and detection service, connect the cache."""
    logger.info(f"Starting up... search backend: {settings.search_backend}")
    backend = build_search_backend(settings)
    app.state.detection_service = DetectionService(backend)
    logger.info("Connecting to Redis cache...")
    await cache.connect()
    yield
    logger.info("Shutting down...")
    await cache.disconnect()
    close = getattr(backend, "close", None)
    if close is not None:
        await close()


app = FastAPI(
    title="WWFM Solution Detection API",
    description="Recognize solutions and route them to the right category",
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],  # Configure appropriately for production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(detect_router, prefix=settings.api_prefix)
app.include_router(categories_router, prefix=settings.api_prefix)
app.include_router(admin_router, prefix=settings.api_prefix)


@app.get("/")
def root():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": "WWFM Solution Detection API",
        "version": "1.0.0",
        "cache_connected": cache.is_connected,
    }
