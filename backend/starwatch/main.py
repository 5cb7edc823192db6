from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
import httpx
import logging
import sys

from starwatch.core.config import settings
from starwatch.api.api import api_router
from starwatch.services.cache import TTLCache
from starwatch.services.data_service import DataService

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)]
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """One HTTP client and one cache per process, torn down on shutdown."""
    client = httpx.AsyncClient(
        timeout=settings.HTTP_TIMEOUT_SECONDS,
        headers={"User-Agent": settings.USER_AGENT},
        follow_redirects=True,
    )
    cache = TTLCache(settings.cache_ttls, default_ttl=settings.CACHE_TTL_SECONDS)
    app.state.data_service = DataService(settings, client, cache)
    logger.info(f"Data service ready (cache TTLs: {settings.cache_ttls})")
    try:
        yield
    finally:
        await client.aclose()
        logger.info("HTTP client closed")


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Starlink constellation tracker API: reconciled SpaceX and CelesTrak catalog data, health scoring, launch history and constellation statistics.",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["*"],
)

app.add_middleware(GZipMiddleware, minimum_size=1000)


@app.get("/")
def read_root():
    return {"message": "Welcome to StarWatch API", "status": "active", "version": "1.0.0"}


@app.get("/health")
def health_check():
    return {"status": "ok"}


app.include_router(api_router, prefix=settings.API_V1_STR)
