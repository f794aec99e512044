"""
Main FastAPI application and routing layer.
"""
from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jakarta_insight.auth import auth_gate
from jakarta_insight.config import get_settings
from jakarta_insight.errors import APIError, api_error_handler
from jakarta_insight.routers import analytics, auth, dashboard, engagement, pages
from jakarta_insight.search import close_search_client
from jakarta_insight.utils import now_utc

# Configure logging
logger = logging.getLogger("uvicorn")


def configure_logging() -> None:
    settings = get_settings()
    logging.basicConfig(level=settings.LOG_LEVEL.upper(), format=settings.LOG_FORMAT)
    logger.setLevel(settings.LOG_LEVEL.upper())


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Log the search engine target on startup and release its connections on shutdown."""
    configure_logging()
    settings = get_settings()
    logger.info("Using search engine at %s", settings.ES_URL)
    if not settings.SUMMARIZER_URL:
        logger.info("SUMMARIZER_URL not set, node summaries disabled")
    yield
    await close_search_client()


# Initialize FastAPI app
app = FastAPI(
    title="Jakarta Insight API",
    version="0.1.0",
    description="News and social media monitoring API for government analysts",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().CORS_ALLOW_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.middleware("http")(auth_gate)
app.add_exception_handler(APIError, api_error_handler)

app.include_router(auth.router)
app.include_router(dashboard.router)
app.include_router(engagement.router)
app.include_router(analytics.router)
app.include_router(pages.router)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "ok",
        "as_of": now_utc().isoformat(),
        "service": "jakarta-insight-api",
    }


if __name__ == "__main__":
    # For development
    import uvicorn
    uvicorn.run("jakarta_insight.main:app", host="0.0.0.0", port=get_settings().PORT, reload=True)
