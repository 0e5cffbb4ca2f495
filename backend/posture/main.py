"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from posture.config import get_settings
from posture.api import api_router

settings = get_settings()

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.debug else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {settings.app_name}")
    yield
    logger.info(f"Shutting down {settings.app_name}")


app = FastAPI(
    title=settings.app_name,
    description="""
    Posture Analysis API

    Real-time posture assessment from 33-point body landmarks produced by an
    on-device pose detector.

    ## Key Features

    - **Kinematic Chain Analysis**: Pelvis, spine, shoulders and head/neck alignment
    - **Composite Scores**: Balance, symmetry and alignment on a 10-100 scale
    - **Posture Patterns**: Classification into archetypes A-E
    - **Compensation Detection**: Upward propagation of lower-joint deficits
    - **Side View**: Craniovertebral angle and turtle-neck check

    ## Shoulder Hysteresis

    Shoulder tilt uses a hysteresis band so the issue does not flicker near
    its threshold. Stateless callers send back `shoulder_status`; tracked
    streams keep it server-side.
    """,
    version="1.0.0",
    lifespan=lifespan
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include API routes
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "app": settings.app_name,
        "version": "1.0.0"
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "app": settings.app_name,
        "docs": "/docs",
        "health": "/health"
    }
