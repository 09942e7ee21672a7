"""
Keratograph Point Cloud - FastAPI Backend

Main application entry point and configuration.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from keratograph.api.points import router as points_router
from keratograph.api.schemas import ErrorResponse
from keratograph.models.errors import CorneaExportError
from keratograph.services.line_parser import DEFAULT_LINE_POLICY
from keratograph.services.pipeline import CORRECT_CHIRALITY


# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


APP_NAME = "Keratograph Point Cloud"
APP_VERSION = "0.1.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    logger.info(f"Starting {APP_NAME} backend")
    logger.info(f"Line policy: {DEFAULT_LINE_POLICY}, chirality correction: {CORRECT_CHIRALITY}")

    yield

    logger.info(f"Shutting down {APP_NAME} backend")


# Create FastAPI app
app = FastAPI(
    title=APP_NAME,
    description="""
    Converts OCULUS Keratograph CORNEA exports into cartesian point clouds.

    ## Data Flow
    1. POST the export lines to /points
    2. Segment records are parsed into (segment, radial distance, depth)
    3. Segments are mapped to polar angles over the full record set
    4. Points are converted to (x, y, z) and z is negated to fix chirality
    """,
    version=APP_VERSION,
    lifespan=lifespan,
)


# CORS middleware (allow all origins for development)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(CorneaExportError)
async def cornea_export_error_handler(request: Request, exc: CorneaExportError):
    logger.warning(f"Rejected export on {request.url.path}: {exc}")
    return JSONResponse(
        status_code=422,
        content=ErrorResponse(detail=str(exc), code=exc.code).model_dump(),
    )


# Include routers
app.include_router(points_router)


@app.get("/")
async def root():
    """Root endpoint - basic health check."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
        "status": "running",
    }


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {
        "status": "healthy",
        "line_policy": DEFAULT_LINE_POLICY,
        "correct_chirality": CORRECT_CHIRALITY,
    }
