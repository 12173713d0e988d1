"""
FastAPI application for the PDF question-answering service.

Provides endpoints for:
- Uploading PDFs and extracting their text
- Asking questions about document text through an LLM
- Rendering comparison documents
- Generating table dashboards from uploaded PDFs
"""

import logging

from contextlib import asynccontextmanager

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

# Handle both package imports (when running as module) and standalone imports (uvicorn main:app)
try:
    from .config import get_settings
    from .models import ErrorResponse, HealthResponse
    from .routers import ask, dashboards, upload
    from .services.ai import AIServiceError, get_ai_service
    from .services.dashboard import NoTableFoundError, StorageError, get_dashboard_service
    from .services.pdf_service import UnreadablePDFError, get_pdf_service
except ImportError:
    import sys
    from pathlib import Path
    # Add parent directory to path for standalone imports
    backend_dir = Path(__file__).parent
    if str(backend_dir) not in sys.path:
        sys.path.insert(0, str(backend_dir))
    from config import get_settings
    from models import ErrorResponse, HealthResponse
    from routers import ask, dashboards, upload
    from services.ai import AIServiceError, get_ai_service
    from services.dashboard import NoTableFoundError, StorageError, get_dashboard_service
    from services.pdf_service import UnreadablePDFError, get_pdf_service

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown."""
    logger.info("Starting PDF Chat Service...")
    for directory in (settings.upload_dir, settings.dashboard_dir):
        directory.mkdir(parents=True, exist_ok=True)
    # Initialize services on startup
    get_pdf_service()
    get_ai_service()
    get_dashboard_service()
    logger.info("Services initialized successfully")
    yield
    logger.info("Shutting down PDF Chat Service...")


# Create FastAPI application
app = FastAPI(
    title="PDF Chat API",
    description="Ask questions about PDFs and build table dashboards from them",
    version="1.0.0",
    lifespan=lifespan,
    debug=settings.debug,
)

# Configure CORS for frontend development
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =============================================================================
# Health Endpoints
# =============================================================================


@app.get("/", response_model=HealthResponse)
async def root() -> HealthResponse:
    """Root endpoint - health check."""
    return HealthResponse(status="healthy", message="PDF Chat API is running")


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    return HealthResponse(status="healthy", message="Service is healthy")


# =============================================================================
# Include Routers
# =============================================================================

app.include_router(upload.router)
app.include_router(ask.router)
app.include_router(dashboards.router)

# Generated dashboards are served as static files
app.mount(
    "/dashboards",
    StaticFiles(directory=settings.dashboard_dir, check_dir=False),
    name="dashboards",
)


# =============================================================================
# Exception Handlers
# =============================================================================


def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    body = ErrorResponse(kind=exc.kind, detail=str(exc))
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(UnreadablePDFError)
async def unreadable_pdf_error_handler(request, exc: UnreadablePDFError):
    """Handle PDFs whose text cannot be extracted."""
    logger.warning("Unreadable PDF: %s", exc)
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(NoTableFoundError)
async def no_table_found_error_handler(request, exc: NoTableFoundError):
    """Handle documents without a detectable table."""
    logger.info("No table found (%s): %s", exc.reason, exc)
    return _error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)


@app.exception_handler(StorageError)
async def storage_error_handler(request, exc: StorageError):
    """Handle failures writing generated documents (logged by the publisher)."""
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


@app.exception_handler(AIServiceError)
async def ai_service_error_handler(request, exc: AIServiceError):
    """Handle AI service errors."""
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)
