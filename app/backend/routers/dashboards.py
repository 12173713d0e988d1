"""
Router for generated document endpoints.

Handles:
- Table dashboards built from stored PDFs
- Comparison documents rendered from supplied text
"""

import logging
from pathlib import Path

from fastapi import APIRouter, Depends, HTTPException, status

# Handle both package imports and standalone imports
try:
    from ..config import Settings, get_settings
    from ..models import (
        CompareRequest,
        CompareResponse,
        DashboardRequest,
        DashboardResponse,
    )
    from ..services.dashboard import DashboardService, get_dashboard_service
except ImportError:
    from config import Settings, get_settings
    from models import (
        CompareRequest,
        CompareResponse,
        DashboardRequest,
        DashboardResponse,
    )
    from services.dashboard import DashboardService, get_dashboard_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["dashboards"])


@router.post("/compare-html", response_model=CompareResponse)
async def compare_html(
    request: CompareRequest,
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> CompareResponse:
    """
    Render the supplied comparison text into an HTML document.

    The prompt is rendered verbatim; this endpoint does not call the LLM.
    """
    if not request.prompt or not request.prompt.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing prompt",
        )

    comparison_url = dashboard_service.build_comparison(request.prompt)
    return CompareResponse(comparison_url=comparison_url)


@router.post("/dashboard", response_model=DashboardResponse)
async def generate_dashboard(
    request: DashboardRequest,
    settings: Settings = Depends(get_settings),
    dashboard_service: DashboardService = Depends(get_dashboard_service),
) -> DashboardResponse:
    """
    Build a table dashboard from a previously uploaded PDF.

    Args:
        request: Contains the stored filename returned by ``/upload``.

    Returns:
        URL path of the generated dashboard.
    """
    savedname = request.savedname
    if not savedname:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Missing savedname",
        )

    # Only bare names of files inside the upload directory are accepted
    if (
        Path(savedname).name != savedname
        or savedname.startswith(".")
        or "\\" in savedname
    ):
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Invalid savedname",
        )

    pdf_path = Path(settings.upload_dir) / savedname
    if not pdf_path.is_file():
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Uploaded file {savedname} not found",
        )

    dashboard_url = dashboard_service.build_dashboard(pdf_path)
    return DashboardResponse(dashboard_url=dashboard_url)
