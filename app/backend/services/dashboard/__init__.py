"""
Dashboard generation package.

This package turns PDF text into static HTML documents:
- table_parser: Heuristic table extraction from whitespace layout
- renderer: HTML rendering of tables and comparison texts
- publisher: Writing documents to the served dashboard directory

The DashboardService class wires these steps to the PDF text extractor.
"""

import logging
from pathlib import Path

from ..pdf_service import PDFService, get_pdf_service
from .exceptions import DashboardError, NoTableFoundError, StorageError
from .publisher import DashboardPublisher
from .renderer import format_cell, render_comparison, render_table
from .table_parser import (
    LinePredicate,
    coerce_cell,
    format_number,
    looks_tabular,
    parse_table,
    split_cells,
)

logger = logging.getLogger(__name__)

__all__ = [
    "DashboardError",
    "DashboardPublisher",
    "DashboardService",
    "LinePredicate",
    "NoTableFoundError",
    "StorageError",
    "coerce_cell",
    "format_cell",
    "format_number",
    "get_dashboard_service",
    "looks_tabular",
    "parse_table",
    "render_comparison",
    "render_table",
    "split_cells",
]


class DashboardService:
    """
    Builds and publishes dashboards for stored PDF documents.

    Extraction, parsing and rendering happen per call; the only state kept
    is the publisher's output directory.
    """

    def __init__(
        self,
        publisher: DashboardPublisher,
        pdf_service: PDFService | None = None,
        is_tabular: LinePredicate = looks_tabular,
    ):
        """
        Initialize the dashboard service.

        Args:
            publisher: Destination for rendered documents.
            pdf_service: Text extractor. Defaults to the shared PDF service.
            is_tabular: Line predicate used by the table parser.
        """
        self.publisher = publisher
        self.pdf_service = pdf_service or get_pdf_service()
        self.is_tabular = is_tabular

    def build_dashboard(self, pdf_path: str | Path) -> str:
        """
        Generate the table dashboard of a stored PDF.

        Args:
            pdf_path: Path of the previously uploaded PDF.

        Returns:
            URL path of the published dashboard (``/dashboards/<stem>.html``).

        Raises:
            UnreadablePDFError: If the PDF text cannot be extracted.
            NoTableFoundError: If no table can be inferred from the text.
            StorageError: If the dashboard cannot be written.
        """
        pdf_path = Path(pdf_path)
        text = self.pdf_service.extract_text_from_path(pdf_path)
        return self.build_dashboard_from_text(text, pdf_path.stem)

    def build_dashboard_from_text(self, text: str, base_name: str) -> str:
        """Parse, render and publish a dashboard from already extracted text."""
        table = parse_table(text, self.is_tabular)
        url = self.publisher.publish(render_table(table), base_name)
        logger.info(
            "Dashboard for %s ready at %s (%d rows)", base_name, url, len(table.rows)
        )
        return url

    def build_comparison(self, text: str) -> str:
        """
        Render and publish a comparison document.

        The supplied text is rendered as is; it is not sent to a model.
        """
        return self.publisher.publish_comparison(render_comparison(text))


# =============================================================================
# Singleton Factory
# =============================================================================

_dashboard_service: DashboardService | None = None


def get_dashboard_service() -> DashboardService:
    """Get or create the dashboard service singleton."""
    global _dashboard_service
    if _dashboard_service is None:
        try:
            from ...config import get_settings
        except ImportError:
            from config import get_settings

        settings = get_settings()
        _dashboard_service = DashboardService(
            publisher=DashboardPublisher(settings.dashboard_dir),
        )
    return _dashboard_service
