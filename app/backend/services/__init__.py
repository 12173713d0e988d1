"""
Services package for the PDF question-answering application.

Contains:
- pdf_service: PDF text extraction
- ai: OpenAI integration for answering questions about documents
- dashboard: Table dashboards and comparison documents
"""

from .ai import AIService
from .dashboard import DashboardService
from .pdf_service import PDFService

__all__ = ["PDFService", "AIService", "DashboardService"]
