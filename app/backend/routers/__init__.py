"""
Routers package for FastAPI endpoints.

Organized by domain:
- upload: PDF upload and text extraction
- ask: Question answering over document text
- dashboards: Table dashboards and comparison documents
"""

from . import ask, dashboards, upload

__all__ = ["ask", "dashboards", "upload"]
