"""
PDF Chat Backend Application.

A FastAPI service that extracts text from uploaded PDFs, answers
questions about them with an LLM, and builds HTML table dashboards.
"""

__version__ = "1.0.0"
