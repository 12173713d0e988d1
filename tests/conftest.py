"""Pytest configuration and fixtures."""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest

# Point storage at a scratch directory and force mock LLM mode before the
# application (and its cached settings) are imported.
_STORAGE_ROOT = Path(tempfile.mkdtemp(prefix="pdf-chat-tests-"))
os.environ["UPLOAD_DIR"] = str(_STORAGE_ROOT / "uploads")
os.environ["DASHBOARD_DIR"] = str(_STORAGE_ROOT / "dashboards")
os.environ["OPENAI_API_KEY"] = ""

from fastapi.testclient import TestClient  # noqa: E402

from app.backend.config import get_settings  # noqa: E402
from app.backend.main import app  # noqa: E402


def build_pdf(lines: list[str]) -> bytes:
    """
    Build a single-page PDF that draws each line 20pt below the previous one.

    Offsets in the xref table are computed so the file is well formed.
    """

    def escape(text: str) -> str:
        return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")

    operations = ["BT", "/F1 12 Tf", "72 720 Td"]
    for index, line in enumerate(lines):
        if index:
            operations.append("0 -20 Td")
        operations.append(f"({escape(line)}) Tj")
    operations.append("ET")
    stream = "\n".join(operations).encode("latin-1")

    objects = [
        b"<< /Type /Catalog /Pages 2 0 R >>",
        b"<< /Type /Pages /Kids [3 0 R] /Count 1 >>",
        b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
        b"/Resources << /Font << /F1 5 0 R >> >> /Contents 4 0 R >>",
        b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream",
        b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    ]

    output = bytearray(b"%PDF-1.4\n")
    offsets = []
    for number, body in enumerate(objects, start=1):
        offsets.append(len(output))
        output += b"%d 0 obj\n" % number + body + b"\nendobj\n"

    xref_offset = len(output)
    output += b"xref\n0 %d\n" % (len(objects) + 1)
    output += b"0000000000 65535 f \n"
    for offset in offsets:
        output += b"%010d 00000 n \n" % offset
    output += b"trailer\n<< /Size %d /Root 1 0 R >>\n" % (len(objects) + 1)
    output += b"startxref\n%d\n%%%%EOF\n" % xref_offset
    return bytes(output)


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    """Create a test client for the FastAPI application."""
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def settings():
    """Application settings pointing at the scratch storage directories."""
    return get_settings()


@pytest.fixture
def table_text() -> str:
    """Extracted text with a prose line, a header and two data rows."""
    return "Quarterly results\nName\tScore\nAlice\t90\nBob\t85\nnot a table line"


@pytest.fixture
def sample_pdf_bytes() -> bytes:
    """A valid PDF whose text layer contains a small space-aligned table."""
    return build_pdf(
        [
            "Quarterly results",
            "Region    Units    Revenue",
            "North    120    4500.50",
            "South    95    3100",
        ]
    )


@pytest.fixture
def prose_pdf_bytes() -> bytes:
    """A valid PDF containing only ordinary sentences."""
    return build_pdf(["This document has no table.", "Just a single paragraph."])


@pytest.fixture
def invalid_file_bytes() -> bytes:
    """Create invalid (non-PDF) file bytes for testing."""
    return b"This is not a PDF file"
