"""Tests for FastAPI endpoints."""

import logging
import re
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from app.backend.main import app
from app.backend.services.ai import MOCK_ANSWER, AIService, AIServiceError, get_ai_service
from app.backend.services.dashboard import (
    DashboardPublisher,
    DashboardService,
    StorageError,
    get_dashboard_service,
)


class TestHealthEndpoints:
    """Tests for health check endpoints."""

    def test_root_endpoint(self, client: TestClient):
        """Test root endpoint returns health status."""
        response = client.get("/")
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert "version" in data

    def test_health_endpoint(self, client: TestClient):
        """Test /health endpoint returns health status."""
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestUploadEndpoint:
    """Tests for POST /upload."""

    def test_upload_returns_text_and_saved_name(
        self, client: TestClient, settings, sample_pdf_bytes: bytes
    ):
        """Test that an uploaded PDF is stored and its text returned."""
        response = client.post(
            "/upload",
            files=[("pdfs", ("Sales.pdf", sample_pdf_bytes, "application/pdf"))],
        )
        assert response.status_code == 200
        [document] = response.json()

        assert document["filename"] == "Sales.pdf"
        assert re.fullmatch(r"\d+(-\d+)?\.pdf", document["savedname"])
        assert "Region    Units    Revenue" in document["text"]
        assert (Path(settings.upload_dir) / document["savedname"]).is_file()

    def test_upload_multiple_files_get_distinct_names(
        self, client: TestClient, sample_pdf_bytes: bytes, prose_pdf_bytes: bytes
    ):
        """Test that files uploaded together never share a stored name."""
        response = client.post(
            "/upload",
            files=[
                ("pdfs", ("a.pdf", sample_pdf_bytes, "application/pdf")),
                ("pdfs", ("b.pdf", prose_pdf_bytes, "application/pdf")),
            ],
        )
        assert response.status_code == 200
        documents = response.json()
        assert [d["filename"] for d in documents] == ["a.pdf", "b.pdf"]
        assert documents[0]["savedname"] != documents[1]["savedname"]

    def test_upload_rejects_non_pdf(self, client: TestClient):
        """Test that non-PDF files are rejected."""
        response = client.post(
            "/upload",
            files=[("pdfs", ("test.txt", b"not a pdf", "text/plain"))],
        )
        assert response.status_code == 400
        assert "PDF" in response.json()["detail"]

    def test_upload_requires_files(self, client: TestClient):
        """Test that at least one file is required."""
        response = client.post("/upload")
        assert response.status_code == 422  # FastAPI validation error

    def test_upload_rejects_too_many_files(
        self, client: TestClient, settings, sample_pdf_bytes: bytes
    ):
        """Test the per-request file limit."""
        files = [
            ("pdfs", (f"f{i}.pdf", sample_pdf_bytes, "application/pdf"))
            for i in range(settings.max_upload_files + 1)
        ]
        response = client.post("/upload", files=files)
        assert response.status_code == 400
        assert "Too many files" in response.json()["detail"]

    def test_upload_unreadable_pdf(self, client: TestClient, invalid_file_bytes: bytes):
        """Test that unreadable content is a structured 422."""
        response = client.post(
            "/upload",
            files=[("pdfs", ("broken.pdf", invalid_file_bytes, "application/pdf"))],
        )
        assert response.status_code == 422
        body = response.json()
        assert body["kind"] == "unreadable_pdf"
        assert "broken.pdf" in body["detail"]


class TestAskEndpoint:
    """Tests for POST /ask."""

    def test_ask_in_mock_mode(self, client: TestClient):
        """Test that the mock service answers without an API key."""
        response = client.post(
            "/ask", json={"question": "What is this?", "pdfText": "Some text"}
        )
        assert response.status_code == 200
        assert response.json() == {"answer": MOCK_ANSWER}

    def test_ask_requires_question(self, client: TestClient):
        """Test that the question is required."""
        response = client.post("/ask", json={"pdfText": "Some text"})
        assert response.status_code == 422

    def test_ask_passes_question_and_text(self, client: TestClient):
        """Test that the router forwards both fields to the service."""
        received = {}

        class RecordingService(AIService):
            async def ask(self, question, pdf_text):
                received.update(question=question, pdf_text=pdf_text)
                return "recorded"

        app.dependency_overrides[get_ai_service] = lambda: RecordingService(use_mock=True)
        response = client.post("/ask", json={"question": "Q?", "pdfText": "Doc"})

        assert response.json() == {"answer": "recorded"}
        assert received == {"question": "Q?", "pdf_text": "Doc"}

    def test_ask_service_failure_is_503(self, client: TestClient):
        """Test that LLM failures map to 503 with an error kind."""

        class FailingService(AIService):
            async def ask(self, question, pdf_text):
                raise AIServiceError("LLM request failed: timeout")

        app.dependency_overrides[get_ai_service] = lambda: FailingService(use_mock=True)
        response = client.post("/ask", json={"question": "Q?", "pdfText": ""})

        assert response.status_code == 503
        assert response.json() == {
            "kind": "ai_service_error",
            "detail": "LLM request failed: timeout",
        }


class TestCompareEndpoint:
    """Tests for POST /compare-html."""

    def test_compare_returns_served_url(self, client: TestClient):
        """Test that the comparison document is written and served."""
        response = client.post(
            "/compare-html", json={"prompt": "Doc A says <yes>\nDoc B says no"}
        )
        assert response.status_code == 200
        url = response.json()["comparisonUrl"]
        assert re.fullmatch(r"/dashboards/compare-\d+\.html", url)

        page = client.get(url)
        assert page.status_code == 200
        assert "Doc A says &lt;yes&gt;\nDoc B says no" in page.text

    def test_compare_urls_are_unique(self, client: TestClient):
        """Test that every comparison gets its own document."""
        first = client.post("/compare-html", json={"prompt": "x"}).json()["comparisonUrl"]
        second = client.post("/compare-html", json={"prompt": "x"}).json()["comparisonUrl"]
        assert first != second

    @pytest.mark.parametrize("body", [{}, {"prompt": ""}, {"prompt": "   "}])
    def test_compare_requires_prompt(self, client: TestClient, body):
        """Test that a missing prompt is rejected."""
        response = client.post("/compare-html", json=body)
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing prompt"


class TestDashboardEndpoint:
    """Tests for POST /dashboard."""

    def _upload(self, client: TestClient, name: str, content: bytes) -> str:
        response = client.post(
            "/upload", files=[("pdfs", (name, content, "application/pdf"))]
        )
        assert response.status_code == 200
        return response.json()[0]["savedname"]

    def test_dashboard_from_uploaded_pdf(self, client: TestClient, sample_pdf_bytes: bytes):
        """Test the full upload, dashboard and static serving flow."""
        savedname = self._upload(client, "sales.pdf", sample_pdf_bytes)

        response = client.post("/dashboard", json={"savedname": savedname})
        assert response.status_code == 200
        url = response.json()["dashboardUrl"]
        assert url == f"/dashboards/{Path(savedname).stem}.html"

        page = client.get(url)
        assert page.status_code == 200
        assert "<th>Region</th><th>Units</th><th>Revenue</th>" in page.text
        assert "<td>South</td><td>95</td><td>3100</td>" in page.text

    def test_dashboard_regeneration_keeps_url(self, client: TestClient, sample_pdf_bytes: bytes):
        """Test that generating twice for one PDF returns the same reference."""
        savedname = self._upload(client, "sales.pdf", sample_pdf_bytes)

        first = client.post("/dashboard", json={"savedname": savedname}).json()
        second = client.post("/dashboard", json={"savedname": savedname}).json()
        assert first == second

    def test_dashboard_without_table(self, client: TestClient, prose_pdf_bytes: bytes):
        """Test that a prose-only PDF reports no table found."""
        savedname = self._upload(client, "memo.pdf", prose_pdf_bytes)

        response = client.post("/dashboard", json={"savedname": savedname})
        assert response.status_code == 422
        assert response.json()["kind"] == "no_table_found"

    def test_dashboard_requires_savedname(self, client: TestClient):
        """Test that the stored filename is required."""
        response = client.post("/dashboard", json={})
        assert response.status_code == 400
        assert response.json()["detail"] == "Missing savedname"

    @pytest.mark.parametrize(
        "savedname",
        ["../secret.pdf", "a/b.pdf", ".hidden.pdf", "..", "a\\b.pdf", "..\\up.pdf"],
    )
    def test_dashboard_rejects_path_like_names(self, client: TestClient, savedname):
        """Test that only bare upload names are accepted."""
        response = client.post("/dashboard", json={"savedname": savedname})
        assert response.status_code == 400

    def test_dashboard_unknown_file(self, client: TestClient):
        """Test that a name never uploaded is 404."""
        response = client.post("/dashboard", json={"savedname": "0000000000000.pdf"})
        assert response.status_code == 404

    def test_dashboard_unreadable_stored_file(
        self, client: TestClient, settings, invalid_file_bytes: bytes
    ):
        """Test that a stored file which is not a PDF is a document failure."""
        stored = Path(settings.upload_dir) / "1.pdf"
        stored.parent.mkdir(parents=True, exist_ok=True)
        stored.write_bytes(invalid_file_bytes)

        response = client.post("/dashboard", json={"savedname": "1.pdf"})
        assert response.status_code == 422
        assert response.json()["kind"] == "unreadable_pdf"

    def test_dashboard_storage_failure_is_500(
        self, client: TestClient, sample_pdf_bytes: bytes
    ):
        """Test that write failures are reported as storage errors."""
        savedname = self._upload(client, "sales.pdf", sample_pdf_bytes)

        class FailingService:
            def build_dashboard(self, pdf_path):
                raise StorageError("Could not write dashboard sales.html: disk full")

        app.dependency_overrides[get_dashboard_service] = lambda: FailingService()
        response = client.post("/dashboard", json={"savedname": savedname})

        assert response.status_code == 500
        assert response.json() == {
            "kind": "storage_error",
            "detail": "Could not write dashboard sales.html: disk full",
        }

    def test_dashboard_storage_failure_logged_once(
        self, client: TestClient, sample_pdf_bytes: bytes, tmp_path, caplog
    ):
        """Test that a failed dashboard write is logged a single time."""
        savedname = self._upload(client, "sales.pdf", sample_pdf_bytes)
        blocker = tmp_path / "not-a-dir"
        blocker.write_text("file in the way")
        service = DashboardService(publisher=DashboardPublisher(blocker / "dashboards"))
        app.dependency_overrides[get_dashboard_service] = lambda: service

        with caplog.at_level(logging.ERROR):
            response = client.post("/dashboard", json={"savedname": savedname})

        assert response.status_code == 500
        assert response.json()["kind"] == "storage_error"
        assert len([r for r in caplog.records if r.levelno >= logging.ERROR]) == 1


class TestCORS:
    """Tests for CORS configuration."""

    def test_cors_allows_vite_dev_server(self, client: TestClient):
        """Test that the Vite development origin is allowed."""
        response = client.get(
            "/health",
            headers={"Origin": "http://localhost:5173"},
        )
        assert response.status_code == 200
        assert (
            response.headers.get("access-control-allow-origin")
            == "http://localhost:5173"
        )
