"""
Pydantic models for the PDF question-answering and dashboard service.

Defines the extracted table structure and the request/response bodies
of the HTTP endpoints. Field aliases keep the camelCase names the
frontend sends and expects.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator

# A table cell is numeric when its text parses as a number, text otherwise
CellValue = int | float | str


class ExtractedTable(BaseModel):
    """
    Table inferred from the whitespace layout of a PDF's extracted text.

    Attributes:
        headers: Column names, in column order. Duplicates are allowed.
        rows: Data rows, each aligned positionally to ``headers``.
    """

    headers: list[str] = Field(..., min_length=1, description="Column headers")
    rows: list[list[CellValue]] = Field(
        default_factory=list,
        description="Data rows aligned to the headers",
    )

    @model_validator(mode="after")
    def validate_row_widths(self) -> "ExtractedTable":
        """Ensure every row has exactly one cell per header."""
        width = len(self.headers)
        for index, row in enumerate(self.rows):
            if len(row) != width:
                raise ValueError(
                    f"Row {index} has {len(row)} cells, expected {width}"
                )
        return self


# =============================================================================
# Upload Models
# =============================================================================


class UploadedDocument(BaseModel):
    """A stored PDF together with its extracted text."""

    filename: str = Field(..., description="Original filename from the client")
    savedname: str = Field(..., description="Name the file was stored under")
    text: str = Field(..., description="Plain text extracted from the PDF")


# =============================================================================
# Question Answering Models
# =============================================================================


class AskRequest(BaseModel):
    """Request model for asking a question about document text."""

    model_config = ConfigDict(populate_by_name=True)

    question: str = Field(..., min_length=1, description="Natural-language question")
    pdf_text: str = Field(
        default="",
        alias="pdfText",
        description="Document text used as the answering context",
    )


class AskResponse(BaseModel):
    """Response model for the ask endpoint."""

    answer: str | None = Field(default=None, description="LLM answer text")


# =============================================================================
# Dashboard Models
# =============================================================================


class CompareRequest(BaseModel):
    """Request model for rendering a comparison document."""

    prompt: str | None = Field(
        default=None,
        description="Pre-assembled comparison text rendered verbatim",
    )


class CompareResponse(BaseModel):
    """Response model for the compare-html endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    comparison_url: str = Field(..., alias="comparisonUrl")


class DashboardRequest(BaseModel):
    """Request model for generating a dashboard from a stored PDF."""

    savedname: str | None = Field(
        default=None,
        description="Stored filename returned by the upload endpoint",
    )


class DashboardResponse(BaseModel):
    """Response model for the dashboard endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    dashboard_url: str = Field(..., alias="dashboardUrl")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(default="healthy")
    message: str = Field(default="")
    version: str = Field(default="1.0.0")


class ErrorResponse(BaseModel):
    """Structured error body returned for domain failures."""

    kind: str = Field(..., description="Machine-readable error kind")
    detail: str = Field(..., description="Human-readable message")
