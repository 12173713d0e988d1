"""
Router for PDF upload endpoints.

Handles:
- Storing uploaded PDFs for later dashboard generation
- Returning the extracted text of each PDF
"""

import logging
import time
from pathlib import Path
from typing import Annotated

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

# Handle both package imports and standalone imports
try:
    from ..config import Settings, get_settings
    from ..models import UploadedDocument
    from ..services.pdf_service import PDFService, UnreadablePDFError, get_pdf_service
except ImportError:
    from config import Settings, get_settings
    from models import UploadedDocument
    from services.pdf_service import PDFService, UnreadablePDFError, get_pdf_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["upload"])


def _stored_path(upload_dir: Path, original_name: str) -> Path:
    """Pick a free ``<unix-millis>[-n]<ext>`` path for an uploaded file."""
    suffix = Path(original_name).suffix.lower()
    stamp = time.time_ns() // 1_000_000
    candidate = upload_dir / f"{stamp}{suffix}"
    counter = 1
    while candidate.exists():
        candidate = upload_dir / f"{stamp}-{counter}{suffix}"
        counter += 1
    return candidate


@router.post("/upload", response_model=list[UploadedDocument])
async def upload_pdfs(
    pdfs: Annotated[list[UploadFile], File(description="PDF files to upload")],
    settings: Settings = Depends(get_settings),
    pdf_service: PDFService = Depends(get_pdf_service),
) -> list[UploadedDocument]:
    """
    Upload one or more PDFs.

    Each file is stored under a generated name and its text is extracted.
    The stored name is what the dashboard endpoint expects later.
    """
    if len(pdfs) > settings.max_upload_files:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Too many files: at most {settings.max_upload_files} PDFs per upload",
        )

    for file in pdfs:
        if not file.filename or not file.filename.lower().endswith(".pdf"):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail=f"Only PDF files are accepted: {file.filename or '<unnamed>'}",
            )

    upload_dir = Path(settings.upload_dir)
    upload_dir.mkdir(parents=True, exist_ok=True)

    results: list[UploadedDocument] = []
    try:
        for file in pdfs:
            file_bytes = await file.read()
            stored_path = _stored_path(upload_dir, file.filename)
            stored_path.write_bytes(file_bytes)

            logger.info(
                "Stored %s as %s (%d bytes)",
                file.filename,
                stored_path.name,
                len(file_bytes),
            )

            try:
                text = pdf_service.extract_text(file_bytes)
            except UnreadablePDFError as e:
                raise UnreadablePDFError(f"{file.filename}: {e}") from e

            results.append(
                UploadedDocument(
                    filename=file.filename,
                    savedname=stored_path.name,
                    text=text,
                )
            )
    finally:
        for file in pdfs:
            await file.close()

    return results
