"""
PDF text extraction service using pypdf.

Turns stored or uploaded PDF documents into plain text for question
answering and dashboard generation.
"""

import io
import logging
from pathlib import Path
from typing import BinaryIO

from pypdf import PasswordType, PdfReader
from pypdf.errors import FileNotDecryptedError, PdfReadError

logger = logging.getLogger(__name__)


class UnreadablePDFError(Exception):
    """Raised when text cannot be extracted from a PDF (corrupt or encrypted)."""

    kind = "unreadable_pdf"


class PDFService:
    """
    Service for PDF processing operations.

    Uses pypdf to pull the text layer out of each page.
    """

    def __init__(self, page_separator: str = "\n"):
        """
        Initialize the PDF service.

        Args:
            page_separator: String placed between the text of consecutive pages.
        """
        self.page_separator = page_separator

    def extract_text(self, file_bytes: bytes | BinaryIO) -> str:
        """
        Extract the plain text content of a PDF.

        Args:
            file_bytes: PDF file as bytes or file-like object.

        Returns:
            The text of all pages, joined with the page separator.

        Raises:
            UnreadablePDFError: If the file is empty, not a PDF, encrypted or corrupted.
        """
        # Ensure we have bytes
        if hasattr(file_bytes, "read"):
            pdf_bytes = file_bytes.read()
        else:
            pdf_bytes = file_bytes

        if not pdf_bytes:
            raise UnreadablePDFError("Empty PDF file provided")

        # Validate PDF magic bytes
        if not pdf_bytes[:4] == b"%PDF":
            raise UnreadablePDFError(
                "Invalid PDF file: does not start with PDF header"
            )

        try:
            reader = PdfReader(io.BytesIO(pdf_bytes))

            if reader.is_encrypted:
                # Documents with an owner password only still open with ""
                if reader.decrypt("") == PasswordType.NOT_DECRYPTED:
                    raise UnreadablePDFError(
                        "Encrypted PDF cannot be read without a password"
                    )

            page_texts = [page.extract_text() or "" for page in reader.pages]

        except UnreadablePDFError:
            raise

        except FileNotDecryptedError as e:
            logger.error("PDF is encrypted: %s", e)
            raise UnreadablePDFError(f"Encrypted PDF cannot be read: {e}") from e

        except PdfReadError as e:
            logger.error("PDF read error: %s", e)
            raise UnreadablePDFError(f"Invalid or corrupted PDF file: {e}") from e

        except Exception as e:
            logger.exception("Unexpected error during PDF text extraction")
            raise UnreadablePDFError(f"PDF text extraction failed: {e}") from e

        logger.info("Extracted text from %d page(s)", len(page_texts))
        return self.page_separator.join(page_texts)

    def extract_text_from_path(self, path: str | Path) -> str:
        """
        Read a stored PDF from disk and extract its text.

        Args:
            path: Filesystem path of the PDF.

        Returns:
            The extracted text.

        Raises:
            FileNotFoundError: If the file does not exist.
            UnreadablePDFError: If the file cannot be parsed.
        """
        pdf_bytes = Path(path).read_bytes()
        logger.info("Extracting text from %s (%d bytes)", path, len(pdf_bytes))
        return self.extract_text(pdf_bytes)


# Singleton instance for convenience
_pdf_service: PDFService | None = None


def get_pdf_service() -> PDFService:
    """Get or create the PDF service singleton."""
    global _pdf_service
    if _pdf_service is None:
        _pdf_service = PDFService()
    return _pdf_service
