"""PDF text extractor using PyMuPDF."""

from pathlib import Path
from typing import Any

import fitz  # PyMuPDF

from rfq_compliance.errors import ExtractionError
from rfq_compliance.loaders.base import BaseTextExtractor


class PDFExtractor(BaseTextExtractor):
    """Extracts the text layer of every page of a PDF."""

    extensions = (".pdf",)
    media_types = ("application/pdf",)

    def __init__(self, file_path: Path, source: str | None = None):
        super().__init__(file_path, source)
        self._doc: fitz.Document | None = None

    def _open_document(self) -> fitz.Document:
        """Open the PDF document."""
        if self._doc is None:
            try:
                self._doc = fitz.open(self.file_path, filetype="pdf")
            except RuntimeError as e:
                # FileDataError / EmptyFileError both derive from RuntimeError
                self.log_warning("PDF open failed", source=self.source, error=str(e))
                raise ExtractionError(f"Could not read {self.source} as a PDF") from e
            if self._doc.page_count == 0:
                self._close_document()
                raise ExtractionError(f"PDF {self.source} has no pages")
        return self._doc

    def _close_document(self) -> None:
        """Close the PDF document."""
        if self._doc is not None:
            self._doc.close()
            self._doc = None

    def extract(self) -> str:
        """Extract and concatenate the text of all pages."""
        try:
            doc = self._open_document()
            text = "\n\n".join(page.get_text("text").strip() for page in doc)
            self.log_debug("PDF text extracted", **self.extract_metadata())
            return text
        finally:
            self._close_document()

    def extract_metadata(self) -> dict[str, Any]:
        """Basic PDF metadata for logging."""
        doc = self._open_document()
        pdf_metadata = doc.metadata or {}
        return {
            "source": self.source,
            "title": pdf_metadata.get("title", ""),
            "page_count": len(doc),
        }
