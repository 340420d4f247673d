"""Document text extraction."""

from rfq_compliance.loaders.base import BaseTextExtractor
from rfq_compliance.loaders.docx_loader import DocxExtractor
from rfq_compliance.loaders.pdf_loader import PDFExtractor
from rfq_compliance.loaders.registry import DocumentExtractor
from rfq_compliance.loaders.temporary import TemporaryDocumentFile
from rfq_compliance.loaders.text_loader import TextExtractor

__all__ = [
    "BaseTextExtractor",
    "DocumentExtractor",
    "DocxExtractor",
    "PDFExtractor",
    "TemporaryDocumentFile",
    "TextExtractor",
]
