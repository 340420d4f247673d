"""Format dispatch for document text extraction."""

from pathlib import Path

from rfq_compliance.errors import UnsupportedFormatError
from rfq_compliance.loaders.base import BaseTextExtractor
from rfq_compliance.loaders.docx_loader import DocxExtractor
from rfq_compliance.loaders.pdf_loader import PDFExtractor
from rfq_compliance.loaders.temporary import TemporaryDocumentFile
from rfq_compliance.loaders.text_loader import TextExtractor
from rfq_compliance.models.documents import Document
from rfq_compliance.utils.logging import LoggerMixin


DEFAULT_EXTRACTORS: tuple[type[BaseTextExtractor], ...] = (
    TextExtractor,
    PDFExtractor,
    DocxExtractor,
)


class DocumentExtractor(LoggerMixin):
    """Turns a Document into text, whatever its supported format."""

    def __init__(
        self,
        extractors: tuple[type[BaseTextExtractor], ...] = DEFAULT_EXTRACTORS,
        temp_dir: Path | None = None,
    ):
        """Initialize the extractor.

        Args:
            extractors: Registered extractor classes, checked in order.
            temp_dir: Where uploads are materialized; system temp dir if None.
        """
        self._extractors = extractors
        self._temp_dir = temp_dir

    @property
    def supported_extensions(self) -> list[str]:
        return [ext for extractor in self._extractors for ext in extractor.extensions]

    def resolve(self, document: Document) -> type[BaseTextExtractor]:
        """Pick the extractor by extension, falling back to the declared MIME type.

        Raises:
            UnsupportedFormatError: If no extractor is registered for the document.
        """
        extension = document.extension
        for extractor in self._extractors:
            if extractor.handles(extension, document.media_type):
                return extractor
        raise UnsupportedFormatError(extension or (document.media_type or ""))

    def extract(self, document: Document) -> str:
        """Extract the document's text.

        Inline text is decoded in memory. Uploads are written to a temporary
        file that is removed before this method returns or raises.
        """
        if not document.is_upload:
            return TextExtractor.decode(document.content, source=document.origin.value)

        extractor_cls = self.resolve(document)
        with TemporaryDocumentFile(document, directory=self._temp_dir) as path:
            source = document.filename or document.origin.value
            text = extractor_cls(path, source=source).extract()

        self.log_info(
            "Document extracted",
            origin=document.origin.value,
            extractor=extractor_cls.__name__,
            size_bytes=document.size_bytes,
            chars=len(text),
        )
        return text
