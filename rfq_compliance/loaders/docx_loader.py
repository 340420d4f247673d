"""Word (DOCX) text extractor using python-docx."""

from zipfile import BadZipFile

from docx import Document as open_docx
from docx.opc.exceptions import PackageNotFoundError
from lxml.etree import XMLSyntaxError

from rfq_compliance.errors import ExtractionError
from rfq_compliance.loaders.base import BaseTextExtractor


# ValueError: an OPC package whose main part is not a Word document (.dotx, .xlsx)
UNREADABLE_DOCX_ERRORS = (PackageNotFoundError, BadZipFile, KeyError, ValueError, XMLSyntaxError)


class DocxExtractor(BaseTextExtractor):
    """Extracts paragraph and table text from a .docx file."""

    extensions = (".docx",)
    media_types = ("application/vnd.openxmlformats-officedocument.wordprocessingml.document",)

    def extract(self) -> str:
        try:
            doc = open_docx(str(self.file_path))
        except UNREADABLE_DOCX_ERRORS as e:
            self.log_warning("DOCX open failed", source=self.source, error=str(e))
            raise ExtractionError(f"Could not read {self.source} as a Word document") from e

        blocks = [p.text for p in doc.paragraphs if p.text.strip()]
        for table in doc.tables:
            for row in table.rows:
                cells = [cell.text.strip() for cell in row.cells]
                if any(cells):
                    blocks.append("\t".join(cells))

        self.log_debug(
            "DOCX text extracted",
            source=self.source,
            paragraphs=len(doc.paragraphs),
            tables=len(doc.tables),
        )
        return "\n\n".join(blocks)
