"""Scoped on-disk copies of uploaded documents."""

import os
import tempfile
from pathlib import Path
from types import TracebackType

from rfq_compliance.models.documents import Document
from rfq_compliance.utils.logging import LoggerMixin


class TemporaryDocumentFile(LoggerMixin):
    """Writes a document to a private temp file and removes it on exit.

    Usage::

        with TemporaryDocumentFile(document) as path:
            text = PDFExtractor(path).extract()
    """

    def __init__(self, document: Document, directory: Path | None = None):
        self._document = document
        self._directory = directory
        self._path: Path | None = None

    @property
    def path(self) -> Path | None:
        return self._path

    def __enter__(self) -> Path:
        fd, name = tempfile.mkstemp(
            prefix=f"{self._document.origin.value}-",
            suffix=self._document.extension,
            dir=self._directory,
        )
        self._path = Path(name)
        try:
            with os.fdopen(fd, "wb") as handle:
                handle.write(self._document.content)
        except BaseException:
            self._remove()
            raise
        self.log_debug("Temporary document written", path=str(self._path))
        return self._path

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._remove()

    def _remove(self) -> None:
        if self._path is None:
            return
        self._path.unlink(missing_ok=True)
        self.log_debug("Temporary document removed", path=str(self._path))
        self._path = None
