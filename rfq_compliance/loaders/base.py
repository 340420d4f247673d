"""Base text extractor abstract class."""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import ClassVar

from rfq_compliance.utils.logging import LoggerMixin


class BaseTextExtractor(ABC, LoggerMixin):
    """Abstract base class for file-backed text extractors."""

    extensions: ClassVar[tuple[str, ...]] = ()
    media_types: ClassVar[tuple[str, ...]] = ()

    def __init__(self, file_path: Path, source: str | None = None):
        """Initialize the extractor with a file path.

        Args:
            file_path: Path to the document file.
            source: Name used in error messages; the file name if None.
        """
        self.file_path = Path(file_path)
        self.source = source or self.file_path.name
        self._validate_file()

    def _validate_file(self) -> None:
        """Validate that the file exists and is readable."""
        if not self.file_path.exists():
            raise FileNotFoundError(f"File not found: {self.file_path}")
        if not self.file_path.is_file():
            raise ValueError(f"Path is not a file: {self.file_path}")

    @abstractmethod
    def extract(self) -> str:
        """Extract the document's text.

        Returns:
            The extracted text.

        Raises:
            ExtractionError: If the file cannot be read as this format.
        """

    @classmethod
    def handles(cls, extension: str = "", media_type: str | None = None) -> bool:
        """Whether this extractor is registered for the extension or MIME type."""
        if extension:
            return extension.lower() in cls.extensions
        if media_type:
            return media_type.split(";")[0].strip().lower() in cls.media_types
        return False
