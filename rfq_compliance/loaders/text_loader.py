"""Plain-text extractor."""

from rfq_compliance.errors import ExtractionError
from rfq_compliance.loaders.base import BaseTextExtractor


class TextExtractor(BaseTextExtractor):
    """Reads UTF-8 text files verbatim."""

    extensions = (".txt",)
    media_types = ("text/plain",)

    def extract(self) -> str:
        return self.decode(self.file_path.read_bytes(), source=self.source)

    @staticmethod
    def decode(content: bytes, source: str = "text") -> str:
        """Strict UTF-8 decode of raw bytes."""
        try:
            return content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ExtractionError(f"{source} is not valid UTF-8 text") from e
