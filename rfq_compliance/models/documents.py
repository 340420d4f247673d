"""Document-related Pydantic models."""

from enum import Enum
from pathlib import PurePath

from pydantic import BaseModel, Field


class DocumentOrigin(str, Enum):
    """Which side of the comparison a document belongs to."""

    RFQ = "rfq"
    PROPOSAL = "proposal"


class Document(BaseModel):
    """An uploaded or inline document, alive for one request only."""

    content: bytes = Field(..., description="Raw document bytes")
    origin: DocumentOrigin = Field(..., description="rfq or proposal")
    filename: str | None = Field(
        default=None,
        description="Original filename; None for inline text",
    )
    media_type: str | None = Field(default=None, description="Declared MIME type")

    model_config = {"frozen": True}

    @classmethod
    def from_text(cls, text: str, origin: DocumentOrigin) -> "Document":
        """Build an inline plain-text document."""
        return cls(content=text.encode("utf-8"), origin=origin, media_type="text/plain")

    @property
    def is_upload(self) -> bool:
        """True when the document arrived as a file part."""
        return self.filename is not None

    @property
    def extension(self) -> str:
        """Lower-cased filename suffix, e.g. ``.pdf``; empty when unknown."""
        if not self.filename:
            return ""
        return PurePath(self.filename).suffix.lower()

    @property
    def is_empty(self) -> bool:
        return not self.content.strip()

    @property
    def size_bytes(self) -> int:
        return len(self.content)
