"""Error taxonomy for the compliance checker."""


class ComplianceCheckError(Exception):
    """Base error. ``status_code`` is the HTTP status the API maps it to."""

    status_code: int = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(ComplianceCheckError):
    """Fatal startup error: missing API key, SDK not importable, no usable client."""


class NoUsableExportError(ConfigurationError):
    """No known client constructor was found on the SDK namespace."""

    def __init__(self, available_keys: list[str]):
        self.available_keys = available_keys
        listing = ", ".join(available_keys) if available_keys else "<none>"
        super().__init__(
            f"Could not find a usable model client constructor. Available keys: {listing}"
        )


class InputValidationError(ComplianceCheckError):
    """Missing, empty or malformed RFQ / Proposal input."""

    status_code = 400


class ExtractionError(ComplianceCheckError):
    """A document could not be turned into text."""

    status_code = 400


class UnsupportedFormatError(ExtractionError):
    """The document type has no registered extractor."""

    def __init__(self, extension: str):
        self.extension = extension
        super().__init__(f"Unsupported file type: {extension or 'unknown'}")


class UpstreamError(ComplianceCheckError):
    """The model call failed, timed out, or returned unusable output."""

    status_code = 500
