"""Error Hierarchy — typed exceptions for the two failure kinds of the workshop.

Invariants:
    - Every error has a code (str), a title (str) and an http_status (int)
    - to_response() produces the REST envelope {error, message, code}
    - Invalid-input errors are 400-level; the server keeps serving afterwards
    - Missing-prerequisite errors only occur in the scanner CLI and end the process

Design Decisions:
    - Single hierarchy with WorkshopError base: one FastAPI handler catches all
    - message carries the underlying failure text verbatim (the demo exists to
      show what the formatting library rejects)
"""

from enum import Enum


class ErrorKind(str, Enum):
    """The two error kinds the workshop distinguishes."""
    INVALID_INPUT = "invalid_input"
    MISSING_PREREQUISITE = "missing_prerequisite"


class WorkshopError(Exception):
    """Base exception for all workshop errors."""

    def __init__(
        self,
        message: str,
        code: str,
        title: str,
        kind: ErrorKind,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.title = title
        self.kind = kind
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": self.title,
            "message": self.message,
            "code": self.code,
        }


# ─── Invalid input (400-level) ──────────────────────────────────

class InvalidLocaleError(WorkshopError):
    """Locale tag or timezone identifier not understood by the formatter."""
    def __init__(self, message: str, field: str):
        super().__init__(
            message or f"Unsupported {field}",
            "INVALID_LOCALE_OR_TIMEZONE", "Invalid locale or timezone",
            ErrorKind.INVALID_INPUT, 400,
        )
        self.field = field


# ─── Missing prerequisites (CLI) ────────────────────────────────

class ImageRequiredError(WorkshopError):
    """Scan invoked without an image reference."""
    def __init__(self):
        super().__init__(
            "No image name provided",
            "IMAGE_REQUIRED", "Missing argument",
            ErrorKind.MISSING_PREREQUISITE,
        )


class ScannerNotInstalledError(WorkshopError):
    """Scanner binary is not on PATH."""
    def __init__(self, binary: str):
        super().__init__(
            f"{binary} is not installed",
            "SCANNER_NOT_INSTALLED", "Missing prerequisite",
            ErrorKind.MISSING_PREREQUISITE,
        )
        self.binary = binary
