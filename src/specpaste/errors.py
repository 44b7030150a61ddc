"""
Exceptions raised by specpaste collaborators.

The parsing engine itself never raises for bad input; these cover the
text-acquisition side (files, remote pages), where the caller has to be
told what went wrong.
"""
from typing import Optional


class SpecPasteError(Exception):
    """Base exception for specpaste."""

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON error responses."""
        return {"message": self.message, "details": self.details}


class TextAcquisitionError(SpecPasteError):
    """Raised when raw text could not be read from a file or other source."""


class PageFetchError(TextAcquisitionError):
    """Raised when a product page could not be fetched or decoded."""

    def __init__(self, message: str, url: Optional[str] = None, status_code: Optional[int] = None):
        details = {}
        if url:
            details["url"] = url
        if status_code is not None:
            details["status_code"] = status_code
        super().__init__(message, details)
        self.url = url
        self.status_code = status_code
