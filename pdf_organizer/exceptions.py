"""
Custom exceptions for PDF Organizer.

This module defines all custom exceptions used throughout the library.
"""

from typing import Optional


class PDFOrganizerException(Exception):
    """Base exception for all PDF Organizer errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown PDF organizer error occurred."


class InvalidPDFError(PDFOrganizerException):
    """Raised when uploaded bytes cannot be read as a PDF document."""

    @property
    def default_message(self) -> str:
        return "Invalid or corrupted PDF file."


class PageIndexError(PDFOrganizerException, IndexError):
    """Raised when a collection index is out of bounds."""

    @property
    def default_message(self) -> str:
        return "Page index is out of bounds."


class AssemblyError(PDFOrganizerException):
    """Raised when a page cannot be copied into the assembled document."""

    def __init__(self, message: str = "", *, position: Optional[int] = None) -> None:
        self.position = position
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Failed to assemble the organized PDF."


class SplitError(PDFOrganizerException):
    """Raised when a spread cannot be split or copied."""

    def __init__(self, message: str = "", *, position: Optional[int] = None) -> None:
        self.position = position
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Failed to split spread pages."


class ExportError(PDFOrganizerException):
    """Raised when a page cannot be rendered or encoded during image export."""

    def __init__(self, message: str = "", *, page_number: Optional[int] = None) -> None:
        self.page_number = page_number
        super().__init__(message)

    @property
    def default_message(self) -> str:
        return "Failed to export pages as images."


class OperationCancelledError(PDFOrganizerException):
    """Raised when a running operation observes a cancelled token."""

    @property
    def default_message(self) -> str:
        return "Operation was cancelled."
