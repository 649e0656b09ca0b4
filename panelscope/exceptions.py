"""
Custom exceptions for Panelscope.

Extraction failures are reported as a single error for the whole file; no
partial page list is ever returned alongside one of these.
"""


class PanelscopeError(Exception):
    """Base exception for all Panelscope errors."""

    def __init__(self, message: str = "") -> None:
        super().__init__(message or self.default_message)
        self.message = message or self.default_message

    @property
    def default_message(self) -> str:
        return "An unknown Panelscope error occurred."


class ExtractionError(PanelscopeError):
    """Raised when a comic file cannot be turned into pages."""

    @property
    def default_message(self) -> str:
        return "Failed to extract pages from the comic file."


class UnsupportedFormatError(ExtractionError):
    """Raised when a file is neither a readable archive nor a PDF."""

    @property
    def default_message(self) -> str:
        return "File is not a valid ZIP/CBZ/CDZ archive or PDF."


class EmptyArchiveError(ExtractionError):
    """Raised when an archive holds no image entries."""

    @property
    def default_message(self) -> str:
        return "Archive contains no image files."


class CorruptPdfError(ExtractionError):
    """Raised when a PDF or one of its pages cannot be parsed or rendered."""

    @property
    def default_message(self) -> str:
        return "PDF is corrupted or could not be rendered."
