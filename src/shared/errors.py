"""
Error types raised by the SDF/WoT converter.

Callers only need to catch ConverterError; the subclasses exist so the CLI
can pick an exit code and message.
"""

from typing import Optional


class ConverterError(Exception):
    """Base class for every failure surfaced by the converter."""


class DocumentParseError(ConverterError):
    """Raised when source text is not JSON or does not have the expected shape."""

    def __init__(self, message: str, file_path: Optional[str] = None, details: Optional[str] = None):
        self.file_path = file_path
        self.details = details
        super().__init__(message)


class DocumentLoadError(DocumentParseError):
    """Raised when a source file or URL cannot be read."""


class DocumentWriteError(ConverterError):
    """Raised when a document cannot be serialized or written."""

    def __init__(self, message: str, file_path: Optional[str] = None):
        self.file_path = file_path
        super().__init__(message)


class UnsupportedConversionError(ConverterError):
    """Raised for a conversion direction the mappers do not define."""

    def __init__(self, source_format: str, target_format: str):
        self.source_format = source_format
        self.target_format = target_format
        super().__init__(
            f"Conversion from {source_format} to {target_format} is not supported"
        )
