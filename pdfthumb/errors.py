"""
Exception hierarchy for pdfthumb.

Every error carries a ``kind`` so callers can branch on the failure
category without matching on messages.
"""
from enum import Enum


class ErrorKind(str, Enum):
    FILE_NOT_FOUND = "FileNotFound"
    UNSUPPORTED_FORMAT = "UnsupportedFormat"
    INVALID_SCALE_PARAMETERS = "InvalidScaleParameters"
    INVALID_SAVE_PATH = "InvalidSavePath"
    INVALID_SETTING = "InvalidSetting"
    ENGINE_UNAVAILABLE = "EngineUnavailable"
    RENDER_FAILED = "RenderFailed"
    DIRECTORY_CREATION_FAILED = "DirectoryCreationFailed"
    WRITE_FAILED = "WriteFailed"


class PdfThumbError(Exception):
    """Base exception for all pdfthumb errors."""

    kind: ErrorKind

    def __str__(self) -> str:
        return f"[{self.kind.value}] {super().__str__()}"


class SourceNotFoundError(PdfThumbError, FileNotFoundError):
    """Raised when the source PDF is missing or unreadable."""
    kind = ErrorKind.FILE_NOT_FOUND


class UnsupportedFormatError(PdfThumbError, ValueError):
    """Raised when the requested output format is not jpg, png or gif."""
    kind = ErrorKind.UNSUPPORTED_FORMAT


class InvalidScaleParametersError(PdfThumbError, ValueError):
    """Raised when cols/rows are not a pair of positive integers."""
    kind = ErrorKind.INVALID_SCALE_PARAMETERS


class InvalidSavePathError(PdfThumbError, ValueError):
    kind = ErrorKind.INVALID_SAVE_PATH


class InvalidSettingError(PdfThumbError, ValueError):
    """Raised when an environment setting cannot be parsed."""
    kind = ErrorKind.INVALID_SETTING


class EngineUnavailableError(PdfThumbError):
    """Raised when the PDF rasterizer is missing from the runtime."""
    kind = ErrorKind.ENGINE_UNAVAILABLE


class RenderFailedError(PdfThumbError):
    """Raised when a page cannot be rendered, resized or trimmed."""
    kind = ErrorKind.RENDER_FAILED


class DirectoryCreationFailedError(PdfThumbError):
    kind = ErrorKind.DIRECTORY_CREATION_FAILED


class WriteFailedError(PdfThumbError):
    """Raised when the encoded image cannot be written to its destination."""
    kind = ErrorKind.WRITE_FAILED


__all__ = [
    'ErrorKind',
    'PdfThumbError',
    'SourceNotFoundError',
    'UnsupportedFormatError',
    'InvalidScaleParametersError',
    'InvalidSavePathError',
    'InvalidSettingError',
    'EngineUnavailableError',
    'RenderFailedError',
    'DirectoryCreationFailedError',
    'WriteFailedError',
]
