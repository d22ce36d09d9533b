import os
import logging
from dataclasses import dataclass
from typing import Optional

from .errors import (
    SourceNotFoundError,
    UnsupportedFormatError,
    InvalidScaleParametersError,
    InvalidSavePathError,
)

logger = logging.getLogger(__name__)

FORMAT_JPG = 'jpg'
FORMAT_PNG = 'png'
FORMAT_GIF = 'gif'
SUPPORTED_FORMATS = frozenset({FORMAT_JPG, FORMAT_PNG, FORMAT_GIF})

# Encoder names understood by Pillow's Image.save
PILLOW_FORMATS = {
    FORMAT_JPG: 'JPEG',
    FORMAT_PNG: 'PNG',
    FORMAT_GIF: 'GIF',
}


def _is_positive_int(value) -> bool:
    # bool is an int subclass; True is not a size
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


@dataclass(frozen=True)
class Configuration:
    """
    One PDF-to-image conversion request.

    Validated completely on construction, so an instance that exists is
    always usable by convert(). Fields are read-only; build a new instance
    to change anything.

    Only the first page of the PDF is ever rendered.
    """

    pdf_path: str
    save_path: str
    format: str = FORMAT_JPG
    trim: bool = False
    cols: Optional[int] = None
    rows: Optional[int] = None
    bestfit: bool = False

    def __post_init__(self):
        pdf_path = os.fspath(self.pdf_path) if self.pdf_path is not None else ''
        save_path = os.fspath(self.save_path) if self.save_path is not None else ''
        fmt = str(self.format).lower()

        if not pdf_path or not os.path.isfile(pdf_path) or not os.access(pdf_path, os.R_OK):
            raise SourceNotFoundError(f"PDF file not found or not readable: {pdf_path!r}")

        if fmt not in SUPPORTED_FORMATS:
            raise UnsupportedFormatError(
                f"Unsupported format: {self.format!r} (expected one of {', '.join(sorted(SUPPORTED_FORMATS))})"
            )

        if (self.cols is None) != (self.rows is None):
            raise InvalidScaleParametersError(
                f"cols and rows must be given together (cols={self.cols!r}, rows={self.rows!r})"
            )
        for name in ('cols', 'rows'):
            value = getattr(self, name)
            if value is not None and not _is_positive_int(value):
                raise InvalidScaleParametersError(f"{name} must be a positive integer, got {value!r}")

        if not save_path:
            raise InvalidSavePathError("save_path must not be empty")

        # frozen dataclass: normalised values go through object.__setattr__
        object.__setattr__(self, 'pdf_path', pdf_path)
        object.__setattr__(self, 'save_path', save_path)
        object.__setattr__(self, 'format', fmt)
        object.__setattr__(self, 'trim', bool(self.trim))
        object.__setattr__(self, 'bestfit', bool(self.bestfit))

        logger.debug(f"Configuration accepted: {self}")

    @classmethod
    def create(
        cls,
        pdf_path: str,
        save_path: str,
        format: str = FORMAT_JPG,
        trim: bool = False,
        cols: Optional[int] = None,
        rows: Optional[int] = None,
        bestfit: bool = False,
    ) -> 'Configuration':
        return cls(
            pdf_path=pdf_path,
            save_path=save_path,
            format=format,
            trim=trim,
            cols=cols,
            rows=rows,
            bestfit=bestfit,
        )

    @property
    def has_scale(self) -> bool:
        return self.cols is not None and self.rows is not None

    @property
    def pillow_format(self) -> str:
        return PILLOW_FORMATS[self.format]


__all__ = [
    'Configuration',
    'FORMAT_JPG',
    'FORMAT_PNG',
    'FORMAT_GIF',
    'SUPPORTED_FORMATS',
]
