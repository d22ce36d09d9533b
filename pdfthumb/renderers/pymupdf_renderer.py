import logging

logger = logging.getLogger(__name__)

try:
    import fitz  # PyMuPDF
    PYMUPDF_AVAILABLE = True
except ImportError:
    PYMUPDF_AVAILABLE = False
    logger.warning("PyMuPDF not available")

from PIL import Image

from . import BaseRenderer
from ..settings import DEFAULT_DPI, ENGINE_PYMUPDF


class PyMuPDFRenderer(BaseRenderer):
    name = ENGINE_PYMUPDF

    def is_available(self) -> bool:
        return PYMUPDF_AVAILABLE

    def render_first_page(self, pdf_path: str, dpi: int = DEFAULT_DPI) -> Image.Image:
        logger.debug(f"Rendering page 1 of {pdf_path} with PyMuPDF at {dpi} DPI")

        with fitz.open(pdf_path) as doc:
            if doc.page_count == 0:
                raise ValueError("PDF has no pages")
            if doc.needs_pass:
                raise ValueError("PDF is encrypted")

            # 72 DPI is the PDF default
            zoom = dpi / 72
            mat = fitz.Matrix(zoom, zoom)
            pix = doc[0].get_pixmap(matrix=mat, alpha=False)

            return Image.frombytes('RGB', (pix.width, pix.height), pix.samples)
