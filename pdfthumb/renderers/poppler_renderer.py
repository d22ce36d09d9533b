import os
import shutil
import logging
from typing import Optional

logger = logging.getLogger(__name__)

try:
    from pdf2image import convert_from_path
    PDF2IMAGE_AVAILABLE = True
except ImportError:
    PDF2IMAGE_AVAILABLE = False
    logger.warning("pdf2image not available")

from PIL import Image

from . import BaseRenderer
from ..settings import DEFAULT_DPI, ENGINE_POPPLER


class PopplerRenderer(BaseRenderer):
    """Renders through poppler's pdftoppm binary via pdf2image."""

    name = ENGINE_POPPLER

    def __init__(self, poppler_path: Optional[str] = None):
        self.poppler_path = poppler_path

    def _find_pdftoppm(self) -> Optional[str]:
        if self.poppler_path:
            return shutil.which('pdftoppm', path=os.fspath(self.poppler_path))
        return shutil.which('pdftoppm')

    def is_available(self) -> bool:
        if not PDF2IMAGE_AVAILABLE:
            return False
        if self._find_pdftoppm() is None:
            logger.warning(f"pdftoppm not found (poppler_path={self.poppler_path!r})")
            return False
        return True

    def render_first_page(self, pdf_path: str, dpi: int = DEFAULT_DPI) -> Image.Image:
        logger.debug(f"Rendering page 1 of {pdf_path} with pdftoppm at {dpi} DPI")

        images = convert_from_path(
            pdf_path,
            dpi=dpi,
            first_page=1,
            last_page=1,
            poppler_path=self.poppler_path,
        )

        if len(images) == 0:
            raise ValueError("No pages found")

        # Only one page was requested, but close anything extra poppler returned
        for extra in images[1:]:
            extra.close()

        return images[0]
