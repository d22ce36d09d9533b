from typing import Optional
import logging

from ..errors import EngineUnavailableError
from ..settings import ENGINE_PYMUPDF, ENGINE_POPPLER

logger = logging.getLogger(__name__)


class BaseRenderer:
    """Loads the first page of a PDF into a PIL image."""

    name = 'base'

    def is_available(self) -> bool:
        raise NotImplementedError

    def render_first_page(self, pdf_path: str, dpi: int):
        raise NotImplementedError


def get_renderer(engine: str, poppler_path: Optional[str] = None) -> BaseRenderer:
    engine = (engine or '').lower()

    if engine == ENGINE_PYMUPDF:
        from .pymupdf_renderer import PyMuPDFRenderer
        return PyMuPDFRenderer()

    elif engine == ENGINE_POPPLER:
        from .poppler_renderer import PopplerRenderer
        return PopplerRenderer(poppler_path=poppler_path)

    else:
        raise EngineUnavailableError(f"Unknown rendering engine: {engine!r}")


__all__ = ['BaseRenderer', 'get_renderer']
