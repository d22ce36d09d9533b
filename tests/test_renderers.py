import shutil

import fitz  # PyMuPDF
import pytest
from PIL import Image

from pdfthumb import EngineUnavailableError
from pdfthumb.renderers import BaseRenderer, get_renderer
from pdfthumb.renderers.poppler_renderer import PopplerRenderer
from pdfthumb.renderers.pymupdf_renderer import PyMuPDFRenderer

needs_pdftoppm = pytest.mark.skipif(shutil.which('pdftoppm') is None, reason='poppler not installed')


def test_get_renderer_by_name():
    assert isinstance(get_renderer('pymupdf'), PyMuPDFRenderer)
    assert isinstance(get_renderer('POPPLER'), PopplerRenderer)
    assert get_renderer('poppler', poppler_path='/opt/bin').poppler_path == '/opt/bin'


def test_get_renderer_unknown():
    with pytest.raises(EngineUnavailableError):
        get_renderer('imagick')


def test_base_renderer_is_abstract():
    with pytest.raises(NotImplementedError):
        BaseRenderer().is_available()


def test_pymupdf_renders_first_page(two_page_pdf):
    renderer = PyMuPDFRenderer()
    assert renderer.is_available()

    image = renderer.render_first_page(two_page_pdf, 72)
    try:
        assert isinstance(image, Image.Image)
        assert image.mode == 'RGB'
        assert image.size == (150, 150)
    finally:
        image.close()


def test_pymupdf_dpi_scales_output(landscape_pdf):
    renderer = PyMuPDFRenderer()
    image = renderer.render_first_page(landscape_pdf, 144)
    assert image.size == (400, 200)
    image.close()


def test_pymupdf_rejects_garbage(broken_pdf):
    with pytest.raises(fitz.FileDataError):
        PyMuPDFRenderer().render_first_page(broken_pdf, 72)


def test_poppler_unavailable_without_binary(tmp_path):
    # An empty directory holds no pdftoppm
    assert PopplerRenderer(poppler_path=str(tmp_path)).is_available() is False


@needs_pdftoppm
def test_poppler_renders_first_page(two_page_pdf):
    pytest.importorskip('pdf2image')
    renderer = PopplerRenderer()
    assert renderer.is_available()

    image = renderer.render_first_page(two_page_pdf, 72)
    try:
        assert abs(image.size[0] - 150) <= 1
        r, g, b = image.convert('RGB').getpixel((75, 75))
        assert r > 200 and b < 50
    finally:
        image.close()
