import fitz  # PyMuPDF
import pytest

from pdfthumb import Settings


def _write_pdf(path, pages):
    """pages: list of (width, height, draw) where draw(page) paints the page."""
    doc = fitz.open()
    for width, height, draw in pages:
        page = doc.new_page(width=width, height=height)
        if draw is not None:
            draw(page)
    doc.save(str(path))
    doc.close()
    return str(path)


def _fill(color):
    def draw(page):
        page.draw_rect(page.rect, color=None, fill=color)
    return draw


@pytest.fixture
def settings():
    # Explicit defaults so the host environment and any .env file are ignored
    return Settings()


@pytest.fixture
def landscape_pdf(tmp_path):
    """200x100 pt page with a black box inset 20 pt on every side."""
    def draw(page):
        page.draw_rect(fitz.Rect(20, 20, 180, 80), color=None, fill=(0, 0, 0))
    return _write_pdf(tmp_path / 'landscape.pdf', [(200, 100, draw)])


@pytest.fixture
def two_page_pdf(tmp_path):
    """Red first page, blue second page."""
    return _write_pdf(tmp_path / 'two_pages.pdf', [
        (150, 150, _fill((1, 0, 0))),
        (300, 300, _fill((0, 0, 1))),
    ])


@pytest.fixture
def blank_pdf(tmp_path):
    return _write_pdf(tmp_path / 'blank.pdf', [(120, 80, None)])


@pytest.fixture
def broken_pdf(tmp_path):
    path = tmp_path / 'broken.pdf'
    path.write_bytes(b'this is not a pdf document')
    return str(path)
