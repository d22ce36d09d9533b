"""
Renders the first page of a PDF to a JPEG, PNG or GIF file.

convert() is the only place that talks to the rendering engine and Pillow.
Multi-page documents are deliberately truncated to page one.

Calls share no state, so conversions may run in parallel threads or
processes as long as the configured engine tolerates it (PyMuPDF and
pdftoppm are both used here without locks).
"""
import os
import logging
import tempfile
from typing import Optional

from PIL import Image, ImageChops, ImageOps

from .configuration import Configuration, FORMAT_JPG
from .errors import (
    EngineUnavailableError,
    RenderFailedError,
    DirectoryCreationFailedError,
    WriteFailedError,
)
from .renderers import get_renderer
from .settings import Settings, load_settings

logger = logging.getLogger(__name__)


def _prepare_mode(image: Image.Image, fmt: str) -> Image.Image:
    """Return an image whose mode the target encoder accepts."""
    if fmt == FORMAT_JPG:
        if image.mode != 'RGB':
            return image.convert('RGB')
        return image

    if image.mode not in ('RGB', 'RGBA', 'L', 'P'):
        return image.convert('RGBA' if 'A' in image.getbands() else 'RGB')
    return image


def _resize(image: Image.Image, cols: int, rows: int, bestfit: bool) -> Image.Image:
    if bestfit:
        # Keeps aspect ratio; one side ends up equal to the box, the other <= it
        return ImageOps.contain(image, (cols, rows))
    return image.resize((cols, rows))


def _trim_bbox(image: Image.Image, fuzz: int):
    """
    Bounding box of everything that differs from the border colour.

    The border colour is the top-left pixel. A pixel is border when no
    channel differs from it by more than ``fuzz`` (0-255 scale).

    Returns:
        tuple | None: (left, upper, right, lower), or None when the whole
        image is border colour
    """
    intermediates = []
    try:
        background = Image.new(image.mode, image.size, image.getpixel((0, 0)))
        intermediates.append(background)
        diff = ImageChops.difference(image, background)
        intermediates.append(diff)

        # Largest per-channel distance for each pixel
        bands = diff.split()
        intermediates.extend(bands)
        distance = bands[0]
        for band in bands[1:]:
            distance = ImageChops.lighter(distance, band)
            intermediates.append(distance)

        mask = distance.point(lambda p: 255 if p > fuzz else 0)
        intermediates.append(mask)
        return mask.getbbox()
    finally:
        for intermediate in intermediates:
            intermediate.close()


def _trim(image: Image.Image, fuzz: int) -> Image.Image:
    work = image if image.mode in ('RGB', 'RGBA', 'L') else image.convert('RGBA')
    bbox = _trim_bbox(work, fuzz)
    if work is not image:
        work.close()

    if bbox is None or bbox == (0, 0) + image.size:
        logger.debug("Nothing to trim")
        return image
    return image.crop(bbox)


def _save_options(fmt: str, settings: Settings) -> dict:
    if fmt == FORMAT_JPG:
        return {'quality': settings.jpeg_quality}
    return {}


def _write_atomically(image: Image.Image, configuration: Configuration, settings: Settings):
    save_path = configuration.save_path
    directory = os.path.dirname(os.path.abspath(save_path))

    fd, temp_path = tempfile.mkstemp(
        prefix='.pdfthumb-',
        suffix=f'.{configuration.format}',
        dir=directory,
    )
    try:
        with os.fdopen(fd, 'wb') as f:
            image.save(f, configuration.pillow_format, **_save_options(configuration.format, settings))
        # chmod is not subject to the process umask
        os.chmod(temp_path, settings.file_mode)
        os.replace(temp_path, save_path)
    except BaseException:
        if os.path.exists(temp_path):
            os.remove(temp_path)
        raise


def convert(configuration: Configuration, settings: Optional[Settings] = None) -> None:
    """
    Render page one of configuration.pdf_path and write it to save_path.

    Steps: check engine, render page one, set the encoding, resize
    (optional), trim (optional), create parent directories, write.

    Args:
        configuration: validated conversion request
        settings: engine and output settings (defaults to load_settings())

    Raises:
        EngineUnavailableError: the rasterizer is not installed
        RenderFailedError: the page could not be rendered, resized or trimmed
        DirectoryCreationFailedError: the parent directory could not be made
        WriteFailedError: the image could not be written to save_path
    """
    if settings is None:
        settings = load_settings()

    renderer = get_renderer(settings.engine, poppler_path=settings.poppler_path)
    if not renderer.is_available():
        raise EngineUnavailableError(f"Rendering engine '{renderer.name}' is not available")

    logger.info(f"Converting {configuration.pdf_path} -> {configuration.save_path}")

    # Every intermediate image is closed in the finally block
    images = []
    try:
        try:
            image = renderer.render_first_page(configuration.pdf_path, settings.dpi)
        except Exception as e:
            raise RenderFailedError(f"Could not render page 1 of {configuration.pdf_path}: {e}") from e
        images.append(image)
        logger.debug(f"Loaded page 1: {image.size[0]}x{image.size[1]} {image.mode}")

        try:
            image = _prepare_mode(image, configuration.format)
        except Exception as e:
            raise RenderFailedError(f"Could not prepare image for {configuration.format}: {e}") from e
        images.append(image)

        if configuration.has_scale:
            try:
                image = _resize(image, configuration.cols, configuration.rows, configuration.bestfit)
            except Exception as e:
                raise RenderFailedError(
                    f"Could not resize to {configuration.cols}x{configuration.rows}: {e}"
                ) from e
            images.append(image)
            logger.debug(f"Resized to {image.size[0]}x{image.size[1]} (bestfit={configuration.bestfit})")

        if configuration.trim:
            try:
                image = _trim(image, settings.trim_fuzz)
            except Exception as e:
                raise RenderFailedError(f"Could not trim image: {e}") from e
            images.append(image)
            logger.debug(f"Trimmed to {image.size[0]}x{image.size[1]}")

        directory = os.path.dirname(os.path.abspath(configuration.save_path))
        try:
            os.makedirs(directory, exist_ok=True)
        except OSError as e:
            raise DirectoryCreationFailedError(f"Could not create directory {directory}: {e}") from e

        try:
            _write_atomically(image, configuration, settings)
        except (OSError, ValueError) as e:
            raise WriteFailedError(f"Could not write {configuration.save_path}: {e}") from e

    finally:
        # Steps that return their input add the same object twice
        for seen in {id(img): img for img in images}.values():
            seen.close()

    logger.info(f"Wrote {configuration.save_path} ({image.size[0]}x{image.size[1]} {configuration.format})")


__all__ = ['convert']
