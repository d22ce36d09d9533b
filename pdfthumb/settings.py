import os
import logging
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import find_dotenv, load_dotenv

from .errors import InvalidSettingError

logger = logging.getLogger(__name__)

ENGINE_PYMUPDF = 'pymupdf'
ENGINE_POPPLER = 'poppler'
ENGINES = (ENGINE_PYMUPDF, ENGINE_POPPLER)

DEFAULT_DPI = 72  # PDF user space: 1 point == 1 pixel
DEFAULT_TRIM_FUZZ = 1
DEFAULT_FILE_MODE = 0o666
DEFAULT_JPEG_QUALITY = 90


@dataclass(frozen=True)
class Settings:
    """Deployment-level knobs shared by every conversion."""

    engine: str = ENGINE_PYMUPDF
    dpi: int = DEFAULT_DPI
    trim_fuzz: int = DEFAULT_TRIM_FUZZ
    file_mode: int = DEFAULT_FILE_MODE
    jpeg_quality: int = DEFAULT_JPEG_QUALITY
    poppler_path: Optional[str] = None


def _read_int(env: Mapping[str, str], key: str, default: int, low: int, high: int, base: int = 10) -> int:
    raw = env.get(key)
    if raw is None or raw.strip() == '':
        return default

    try:
        value = int(raw.strip(), base)
    except ValueError:
        logger.error(f"Invalid {key}: '{raw}' is not a valid integer")
        raise InvalidSettingError(f"{key} must be an integer, got '{raw}'")

    if not low <= value <= high:
        logger.error(f"Invalid {key}: {value} outside [{low}, {high}]")
        raise InvalidSettingError(f"{key} must be between {low} and {high}, got {value}")

    return value


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from environment variables.

    Args:
        env: mapping to read instead of os.environ (a .env file is only
            consulted when reading the real environment)

    Returns:
        Settings: validated settings
    """
    if env is None:
        # .env is looked up from the working directory; existing variables win
        load_dotenv(find_dotenv(usecwd=True))
        env = os.environ

    engine = env.get('PDFTHUMB_ENGINE', ENGINE_PYMUPDF).strip().lower() or ENGINE_PYMUPDF
    if engine not in ENGINES:
        logger.error(f"Invalid PDFTHUMB_ENGINE: '{engine}'")
        raise InvalidSettingError(f"PDFTHUMB_ENGINE must be one of {', '.join(ENGINES)}, got '{engine}'")

    poppler_path = env.get('PDFTHUMB_POPPLER_PATH') or None
    if engine == ENGINE_POPPLER and poppler_path is None:
        logger.debug("PDFTHUMB_POPPLER_PATH not set, pdftoppm will be looked up on PATH")

    settings = Settings(
        engine=engine,
        dpi=_read_int(env, 'PDFTHUMB_DPI', DEFAULT_DPI, 1, 2400),
        trim_fuzz=_read_int(env, 'PDFTHUMB_TRIM_FUZZ', DEFAULT_TRIM_FUZZ, 0, 255),
        file_mode=_read_int(env, 'PDFTHUMB_FILE_MODE', DEFAULT_FILE_MODE, 0, 0o777, base=8),
        jpeg_quality=_read_int(env, 'PDFTHUMB_JPEG_QUALITY', DEFAULT_JPEG_QUALITY, 1, 95),
        poppler_path=poppler_path,
    )

    logger.debug(f"Settings loaded: {settings}")
    return settings


__all__ = ['Settings', 'load_settings', 'ENGINE_PYMUPDF', 'ENGINE_POPPLER', 'ENGINES']
