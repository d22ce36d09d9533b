from .configuration import (
    Configuration,
    FORMAT_JPG,
    FORMAT_PNG,
    FORMAT_GIF,
    SUPPORTED_FORMATS,
)
from .convertor import convert
from .errors import (
    ErrorKind,
    PdfThumbError,
    SourceNotFoundError,
    UnsupportedFormatError,
    InvalidScaleParametersError,
    InvalidSavePathError,
    InvalidSettingError,
    EngineUnavailableError,
    RenderFailedError,
    DirectoryCreationFailedError,
    WriteFailedError,
)
from .settings import Settings, load_settings

__version__ = '1.0.0'

__all__ = [
    'Configuration',
    'FORMAT_JPG',
    'FORMAT_PNG',
    'FORMAT_GIF',
    'SUPPORTED_FORMATS',
    'convert',
    'Settings',
    'load_settings',
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
