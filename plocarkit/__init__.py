# plocarkit/__init__.py
__version__ = "1.0.0"

import logging

from .config import DecodeOptions
from .errors import (
    PlocarError, FileOpenError, FormatError, UnsupportedPrecisionError,
    InvalidHeaderError, InvalidRecordError, UnexpectedEOFError, ReadError,
)
from .io import PlocarData, PlocarHeader, PlocarReader, read_plocar, write_plocar

logging.getLogger("plocarkit").addHandler(logging.NullHandler())

__all__ = [
    "__version__", "DecodeOptions",
    "PlocarError", "FileOpenError", "FormatError", "UnsupportedPrecisionError",
    "InvalidHeaderError", "InvalidRecordError", "UnexpectedEOFError", "ReadError",
    "PlocarData", "PlocarHeader", "PlocarReader", "read_plocar", "write_plocar",
]
