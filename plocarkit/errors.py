#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
errors.py — Exception hierarchy for PLOCAR decoding
===================================================
All failures raised by the PLOCAR reader derive from `PlocarError`, so a
caller can catch one class and still branch on the specific cause.

Hierarchy
---------
- **PlocarError**
    - **FileOpenError** (also an `OSError`)
        File missing or unreadable. Nothing was allocated yet.
    - **FormatError** (also a `ValueError`)
        - UnsupportedPrecisionError : precision code not in {4, 8}
        - InvalidHeaderError        : non-positive or oversized dimensions
        - InvalidRecordError        : per-ion `nlm` outside [0, nlmmax]
        - UnexpectedEOFError        : short read in header or data section
        - ReadError                 : any other stream failure

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations

__all__ = [
    "PlocarError",
    "FileOpenError",
    "FormatError",
    "UnsupportedPrecisionError",
    "InvalidHeaderError",
    "InvalidRecordError",
    "UnexpectedEOFError",
    "ReadError",
]


class PlocarError(Exception):
    """Base class for every error raised while reading a PLOCAR file."""

    def __init__(self, message: str, filename: str | None = None):
        super().__init__(message)
        # not `filename`: OSError.__str__ would reformat the message around it
        self.path = filename


class FileOpenError(PlocarError, OSError):
    """The PLOCAR file could not be opened; `errno`/`strerror` come from the OS."""

    def __init__(self, message: str, filename: str | None = None,
                 errno: int | None = None, strerror: str | None = None):
        super().__init__(message, filename)
        self.errno = errno
        self.strerror = strerror

    def __str__(self):
        # OSError.__str__ would replace the message with "[Errno N] ..."
        return str(self.args[0]) if self.args else ""


class FormatError(PlocarError, ValueError):
    """The file content does not follow the PLOCAR layout."""


class UnsupportedPrecisionError(FormatError):
    pass


class InvalidHeaderError(FormatError):
    pass


class InvalidRecordError(FormatError):
    """Raised when an ion block announces more channels than `nlmmax`."""

    def __init__(self, message: str, filename: str | None = None,
                 ion: int | None = None, nlm: int | None = None):
        super().__init__(message, filename)
        self.ion = ion
        self.nlm = nlm


class UnexpectedEOFError(FormatError):
    pass


class ReadError(FormatError):
    """Stream failure other than end-of-file; keeps the system message."""

    def __init__(self, message: str, filename: str | None = None,
                 strerror: str | None = None):
        super().__init__(message, filename)
        self.strerror = strerror
