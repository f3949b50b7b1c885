#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
config.py — Per-call decode options for plocarkit
=================================================
Holds the knobs that control one PLOCAR decode call. An instance is
passed explicitly to the reader; there is no process-wide state, so two
decode calls with different verbosity never interfere.

Fields
-------
    verbose   : Log file name, precision and header fields at INFO level
                (DEBUG otherwise).
    progress  : Show a tqdm progress bar over ions while decoding.
    max_bytes : Ceiling on the combined size of the PLO and Fermi-weight
                arrays; larger headers are rejected before allocation.

Usage
------
    >>> from plocarkit.config import DecodeOptions
    >>> opts = DecodeOptions(verbose=True)
    >>> opts.with_overrides(progress=True).progress
    True

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""


from __future__ import annotations
from dataclasses import dataclass, replace
import logging
import sys

from .constants import DEFAULT_MAX_BYTES


@dataclass(frozen=True)
class DecodeOptions:
    verbose: bool = False
    progress: bool = False
    max_bytes: int = DEFAULT_MAX_BYTES

    def __post_init__(self):
        if int(self.max_bytes) <= 0:
            raise ValueError(f"max_bytes must be positive, got {self.max_bytes}")

    @property
    def log_level(self) -> int:
        """Level used for the reader's informational messages."""
        return logging.INFO if self.verbose else logging.DEBUG

    def with_overrides(self, **changes) -> "DecodeOptions":
        return replace(self, **changes)


def options_from_args(args) -> DecodeOptions:
    """Build `DecodeOptions` from a parsed CLI namespace."""
    return DecodeOptions(
        verbose=bool(getattr(args, "verbose", False)),
        progress=not bool(getattr(args, "quiet", False)) and sys.stderr.isatty(),
        max_bytes=int(float(getattr(args, "max_gib", DEFAULT_MAX_BYTES / 1024**3)) * 1024**3),
    )
