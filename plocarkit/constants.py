#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
constants.py — Binary-layout constants for the PLOCAR format
============================================================
Single authoritative source for the record sizes, numpy dtypes and
default limits used by the PLOCAR reader and writer.

Defined constants
-----------------
Layout:
    HEADER_FIELDS, HEADER_DTYPE, NLM_DTYPE
Precision tables:
    SUPPORTED_PRECISIONS, WEIGHT_DTYPES, COEFF_DTYPES
Output dtypes:
    PLO_DTYPE, FERW_DTYPE
Defaults:
    DEFAULT_PLOCAR, DEFAULT_MAX_BYTES

All dtypes use native byte order ('='); files written on a machine with
the other endianness are not supported.

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""


import numpy as np

# --- header: seven int32 in this exact order ---
HEADER_FIELDS = ("precision", "nion", "ns", "nk", "nb", "nlmmax", "nc_flag")
HEADER_DTYPE  = np.dtype("=i4")
HEADER_NBYTES = len(HEADER_FIELDS) * HEADER_DTYPE.itemsize

# per-ion channel count
NLM_DTYPE = np.dtype("=i4")

# --- precision code -> on-disk dtypes ---
SUPPORTED_PRECISIONS = (4, 8)
WEIGHT_DTYPES = {
    4: np.dtype("=f4"),
    8: np.dtype("=f8"),
}
COEFF_DTYPES = {
    4: np.dtype("=c8"),
    8: np.dtype("=c16"),
}

# --- in-memory dtypes of the decoded arrays ---
PLO_DTYPE  = np.dtype(np.complex128)
FERW_DTYPE = np.dtype(np.float64)

# --- defaults ---
DEFAULT_PLOCAR    = "PLOCAR"
DEFAULT_MAX_BYTES = 8 * 1024**3   # 8 GiB for PLO + Fermi weights together

__all__ = [
    "HEADER_FIELDS", "HEADER_DTYPE", "HEADER_NBYTES", "NLM_DTYPE",
    "SUPPORTED_PRECISIONS", "WEIGHT_DTYPES", "COEFF_DTYPES",
    "PLO_DTYPE", "FERW_DTYPE",
    "DEFAULT_PLOCAR", "DEFAULT_MAX_BYTES",
]
