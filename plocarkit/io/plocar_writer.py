#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
plocar_writer.py — Encode PLO arrays into the PLOCAR layout
===========================================================
Inverse of `plocar_reader`: writes a header, then for every ion its
`nlm` followed by `ns*nk*nb` records of (weight, coeffs[:nlm]).

Used to build synthetic files and to re-encode filtered data, e.g. a
subset of ions or bands, in a form other PLOCAR consumers accept.

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations
from pathlib import Path
from typing import Sequence
import logging
import os

import numpy as np

from ..constants import HEADER_DTYPE, NLM_DTYPE, SUPPORTED_PRECISIONS
from ..errors import UnsupportedPrecisionError
from .plocar_reader import record_dtype

logger = logging.getLogger(__name__)


def _encode(fh, plo, ferw, nlm, precision, nc_flag) -> int:
    nion, ns, nk, nb, nlmmax = plo.shape
    header = np.array([precision, nion, ns, nk, nb, nlmmax, nc_flag], dtype=HEADER_DTYPE)
    written = fh.write(header.tobytes())

    for ion in range(nion):
        n = nlm[ion]
        written += fh.write(np.array(n, dtype=NLM_DTYPE).tobytes())

        slab = np.zeros((ns, nk, nb), dtype=record_dtype(precision, n))
        slab["weight"] = ferw[ion]
        if n:
            slab["coeffs"] = plo[ion, ..., :n]
        written += fh.write(slab.tobytes())
    return written


def write_plocar(target, plo, ferw, nlm: Sequence[int] | None = None,
                 precision: int = 8, nc_flag: int = 0) -> int:
    """
    Write `plo` (nion, ns, nk, nb, nlmmax) and `ferw` (nion, ns, nk, nb).

    target    : path or a binary stream with `write()`
    nlm       : channels stored per ion (default: nlmmax for every ion)
    precision : 8 → float64/complex128, 4 → float32/complex64

    Returns the number of bytes written.
    """
    plo = np.asarray(plo)
    ferw = np.asarray(ferw)
    if plo.ndim != 5:
        raise ValueError(f"[write_plocar] plo must be 5-D (nion, ns, nk, nb, nlmmax), got shape {plo.shape}")
    if ferw.shape != plo.shape[:4]:
        raise ValueError(f"[write_plocar] ferw shape {ferw.shape} does not match plo shape {plo.shape[:4]}")
    if precision not in SUPPORTED_PRECISIONS:
        raise UnsupportedPrecisionError(f"[write_plocar] only 'prec = 4, 8' are supported (got {precision})")

    nion, nlmmax = plo.shape[0], plo.shape[4]
    nlm = [nlmmax] * nion if nlm is None else [int(n) for n in nlm]
    if len(nlm) != nion:
        raise ValueError(f"[write_plocar] expected {nion} nlm values, got {len(nlm)}")
    for ion, n in enumerate(nlm):
        if not 0 <= n <= nlmmax:
            raise ValueError(f"[write_plocar] ion {ion}: nlm={n} outside [0, {nlmmax}]")

    if hasattr(target, "write"):
        return _encode(target, plo, ferw, nlm, precision, nc_flag)

    path = Path(os.fspath(target))
    with open(path, "wb") as fh:
        nbytes = _encode(fh, plo, ferw, nlm, precision, nc_flag)
    logger.debug(f"[write_plocar] wrote {nbytes} bytes to {path}")
    return nbytes
