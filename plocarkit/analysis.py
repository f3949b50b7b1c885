#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
analysis.py — Derived quantities from decoded PLO arrays
========================================================
Small numerical helpers that turn the raw PLO and Fermi-weight arrays
into the quantities usually inspected right after a projection run.

Definitions
-----------
With P = plo[ion, is, k, b, m] and f = ferw[ion, is, k, b]:

    local density matrix   D[ion, is, m, n] = Σ_k,b  f · P_m · conj(P_n)
    orbital occupations    n[ion, is, m]    = Re D[ion, is, m, m]
    band character         c[ion, is, k, b] = Σ_m |P_m|²

Padding entries (m ≥ nlm of that ion) are zero, so they contribute
nothing and need no masking.

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations
import logging

import numpy as np
import pandas as pd

logger = logging.getLogger(__name__)


def _check_shapes(plo: np.ndarray, ferw: np.ndarray) -> None:
    if plo.ndim != 5 or ferw.ndim != 4 or plo.shape[:4] != ferw.shape:
        raise ValueError(
            f"Incompatible PLO/Fermi-weight shapes: plo {plo.shape}, ferw {ferw.shape}"
        )


def local_density_matrix(plo: np.ndarray, ferw: np.ndarray) -> np.ndarray:
    """Return D with shape (nion, ns, nlmmax, nlmmax), Hermitian in (m, n)."""
    _check_shapes(plo, ferw)
    return np.einsum("iskb,iskbm,iskbn->ismn", ferw, plo, plo.conj(), optimize=True)


def orbital_occupations(plo: np.ndarray, ferw: np.ndarray) -> np.ndarray:
    _check_shapes(plo, ferw)
    return np.einsum("iskb,iskbm->ism", ferw, np.abs(plo) ** 2, optimize=True)


def band_character(plo: np.ndarray) -> np.ndarray:
    """Σ_m |P|² for every (ion, is, k, b)."""
    if plo.ndim != 5:
        raise ValueError(f"plo must be 5-D, got shape {plo.shape}")
    return np.sum(np.abs(plo) ** 2, axis=-1)


def occupation_table(params: dict, plo: np.ndarray, ferw: np.ndarray) -> pd.DataFrame:
    """
    Long-format table of orbital occupations.

    Columns: ion, spin, lm, occupation. One row per (ion, spin, lm),
    padding channels included (their occupation is exactly zero).
    """
    occ = orbital_occupations(plo, ferw)
    nion, ns, nlm = occ.shape
    if params.get("nion", nion) != nion or params.get("ns", ns) != ns:
        raise ValueError(f"Parameter dictionary {params} does not match array shape {occ.shape}")

    ion, spin, lm = np.meshgrid(np.arange(nion), np.arange(ns), np.arange(nlm), indexing="ij")
    df = pd.DataFrame({
        "ion": ion.ravel(),
        "spin": spin.ravel(),
        "lm": lm.ravel(),
        "occupation": occ.ravel(),
    })
    logger.debug(f"[occupation_table] {len(df)} rows, total occupation {df['occupation'].sum():.6f}")
    return df
