#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
plotting.py — Output writers and figures for plocarkit
======================================================
Persists the decoded PLOCAR data and the derived occupation table.

Main functions
---------------
- save_arrays_npz()          : params, plo and ferw in one compressed .npz
- save_occupations_csv()     : occupation table as CSV (pandas)
- plot_orbital_occupations() : grouped bar chart, one panel per spin
- move_outputs_to_folder()   : collect *.png / *.csv / *.npz into a folder

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""

from __future__ import annotations
import os
import glob
import shutil
import logging
import numpy as np
import matplotlib.pyplot as plt
import pandas as pd


_log = logging.getLogger(__name__)
logger = _log


def save_arrays_npz(filename: str, params: dict, plo: np.ndarray, ferw: np.ndarray) -> str:
    """Write params (as scalar entries), plo and ferw; returns the path."""
    np.savez_compressed(
        filename,
        plo=plo,
        ferw=ferw,
        **{k: np.asarray(v) for k, v in params.items()},
    )
    path = filename if filename.endswith(".npz") else f"{filename}.npz"
    logger.info(f"[npz] Saved PLO {plo.shape} and Fermi weights {ferw.shape} to {path}")
    return path


def save_occupations_csv(table: pd.DataFrame, filename: str) -> str:
    table.to_csv(filename, index=False, float_format="%.10e")
    logger.info(f"[csv] Saved {len(table)} occupation rows to {filename}")
    return filename


def plot_orbital_occupations(table: pd.DataFrame, filename: str = "plocar_occupations.png",
                             title: str = "Orbital occupations from PLOCAR") -> str:
    """
    Grouped bar chart of occupation vs. lm channel, one group per ion and
    one panel per spin channel.
    """
    spins = sorted(table["spin"].unique())
    ions = sorted(table["ion"].unique())
    nlm = int(table["lm"].max()) + 1 if len(table) else 0

    fig, axes = plt.subplots(len(spins), 1, figsize=(max(6, 0.6 * nlm * len(ions)), 3.5 * len(spins)),
                             squeeze=False, sharex=True)
    width = 0.8 / max(len(ions), 1)
    x = np.arange(nlm)

    for row, isp in enumerate(spins):
        ax = axes[row, 0]
        sub = table[table["spin"] == isp]
        for j, ion in enumerate(ions):
            vals = (sub[sub["ion"] == ion]
                    .sort_values("lm")["occupation"]
                    .to_numpy())
            ax.bar(x[:len(vals)] + (j - (len(ions) - 1) / 2) * width, vals, width, label=f"ion {ion}")
        ax.set_ylabel(f"occupation (spin {isp})")
        ax.grid(axis="y", alpha=0.3)

    axes[-1, 0].set_xlabel("lm channel")
    axes[-1, 0].set_xticks(x)
    axes[0, 0].set_title(title)
    if len(ions) <= 12:
        axes[0, 0].legend(fontsize=8, ncol=min(len(ions), 4))

    fig.tight_layout()
    fig.savefig(filename, dpi=150)
    plt.close(fig)
    logger.info(f"[plot] Saved occupation chart to {filename}")
    return filename


def move_outputs_to_folder(out_dir: str, prefix: str) -> None:
    """
    Move `<prefix>*.png`, `<prefix>*.csv` and `<prefix>*.npz` from the
    current directory into `out_dir` (created if missing).
    """
    os.makedirs(out_dir, exist_ok=True)
    for ext in ("png", "csv", "npz"):
        for f in glob.glob(f"{prefix}*.{ext}"):
            shutil.move(f, os.path.join(out_dir, os.path.basename(f)))
    logger.info(f"Moved output files for '{prefix}' into '{out_dir}'")
