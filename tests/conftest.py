"""Shared fixtures for the plocarkit test suite.

Synthetic PLOCAR files are built two ways: with `write_plocar` for
array-driven tests, and byte by byte with `struct` where the exact
on-disk layout is what is being tested.
"""

import logging
import struct

import matplotlib

matplotlib.use("Agg")

import numpy as np
import pytest

from plocarkit.io import write_plocar


def header_bytes(precision=8, nion=1, ns=1, nk=1, nb=1, nlmmax=3, nc_flag=0):
    return struct.pack("=7i", precision, nion, ns, nk, nb, nlmmax, nc_flag)


def random_plo(shape, nlm, seed=0):
    """Random (plo, ferw) with zero padding beyond each ion's nlm."""
    rng = np.random.default_rng(seed)
    plo = rng.normal(size=shape) + 1j * rng.normal(size=shape)
    for ion, n in enumerate(nlm):
        plo[ion, ..., n:] = 0.0
    ferw = rng.uniform(0.0, 1.0, size=shape[:4])
    return plo, ferw


@pytest.fixture
def make_plocar(tmp_path):
    """Factory writing a PLOCAR from arrays; returns the file path."""
    counter = {"n": 0}

    def _make(plo, ferw, nlm=None, precision=8, nc_flag=0, name=None):
        counter["n"] += 1
        path = tmp_path / (name or f"PLOCAR_{counter['n']}")
        write_plocar(path, plo, ferw, nlm=nlm, precision=precision, nc_flag=nc_flag)
        return path

    return _make


@pytest.fixture
def scenario_file(tmp_path):
    """Reference file: one record, nlm=2 of nlmmax=3, weight 0.5, values 1+2i, 3-1i."""
    data = header_bytes(precision=8, nion=1, ns=1, nk=1, nb=1, nlmmax=3, nc_flag=0)
    data += struct.pack("=i", 2)
    data += struct.pack("=d", 0.5)
    data += np.array([1 + 2j, 3 - 1j], dtype="=c16").tobytes()
    path = tmp_path / "PLOCAR"
    path.write_bytes(data)
    return path


@pytest.fixture(autouse=True)
def _reset_package_logger():
    """The CLI detaches the package logger from root; restore it for caplog."""
    yield
    logger = logging.getLogger("plocarkit")
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()
    logger.addHandler(logging.NullHandler())
    logger.propagate = True
    logger.setLevel(logging.NOTSET)
